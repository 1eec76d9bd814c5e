from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional, Sequence
UNKNOWN = '(???)'
PATH_SEP = '/'


def join_path(parts: Sequence[str]) -> str:
    return PATH_SEP.join((str(p) for p in parts))


@dataclass
class Span:
    start: int
    path: str
    end: Optional[int] = None
    value: Any = None

    @property
    def is_open(self) -> bool:
        return self.end is None

    @property
    def is_filler(self) -> bool:
        return self.path == UNKNOWN or self.path.endswith(PATH_SEP + UNKNOWN)

    def __len__(self) -> int:
        if self.end is None:
            return 0
        return self.end - self.start


@dataclass(frozen=True)
class TraceRecord:
    path: str
    data: bytes
    value: Any = None
    start: int = 0

    @property
    def end(self) -> int:
        return self.start + len(self.data)


EMPTY_RECORD = TraceRecord(path='', data=b'')
__all__ = ['UNKNOWN', 'PATH_SEP', 'join_path', 'Span', 'TraceRecord', 'EMPTY_RECORD']
