from __future__ import annotations
from typing import Any, List, Sequence
from ..errors import IncompleteStreamError, TrailingBytesError


class _Missing:

    def __repr__(self) -> str:
        return 'MISSING'

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


class Reader:
    """Byte cursor shared by all coders during one decode.

    Coders announce the field they are about to decode with
    ``field_path_push`` and leave it with ``field_path_pop``; containers
    register the value they are building with ``push_container`` so the
    value of a finished field can be looked up by path.
    """

    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.pos = 0
        self.field_path: List[str] = []
        self.containers: List[Any] = []

    @property
    def remaining(self) -> int:
        return len(self.data) - self.pos

    @property
    def is_end(self) -> bool:
        return self.pos >= len(self.data)

    def read(self, count: int) -> bytes:
        if count < 0:
            raise ValueError(f'negative read size {count}')
        if self.pos + count > len(self.data):
            raise IncompleteStreamError(f'Not enough bytes: need {count}, have {self.remaining}', pos=self.pos, bytes_needed=count, bytes_remaining=self.remaining)
        chunk = self.data[self.pos:self.pos + count]
        self.pos += count
        return chunk

    def read_rest(self) -> bytes:
        return self.read(self.remaining)

    def field_path_push(self, name: str) -> None:
        self.field_path.append(str(name))

    def field_path_pop(self) -> None:
        self.field_path.pop()

    def push_container(self, obj: Any) -> None:
        self.containers.append(obj)

    def pop_container(self) -> None:
        self.containers.pop()

    def lookup(self, path: Sequence[str]) -> Any:
        if not path or not self.containers:
            return MISSING
        container = self.containers[-1]
        key = path[-1]
        if isinstance(container, dict):
            return container.get(key, MISSING)
        if isinstance(container, list):
            try:
                return container[int(key)]
            except (ValueError, IndexError):
                return MISSING
        return MISSING

    def finish(self) -> None:
        if not self.is_end:
            raise TrailingBytesError(f'{self.remaining} bytes left unread after decoding', pos=self.pos, leftover=self.remaining)
