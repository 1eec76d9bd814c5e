from __future__ import annotations
from typing import TYPE_CHECKING, Any
__all__ = ['UNKNOWN', 'Span', 'TraceRecord', 'EMPTY_RECORD', 'TraceRecorder', 'TracingReader', 'map_spans', 'DiffRow', 'diff_records', 'first_divergence']
if TYPE_CHECKING:
    from .diff import DiffRow, diff_records, first_divergence
    from .materialize import map_spans
    from .recorder import TraceRecorder, TracingReader
    from .span import EMPTY_RECORD, UNKNOWN, Span, TraceRecord
_EXPORTS: dict[str, str] = {'UNKNOWN': 'span', 'Span': 'span', 'TraceRecord': 'span', 'EMPTY_RECORD': 'span', 'TraceRecorder': 'recorder', 'TracingReader': 'recorder', 'map_spans': 'materialize', 'DiffRow': 'diff', 'diff_records': 'diff', 'first_divergence': 'diff'}


def __getattr__(name: str) -> Any:
    mod_name = _EXPORTS.get(name)
    if mod_name is None:
        raise AttributeError(name)
    module = __import__(f'{__name__}.{mod_name}', fromlist=[name])
    return getattr(module, name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(__all__))
