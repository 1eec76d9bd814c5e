from __future__ import annotations
import logging
from typing import Any, Callable, List, Optional, Sequence
from ..codec.reader import MISSING, Reader
from .span import UNKNOWN, Span, join_path
logger = logging.getLogger(__name__)
ValueLookup = Callable[[Sequence[str]], Any]


class TraceRecorder:
    """Flattens nested field enter/exit notifications into a span partition.

    Only the innermost open field is tracked as ``pending``; enclosing fields
    are never recorded as spans of their own. Bytes consumed outside any named
    field become filler spans whose last path segment is ``(???)``.
    """

    def __init__(self) -> None:
        self.spans: List[Span] = []
        self.pending: Optional[Span] = None
        self._pending_parts: List[str] = []
        self.finalized = False

    def _last(self) -> Span:
        if self.spans:
            return self.spans[-1]
        return Span(start=0, end=0, path='')

    def _append_filler(self, start: int, end: int, path: str) -> None:
        logger.debug('Filler span %s [%d, %d)', path, start, end)
        self.spans.append(Span(start=start, end=end, path=path))

    def on_enter(self, field_path: Sequence[str], name: str, pos: int) -> None:
        last = self._last()
        if last.is_open:
            logger.debug('Closing open span %s at %d on enter of %s', last.path, pos, name)
            last.end = pos
        elif last.end != pos:
            self._append_filler(last.end, pos, join_path([*field_path, UNKNOWN]))
        self._pending_parts = [*field_path, str(name)]
        self.pending = Span(start=pos, path=join_path(self._pending_parts))

    def on_exit(self, pos: int, lookup: Optional[ValueLookup]=None) -> None:
        if self.pending is None:
            # exit of an enclosing field, its innermost child already closed
            last = self._last()
            if last.is_open:
                last.end = pos
            elif last.end != pos:
                self._append_filler(last.end, pos, f'{last.path}/{UNKNOWN}')
            return
        span = self.pending
        span.end = pos
        if lookup is not None:
            value = lookup(self._pending_parts)
            if value is not MISSING:
                span.value = value
        self.spans.append(span)
        self.pending = None
        self._pending_parts = []

    def finalize(self, length: int, pos: Optional[int]=None) -> List[Span]:
        """Close the trace against a buffer of ``length`` bytes.

        ``pos`` is where decoding stopped; a field still pending (decoding
        aborted inside it) is closed there and the unread tail becomes a
        ``(???)`` filler.
        """
        if self.finalized:
            return self.spans
        stop = length if pos is None else pos
        if self.pending is not None:
            logger.debug('Force-closing pending span %s at %d', self.pending.path, stop)
            self.pending.end = stop
            self.spans.append(self.pending)
            self.pending = None
            self._pending_parts = []
        last = self._last()
        if last.end != length:
            self._append_filler(last.end, length, UNKNOWN)
        self.finalized = True
        return self.spans


class TracingReader(Reader):

    def __init__(self, data: bytes, recorder: Optional[TraceRecorder]=None):
        super().__init__(data)
        self.recorder = recorder if recorder is not None else TraceRecorder()

    def field_path_push(self, name: str) -> None:
        self.recorder.on_enter(self.field_path, name, self.pos)
        super().field_path_push(name)

    def field_path_pop(self) -> None:
        self.recorder.on_exit(self.pos, self.lookup)
        super().field_path_pop()

    def finish_trace(self) -> List[Span]:
        return self.recorder.finalize(len(self.data), self.pos)


__all__ = ['TraceRecorder', 'TracingReader', 'ValueLookup']
