from __future__ import annotations
from typing import Iterable, List
from ..errors import InvariantViolation
from .span import Span, TraceRecord


def map_spans(spans: Iterable[Span], data: bytes) -> List[TraceRecord]:
    data = bytes(data)
    end = 0
    res: List[TraceRecord] = []
    for span in spans:
        if span.start != end:
            raise InvariantViolation(f'span {span.path!r} starts at {span.start}, previous span ended at {end}', span=span, expected_start=end)
        if span.end is None:
            raise InvariantViolation(f'span {span.path!r} at {span.start} was never closed', span=span, expected_start=end)
        if span.end < span.start:
            raise InvariantViolation(f'span {span.path!r} ends at {span.end} before its start {span.start}', span=span, expected_start=end)
        res.append(TraceRecord(path=span.path, data=data[span.start:span.end], value=span.value, start=span.start))
        end = span.end
    if end != len(data):
        raise InvariantViolation(f'spans cover {end} of {len(data)} bytes', expected_start=end)
    return res


__all__ = ['map_spans']
