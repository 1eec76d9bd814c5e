from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence
from rich.text import Text
from ..render.formatting import Cell, changed_offsets, diff_data, diff_length, diff_path, diff_value
from .span import EMPTY_RECORD, TraceRecord
logger = logging.getLogger(__name__)


@dataclass
class DiffRow:
    index: int
    actual: TraceRecord
    expected: TraceRecord
    data_actual: Text
    data_expected: Text
    length: Cell
    path: Cell
    value: Cell
    changed: List[int] = field(default_factory=list)

    @property
    def same_length(self) -> bool:
        return len(self.actual.data) == len(self.expected.data)

    @property
    def same_path(self) -> bool:
        return self.actual.path == self.expected.path

    def as_table_row(self) -> Dict[str, Cell]:
        return {'Data (A)': self.data_actual, 'Data (E)': self.data_expected, 'Len': self.length, 'Path': self.path, 'Value': self.value}


def diff_records(actual: Sequence[TraceRecord], expected: Sequence[TraceRecord], skip_identical: bool=True, bytes_per_line: int=8, styles: Optional[Mapping[str, str]]=None) -> List[DiffRow]:
    """Pair two traces record by record and describe every divergent pair.

    Alignment is by index only. Once one side gains or loses a field, every
    later pair is reported even when the remaining content matches.
    """
    rows: List[DiffRow] = []
    for i in range(max(len(actual), len(expected))):
        a = actual[i] if i < len(actual) else EMPTY_RECORD
        e = expected[i] if i < len(expected) else EMPTY_RECORD
        if a.data == e.data and skip_identical:
            continue
        data_a, data_e = diff_data(a.data, e.data, per_line=bytes_per_line, styles=styles)
        rows.append(DiffRow(index=i, actual=a, expected=e, data_actual=data_a, data_expected=data_e, length=diff_length(a.data, e.data, styles), path=diff_path(a.path, e.path, styles), value=diff_value(a.value, e.value, styles), changed=changed_offsets(a.data, e.data)))
    logger.debug('Diffed %d actual / %d expected records: %d rows', len(actual), len(expected), len(rows))
    return rows


def first_divergence(actual: Sequence[TraceRecord], expected: Sequence[TraceRecord]) -> Optional[int]:
    for i in range(max(len(actual), len(expected))):
        a = actual[i] if i < len(actual) else EMPTY_RECORD
        e = expected[i] if i < len(expected) else EMPTY_RECORD
        if a.data != e.data or a.path != e.path:
            return i
    return None


__all__ = ['DiffRow', 'diff_records', 'first_divergence']
