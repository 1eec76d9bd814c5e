from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional, Sequence
from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text
from ..errors import EmptyInputError
from .formatting import Cell, DEFAULT_STYLES, fmt_data, fmt_path, fmt_value


def _as_text(cell: Any) -> Text:
    if isinstance(cell, Text):
        return cell
    if cell is None:
        return Text('')
    return Text(str(cell))


def build_table(rows: Sequence[Mapping[str, Cell]], styles: Optional[Mapping[str, str]]=None) -> Table:
    columns: List[str] = []
    for row in rows:
        for key in row:
            if key not in columns:
                columns.append(key)
    if not rows or not columns:
        raise EmptyInputError('No data')
    border = (styles or DEFAULT_STYLES).get('border', DEFAULT_STYLES['border'])
    table = Table(box=box.SIMPLE_HEAD, header_style='bold', border_style=border, show_header=True, show_lines=True)
    for column in columns:
        table.add_column(column, no_wrap=True, overflow='ellipsis')
    for row in rows:
        table.add_row(*(_as_text(row.get(column)) for column in columns))
    return table


def render_table(rows: Sequence[Mapping[str, Cell]], console: Console, styles: Optional[Mapping[str, str]]=None) -> None:
    console.print(build_table(rows, styles))


def record_rows(records: Sequence[Any], bytes_per_line: int=8, styles: Optional[Mapping[str, str]]=None) -> List[Dict[str, Cell]]:
    return [{'Data': fmt_data(rec.data, bytes_per_line, styles), 'Len': len(rec.data), 'Path': fmt_path(rec.path, styles), 'Value': fmt_value(rec.value, styles)} for rec in records]


def print_banner(console: Console, title: str, *, closing: bool=False) -> None:
    console.print(f"==== {('/' if closing else '')}{title} ====", markup=False, highlight=False)


def make_console(width: Optional[int]=None, color: bool=True, **kwargs: Any) -> Console:
    return Console(width=width, color_system='auto' if color else None, highlight=False, **kwargs)


__all__ = ['build_table', 'render_table', 'record_rows', 'print_banner', 'make_console']
