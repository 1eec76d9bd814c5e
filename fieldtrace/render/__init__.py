from __future__ import annotations
from typing import TYPE_CHECKING, Any
__all__ = ['fmt_data', 'fmt_value', 'diff_data', 'render_table', 'record_rows', 'print_banner', 'make_console']
if TYPE_CHECKING:
    from .formatting import diff_data, fmt_data, fmt_value
    from .table import make_console, print_banner, record_rows, render_table
_EXPORTS: dict[str, str] = {'fmt_data': 'formatting', 'fmt_value': 'formatting', 'diff_data': 'formatting', 'render_table': 'table', 'record_rows': 'table', 'print_banner': 'table', 'make_console': 'table'}


def __getattr__(name: str) -> Any:
    mod_name = _EXPORTS.get(name)
    if mod_name is None:
        raise AttributeError(name)
    module = __import__(f'{__name__}.{mod_name}', fromlist=[name])
    return getattr(module, name)
