from __future__ import annotations
from typing import Any, Mapping, Optional, Tuple, Union
from rich.text import Text
DEFAULT_STYLES: dict[str, str] = {'data': 'bold', 'path': 'green', 'changed': 'yellow', 'actual': 'red', 'expected': 'green', 'value': 'green', 'border': 'bright_black'}
Cell = Union[Text, str, int]


def _style(styles: Optional[Mapping[str, str]], key: str) -> str:
    if styles is not None and key in styles:
        return styles[key]
    return DEFAULT_STYLES.get(key, '')


def fmt_data(data: bytes, per_line: int=8, styles: Optional[Mapping[str, str]]=None) -> Text:
    lines = [data[i:i + per_line].hex() for i in range(0, len(data), per_line)]
    return Text('\n'.join(lines), style=_style(styles, 'data'))


def fmt_path(path: str, styles: Optional[Mapping[str, str]]=None) -> Text:
    return Text(path, style=_style(styles, 'path'))


def fmt_value(value: Any, styles: Optional[Mapping[str, str]]=None) -> Text:
    accent = _style(styles, 'value')
    if isinstance(value, (bytes, bytearray, memoryview)):
        raw = bytes(value)
        return Text.assemble('b(', (raw.hex(), accent), f' len={len(raw)})')
    if isinstance(value, str):
        return Text.assemble('s(', (f'"{value}"', accent), f' len={len(value)})')
    if isinstance(value, (int, float)) and (not isinstance(value, bool)):
        return Text(f'n({value})')
    if value is None:
        return Text('')
    return Text(str(value))


def labeled(actual: Union[Text, str, int], expected: Union[Text, str, int], styles: Optional[Mapping[str, str]]=None) -> Text:
    a = actual.plain if isinstance(actual, Text) else str(actual)
    e = expected.plain if isinstance(expected, Text) else str(expected)
    return Text.assemble('A: ', (a, _style(styles, 'actual')), '\nE: ', (e, _style(styles, 'expected')))


def diff_data(actual: bytes, expected: bytes, per_line: int=8, styles: Optional[Mapping[str, str]]=None) -> Tuple[Text, Text]:
    """Hex-render two byte strings side by side, marking positions that differ.

    Comparison is positional: byte ``i`` of one side is compared with byte
    ``i`` of the other, and bytes past the end of the shorter side count as
    different.
    """
    changed = _style(styles, 'changed')
    out_a = Text()
    out_e = Text()
    for i in range(max(len(actual), len(expected))):
        a_byte = actual[i] if i < len(actual) else None
        e_byte = expected[i] if i < len(expected) else None
        same = a_byte == e_byte
        if i and (not i % per_line):
            if a_byte is not None:
                out_a.append('\n')
            if e_byte is not None:
                out_e.append('\n')
        if a_byte is not None:
            out_a.append(f'{a_byte:02x}', style=None if same else changed)
        if e_byte is not None:
            out_e.append(f'{e_byte:02x}', style=None if same else changed)
    return (out_a, out_e)


def changed_offsets(actual: bytes, expected: bytes) -> list[int]:
    size = max(len(actual), len(expected))
    return [i for i in range(size) if (actual[i] if i < len(actual) else None) != (expected[i] if i < len(expected) else None)]


def diff_length(actual: bytes, expected: bytes, styles: Optional[Mapping[str, str]]=None) -> Cell:
    if len(actual) == len(expected):
        return len(actual)
    return labeled(len(actual), len(expected), styles)


def diff_path(actual: str, expected: str, styles: Optional[Mapping[str, str]]=None) -> Cell:
    if actual == expected:
        return actual
    return labeled(actual, expected, styles)


def diff_value(actual: Any, expected: Any, styles: Optional[Mapping[str, str]]=None) -> Cell:
    a = fmt_value(actual, styles)
    e = fmt_value(expected, styles)
    if a.plain == e.plain:
        return a
    return labeled(a, e, styles)


__all__ = ['DEFAULT_STYLES', 'fmt_data', 'fmt_path', 'fmt_value', 'labeled', 'diff_data', 'changed_offsets', 'diff_length', 'diff_path', 'diff_value']
