import pytest
from rich.text import Text

from fieldtrace.render.formatting import changed_offsets, diff_data, diff_length, diff_path, diff_value, fmt_data, fmt_value
from fieldtrace.render.table import build_table, record_rows, render_table
from fieldtrace.errors import EmptyInputError
from fieldtrace.trace.span import TraceRecord


@pytest.mark.parametrize('value, expected', [
    (b'\x01\x02', 'b(0102 len=2)'),
    ('hi', 's("hi" len=2)'),
    (5, 'n(5)'),
    (1.5, 'n(1.5)'),
    (None, ''),
    (True, 'True'),
    ({'a': 1}, "{'a': 1}"),
])
def test_fmt_value(value, expected):
    assert fmt_value(value).plain == expected


def test_fmt_data_wraps_lines():
    assert fmt_data(bytes(range(10))).plain == '0001020304050607\n0809'
    assert fmt_data(b'').plain == ''


def test_diff_data_shorter_side_is_not_padded():
    a, e = diff_data(b'\x01\x02', b'\x01')
    assert (a.plain, e.plain) == ('0102', '01')
    assert changed_offsets(b'\x01\x02', b'\x01') == [1]


def test_shared_and_labeled_cells():
    assert diff_length(b'ab', b'cd') == 2
    assert diff_path('x', 'x') == 'x'
    assert diff_path('x', 'y').plain == 'A: x\nE: y'
    assert diff_value('s', 's').plain == 's("s" len=1)'
    assert diff_value(b'\x01', 1).plain == 'A: b(01 len=1)\nE: n(1)'


def test_custom_styles_are_used():
    a, _ = diff_data(b'\x01', b'\x02', styles={'changed': 'magenta'})
    assert str(a.spans[0].style) == 'magenta'


def test_empty_table_raises():
    with pytest.raises(EmptyInputError):
        build_table([])
    with pytest.raises(EmptyInputError):
        build_table([{}])


def test_render_records_table(console):
    rows = record_rows([TraceRecord('hdr/len', b'\x05', 5), TraceRecord('(???)', b'\x00\x00')])
    render_table(rows, console)
    out = console.file.getvalue()
    for token in ('Data', 'Len', 'Path', 'Value', 'hdr/len', 'n(5)', '(???)', '0000'):
        assert token in out


def test_narrow_console_truncates_rows(console):
    console.width = 40
    render_table([{'Data': Text('ab' * 60), 'Path': 'p'}], console)
    lines = console.file.getvalue().splitlines()
    assert all(len(line) <= 40 for line in lines)
    assert '…' in console.file.getvalue()
