from fieldtrace.codec.coders import U8, U16BE, Array, Bytes, Padding, Struct
from fieldtrace.trace.materialize import map_spans
from fieldtrace.trace.recorder import TraceRecorder, TracingReader
from fieldtrace.trace.span import UNKNOWN, Span


def _ranges(spans):
    return [(s.path, s.start, s.end) for s in spans]


def _run(coder, data):
    reader = TracingReader(data)
    value = coder.decode_stream(reader)
    reader.finish()
    return value, reader.finish_trace()


def test_enclosing_exit_consuming_trailing_bytes_gets_filler():
    rec = TraceRecorder()
    rec.on_enter([], 'a', 0)
    rec.on_exit(4)
    rec.on_exit(10)
    spans = rec.finalize(10)
    assert _ranges(spans) == [('a', 0, 4), ('a/(???)', 4, 10)]
    assert [len(r.data) for r in map_spans(spans, bytes(10))] == [4, 6]


def test_finalize_closes_pending_field_where_decoding_stopped():
    rec = TraceRecorder()
    rec.on_enter([], 'body', 0)
    spans = rec.finalize(10, pos=6)
    assert _ranges(spans) == [('body', 0, 6), (UNKNOWN, 6, 10)]
    assert spans[0].value is None


def test_finalize_without_position_closes_pending_at_buffer_end():
    rec = TraceRecorder()
    rec.on_enter([], 'body', 2)
    spans = rec.finalize(8)
    assert _ranges(spans) == [(UNKNOWN, 0, 2), ('body', 2, 8)]


def test_finalize_covers_unreached_tail():
    rec = TraceRecorder()
    rec.on_enter([], 'x', 0)
    rec.on_exit(2, lambda path: 7)
    spans = rec.finalize(5)
    assert _ranges(spans) == [('x', 0, 2), (UNKNOWN, 2, 5)]
    assert spans[0].value == 7
    assert spans[1].is_filler


def test_finalize_is_idempotent():
    rec = TraceRecorder()
    rec.on_enter([], 'x', 0)
    rec.on_exit(3)
    first = list(rec.finalize(3))
    assert rec.finalize(3) == first


def test_empty_buffer_gives_empty_partition():
    assert TraceRecorder().finalize(0) == []


def test_enter_closes_span_left_open():
    rec = TraceRecorder()
    rec.spans.append(Span(start=0, path='stale'))
    assert rec.spans[0].is_open
    rec.on_enter([], 'next', 3)
    assert rec.spans[0].end == 3
    assert not rec.spans[0].is_open
    rec.on_exit(5)
    assert _ranges(rec.finalize(5)) == [('stale', 0, 3), ('next', 3, 5)]


def test_exit_without_pending_closes_span_left_open():
    rec = TraceRecorder()
    rec.spans.append(Span(start=0, path='stale'))
    rec.on_exit(4)
    assert _ranges(rec.finalize(4)) == [('stale', 0, 4)]


def test_unlooked_up_value_is_not_attached():
    from fieldtrace.codec.reader import MISSING
    rec = TraceRecorder()
    rec.on_enter([], 'x', 0)
    rec.on_exit(1, lambda path: MISSING)
    assert rec.spans[0].value is None


def test_flat_struct_records_leaf_values():
    value, spans = _run(Struct([('a', U8), ('b', U16BE)]), b'\x01\x00\x02')
    assert value == {'a': 1, 'b': 2}
    assert _ranges(spans) == [('a', 0, 1), ('b', 1, 3)]
    assert [s.value for s in spans] == [1, 2]


def test_padding_between_fields_becomes_filler():
    _, spans = _run(Struct([('a', U8), ('', Padding(2)), ('b', U8)]), b'\x01\x00\x00\x02')
    assert _ranges(spans) == [('a', 0, 1), (UNKNOWN, 1, 3), ('b', 3, 4)]


def test_padding_before_first_nested_field_uses_enclosing_path():
    _, spans = _run(Struct([('hdr', Struct([('', Padding(1)), ('v', U8)]))]), b'\xff\x07')
    assert _ranges(spans) == [('hdr/(???)', 0, 1), ('hdr/v', 1, 2)]
    assert spans[1].value == 7


def test_trailing_padding_in_nested_struct_extends_last_child_path():
    coder = Struct([('hdr', Struct([('v', U8), ('', Padding(2))])), ('t', U8)])
    _, spans = _run(coder, b'\x01\x00\x00\x09')
    assert _ranges(spans) == [('hdr/v', 0, 1), ('hdr/v/(???)', 1, 3), ('t', 3, 4)]


def test_array_items_are_indexed_paths():
    _, spans = _run(Struct([('items', Array(2, U8)), ('tail', Bytes(1))]), b'\x0a\x0b\xcc')
    assert _ranges(spans) == [('items/0', 0, 1), ('items/1', 1, 2), ('tail', 2, 3)]
    assert [s.value for s in spans] == [10, 11, b'\xcc']


def test_zero_length_struct_field_is_recorded_with_its_value():
    _, spans = _run(Struct([('empty', Struct([])), ('a', U8)]), b'\x05')
    assert _ranges(spans) == [('empty', 0, 0), ('a', 0, 1)]
    assert spans[0].value == {}


def test_partition_is_complete_for_nested_schema():
    coder = Struct([('hdr', Struct([('kind', U8), ('', Padding(1)), ('n', U8)])), ('items', Array(U8, U16BE)), ('', Padding(1))])
    data = b'\x01\x00\x02\x02\x00\x01\x00\x02\xee'
    _, spans = _run(coder, data)
    records = map_spans(spans, data)
    assert b''.join((r.data for r in records)) == data
    assert [r.path for r in records] == ['hdr/kind', 'hdr/(???)', 'hdr/n', 'items/(???)', 'items/0', 'items/1', UNKNOWN]
