from __future__ import annotations
import logging
from typing import Any, List, Optional, Sequence, Union
from rich.console import Console
from .codec.coders import Coder
from .config_manager import TraceConfig
from .inputs import BytesLike, to_bytes
from .render.table import make_console, print_banner, record_rows, render_table
from .trace.diff import diff_records, first_divergence
from .trace.materialize import map_spans
from .trace.span import TraceRecord
from .trace.recorder import TracingReader
logger = logging.getLogger(__name__)
DataInput = Union[str, BytesLike]


def _console_for(console: Optional[Console], config: TraceConfig) -> Console:
    if console is not None:
        return console
    return make_console(config.console_width, config.color)


def trace(coder: Coder, data: DataInput) -> List[TraceRecord]:
    """Decode ``data`` completely and return its trace records.

    Any decode error propagates; there is no partial trace here.
    """
    buf = to_bytes(data)
    reader = TracingReader(buf)
    coder.decode_stream(reader)
    reader.finish()
    return map_spans(reader.finish_trace(), buf)


def print_trace(records: Sequence[TraceRecord], console: Console, config: Optional[TraceConfig]=None, *, title: str='DECODED') -> None:
    config = config or TraceConfig()
    print_banner(console, title)
    if records:
        render_table(record_rows(records, config.bytes_per_line, config.styles), console, config.styles)
    else:
        console.print('(empty buffer)', markup=False)
    print_banner(console, title, closing=True)


def decode(coder: Coder, data: DataInput, force_print: bool=False, *, console: Optional[Console]=None, config: Optional[TraceConfig]=None) -> Any:
    config = config or TraceConfig()
    buf = to_bytes(data)
    reader = TracingReader(buf)
    res = None
    error: Optional[BaseException] = None
    try:
        res = coder.decode_stream(reader)
        reader.finish()
    except Exception as e:
        error = e
    spans = reader.finish_trace()
    if error is not None:
        logger.warning('Decode failed at byte %d of %d: %s', reader.pos, len(buf), error)
    if error is not None or force_print:
        records = map_spans(spans, buf)
        print_trace(records, _console_for(console, config), config, title='DECODED BEFORE ERROR' if error is not None else 'DECODED')
    if error is not None:
        raise error
    return res


def diff(coder: Coder, actual: DataInput, expected: DataInput, skip_identical: Optional[bool]=None, *, console: Optional[Console]=None, config: Optional[TraceConfig]=None) -> None:
    config = config or TraceConfig()
    if skip_identical is None:
        skip_identical = config.skip_identical
    out = _console_for(console, config)
    actual_records = trace(coder, actual)
    expected_records = trace(coder, expected)
    divergence = first_divergence(actual_records, expected_records)
    if divergence is not None:
        logger.info('Traces diverge at record %d (%d actual / %d expected records)', divergence, len(actual_records), len(expected_records))
    rows = diff_records(actual_records, expected_records, skip_identical=skip_identical, bytes_per_line=config.bytes_per_line, styles=config.styles)
    print_banner(out, 'DIFF')
    if rows:
        render_table([row.as_table_row() for row in rows], out, config.styles)
    else:
        out.print('(no differences)', markup=False)
    print_banner(out, 'DIFF', closing=True)


__all__ = ['trace', 'print_trace', 'decode', 'diff']
