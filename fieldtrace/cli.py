from __future__ import annotations
import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Optional, Sequence
from .codec.schema import load_schema
from .config_manager import TraceConfig, load_config
from .debugger import decode, diff
from .errors import ConfigError, DecodeError, EmptyInputError, FormatError, SchemaError
from .inputs import load_input
from .logging_utils import parse_level, setup_logging
from .render.table import make_console
logger = logging.getLogger(__name__)


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--schema', required=True, type=Path, help='Schema document (YAML or JSON)')
    parser.add_argument('--config', type=Path, default=None, help='Config YAML (default: $FIELDTRACE_CONFIG or ~/.config/fieldtrace/config.yaml)')
    parser.add_argument('--log-level', default='WARNING', help='Console log level')
    parser.add_argument('--log-file', type=Path, default=None, help='Also write DEBUG logs to this file')
    parser.add_argument('--width', type=int, default=None, help='Console width (default: detect)')
    parser.add_argument('--bytes-per-line', type=int, default=None, help='Hex bytes per table line')
    parser.add_argument('--no-color', action='store_true', help='Disable ANSI colors')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='fieldtrace', description='Attribute decoded fields to byte ranges and diff binary buffers field by field.')
    sub = parser.add_subparsers(dest='command', required=True)
    p_decode = sub.add_parser('decode', help='Decode a buffer, printing the field trace on error')
    p_decode.add_argument('data', help='base64/hex text, @FILE for raw bytes, or pcap:FILE#N')
    p_decode.add_argument('--force-print', action='store_true', help='Print the field trace even when decoding succeeds')
    _add_common(p_decode)
    p_diff = sub.add_parser('diff', help='Compare two buffers decoded with the same schema')
    p_diff.add_argument('actual', help='Candidate buffer (same forms as decode)')
    p_diff.add_argument('expected', help='Reference buffer (same forms as decode)')
    p_diff.add_argument('--show-identical', action='store_true', help='Also list records whose bytes match')
    _add_common(p_diff)
    return parser


def parse_args(argv: Optional[Sequence[str]]=None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def _json_default(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    return str(value)


def _resolve_config(args: argparse.Namespace) -> TraceConfig:
    config = load_config(args.config)
    overrides: dict[str, Any] = {}
    if args.width is not None:
        overrides['console_width'] = args.width
    if args.bytes_per_line is not None:
        overrides['bytes_per_line'] = args.bytes_per_line
    if args.no_color:
        overrides['color'] = False
    return replace(config, **overrides)


def run(args: argparse.Namespace) -> int:
    config = _resolve_config(args)
    coder = load_schema(args.schema)
    console = make_console(config.console_width, config.color)
    if args.command == 'decode':
        value = decode(coder, load_input(args.data), force_print=args.force_print, console=console, config=config)
        print(json.dumps(value, default=_json_default, ensure_ascii=False, indent=2))
        return 0
    diff(coder, load_input(args.actual), load_input(args.expected), skip_identical=False if args.show_identical else None, console=console, config=config)
    return 0


def main(argv: Optional[Sequence[str]]=None) -> int:
    args = parse_args(argv)
    try:
        console_level = parse_level(args.log_level)
    except ValueError as e:
        print(f'fieldtrace: {e}', file=sys.stderr)
        return 2
    setup_logging(console_level=console_level, file_path=args.log_file)
    try:
        return run(args)
    except DecodeError as e:
        print(f'fieldtrace: decode failed: {e}', file=sys.stderr)
        return 1
    except (FormatError, SchemaError, ConfigError, EmptyInputError) as e:
        print(f'fieldtrace: {e}', file=sys.stderr)
        return 2
if __name__ == '__main__':
    sys.exit(main())
