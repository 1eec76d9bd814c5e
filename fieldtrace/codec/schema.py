from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union
import yaml
from ..errors import SchemaError
from .coders import U8, U16BE, U16LE, U32BE, U32LE, U64BE, U64LE, Array, Bytes, Coder, Magic, Padding, String, Struct
logger = logging.getLogger(__name__)
_INT_CODERS: Dict[str, Coder] = {'u8': U8, 'u16': U16BE, 'u16be': U16BE, 'u16le': U16LE, 'u32': U32BE, 'u32be': U32BE, 'u32le': U32LE, 'u64': U64BE, 'u64be': U64BE, 'u64le': U64LE}
_CONTAINER_KEYS = ('schema', 'root')


def _coerce_int(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        candidate = value.strip()
        if not candidate:
            return value
        try:
            return int(candidate, 0)
        except ValueError:
            return value
    return value


def _node_type(node: Dict[str, Any]) -> str:
    return str(node.get('type') or '').strip().lower()


def _build_length(raw: Any, where: str) -> Union[int, Coder, None]:
    if raw is None:
        return None
    raw = _coerce_int(raw)
    if isinstance(raw, int) and (not isinstance(raw, bool)):
        if raw < 0:
            raise SchemaError(f'{where}: negative length {raw}')
        return raw
    if isinstance(raw, str):
        key = raw.strip().lower()
        if key in _INT_CODERS:
            return _INT_CODERS[key]
    if isinstance(raw, dict):
        return build_coder(raw, where=f'{where}.length')
    raise SchemaError(f'{where}: unsupported length {raw!r}')


def _parse_hex(raw: Any, where: str) -> bytes:
    text = str(raw or '').strip()
    if text.lower().startswith('0x'):
        text = text[2:]
    try:
        return bytes.fromhex(text)
    except ValueError as e:
        raise SchemaError(f'{where}: magic value {raw!r} is not hex') from e


def build_coder(node: Any, *, where: str='root') -> Coder:
    if isinstance(node, str):
        node = {'type': node}
    if not isinstance(node, dict):
        raise SchemaError(f'{where}: schema node must be a mapping, got {type(node).__name__}')
    kind = _node_type(node)
    if not kind:
        raise SchemaError(f'{where}: schema node has no type')
    if kind in _INT_CODERS:
        return _INT_CODERS[kind]
    if kind == 'bytes':
        return Bytes(_build_length(node.get('length'), where))
    if kind == 'string':
        return String(_build_length(node.get('length'), where), encoding=str(node.get('encoding') or 'utf-8'))
    if kind == 'magic':
        return Magic(_parse_hex(node.get('value'), where))
    if kind == 'padding':
        size = _coerce_int(node.get('size'))
        if not isinstance(size, int) or size < 0:
            raise SchemaError(f'{where}: padding needs a non-negative integer size')
        return Padding(size)
    if kind == 'array':
        if 'item' not in node:
            raise SchemaError(f'{where}: array has no item')
        return Array(_build_length(node.get('length'), where), build_coder(node['item'], where=f'{where}[]'))
    if kind == 'struct':
        fields: List[Tuple[str, Coder]] = []
        for idx, entry in enumerate(node.get('fields') or []):
            if not isinstance(entry, dict):
                raise SchemaError(f'{where}.fields[{idx}]: field must be a mapping')
            name = str(entry.get('name') or '').strip()
            child_where = f'{where}/{name}' if name else f'{where}.fields[{idx}]'
            coder = build_coder(entry, where=child_where)
            if not name and (not isinstance(coder, Padding)):
                raise SchemaError(f'{child_where}: field has no name')
            fields.append((name, coder))
        if not fields:
            logger.debug('Struct at %s has no fields', where)
        return Struct(fields)
    raise SchemaError(f'{where}: unknown type {kind!r}')


def normalize_schema(doc: Any) -> Any:
    seen: set[int] = set()
    while isinstance(doc, dict) and (not _node_type(doc)):
        inner = next((doc[k] for k in _CONTAINER_KEYS if isinstance(doc.get(k), dict)), None)
        if inner is None or id(inner) in seen:
            break
        seen.add(id(inner))
        doc = inner
    return doc


def load_schema(path: Union[str, Path]) -> Coder:
    path = Path(path)
    try:
        doc = yaml.safe_load(path.read_text(encoding='utf-8'))
    except OSError as e:
        raise SchemaError(f'Cannot read schema {path}: {e}') from e
    except yaml.YAMLError as e:
        raise SchemaError(f'Malformed schema {path}: {e}') from e
    coder = build_coder(normalize_schema(doc))
    logger.debug('Loaded schema %s as %r', path, coder)
    return coder


__all__ = ['build_coder', 'load_schema', 'normalize_schema']
