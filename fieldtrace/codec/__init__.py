from __future__ import annotations
from typing import TYPE_CHECKING, Any
__all__ = ['Reader', 'MISSING', 'Coder', 'UInt', 'U8', 'U16BE', 'U16LE', 'U32BE', 'U32LE', 'U64BE', 'U64LE', 'Bytes', 'String', 'Magic', 'Padding', 'Struct', 'Array', 'build_coder', 'load_schema']
if TYPE_CHECKING:
    from .coders import U8, U16BE, U16LE, U32BE, U32LE, U64BE, U64LE, Array, Bytes, Coder, Magic, Padding, String, Struct, UInt
    from .reader import MISSING, Reader
    from .schema import build_coder, load_schema
_EXPORTS: dict[str, str] = {'Reader': 'reader', 'MISSING': 'reader', 'build_coder': 'schema', 'load_schema': 'schema'}


def __getattr__(name: str) -> Any:
    if name not in __all__:
        raise AttributeError(name)
    mod_name = _EXPORTS.get(name, 'coders')
    module = __import__(f'{__name__}.{mod_name}', fromlist=[name])
    return getattr(module, name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(__all__))
