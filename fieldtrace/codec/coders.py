from __future__ import annotations
from typing import Any, List, Optional, Sequence, Tuple, Union
from ..errors import DecodeError, MagicMismatchError
from .reader import Reader

LengthSpec = Union[int, 'Coder', None]


class Coder:

    def decode_stream(self, reader: Reader) -> Any:
        raise NotImplementedError

    def decode(self, data: bytes) -> Any:
        reader = Reader(data)
        value = self.decode_stream(reader)
        reader.finish()
        return value


class UInt(Coder):

    def __init__(self, size: int, byteorder: str='big'):
        if size <= 0:
            raise ValueError(f'UInt size must be positive, got {size}')
        if byteorder not in ('big', 'little'):
            raise ValueError(f'Unknown byteorder {byteorder!r}')
        self.size = size
        self.byteorder = byteorder

    def decode_stream(self, reader: Reader) -> int:
        return int.from_bytes(reader.read(self.size), self.byteorder)

    def __repr__(self) -> str:
        return f'UInt({self.size}, {self.byteorder!r})'


U8 = UInt(1)
U16BE = UInt(2, 'big')
U16LE = UInt(2, 'little')
U32BE = UInt(4, 'big')
U32LE = UInt(4, 'little')
U64BE = UInt(8, 'big')
U64LE = UInt(8, 'little')


def _resolve_length(length: LengthSpec, reader: Reader) -> Optional[int]:
    if length is None:
        return None
    if isinstance(length, int):
        return length
    value = length.decode_stream(reader)
    if not isinstance(value, int):
        raise DecodeError(f'Length prefix decoded to non-integer {value!r}', pos=reader.pos)
    return value


class Bytes(Coder):

    def __init__(self, length: LengthSpec=None):
        self.length = length

    def decode_stream(self, reader: Reader) -> bytes:
        size = _resolve_length(self.length, reader)
        if size is None:
            return reader.read_rest()
        return reader.read(size)


class String(Coder):

    def __init__(self, length: LengthSpec=None, encoding: str='utf-8'):
        self.inner = Bytes(length)
        self.encoding = encoding

    def decode_stream(self, reader: Reader) -> str:
        start = reader.pos
        raw = self.inner.decode_stream(reader)
        try:
            return raw.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise DecodeError(f'Invalid {self.encoding} string at {start}: {e.reason}', pos=start) from e


class Magic(Coder):

    def __init__(self, expected: bytes):
        self.expected = bytes(expected)

    def decode_stream(self, reader: Reader) -> bytes:
        start = reader.pos
        actual = reader.read(len(self.expected))
        if actual != self.expected:
            raise MagicMismatchError(self.expected, actual, pos=start)
        return actual


class Padding(Coder):

    def __init__(self, size: int):
        self.size = size

    def decode_stream(self, reader: Reader) -> None:
        reader.read(self.size)
        return None


class Struct(Coder):

    def __init__(self, fields: Sequence[Tuple[str, Coder]]):
        self.fields: List[Tuple[str, Coder]] = list(fields)

    def decode_stream(self, reader: Reader) -> dict:
        res: dict = {}
        reader.push_container(res)
        for name, coder in self.fields:
            if isinstance(coder, Padding):
                coder.decode_stream(reader)
                continue
            reader.field_path_push(name)
            res[name] = coder.decode_stream(reader)
            reader.field_path_pop()
        reader.pop_container()
        return res


class Array(Coder):

    def __init__(self, length: LengthSpec, item: Coder):
        self.length = length
        self.item = item

    def decode_stream(self, reader: Reader) -> list:
        count = _resolve_length(self.length, reader)
        res: list = []
        reader.push_container(res)
        i = 0
        while (i < count) if count is not None else (not reader.is_end):
            start = reader.pos
            reader.field_path_push(str(i))
            res.append(self.item.decode_stream(reader))
            reader.field_path_pop()
            if count is None and reader.pos == start:
                raise DecodeError(f'array item at {start} consumed no bytes', pos=start)
            i += 1
        reader.pop_container()
        return res


__all__ = ['Coder', 'UInt', 'U8', 'U16BE', 'U16LE', 'U32BE', 'U32LE', 'U64BE', 'U64LE', 'Bytes', 'String', 'Magic', 'Padding', 'Struct', 'Array']
