from __future__ import annotations
from typing import Any, Optional


class FieldTraceError(Exception):
    pass


class DecodeError(FieldTraceError):

    def __init__(self, message: str, *, pos: Optional[int]=None) -> None:
        super().__init__(message)
        self.pos = pos


class IncompleteStreamError(DecodeError):

    def __init__(self, message: str, *, pos: Optional[int]=None, bytes_needed: Optional[int]=None, bytes_remaining: Optional[int]=None) -> None:
        super().__init__(message, pos=pos)
        self.bytes_needed = bytes_needed
        self.bytes_remaining = bytes_remaining


class TrailingBytesError(DecodeError):

    def __init__(self, message: str, *, pos: Optional[int]=None, leftover: int=0) -> None:
        super().__init__(message, pos=pos)
        self.leftover = leftover


class MagicMismatchError(DecodeError):

    def __init__(self, expected: bytes, actual: bytes, *, pos: Optional[int]=None) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f'Magic mismatch at {pos}: expected {expected.hex()}, got {actual.hex()}', pos=pos)


class InvariantViolation(FieldTraceError):
    """Span partition does not cover the buffer contiguously.

    Always a recorder defect, never a property of the input data.
    """

    def __init__(self, message: str, *, span: Any=None, expected_start: Optional[int]=None) -> None:
        super().__init__(message)
        self.span = span
        self.expected_start = expected_start


class FormatError(FieldTraceError):
    pass


class EmptyInputError(FieldTraceError):
    pass


class SchemaError(FieldTraceError):
    pass


class ConfigError(FieldTraceError):
    pass


__all__ = ['FieldTraceError', 'DecodeError', 'IncompleteStreamError', 'TrailingBytesError', 'MagicMismatchError', 'InvariantViolation', 'FormatError', 'EmptyInputError', 'SchemaError', 'ConfigError']
