from __future__ import annotations
import base64
import binascii
import logging
from pathlib import Path
from typing import List, Union
try:
    from scapy.all import rdpcap
except ImportError:
    rdpcap = None
from .errors import FormatError
logger = logging.getLogger(__name__)
BytesLike = Union[bytes, bytearray, memoryview]
_HEX_PREFIXES = ('0x', 'hex:')
_B64_PREFIXES = ('b64:', 'base64:')


def _strip_prefix(text: str, prefixes: tuple[str, ...]) -> Union[str, None]:
    lowered = text.lower()
    for prefix in prefixes:
        if lowered.startswith(prefix):
            return text[len(prefix):]
    return None


def _decode_hex(text: str) -> bytes:
    return bytes.fromhex(''.join(text.split()))


def _decode_b64(text: str) -> bytes:
    return base64.b64decode(''.join(text.split()), validate=True)


def to_bytes(data: Union[str, BytesLike]) -> bytes:
    """Normalize a buffer given as raw bytes or as base64/hex text.

    Unprefixed text is tried as base64 first and as hex second; ``0x``/``hex:``
    and ``b64:``/``base64:`` prefixes pick one decoding explicitly.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    if not isinstance(data, str):
        raise FormatError(f'data should be str or bytes, got {type(data).__name__}')
    forced_hex = _strip_prefix(data, _HEX_PREFIXES)
    if forced_hex is not None:
        try:
            return _decode_hex(forced_hex)
        except ValueError as e:
            raise FormatError(f'data is not valid hex: {data}') from e
    forced_b64 = _strip_prefix(data, _B64_PREFIXES)
    if forced_b64 is not None:
        try:
            return _decode_b64(forced_b64)
        except (binascii.Error, ValueError) as e:
            raise FormatError(f'data is not valid base64: {data}') from e
    try:
        return _decode_b64(data)
    except (binascii.Error, ValueError):
        pass
    try:
        return _decode_hex(data)
    except ValueError:
        pass
    raise FormatError(f'data has unknown string format: {data}')


def read_pcap_payloads(pcap_path: Path, max_packets: int=0) -> List[bytes]:
    if rdpcap is None:
        raise ImportError('scapy is required for PCAP processing. Please install it.')
    if not pcap_path.exists():
        raise FileNotFoundError(f'PCAP file not found: {pcap_path}')
    try:
        packets = rdpcap(str(pcap_path))
    except Exception as e:
        raise FormatError(f'Failed to read PCAP {pcap_path}: {e}') from e
    payloads: List[bytes] = []
    for pkt in packets:
        if max_packets and len(payloads) >= max_packets:
            break
        data = bytes(pkt.load) if hasattr(pkt, 'load') else bytes(pkt)
        if data:
            payloads.append(data)
    logger.debug('Read %d payloads from %s', len(payloads), pcap_path)
    return payloads


def load_input(source: str) -> bytes:
    """Resolve a CLI data argument: ``@file`` reads raw bytes, ``pcap:FILE#N``
    takes the payload of packet N, anything else is inline base64/hex."""
    if source.startswith('@'):
        path = Path(source[1:])
        try:
            return path.read_bytes()
        except OSError as e:
            raise FormatError(f'cannot read {path}: {e}') from e
    if source.startswith('pcap:'):
        file_part, _, index_part = source[5:].rpartition('#')
        if not file_part:
            file_part, index_part = (index_part, '0')
        try:
            index = int(index_part or '0')
        except ValueError as e:
            raise FormatError(f'bad packet index in {source!r}') from e
        try:
            payloads = read_pcap_payloads(Path(file_part), max_packets=index + 1)
        except (OSError, ImportError) as e:
            raise FormatError(f'cannot read packets from {file_part}: {e}') from e
        if index >= len(payloads):
            raise FormatError(f'{file_part} has {len(payloads)} packets with payload, wanted #{index}')
        return payloads[index]
    return to_bytes(source)


__all__ = ['to_bytes', 'load_input', 'read_pcap_payloads']
