import pytest

from fieldtrace.errors import FormatError
from fieldtrace import inputs
from fieldtrace.inputs import load_input, read_pcap_payloads, to_bytes


def test_bytes_pass_through():
    assert to_bytes(b'\x00\x01') == b'\x00\x01'
    assert to_bytes(bytearray(b'\x02')) == b'\x02'
    assert to_bytes(memoryview(b'\x03')) == b'\x03'


def test_base64_is_tried_first():
    assert to_bytes('AQID') == b'\x01\x02\x03'


def test_hex_fallback():
    assert to_bytes('abcdef') == b'\xab\xcd\xef'


def test_explicit_prefixes():
    assert to_bytes('0x0102') == b'\x01\x02'
    assert to_bytes('hex:01 02') == b'\x01\x02'
    assert to_bytes('b64:AQID') == b'\x01\x02\x03'


@pytest.mark.parametrize('bad', ['zz', 'abc', '0xzz', 'b64:***'])
def test_unrecognized_text_raises(bad):
    with pytest.raises(FormatError):
        to_bytes(bad)


def test_non_text_input_raises():
    with pytest.raises(FormatError):
        to_bytes(123)


def test_load_input_from_file(tmp_path):
    path = tmp_path / 'payload.bin'
    path.write_bytes(b'\x10\x20')
    assert load_input(f'@{path}') == b'\x10\x20'
    with pytest.raises(FormatError):
        load_input(f'@{tmp_path / "missing.bin"}')


def test_load_input_inline():
    assert load_input('0xff') == b'\xff'


class FakePacket:

    def __init__(self, load):
        self.load = load


class RawPacket:

    def __init__(self, raw):
        self.raw = raw

    def __bytes__(self):
        return self.raw


@pytest.fixture
def capture(tmp_path, monkeypatch):
    path = tmp_path / 'capture.pcap'
    path.write_bytes(b'')
    packets = [FakePacket(b'\x01\x02'), FakePacket(b''), RawPacket(b'\x03'), FakePacket(b'\x04\x05\x06')]
    monkeypatch.setattr(inputs, 'rdpcap', lambda name: packets)
    return path


def test_pcap_payloads_skip_empty_packets(capture):
    assert read_pcap_payloads(capture) == [b'\x01\x02', b'\x03', b'\x04\x05\x06']
    assert read_pcap_payloads(capture, max_packets=2) == [b'\x01\x02', b'\x03']


def test_load_input_selects_packet_by_index(capture):
    assert load_input(f'pcap:{capture}#1') == b'\x03'
    assert load_input(f'pcap:{capture}#2') == b'\x04\x05\x06'


def test_load_input_defaults_to_first_packet(capture):
    assert load_input(f'pcap:{capture}') == b'\x01\x02'


def test_load_input_packet_index_past_end(capture):
    with pytest.raises(FormatError, match='wanted #3'):
        load_input(f'pcap:{capture}#3')


def test_load_input_packet_index_not_a_number(capture):
    with pytest.raises(FormatError, match='bad packet index'):
        load_input(f'pcap:{capture}#first')


def test_load_input_missing_capture_file(tmp_path, monkeypatch):
    monkeypatch.setattr(inputs, 'rdpcap', lambda name: [])
    with pytest.raises(FormatError, match='not found'):
        load_input(f'pcap:{tmp_path / "missing.pcap"}#0')


def test_load_input_without_scapy(capture, monkeypatch):
    monkeypatch.setattr(inputs, 'rdpcap', None)
    with pytest.raises(FormatError, match='scapy'):
        load_input(f'pcap:{capture}')


def test_unreadable_capture_raises_format_error(capture, monkeypatch):

    def broken(name):
        raise ValueError('not a pcap file')
    monkeypatch.setattr(inputs, 'rdpcap', broken)
    with pytest.raises(FormatError, match='not a pcap file'):
        read_pcap_payloads(capture)
