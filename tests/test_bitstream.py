import pytest

from vanillapad.bitstream import BitWriter


def test_simple():
    buf = bytearray(1)
    writer = BitWriter(buf, 0)
    writer.write_bits(1, 1)
    assert buf[0] == 128
    assert writer.bit_index == 1


def test_simple_double():
    buf = bytearray(1)
    writer = BitWriter(buf, 0)
    writer.write_bits(1, 1)
    writer.bit_index = 7
    writer.write_bits(1, 1)
    assert buf[0] == 129


def test_simple_exp_golomb():
    buf = bytearray(1)
    writer = BitWriter(buf, 0)
    writer.write_exp_golomb(1)
    assert buf[0] == 64


def test_complex_exp_golomb():
    buf = bytearray(2)
    writer = BitWriter(buf, 5)
    writer.write_exp_golomb(53)
    assert int.from_bytes(buf, "big") == 0b110110
    assert writer.bit_index == 16


def _write_sps_prefix(writer):
    writer.write_bits(0, 1)
    writer.write_bits(3, 2)
    writer.write_bits(7, 5)
    writer.write_bits(100, 8)
    for _ in range(6):
        writer.write_bits(0, 1)
    writer.write_bits(0, 2)
    writer.write_bits(0x20, 8)


def test_complex_bit_test():
    buf = bytearray(4)
    _write_sps_prefix(BitWriter(buf, 0))
    assert bytes(buf) == b"\x67\x64\x00\x20"


def test_stale_buffer_contents_are_overwritten():
    buf = bytearray(b"\xff" * 4)
    _write_sps_prefix(BitWriter(buf, 0))
    assert bytes(buf) == b"\x67\x64\x00\x20"


def test_growable_buffer():
    writer = BitWriter()
    _write_sps_prefix(writer)
    assert bytes(writer.buffer) == b"\x67\x64\x00\x20"
    assert writer.bit_index == 32


@pytest.mark.parametrize(
    "value, expected",
    [(0, 0x80), (1, 0x40), (-1, 0x60), (2, 0x20)],
)
def test_signed_exp_golomb(value, expected):
    buf = bytearray(1)
    BitWriter(buf, 0).write_signed_exp_golomb(value)
    assert buf[0] == expected


@pytest.mark.parametrize("value, expected", [(0, 0x80), (2, 0x60), (3, 0x20)])
def test_unsigned_exp_golomb_codes(value, expected):
    buf = bytearray(1)
    BitWriter(buf, 0).write_exp_golomb(value)
    assert buf[0] == expected


def test_align_pads_to_byte_boundary():
    writer = BitWriter(bytearray(2), 0)
    writer.write_bits(1, 1)
    writer.align()
    assert writer.bit_index == 8
    assert writer.buffer[0] == 0x80
    writer.align()
    assert writer.bit_index == 8


def test_straddling_write_drops_spilled_bits():
    buf = bytearray(b"\xff\xff")
    writer = BitWriter(buf, 7)
    writer.write_bits(0b11, 2)
    assert bytes(buf) == b"\xff\x00"
    assert writer.bit_index == 9


def test_fixed_buffer_overflow_raises():
    writer = BitWriter(bytearray(1), 0)
    writer.write_bits(0xAB, 8)
    with pytest.raises(IndexError):
        writer.write_bits(1, 1)


@pytest.mark.parametrize("width", [0, 9])
def test_bad_width_raises(width):
    with pytest.raises(ValueError):
        BitWriter(bytearray(2), 0).write_bits(0, width)


def test_value_too_wide_raises():
    with pytest.raises(ValueError):
        BitWriter(bytearray(2), 0).write_bits(4, 2)


def test_negative_exp_golomb_raises():
    with pytest.raises(ValueError):
        BitWriter().write_exp_golomb(-1)


def test_negative_bit_index_raises():
    with pytest.raises(ValueError):
        BitWriter(bytearray(1), -1)