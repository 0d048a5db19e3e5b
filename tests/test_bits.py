import pytest

from x86disasm.bits import combine, field, flag, format_bits, opcode_prefix, to_signed


def test_combine_keeps_high_low_order():
    assert combine(0x01, 0x02) == 0x0102
    assert combine(0xFF, 0x00) == 0xFF00


@pytest.mark.parametrize(
    "value,bits,expected",
    [
        (0xFF, 8, -1),
        (0x80, 8, -128),
        (0x7F, 8, 127),
        (0x00, 8, 0),
        (0xFFFF, 16, -1),
        (0x8000, 16, -32768),
        (0x7FFF, 16, 32767),
        (0xFED4, 16, -300),
    ],
)
def test_to_signed_is_twos_complement(value, bits, expected):
    assert to_signed(value, bits) == expected


def test_to_signed_masks_wider_values():
    assert to_signed(0x1FF, 8) == -1


def test_to_signed_rejects_non_positive_width():
    with pytest.raises(ValueError, match="positive"):
        to_signed(1, 0)


def test_field_and_prefix_extraction():
    byte = 0b10001011
    assert opcode_prefix(byte, 6) == 0b100010
    assert opcode_prefix(byte, 4) == 0b1000
    assert field(byte, 6, 2) == 0b10
    assert field(0b11011000, 3, 3) == 0b011
    assert flag(byte, 1) is True
    assert flag(byte, 2) is False


def test_format_bits_is_eight_characters():
    assert format_bits(0xF4) == "11110100"
    assert format_bits(0x01) == "00000001"
