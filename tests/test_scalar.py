"""Tests for fixed-width scalar types."""

import struct

import pytest

from rawdump.errors import ConfigurationError, ParseError, RangeError
from rawdump.types.scalar import ScalarType


def test_pack_little_and_big_endian():
    le = ScalarType("uint32", 4, "little")
    be = ScalarType("uint32", 4, "big")
    assert le.pack(0x11223344) == b"\x44\x33\x22\x11"
    assert be.pack(0x11223344) == b"\x11\x22\x33\x44"
    assert le.unpack(b"\x44\x33\x22\x11") == 0x11223344
    assert le.alignment == 4


def test_byte_order_is_part_of_identity():
    le = ScalarType("uint32", 4, "little")
    be = ScalarType("uint32", 4, "big")
    assert le != be
    assert le.with_endian("big") == be
    assert le.with_endian("little") is le


def test_signed_ranges():
    int8 = ScalarType("int8", 1, "little", signed=True)
    assert int8.min_value == -128
    assert int8.max_value == 127
    assert int8.pack(-1) == b"\xff"
    with pytest.raises(RangeError, match="int8"):
        int8.pack(128)


def test_unsigned_rejects_negative_and_non_integers():
    uint16 = ScalarType("uint16", 2, "little")
    with pytest.raises(RangeError) as excinfo:
        uint16.pack(-1)
    assert excinfo.value.type_name == "uint16"
    assert excinfo.value.value == -1
    with pytest.raises(RangeError):
        uint16.pack(True)
    with pytest.raises(RangeError):
        uint16.pack("1")


def test_floats():
    double = ScalarType("float64", 8, "little", floating=True)
    assert double.is_float and double.is_signed
    assert double.pack(1.5) == struct.pack("<d", 1.5)
    assert double.unpack(struct.pack("<d", -2.25)) == -2.25
    assert double.uninitialized_value() == 0.0

    single = ScalarType("float32", 4, "big", floating=True)
    with pytest.raises(RangeError, match="float32"):
        single.pack(1e300)


def test_unpack_needs_exact_size():
    with pytest.raises(ParseError):
        ScalarType("uint32", 4, "little").unpack(b"\x00\x00")


def test_arrays():
    uint16 = ScalarType("uint16", 2, "big")
    assert uint16.pack_array([1, 2]) == b"\x00\x01\x00\x02"
    assert uint16.unpack_array(b"\x00\x01\x00\x02") == [1, 2]
    with pytest.raises(ParseError):
        uint16.unpack_array(b"\x00\x01\x00")


def test_invalid_descriptors():
    with pytest.raises(ConfigurationError):
        ScalarType("uint24", 3, "little")
    with pytest.raises(ConfigurationError):
        ScalarType("half", 2, "little", floating=True)
    with pytest.raises(ConfigurationError, match="endian"):
        ScalarType("uint8", 1, "middle")
