"""Tests for the dump generator and its agreement with the parser."""

import pytest

from rawdump.hexdump import digits_for, format_number, hexdump
from rawdump.unhexdump.parser import Parser

DATA = bytes(range(256)) + bytes(64) + b"tail"

OPTIONS = [
    {},
    {"format": "hexdump"},
    {"format": "od"},
    {"format": "od", "encoding": "octal_bytes"},
    {"format": "od", "encoding": "hex_ints"},
    {"format": "od", "encoding": "decimal_ints"},
    {"format": "hexdump", "encoding": "hex_quads"},
    {"format": "hexdump", "endian": "big"},
    {"encoding": "decimal_bytes"},
    {"encoding": "binary"},
    {"format": "od", "encoding": "chars"},
    {"format": "od", "encoding": "named_chars"},
    {"segment": 8},
]


@pytest.mark.parametrize("options", OPTIONS, ids=lambda o: "-".join(map(str, o.values())) or "default")
@pytest.mark.parametrize("squeeze", [True, False])
def test_parser_reads_back_generated_dumps(options, squeeze):
    text = hexdump(DATA, squeeze=squeeze, **options)
    assert Parser(**options).parse(text.splitlines(keepends=True)) == DATA


def test_od_output():
    assert hexdump(b"hello\n", format="od") == "0000000 062550 066154 005157\n0000006\n"


def test_canonical_output():
    lines = hexdump(b"hello\n").splitlines()
    assert lines[0].startswith("00000000  68 65 6c 6c 6f 0a ")
    assert lines[0].endswith(" |hello.|")
    assert lines[1] == "00000006"


def test_squeeze():
    lines = hexdump(b"A" * 48, format="od", encoding="hex_bytes").splitlines()
    assert lines == ["0000000 " + " ".join(["41"] * 16), "*", "0000060"]
    unsqueezed = hexdump(b"A" * 48, format="od", encoding="hex_bytes", squeeze=False)
    assert "*" not in unsqueezed.splitlines()
    assert len(unsqueezed.splitlines()) == 4


def test_empty_input():
    assert hexdump(b"") == "00000000\n"
    assert Parser().parse(["00000000\n"]) == b""


def test_number_formatting():
    assert digits_for(8, 2) == 6
    assert digits_for(16, 1) == 2
    assert digits_for(10, 4) == 10
    assert digits_for(2, 1) == 8
    assert format_number(10, 16, 4) == "000a"
    assert format_number(10, 10, 4) == "  10"
    assert format_number(5, 2, 4) == "0101"
