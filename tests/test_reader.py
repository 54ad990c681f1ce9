"""Tests for the unhexdump convenience entry points."""

import io

import pytest

from rawdump.config import ParserConfig
from rawdump.errors import ConfigurationError
from rawdump.unhexdump.reader import unhexdump, unhexdump_file

OD_TEXT = "0000000 062550 066154 005157\n0000006\n"


def test_string_source():
    assert unhexdump(OD_TEXT, format="od") == b"hello\n"


def test_bytes_source():
    assert unhexdump(OD_TEXT.encode(), format="od") == b"hello\n"


def test_stream_source():
    assert unhexdump(io.StringIO(OD_TEXT), config=ParserConfig(format="od")) == b"hello\n"


def test_file_source(tmp_path):
    path = tmp_path / "dump.txt"
    path.write_text(OD_TEXT)
    assert unhexdump_file(path, format="od") == b"hello\n"


def test_unknown_option_value():
    with pytest.raises(ConfigurationError):
        unhexdump(OD_TEXT, format="bogus")
