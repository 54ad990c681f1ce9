"""Tests for parser configuration and YAML loading."""

import pytest

from rawdump.config import (
    ParserConfig,
    config_from_dict,
    config_from_yaml,
    get_all_encodings,
    get_encoding,
    get_format_defaults,
    load_config,
)
from rawdump.errors import ConfigurationError


def test_defaults():
    resolved = ParserConfig().resolve()
    assert resolved == {"address_base": 16, "base": 16, "word_size": 1, "chars": None}


def test_format_and_encoding_lookups():
    assert get_format_defaults("od") == {"address_base": 8, "base": 8, "word_size": 2}
    assert get_encoding("hex_shorts") == {"base": 16, "word_size": 2}
    assert "named_chars" in get_all_encodings()
    with pytest.raises(ConfigurationError, match="od"):
        get_format_defaults("xxd")
    with pytest.raises(ConfigurationError, match="hex_bytes"):
        get_encoding("hex_nibbles")


def test_char_encoding_resolution():
    resolved = ParserConfig(format="od", encoding="chars").resolve()
    assert resolved["chars"] == "escaped"
    assert resolved["word_size"] == 1


def test_yaml_top_level(tmp_path):
    path = tmp_path / "parser.yaml"
    path.write_text("format: od\nencoding: hex_bytes\nsegment: 8\n")
    config = config_from_yaml(path)
    assert config == ParserConfig(format="od", encoding="hex_bytes", segment=8)


def test_yaml_nested_section(tmp_path):
    path = tmp_path / "parser.yaml"
    path.write_text("unhexdump:\n  endian: big\n  address_base: 10\n")
    config = config_from_yaml(path)
    assert config.endian == "big"
    assert config.address_base == 10


def test_yaml_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == {}
    assert config_from_yaml(path) == ParserConfig()


def test_unknown_keys():
    with pytest.raises(ConfigurationError, match="colour"):
        config_from_dict({"colour": "blue"})


def test_non_mapping():
    with pytest.raises(ConfigurationError):
        config_from_dict(["od"])


@pytest.mark.parametrize(
    "settings",
    [{"segment": "abc"}, {"segment": -1}, {"endian": "middle"}, {"address_base": 7}],
)
def test_invalid_values(settings):
    with pytest.raises(ConfigurationError):
        config_from_dict(settings)
