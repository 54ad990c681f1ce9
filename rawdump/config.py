"""Parser configuration: format/encoding databases and YAML loading."""

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigurationError

log = logging.getLogger(__name__)

DEFAULT_SEGMENT = 16

# Format defaults: address base, numeric base, word size
FORMAT_DATABASE: dict[str | None, dict[str, int]] = {
    "od": {"address_base": 8, "base": 8, "word_size": 2},
    "hexdump": {"address_base": 16, "base": 16, "word_size": 2},
    None: {"address_base": 16, "base": 16, "word_size": 1},
}

# Encoding tokens: numeric base, and word size when the token carries one.
# "chars"/"named_chars" decode od -c / od -a character dumps.
ENCODING_DATABASE: dict[str, dict[str, Any]] = {
    "binary": {"base": 2, "word_size": 1},
    "octal": {"base": 8, "word_size": None},
    "octal_bytes": {"base": 8, "word_size": 1},
    "octal_shorts": {"base": 8, "word_size": 2},
    "octal_ints": {"base": 8, "word_size": 4},
    "octal_quads": {"base": 8, "word_size": 8},
    "decimal": {"base": 10, "word_size": None},
    "decimal_bytes": {"base": 10, "word_size": 1},
    "decimal_shorts": {"base": 10, "word_size": 2},
    "decimal_ints": {"base": 10, "word_size": 4},
    "decimal_quads": {"base": 10, "word_size": 8},
    "hex": {"base": 16, "word_size": None},
    "hex_bytes": {"base": 16, "word_size": 1},
    "hex_shorts": {"base": 16, "word_size": 2},
    "hex_ints": {"base": 16, "word_size": 4},
    "hex_quads": {"base": 16, "word_size": 8},
    "chars": {"base": 8, "word_size": 1, "chars": "escaped"},
    "named_chars": {"base": 8, "word_size": 1, "chars": "named"},
}

ENDIAN_NAMES = ("little", "big", "network")
ADDRESS_BASES = (2, 8, 10, 16)


@dataclass
class ParserConfig:
    format: str | None = None  # "od", "hexdump" or None
    encoding: str | None = None
    segment: int = DEFAULT_SEGMENT
    endian: str = "little"
    address_base: int | None = None  # None = implied by format

    def validate(self) -> "ParserConfig":
        """Raise ConfigurationError on any unsupported setting."""
        get_format_defaults(self.format)
        if self.encoding is not None:
            get_encoding(self.encoding)
        if isinstance(self.segment, bool) or not isinstance(self.segment, int) or self.segment <= 0:
            raise ConfigurationError(f"segment must be a positive integer, was {self.segment!r}")
        if self.endian not in ENDIAN_NAMES:
            raise ConfigurationError(
                f"Unknown endian: {self.endian!r} (expected one of {', '.join(ENDIAN_NAMES)})"
            )
        if self.address_base is not None and self.address_base not in ADDRESS_BASES:
            raise ConfigurationError(
                f"Unsupported address base: {self.address_base!r} "
                f"(expected one of {', '.join(map(str, ADDRESS_BASES))})"
            )
        return self

    def resolve(self) -> dict[str, Any]:
        """Resolve address base, numeric base, word size and char table."""
        self.validate()
        resolved = dict(get_format_defaults(self.format))
        resolved["chars"] = None
        if self.encoding is not None:
            encoding = get_encoding(self.encoding)
            resolved["base"] = encoding["base"]
            if encoding["word_size"] is not None:
                resolved["word_size"] = encoding["word_size"]
            resolved["chars"] = encoding.get("chars")
        if self.address_base is not None:
            resolved["address_base"] = self.address_base
        return resolved

    def to_kwargs(self) -> dict[str, Any]:
        return asdict(self)


def get_format_defaults(format: str | None) -> dict[str, int]:
    """Get the address base, numeric base and word size implied by a format."""
    if format not in FORMAT_DATABASE:
        allowed = ", ".join(repr(f) for f in FORMAT_DATABASE)
        raise ConfigurationError(f"Unknown format: {format!r} (expected one of {allowed})")
    return FORMAT_DATABASE[format]


def get_encoding(name: str) -> dict[str, Any]:
    """Get the numeric base and word size of an encoding token."""
    if name not in ENCODING_DATABASE:
        raise ConfigurationError(
            f"Unknown encoding: {name!r} (expected one of {', '.join(ENCODING_DATABASE)})"
        )
    return ENCODING_DATABASE[name]


def get_all_encodings() -> list[str]:
    """Get list of all known encoding tokens."""
    return list(ENCODING_DATABASE.keys())


def load_config(config_path: Path) -> dict[str, Any]:
    """Load configuration from YAML file."""
    with open(config_path) as f:
        return yaml.safe_load(f) or {}


def config_from_dict(data: dict[str, Any]) -> ParserConfig:
    """Build a validated ParserConfig, rejecting unknown keys."""
    if not isinstance(data, dict):
        raise ConfigurationError(f"Parser configuration must be a mapping, got {type(data).__name__}")
    known = {f.name for f in fields(ParserConfig)}
    unknown = set(data) - known
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration keys: {', '.join(sorted(unknown))} "
            f"(expected some of {', '.join(sorted(known))})"
        )
    return ParserConfig(**data).validate()


def config_from_yaml(config_path: Path) -> ParserConfig:
    """Load a ParserConfig from a YAML file.

    The parser settings may sit at the top level or under an `unhexdump:` key.
    """
    data = load_config(config_path)
    if isinstance(data, dict) and "unhexdump" in data:
        data = data["unhexdump"] or {}
    log.debug("Loaded parser configuration from %s: %s", config_path, data)
    return config_from_dict(data)
