"""rawdump - typed binary buffers and od/hexdump reconstruction."""

from .errors import ConfigurationError, ParseError, RangeError, RawdumpError
from .config import (
    ENCODING_DATABASE,
    FORMAT_DATABASE,
    ParserConfig,
    config_from_yaml,
    get_all_encodings,
    get_encoding,
    get_format_defaults,
    load_config,
)
from .hexdump import hexdump
from .types import (
    Arch,
    ArchTable,
    DefaultPolicy,
    Member,
    ScalarType,
    Struct,
    TypeSignature,
    get_arch,
    get_arch_table,
    platform,
    resolve_type,
)
from .unhexdump import Parser, unhexdump, unhexdump_file

__version__ = "0.1.0"

__all__ = [
    # Errors
    "ConfigurationError",
    "ParseError",
    "RangeError",
    "RawdumpError",
    # Config
    "ENCODING_DATABASE",
    "FORMAT_DATABASE",
    "ParserConfig",
    "config_from_yaml",
    "get_all_encodings",
    "get_encoding",
    "get_format_defaults",
    "load_config",
    # Types
    "Arch",
    "ArchTable",
    "DefaultPolicy",
    "Member",
    "ScalarType",
    "Struct",
    "TypeSignature",
    "get_arch",
    "get_arch_table",
    "platform",
    "resolve_type",
    # Dumps
    "Parser",
    "hexdump",
    "unhexdump",
    "unhexdump_file",
]
