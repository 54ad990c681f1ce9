"""Architecture- and endianness-aware scalar types and struct members."""

from .scalar import ScalarType
from .arch import (
    ARCH_ALIASES,
    ARCH_DATABASE,
    BIG_ENDIAN,
    LITTLE_ENDIAN,
    NATIVE,
    NETWORK,
    Arch,
    ArchTable,
    base_types,
    get_all_arches,
    get_arch,
    get_arch_table,
    get_endian_table,
    platform,
    resolve_type,
)
from .struct import (
    DefaultKind,
    DefaultPolicy,
    Member,
    Struct,
    TypeSignature,
)

__all__ = [
    # Scalar
    "ScalarType",
    # Arch
    "ARCH_ALIASES",
    "ARCH_DATABASE",
    "BIG_ENDIAN",
    "LITTLE_ENDIAN",
    "NATIVE",
    "NETWORK",
    "Arch",
    "ArchTable",
    "base_types",
    "get_all_arches",
    "get_arch",
    "get_arch_table",
    "get_endian_table",
    "platform",
    "resolve_type",
    # Struct
    "DefaultKind",
    "DefaultPolicy",
    "Member",
    "Struct",
    "TypeSignature",
]
