"""Architecture- and endianness-aware scalar type tables."""

import logging
import struct
import sys
from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from typing import Iterator, Mapping

from ..errors import ConfigurationError
from .scalar import ENDIANS, ScalarType

log = logging.getLogger(__name__)

ADDRESS_SIZES = (4, 8)

# Closed list of base primitives: name -> (size, signed, floating)
BASE_PRIMITIVES: dict[str, tuple[int, bool, bool]] = {
    "int8": (1, True, False),
    "int16": (2, True, False),
    "int32": (4, True, False),
    "int64": (8, True, False),
    "uint8": (1, False, False),
    "uint16": (2, False, False),
    "uint32": (4, False, False),
    "uint64": (8, False, False),
    "float32": (4, True, True),
    "float64": (8, True, True),
}

# Fixed-width aliases: alias -> base primitive
FIXED_ALIASES: dict[str, str] = {
    "byte": "uint8",
    "char": "int8",
    "uchar": "uint8",
    "short": "int16",
    "ushort": "uint16",
    "int": "int32",
    "uint": "uint32",
    "long_long": "int64",
    "ulong_long": "uint64",
    "word": "uint16",
    "dword": "uint32",
    "qword": "uint64",
    "float": "float32",
    "double": "float64",
}

# Width-dependent aliases: alias -> {address_size: base primitive}
ADDRESS_ALIASES: dict[str, dict[int, str]] = {
    "long": {4: "int32", 8: "int64"},
    "ulong": {4: "uint32", 8: "uint64"},
    "machine_word": {4: "uint32", 8: "uint64"},
    "pointer": {4: "uint32", 8: "uint64"},
}


@lru_cache(maxsize=None)
def base_types(endian: str) -> Mapping[str, ScalarType]:
    """Width-keyed base scalar types (plus fixed aliases) for one byte order."""
    if endian not in ENDIANS:
        raise ConfigurationError(
            f"Unknown endian: {endian!r} (expected one of {', '.join(ENDIANS)})"
        )
    types = {
        name: ScalarType(name, size, endian, signed, floating)
        for name, (size, signed, floating) in BASE_PRIMITIVES.items()
    }
    for alias, target in FIXED_ALIASES.items():
        types[alias] = types[target]
    return MappingProxyType(types)


class ArchTable(Mapping):
    """Name -> ScalarType lookup for one (address_size, endian) pair.

    Every architecture is the same construction applied to different
    parameters: the base types for the byte order, with `long`, `ulong`,
    `machine_word` and `pointer` overridden for the address width.
    """

    def __init__(self, address_size: int, endian: str, name: str | None = None):
        if address_size not in ADDRESS_SIZES:
            raise ConfigurationError(
                f"Unsupported address size: {address_size} "
                f"(expected one of {', '.join(map(str, ADDRESS_SIZES))})"
            )
        self.address_size = address_size
        self.endian = endian
        self.name = name or f"{address_size * 8}-bit {endian}-endian"

        types = dict(base_types(endian))
        for alias, widths in ADDRESS_ALIASES.items():
            types[alias] = types[widths[address_size]]
        # pointer and machine_word are the same type object
        types["pointer"] = types["machine_word"]

        self._types = MappingProxyType(types)
        log.debug("Built type table %s (%d names)", self.name, len(types))

    def lookup(self, name: str) -> ScalarType:
        """Resolve a type name, failing with the architecture and symbol."""
        try:
            return self._types[name]
        except KeyError:
            raise ConfigurationError(
                f"Unknown type {name!r} for architecture {self.name}"
            ) from None

    def __getitem__(self, name: str) -> ScalarType:
        return self.lookup(name)

    def __contains__(self, name) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def names(self) -> list[str]:
        return sorted(self._types)

    def __repr__(self) -> str:
        return f"ArchTable({self.name!r}, address_size={self.address_size}, endian={self.endian!r})"


class Arch(Enum):
    """Known architectures; parameters live in ARCH_DATABASE."""

    X86 = "x86"
    X86_64 = "x86_64"
    ARM = "arm"
    ARM_BE = "arm_be"
    ARM64 = "arm64"
    ARM64_BE = "arm64_be"
    MIPS = "mips"
    MIPS_LE = "mips_le"
    MIPS64 = "mips64"
    MIPS64_LE = "mips64_le"
    PPC = "ppc"
    PPC64 = "ppc64"
    PPC64_LE = "ppc64_le"

    @property
    def address_size(self) -> int:
        return ARCH_DATABASE[self][0]

    @property
    def endian(self) -> str:
        return ARCH_DATABASE[self][1]

    @property
    def table(self) -> ArchTable:
        """The shared, read-only type table for this architecture."""
        return _arch_table(self)


# Architecture properties: (address_size, endian)
ARCH_DATABASE: dict[Arch, tuple[int, str]] = {
    Arch.X86: (4, "little"),
    Arch.X86_64: (8, "little"),
    Arch.ARM: (4, "little"),
    Arch.ARM_BE: (4, "big"),
    Arch.ARM64: (8, "little"),
    Arch.ARM64_BE: (8, "big"),
    # MIPS and PowerPC default to big-endian
    Arch.MIPS: (4, "big"),
    Arch.MIPS_LE: (4, "little"),
    Arch.MIPS64: (8, "big"),
    Arch.MIPS64_LE: (8, "little"),
    Arch.PPC: (4, "big"),
    Arch.PPC64: (8, "big"),
    Arch.PPC64_LE: (8, "little"),
}


@lru_cache(maxsize=None)
def _arch_table(arch: Arch) -> ArchTable:
    address_size, endian = ARCH_DATABASE[arch]
    return ArchTable(address_size, endian, name=arch.value)


# Alternate spellings -> Arch
ARCH_ALIASES: dict[str, Arch] = {
    "x86": Arch.X86,
    "i386": Arch.X86,
    "i686": Arch.X86,
    "x86_64": Arch.X86_64,
    "x86-64": Arch.X86_64,
    "amd64": Arch.X86_64,
    "ia64": Arch.X86_64,
    "arm": Arch.ARM,
    "arm_le": Arch.ARM,
    "arm_be": Arch.ARM_BE,
    "arm64": Arch.ARM64,
    "arm64_le": Arch.ARM64,
    "aarch64": Arch.ARM64,
    "arm64_be": Arch.ARM64_BE,
    "aarch64_be": Arch.ARM64_BE,
    "mips": Arch.MIPS,
    "mips_be": Arch.MIPS,
    "mips_le": Arch.MIPS_LE,
    "mipsel": Arch.MIPS_LE,
    "mips64": Arch.MIPS64,
    "mips64_be": Arch.MIPS64,
    "mips64_le": Arch.MIPS64_LE,
    "mips64el": Arch.MIPS64_LE,
    "ppc": Arch.PPC,
    "powerpc": Arch.PPC,
    "ppc64": Arch.PPC64,
    "powerpc64": Arch.PPC64,
    "ppc64_le": Arch.PPC64_LE,
    "ppc64le": Arch.PPC64_LE,
    "powerpc64le": Arch.PPC64_LE,
}


def get_arch(name: "str | Arch") -> Arch:
    """Get an architecture by name or alias."""
    if isinstance(name, Arch):
        return name
    key = name.lower()
    if key not in ARCH_ALIASES:
        raise ConfigurationError(
            f"Unknown architecture: {name!r} "
            f"(expected one of {', '.join(sorted(ARCH_ALIASES))})"
        )
    return ARCH_ALIASES[key]


def get_arch_table(name: "str | Arch") -> ArchTable:
    """Get the type table for an architecture, named after it."""
    return get_arch(name).table


def get_all_arches() -> list[str]:
    """Get list of all known architecture names and aliases."""
    return sorted(ARCH_ALIASES)


# Endian-only tables, sized for the host's pointer width
NATIVE_ADDRESS_SIZE = struct.calcsize("P")
NATIVE_ENDIAN = sys.byteorder

LITTLE_ENDIAN = ArchTable(NATIVE_ADDRESS_SIZE, "little", name="little-endian")
BIG_ENDIAN = ArchTable(NATIVE_ADDRESS_SIZE, "big", name="big-endian")
NETWORK = BIG_ENDIAN
NATIVE = LITTLE_ENDIAN if NATIVE_ENDIAN == "little" else BIG_ENDIAN

ENDIAN_TABLES: dict[str, ArchTable] = {
    "little": LITTLE_ENDIAN,
    "big": BIG_ENDIAN,
    "network": NETWORK,
    "net": NETWORK,
}

# Suffixes accepted by resolve_type(), e.g. "uint32_le"
_ENDIAN_SUFFIXES: dict[str, str] = {
    "_le": "little",
    "_be": "big",
    "_ne": "big",
    "_net": "big",
}


def get_endian_table(endian: str | None) -> ArchTable:
    """Get the type table for a byte order (None for the host's)."""
    if endian is None:
        return NATIVE
    if endian not in ENDIAN_TABLES:
        raise ConfigurationError(
            f"Unknown endian: {endian!r} "
            f"(expected one of {', '.join(ENDIAN_TABLES)})"
        )
    return ENDIAN_TABLES[endian]


def normalize_endian(endian: str) -> str:
    """Map endian spellings ("network", "net") to "little"/"big"."""
    return get_endian_table(endian).endian


def platform(arch: "str | Arch | None" = None, endian: str | None = None) -> ArchTable:
    """Pick a type table by architecture, else by byte order, else native."""
    if arch is not None:
        return get_arch_table(arch)
    return get_endian_table(endian)


def resolve_type(name: str) -> ScalarType:
    """Resolve a type name, honouring `_le`/`_be`/`_net` suffixes."""
    for suffix, endian in _ENDIAN_SUFFIXES.items():
        if name.endswith(suffix) and len(name) > len(suffix):
            return ENDIAN_TABLES[endian].lookup(name[: -len(suffix)])
    return NATIVE.lookup(name)
