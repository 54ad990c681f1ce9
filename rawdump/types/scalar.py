"""Fixed-width scalar type descriptors."""

import struct
from dataclasses import dataclass, field
from numbers import Real

from ..errors import ConfigurationError, ParseError, RangeError

ENDIANS = ("little", "big")

# struct format characters keyed by (size, signed, float)
_STRUCT_CHARS: dict[tuple[int, bool, bool], str] = {
    (1, False, False): "B",
    (1, True, False): "b",
    (2, False, False): "H",
    (2, True, False): "h",
    (4, False, False): "I",
    (4, True, False): "i",
    (8, False, False): "Q",
    (8, True, False): "q",
    (4, True, True): "f",
    (8, True, True): "d",
}

_ENDIAN_PREFIX = {"little": "<", "big": ">"}


@dataclass(frozen=True)
class ScalarType:
    """An immutable width/signedness/byte-order descriptor for one value kind."""

    name: str
    size: int
    endian: str  # "little" or "big"
    signed: bool = False
    floating: bool = False
    _struct: struct.Struct = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.endian not in ENDIANS:
            raise ConfigurationError(
                f"Unknown endian for type {self.name}: {self.endian!r} "
                f"(expected one of {', '.join(ENDIANS)})"
            )
        if self.floating:
            # floats are always signed
            object.__setattr__(self, "signed", True)
        key = (self.size, self.signed, self.floating)
        if key not in _STRUCT_CHARS:
            kind = "float" if self.floating else "integer"
            raise ConfigurationError(
                f"Unsupported {kind} width for type {self.name}: {self.size} bytes"
            )
        fmt = _ENDIAN_PREFIX[self.endian] + _STRUCT_CHARS[key]
        object.__setattr__(self, "_struct", struct.Struct(fmt))

    @property
    def format(self) -> str:
        """The `struct` format string for this type."""
        return self._struct.format

    @property
    def is_signed(self) -> bool:
        return self.signed

    @property
    def is_unsigned(self) -> bool:
        return not self.signed

    @property
    def is_float(self) -> bool:
        return self.floating

    @property
    def bits(self) -> int:
        return self.size * 8

    @property
    def alignment(self) -> int:
        """Natural alignment in bytes inside a padded struct."""
        return self.size

    @property
    def min_value(self) -> int:
        if self.floating:
            raise TypeError(f"{self.name} is a floating point type")
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        if self.floating:
            raise TypeError(f"{self.name} is a floating point type")
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    def uninitialized_value(self) -> int | float:
        return 0.0 if self.floating else 0

    def with_endian(self, endian: str) -> "ScalarType":
        """Same semantics, different byte order."""
        if endian == self.endian:
            return self
        return ScalarType(self.name, self.size, endian, self.signed, self.floating)

    def check(self, value) -> None:
        """Raise RangeError unless value fits this type."""
        if self.floating:
            if isinstance(value, bool) or not isinstance(value, Real):
                raise RangeError(self.name, value)
            return
        if isinstance(value, bool) or not isinstance(value, int):
            raise RangeError(self.name, value)
        if not self.min_value <= value <= self.max_value:
            raise RangeError(self.name, value)

    def pack(self, value) -> bytes:
        """Pack a single value into exactly `size` bytes."""
        self.check(value)
        try:
            return self._struct.pack(value)
        except (struct.error, OverflowError) as e:
            # float32 overflow
            raise RangeError(self.name, value) from e

    def unpack(self, data: bytes) -> int | float:
        """Unpack exactly `size` bytes into a value."""
        if len(data) != self.size:
            raise ParseError(
                f"{self.name} needs {self.size} bytes, got {len(data)}"
            )
        return self._struct.unpack(data)[0]

    def pack_array(self, values) -> bytes:
        return b"".join(self.pack(value) for value in values)

    def unpack_array(self, data: bytes) -> list[int | float]:
        if len(data) % self.size:
            raise ParseError(
                f"{len(data)} bytes is not a whole number of {self.name} values"
            )
        return [value for (value,) in self._struct.iter_unpack(data)]
