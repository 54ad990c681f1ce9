"""Struct members, default-value policies and a minimal typed Struct."""

import copy
import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, Sequence

from ..errors import ConfigurationError, ParseError, RangeError
from .arch import Arch, ArchTable, platform
from .scalar import ScalarType

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TypeSignature:
    """A scalar type name, optionally with a fixed count or a range of counts."""

    type_name: str
    count: int | None = None  # fixed-size array
    counts: range | None = None  # variable-length array

    @classmethod
    def parse(cls, signature: Any) -> "TypeSignature":
        """Parse `"uint32"`, `("uint8", 16)` or `("uint8", range(0, 256))`."""
        if isinstance(signature, TypeSignature):
            return signature
        if isinstance(signature, str):
            return cls(signature)
        if isinstance(signature, tuple) and len(signature) == 2:
            type_name, length = signature
            if isinstance(type_name, str):
                if isinstance(length, int) and not isinstance(length, bool):
                    if length <= 0:
                        raise ConfigurationError(
                            f"Array length must be positive: {signature!r}"
                        )
                    return cls(type_name, count=length)
                if isinstance(length, range):
                    if length.step != 1 or length.start < 0 or len(length) == 0:
                        raise ConfigurationError(
                            f"Count range must be a non-empty, non-negative, step-1 range: {signature!r}"
                        )
                    return cls(type_name, counts=length)
        raise ConfigurationError(
            f"Invalid type signature: {signature!r} "
            "(expected a type name, (name, count) or (name, range))"
        )

    @property
    def is_array(self) -> bool:
        return self.count is not None

    @property
    def is_variable(self) -> bool:
        return self.counts is not None

    @property
    def min_count(self) -> int:
        """Element count of the fixed part (variable arrays at their minimum)."""
        if self.count is not None:
            return self.count
        if self.counts is not None:
            return self.counts.start
        return 1

    def resolve(self, table: ArchTable) -> ScalarType:
        """Resolve the element type through an architecture table."""
        return table.lookup(self.type_name)

    def uninitialized_value(self, table: ArchTable) -> Any:
        zero = self.resolve(table).uninitialized_value()
        if self.count is not None:
            return [zero] * self.count
        if self.counts is not None:
            return [zero] * self.counts.start
        return zero

    def __str__(self) -> str:
        if self.count is not None:
            return f"{self.type_name}[{self.count}]"
        if self.counts is not None:
            return f"{self.type_name}[{self.counts.start}..{self.counts.stop - 1}]"
        return self.type_name


class DefaultKind(Enum):
    STATIC = "static"
    FACTORY = "factory"
    STRUCT_FACTORY = "struct_factory"


def _required_positional(func: Callable) -> int:
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        # builtins without an introspectable signature, e.g. some C types
        return 0
    return sum(
        1
        for p in sig.parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
        and p.default is p.empty
    )


@dataclass(frozen=True)
class DefaultPolicy:
    """How a member's default value is produced for each new struct instance."""

    kind: DefaultKind
    value: Any

    @classmethod
    def of(cls, default: Any) -> "DefaultPolicy":
        """Classify a static value or generator into a policy."""
        if isinstance(default, DefaultPolicy):
            return default
        if not callable(default):
            return cls(DefaultKind.STATIC, default)
        arity = _required_positional(default)
        if arity == 0:
            return cls(DefaultKind.FACTORY, default)
        if arity == 1:
            return cls(DefaultKind.STRUCT_FACTORY, default)
        raise ConfigurationError(
            f"Default generator {default!r} must take zero arguments or the owning struct, "
            f"takes {arity}"
        )

    def evaluate(self, owner: Any) -> Any:
        """Produce a fresh default value; generator errors propagate untouched."""
        if self.kind is DefaultKind.FACTORY:
            return self.value()
        if self.kind is DefaultKind.STRUCT_FACTORY:
            return self.value(owner)
        return copy.deepcopy(self.value)


NO_DEFAULT = object()


@dataclass
class Member:
    """A named struct field: type signature plus default-value policy."""

    name: str
    type_signature: Any
    default: Any = NO_DEFAULT

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.isidentifier():
            raise ConfigurationError(f"Invalid member name: {self.name!r}")
        self.type_signature = TypeSignature.parse(self.type_signature)
        if self.default is not NO_DEFAULT:
            self.default = DefaultPolicy.of(self.default)

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT

    def default_value(self, owner: Any, table: ArchTable | None = None) -> Any:
        """Compute this member's default for one struct instance."""
        if self.has_default:
            return self.default.evaluate(owner)
        if table is None:
            table = getattr(owner, "_table", None) or platform()
        return self.type_signature.uninitialized_value(table)


def _to_member(entry: Any) -> Member:
    if isinstance(entry, Member):
        return entry
    if isinstance(entry, tuple) and len(entry) in (2, 3):
        return Member(*entry)
    raise ConfigurationError(
        f"Invalid layout entry: {entry!r} (expected Member or (name, signature[, default]))"
    )


def _align(offset: int, alignment: int) -> int:
    return offset + (alignment - offset % alignment) % alignment


class Struct:
    """Typed view over packed bytes, declared with a `layout` of members.

        class Header(Struct):
            arch = "x86_64"
            layout = [
                ("magic", "uint32", 0xFEEDFACE),
                ("length", "ulong"),
                ("payload", ("uint8", range(0, 256)), list),
            ]

    Field types resolve through the architecture table selected by `arch`
    (or `endian`, or the host's table when neither is set).

    With `padding` (the default) each member starts at a multiple of its
    element type's alignment and a struct without a variable-length member
    is padded to a multiple of its largest alignment, as a C compiler lays
    it out. Set `padding = False` for a packed layout.
    """

    arch: ClassVar["str | Arch | None"] = None
    endian: ClassVar[str | None] = None
    padding: ClassVar[bool] = True
    layout: ClassVar[Sequence[Any]] = ()

    _members: ClassVar[tuple[Member, ...]] = ()
    _offsets: ClassVar[tuple[int, ...]] = ()
    _size: ClassVar[int] = 0
    _table: ClassVar[ArchTable]

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._table = platform(arch=cls.arch, endian=cls.endian)
        members = tuple(_to_member(entry) for entry in cls.layout)

        seen = set()
        offsets = []
        offset = 0
        max_alignment = 1
        for index, member in enumerate(members):
            if member.name in seen:
                raise ConfigurationError(f"Duplicate member {member.name!r} in {cls.__name__}")
            if hasattr(Struct, member.name):
                raise ConfigurationError(
                    f"Member {member.name!r} in {cls.__name__} shadows a Struct attribute"
                )
            sig = member.type_signature
            if sig.is_variable and index != len(members) - 1:
                raise ConfigurationError(
                    f"Variable-length member {member.name!r} in {cls.__name__} must be last"
                )
            # fails early on unknown type names
            elem = sig.resolve(cls._table)
            if cls.padding:
                offset = _align(offset, elem.alignment)
                max_alignment = max(max_alignment, elem.alignment)
            offsets.append(offset)
            offset += elem.size * sig.min_count
            seen.add(member.name)

        if cls.padding and not (members and members[-1].type_signature.is_variable):
            offset = _align(offset, max_alignment)

        cls._members = members
        cls._offsets = tuple(offsets)
        cls._size = offset
        log.debug("Laid out %s: %d members, %d bytes", cls.__name__, len(members), offset)

    def __init__(self, **values):
        unknown = set(values) - {m.name for m in self._members}
        if unknown:
            raise ConfigurationError(
                f"Unknown members for {type(self).__name__}: {', '.join(sorted(unknown))}"
            )
        # defaults are evaluated in layout order, once per instance
        for member in self._members:
            if member.name in values:
                value = values[member.name]
            else:
                value = member.default_value(self, self._table)
            setattr(self, member.name, value)

    @classmethod
    def members(cls) -> tuple[Member, ...]:
        return cls._members

    @classmethod
    def size(cls) -> int:
        """Size in bytes of the fixed part (variable members at their minimum)."""
        return cls._size

    @classmethod
    def offset_of(cls, name: str) -> int:
        """Byte offset of a member within the packed struct."""
        for member, offset in zip(cls._members, cls._offsets):
            if member.name == name:
                return offset
        raise ConfigurationError(f"Unknown member {name!r} in {cls.__name__}")

    def pack(self) -> bytes:
        """Pack every member in layout order, zero-filling alignment gaps."""
        buf = bytearray()
        for member, offset in zip(self._members, self._offsets):
            sig = member.type_signature
            elem = sig.resolve(self._table)
            value = getattr(self, member.name)
            if sig.count is not None:
                if len(value) != sig.count:
                    raise RangeError(str(sig), value)
                chunk = elem.pack_array(value)
            elif sig.counts is not None:
                if len(value) not in sig.counts:
                    raise RangeError(str(sig), value)
                chunk = elem.pack_array(value)
            else:
                chunk = elem.pack(value)
            buf += bytes(offset - len(buf))
            buf += chunk
        if len(buf) < self._size:
            buf += bytes(self._size - len(buf))
        return bytes(buf)

    @classmethod
    def unpack(cls, data: bytes) -> "Struct":
        """Build an instance from the leading bytes of `data`."""
        if len(data) < cls._size:
            raise ParseError(f"{cls.__name__} needs {cls._size} bytes, got {len(data)}")
        values = {}
        end = 0
        for member, offset in zip(cls._members, cls._offsets):
            sig = member.type_signature
            elem = sig.resolve(cls._table)
            if sig.counts is not None:
                available = max(len(data) - offset, 0) // elem.size
                count = min(available, sig.counts.stop - 1)
                if count < sig.counts.start:
                    raise ParseError(
                        f"{cls.__name__}.{member.name} needs at least "
                        f"{sig.counts.start} x {elem.name}, only {available} available"
                    )
            else:
                count = sig.min_count
            end = offset + elem.size * count
            chunk = data[offset:end]
            if sig.is_array or sig.is_variable:
                values[member.name] = elem.unpack_array(chunk)
            else:
                values[member.name] = elem.unpack(chunk)
        log.debug("Unpacked %s from %d of %d bytes", cls.__name__, max(end, cls._size), len(data))
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return {m.name: getattr(self, m.name) for m in self._members}

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={value!r}" for name, value in self.to_dict().items())
        return f"{type(self).__name__}({fields})"
