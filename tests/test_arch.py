"""Tests for architecture type tables."""

import pytest

from rawdump.errors import ConfigurationError
from rawdump.types.arch import (
    ARCH_DATABASE,
    BIG_ENDIAN,
    NATIVE,
    Arch,
    ArchTable,
    get_all_arches,
    get_arch,
    get_arch_table,
    platform,
    resolve_type,
)


def test_x86_resolves_32_bit_aliases():
    table = Arch.X86.table
    uint32 = table.lookup("uint32")
    assert uint32.size == 4
    assert uint32.is_unsigned
    assert uint32.endian == "little"
    assert table["long"].size == 4
    assert table["machine_word"].size == 4


def test_x86_64_resolves_64_bit_aliases():
    table = Arch.X86_64.table
    assert table["long"].size == 8
    assert table["machine_word"].size == 8
    assert table["pointer"].size == 8


def test_unknown_type_names_arch_and_symbol():
    with pytest.raises(ConfigurationError, match="bogus") as excinfo:
        Arch.X86.table.lookup("bogus")
    assert "x86" in str(excinfo.value)
    with pytest.raises(ConfigurationError, match="bogus"):
        Arch.ARM64_BE.table["bogus"]


@pytest.mark.parametrize("arch", list(Arch))
def test_width_dependent_aliases(arch):
    table = arch.table
    assert table.address_size == arch.address_size
    assert table["long"].size == arch.address_size
    assert table["long"].is_signed
    assert table["ulong"].size == arch.address_size
    assert table["ulong"].is_unsigned
    assert table["pointer"] is table["machine_word"]
    assert all(table[name].endian == arch.endian for name in table)


def test_every_arch_has_parameters():
    assert set(ARCH_DATABASE) == set(Arch)


def test_same_width_different_byte_order():
    assert Arch.X86.table["uint32"] != Arch.PPC.table["uint32"]
    assert Arch.X86.table["uint32"] == Arch.ARM.table["uint32"]


def test_aliases():
    assert get_arch("amd64") is Arch.X86_64
    assert get_arch("AArch64") is Arch.ARM64
    assert get_arch("mipsel").endian == "little"
    assert Arch.MIPS.endian == "big"
    assert get_arch(Arch.PPC64) is Arch.PPC64
    assert "x86_64" in get_all_arches()


def test_unknown_arch():
    with pytest.raises(ConfigurationError, match="Unknown architecture"):
        get_arch("vax")


def test_tables_are_shared_and_read_only():
    assert get_arch_table("x86") is Arch.X86.table
    table = Arch.X86.table
    with pytest.raises(TypeError):
        table["uint8"] = table["uint16"]


def test_unsupported_address_size():
    with pytest.raises(ConfigurationError, match="address size"):
        ArchTable(2, "little")


def test_platform_selection():
    assert platform() is NATIVE
    assert platform(endian="network") is BIG_ENDIAN
    assert platform(arch="arm64_be").endian == "big"
    assert platform(arch="x86", endian="big").endian == "little"
    with pytest.raises(ConfigurationError):
        platform(endian="middle")


def test_resolve_type_suffixes():
    assert resolve_type("uint32_be").endian == "big"
    assert resolve_type("int16_le").endian == "little"
    assert resolve_type("int16_le").is_signed
    assert resolve_type("uint64_net").endian == "big"
    assert resolve_type("uint8") is NATIVE["uint8"]
    with pytest.raises(ConfigurationError):
        resolve_type("bogus_le")
