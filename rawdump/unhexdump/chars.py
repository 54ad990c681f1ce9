"""Character tables for od/hexdump character dumps."""

import string

# Printable, non-space ASCII characters
VISIBLE_CHARS: dict[str, int] = {
    ch: ord(ch) for ch in string.printable if not ch.isspace()
}

# Backslash escapes printed by `od -c` and `hexdump -c`
ESCAPED_CHARS: dict[str, int] = {
    "\\0": 0x00,
    "\\a": 0x07,
    "\\b": 0x08,
    "\\t": 0x09,
    "\\n": 0x0A,
    "\\v": 0x0B,
    "\\f": 0x0C,
    "\\r": 0x0D,
    " ": 0x20,
    **VISIBLE_CHARS,
}

# Control-character names printed by `od -a`
NAMED_CHARS: dict[str, int] = {
    "nul": 0x00,
    "soh": 0x01,
    "stx": 0x02,
    "etx": 0x03,
    "eot": 0x04,
    "enq": 0x05,
    "ack": 0x06,
    "bel": 0x07,
    "bs": 0x08,
    "ht": 0x09,
    "nl": 0x0A,
    "vt": 0x0B,
    "ff": 0x0C,
    "cr": 0x0D,
    "so": 0x0E,
    "si": 0x0F,
    "dle": 0x10,
    "dc1": 0x11,
    "dc2": 0x12,
    "dc3": 0x13,
    "dc4": 0x14,
    "nak": 0x15,
    "syn": 0x16,
    "etb": 0x17,
    "can": 0x18,
    "em": 0x19,
    "sub": 0x1A,
    "esc": 0x1B,
    "fs": 0x1C,
    "gs": 0x1D,
    "rs": 0x1E,
    "us": 0x1F,
    "sp": 0x20,
    "del": 0x7F,
    **VISIBLE_CHARS,
}

CHAR_TABLES: dict[str, dict[str, int]] = {
    "escaped": ESCAPED_CHARS,
    "named": NAMED_CHARS,
}

# Single-byte mnemonics recognised inside numeric dumps
MNEMONICS: dict[str, int] = {**NAMED_CHARS, **ESCAPED_CHARS}
del MNEMONICS[" "]


def render_char(byte: int, table: str) -> str:
    """Render one byte the way od/hexdump print it in a character dump."""
    names = _REVERSE_TABLES[table]
    if byte in names:
        return names[byte]
    return f"{byte:03o}"


def _reverse(table: dict[str, int]) -> dict[int, str]:
    reverse: dict[int, str] = {}
    for name, byte in table.items():
        reverse.setdefault(byte, name)
    return reverse


_REVERSE_TABLES: dict[str, dict[int, str]] = {
    name: _reverse(table) for name, table in CHAR_TABLES.items()
}
