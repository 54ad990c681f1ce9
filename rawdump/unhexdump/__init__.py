"""Reconstruct raw bytes from od/hexdump text."""

from .chars import ESCAPED_CHARS, MNEMONICS, NAMED_CHARS
from .parser import Parser, ParseState
from .reader import unhexdump, unhexdump_file

__all__ = [
    # Chars
    "ESCAPED_CHARS",
    "MNEMONICS",
    "NAMED_CHARS",
    # Parser
    "Parser",
    "ParseState",
    # Reader
    "unhexdump",
    "unhexdump_file",
]
