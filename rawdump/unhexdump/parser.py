"""Parser that reconstructs raw bytes from od/hexdump text output."""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Iterator

from ..config import DEFAULT_SEGMENT, ParserConfig
from ..errors import ParseError
from ..types.arch import get_endian_table, normalize_endian
from ..types.scalar import ScalarType
from .chars import CHAR_TABLES, MNEMONICS

log = logging.getLogger(__name__)

# GNU hexdump -C ASCII column
PANEL_RE = re.compile(r"\s+\|.+\|\s*$")

# od -c prints a space character as a blank four-column field
CHAR_TOKEN_RE = re.compile(r"   ( )|(\S+)")

DIGITS: dict[int, frozenset[str]] = {
    2: frozenset("01"),
    8: frozenset("01234567"),
    10: frozenset("0123456789"),
    16: frozenset("0123456789abcdefABCDEF"),
}

BASE_NAMES = {2: "binary", 8: "octal", 10: "decimal", 16: "hexadecimal"}

UNSIGNED_WORDS = {1: "uint8", 2: "uint16", 4: "uint32", 8: "uint64"}
SIGNED_WORDS = {1: "int8", 2: "int16", 4: "int32", 8: "int64"}


def parse_number(token: str, base: int, signed: bool = False) -> int | None:
    """Parse digits in `base`, or None. Prefixes and underscores are rejected."""
    digits = token
    if signed and token[:1] == "-":
        digits = token[1:]
    if not digits or not set(digits) <= DIGITS[base]:
        return None
    return int(token, base)


@dataclass
class ParseState:
    """Mutable state of one parse call, threaded through the line loop.

    The most recent row is held back until the next address shows where it
    ends, so bytes a line decodes past that address never reach the caller.
    """

    first_addr: int | None = None
    last_addr: int | None = None
    previous_segment: bytes = b""
    repeat_pending: bool = False
    line_number: int = 0
    held: tuple[int, bytes] | None = None
    emitted: int = 0


class Parser:
    """Reconstructs raw bytes from `od` / `hexdump` output.

    `format` selects the address base, numeric base and word size ("od" →
    8/8/2, "hexdump" → 16/16/2, unset → 16/16/1). `encoding` overrides the
    numeric base and/or word size, e.g. "hex_bytes" or "octal_shorts", or
    selects a character dump ("chars" for `od -c`, "named_chars" for
    `od -a`). `segment` caps the bytes decoded per line.

    A Parser keeps no state between calls; each `parse()` owns a fresh
    ParseState.
    """

    def __init__(
        self,
        format: str | None = None,
        encoding: str | None = None,
        segment: int = DEFAULT_SEGMENT,
        endian: str = "little",
        address_base: int | None = None,
    ):
        self.config = ParserConfig(
            format=format,
            encoding=encoding,
            segment=segment,
            endian=endian,
            address_base=address_base,
        )
        resolved = self.config.resolve()

        self.format = format
        self.encoding = encoding
        self.address_base: int = resolved["address_base"]
        self.base: int = resolved["base"]
        self.word_size: int = resolved["word_size"]
        self.segment_length = segment
        self.endian = normalize_endian(endian)

        table = get_endian_table(self.endian)
        self.word_type: ScalarType = table.lookup(UNSIGNED_WORDS[self.word_size])
        self.signed_word_type: ScalarType = table.lookup(SIGNED_WORDS[self.word_size])
        self.chars = CHAR_TABLES[resolved["chars"]] if resolved["chars"] else None

    @classmethod
    def from_config(cls, config: ParserConfig) -> "Parser":
        return cls(**config.to_kwargs())

    def __repr__(self) -> str:
        return (
            f"Parser(format={self.format!r}, encoding={self.encoding!r}, "
            f"segment={self.segment_length}, endian={self.endian!r})"
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse(self, lines: Iterable[str]) -> bytes:
        """Parse dump lines into the original bytes."""
        return b"".join(data for _, data in self._rows(lines, ParseState()))

    def parse_rows(self, lines: Iterable[str]) -> Iterator[tuple[int, bytes]]:
        """Yield `(address, segment)` per decoded row, reconstructed repeats included.

        Each row is trimmed to end at the next address, so the rows join to
        exactly what `parse()` returns.
        """
        return self._rows(lines, ParseState())

    def unpack(self, lines: Iterable[str], type: "ScalarType | str | None" = None) -> list[int | float]:
        """Parse dump lines and reinterpret the bytes as values of `type`.

        `type` is a ScalarType or a name resolved in the parser's byte order;
        it defaults to the unsigned word type. A trailing partial value is
        zero-filled to a whole value.
        """
        if type is None:
            type = self.word_type
        elif isinstance(type, str):
            type = get_endian_table(self.endian).lookup(type)
        data = self.parse(lines)
        if len(data) % type.size:
            log.debug("Zero-filling the last %s value (%d trailing bytes)", type.name, len(data) % type.size)
            data += bytes(-len(data) % type.size)
        return type.unpack_array(data)

    # ------------------------------------------------------------------
    # Line loop
    # ------------------------------------------------------------------

    def _rows(self, lines: Iterable[str], state: ParseState) -> Iterator[tuple[int, bytes]]:
        for line in lines:
            state.line_number += 1
            if isinstance(line, bytes):
                line = line.decode("latin-1")
            yield from self._feed(state, line)
        if state.repeat_pending:
            log.debug("Dump ends with a repeat marker and no closing address; ignoring it")
        yield from self._release(state)
        log.debug("Parsed %d lines into %d bytes", state.line_number, state.emitted)

    def _feed(self, state: ParseState, line: str) -> Iterator[tuple[int, bytes]]:
        tokens = self._tokenize(line)
        if not tokens:
            return

        if tokens == ["*"]:
            if state.last_addr is None:
                raise ParseError("repeat marker before any address line", "*", state.line_number)
            state.repeat_pending = True
            return

        address = self._parse_address(tokens[0], state.line_number)

        if state.first_addr is None:
            state.first_addr = address
        elif address < state.last_addr:
            raise ParseError(
                f"address {tokens[0]} is lower than the previous line's", tokens[0], state.line_number
            )

        if state.repeat_pending:
            for row in self._expand_repeat(state, address, tokens[0]):
                yield from self._release(state)
                state.held = row
            state.repeat_pending = False
        else:
            self._settle(state, address, tokens[0])

        segment = self._decode_tokens(tokens[1:], state.line_number)[: self.segment_length]
        if segment:
            yield from self._release(state)
            state.held = (address, segment)
        state.previous_segment = segment
        state.last_addr = address

    def _settle(self, state: ParseState, address: int, token: str) -> None:
        """Trim the held row to end at `address`; a gap before `address` is an error."""
        if state.held is None:
            end = state.first_addr
        else:
            row_addr, data = state.held
            end = row_addr + len(data)
            if address < end:
                # the last word of a dump is zero-padded past the end of the data
                state.held = (row_addr, data[: address - row_addr])
                return
        if address > end:
            raise ParseError(
                f"address {token} leaves a {address - end}-byte gap after the previous line "
                "with no repeat marker",
                token,
                state.line_number,
            )

    def _release(self, state: ParseState) -> Iterator[tuple[int, bytes]]:
        if state.held is not None and state.held[1]:
            state.emitted += len(state.held[1])
            yield state.held
        state.held = None
    def _expand_repeat(self, state: ParseState, address: int, token: str) -> list[tuple[int, bytes]]:
        stride = self.segment_length
        previous = state.previous_segment
        if len(previous) != stride:
            raise ParseError(
                f"repeat marker follows a {len(previous)}-byte line, but repeated lines must "
                f"be {stride} bytes (is the segment length right?)",
                "*",
                state.line_number,
            )
        delta = address - state.last_addr
        if delta < stride or delta % stride:
            raise ParseError(
                f"address gap of {delta} bytes after repeat marker is not a multiple "
                f"of the {stride}-byte segment length",
                token,
                state.line_number,
            )
        copies = delta // stride - 1
        log.debug(
            "Line %d: expanding %d repeated %d-byte segments before address %#x",
            state.line_number, copies, stride, address,
        )
        return [(state.last_addr + stride * (i + 1), previous) for i in range(copies)]

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------

    def _tokenize(self, line: str) -> list[str]:
        line = line.rstrip("\r\n")
        if self.chars is not None:
            return self._tokenize_chars(line)
        if self.format != "od":
            line = PANEL_RE.sub("", line)
        return line.split()

    def _tokenize_chars(self, line: str) -> list[str]:
        stripped = line.strip()
        if not stripped:
            return []
        if stripped == "*":
            return ["*"]
        line = line.lstrip()
        index = line.find(" ")
        if index < 0:
            return [line]
        tokens = [line[:index]]
        tokens.extend(space or token for space, token in CHAR_TOKEN_RE.findall(line[index:]))
        return tokens

    def _parse_address(self, token: str, line_number: int) -> int:
        address = parse_number(token, self.address_base)
        if address is None:
            raise ParseError(
                f"invalid {BASE_NAMES[self.address_base]} address {token!r}", token, line_number
            )
        return address

    def _decode_tokens(self, tokens: list[str], line_number: int) -> bytes:
        return b"".join(self._decode_token(token, line_number) for token in tokens)

    def _decode_token(self, token: str, line_number: int) -> bytes:
        if self.chars is not None:
            # character dumps: table first, octal escapes otherwise
            if token in self.chars:
                return bytes([self.chars[token]])
            return self._pack_word(self._parse_word(token, line_number))

        value = parse_number(token, self.base, signed=self.base == 10)
        if value is None:
            if token in MNEMONICS:
                return bytes([MNEMONICS[token]])
            raise ParseError(f"invalid {BASE_NAMES[self.base]} token {token!r}", token, line_number)
        return self._pack_word(value)

    def _parse_word(self, token: str, line_number: int) -> int:
        value = parse_number(token, self.base)
        if value is None:
            raise ParseError(f"invalid {BASE_NAMES[self.base]} token {token!r}", token, line_number)
        return value

    def _pack_word(self, value: int) -> bytes:
        # od -d and friends print signed words
        if value < 0:
            return self.signed_word_type.pack(value)
        return self.word_type.pack(value)
