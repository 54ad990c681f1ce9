"""Canonical od/hexdump-style dump generator (the parser's inverse)."""

import logging
import math

from .config import DEFAULT_SEGMENT, ParserConfig
from .types.arch import get_endian_table, normalize_endian
from .unhexdump.chars import render_char
from .unhexdump.parser import UNSIGNED_WORDS

log = logging.getLogger(__name__)

_FORMAT_CHARS = {2: "b", 8: "o", 16: "x"}


def digits_for(base: int, word_size: int) -> int:
    """Number of digits needed to print any word of `word_size` bytes."""
    return math.ceil(word_size * 8 / math.log2(base))


def format_number(value: int, base: int, width: int) -> str:
    if base == 10:
        return f"{value:>{width}d}"
    return f"{value:0{width}{_FORMAT_CHARS[base]}}"


def _panel(chunk: bytes) -> str:
    return "".join(chr(b) if 0x20 <= b < 0x7F else "." for b in chunk)


def hexdump(
    data: bytes,
    format: str | None = None,
    encoding: str | None = None,
    segment: int = DEFAULT_SEGMENT,
    endian: str = "little",
    address_base: int | None = None,
    squeeze: bool = True,
) -> str:
    """Render `data` as dump text that Parser with the same options reads back.

    The default format mimics `hexdump -C` (with the ASCII column),
    "hexdump" mimics `hexdump -x`, and "od" mimics `od -o`. Runs of identical
    full lines collapse into a `*` line unless `squeeze` is false, and the
    dump ends with the bare offset of the end of the data.
    """
    config = ParserConfig(
        format=format,
        encoding=encoding,
        segment=segment,
        endian=endian,
        address_base=address_base,
    )
    resolved = config.resolve()
    base = resolved["base"]
    word_size = resolved["word_size"]
    chars = resolved["chars"]
    addr_base = resolved["address_base"]
    addr_width = 8 if format is None and addr_base == 16 else 7

    word_type = get_endian_table(normalize_endian(endian)).lookup(UNSIGNED_WORDS[word_size])
    word_width = digits_for(base, word_size)

    def render(offset: int, chunk: bytes) -> str:
        address = format_number(offset, addr_base, addr_width)
        if chars is not None:
            return address + "".join(f"{render_char(b, chars):>4}" for b in chunk)
        padded = chunk + bytes(-len(chunk) % word_size)
        words = [format_number(v, base, word_width) for v in word_type.unpack_array(padded)]
        if format is None:
            fields = [f"{w} " + (" " if i == 7 and len(words) > 8 else "") for i, w in enumerate(words)]
            width = segment // word_size * (word_width + 1) + (1 if segment // word_size > 8 else 0)
            return f"{address}  {''.join(fields):<{width}} |{_panel(chunk)}|"
        return f"{address} {' '.join(words)}"

    lines = []
    previous = None
    squeezing = False
    for offset in range(0, len(data), segment):
        chunk = data[offset : offset + segment]
        if squeeze and chunk == previous and len(chunk) == segment:
            if not squeezing:
                lines.append("*")
                squeezing = True
            continue
        squeezing = False
        previous = chunk
        lines.append(render(offset, chunk))
    lines.append(format_number(len(data), addr_base, addr_width))

    log.debug("Dumped %d bytes into %d lines", len(data), len(lines))
    return "\n".join(lines) + "\n"
