"""Entry points that feed text sources to the Parser."""

import io
import logging
from pathlib import Path
from typing import Any, Iterable

from ..config import ParserConfig
from .parser import Parser

log = logging.getLogger(__name__)


def _lines(source: "str | bytes | Iterable[str]") -> Iterable[str]:
    if isinstance(source, bytes):
        source = source.decode("latin-1")
    if isinstance(source, str):
        return io.StringIO(source)
    return source


def unhexdump(source: "str | bytes | Iterable[str]", config: ParserConfig | None = None, **options: Any) -> bytes:
    """Parse a dump held in a string, bytes, open file or other line iterable.

    Keyword options are the Parser's (`format`, `encoding`, `segment`,
    `endian`, `address_base`); `config` supplies them as a ParserConfig.
    """
    parser = Parser.from_config(config) if config is not None else Parser(**options)
    return parser.parse(_lines(source))


def unhexdump_file(path: Path, config: ParserConfig | None = None, **options: Any) -> bytes:
    """Parse the dump stored in a text file."""
    log.debug("Unhexdumping %s", path)
    with open(path, encoding="latin-1") as f:
        return unhexdump(f, config=config, **options)
