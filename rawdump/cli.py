#!/usr/bin/env python3
"""
rawdump command line

Rebuilds raw bytes from od/hexdump output, renders bytes as such dumps, and
lists the scalar types an architecture resolves.
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import (
    DEFAULT_SEGMENT,
    ENCODING_DATABASE,
    ParserConfig,
    config_from_yaml,
)
from .errors import RawdumpError
from .hexdump import hexdump
from .types.arch import get_all_arches, get_arch_table, platform
from .unhexdump.parser import Parser

log = logging.getLogger(__name__)


def _read_text(path: Path | None) -> list[str]:
    if path is None:
        return sys.stdin.readlines()
    with open(path, encoding="latin-1") as f:
        return f.readlines()


def _read_bytes(path: Path | None) -> bytes:
    if path is None:
        return sys.stdin.buffer.read()
    return path.read_bytes()


def _parser_config(args: argparse.Namespace) -> ParserConfig:
    """Merge a YAML config file (if any) with command-line overrides."""
    config = config_from_yaml(args.config) if args.config else ParserConfig()
    if args.format is not None:
        config.format = None if args.format == "none" else args.format
    if args.encoding is not None:
        config.encoding = args.encoding
    if args.segment is not None:
        config.segment = args.segment
    if args.endian is not None:
        config.endian = args.endian
    if args.address_base is not None:
        config.address_base = args.address_base
    return config.validate()


def cmd_unhexdump(args: argparse.Namespace) -> int:
    config = _parser_config(args)
    parser = Parser.from_config(config)
    log.debug("Using %r", parser)
    lines = _read_text(args.input)

    if args.interpret:
        table = platform(arch=args.arch, endian=None if args.arch else parser.endian)
        scalar = table.lookup(args.interpret)
        values = parser.unpack(lines, type=scalar)
        log.info("Decoded %d %s values (%s)", len(values), scalar.name, table.name)
        for value in values:
            print(value)
        return 0

    data = parser.parse(lines)
    log.info("Reconstructed %d bytes", len(data))
    if args.output is None:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
    else:
        args.output.write_bytes(data)
        log.info("Output: %s", args.output)
    return 0


def cmd_hexdump(args: argparse.Namespace) -> int:
    config = _parser_config(args)
    data = _read_bytes(args.input)
    text = hexdump(data, squeeze=not args.no_squeeze, **config.to_kwargs())
    if args.output is None:
        sys.stdout.write(text)
    else:
        args.output.write_text(text)
        log.info("Output: %s", args.output)
    return 0


def cmd_types(args: argparse.Namespace) -> int:
    table = get_arch_table(args.arch)
    log.info(
        "Architecture %s: %d-bit, %s-endian",
        table.name, table.address_size * 8, table.endian,
    )
    for name in table.names():
        scalar = table[name]
        kind = "float" if scalar.is_float else ("signed" if scalar.is_signed else "unsigned")
        print(f"{name:<14} {scalar.size:>2} bytes  {kind:<8} {scalar.format}")
    return 0


def _add_dump_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "input",
        type=Path,
        nargs="?",
        help="Input file (default: stdin)",
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML file with parser settings",
    )
    parser.add_argument(
        "--format", "-f",
        choices=["od", "hexdump", "none"],
        help="Dump flavor (default: hexdump -C style)",
    )
    parser.add_argument(
        "--encoding", "-e",
        choices=list(ENCODING_DATABASE),
        help="Numeric base / word size of the dumped values",
    )
    parser.add_argument(
        "--segment", "-s",
        type=int,
        help=f"Bytes per line (default: {DEFAULT_SEGMENT})",
    )
    parser.add_argument(
        "--endian",
        choices=["little", "big", "network"],
        help="Byte order of multi-byte words (default: little)",
    )
    parser.add_argument(
        "--address-base",
        type=int,
        choices=[2, 8, 10, 16],
        help="Base of the offset column (default: implied by format)",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rawdump",
        description="Typed binary buffers and od/hexdump reconstruction",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("unhexdump", help="Rebuild raw bytes from od/hexdump output")
    _add_dump_options(p)
    p.add_argument(
        "--interpret",
        metavar="TYPE",
        help="Print the data as values of TYPE instead of writing bytes",
    )
    p.add_argument(
        "--arch",
        choices=get_all_arches(),
        help="Architecture used to resolve --interpret",
    )
    p.set_defaults(func=cmd_unhexdump)

    p = sub.add_parser("hexdump", help="Dump a binary file as od/hexdump text")
    _add_dump_options(p)
    p.add_argument(
        "--no-squeeze",
        action="store_true",
        help="Print repeated lines instead of '*'",
    )
    p.set_defaults(func=cmd_hexdump)

    p = sub.add_parser("types", help="List the scalar types of an architecture")
    p.add_argument(
        "--arch",
        default="x86_64",
        choices=get_all_arches(),
        help="Architecture (default: x86_64)",
    )
    p.set_defaults(func=cmd_types)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)

    # Setup logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-5s %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    try:
        return args.func(args)
    except RawdumpError as e:
        log.error("%s", e)
        return 1
    except OSError as e:
        log.error("I/O error: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
