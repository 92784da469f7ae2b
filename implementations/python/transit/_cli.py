"""Transit command-line interface.

Usage:
    python3 -m transit roundtrip json < in.json > out.json
    python3 -m transit roundtrip msgpack
    python3 -m transit convert --from msgpack --to json-verbose --input file.mp
    python3 -m transit version

`roundtrip` is the endpoint cross-implementation test harnesses drive:
it decodes each value from stdin, re-encodes it in the same format and
writes it to stdout straight away, until stdin closes.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import BinaryIO, List, Optional

from . import FORMATS, Reader, TransitError, Writer, __version__


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transit",
        description="Transit: self-describing values over JSON and MessagePack",
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log debug output to stderr")
    sub = parser.add_subparsers(dest="command")

    # ── roundtrip ──
    rt_p = sub.add_parser("roundtrip", help="Decode and re-encode values from stdin")
    rt_p.add_argument("encoding", choices=FORMATS)

    # ── convert ──
    conv_p = sub.add_parser("convert", help="Re-encode values in another format")
    conv_p.add_argument("--from", dest="src", choices=FORMATS, required=True)
    conv_p.add_argument("--to", dest="dst", choices=FORMATS, required=True)
    conv_p.add_argument("--input", "-i", metavar="FILE",
                        help="Read from FILE instead of stdin")

    # ── version ──
    sub.add_parser("version", help="Print version and exit")

    return parser


def _pump(src: BinaryIO, src_fmt: str, dst: BinaryIO, dst_fmt: str) -> int:
    """Copy every value from src to dst, flushing after each one."""
    writer = Writer(dst, dst_fmt)
    count = 0
    for value in Reader(src, src_fmt):
        writer.write(value)
        writer.flush()
        count += 1
    return count


def _cmd_roundtrip(args: argparse.Namespace) -> None:
    n = _pump(sys.stdin.buffer, args.encoding, sys.stdout.buffer, args.encoding)
    logging.getLogger(__name__).debug("roundtripped %d values as %s", n, args.encoding)


def _cmd_convert(args: argparse.Namespace) -> None:
    if args.input:
        with open(args.input, "rb") as f:
            _pump(f, args.src, sys.stdout.buffer, args.dst)
    else:
        _pump(sys.stdin.buffer, args.src, sys.stdout.buffer, args.dst)


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "version":
        print(f"transit {__version__}")
        return

    try:
        if args.command == "roundtrip":
            _cmd_roundtrip(args)
        elif args.command == "convert":
            _cmd_convert(args)
    except TransitError as e:
        print(f"transit: error [{e.code}]: {e}", file=sys.stderr)
        sys.exit(2)
    except BrokenPipeError:
        # Peer closed its end; nothing left to write to.
        sys.exit(1)


if __name__ == "__main__":
    main()
