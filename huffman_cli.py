# filename: huffman_cli.py
"""
Huffman coding of files.

Usage: huffman [OPTIONS] input [output]
  The default action is to encode the input file.

Examples:
  huffman input.txt
  huffman input.txt encoded.txt
  huffman --packed input.txt encoded.huf
  huffman -d encoded.txt
"""

import argparse
import sys

from loguru import logger

from huffman_config import DECODED_NAME, ENCODED_NAME, configure_logging
from huffman_errors import HuffmanError
from huffman_service import HuffmanService


def build_parser():
    parser = argparse.ArgumentParser(
        prog="huffman",
        description="Static Huffman coding of files.",
        epilog="The default action is to encode the input file.",
    )
    parser.add_argument("-d", "--decode", action="store_true", help="decode file")
    parser.add_argument("--packed", action="store_true", help="write the binary container instead of 0/1 text")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="more log output (-vv for debug)")
    parser.add_argument("input")
    parser.add_argument("output", nargs="?")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.verbose:
        configure_logging("DEBUG" if args.verbose > 1 else "INFO")
    else:
        configure_logging()

    service = HuffmanService()
    try:
        if args.decode:
            output = args.output or DECODED_NAME
            summary = service.decode_file(args.input, output)
            print(f"{args.input} -> {output}: {summary['output_bytes']} bytes")
        else:
            output = args.output or ENCODED_NAME
            summary = service.encode_file(args.input, output, packed=args.packed)
            print(
                f"{args.input} -> {output}: {summary['input_bytes']} bytes, "
                f"{summary['symbols']} symbols, {summary['encoded_bits']} bits"
            )
    except (HuffmanError, OSError) as e:
        logger.debug(f"{type(e).__name__} while processing {args.input}")
        print(f"huffman: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
