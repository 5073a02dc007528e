# filename: huffman_format.py
"""
Persisted forms of a code table together with its encoded bit stream.

Two layouts are supported:

* text   - the table as ``symbol<TAB>probability<TAB>codeword`` lines followed
           by the bit stream written as literal ``0``/``1`` characters;
* packed - a binary container (``MAGIC`` header) holding the table and the
           bit stream packed eight bits per byte, with the exact bit count
           stored so the zero padding of the last byte is never decoded.
"""

import struct
from typing import Dict, Tuple

from loguru import logger

from huffman_config import FORMAT_VERSION, MAGIC, PROBABILITY_PRECISION
from huffman_core import CodeTable, validate_table
from huffman_errors import CorruptTable, FormatError, TruncatedStream

_HEADER = struct.Struct(">4sBH")
_ENTRY = struct.Struct(">BB")
_NBITS = struct.Struct(">Q")


def bits_to_bytes(bits: str) -> bytes:
    padding = (8 - len(bits) % 8) % 8
    padded = bits + "0" * padding
    if not padded:
        return b""
    return int(padded, 2).to_bytes(len(padded) // 8, "big")


def bytes_to_bits(data: bytes, nbits: int) -> str:
    if not data:
        return ""
    return format(int.from_bytes(data, "big"), f"0{len(data) * 8}b")[:nbits]


def dump_text(codes: CodeTable, freqs: Dict[int, int], bits: str) -> str:
    total = sum(freqs.values())
    ordered = sorted(codes, key=lambda s: (-freqs.get(s, 0), s))
    lines = [str(len(codes))]
    for symbol in ordered:
        p = freqs.get(symbol, 0) / total if total else 0.0
        lines.append(f"{symbol}\t{p:.{PROBABILITY_PRECISION}f}\t{codes[symbol]}")
    lines.append("")
    lines.append(bits)
    return "\n".join(lines) + "\n"


def load_text(text: str) -> Tuple[CodeTable, str]:
    lines = [line.rstrip("\r") for line in text.split("\n")]
    try:
        size = int(lines[0])
    except ValueError:
        raise CorruptTable(f"bad table size line {lines[0]!r}") from None
    if not 0 <= size <= 256:
        raise CorruptTable(f"table size {size} out of range")
    if len(lines) < size + 2:
        raise CorruptTable(f"table declares {size} entries but the file ends early")

    codes = {}
    for line in lines[1:size + 1]:
        fields = line.split("\t")
        if len(fields) != 3:
            raise CorruptTable(f"malformed table line {line!r}")
        try:
            symbol = int(fields[0])
            float(fields[1])
        except ValueError:
            raise CorruptTable(f"malformed table line {line!r}") from None
        if symbol in codes:
            raise CorruptTable(f"symbol {symbol} listed twice")
        codes[symbol] = fields[2]

    if lines[size + 1] != "":
        raise CorruptTable("missing blank line after the code table")
    validate_table(codes)

    bits = "".join(lines[size + 2:])
    return codes, bits


def pack(codes: CodeTable, bits: str) -> bytes:
    out = bytearray(_HEADER.pack(MAGIC, FORMAT_VERSION, len(codes)))
    for symbol in sorted(codes):
        word = codes[symbol]
        out += _ENTRY.pack(symbol, len(word))
        out += bits_to_bytes(word)
    out += _NBITS.pack(len(bits))
    out += bits_to_bytes(bits)
    logger.debug(f"Packed {len(codes)} codewords and {len(bits)} bits into {len(out)} bytes")
    return bytes(out)


def unpack(blob: bytes) -> Tuple[CodeTable, str]:
    if not is_packed(blob):
        raise FormatError("not a packed Huffman stream (bad magic)")
    try:
        _, version, count = _HEADER.unpack_from(blob, 0)
        if version != FORMAT_VERSION:
            raise FormatError(f"unsupported format version {version}")
        offset = _HEADER.size

        codes = {}
        for _ in range(count):
            symbol, length = _ENTRY.unpack_from(blob, offset)
            offset += _ENTRY.size
            nbytes = (length + 7) // 8
            if offset + nbytes > len(blob):
                raise CorruptTable(f"codeword for symbol {symbol} is cut short")
            if symbol in codes:
                raise CorruptTable(f"symbol {symbol} listed twice")
            codes[symbol] = bytes_to_bits(blob[offset:offset + nbytes], length)
            offset += nbytes

        (nbits,) = _NBITS.unpack_from(blob, offset)
        offset += _NBITS.size
    except struct.error as e:
        raise CorruptTable(f"packed header is incomplete: {e}") from None

    validate_table(codes)

    payload = blob[offset:]
    expected = (nbits + 7) // 8
    if len(payload) < expected:
        raise TruncatedStream(f"payload holds {len(payload)} bytes, {expected} expected")
    if len(payload) > expected:
        raise FormatError(f"{len(payload) - expected} unexpected bytes after the payload")
    return codes, bytes_to_bits(payload, nbits)


def is_packed(blob: bytes) -> bool:
    return blob[:len(MAGIC)] == MAGIC
