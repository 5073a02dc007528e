# filename: huffman_errors.py


class HuffmanError(Exception):
    """Base class for every error raised by the coding engine."""


class EmptyInput(HuffmanError):
    def __init__(self):
        super().__init__("cannot build a Huffman tree from zero symbols")


class UnknownSymbol(HuffmanError):
    def __init__(self, symbol, offset):
        self.symbol = symbol
        self.offset = offset
        super().__init__(f"byte {symbol} at offset {offset} has no codeword in the table")


class TruncatedStream(HuffmanError):
    def __init__(self, message="bit stream ended in the middle of a codeword", pending=""):
        self.pending = pending
        super().__init__(message)


class CorruptTable(HuffmanError):
    pass


class InvalidCodeword(TruncatedStream):
    """Bits that no codeword can start with; no further input would complete them."""

    def __init__(self, bits, offset):
        self.bits = bits
        self.offset = offset
        super().__init__(f"bits {bits!r} ending at offset {offset} match no codeword", pending=bits)


class FormatError(HuffmanError):
    pass
