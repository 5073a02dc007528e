# filename: huffman_core.py

from collections import Counter
from typing import Dict, Tuple

from loguru import logger

from huffman_errors import (
    CorruptTable,
    EmptyInput,
    InvalidCodeword,
    TruncatedStream,
    UnknownSymbol,
)

CodeTable = Dict[int, str]


class HuffmanNode:
    def __init__(self, char, freq, left=None, right=None):
        self.char = char
        self.freq = freq
        self.left = left
        self.right = right
        # edge labels towards left/right child, set on internal nodes only
        self.left_bit = None
        self.right_bit = None

    def is_leaf(self):
        return self.left is None and self.right is None


class HuffmanLogic:
    """Static Huffman coding engine.

    The instance keeps no state between calls: every method works on the
    values it is given, so one instance can serve any number of streams.
    """

    def count_frequencies(self, data: bytes) -> Tuple[Counter, int]:
        # Frequency analysis of the input byte data
        freqs = Counter(data)
        return freqs, len(data)

    def build_tree(self, freqs: Dict[int, int]) -> HuffmanNode:
        """Merge the two lightest nodes until a single root remains.

        The working list is kept in descending weight order, so the two
        lightest nodes always sit at its tail.
        """
        if not freqs:
            raise EmptyInput()

        ordered = sorted(freqs.items(), key=lambda item: (-item[1], item[0]))
        tops = [HuffmanNode(char, freq) for char, freq in ordered]

        while len(tops) > 1:
            right = tops.pop()
            left = tops.pop()
            merged = HuffmanNode(None, left.freq + right.freq, left, right)
            if left.freq < right.freq:
                merged.left_bit, merged.right_bit = "0", "1"
            else:
                merged.left_bit, merged.right_bit = "1", "0"

            for i, node in enumerate(tops):
                if node.freq < merged.freq:
                    tops.insert(i, merged)
                    break
            else:
                tops.append(merged)

        return tops[0]

    def generate_codes(self, node: HuffmanNode, current_code: str = "") -> CodeTable:
        if node.is_leaf():
            # a lone leaf root has no edge to label
            return {node.char: current_code or "0"}

        codes = self.generate_codes(node.left, current_code + node.left_bit)
        codes.update(self.generate_codes(node.right, current_code + node.right_bit))
        return codes

    def build_code(self, data: bytes) -> CodeTable:
        freqs, total = self.count_frequencies(data)
        if not freqs:
            return {}
        tree = self.build_tree(freqs)
        codes = self.generate_codes(tree)
        logger.debug(f"Built code table for {len(codes)} symbols from {total} bytes")
        return codes

    def encode(self, data: bytes, codes: CodeTable) -> str:
        out = []
        for offset, char in enumerate(data):
            try:
                out.append(codes[char])
            except KeyError:
                raise UnknownSymbol(char, offset) from None
        return "".join(out)

    def decode(self, bits: str, codes: CodeTable) -> bytes:
        """Turn ``bits`` back into bytes using a table read from storage.

        The table is never rebuilt from frequencies: it is validated and
        loaded into a decoding trie which is walked one bit at a time.
        """
        root = build_decode_trie(codes)
        out = bytearray()
        node = root
        pending_start = 0
        for offset, bit in enumerate(bits):
            nxt = node.get(bit)
            if nxt is None:
                raise InvalidCodeword(bits[pending_start:offset + 1], offset)
            if isinstance(nxt, int):
                out.append(nxt)
                node = root
                pending_start = offset + 1
            else:
                node = nxt

        if node is not root:
            raise TruncatedStream(pending=bits[pending_start:])
        logger.debug(f"Decoded {len(bits)} bits into {len(out)} bytes")
        return bytes(out)


def validate_table(codes: CodeTable) -> None:
    """Raise CorruptTable unless ``codes`` is a usable prefix-free table."""
    for symbol, word in codes.items():
        if not isinstance(symbol, int) or not 0 <= symbol <= 255:
            raise CorruptTable(f"symbol {symbol!r} is not a byte value")
        if not isinstance(word, str):
            raise CorruptTable(f"codeword {word!r} for symbol {symbol} is not a string")
        if not word:
            raise CorruptTable(f"symbol {symbol} has an empty codeword")
        if word.strip("01"):
            raise CorruptTable(f"codeword {word!r} for symbol {symbol} is not binary")

    # after sorting, a codeword that prefixes another sorts directly before
    # some word it prefixes
    words = sorted(codes.values())
    for shorter, longer in zip(words, words[1:]):
        if longer.startswith(shorter):
            raise CorruptTable(f"codeword {shorter!r} is a prefix of {longer!r}")


def build_decode_trie(codes: CodeTable) -> dict:
    """Nested dicts keyed by '0'/'1'; an int value is a decoded symbol."""
    validate_table(codes)
    root = {}
    for symbol, word in codes.items():
        node = root
        for bit in word[:-1]:
            node = node.setdefault(bit, {})
        node[word[-1]] = symbol
    return root


def weighted_length(freqs: Dict[int, int], codes: CodeTable) -> int:
    return sum(count * len(codes[symbol]) for symbol, count in freqs.items())


_logic = HuffmanLogic()


def build_code(data: bytes) -> CodeTable:
    return _logic.build_code(data)


def encode(data: bytes, codes: CodeTable) -> str:
    return _logic.encode(data, codes)


def decode(bits: str, codes: CodeTable) -> bytes:
    return _logic.decode(bits, codes)
