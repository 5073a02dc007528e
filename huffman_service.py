# filename: huffman_service.py

from pathlib import Path

from loguru import logger

import huffman_format
from huffman_core import HuffmanLogic, weighted_length


class HuffmanService:
    def __init__(self):
        self.logic = HuffmanLogic()

    def compress(self, data):
        codes = self.logic.build_code(data)
        bits = self.logic.encode(data, codes)
        return huffman_format.pack(codes, bits)

    def decompress(self, blob):
        codes, bits = huffman_format.unpack(blob)
        return self.logic.decode(bits, codes)

    def encode_file(self, src, dst, packed=False):
        """
        Encode the file at ``src`` into ``dst``.

        Args:
            src: input file path
            dst: output file path
            packed: write the binary container instead of the text layout

        Returns:
            dict with the table size and the input/output sizes
        """
        data = Path(src).read_bytes()
        freqs, total = self.logic.count_frequencies(data)
        codes = self.logic.generate_codes(self.logic.build_tree(freqs)) if freqs else {}
        bits = self.logic.encode(data, codes)

        if packed:
            Path(dst).write_bytes(huffman_format.pack(codes, bits))
        else:
            Path(dst).write_text(huffman_format.dump_text(codes, freqs, bits), encoding="ascii", newline="\n")

        summary = {
            "symbols": len(codes),
            "input_bytes": total,
            "encoded_bits": len(bits),
            "output_bytes": Path(dst).stat().st_size,
        }
        logger.info(
            f"Encoded {src} -> {dst}: {total} bytes, {len(codes)} symbols, "
            f"{weighted_length(freqs, codes)} bits"
        )
        return summary

    def decode_file(self, src, dst):
        """Decode ``src`` (text or packed, detected by its header) into ``dst``."""
        blob = Path(src).read_bytes()
        if huffman_format.is_packed(blob):
            codes, bits = huffman_format.unpack(blob)
        else:
            codes, bits = huffman_format.load_text(blob.decode("ascii", errors="replace"))
        data = self.logic.decode(bits, codes)
        Path(dst).write_bytes(data)

        logger.info(f"Decoded {src} -> {dst}: {len(bits)} bits, {len(data)} bytes")
        return {
            "symbols": len(codes),
            "encoded_bits": len(bits),
            "output_bytes": len(data),
        }
