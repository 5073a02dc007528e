# filename: huffman_config.py

import os
import sys

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

LOG_LEVEL = os.getenv("HUFFMAN_LOG_LEVEL", "WARNING").upper()
ENCODED_NAME = os.getenv("HUFFMAN_ENCODED_NAME", "encoded.txt")
DECODED_NAME = os.getenv("HUFFMAN_DECODED_NAME", "decoded.txt")

# Packed container
MAGIC = b"HUFF"
FORMAT_VERSION = 1

# Decimals written for the probability column of the text format
PROBABILITY_PRECISION = 6


def configure_logging(level=None):
    """Route loguru output to stderr at ``level`` (defaults to ``LOG_LEVEL``)."""
    logger.remove()
    logger.add(sys.stderr, level=level or LOG_LEVEL, format="{time:HH:mm:ss} | {level: <8} | {message}")
