"""
tinyzip - small lossless byte-stream compressors (RLE, Huffman coding, LZ77)
behind one compress / decompress / name interface.
"""

from tinyzip.compressor_ABC import Compressor, InternalInvariantError, MalformedInputError
from tinyzip.huffman_coding import HuffmanCompressor, HuffmanTree
from tinyzip.LZ77 import LZ77Compressor, Token
from tinyzip.RLE import RLECompressor, analyze_runs
from tinyzip.stats import CompressionStats, calculate_entropy, format_bytes

__version__ = "1.0.0"

COMPRESSORS = {
    "rle": RLECompressor,
    "huffman": HuffmanCompressor,
    "lz77": LZ77Compressor,
}

__all__ = [
    "COMPRESSORS",
    "CompressionStats",
    "Compressor",
    "HuffmanCompressor",
    "HuffmanTree",
    "InternalInvariantError",
    "LZ77Compressor",
    "MalformedInputError",
    "RLECompressor",
    "Token",
    "analyze_runs",
    "calculate_entropy",
    "format_bytes",
]
