from abc import ABC, abstractmethod
from typing import Tuple

from tinyzip.stats import CompressionStats


class MalformedInputError(ValueError):
    """
    Compressed data does not match the framing expected by the codec
    (too short, truncated header, invalid back reference, ...).
    """


class InternalInvariantError(RuntimeError):
    """
    An engine broke one of its own invariants. Not caused by the input.
    """


class Compressor(ABC):
    """
    Interface shared by every codec: a named, stateless transformation
    from bytes to bytes and back.

    Decompress(Compress(x)) == x for every byte string x, including b"".
    """

    @abstractmethod
    def compress(self, data: bytes) -> bytes:
        """
        Compresses data and returns one self-contained binary blob.

        Args:
            data: Raw input bytes

        Returns:
            Compressed bytes (empty for empty input)
        """

    @abstractmethod
    def decompress(self, data: bytes) -> bytes:
        """
        Restores the original bytes from a blob produced by compress().

        Args:
            data: Compressed bytes

        Returns:
            Original bytes

        Raises:
            MalformedInputError: if the blob is corrupt or truncated
        """

    @abstractmethod
    def name(self) -> str:
        """Human-readable algorithm name."""

    def compress_with_stats(self, data: bytes) -> Tuple[bytes, CompressionStats]:
        """
        Compresses data and reports size statistics. The returned bytes
        are exactly what compress() returns.
        """
        compressed = self.compress(data)
        stats = CompressionStats(
            original_size=len(data),
            compressed_size=len(compressed),
            algorithm=self.name(),
        )
        return compressed, stats

    def __repr__(self):
        return f"<{type(self).__name__} {self.name()!r}>"

    @classmethod
    def compress_file(cls, input_file: str, output_file: str, verbose: bool = False) -> str:
        """
        Helper for compressing a whole file.

        Args:
            input_file: Path to the input file
            output_file: Path to the compressed file
            verbose: Print the statistics report

        Returns:
            Information about the compression
        """
        compressor = cls()
        with open(input_file, "rb") as in_file:
            data = in_file.read()
        compressed, stats = compressor.compress_with_stats(data)
        with open(output_file, "wb") as out_file:
            out_file.write(compressed)

        info = (
            f"{compressor.name()}: {input_file} -> {output_file} "
            f"({stats.original_size} -> {stats.compressed_size} bytes, "
            f"ratio {stats.ratio * 100:.2f}%)"
        )
        if verbose:
            print(info)
        return info

    @classmethod
    def decompress_file(cls, input_file: str, output_file: str, verbose: bool = False) -> str:
        """
        Helper for decompressing a whole file.

        Args:
            input_file: Path to the compressed file
            output_file: Path to the restored file
            verbose: Print sizes

        Returns:
            Information about the decompression
        """
        compressor = cls()
        with open(input_file, "rb") as in_file:
            data = in_file.read()
        restored = compressor.decompress(data)
        with open(output_file, "wb") as out_file:
            out_file.write(restored)

        info = (
            f"{compressor.name()}: {input_file} -> {output_file} "
            f"({len(data)} -> {len(restored)} bytes)"
        )
        if verbose:
            print(info)
        return info

    @classmethod
    def compress_bytes(cls, data: bytes) -> Tuple[bytes, str]:
        """
        Helper for compressing bytes with a fresh instance.

        Returns:
            Tuple (compressed data, compression info)
        """
        compressed, stats = cls().compress_with_stats(data)
        return compressed, str(stats)

    @classmethod
    def decompress_bytes(cls, data: bytes) -> Tuple[bytes, str]:
        """
        Helper for decompressing bytes with a fresh instance.

        Returns:
            Tuple (decompressed data, decompression info)
        """
        compressor = cls()
        restored = compressor.decompress(data)
        return restored, f"{compressor.name()}: {len(data)} -> {len(restored)} bytes"
