"""
Run-Length Encoding (RLE) Compression Module
"""

from collections import Counter
from dataclasses import dataclass, field

from tinyzip.compressor_ABC import Compressor, MalformedInputError


class RLECompressor(Compressor):
    """Class for RLE compression and decompression"""

    MAX_RUN = 255  # a run count has to fit in one byte

    def name(self) -> str:
        return "Run-Length Encoding (RLE)"

    @classmethod
    def runs(cls, data: bytes) -> list[tuple[int, int]]:
        """
        Splits data into runs of identical bytes.

        Args:
            data: Input data as bytes

        Returns:
            List of (byte, count) tuples, count in [1, MAX_RUN]
        """
        if not data:
            return []

        result = []
        current_byte = data[0]
        count = 1

        for byte in data[1:]:
            if byte == current_byte and count < cls.MAX_RUN:
                count += 1
            else:
                result.append((current_byte, count))
                current_byte = byte
                count = 1

        # Add the last run
        result.append((current_byte, count))

        return result

    def compress(self, data: bytes) -> bytes:
        """
        Compress data using RLE.

        Args:
            data: Input data as bytes

        Returns:
            Flat sequence of [byte][count] pairs
        """
        result = bytearray()
        for byte, count in self.runs(data):
            result.append(byte)
            result.append(count)
        return bytes(result)

    def decompress(self, data: bytes) -> bytes:
        """
        Decompress RLE data.

        Args:
            data: Flat sequence of [byte][count] pairs

        Returns:
            Decompressed data as bytes
        """
        if len(data) % 2 != 0:
            raise MalformedInputError(
                f"RLE: compressed size must be even, got {len(data)} bytes"
            )

        result = bytearray()
        for pos in range(0, len(data), 2):
            byte, count = data[pos], data[pos + 1]
            if count == 0:
                raise MalformedInputError(f"RLE: zero run count at offset {pos + 1}")
            result.extend(bytes([byte]) * count)
        return bytes(result)


@dataclass
class RunAnalysis:
    """Advisory summary of how well data suits RLE."""

    data_size: int = 0
    total_runs: int = 0
    histogram: Counter = field(default_factory=Counter)

    @property
    def average_run_length(self) -> float:
        if self.total_runs == 0:
            return 0.0
        return self.data_size / self.total_runs

    @property
    def long_runs(self) -> int:
        """Runs of 4 bytes or more."""
        return sum(count for length, count in self.histogram.items() if length > 3)

    @property
    def estimated_size(self) -> int:
        """Size RLECompressor would emit, long runs split at MAX_RUN."""
        pairs = sum(
            -(-length // RLECompressor.MAX_RUN) * count
            for length, count in self.histogram.items()
        )
        return pairs * 2

    @property
    def estimated_ratio(self) -> float:
        if self.data_size == 0:
            return 0.0
        return self.estimated_size / self.data_size

    def report(self) -> str:
        if self.data_size == 0:
            return "Data is empty"
        long_share = self.long_runs / self.total_runs * 100
        return "\n".join([
            "=== RLE analysis ===",
            f"Total runs: {self.total_runs}",
            f"Average run length: {self.average_run_length:.2f}",
            f"Long runs (4+ bytes): {self.long_runs} ({long_share:.1f}%)",
            f"Estimated compressed size: {self.estimated_size} bytes",
            f"Estimated ratio: {self.estimated_ratio * 100:.2f}%",
        ])


def analyze_runs(data: bytes) -> RunAnalysis:
    """
    Builds a histogram of run lengths (uncapped) and a size forecast.
    Nothing about the binary format depends on this.
    """
    analysis = RunAnalysis(data_size=len(data))
    if not data:
        return analysis

    current_byte = data[0]
    length = 1
    for byte in data[1:]:
        if byte == current_byte:
            length += 1
        else:
            analysis.histogram[length] += 1
            current_byte = byte
            length = 1
    analysis.histogram[length] += 1
    analysis.total_runs = sum(analysis.histogram.values())
    return analysis
