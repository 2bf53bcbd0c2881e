"""
Compression statistics and byte-level measurements
"""

import math
from collections import Counter
from dataclasses import dataclass


@dataclass
class CompressionStats:
    """Sizes before and after compression for a single call."""

    original_size: int
    compressed_size: int
    algorithm: str

    @property
    def ratio(self) -> float:
        """compressed / original, 0.0 for empty input"""
        if self.original_size > 0:
            return self.compressed_size / self.original_size
        return 0.0

    @property
    def reduction(self) -> float:
        """Saved space in percent (negative when the data grew)."""
        if self.original_size == 0:
            return 0.0
        return (1.0 - self.ratio) * 100

    def __str__(self):
        return (
            f"{self.algorithm}: {self.original_size} -> {self.compressed_size} bytes "
            f"(ratio {self.ratio * 100:.2f}%)"
        )


def count_bytes(data: bytes) -> Counter:
    """
    Function builds a table with the number of occurrences
    of each byte value in data.

    :param data: bytes to count
    :return: Counter, {byte value: count}
    """
    return Counter(data)


def calculate_entropy(data: bytes) -> float:
    """
    Shannon entropy of data in bits per byte.

    :param data: bytes to measure
    :return: float in [0, 8], 0.0 for empty data
    """
    if not data:
        return 0.0

    total = len(data)
    entropy = 0.0
    for count in count_bytes(data).values():
        p = count / total
        entropy -= p * math.log2(p)
    return entropy


def format_bytes(size: int) -> str:
    """
    Formats a byte count for humans: "512 B", "1.5 KB", "3.0 MB", ...
    """
    unit = 1024
    if size < unit:
        return f"{size} B"

    div, exp = unit, 0
    n = size // unit
    while n >= unit and exp < 3:
        div *= unit
        exp += 1
        n //= unit

    units = ["KB", "MB", "GB", "TB"]
    return f"{size / div:.1f} {units[exp]}"


def format_stats(stats: CompressionStats) -> str:
    """
    Multi-line report of compression statistics.
    """
    lines = [
        "=== Compression statistics ===",
        f"Algorithm:       {stats.algorithm}",
        f"Original size:   {format_bytes(stats.original_size)} ({stats.original_size} bytes)",
        f"Compressed size: {format_bytes(stats.compressed_size)} ({stats.compressed_size} bytes)",
        f"Ratio:           {stats.ratio * 100:.2f}% ({stats.ratio:.3f})",
    ]
    if stats.ratio < 1.0:
        lines.append(f"Reduction:       {stats.reduction:.2f}%")
    else:
        lines.append(f"Growth:          {-stats.reduction:.2f}%")
    return "\n".join(lines)
