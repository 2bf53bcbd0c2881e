import pytest

from tinyzip.bit_reader import BitReader
from tinyzip.bit_writer import BitWriter
from tinyzip.stats import (
    CompressionStats,
    calculate_entropy,
    count_bytes,
    format_bytes,
    format_stats,
)


def test_stats_ratio():
    stats = CompressionStats(original_size=200, compressed_size=50, algorithm="RLE")
    assert stats.ratio == 0.25
    assert stats.reduction == 75.0
    assert "RLE" in str(stats)


def test_stats_ratio_for_empty_input():
    stats = CompressionStats(original_size=0, compressed_size=0, algorithm="LZ77")
    assert stats.ratio == 0.0
    assert stats.reduction == 0.0


def test_format_stats_growth():
    report = format_stats(CompressionStats(10, 15, "Huffman Coding"))
    assert "Huffman Coding" in report
    assert "Growth:" in report
    assert "50.00%" in report


@pytest.mark.parametrize(
    "size, expected",
    [
        (0, "0 B"),
        (1023, "1023 B"),
        (1024, "1.0 KB"),
        (1536, "1.5 KB"),
        (1024 * 1024, "1.0 MB"),
        (3 * 1024 ** 3, "3.0 GB"),
    ],
)
def test_format_bytes(size, expected):
    assert format_bytes(size) == expected


def test_entropy():
    assert calculate_entropy(b"") == 0.0
    assert calculate_entropy(b"aaaa") == 0.0
    assert calculate_entropy(b"ab") == pytest.approx(1.0)
    assert calculate_entropy(bytes(range(256))) == pytest.approx(8.0)


def test_count_bytes():
    counts = count_bytes(b"hello")
    assert counts[ord("l")] == 2
    assert counts[ord("h")] == 1


def test_bit_writer_pads_to_byte():
    writer = BitWriter()
    writer.write_bits_msb(0b101, 3)
    assert len(writer) == 3
    assert writer.padding == 5
    assert writer.to_bytes() == b"\xa0"


def test_bit_writer_rejects_negative_length():
    with pytest.raises(ValueError):
        BitWriter().write_bits_msb(1, -1)


def test_bit_reader_skips_padding():
    reader = BitReader(b"\xa0", padding=5)
    assert reader.remaining() == 3
    assert reader.read_bits_msb(3) == 0b101
    with pytest.raises(EOFError):
        reader.read_bit()
