import pytest

from tinyzip import COMPRESSORS, HuffmanCompressor, RLECompressor
from tinyzip.cli import default_output, main

SAMPLE = b"Hello World! " * 200 + b"\x00\x01\x02" * 50


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "sample.txt"
    path.write_bytes(SAMPLE)
    return path


@pytest.mark.parametrize("algo", sorted(COMPRESSORS))
def test_cli_roundtrip(sample_file, tmp_path, algo, capsys):
    compressed = tmp_path / f"sample.{algo}"
    restored = tmp_path / f"restored.{algo}"

    assert main(["-c", "--algo", algo, "-i", str(sample_file), "-o", str(compressed)]) == 0
    assert main(["-d", "--algo", algo, "-i", str(compressed), "-o", str(restored)]) == 0

    assert restored.read_bytes() == SAMPLE
    out = capsys.readouterr().out
    assert "Compressed:" in out
    assert "Decompressed:" in out


def test_cli_default_compressed_name(sample_file, capsys):
    assert main(["-c", "-v", "-i", str(sample_file)]) == 0
    compressed = sample_file.with_name("sample.txt.compressed")
    assert RLECompressor().decompress(compressed.read_bytes()) == SAMPLE
    assert "=== Compression statistics ===" in capsys.readouterr().out


def test_default_output():
    assert default_output("a.txt", decompress=False) == "a.txt.compressed"
    assert default_output("a.txt.compressed", decompress=True) == "a.txt"
    assert default_output("a.bin", decompress=True) == "a.bin.decompressed"


def test_cli_analyze_rle(sample_file, capsys):
    assert main(["-a", "--algo", "rle", "-i", str(sample_file)]) == 0
    out = capsys.readouterr().out
    assert "=== RLE analysis ===" in out
    assert "Entropy:" in out
    assert "=== Trial compression ===" in out


def test_cli_analyze_huffman(sample_file, capsys):
    assert main(["-a", "--algo", "huffman", "-i", str(sample_file)]) == 0
    out = capsys.readouterr().out
    assert "RLE analysis" not in out
    assert "Huffman Coding" in out


def test_cli_corrupt_input(tmp_path, capsys):
    corrupt = tmp_path / "corrupt.rle"
    corrupt.write_bytes(b"A")
    assert main(["-d", "--algo", "rle", "-i", str(corrupt), "-o", str(tmp_path / "out")]) == 1
    assert "RLE" in capsys.readouterr().err


def test_cli_missing_input(tmp_path, capsys):
    assert main(["-c", "-i", str(tmp_path / "missing.txt")]) == 1
    assert "Error reading" in capsys.readouterr().err


def test_cli_requires_one_mode(sample_file):
    with pytest.raises(SystemExit):
        main(["-i", str(sample_file)])
    with pytest.raises(SystemExit):
        main(["-c", "-d", "-i", str(sample_file)])


def test_compressor_file_helpers(sample_file, tmp_path):
    compressed = tmp_path / "sample.huf"
    restored = tmp_path / "sample.out"

    info = HuffmanCompressor.compress_file(str(sample_file), str(compressed))
    assert "Huffman Coding" in info
    HuffmanCompressor.decompress_file(str(compressed), str(restored))
    assert restored.read_bytes() == SAMPLE


def test_compressor_bytes_helpers():
    compressed, info = RLECompressor.compress_bytes(b"aaaabbbb")
    assert compressed == b"a\x04b\x04"
    assert "RLE" in info
    restored, _ = RLECompressor.decompress_bytes(compressed)
    assert restored == b"aaaabbbb"
