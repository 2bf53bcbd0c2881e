"""
Command line front end: compress, decompress or analyze a file
with one of the codecs.
"""

import argparse
import os
import sys

from tinyzip import COMPRESSORS, __version__
from tinyzip.compressor_ABC import Compressor, MalformedInputError
from tinyzip.RLE import RLECompressor, analyze_runs
from tinyzip.stats import calculate_entropy, format_bytes, format_stats

COMPRESSED_SUFFIX = ".compressed"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tinyzip",
        description="Small lossless compressors: RLE, Huffman coding and LZ77",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("-c", "--compress", action="store_true", help="compress the input file")
    mode.add_argument("-d", "--decompress", action="store_true", help="decompress the input file")
    mode.add_argument("-a", "--analyze", action="store_true", help="analyze the input file")
    parser.add_argument("--version", action="version", version=f"tinyzip {__version__}")
    parser.add_argument(
        "--algo", choices=sorted(COMPRESSORS), default="rle", help="compression algorithm"
    )
    parser.add_argument("-i", "--input", required=True, help="input file")
    parser.add_argument("-o", "--output", help="output file")
    parser.add_argument("-v", "--verbose", action="store_true", help="detailed output")
    return parser


def default_output(input_file: str, decompress: bool) -> str:
    if not decompress:
        return input_file + COMPRESSED_SUFFIX
    base, ext = os.path.splitext(input_file)
    if ext == COMPRESSED_SUFFIX:
        return base
    return input_file + ".decompressed"


def handle_analyze(compressor: Compressor, data: bytes):
    print("=== Data analysis ===")
    print(f"Algorithm: {compressor.name()}")
    print(f"Data size: {format_bytes(len(data))} ({len(data)} bytes)")
    if data:
        entropy = calculate_entropy(data)
        print(f"Entropy: {entropy:.3f} bits/byte")
        print(f"Theoretical minimum size: {entropy * len(data) / 8:.1f} bytes")
    print()

    if isinstance(compressor, RLECompressor):
        print(analyze_runs(data).report())
        print()

    print("=== Trial compression ===")
    _, stats = compressor.compress_with_stats(data)
    print(format_stats(stats))


def handle_compress(compressor: Compressor, data: bytes, input_file: str, output_file: str, verbose: bool):
    compressed, stats = compressor.compress_with_stats(data)
    with open(output_file, "wb") as f:
        f.write(compressed)

    print(f"Compressed: {input_file} -> {output_file}")
    if verbose:
        print()
        print(format_stats(stats))
    else:
        print(
            f"Ratio: {stats.ratio * 100:.2f}% "
            f"({format_bytes(stats.original_size)} -> {format_bytes(stats.compressed_size)})"
        )


def handle_decompress(compressor: Compressor, data: bytes, input_file: str, output_file: str, verbose: bool):
    restored = compressor.decompress(data)
    with open(output_file, "wb") as f:
        f.write(restored)

    print(f"Decompressed: {input_file} -> {output_file}")
    if verbose:
        print(f"Compressed size: {format_bytes(len(data))} ({len(data)} bytes)")
        print(f"Restored size: {format_bytes(len(restored))} ({len(restored)} bytes)")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        with open(args.input, "rb") as f:
            data = f.read()
    except OSError as err:
        print(f"Error reading {args.input}: {err}", file=sys.stderr)
        return 1

    compressor = COMPRESSORS[args.algo]()

    if args.verbose:
        print(f"Input file: {args.input} ({format_bytes(len(data))})")
        print(f"Algorithm: {args.algo.upper()}")
        if data:
            print(f"Entropy: {calculate_entropy(data):.3f} bits/byte")
        print()

    try:
        if args.analyze:
            handle_analyze(compressor, data)
        else:
            output_file = args.output or default_output(args.input, args.decompress)
            if args.compress:
                handle_compress(compressor, data, args.input, output_file, args.verbose)
            else:
                handle_decompress(compressor, data, args.input, output_file, args.verbose)
    except MalformedInputError as err:
        print(f"Decompression error: {err}", file=sys.stderr)
        return 1
    except OSError as err:
        print(f"Error writing output: {err}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
