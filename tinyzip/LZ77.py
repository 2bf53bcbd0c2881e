"""
This module implements the LZ77 compression algorithm.
It compresses data by finding repeated sequences and encoding them
as back references into the already produced output.
"""

import struct
from typing import List, NamedTuple

from tinyzip.compressor_ABC import Compressor, MalformedInputError

LITERAL_FLAG = 0x00
MATCH_FLAG = 0x01
MIN_MATCH = 3

# [flag][byte]
LITERAL_FORMAT = ">BB"
# [flag][distance:2][length:1][literal:1]
MATCH_FORMAT = ">BHBB"


class Token(NamedTuple):
    """
    One LZ77 token. distance == 0 marks a literal; otherwise the token
    copies `length` bytes from `distance` bytes back and then appends
    `literal`.
    """

    distance: int
    length: int
    literal: int

    @classmethod
    def for_literal(cls, literal: int) -> "Token":
        return cls(0, 0, literal)

    def is_literal(self) -> bool:
        return self.distance == 0

    def to_bytes(self) -> bytes:
        if self.is_literal():
            return struct.pack(LITERAL_FORMAT, LITERAL_FLAG, self.literal)
        return struct.pack(MATCH_FORMAT, MATCH_FLAG, self.distance, self.length, self.literal)


class MatchResult(NamedTuple):
    distance: int
    length: int


NO_MATCH = MatchResult(0, 0)


class Matcher:
    """
    Longest-match search over the sliding window.
    """

    def __init__(self, window_size: int, buffer_size: int, min_match: int = 3):
        self.window_size = window_size
        self.buffer_size = buffer_size
        self.min_match = min_match

    def find_longest_match(self, data: bytes, pos: int) -> MatchResult:
        """
        Find the longest earlier occurrence of data[pos:] inside the window.

        A match never runs into data[pos:] itself and is capped at
        buffer_size. Among candidates of the same length the nearest
        one (smallest distance) is returned. Matches shorter than
        min_match are reported as NO_MATCH.
        """
        max_lookahead = min(len(data) - pos, self.buffer_size)
        if pos == 0 or max_lookahead < self.min_match:
            return NO_MATCH

        start = max(0, pos - self.window_size)
        prefix = data[pos:pos + self.min_match]
        best = NO_MATCH

        # candidates are visited nearest first; the prefix has to fit
        # entirely before pos, so rfind never looks past it
        end = pos
        while True:
            candidate = data.rfind(prefix, start, end)
            if candidate < 0:
                break

            distance = pos - candidate
            limit = min(max_lookahead, distance)
            length = self.min_match
            while length < limit and data[candidate + length] == data[pos + length]:
                length += 1

            if length > best.length:
                best = MatchResult(distance, length)
                # Early exit if maximum length is found
                if length == max_lookahead:
                    break

            end = candidate + self.min_match - 1

        return best


class LZ77Encoder:
    """
    Turns bytes into a list of tokens.
    """

    def __init__(self, window_size: int, buffer_size: int, min_match: int = 3):
        self.matcher = Matcher(window_size, buffer_size, min_match)

    def encode(self, data: bytes, verbose: bool = False) -> List[Token]:
        """
        Every match token also consumes the byte that follows the match.
        A match is shortened by one when it would reach the end of the
        data, so that byte always exists.
        """
        data = bytes(data)
        tokens = []
        pos = 0

        while pos < len(data):
            match = self.matcher.find_longest_match(data, pos)
            length = match.length
            if pos + length >= len(data):
                length = len(data) - pos - 1

            if length >= self.matcher.min_match:
                token = Token(match.distance, length, data[pos + length])
                if verbose:
                    print(f"Match at position {pos}: distance={token.distance}, length={length}")
                pos += length + 1
            else:
                token = Token.for_literal(data[pos])
                if verbose:
                    print(f"Literal at position {pos}: {data[pos]}")
                pos += 1
            tokens.append(token)

        return tokens

    @staticmethod
    def tokens_to_bytes(tokens: List[Token]) -> bytes:
        return b"".join(token.to_bytes() for token in tokens)


class LZ77Decoder:
    """
    Parses serialized tokens and replays them.
    """

    @staticmethod
    def decode(data: bytes) -> List[Token]:
        """
        Parses the token stream. Raises MalformedInputError on an unknown
        flag or a token cut short.
        """
        tokens = []
        pos = 0
        literal_size = struct.calcsize(LITERAL_FORMAT)
        match_size = struct.calcsize(MATCH_FORMAT)

        while pos < len(data):
            flag = data[pos]
            if flag == LITERAL_FLAG:
                if pos + literal_size > len(data):
                    raise MalformedInputError(f"LZ77: missing literal at offset {pos + 1}")
                _, literal = struct.unpack_from(LITERAL_FORMAT, data, pos)
                tokens.append(Token.for_literal(literal))
                pos += literal_size
            elif flag == MATCH_FLAG:
                if pos + match_size > len(data):
                    raise MalformedInputError(
                        f"LZ77: incomplete match token at offset {pos} "
                        f"({len(data) - pos} of {match_size} bytes)"
                    )
                _, distance, length, literal = struct.unpack_from(MATCH_FORMAT, data, pos)
                if distance == 0:
                    raise MalformedInputError(f"LZ77: match token with zero distance at offset {pos}")
                if length < MIN_MATCH:
                    raise MalformedInputError(
                        f"LZ77: match length {length} below minimum {MIN_MATCH} at offset {pos}"
                    )
                tokens.append(Token(distance, length, literal))
                pos += match_size
            else:
                raise MalformedInputError(f"LZ77: invalid token flag {flag:#04x} at offset {pos}")

        return tokens

    @staticmethod
    def tokens_to_data(tokens: List[Token]) -> bytes:
        """
        Rebuilds the original bytes. Copies go one byte at a time so a
        match may overlap the bytes it is producing.
        """
        output_buffer = bytearray()

        for token in tokens:
            if not token.is_literal():
                if token.distance > len(output_buffer):
                    raise MalformedInputError(
                        f"LZ77: invalid distance {token.distance}, "
                        f"only {len(output_buffer)} bytes decoded"
                    )
                start = len(output_buffer) - token.distance
                for i in range(token.length):
                    output_buffer.append(output_buffer[start + i])
            output_buffer.append(token.literal)

        return bytes(output_buffer)


class LZ77Compressor(Compressor):
    """
    LZ77 compression algorithm implementation.
    Literal tokens are [0x00][byte], match tokens are
    [0x01][distance:2][length:1][literal:1].
    """

    WINDOW_SIZE = 4096  # size of the search window
    BUFFER_SIZE = 18  # longest match
    MIN_MATCH = MIN_MATCH

    MAX_WINDOW_SIZE = 0xFFFF  # distance field is 2 bytes
    MAX_BUFFER_SIZE = 0xFF  # length field is 1 byte

    def __init__(self, window_size: int = None, buffer_size: int = None):
        if window_size is None:
            window_size = self.WINDOW_SIZE
        if buffer_size is None:
            buffer_size = self.BUFFER_SIZE
        if window_size < 1 or buffer_size < self.MIN_MATCH:
            raise ValueError(
                f"window_size must be >= 1 and buffer_size >= {self.MIN_MATCH}"
            )
        self.window_size = min(window_size, self.MAX_WINDOW_SIZE)
        self.buffer_size = min(buffer_size, self.MAX_BUFFER_SIZE)
        self.encoder = LZ77Encoder(self.window_size, self.buffer_size, self.MIN_MATCH)
        self.decoder = LZ77Decoder()

    def name(self) -> str:
        return "LZ77"

    def compress(self, data: bytes, verbose: bool = False) -> bytes:
        tokens = self.encoder.encode(data, verbose=verbose)
        if verbose:
            matches = sum(1 for token in tokens if not token.is_literal())
            print(f"LZ77 produced {len(tokens)} tokens ({matches} matches)")
        return self.encoder.tokens_to_bytes(tokens)

    def decompress(self, data: bytes) -> bytes:
        tokens = self.decoder.decode(data)
        return self.decoder.tokens_to_data(tokens)

    def find_longest_match(self, data: bytes, pos: int) -> tuple[int, int]:
        """
        Returns (distance, length) of the longest match at pos,
        (0, 0) when there is none.
        """
        match = self.encoder.matcher.find_longest_match(bytes(data), pos)
        return match.distance, match.length
