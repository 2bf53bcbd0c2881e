"""
Huffman coding algorithm -
data compression algorithm
"""

import heapq
import struct
from collections import defaultdict

from bitarray import bitarray

from tinyzip.bit_reader import BitReader
from tinyzip.bit_writer import BitWriter
from tinyzip.compressor_ABC import (
    Compressor,
    InternalInvariantError,
    MalformedInputError,
)

# [distinct count:1]
COUNT_FORMAT = ">B"
# [byte:1][frequency:4]
ENTRY_FORMAT = ">BI"
# [original length:4][padding bits:1]
TRAILER_FORMAT = ">IB"


class Node:
    """
    Class object for Node in Huffman's Tree
    """

    def __init__(self, value, val_freq: int, order: int = 0):
        """
        Function initializes the structure of a node.

        :param value: byte held by a leaf, None for internal nodes
        :param val_freq: int, the frequency in our data for this value
        :param order: int, insertion order, breaks frequency ties
        """
        self.left = None
        self.right = None
        self.value = value
        self.val_freq = val_freq
        self.order = order

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __lt__(self, val):
        return (self.val_freq, self.order) < (val.val_freq, val.order)


class HuffmanTree:
    """
    Class object for Huffman Tree - main structure used
    in Huffman coding algorithm. Object includes the frequency
    table, the tree and the code table derived from it.
    """

    def __init__(self, data=None):
        """
        Function initializes the structure of Huffman Tree.
        """
        self.res_codes = {}
        self.root = None
        self.char_frequency_dict = {}
        if data:
            self.char_frequency_dict = self.char_frequency(data)
            self.tree()
            self.codes_generation()

    @classmethod
    def build_from_freq(cls, freq_dict: dict) -> "HuffmanTree":
        """
        Builds a Huffman tree from an external frequency table,
        generates prefix codes and returns the instance.

        :param freq_dict: dict {byte: frequency}
        :return: HuffmanTree with filled res_codes
        """
        tree = cls()
        tree.char_frequency_dict = dict(freq_dict)
        tree.tree()
        tree.codes_generation()
        return tree

    @staticmethod
    def char_frequency(data) -> dict:
        """
        Function builds dictionary with frequency
        of each byte for given data.

        :param data: data to count byte frequency for
        :return: dict, dictionary with byte frequency
        """
        char_frequency_dict = defaultdict(int)
        for el in data:
            char_frequency_dict[el] += 1

        return dict(char_frequency_dict)

    def tree(self):
        """
        Function builds Huffman Tree.

        Leaves are pushed in ascending byte order and every node carries
        its insertion order, so equal frequencies always merge the same
        way and encoder and decoder rebuild identical trees.
        """
        if not self.char_frequency_dict:
            raise ValueError("Cannot build a Huffman tree from an empty frequency table")

        nodes = []
        order = 0
        for val in sorted(self.char_frequency_dict):
            nodes.append(Node(val, self.char_frequency_dict[val], order))
            order += 1
        heapq.heapify(nodes)

        while len(nodes) > 1:
            # left smallest node
            l = heapq.heappop(nodes)
            # right smallest node
            r = heapq.heappop(nodes)

            # creating new merged node from the smallest left and right
            new_merged_node = Node(None, l.val_freq + r.val_freq, order)
            order += 1
            new_merged_node.left, new_merged_node.right = l, r
            heapq.heappush(nodes, new_merged_node)

        self.root = nodes[0]

    def codes_generation(self, node=None, curr_code=None):
        """
        Recursive function that generates
        code for each byte, preorder traversal of Huffman's tree

        :param node: node to start traversal from
        :param curr_code: bitarray, current code of a byte
        """
        # if node is not passed, we start traversal from the root
        if node is None:
            node = self.root
            self.res_codes = {}
            # a one-node tree still needs one bit per byte
            if node.is_leaf():
                self.res_codes[node.value] = bitarray("0", endian="big")
                return
            curr_code = bitarray(endian="big")

        # if our node is a leaf than we write the code for it
        if node.is_leaf():
            self.res_codes[node.value] = curr_code
            return

        self.codes_generation(node.left, curr_code + bitarray("0", endian="big"))
        self.codes_generation(node.right, curr_code + bitarray("1", endian="big"))

    def code_lengths(self) -> dict:
        """
        :return: dict {byte: code length in bits}
        """
        return {val: len(code) for val, code in self.res_codes.items()}


class HuffmanCompressor(Compressor):
    """
    Huffman codec. Output layout:
    [distinct count:1] ([byte:1][frequency:4]) * count
    [original length:4][padding bits:1] [packed codes, MSB first]

    A distinct count of 0 stands for 256, since non-empty input always
    has at least one distinct byte.
    """

    def name(self) -> str:
        return "Huffman Coding"

    def compress(self, data: bytes, verbose: bool = False) -> bytes:
        if not data:
            return b""

        try:
            huffman_tree = HuffmanTree(data)
        except ValueError as err:
            raise InternalInvariantError(f"Huffman: failed to build tree ({err})") from err
        freq = huffman_tree.char_frequency_dict

        header = bytearray(struct.pack(COUNT_FORMAT, len(freq) % 256))
        for val in sorted(freq):
            header += struct.pack(ENTRY_FORMAT, val, freq[val])

        writer = BitWriter()
        for el in data:
            writer.write_bits(huffman_tree.res_codes[el])

        header += struct.pack(TRAILER_FORMAT, len(data), writer.padding)
        if verbose:
            lengths = huffman_tree.code_lengths()
            print(f"Huffman: {len(freq)} distinct bytes, code lengths {min(lengths.values())}-{max(lengths.values())} bits")
            print(f"Huffman: {len(writer)} payload bits, {writer.padding} padding bits")
        return bytes(header) + writer.to_bytes()

    def decompress(self, data: bytes) -> bytes:
        if not data:
            return b""

        offset = 0
        (char_count,) = struct.unpack_from(COUNT_FORMAT, data, offset)
        offset += struct.calcsize(COUNT_FORMAT)
        if char_count == 0:
            char_count = 256

        entry_size = struct.calcsize(ENTRY_FORMAT)
        freq = {}
        for _ in range(char_count):
            if offset + entry_size > len(data):
                raise MalformedInputError("Huffman: incomplete frequency table")
            val, val_freq = struct.unpack_from(ENTRY_FORMAT, data, offset)
            offset += entry_size
            if val in freq or val_freq == 0:
                raise MalformedInputError(
                    f"Huffman: corrupt frequency table entry for byte {val}"
                )
            freq[val] = val_freq

        try:
            huffman_tree = HuffmanTree.build_from_freq(freq)
        except ValueError as err:
            raise MalformedInputError(f"Huffman: failed to rebuild tree ({err})") from err

        if offset + 4 > len(data):
            raise MalformedInputError("Huffman: missing data length")
        if offset + struct.calcsize(TRAILER_FORMAT) > len(data):
            raise MalformedInputError("Huffman: missing padding bits")
        data_len, padding = struct.unpack_from(TRAILER_FORMAT, data, offset)
        offset += struct.calcsize(TRAILER_FORMAT)
        if data_len != sum(freq.values()):
            raise MalformedInputError(
                f"Huffman: data length {data_len} does not match frequency table "
                f"total {sum(freq.values())}"
            )
        if padding > 7:
            raise MalformedInputError(f"Huffman: invalid padding bit count {padding}")

        payload = data[offset:]
        root = huffman_tree.root
        # one-node tree: the payload bits carry nothing
        if root.is_leaf():
            if len(payload) != (data_len + 7) // 8:
                raise MalformedInputError(
                    f"Huffman: expected {(data_len + 7) // 8} payload bytes, got {len(payload)}"
                )
            return bytes([root.value]) * data_len

        if not payload and data_len:
            raise MalformedInputError("Huffman: missing payload")
        reader = BitReader(payload, padding if payload else 0)

        result = bytearray()
        current = root
        try:
            while len(result) < data_len:
                current = current.right if reader.read_bit() else current.left
                if current.is_leaf():
                    result.append(current.value)
                    current = root
        except EOFError as err:
            raise MalformedInputError(
                f"Huffman: payload ended after {len(result)} of {data_len} bytes"
            ) from err

        if reader.remaining():
            raise MalformedInputError(
                f"Huffman: {reader.remaining()} bits left after {data_len} bytes"
            )

        return bytes(result)
