from bitarray import bitarray


class BitWriter:
    """
    Simple bit writer into a bitarray with byte alignment.
    Bits are packed most-significant-bit first.
    """

    def __init__(self):
        self.bits = bitarray(endian="big")

    def write_bits(self, bits: bitarray):
        """
        Appends a ready code (e.g. a Huffman code) as-is.
        """
        self.bits.extend(bits)

    def write_bits_msb(self, value: int, length: int):
        """
        Writes length bits of value, most significant bit first.
        """
        if length < 0:
            raise ValueError("Length cannot be negative")
        for i in range(length - 1, -1, -1):
            self.bits.append((value >> i) & 1)

    @property
    def padding(self) -> int:
        """
        Number of zero bits byte alignment will add (0..7).
        """
        return (8 - len(self.bits) % 8) % 8

    def __len__(self):
        return len(self.bits)

    def to_bytes(self) -> bytes:
        """
        Returns the bits padded with zeros to a whole number of bytes.
        """
        return self.bits.tobytes()
