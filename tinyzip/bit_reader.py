from bitarray import bitarray


class BitReader:
    """
    Reads bits (MSB first) from an in-memory byte string.
    """

    def __init__(self, data: bytes, padding: int = 0):
        """
        :param data: packed bytes
        :param padding: number of trailing bits of the last byte
            that carry no information
        """
        self.bits = bitarray(endian="big")
        self.bits.frombytes(bytes(data))
        if padding:
            del self.bits[len(self.bits) - padding:]
        self.pos = 0

    def read_bit(self) -> int:
        """
        Reads a single bit and returns it as 0 or 1.
        """
        if self.pos >= len(self.bits):
            raise EOFError("Bit stream exhausted")
        val = self.bits[self.pos]
        self.pos += 1
        return val

    def read_bits_msb(self, n: int) -> int:
        """
        Reads n bits, most significant first, and returns them as an int.
        """
        if self.pos + n > len(self.bits):
            raise EOFError("Not enough bits left to read")
        val = 0
        for _ in range(n):
            val = (val << 1) | self.read_bit()
        return val

    def remaining(self) -> int:
        return len(self.bits) - self.pos
