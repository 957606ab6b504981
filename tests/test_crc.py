import random

from pngscope import crc


def test_known_iend_crc():
    assert crc.compute(b"IEND") == 0xAE426082
    assert crc.chunk_crc(b"IEND", b"") == 0xAE426082


def test_matches_reference_table_implementation():
    def reference(data):
        table = []
        for n in range(256):
            c = n
            for _ in range(8):
                c = 0xEDB88320 ^ (c >> 1) if c & 1 else c >> 1
            table.append(c)
        c = 0xFFFFFFFF
        for b in data:
            c = table[(c ^ b) & 0xFF] ^ (c >> 8)
        return c ^ 0xFFFFFFFF

    payload = bytes(range(256)) * 3
    assert crc.compute(b"IDAT" + payload) == reference(b"IDAT" + payload)
    assert crc.chunk_crc(b"IDAT", memoryview(payload)) == reference(b"IDAT" + payload)


def test_single_bit_flip_changes_crc():
    rng = random.Random(7)
    payload = bytearray(rng.getrandbits(8) for _ in range(64))
    original = crc.chunk_crc(b"tEXt", payload)
    for bit in range(len(payload) * 8):
        flipped = bytearray(payload)
        flipped[bit // 8] ^= 1 << (bit % 8)
        assert crc.chunk_crc(b"tEXt", flipped) != original
    assert crc.verify(b"tEXt", payload, original)
