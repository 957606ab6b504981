"""Position-tracking reader over an immutable byte buffer."""

from __future__ import annotations

from .errors import TruncatedInputError


class ByteCursor:
    """Big-endian reader with bounds checks.

    Slices are returned as ``memoryview`` objects over the original buffer,
    so reading a large IDAT payload does not copy it.
    """

    def __init__(self, data: bytes, position: int = 0):
        self._view = memoryview(data)
        self._length = len(self._view)
        self._pos = position

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return self._length - self._pos

    def at_end(self) -> bool:
        return self._pos >= self._length

    def _require(self, n: int) -> None:
        if n < 0:
            raise ValueError(f"Cannot read a negative number of bytes ({n})")
        if self._pos + n > self._length:
            raise TruncatedInputError(
                f"Need {n} bytes at offset {self._pos}, only {self.remaining} available"
            )

    def read_uint8(self) -> int:
        self._require(1)
        value = self._view[self._pos]
        self._pos += 1
        return value

    def read_uint32_be(self) -> int:
        self._require(4)
        value = int.from_bytes(self._view[self._pos : self._pos + 4], "big")
        self._pos += 4
        return value

    def peek_bytes(self, n: int) -> memoryview:
        self._require(n)
        return self._view[self._pos : self._pos + n]

    def read_bytes(self, n: int) -> memoryview:
        view = self.peek_bytes(n)
        self._pos += n
        return view

    def skip(self, n: int) -> None:
        self._require(n)
        self._pos += n
