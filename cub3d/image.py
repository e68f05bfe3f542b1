"""Off-screen 32-bit images with an explicit byte layout."""

from __future__ import annotations

from dataclasses import dataclass, field

BITS_PER_PIXEL = 32
_BYTES_PER_PIXEL = BITS_PER_PIXEL // 8
LITTLE_ENDIAN = 0
BIG_ENDIAN = 1


@dataclass(eq=False)
class Image:
    """A width x height image stored as rows of 32-bit pixels.

    ``byte_order`` is 0 for little-endian pixels and 1 for big-endian ones.
    ``data`` holds ``size_line`` bytes per row, rows from top to bottom.
    """

    width: int
    height: int
    byte_order: int = LITTLE_ENDIAN
    data: bytearray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"image size must be positive, got {self.width}x{self.height}")
        if self.byte_order not in (LITTLE_ENDIAN, BIG_ENDIAN):
            raise ValueError(f"byte order must be 0 or 1, got {self.byte_order!r}")
        self.data = bytearray(self.size_line * self.height)

    @property
    def bits_per_pixel(self) -> int:
        return BITS_PER_PIXEL

    @property
    def size_line(self) -> int:
        """Number of bytes in one row."""
        return self.width * _BYTES_PER_PIXEL

    @property
    def _endian(self) -> str:
        return "big" if self.byte_order == BIG_ENDIAN else "little"

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return y * self.size_line + x * _BYTES_PER_PIXEL

    def set_pixel(self, x: int, y: int, color: int) -> None:
        """Store a 32-bit colour at (x, y); higher bits are dropped."""
        offset = self._offset(x, y)
        self.data[offset:offset + _BYTES_PER_PIXEL] = (color & 0xFFFFFFFF).to_bytes(
            _BYTES_PER_PIXEL, self._endian
        )

    def get_pixel(self, x: int, y: int) -> int:
        """Return the unsigned 32-bit colour at (x, y)."""
        offset = self._offset(x, y)
        return int.from_bytes(self.data[offset:offset + _BYTES_PER_PIXEL], self._endian)

    def fill(self, color: int) -> None:
        """Set every pixel to one colour."""
        pixel = (color & 0xFFFFFFFF).to_bytes(_BYTES_PER_PIXEL, self._endian)
        self.data[:] = pixel * (self.width * self.height)