"""Decoding, encoding and manipulation of 8x8 two-bit-per-pixel tiles."""

from typing import List, Sequence, Tuple

TILE_SIZE = 8
TILE_BYTES = 16
TILE_COUNT = 256


def _check_coordinate(name: str, value: int) -> None:
    if not 0 <= value < TILE_SIZE:
        raise IndexError(f"{name}={value} is outside the tile (0-{TILE_SIZE - 1})")


class Tile:
    """An 8x8 tile kept both as its 16 raw bytes and as decoded pixels."""

    def __init__(self) -> None:
        self._data = bytearray(TILE_BYTES)
        self._pixels: List[List[int]] = [[0] * TILE_SIZE for _ in range(TILE_SIZE)]

    @classmethod
    def from_data(cls, data: Sequence[int]) -> "Tile":
        """Build a tile from 16 bytes of plane-interleaved data."""
        tile = cls()
        tile.data = data
        return tile

    @property
    def data(self) -> bytes:
        """The 16 raw bytes: for each row, low plane then high plane."""
        return bytes(self._data)

    @data.setter
    def data(self, data: Sequence[int]) -> None:
        raw = bytearray(data)
        if len(raw) != TILE_BYTES:
            raise ValueError(f"tile data must be {TILE_BYTES} bytes, got {len(raw)}")
        self._data = raw
        self._decode()

    @property
    def pixels(self) -> Tuple[Tuple[int, ...], ...]:
        """Decoded color numbers, indexed as ``pixels[y][x]``."""
        return tuple(tuple(row) for row in self._pixels)

    def _decode(self) -> None:
        for y, row in enumerate(self._pixels):
            low = self._data[y * 2]
            high = self._data[y * 2 + 1]
            for x in range(TILE_SIZE):
                shift = 7 - x
                row[x] = (((high >> shift) & 1) << 1) | ((low >> shift) & 1)

    def _encode(self) -> None:
        for y, row in enumerate(self._pixels):
            low = 0
            high = 0
            for x, color in enumerate(row):
                shift = 7 - x
                low |= (color & 1) << shift
                high |= ((color >> 1) & 1) << shift
            self._data[y * 2] = low
            self._data[y * 2 + 1] = high

    def get_pixel(self, x: int, y: int) -> int:
        """Color number (0-3) at column ``x``, row ``y``."""
        _check_coordinate("x", x)
        _check_coordinate("y", y)
        return self._pixels[y][x]

    def set_pixel(self, x: int, y: int, value: int) -> None:
        """Set the color number at ``(x, y)``; only the low two bits are kept."""
        _check_coordinate("x", x)
        _check_coordinate("y", y)
        self._pixels[y][x] = value & 0x3
        self._encode()

    def flip_h(self) -> None:
        """Mirror the tile left to right."""
        for row in self._pixels:
            row.reverse()
        self._encode()

    def flip_v(self) -> None:
        """Mirror the tile top to bottom."""
        self._pixels.reverse()
        self._encode()

    def rotate(self) -> None:
        """Rotate the tile 90 degrees clockwise."""
        rotated = [[0] * TILE_SIZE for _ in range(TILE_SIZE)]
        for y, row in enumerate(self._pixels):
            for x, color in enumerate(row):
                rotated[x][7 - y] = color
        self._pixels = rotated
        self._encode()

    def clear(self) -> None:
        """Reset every pixel to color 0."""
        self._data = bytearray(TILE_BYTES)
        self._pixels = [[0] * TILE_SIZE for _ in range(TILE_SIZE)]

    def __repr__(self) -> str:
        rows = "".join(
            "  " + "".join(str(color) for color in row) + "\n" for row in self._pixels
        )
        return f"Tile [\n{rows}]"


def _base_address(mode: int) -> int:
    return 0x8800 if mode == 0 else 0x8000


class TileMap:
    """256 tiles addressed either unsigned (mode 1) or signed (mode 0)."""

    def __init__(self, mode: int) -> None:
        self._tiles = [Tile() for _ in range(TILE_COUNT)]
        self.mode = mode
        self.base_address = _base_address(mode)

    def _real_index(self, index: int) -> int:
        if not 0 <= index < TILE_COUNT:
            raise IndexError(f"tile index {index} is outside 0-255")
        if self.mode == 0:
            signed = index - 256 if index >= 128 else index
            return signed + 128
        return index

    def set_tile(self, index: int, data: Sequence[int]) -> None:
        """Store a tile decoded from ``data`` under ``index``."""
        self._tiles[self._real_index(index)] = Tile.from_data(data)

    def get_tile(self, index: int) -> Tile:
        """The tile stored under ``index``; changes to it are kept."""
        return self._tiles[self._real_index(index)]

    def set_mode(self, mode: int) -> None:
        """Switch addressing mode and the matching base address."""
        self.mode = mode
        self.base_address = _base_address(mode)

    def update_from_vram(self, vram: Sequence[int]) -> None:
        """Reload all 256 tiles from video RAM starting at the base address."""
        start = self.base_address - 0x8000
        for i in range(TILE_COUNT):
            offset = start + i * TILE_BYTES
            chunk = vram[offset:offset + TILE_BYTES]
            if len(chunk) != TILE_BYTES:
                raise IndexError(f"VRAM too short for tile {i} at offset 0x{offset:04X}")
            self.set_tile(i, chunk)