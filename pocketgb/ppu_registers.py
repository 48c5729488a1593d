"""LCD register bit layouts, palettes and timing constants."""

from dataclasses import dataclass

# LCDC bits
LCDC_ENABLE = 1 << 7
LCDC_WIN_MAP = 1 << 6
LCDC_WIN_ENABLE = 1 << 5
LCDC_TILE_DATA = 1 << 4
LCDC_BG_MAP = 1 << 3
LCDC_OBJ_SIZE = 1 << 2
LCDC_OBJ_ENABLE = 1 << 1
LCDC_BG_ENABLE = 1 << 0

# STAT bits
STAT_LYC_INT = 1 << 6
STAT_OAM_INT = 1 << 5
STAT_VBLANK_INT = 1 << 4
STAT_HBLANK_INT = 1 << 3
STAT_LYC_FLAG = 1 << 2
STAT_MODE_MASK = 0x03

# PPU modes
MODE_HBLANK = 0
MODE_VBLANK = 1
MODE_OAM = 2
MODE_DRAWING = 3

# Timing
SCANLINE_CYCLES = 456
SCREEN_WIDTH = 160
SCREEN_HEIGHT = 144
VBLANK_START = 144
SCANLINES_TOTAL = 154

# Shades in RGB332
COLOR_WHITE = 0b11111111
COLOR_LIGHT_GRAY = 0b10110110
COLOR_DARK_GRAY = 0b01001001
COLOR_BLACK = 0b00000000

_RGB332_SHADES = (COLOR_WHITE, COLOR_LIGHT_GRAY, COLOR_DARK_GRAY, COLOR_BLACK)
_ARGB_SHADES = (0xFFFFFFFF, 0xFFAAAAAA, 0xFF555555, 0xFF000000)


def apply_palette(color: int, palette: int) -> int:
    """Map a 2-bit color number through a palette register."""
    return (palette >> (color * 2)) & 0x03


def convert_color(color: int) -> int:
    """Convert a shade number to RGB332; unknown shades are white."""
    if 0 <= color < len(_RGB332_SHADES):
        return _RGB332_SHADES[color]
    return COLOR_WHITE


class LCDControl:
    """The LCDC register."""

    def __init__(self, value: int = 0x91) -> None:
        self._value = value & 0xFF

    def write(self, value: int) -> None:
        self._value = value & 0xFF

    def read(self) -> int:
        return self._value

    @property
    def lcd_enable(self) -> bool:
        return bool(self._value & LCDC_ENABLE)

    @property
    def window_tilemap_select(self) -> bool:
        return bool(self._value & LCDC_WIN_MAP)

    @property
    def window_enable(self) -> bool:
        return bool(self._value & LCDC_WIN_ENABLE)

    @property
    def bg_window_tiledata_select(self) -> bool:
        return bool(self._value & LCDC_TILE_DATA)

    @property
    def bg_tilemap_select(self) -> bool:
        return bool(self._value & LCDC_BG_MAP)

    @property
    def obj_size(self) -> bool:
        return bool(self._value & LCDC_OBJ_SIZE)

    @property
    def obj_enable(self) -> bool:
        return bool(self._value & LCDC_OBJ_ENABLE)

    @property
    def bg_window_enable(self) -> bool:
        return bool(self._value & LCDC_BG_ENABLE)

    def __repr__(self) -> str:
        return f"LCDControl(0x{self._value:02X})"


class LCDStatus:
    """The STAT register; CPU writes cannot change the mode bits."""

    def __init__(self) -> None:
        self._value = 0

    @property
    def lyc_interrupt_enable(self) -> bool:
        return bool(self._value & STAT_LYC_INT)

    @property
    def oam_interrupt_enable(self) -> bool:
        return bool(self._value & STAT_OAM_INT)

    @property
    def vblank_interrupt_enable(self) -> bool:
        return bool(self._value & STAT_VBLANK_INT)

    @property
    def hblank_interrupt_enable(self) -> bool:
        return bool(self._value & STAT_HBLANK_INT)

    @property
    def lyc_flag(self) -> bool:
        return bool(self._value & STAT_LYC_FLAG)

    @property
    def mode(self) -> int:
        return self._value & STAT_MODE_MASK

    def update_mode(self, mode: int) -> None:
        self._value = (self._value & ~STAT_MODE_MASK & 0xFF) | (mode & STAT_MODE_MASK)

    def update_lyc_flag(self, matched: bool) -> None:
        if matched:
            self._value |= STAT_LYC_FLAG
        else:
            self._value &= ~STAT_LYC_FLAG & 0xFF

    def write(self, value: int) -> None:
        self._value = (value & 0xF8) | (self._value & STAT_MODE_MASK)

    def read(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"LCDStatus(0x{self._value:02X})"


@dataclass
class ScrollRegisters:
    """SCX and SCY."""

    scx: int = 0
    scy: int = 0


@dataclass
class WindowRegisters:
    """WX and WY."""

    wx: int = 0
    wy: int = 0


@dataclass
class ColorPalettes:
    """BGP, OBP0 and OBP1."""

    bgp: int = 0xFC
    obp0: int = 0xFF
    obp1: int = 0xFF

    def get_color(self, palette: int, color_id: int) -> int:
        """ARGB color for a color number mapped through ``palette``."""
        return _ARGB_SHADES[apply_palette(color_id, palette)]