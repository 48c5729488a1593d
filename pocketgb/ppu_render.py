"""Scanline rendering of the background, window and sprite layers."""

from typing import MutableSequence, Sequence

from pocketgb.ppu_registers import (
    LCDC_BG_ENABLE,
    LCDC_BG_MAP,
    LCDC_OBJ_SIZE,
    LCDC_TILE_DATA,
    LCDC_WIN_MAP,
    SCREEN_WIDTH,
)

WHITE = 0xFFFFFFFF
BLACK = 0xFF000000

# Shades used by the generic palette lookup.
_PALETTE_COLORS = (WHITE, 0xFFB0B0B0, 0xFF686868, BLACK)
# Shades used when drawing the background layer.
_BACKGROUND_COLORS = (WHITE, 0xFFC0C0C0, 0xFF606060, BLACK)
# Shades used when drawing the window and sprite layers.
_LAYER_COLORS = (WHITE, 0xFFAAAAAA, 0xFF555555, BLACK)

_MAP_0 = 0x1800
_MAP_1 = 0x1C00
_MAP_WIDTH = 32
_OAM_ENTRIES = 40
_MAX_WINDOW_X = 166


def _signed(byte: int) -> int:
    return byte - 256 if byte >= 128 else byte


def _tile_address(lcdc: int, tile_index: int) -> int:
    """VRAM offset of a background/window tile for the LCDC addressing mode."""
    if lcdc & LCDC_TILE_DATA:
        return tile_index * 16
    return 0x1000 + (_signed(tile_index) + 128) * 16


def _color_number(low: int, high: int, bit: int) -> int:
    return (((high >> bit) & 1) << 1) | ((low >> bit) & 1)


def _shade(palette: int, color_number: int) -> int:
    return (palette >> (color_number * 2)) & 0x03


def color_from_palette(palette: int, color_id: int) -> int:
    """ARGB color for ``color_id`` mapped through ``palette``."""
    return _PALETTE_COLORS[_shade(palette, color_id)]


def render_background(
    vram: Sequence[int],
    framebuffer: MutableSequence[int],
    ly: int,
    lcdc: int,
    scx: int,
    scy: int,
    bgp: int,
) -> None:
    """Draw background line ``ly`` into ``framebuffer``."""
    row_start = ly * SCREEN_WIDTH
    if not lcdc & LCDC_BG_ENABLE:
        framebuffer[row_start:row_start + SCREEN_WIDTH] = [WHITE] * SCREEN_WIDTH
        return

    tile_map = _MAP_1 if lcdc & LCDC_BG_MAP else _MAP_0
    y_pos = (ly + scy) & 0xFF
    tile_y = y_pos // 8
    py = y_pos % 8

    for x in range(SCREEN_WIDTH):
        x_pos = (x + scx) & 0xFF
        tile_index = vram[tile_map + tile_y * _MAP_WIDTH + x_pos // 8]
        addr = _tile_address(lcdc, tile_index) + py * 2
        color_number = _color_number(vram[addr], vram[addr + 1], 7 - x_pos % 8)
        framebuffer[row_start + x] = _BACKGROUND_COLORS[_shade(bgp, color_number)]


def render_window(
    vram: Sequence[int],
    framebuffer: MutableSequence[int],
    ly: int,
    lcdc: int,
    wx: int,
    wy: int,
    bgp: int,
) -> None:
    """Draw the window's part of line ``ly``; nothing when it is off screen."""
    if wy > ly or wx > _MAX_WINDOW_X:
        return

    tile_map = _MAP_1 if lcdc & LCDC_WIN_MAP else _MAP_0
    win_y = ly - wy
    tile_y = win_y // 8
    py = win_y % 8
    row_start = ly * SCREEN_WIDTH

    for x in range(SCREEN_WIDTH):
        win_x = x - (wx - 7)
        if win_x < 0:
            continue
        tile_index = vram[tile_map + tile_y * _MAP_WIDTH + win_x // 8]
        addr = _tile_address(lcdc, tile_index) + py * 2
        color_number = _color_number(vram[addr], vram[addr + 1], 7 - win_x % 8)
        framebuffer[row_start + x] = _LAYER_COLORS[_shade(bgp, color_number)]


def render_sprites(
    vram: Sequence[int],
    framebuffer: MutableSequence[int],
    oam: Sequence[int],
    ly: int,
    lcdc: int,
    obp0: int,
    obp1: int,
) -> None:
    """Draw the sprites that cross line ``ly``, lowest OAM index on top."""
    sprite_size = 16 if lcdc & LCDC_OBJ_SIZE else 8
    row_start = ly * SCREEN_WIDTH

    for index in reversed(range(_OAM_ENTRIES)):
        base = index * 4
        y_pos = oam[base] - 16
        x_pos = oam[base + 1] - 8
        tile_num = oam[base + 2]
        attributes = oam[base + 3]

        if y_pos > ly or y_pos + sprite_size <= ly:
            continue
        if x_pos >= SCREEN_WIDTH or x_pos + 8 <= 0:
            continue

        palette = obp1 if attributes & 0x10 else obp0
        x_flip = bool(attributes & 0x20)
        y_flip = bool(attributes & 0x40)
        behind_background = bool(attributes & 0x80)

        tile_y = ly - y_pos
        if y_flip:
            tile_y = sprite_size - 1 - tile_y
        if not 0 <= tile_y < sprite_size:
            continue

        addr = tile_num * 16 + tile_y * 2
        if addr + 1 >= len(vram):
            continue
        low, high = vram[addr], vram[addr + 1]

        for x in range(8):
            screen_x = x_pos + x
            if not 0 <= screen_x < SCREEN_WIDTH:
                continue
            color_number = _color_number(low, high, x if x_flip else 7 - x)
            if color_number == 0:
                continue
            color = _LAYER_COLORS[_shade(palette, color_number)]
            fb_index = row_start + screen_x
            if not behind_background or framebuffer[fb_index] == WHITE:
                framebuffer[fb_index] = color