# pocketgb

Pure-Python building blocks for an emulator of an 8-bit handheld game console
with a 160×144 four-shade screen. There are no third-party dependencies.

Each piece of the machine can be driven and inspected on its own:

| Module | What it holds |
| --- | --- |
| `pocketgb.mbc_types` | `MBCType`, `MBCState`, `get_rom_size_bytes`, `get_ram_size_bytes`: cartridge header codes |
| `pocketgb.mbc` | Cartridge bank controllers `MBC1`, `MBC2`, `MBC3`, `MBC5` (all `MBCController`s) and `create_mbc_controller` |
| `pocketgb.timer` | `Timer`: the DIV/TIMA/TMA/TAC divider and timer |
| `pocketgb.mmu` | `MMU`, `ROMInfo`, `LCDRegisters`: the 16-bit memory map |
| `pocketgb.ppu_registers` | `LCDControl`, `LCDStatus`, `ScrollRegisters`, `WindowRegisters`, `ColorPalettes`, `apply_palette`, `convert_color` |
| `pocketgb.ppu_render` | `render_background`, `render_window`, `render_sprites`, `color_from_palette`: drawing one scanline into a framebuffer |
| `pocketgb.tile` | `Tile` and `TileMap`: 2-bit-per-pixel tile encoding |
| `pocketgb.wave` | `WaveChannel`: the wave-RAM sound channel |

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

### Loading a cartridge into the memory map

```python
from pocketgb.mmu import MMU

rom = bytearray(0x8000)
rom[0x134:0x138] = b"DEMO"
mmu = MMU(bytes(rom))

print(mmu.rom_info.title)              # "DEMO"
mmu.write_byte(0xC000, 0x42)           # work RAM
assert mmu.read_byte(0xE000) == 0x42   # echo of work RAM
mmu.write_word(0xFF80, 0xBEEF)         # high RAM, little-endian
assert mmu.read_word(0xFF80) == 0xBEEF
```

Writing to `0xFF46` copies 160 bytes from `value << 8` into OAM. The timer
registers `0xFF04`–`0xFF07` go to `mmu.timer`; the LCD registers
`0xFF40`–`0xFF4B` are kept in `mmu.lcd_registers`. Other I/O addresses read
`0xFF` and ignore writes.

### Cartridge controllers

```python
from pocketgb.mbc import create_mbc_controller
from pocketgb.mbc_types import MBCType

controller = create_mbc_controller(bytes(rom))
controller.write(0x2000, 0x01)   # select ROM bank 1
value = controller.read(0x4000)

print(MBCType.from_cartridge_type(0x13).description())   # "MBC3 + Timer + Battery"
```

ROMs shorter than a header, ROM-only cartridges and unknown types get an
`MBC1` with two ROM banks and no RAM.

### The timer

```python
from pocketgb.timer import Timer

timer = Timer()
timer.write(0xFF07, 0x05)     # enable, 262144 Hz
interrupt = timer.update(16)  # True when TIMA overflows
print(timer.read(0xFF05))     # 1
```

### Tiles

```python
from pocketgb.tile import Tile, TileMap

tile = Tile.from_data(bytes([0b11000011, 0b00111100] + [0] * 14))
print(tile.get_pixel(0, 0))   # 3
tile.flip_h()
tile.rotate()
print(tile.data.hex())

tiles = TileMap(1)                    # unsigned addressing from 0x8000
tiles.update_from_vram(mmu.vram())
```

### Rendering a scanline

```python
from pocketgb.ppu_render import render_background, render_sprites

vram = bytearray(0x2000)
framebuffer = [0] * (160 * 144)
render_background(vram, framebuffer, 0, 0x91, 0, 0, 0xE4)   # ly, lcdc, scx, scy, bgp
render_sprites(vram, framebuffer, bytes(160), 0, 0x93, 0xE4, 0xE4)
print(hex(framebuffer[0]))   # 0xffffffff
```

Colors are 32-bit ARGB values.

### Palettes and LCD registers

```python
from pocketgb.ppu_registers import ColorPalettes, LCDControl, LCDStatus

print(LCDControl(0x91).lcd_enable)              # True
status = LCDStatus()
status.update_mode(2)
status.write(0xFF)                              # mode bits are kept
print(hex(status.read()))                       # 0xfa
print(hex(ColorPalettes().get_color(0xE4, 3)))  # 0xff000000
```

### The wave channel

```python
from pocketgb.wave import WaveChannel

wave = WaveChannel()
wave.write_enable(0x80)        # DAC on
wave.write_volume(0x20)        # full output level
wave.write_wave_ram(0, 0x0A)
wave.write_frequency_hi(0x80)  # trigger
print(wave.output())           # 2
```

## What the package does not do

- There is no CPU: nothing executes cartridge code.
- There is no scanline state machine driving the renderer, no interrupts, and
  no window or screen output; `pocketgb.ppu_render` only draws single lines
  into a list you supply.
- Of the sound hardware only the wave channel is here; there are no square or
  noise channels, no mixer and no audio output.
- There is no command-line program.