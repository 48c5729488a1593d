"""Memory management unit: the CPU's 16-bit address space."""

import logging
from dataclasses import dataclass

from pocketgb.mbc import create_mbc_controller
from pocketgb.mbc_types import MBCType, get_ram_size_bytes, get_rom_size_bytes
from pocketgb.timer import Timer

logger = logging.getLogger(__name__)

ROM_BANK_SIZE = 16 * 1024
VRAM_SIZE = 8 * 1024
EXTERNAL_RAM_SIZE = 8 * 1024
WRAM_SIZE = 8 * 1024
OAM_SIZE = 160
HRAM_SIZE = 127

_HEADER_END = 0x150
_TITLE_START = 0x134
_TITLE_END = 0x143
_TIMER_REGISTERS = range(0xFF04, 0xFF08)
_DMA_REGISTER = 0xFF46

# I/O addresses backed by LCD register fields.
_LCD_FIELDS = {
    0xFF40: "lcdc",
    0xFF41: "stat",
    0xFF42: "scy",
    0xFF43: "scx",
    0xFF44: "ly",
    0xFF45: "lyc",
    0xFF46: "dma",
    0xFF47: "bgp",
    0xFF48: "obp0",
    0xFF49: "obp1",
    0xFF4A: "wy",
    0xFF4B: "wx",
}
# LY is read-only and DMA is handled separately.
_LCD_WRITABLE = {addr: name for addr, name in _LCD_FIELDS.items() if addr not in (0xFF44, 0xFF46)}


@dataclass
class LCDRegisters:
    """LCD control, status, scroll, palette and window registers."""

    lcdc: int = 0x91
    stat: int = 0
    scy: int = 0
    scx: int = 0
    ly: int = 0
    lyc: int = 0
    dma: int = 0
    bgp: int = 0xFC
    obp0: int = 0xFF
    obp1: int = 0xFF
    wy: int = 0
    wx: int = 0


@dataclass
class ROMInfo:
    """Information decoded from the cartridge header."""

    title: str = ""
    mbc_type: MBCType = MBCType.NONE
    rom_size: int = 0
    ram_size: int = 0

    @classmethod
    def from_rom(cls, rom_data: bytes) -> "ROMInfo":
        """Decode the header; ROMs too short to hold one yield defaults."""
        if len(rom_data) < _HEADER_END:
            return cls()
        raw_title = rom_data[_TITLE_START:_TITLE_END + 1].split(b"\x00", 1)[0]
        return cls(
            title=raw_title.decode("latin-1"),
            mbc_type=MBCType.from_cartridge_type(rom_data[0x147]),
            rom_size=get_rom_size_bytes(rom_data[0x148]),
            ram_size=get_ram_size_bytes(rom_data[0x149]),
        )


def _pixel_row(low: int, high: int) -> str:
    return " ".join(
        str((((high >> bit) & 1) << 1) | ((low >> bit) & 1)) for bit in range(7, -1, -1)
    )


class MMU:
    """Routes reads and writes to cartridge, RAM, OAM, I/O and registers."""

    def __init__(self, rom_data) -> None:
        rom_data = bytes(rom_data)
        self.rom_info = ROMInfo.from_rom(rom_data)
        self.cart_rom = rom_data
        self.timer = Timer()
        self.lcd_registers = LCDRegisters()
        self._mbc = create_mbc_controller(rom_data)
        self._vram = bytearray(VRAM_SIZE)
        self._wram = bytearray(WRAM_SIZE)
        self._oam = bytearray(OAM_SIZE)
        self._hram = bytearray(HRAM_SIZE)
        self._ie_register = 0

    def read_byte(self, addr: int) -> int:
        """Read one byte from the address space."""
        addr &= 0xFFFF
        if addr <= 0x7FFF:
            if addr == 0x100:
                logger.debug("entering program area at 0x0100")
            return self._mbc.read(addr)
        if addr <= 0x9FFF:
            return self._vram[addr - 0x8000]
        if addr <= 0xBFFF:
            return self._mbc.read(addr)
        if addr <= 0xDFFF:
            return self._wram[addr - 0xC000]
        if addr <= 0xFDFF:
            return self._wram[addr - 0xE000]
        if addr <= 0xFE9F:
            return self._oam[addr - 0xFE00]
        if addr <= 0xFEFF:
            return 0xFF
        if addr <= 0xFF7F:
            return self._read_io(addr)
        if addr <= 0xFFFE:
            return self._hram[addr - 0xFF80]
        return self._ie_register

    def write_byte(self, addr: int, value: int) -> None:
        """Write one byte to the address space."""
        addr &= 0xFFFF
        value &= 0xFF
        if addr <= 0x7FFF:
            logger.debug("ROM write: addr=0x%04X value=0x%02X", addr, value)
            self._mbc.write(addr, value)
        elif addr <= 0x9FFF:
            self._vram[addr - 0x8000] = value
            self._log_vram_write(addr, value)
        elif addr <= 0xBFFF:
            self._mbc.write(addr, value)
        elif addr <= 0xDFFF:
            self._wram[addr - 0xC000] = value
        elif addr <= 0xFDFF:
            self._wram[addr - 0xE000] = value
        elif addr <= 0xFE9F:
            logger.debug("OAM write: addr=0x%04X value=0x%02X", addr, value)
            self._oam[addr - 0xFE00] = value
        elif addr <= 0xFEFF:
            pass
        elif addr <= 0xFF7F:
            self._write_io(addr, value)
        elif addr <= 0xFFFE:
            self._hram[addr - 0xFF80] = value
        else:
            self._ie_register = value

    def write_word(self, addr: int, value: int) -> None:
        """Write a little-endian 16-bit word."""
        self.write_byte(addr, value & 0xFF)
        self.write_byte((addr + 1) & 0xFFFF, (value >> 8) & 0xFF)

    def read_word(self, addr: int) -> int:
        """Read a little-endian 16-bit word."""
        low = self.read_byte(addr)
        high = self.read_byte((addr + 1) & 0xFFFF)
        return (high << 8) | low

    def vram(self) -> bytes:
        """A snapshot of video RAM."""
        return bytes(self._vram)

    def _read_io(self, addr: int) -> int:
        if addr in _TIMER_REGISTERS:
            return self.timer.read(addr)
        name = _LCD_FIELDS.get(addr)
        if name is not None:
            return getattr(self.lcd_registers, name)
        return 0xFF

    def _write_io(self, addr: int, value: int) -> None:
        if addr in _TIMER_REGISTERS:
            self.timer.write(addr, value)
        elif addr == _DMA_REGISTER:
            self.lcd_registers.dma = value
            self._dma_transfer(value)
        elif addr in _LCD_WRITABLE:
            setattr(self.lcd_registers, _LCD_WRITABLE[addr], value)

    def _dma_transfer(self, value: int) -> None:
        source = value << 8
        logger.debug("DMA transfer from 0x%04X", source)
        self._oam[:] = bytes(self.read_byte(source + i) for i in range(OAM_SIZE))
        logger.debug("DMA transfer done: %d bytes moved to OAM", OAM_SIZE)

    def _log_vram_write(self, addr: int, value: int) -> None:
        if not logger.isEnabledFor(logging.DEBUG):
            return
        if addr < 0x9800:
            tile_index = (addr & 0x0FFF) // 16
            row = (addr & 0x000F) // 2
            logger.debug(
                "VRAM tile write: addr=0x%04X block=%d tile=%d row=%d value=0x%02X",
                addr, 0 if addr < 0x9000 else 1, tile_index, row, value,
            )
            if addr & 1:
                low = self._vram[addr - 0x8000 - 1]
                logger.debug("tile row pixels: %s", _pixel_row(low, value))
        else:
            base = 0x9800 if addr < 0x9C00 else 0x9C00
            offset = addr - base
            tile_addr = 0x8000 + value * 16 if value < 128 else 0x8800 + (value - 128) * 16
            logger.debug(
                "VRAM map write: map=%d pos=(%d, %d) tile=0x%02X data=0x%04X-0x%04X",
                0 if base == 0x9800 else 1, offset % 32, offset // 32,
                value, tile_addr, tile_addr + 15,
            )