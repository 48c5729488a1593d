"""Cartridge memory bank controller types and header decoding."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class MBCType(Enum):
    """Kind of memory bank controller in a cartridge."""

    NONE = "none"
    MBC1 = "mbc1"
    MBC2 = "mbc2"
    MBC3 = "mbc3"
    MBC5 = "mbc5"
    UNKNOWN = "unknown"

    @classmethod
    def from_cartridge_type(cls, cartridge_type: int) -> "MBCType":
        """Decode the cartridge type byte at header offset 0x147."""
        if cartridge_type == 0x00:
            return cls.NONE
        if 0x01 <= cartridge_type <= 0x03:
            return cls.MBC1
        if 0x05 <= cartridge_type <= 0x06:
            return cls.MBC2
        if 0x0F <= cartridge_type <= 0x13:
            return cls.MBC3
        if 0x19 <= cartridge_type <= 0x1E:
            return cls.MBC5
        return cls.UNKNOWN

    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    MBCType.NONE: "ROM Only",
    MBCType.MBC1: "MBC1",
    MBCType.MBC2: "MBC2 + Battery",
    MBCType.MBC3: "MBC3 + Timer + Battery",
    MBCType.MBC5: "MBC5",
    MBCType.UNKNOWN: "Unknown MBC",
}

_ROM_SIZES = {
    0x00: 32 * 1024,
    0x01: 64 * 1024,
    0x02: 128 * 1024,
    0x03: 256 * 1024,
    0x04: 512 * 1024,
    0x05: 1024 * 1024,
    0x06: 2048 * 1024,
    0x07: 4096 * 1024,
    0x08: 8192 * 1024,
}

_RAM_SIZES = {
    0x00: 0,
    0x01: 2 * 1024,
    0x02: 8 * 1024,
    0x03: 32 * 1024,
    0x04: 128 * 1024,
    0x05: 64 * 1024,
}


def get_rom_size_bytes(rom_size_code: int) -> int:
    """ROM size for header byte 0x148; unknown codes mean 32 KiB."""
    return _ROM_SIZES.get(rom_size_code, 32 * 1024)


def get_ram_size_bytes(ram_size_code: int) -> int:
    """External RAM size for header byte 0x149; unknown codes mean none."""
    return _RAM_SIZES.get(ram_size_code, 0)


@dataclass
class MBCState:
    """Banking state shared by all controller kinds."""

    mbc_type: MBCType
    rom_bank: Optional[int] = None
    ram_bank: int = 0
    ram_enabled: bool = False
    mbc1_mode: bool = False
    rtc_enabled: bool = False
    rtc_latched: bool = False
    rtc_registers: List[int] = field(default_factory=lambda: [0] * 5)
    battery_backed: bool = False

    def __post_init__(self) -> None:
        if self.rom_bank is None:
            self.rom_bank = 0 if self.mbc_type is MBCType.NONE else 1