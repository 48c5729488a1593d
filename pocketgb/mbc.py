"""Cartridge memory bank controllers."""

from abc import ABC, abstractmethod

from pocketgb.mbc_types import (
    MBCState,
    MBCType,
    get_ram_size_bytes,
    get_rom_size_bytes,
)

ROM_BANK_BYTES = 0x4000
RAM_BANK_BYTES = 0x2000
HEADER_END = 0x150


class MBCController(ABC):
    """Maps cartridge ROM and RAM into the CPU address space."""

    @abstractmethod
    def read(self, addr: int) -> int:
        """Read a byte from the cartridge address space."""

    @abstractmethod
    def write(self, addr: int, value: int) -> None:
        """Write a byte to the cartridge address space."""


class _BankedCartridge(MBCController):
    """Common storage for controllers with banked external RAM."""

    kind = MBCType.NONE

    def __init__(self, rom_data, ram_size: int, rom_banks: int, ram_banks: int) -> None:
        self.rom_data = bytes(rom_data)
        self.ram_data = bytearray(ram_size)
        self.state = MBCState(self.kind)
        self.rom_bank_count = rom_banks
        self.ram_bank_count = ram_banks

    def _read_rom_bank(self, addr: int, bank: int) -> int:
        offset = addr - 0x4000 + bank * ROM_BANK_BYTES
        return self.rom_data[offset] if offset < len(self.rom_data) else 0xFF

    def _ram_offset(self, addr: int, bank: int) -> int:
        return addr - 0xA000 + bank * RAM_BANK_BYTES

    def _read_ram(self, addr: int, bank: int) -> int:
        offset = self._ram_offset(addr, bank)
        return self.ram_data[offset] if offset < len(self.ram_data) else 0xFF

    def _write_ram(self, addr: int, bank: int, value: int) -> None:
        offset = self._ram_offset(addr, bank)
        if offset < len(self.ram_data):
            self.ram_data[offset] = value & 0xFF


class MBC1(_BankedCartridge):
    """MBC1 controller with ROM/RAM banking modes."""

    kind = MBCType.MBC1

    def _current_rom_bank(self) -> int:
        bank = self.state.rom_bank
        if self.state.mbc1_mode:
            bank |= self.state.ram_bank << 5
        return bank % self.rom_bank_count

    def _ram_bank(self) -> int:
        return self.state.ram_bank % self.ram_bank_count if self.state.mbc1_mode else 0

    def read(self, addr: int) -> int:
        if 0x0000 <= addr <= 0x3FFF:
            if self.state.mbc1_mode:
                bank = (self.state.ram_bank << 5) & (self.rom_bank_count - 1)
                return self.rom_data[addr + bank * ROM_BANK_BYTES]
            return self.rom_data[addr]
        if 0x4000 <= addr <= 0x7FFF:
            return self._read_rom_bank(addr, self._current_rom_bank())
        if 0xA000 <= addr <= 0xBFFF:
            if not self.state.ram_enabled:
                return 0xFF
            return self._read_ram(addr, self._ram_bank())
        return 0xFF

    def write(self, addr: int, value: int) -> None:
        value &= 0xFF
        if 0x0000 <= addr <= 0x1FFF:
            self.state.ram_enabled = (value & 0x0F) == 0x0A
        elif 0x2000 <= addr <= 0x3FFF:
            bank = (value & 0x1F) or 1
            self.state.rom_bank = (self.state.rom_bank & 0x60) | bank
        elif 0x4000 <= addr <= 0x5FFF:
            self.state.ram_bank = value & 0x03
        elif 0x6000 <= addr <= 0x7FFF:
            self.state.mbc1_mode = bool(value & 0x01)
        elif 0xA000 <= addr <= 0xBFFF:
            if self.state.ram_enabled:
                self._write_ram(addr, self._ram_bank(), value)


class MBC2(MBCController):
    """MBC2 controller with 512 four-bit cells of built-in RAM."""

    def __init__(self, rom_data, rom_banks: int) -> None:
        self.rom_data = bytes(rom_data)
        self.ram_data = bytearray(512)
        self.state = MBCState(MBCType.MBC2)
        self.rom_bank_count = rom_banks

    def read(self, addr: int) -> int:
        if 0x0000 <= addr <= 0x3FFF:
            return self.rom_data[addr]
        if 0x4000 <= addr <= 0x7FFF:
            offset = addr - 0x4000 + self.state.rom_bank * ROM_BANK_BYTES
            return self.rom_data[offset] if offset < len(self.rom_data) else 0xFF
        if 0xA000 <= addr <= 0xA1FF:
            if not self.state.ram_enabled:
                return 0xFF
            return self.ram_data[addr - 0xA000] & 0x0F
        return 0xFF

    def write(self, addr: int, value: int) -> None:
        value &= 0xFF
        if 0x0000 <= addr <= 0x3FFF:
            if addr & 0x0100 == 0:
                self.state.ram_enabled = (value & 0x0F) == 0x0A
            else:
                self.state.rom_bank = (value & 0x0F) or 1
        elif 0xA000 <= addr <= 0xA1FF:
            if self.state.ram_enabled:
                self.ram_data[addr - 0xA000] = value & 0x0F


class MBC3(_BankedCartridge):
    """MBC3 controller with RTC register mapping."""

    kind = MBCType.MBC3

    def read(self, addr: int) -> int:
        if 0x0000 <= addr <= 0x3FFF:
            return self.rom_data[addr]
        if 0x4000 <= addr <= 0x7FFF:
            return self._read_rom_bank(addr, self.state.rom_bank)
        if 0xA000 <= addr <= 0xBFFF:
            if not self.state.ram_enabled:
                return 0xFF
            if self.state.rtc_enabled:
                register = self.state.ram_bank & 0x07
                return self.state.rtc_registers[register] if register <= 4 else 0xFF
            return self._read_ram(addr, self.state.ram_bank % self.ram_bank_count)
        return 0xFF

    def write(self, addr: int, value: int) -> None:
        value &= 0xFF
        if 0x0000 <= addr <= 0x1FFF:
            self.state.ram_enabled = (value & 0x0F) == 0x0A
        elif 0x2000 <= addr <= 0x3FFF:
            self.state.rom_bank = (value & 0x7F) or 1
        elif 0x4000 <= addr <= 0x5FFF:
            self.state.ram_bank = value
            self.state.rtc_enabled = 0x08 <= value <= 0x0C
        elif 0x6000 <= addr <= 0x7FFF:
            if value in (0x00, 0x01):
                self.state.rtc_latched = value == 0x01
        elif 0xA000 <= addr <= 0xBFFF:
            if not self.state.ram_enabled:
                return
            if self.state.rtc_enabled:
                register = self.state.ram_bank & 0x07
                if register <= 4:
                    self.state.rtc_registers[register] = value
            else:
                self._write_ram(addr, self.state.ram_bank % self.ram_bank_count, value)


class MBC5(_BankedCartridge):
    """MBC5 controller with a nine-bit ROM bank number."""

    kind = MBCType.MBC5

    def read(self, addr: int) -> int:
        if 0x0000 <= addr <= 0x3FFF:
            return self.rom_data[addr]
        if 0x4000 <= addr <= 0x7FFF:
            return self._read_rom_bank(addr, self.state.rom_bank)
        if 0xA000 <= addr <= 0xBFFF:
            if not self.state.ram_enabled:
                return 0xFF
            return self._read_ram(addr, self.state.ram_bank % self.ram_bank_count)
        return 0xFF

    def write(self, addr: int, value: int) -> None:
        value &= 0xFF
        if 0x0000 <= addr <= 0x1FFF:
            self.state.ram_enabled = (value & 0x0F) == 0x0A
        elif 0x2000 <= addr <= 0x2FFF:
            self.state.rom_bank = (self.state.rom_bank & 0x100) | value
        elif 0x3000 <= addr <= 0x3FFF:
            self.state.rom_bank = (self.state.rom_bank & 0xFF) | ((value & 0x01) << 8)
        elif 0x4000 <= addr <= 0x5FFF:
            self.state.ram_bank = value & 0x0F
        elif 0xA000 <= addr <= 0xBFFF:
            if self.state.ram_enabled:
                self._write_ram(addr, self.state.ram_bank % self.ram_bank_count, value)


def create_mbc_controller(rom_data) -> MBCController:
    """Build the controller named by the cartridge header."""
    rom_data = bytes(rom_data)
    if len(rom_data) < HEADER_END:
        return MBC1(rom_data, 0, 2, 0)

    mbc_type = MBCType.from_cartridge_type(rom_data[0x147])
    rom_size = get_rom_size_bytes(rom_data[0x148])
    ram_size = get_ram_size_bytes(rom_data[0x149])
    rom_banks = rom_size // ROM_BANK_BYTES
    ram_banks = ram_size // RAM_BANK_BYTES if ram_size > 0 else 0

    if mbc_type is MBCType.MBC1:
        return MBC1(rom_data, ram_size, rom_banks, ram_banks)
    if mbc_type is MBCType.MBC2:
        return MBC2(rom_data, rom_banks)
    if mbc_type is MBCType.MBC3:
        return MBC3(rom_data, ram_size, rom_banks, ram_banks)
    if mbc_type is MBCType.MBC5:
        return MBC5(rom_data, ram_size, rom_banks, ram_banks)
    return MBC1(rom_data, 0, 2, 0)