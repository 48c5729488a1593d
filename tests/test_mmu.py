import pytest

from pocketgb.mbc_types import MBCType, get_rom_size_bytes
from pocketgb.mmu import MMU, OAM_SIZE, LCDRegisters, ROMInfo


def make_rom(title=b"TESTGAME", cart_type=0x00, rom_code=0x00, ram_code=0x00):
    rom = bytearray(0x8000)
    rom[0x134:0x134 + len(title)] = title
    rom[0x147] = cart_type
    rom[0x148] = rom_code
    rom[0x149] = ram_code
    rom[0x0200] = 0x42
    rom[0x4123] = 0x99
    return bytes(rom)


def test_rom_info_from_header():
    mmu = MMU(make_rom())
    assert mmu.rom_info.title == "TESTGAME"
    assert mmu.rom_info.mbc_type is MBCType.NONE
    assert mmu.rom_info.rom_size == get_rom_size_bytes(0x00)
    assert mmu.rom_info.ram_size == 0


def test_short_rom_gives_default_info():
    mmu = MMU(b"\x00" * 0x20)
    assert mmu.rom_info == ROMInfo()


def test_rom_reads_through_controller():
    rom = make_rom()
    mmu = MMU(rom)
    assert mmu.read_byte(0x0200) == rom[0x0200]
    assert mmu.read_byte(0x4123) == rom[0x4123]
    assert mmu.cart_rom == rom


def test_wram_and_echo():
    mmu = MMU(make_rom())
    mmu.write_byte(0xC010, 0x5A)
    assert mmu.read_byte(0xC010) == 0x5A
    assert mmu.read_byte(0xE010) == 0x5A
    mmu.write_byte(0xE020, 0x11)
    assert mmu.read_byte(0xC020) == 0x11


def test_unusable_region():
    mmu = MMU(make_rom())
    mmu.write_byte(0xFEA0, 0x12)
    assert mmu.read_byte(0xFEA0) == 0xFF


def test_hram_and_ie():
    mmu = MMU(make_rom())
    mmu.write_byte(0xFF80, 0x33)
    mmu.write_byte(0xFFFE, 0x44)
    mmu.write_byte(0xFFFF, 0x1F)
    assert mmu.read_byte(0xFF80) == 0x33
    assert mmu.read_byte(0xFFFE) == 0x44
    assert mmu.read_byte(0xFFFF) == 0x1F


def test_vram_write_visible_in_snapshot():
    mmu = MMU(make_rom())
    mmu.write_byte(0x8000, 0x3C)
    mmu.write_byte(0x8001, 0x7E)
    mmu.write_byte(0x9800, 0x05)
    snapshot = mmu.vram()
    assert snapshot[0] == 0x3C
    assert snapshot[1] == 0x7E
    assert snapshot[0x1800] == 0x05
    assert mmu.read_byte(0x9800) == 0x05


def test_oam_write_read():
    mmu = MMU(make_rom())
    mmu.write_byte(0xFE00, 0x10)
    mmu.write_byte(0xFE9F, 0x20)
    assert mmu.read_byte(0xFE00) == 0x10
    assert mmu.read_byte(0xFE9F) == 0x20


def test_lcd_register_defaults():
    mmu = MMU(make_rom())
    defaults = LCDRegisters()
    assert mmu.read_byte(0xFF40) == 0x91
    assert mmu.read_byte(0xFF47) == 0xFC
    assert mmu.read_byte(0xFF48) == defaults.obp0
    assert mmu.read_byte(0xFF49) == defaults.obp1


@pytest.mark.parametrize("addr", [0xFF40, 0xFF41, 0xFF42, 0xFF43, 0xFF45, 0xFF47, 0xFF4A, 0xFF4B])
def test_lcd_register_round_trip(addr):
    mmu = MMU(make_rom())
    mmu.write_byte(addr, 0x27)
    assert mmu.read_byte(addr) == 0x27


def test_ly_is_read_only():
    mmu = MMU(make_rom())
    mmu.write_byte(0xFF44, 0x50)
    assert mmu.read_byte(0xFF44) == 0


@pytest.mark.parametrize("addr", [0xFF00, 0xFF01, 0xFF02, 0xFF0F, 0xFF10, 0xFF3F, 0xFF7F])
def test_unimplemented_io_reads_ff(addr):
    mmu = MMU(make_rom())
    mmu.write_byte(addr, 0x00)
    assert mmu.read_byte(addr) == 0xFF


def test_timer_registers_via_io():
    mmu = MMU(make_rom())
    mmu.write_byte(0xFF06, 0x80)
    mmu.write_byte(0xFF07, 0xFD)
    assert mmu.read_byte(0xFF06) == 0x80
    assert mmu.read_byte(0xFF07) == 0xFD & 0x07
    assert mmu.read_byte(0xFF07) == mmu.timer.read(0xFF07)


def test_div_write_resets():
    mmu = MMU(make_rom())
    mmu.timer.update(255)
    mmu.timer.update(255)
    assert mmu.read_byte(0xFF04) == mmu.timer.read(0xFF04)
    mmu.write_byte(0xFF04, 0x77)
    assert mmu.read_byte(0xFF04) == 0


def test_dma_copies_into_oam():
    mmu = MMU(make_rom())
    data = [(i * 3) & 0xFF for i in range(OAM_SIZE)]
    for offset, byte in enumerate(data):
        mmu.write_byte(0xC100 + offset, byte)
    mmu.write_byte(0xFF46, 0xC1)
    assert [mmu.read_byte(0xFE00 + i) for i in range(OAM_SIZE)] == data
    assert mmu.read_byte(0xFF46) == 0xC1


def test_word_round_trip_little_endian():
    mmu = MMU(make_rom())
    mmu.write_word(0xC000, 0x1234)
    assert mmu.read_byte(0xC000) == 0x34
    assert mmu.read_byte(0xC001) == 0x12
    assert mmu.read_word(0xC000) == 0x1234


def test_external_ram_through_mbc1():
    mmu = MMU(make_rom(cart_type=0x03, ram_code=0x02))
    assert mmu.rom_info.mbc_type is MBCType.MBC1
    assert mmu.read_byte(0xA000) == 0xFF
    mmu.write_byte(0x0000, 0x0A)
    mmu.write_byte(0xA000, 0x66)
    assert mmu.read_byte(0xA000) == 0x66
    mmu.write_byte(0x0000, 0x00)
    assert mmu.read_byte(0xA000) == 0xFF