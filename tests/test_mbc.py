import pytest

from pocketgb.mbc import MBC1, MBC2, MBC3, MBC5, create_mbc_controller


def make_rom(banks, cart_type, rom_code, ram_code=0x00):
    data = bytearray(b"".join(bytes([bank]) * 0x4000 for bank in range(banks)))
    data[0x147] = cart_type
    data[0x148] = rom_code
    data[0x149] = ram_code
    return bytes(data)


def test_short_rom_gets_default_controller():
    rom = bytes(range(0x20))
    controller = create_mbc_controller(rom)
    assert isinstance(controller, MBC1)
    assert controller.read(0x0005) == rom[5]


@pytest.mark.parametrize(
    "cart_type,cls",
    [(0x00, MBC1), (0x01, MBC1), (0x05, MBC2), (0x11, MBC3), (0x19, MBC5), (0x04, MBC1)],
)
def test_dispatch_on_cartridge_type(cart_type, cls):
    controller = create_mbc_controller(make_rom(2, cart_type, 0x00))
    assert type(controller) is cls


def test_unknown_type_reads_bank_one():
    controller = create_mbc_controller(make_rom(2, 0x04, 0x00))
    assert controller.read(0x4000) == 1


def test_mbc1_rom_bank_switching():
    controller = create_mbc_controller(make_rom(4, 0x01, 0x01))
    assert controller.read(0x4000) == 1
    controller.write(0x2000, 3)
    assert controller.read(0x5000) == 3
    controller.write(0x2000, 0)
    assert controller.read(0x4000) == 1


def test_mbc1_ram_enable_and_round_trip():
    controller = create_mbc_controller(make_rom(2, 0x03, 0x00, 0x02))
    assert controller.read(0xA000) == 0xFF
    controller.write(0xA000, 0x5A)
    controller.write(0x0000, 0x0A)
    assert controller.read(0xA000) == 0
    controller.write(0xA123, 0x5A)
    assert controller.read(0xA123) == 0x5A
    controller.write(0x0000, 0x00)
    assert controller.read(0xA123) == 0xFF


def test_mbc1_advanced_mode_maps_upper_bank_into_low_area():
    controller = create_mbc_controller(make_rom(64, 0x01, 0x05))
    controller.write(0x4000, 1)
    assert controller.read(0x0000) == 0
    controller.write(0x6000, 1)
    assert controller.read(0x0000) == 32


def test_mbc2_nibble_ram_and_bank_select():
    controller = create_mbc_controller(make_rom(4, 0x05, 0x01))
    controller.write(0x0000, 0x0A)
    controller.write(0xA010, 0xAB)
    assert controller.read(0xA010) == 0x0B
    controller.write(0x0100, 3)
    assert controller.read(0x4000) == 3
    controller.write(0x0100, 0)
    assert controller.read(0x4000) == 1
    assert controller.read(0xA200) == 0xFF


def test_mbc3_rtc_and_ram_are_separate():
    controller = create_mbc_controller(make_rom(4, 0x13, 0x01, 0x02))
    controller.write(0x0000, 0x0A)
    controller.write(0xA000, 0x11)
    controller.write(0x4000, 0x08)
    controller.write(0xA000, 0x2A)
    assert controller.read(0xA000) == 0x2A
    controller.write(0x4000, 0x00)
    assert controller.read(0xA000) == 0x11
    controller.write(0x4000, 0x08)
    assert controller.read(0xB000) == 0x2A


def test_mbc3_rom_bank_and_latch():
    controller = create_mbc_controller(make_rom(4, 0x11, 0x01))
    controller.write(0x2000, 2)
    assert controller.read(0x4000) == 2
    controller.write(0x6000, 0x01)
    assert controller.state.rtc_latched is True
    controller.write(0x6000, 0x00)
    assert controller.state.rtc_latched is False


def test_mbc5_nine_bit_bank():
    controller = create_mbc_controller(make_rom(4, 0x19, 0x01))
    controller.write(0x2000, 3)
    assert controller.read(0x4000) == 3
    controller.write(0x3000, 1)
    assert controller.read(0x4000) == 0xFF
    controller.write(0x3000, 0)
    assert controller.read(0x4000) == 3
    controller.write(0x2000, 0)
    assert controller.read(0x4000) == 0


def test_mbc5_ram_round_trip():
    controller = create_mbc_controller(make_rom(2, 0x1B, 0x00, 0x03))
    controller.write(0x0000, 0x0A)
    controller.write(0x4000, 2)
    controller.write(0xA042, 0x77)
    assert controller.read(0xA042) == 0x77
    controller.write(0x4000, 1)
    assert controller.read(0xA042) == 0


def test_unmapped_addresses_read_ff():
    controller = create_mbc_controller(make_rom(2, 0x01, 0x00))
    assert controller.read(0xC000) == 0xFF