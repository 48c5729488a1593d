"""Memory map, cartridge controllers, timer, wave channel, tiles and scanline rendering for a handheld console emulator."""

__version__ = "0.1.0"