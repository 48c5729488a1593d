"""Wave channel (channel 3): plays samples from wave RAM."""

WAVE_RAM_SIZE = 32
MAX_LENGTH = 255


class WaveChannel:
    """Channel 3 registers NR30-NR34 and its wave RAM."""

    def __init__(self) -> None:
        self._wave_ram = bytearray(WAVE_RAM_SIZE)
        self.reset()

    @property
    def enabled(self) -> bool:
        return self._enabled

    def read_enable(self) -> int:
        return int(self._dac_enabled) << 7

    def read_length(self) -> int:
        return self._length_counter

    def read_volume(self) -> int:
        return self._output_level << 5

    def read_frequency_lo(self) -> int:
        return self._frequency & 0xFF

    def read_frequency_hi(self) -> int:
        return (int(self._length_enable) << 6) | (self._frequency >> 8)

    def read_wave_ram(self, offset: int) -> int:
        return self._wave_ram[offset]

    def write_enable(self, value: int) -> None:
        self._dac_enabled = bool(value & 0x80)
        if not self._dac_enabled:
            self._enabled = False

    def write_length(self, value: int) -> None:
        self._length_counter = value & 0xFF

    def write_volume(self, value: int) -> None:
        self._output_level = (value >> 5) & 0x03

    def write_frequency_lo(self, value: int) -> None:
        self._frequency = (self._frequency & 0x700) | (value & 0xFF)

    def write_frequency_hi(self, value: int) -> None:
        self._frequency = (self._frequency & 0xFF) | ((value & 0x07) << 8)
        self._length_enable = bool(value & 0x40)
        if value & 0x80:
            self._trigger()

    def write_wave_ram(self, offset: int, value: int) -> None:
        self._wave_ram[offset] = value & 0xFF

    def _trigger(self) -> None:
        self._enabled = self._dac_enabled
        if self._length_counter == 0:
            self._length_counter = MAX_LENGTH
        self._position = 0
        self._timer = self._period()

    def step(self) -> None:
        """Advance the sample timer by one tick."""
        if not self._enabled:
            return
        if self._timer > 0:
            self._timer -= 1
            return
        self._timer = self._period()
        self._position = (self._position + 1) & (WAVE_RAM_SIZE - 1)

    def step_length(self) -> None:
        """Clock the length counter; the channel stops when it runs out."""
        if self._length_enable and self._length_counter > 0:
            self._length_counter -= 1
            if self._length_counter == 0:
                self._enabled = False

    def output(self) -> int:
        """Current sample, shifted by the output level and centred by -8."""
        if not self._enabled or not self._dac_enabled:
            return 0
        sample = self._wave_ram[self._position]
        amplitude = 0 if self._output_level == 0 else sample >> (self._output_level - 1)
        signed = amplitude - 256 if amplitude >= 128 else amplitude
        return max(signed - 8, -128)

    def reset(self) -> None:
        self._enabled = False
        self._dac_enabled = False
        self._output_level = 0
        self._frequency = 0
        self._length_counter = 0
        self._length_enable = False
        self._position = 0
        self._timer = 0
        self._wave_ram = bytearray(WAVE_RAM_SIZE)

    def power_on(self) -> None:
        self.reset()

    def power_off(self) -> None:
        self._enabled = False

    def _period(self) -> int:
        return (2048 - self._frequency) * 2