"""DIV/TIMA/TMA/TAC timer block."""

DIV_REGISTER = 0xFF04
TIMA_REGISTER = 0xFF05
TMA_REGISTER = 0xFF06
TAC_REGISTER = 0xFF07

TAC_ENABLE = 1 << 2
TAC_CLOCK_SELECT = 0b11

# Timer increment frequencies selected by TAC bits 0-1.
CLOCK_FREQUENCIES = (4096, 262144, 65536, 16384)

CPU_CLOCK_SPEED = 4_194_304


class Timer:
    """The divider and programmable timer registers."""

    def __init__(self) -> None:
        self._div = 0  # 16-bit internal divider; DIV is its upper byte
        self._div_cycles = 0
        self._tima = 0
        self._tma = 0
        self._tac = 0
        self._timer_cycles = 0
        self.overflowed = False

    def update(self, cycles: int) -> bool:
        """Advance by ``cycles`` clocks; return True when TIMA overflowed."""
        interrupt_requested = False

        self._div_cycles += cycles
        while self._div_cycles >= 256:
            self._div = (self._div + 1) & 0xFFFF
            self._div_cycles -= 256

        if self._tac & TAC_ENABLE:
            self._timer_cycles += cycles
            frequency = CLOCK_FREQUENCIES[self._tac & TAC_CLOCK_SELECT]
            cycles_per_increment = CPU_CLOCK_SPEED // frequency
            while self._timer_cycles >= cycles_per_increment:
                if self._tima == 0xFF:
                    self.overflowed = True
                    self._tima = self._tma
                    interrupt_requested = True
                else:
                    self._tima += 1
                self._timer_cycles -= cycles_per_increment

        return interrupt_requested

    def read(self, addr: int) -> int:
        """Read a timer register; unknown addresses read 0xFF."""
        if addr == DIV_REGISTER:
            return (self._div >> 8) & 0xFF
        if addr == TIMA_REGISTER:
            return self._tima
        if addr == TMA_REGISTER:
            return self._tma
        if addr == TAC_REGISTER:
            return self._tac
        return 0xFF

    def write(self, addr: int, value: int) -> None:
        """Write a timer register; unknown addresses are ignored."""
        value &= 0xFF
        if addr == DIV_REGISTER:
            self._div = 0
            self._div_cycles = 0
        elif addr == TIMA_REGISTER:
            self._tima = value
            self.overflowed = False
        elif addr == TMA_REGISTER:
            self._tma = value
        elif addr == TAC_REGISTER:
            was_enabled = self._tac & TAC_ENABLE
            self._tac = value & 0x07
            if was_enabled and not self._tac & TAC_ENABLE:
                self._timer_cycles = 0