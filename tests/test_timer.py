import pytest

from pocketgb.timer import (
    DIV_REGISTER,
    TAC_REGISTER,
    TIMA_REGISTER,
    TMA_REGISTER,
    Timer,
)


def test_div_resets_on_write():
    timer = Timer()
    for _ in range(600):
        timer.update(255)
    assert timer.read(DIV_REGISTER) > 0
    timer.write(DIV_REGISTER, 0x12)
    assert timer.read(DIV_REGISTER) == 0


def test_div_is_monotonic_until_reset():
    timer = Timer()
    values = []
    for _ in range(1000):
        timer.update(200)
        values.append(timer.read(DIV_REGISTER))
    assert values == sorted(values)


@pytest.mark.parametrize(
    "select,period", [(0, 1024), (1, 16), (2, 64), (3, 256)]
)
def test_tima_increments_at_selected_rate(select, period):
    timer = Timer()
    timer.write(TIMA_REGISTER, 0x10)
    timer.write(TAC_REGISTER, 0x04 | select)
    remaining = period - 1
    while remaining:
        chunk = min(remaining, 255)
        timer.update(chunk)
        remaining -= chunk
    assert timer.read(TIMA_REGISTER) == 0x10
    timer.update(1)
    assert timer.read(TIMA_REGISTER) == 0x11


def test_overflow_reloads_tma_and_requests_interrupt():
    timer = Timer()
    timer.write(TAC_REGISTER, 0x05)
    timer.write(TMA_REGISTER, 0x42)
    timer.write(TIMA_REGISTER, 0xFF)
    assert timer.update(16) is True
    assert timer.read(TIMA_REGISTER) == 0x42
    assert timer.overflowed is True
    timer.write(TIMA_REGISTER, 0x30)
    assert timer.overflowed is False


def test_no_interrupt_without_overflow():
    timer = Timer()
    timer.write(TAC_REGISTER, 0x05)
    timer.write(TIMA_REGISTER, 0x20)
    assert timer.update(16) is False


def test_disabled_timer_does_not_count():
    timer = Timer()
    timer.write(TIMA_REGISTER, 0x33)
    timer.write(TAC_REGISTER, 0x01)
    timer.update(255)
    assert timer.read(TIMA_REGISTER) == 0x33


def test_disabling_clears_partial_cycles():
    timer = Timer()
    timer.write(TIMA_REGISTER, 0x10)
    timer.write(TAC_REGISTER, 0x05)
    timer.update(15)
    timer.write(TAC_REGISTER, 0x01)
    timer.write(TAC_REGISTER, 0x05)
    timer.update(1)
    assert timer.read(TIMA_REGISTER) == 0x10


def test_tac_keeps_low_three_bits():
    timer = Timer()
    timer.write(TAC_REGISTER, 0xFF)
    assert timer.read(TAC_REGISTER) == 0x07


def test_tma_round_trip_and_unknown_address():
    timer = Timer()
    timer.write(TMA_REGISTER, 0x9C)
    assert timer.read(TMA_REGISTER) == 0x9C
    assert timer.read(0xFF03) == 0xFF