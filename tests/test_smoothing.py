import pytest

from artefact.smoothing import LinearSmoothedValue


def test_starts_at_initial_value():
    value = LinearSmoothedValue(0.7)
    assert value.next_value() == 0.7
    assert not value.is_smoothing()


def test_ramp_reaches_target_exactly():
    value = LinearSmoothedValue()
    value.reset(100.0, 0.1)
    value.set_target(1.0)
    assert value.is_smoothing()
    outputs = [value.next_value() for _ in range(10)]
    assert outputs[-1] == 1.0
    assert not value.is_smoothing()


def test_ramp_first_step():
    value = LinearSmoothedValue()
    value.reset(100.0, 0.1)
    value.set_target(1.0)
    assert value.next_value() == pytest.approx(0.1)


def test_ramp_is_monotonic():
    value = LinearSmoothedValue(1.0)
    value.reset(44100.0, 0.01)
    value.set_target(0.0)
    outputs = [value.next_value() for _ in range(500)]
    assert all(a >= b for a, b in zip(outputs, outputs[1:]))
    assert outputs[-1] == 0.0


def test_holds_target_after_ramp():
    value = LinearSmoothedValue()
    value.reset(100.0, 0.05)
    value.set_target(2.0)
    for _ in range(20):
        value.next_value()
    assert value.next_value() == 2.0


def test_zero_ramp_jumps_immediately():
    value = LinearSmoothedValue()
    value.reset(100.0, 0.0)
    value.set_target(0.5)
    assert not value.is_smoothing()
    assert value.next_value() == 0.5


def test_without_reset_jumps_immediately():
    value = LinearSmoothedValue()
    value.set_target(0.3)
    assert value.current == 0.3


def test_same_target_does_not_restart_ramp():
    value = LinearSmoothedValue()
    value.reset(100.0, 0.1)
    value.set_target(1.0)
    value.next_value()
    value.set_target(1.0)
    remaining = [value.next_value() for _ in range(9)]
    assert remaining[-1] == 1.0
    assert not value.is_smoothing()


def test_set_current_and_target_cancels_ramp():
    value = LinearSmoothedValue()
    value.reset(100.0, 0.1)
    value.set_target(1.0)
    value.set_current_and_target(0.25)
    assert not value.is_smoothing()
    assert value.next_value() == 0.25


def test_reset_rejects_bad_arguments():
    value = LinearSmoothedValue()
    with pytest.raises(ValueError):
        value.reset(0.0, 0.1)
    with pytest.raises(ValueError):
        value.reset(44100.0, -0.1)