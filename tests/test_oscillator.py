import pytest

from artefact.colour import TRANSPARENT_BLACK
from artefact.oscillator import AudioParams, Oscillator, PaintStrokePoint, Point


def test_point_equality_is_approximate():
    assert Point(1.0, 2.0) == Point(1.0 + 1e-12, 2.0)
    assert not (Point(1.0, 2.0) == Point(1.1, 2.0))


def test_defaults():
    params = AudioParams()
    assert params.frequency == 440.0
    assert params.pan == 0.5
    point = PaintStrokePoint(Point(3.0, 4.0))
    assert point.pressure == 1.0
    assert point.color == TRANSPARENT_BLACK
    assert 0 <= point.timestamp <= 0xFFFFFFFF


def test_new_oscillator_is_inactive():
    osc = Oscillator()
    assert osc.is_active() is False
    assert osc.sample() == 0.0


def test_set_parameters_clamps():
    osc = Oscillator()
    osc.set_parameters(AudioParams(frequency=300.0, amplitude=2.0, pan=-1.0))
    assert osc.frequency == 300.0
    assert osc.target_amplitude == 1.0
    assert osc.target_pan == 0.0
    assert osc.is_active() is True


def test_smooth_parameters_default_factor():
    osc = Oscillator()
    osc.set_parameters(AudioParams(amplitude=1.0, pan=1.0))
    osc.smooth_parameters()
    assert osc.amplitude == pytest.approx(0.05)
    assert osc.pan == pytest.approx(0.5 + 0.5 * 0.05)


def test_smoothing_converges():
    osc = Oscillator()
    osc.set_parameters(AudioParams(amplitude=0.8))
    for _ in range(500):
        osc.smooth_parameters()
    assert osc.amplitude == pytest.approx(0.8, abs=1e-6)


def test_update_phase_and_sample():
    osc = Oscillator(frequency=11025.0)
    osc.set_parameters(AudioParams(frequency=11025.0, amplitude=1.0))
    osc.smooth_parameters(1.0)
    osc.update_phase(44100.0)
    assert osc.phase == pytest.approx(0.25)
    assert osc.phase_increment == pytest.approx(0.25)
    assert osc.sample() == pytest.approx(1.0)


def test_phase_wraps_into_unit_interval():
    osc = Oscillator(frequency=30000.0)
    for _ in range(50):
        osc.update_phase(44100.0)
        assert 0.0 <= osc.phase < 1.0


def test_inactive_after_fade_out():
    osc = Oscillator()
    osc.set_parameters(AudioParams(amplitude=1.0))
    osc.smooth_parameters(1.0)
    osc.set_parameters(AudioParams(amplitude=0.0))
    for _ in range(1000):
        osc.smooth_parameters()
    assert osc.is_active() is False