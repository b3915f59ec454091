import wave

import numpy as np
import pytest

from artefact.sound_renderer import (
    StrokeCanvas,
    StrokePoint,
    render_from_canvas,
    write_wav,
)


def test_empty_canvas_renders_silence_of_right_length():
    out = render_from_canvas([], 1000, 2.0)
    assert out.shape == (2000,)
    assert np.all(out == 0.0)


def test_single_burst_shape():
    out = render_from_canvas([StrokePoint(0.0, 0.0)], 200, 20.0)
    assert out[0] == pytest.approx(0.0)
    assert out[1] == pytest.approx(0.3)
    assert np.max(np.abs(out)) <= 0.3 + 1e-12
    assert np.all(out[2000:] == 0.0)
    assert np.any(out[:2000] != 0.0)


def test_burst_at_end_is_dropped():
    out = render_from_canvas([StrokePoint(1.0, 0.5)], 1000, 1.0)
    assert out.shape == (1000,)
    assert np.array_equal(out, np.zeros(1000))


def test_burst_is_truncated_at_end():
    out = render_from_canvas([StrokePoint(0.5, 0.2)], 1000, 1.0)
    assert out.shape == (1000,)
    assert np.array_equal(out[:500], np.zeros(500))
    assert out[501] == pytest.approx(0.3 * np.sin(2.0 * np.pi * (50.0 + 0.2 * 4950.0) / 1000.0))
    assert 0.0 < np.max(np.abs(out[500:])) <= 0.3 + 1e-12


def test_bursts_add_linearly():
    point = StrokePoint(0.1, 0.4)
    single = render_from_canvas([point], 8000, 1.0)
    double = render_from_canvas([point, point], 8000, 1.0)
    assert np.allclose(double, 2 * single)


def test_drag_clamps_to_canvas():
    canvas = StrokeCanvas()
    point = canvas.drag(-10, 500, 100, 200)
    assert point == StrokePoint(0.0, 0.0)
    canvas.drag(150, -20, 100, 200)
    assert canvas.strokes[-1] == StrokePoint(1.0, 1.0)
    assert len(canvas.strokes) == 2


def test_drag_maps_inside_point():
    canvas = StrokeCanvas()
    point = canvas.drag(50, 50, 100, 200)
    assert point.time_norm == pytest.approx(0.5)
    assert point.freq_norm == pytest.approx(0.75)


def test_drag_on_empty_canvas_raises():
    with pytest.raises(ValueError):
        StrokeCanvas().drag(1, 1, 0, 10)


def test_write_wav_round_trip(tmp_path):
    samples = render_from_canvas([StrokePoint(0.0, 0.3)], 8000, 0.5)
    path = tmp_path / "out.wav"
    write_wav(path, samples, 8000)
    with wave.open(str(path), "rb") as reader:
        assert reader.getnchannels() == 1
        assert reader.getsampwidth() == 2
        assert reader.getframerate() == 8000
        frames = reader.readframes(reader.getnframes())
    decoded = np.frombuffer(frames, dtype="<i2") / 32767.0
    assert decoded.shape == samples.shape
    assert np.allclose(decoded, samples, atol=1e-4)


def test_write_wav_clips(tmp_path):
    path = tmp_path / "clip.wav"
    write_wav(path, [2.0, -2.0], 8000)
    with wave.open(str(path), "rb") as reader:
        values = np.frombuffer(reader.readframes(2), dtype="<i2")
    assert list(values) == [32767, -32767]