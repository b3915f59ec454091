"""Stroke canvas that records drag points and renders them as short sine bursts."""

from __future__ import annotations

import math
import wave
from dataclasses import dataclass
from pathlib import Path

import numpy as np

MIN_FREQUENCY = 50.0
MAX_FREQUENCY = 5000.0
BURST_AMPLITUDE = 0.3
BURST_LENGTH = 2000


def _clamp(low: float, high: float, value: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class StrokePoint:
    """A point on the canvas in normalised time and frequency, both 0..1."""

    time_norm: float
    freq_norm: float


class StrokeCanvas:
    """Collects points as the pointer is dragged over a canvas of a given size."""

    def __init__(self) -> None:
        self._strokes: list[StrokePoint] = []

    @property
    def strokes(self) -> list[StrokePoint]:
        return list(self._strokes)

    def drag(self, x: float, y: float, width: float, height: float) -> StrokePoint:
        """Record a drag position; y grows downwards, so the top is high frequency."""
        if width <= 0 or height <= 0:
            raise ValueError("canvas width and height must be positive")
        point = StrokePoint(
            time_norm=_clamp(0.0, 1.0, x / width),
            freq_norm=_clamp(0.0, 1.0, 1.0 - y / height),
        )
        self._strokes.append(point)
        return point


def render_from_canvas(strokes, sample_rate: int, duration_seconds: float) -> np.ndarray:
    """Render each point as a sine burst starting at its time; returns mono samples."""
    total = int(sample_rate * duration_seconds)
    if total < 0:
        raise ValueError("duration must not be negative")
    output = np.zeros(total)
    for point in strokes:
        start = int(point.time_norm * total)
        end = min(start + BURST_LENGTH, total)
        if end <= start:
            continue
        freq = MIN_FREQUENCY + point.freq_norm * (MAX_FREQUENCY - MIN_FREQUENCY)
        i = np.arange(end - start)
        output[start:end] += BURST_AMPLITUDE * np.sin(2.0 * math.pi * freq * i / sample_rate)
    return output


def write_wav(path: str | Path, samples, sample_rate: int) -> None:
    """Write mono samples in -1..1 as a 16-bit PCM WAV file."""
    data = np.clip(np.asarray(samples, dtype=np.float64), -1.0, 1.0)
    pcm = np.round(data * 32767.0).astype("<i2")
    with wave.open(str(path), "wb") as writer:
        writer.setnchannels(1)
        writer.setsampwidth(2)
        writer.setframerate(int(sample_rate))
        writer.writeframes(pcm.tobytes())