"""Canvas points, audio parameters, stroke points and the sine oscillator of the paint engine."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field

from .colour import TRANSPARENT_BLACK, Colour

_FLOAT32_EPSILON = 1.1920929e-07
_FLOAT32_MIN = 1.17549435e-38
_ACTIVE_THRESHOLD = 0.0001


def _clamp(low: float, high: float, value: float) -> float:
    return max(low, min(high, value))


def _approximately_equal(a: float, b: float) -> bool:
    return math.isclose(a, b, rel_tol=_FLOAT32_EPSILON, abs_tol=_FLOAT32_MIN)


def _millisecond_counter() -> int:
    return int(time.monotonic() * 1000) & 0xFFFFFFFF


@dataclass(frozen=True, eq=False)
class Point:
    """A canvas position: x is time, y is frequency."""

    x: float = 0.0
    y: float = 0.0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return _approximately_equal(self.x, other.x) and _approximately_equal(self.y, other.y)

    __hash__ = None  # type: ignore[assignment]


@dataclass
class AudioParams:
    """Synthesis parameters derived from one painted point."""

    frequency: float = 440.0
    amplitude: float = 0.0
    pan: float = 0.5
    time: float = 0.0
    filter_cutoff: float = 1.0
    resonance: float = 0.0
    mod_depth: float = 0.0


@dataclass
class PaintStrokePoint:
    """One sampled point of a brush stroke."""

    position: Point = field(default_factory=Point)
    pressure: float = 1.0
    color: Colour = TRANSPARENT_BLACK
    velocity: float = 0.0
    timestamp: int = field(default_factory=_millisecond_counter)


@dataclass
class Oscillator:
    """A sine partial with smoothed amplitude and pan."""

    frequency: float = 440.0
    amplitude: float = 0.0
    target_amplitude: float = 0.0
    phase: float = 0.0
    pan: float = 0.5
    target_pan: float = 0.5
    phase_increment: float = 0.0

    def set_parameters(self, params: AudioParams) -> None:
        self.frequency = params.frequency
        self.target_amplitude = _clamp(0.0, 1.0, params.amplitude)
        self.target_pan = _clamp(0.0, 1.0, params.pan)

    def update_phase(self, sample_rate: float) -> None:
        """Advance the phase by one sample, wrapping into [0, 1)."""
        self.phase_increment = self.frequency / sample_rate
        self.phase += self.phase_increment
        if self.phase >= 1.0:
            self.phase -= math.floor(self.phase)

    def sample(self) -> float:
        return math.sin(self.phase * 2.0 * math.pi) * self.amplitude

    def is_active(self) -> bool:
        return self.amplitude > _ACTIVE_THRESHOLD or self.target_amplitude > _ACTIVE_THRESHOLD

    def smooth_parameters(self, smoothing_factor: float = 0.05) -> None:
        """Move amplitude and pan a fraction of the way towards their targets."""
        self.amplitude += (self.target_amplitude - self.amplitude) * smoothing_factor
        self.pan += (self.target_pan - self.pan) * smoothing_factor