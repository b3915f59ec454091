"""Linear parameter smoothing for click-free control changes."""

from __future__ import annotations

import math


class LinearSmoothedValue:
    """A value that ramps linearly towards its target over a fixed number of steps."""

    def __init__(self, initial: float = 0.0) -> None:
        self.current = float(initial)
        self.target = float(initial)
        self._steps_to_target = 0
        self._countdown = 0
        self._step = 0.0

    def reset(self, sample_rate: float, ramp_seconds: float) -> None:
        """Set the ramp length and jump straight to the current target."""
        if sample_rate <= 0 or ramp_seconds < 0:
            raise ValueError("sample rate must be positive and ramp length non-negative")
        self._steps_to_target = math.floor(ramp_seconds * sample_rate)
        self.set_current_and_target(self.target)

    def set_current_and_target(self, value: float) -> None:
        """Jump to a value with no ramp."""
        self.current = self.target = float(value)
        self._countdown = 0

    def set_target(self, value: float) -> None:
        """Start ramping towards a new target."""
        value = float(value)
        if value == self.target:
            return
        if self._steps_to_target <= 0:
            self.set_current_and_target(value)
            return
        self.target = value
        self._countdown = self._steps_to_target
        self._step = (self.target - self.current) / self._countdown

    def next_value(self) -> float:
        """Advance one step and return the new value."""
        if not self.is_smoothing():
            return self.target
        self._countdown -= 1
        if self.is_smoothing():
            self.current += self._step
        else:
            self.current = self.target
        return self.current

    def is_smoothing(self) -> bool:
        """True while a ramp is still in progress."""
        return self._countdown > 0