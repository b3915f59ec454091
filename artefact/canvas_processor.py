"""Additive resynthesis of an image: each row drives a sine partial, columns are time."""

from __future__ import annotations

import math

import numpy as np

from .colour import Colour
from .smoothing import LinearSmoothedValue

_TWO_PI = 2.0 * math.pi
_AUDIBLE_THRESHOLD = 0.0001
_AMPLITUDE_SMOOTHING = 0.05
_GAIN_RAMP_SECONDS = 0.01


def _clamp(low: float, high: float, value: float) -> float:
    return max(low, min(high, value))


def _as_image(image) -> np.ndarray:
    """Validate image data: (height, width) grey, or (height, width, 3|4) RGB(A) bytes."""
    data = np.asarray(image)
    if data.ndim == 2:
        pass
    elif data.ndim == 3 and data.shape[2] in (3, 4):
        pass
    else:
        raise ValueError("image must be (h, w), (h, w, 3) or (h, w, 4)")
    if data.size and (data.min() < 0 or data.max() > 255):
        raise ValueError("pixel values must lie in 0..255")
    return data.astype(np.uint8)


class CanvasProcessor:
    """Plays an image as a bank of sine partials, scanning one column per block."""

    def __init__(self, max_partials: int = 512) -> None:
        if max_partials < 1:
            raise ValueError("max_partials must be at least 1")
        self.max_partials = max_partials
        self._image: np.ndarray | None = None
        self.image_width = 0
        self.image_height = 0

        self._frequency = np.zeros(max_partials)
        self._phase = np.zeros(max_partials)
        self._amplitude = np.zeros(max_partials)
        self._target = np.zeros(max_partials)
        self._pan = np.full(max_partials, 0.5)

        self.sample_rate = 44100.0
        self.playhead_position = 0.0
        self._active = False
        self._use_panning = True
        self.min_frequency = 20.0
        self.max_frequency = 20000.0
        self._amplitude_scale = 1.0
        self._master_gain = LinearSmoothedValue()

    # ------------------------------------------------------------------ lifecycle

    def prepare_to_play(self, sample_rate: float, samples_per_block: int) -> None:
        """Set the sample rate, reset the gain ramp and silence every partial."""
        self.sample_rate = float(sample_rate)
        self._master_gain.reset(self.sample_rate, _GAIN_RAMP_SECONDS)
        self._master_gain.set_current_and_target(1.0)
        self._phase[:] = 0.0
        self._amplitude[:] = 0.0
        self._target[:] = 0.0

    def process_block(self, buffer: np.ndarray) -> None:
        """Overwrite channels 0 and 1 of ``buffer`` (channels x samples) with output."""
        if buffer.ndim != 2:
            raise ValueError("buffer must be shaped (channels, samples)")
        if not self._active or self._image is None:
            buffer[...] = 0.0
            return
        num_channels, num_samples = buffer.shape
        if num_channels == 0:
            return

        column = int(_clamp(0, self.image_width - 1, int(self.playhead_position * self.image_width)))
        self._update_from_column(column)

        left = buffer[0]
        right = buffer[1] if num_channels > 1 else None
        stereo = self._use_panning and right is not None
        increments = self._frequency / self.sample_rate

        for n in range(num_samples):
            active = (self._target > _AUDIBLE_THRESHOLD) | (self._amplitude > _AUDIBLE_THRESHOLD)
            amps = self._amplitude[active]
            amps += (self._target[active] - amps) * _AMPLITUDE_SMOOTHING
            self._amplitude[active] = amps

            values = np.sin(self._phase[active] * _TWO_PI) * amps
            if stereo:
                pans = self._pan[active]
                left_sum = float(np.dot(values, 1.0 - pans))
                right_sum = float(np.dot(values, pans))
            else:
                left_sum = float(values.sum())
                right_sum = 0.0

            phases = self._phase[active] + increments[active]
            phases[phases >= 1.0] -= 1.0
            self._phase[active] = phases

            gain = self._master_gain.next_value() * self._amplitude_scale
            left[n] = left_sum * gain
            if right is not None:
                right[n] = right_sum * gain if self._use_panning else left[n]

    def update_from_image(self, image) -> None:
        """Load new image data and silence every partial."""
        data = _as_image(image)
        self.image_height, self.image_width = data.shape[0], data.shape[1]
        self._image = data if data.shape[0] > 0 and data.shape[1] > 0 else None
        self._amplitude[:] = 0.0
        self._target[:] = 0.0

    # -------------------------------------------------------------------- control

    def set_active(self, active: bool) -> None:
        self._active = bool(active)

    def set_playhead_position(self, position: float) -> None:
        self.playhead_position = _clamp(0.0, 1.0, position)

    def set_frequency_range(self, min_hz: float, max_hz: float) -> None:
        self.min_frequency = _clamp(20.0, 20000.0, min_hz)
        self.max_frequency = _clamp(self.min_frequency, 22000.0, max_hz)

    def set_master_gain(self, gain: float) -> None:
        self._master_gain.set_target(gain)

    def set_amplitude_scale(self, scale: float) -> None:
        self._amplitude_scale = float(scale)

    def set_use_panning(self, use_panning: bool) -> None:
        self._use_panning = bool(use_panning)

    # ---------------------------------------------------------------------- state

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def partial_frequencies(self) -> np.ndarray:
        return self._frequency.copy()

    @property
    def partial_amplitudes(self) -> np.ndarray:
        return self._amplitude.copy()

    @property
    def partial_target_amplitudes(self) -> np.ndarray:
        return self._target.copy()

    @property
    def partial_pans(self) -> np.ndarray:
        return self._pan.copy()

    # ------------------------------------------------------------------- mapping

    def pixel_y_to_frequency(self, y: int) -> float:
        """Map a pixel row to a frequency on a log scale, top row highest."""
        if self.image_height <= 0:
            raise ValueError("no image loaded")
        normalised = 1.0 - y / self.image_height
        log_min = math.log(self.min_frequency)
        log_max = math.log(self.max_frequency)
        return math.exp(log_min + normalised * (log_max - log_min))

    def _pixel(self, x: int, y: int) -> Colour:
        assert self._image is not None
        pixel = self._image[y, x]
        if self._image.ndim == 2:
            value = int(pixel)
            return Colour(value, value, value, value)
        if self._image.shape[2] == 3:
            return Colour(int(pixel[0]), int(pixel[1]), int(pixel[2]), 255)
        return Colour(int(pixel[0]), int(pixel[1]), int(pixel[2]), int(pixel[3]))

    def _update_from_column(self, x: int) -> None:
        if self._image is None or not 0 <= x < self.image_width:
            return
        is_colour = self._image.ndim == 3
        step = max(1, self.image_height // self.max_partials)
        rows = range(0, self.image_height, step)
        for index, y in zip(range(self.max_partials), rows):
            pixel = self._pixel(x, y)
            self._frequency[index] = self.pixel_y_to_frequency(y)
            self._target[index] = pixel.brightness()
            self._pan[index] = pixel.hue() if is_colour else 0.5