"""A looping sample-playback voice with pitch, speed, tempo sync, drive and bit crushing."""

from __future__ import annotations

import math
import random

import numpy as np

from .smoothing import LinearSmoothedValue

_PITCH_RAMP_SECONDS = 0.02
_VOLUME_RAMP_SECONDS = 0.01


def _clamp(low: float, high: float, value: float) -> float:
    return max(low, min(high, value))


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def as_channel_buffer(samples) -> np.ndarray:
    """Return audio data as a float array shaped (channels, samples)."""
    data = np.asarray(samples, dtype=np.float64)
    if data.ndim == 1:
        data = data.reshape(1, -1)
    if data.ndim != 2:
        raise ValueError("audio buffer must be one- or two-dimensional")
    return data


class ForgeVoice:
    """Plays one loaded sample in a loop, adding its output into a buffer."""

    def __init__(self) -> None:
        self._buffer = np.zeros((0, 0), dtype=np.float64)
        self._sample_name = ""

        self._position = 0.0
        self._playback_rate = 1.0
        self._playing = False

        self._volume = 0.7
        self._pitch = 0.0
        self._speed = 1.0
        self._drive = 1.0
        self._crush_bits = 16.0

        self._sync_enabled = False
        self._host_bpm = 120.0
        self._original_bpm = 120.0
        self._sample_rate = 44100.0

        self._pitch_smooth = LinearSmoothedValue()
        self._volume_smooth = LinearSmoothedValue()

    # ------------------------------------------------------------------ lifecycle

    def prepare(self, sample_rate: float, block_size: int) -> None:
        """Set the playback sample rate and reset parameter smoothing."""
        if block_size < 0:
            raise ValueError("block size must not be negative")
        self._sample_rate = float(sample_rate)
        self._pitch_smooth.reset(sample_rate, _PITCH_RAMP_SECONDS)
        self._volume_smooth.reset(sample_rate, _VOLUME_RAMP_SECONDS)

    def set_sample(self, buffer, original_bpm: float = 120.0) -> None:
        """Load new audio data (channels x samples, or mono 1-D) and rewind."""
        self._buffer = as_channel_buffer(buffer).copy()
        self._original_bpm = float(original_bpm)
        self._sample_name = f"Sample {random.randrange(1000)}"
        self.reset()

    def process(self, output: np.ndarray, start_sample: int, num_samples: int) -> None:
        """Add this voice's audio into ``output[:, start_sample:start_sample + num_samples]``."""
        if output.ndim != 2:
            raise ValueError("output must be shaped (channels, samples)")
        length = self._buffer.shape[1]
        if not self._playing or length == 0:
            return

        self._pitch_smooth.set_target(self._pitch)
        self._volume_smooth.set_target(self._volume)

        num_channels = min(output.shape[0], self._buffer.shape[0])
        source_channels = self._buffer.shape[0]

        for offset in range(num_samples):
            self._update_playback_rate()

            pos = int(self._position)
            frac = self._position - pos

            for ch in range(num_channels):
                if pos < length - 1:
                    data = self._buffer[ch % source_channels]
                    value = data[pos] * (1.0 - frac) + data[pos + 1] * frac
                    value = self._process_sample(value)
                    value *= self._volume_smooth.next_value()
                    output[ch, start_sample + offset] += value

            self._position += self._playback_rate * self._pitch_smooth.next_value()
            if self._position >= length:
                self._position = 0.0

    # -------------------------------------------------------------------- control

    def start(self) -> None:
        self._playing = True

    def stop(self) -> None:
        self._playing = False

    def reset(self) -> None:
        """Rewind to the start of the sample."""
        self._position = 0.0
        self._update_playback_rate()

    # ----------------------------------------------------------------- parameters

    def set_pitch(self, semitones: float) -> None:
        self._pitch = 2.0 ** (semitones / 12.0)

    def set_speed(self, speed: float) -> None:
        self._speed = _clamp(0.1, 4.0, speed)
        self._update_playback_rate()

    def set_sync_mode(self, sync: bool) -> None:
        self._sync_enabled = bool(sync)
        self._update_playback_rate()

    def set_host_bpm(self, bpm: float) -> None:
        self._host_bpm = float(bpm)
        self._update_playback_rate()

    def set_volume(self, volume: float) -> None:
        self._volume = float(volume)

    def set_drive(self, drive: float) -> None:
        self._drive = _clamp(1.0, 10.0, drive)

    def set_crush(self, bits: float) -> None:
        self._crush_bits = _clamp(1.0, 16.0, bits)

    # ----------------------------------------------------------------------- info

    @property
    def is_active(self) -> bool:
        return self._playing

    @property
    def has_sample(self) -> bool:
        return self._buffer.shape[1] > 0

    @property
    def sample_name(self) -> str:
        return self._sample_name

    @property
    def sample_buffer(self) -> np.ndarray:
        """A read-only view of the loaded audio."""
        view = self._buffer.view()
        view.flags.writeable = False
        return view

    @property
    def progress(self) -> float:
        length = self._buffer.shape[1]
        return self._position / length if length > 0 else 0.0

    @property
    def host_bpm(self) -> float:
        return self._host_bpm

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def drive(self) -> float:
        return self._drive

    @property
    def crush_bits(self) -> float:
        return self._crush_bits

    @property
    def playback_rate(self) -> float:
        return self._playback_rate

    # -------------------------------------------------------------------- helpers

    def _update_playback_rate(self) -> None:
        rate = self._speed
        if self._sync_enabled and self._host_bpm > 0 and self._original_bpm > 0:
            rate *= self._host_bpm / self._original_bpm
        self._playback_rate = rate

    def _process_sample(self, value: float) -> float:
        if self._drive > 1.0:
            value = math.tanh(value * self._drive) / self._drive
        if self._crush_bits < 16.0:
            scale = 2.0 ** (self._crush_bits - 1.0)
            value = _round_half_away(value * scale) / scale
        return value