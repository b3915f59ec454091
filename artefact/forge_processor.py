"""Eight sample-playback slots with WAV loading, host tempo sync and shared slot state."""

from __future__ import annotations

import wave
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from .forge_voice import ForgeVoice

NUM_SLOTS = 8
DEFAULT_SAMPLE_BPM = 120.0


def _decode_pcm(raw: bytes, sample_width: int, channels: int) -> np.ndarray:
    """Turn interleaved PCM bytes into floats shaped (channels, frames)."""
    if sample_width == 1:
        data = (np.frombuffer(raw, dtype=np.uint8).astype(np.float64) - 128.0) / 128.0
    elif sample_width == 2:
        data = np.frombuffer(raw, dtype="<i2").astype(np.float64) / 32768.0
    elif sample_width == 3:
        triples = np.frombuffer(raw, dtype=np.uint8).reshape(-1, 3).astype(np.int32)
        values = triples[:, 0] | (triples[:, 1] << 8) | (triples[:, 2] << 16)
        values = np.where(values & 0x800000, values - 0x1000000, values)
        data = values.astype(np.float64) / float(1 << 23)
    elif sample_width == 4:
        data = np.frombuffer(raw, dtype="<i4").astype(np.float64) / float(1 << 31)
    else:
        raise ValueError(f"unsupported sample width: {sample_width}")
    return data.reshape(-1, channels).T


def read_wav(path: str | Path) -> np.ndarray:
    """Read a PCM WAV file into floats shaped (channels, samples)."""
    with wave.open(str(path), "rb") as reader:
        channels = reader.getnchannels()
        width = reader.getsampwidth()
        raw = reader.readframes(reader.getnframes())
    return _decode_pcm(raw, width, channels)


class ForgeProcessor:
    """Owns the eight voices and mixes them into each output block."""

    def __init__(self) -> None:
        self._voices = tuple(ForgeVoice() for _ in range(NUM_SLOTS))
        self.host_bpm = 120.0

    @property
    def voices(self) -> tuple[ForgeVoice, ...]:
        return self._voices

    def prepare_to_play(self, sample_rate: float, samples_per_block: int) -> None:
        for voice in self._voices:
            voice.prepare(sample_rate, samples_per_block)

    def process_block(self, buffer: np.ndarray) -> None:
        """Add every voice's output into ``buffer`` (channels x samples)."""
        for voice in self._voices:
            voice.process(buffer, 0, buffer.shape[1])

    def load_sample_into_slot(self, slot: int, path: str | Path) -> bool:
        """Load a WAV file into a slot; returns False if nothing was loaded."""
        if not 0 <= slot < len(self._voices) or not Path(path).is_file():
            return False
        try:
            samples = read_wav(path)
        except (wave.Error, EOFError, ValueError):
            return False
        self._voices[slot].set_sample(samples, DEFAULT_SAMPLE_BPM)
        return True

    def voice(self, index: int) -> ForgeVoice:
        if not 0 <= index < len(self._voices):
            raise IndexError(f"voice index out of range: {index}")
        return self._voices[index]

    def set_host_bpm(self, bpm: float) -> None:
        self.host_bpm = float(bpm)
        for voice in self._voices:
            voice.set_host_bpm(bpm)


@dataclass
class SlotParameters:
    """Control values of one slot shared between the interface and audio code."""

    pitch: float = 0.0
    speed: float = 1.0
    volume: float = 0.7
    drive: float = 1.0
    crush: float = 16.0
    sync_enabled: bool = False
    is_playing: bool = False
    play_progress: float = 0.0


class ParameterBridge:
    """Holds the parameters of every slot."""

    def __init__(self) -> None:
        self._slots = tuple(SlotParameters() for _ in range(NUM_SLOTS))

    def slot_params(self, slot: int) -> SlotParameters:
        if not 0 <= slot < len(self._slots):
            raise IndexError(f"slot index out of range: {slot}")
        return self._slots[slot]