"""Command messages passed from the interface to the audio engines, and their queue."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import IntEnum

from .colour import TRANSPARENT_BLACK, Colour

PAINT_COMMAND_BASE = 200


class ForgeCommandID(IntEnum):
    """Identifiers of sample-player and legacy canvas commands."""

    TEST = 0

    LOAD_SAMPLE = 10
    START_PLAYBACK = 11
    STOP_PLAYBACK = 12
    SET_PITCH = 13
    SET_SPEED = 14
    SET_SYNC_MODE = 15
    SET_VOLUME = 16
    SET_DRIVE = 17
    SET_CRUSH = 18

    LOAD_CANVAS_IMAGE = 50
    SET_CANVAS_PLAYHEAD = 51
    SET_CANVAS_ACTIVE = 52
    SET_PROCESSING_MODE = 53
    SET_CANVAS_FREQ_RANGE = 54


class PaintCommandID(IntEnum):
    """Identifiers of paint engine commands."""

    BEGIN_STROKE = 200
    UPDATE_STROKE = 201
    END_STROKE = 202
    CLEAR_CANVAS = 203
    CLEAR_REGION = 204
    SET_PLAYHEAD_POSITION = 205
    SET_CANVAS_REGION = 206
    SET_PAINT_ACTIVE = 207
    SET_MASTER_GAIN = 208
    SET_FREQUENCY_RANGE = 209


@dataclass(frozen=True)
class Command:
    """A single message; which fields matter depends on the command id."""

    command_id: int = ForgeCommandID.TEST
    int_param: int = -1
    float_param: float = 0.0
    double_param: float = 0.0
    bool_param: bool = False
    string_param: str = ""
    x: float = 0.0
    y: float = 0.0
    pressure: float = 1.0
    color: Colour = field(default=TRANSPARENT_BLACK)

    def is_forge_command(self) -> bool:
        return self.command_id < PAINT_COMMAND_BASE

    def is_paint_command(self) -> bool:
        return self.command_id >= PAINT_COMMAND_BASE

    def forge_id(self) -> ForgeCommandID:
        """The id as a forge command; raises ValueError if it is not one."""
        return ForgeCommandID(self.command_id)

    def paint_id(self) -> PaintCommandID:
        """The id as a paint command; raises ValueError if it is not one."""
        return PaintCommandID(self.command_id)


class CommandQueue:
    """A bounded FIFO of commands holding at most ``capacity - 1`` entries."""

    def __init__(self, capacity: int = 64) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._items: deque[Command] = deque()

    def push(self, command: Command) -> bool:
        """Append a command; returns False when the queue is full."""
        if self.is_full():
            return False
        self._items.append(command)
        return True

    def pop(self) -> Command | None:
        """Remove and return the oldest command, or None when empty."""
        return self._items.popleft() if self._items else None

    def clear(self) -> None:
        self._items.clear()

    def is_empty(self) -> bool:
        return not self._items

    def is_full(self) -> bool:
        return len(self._items) >= self.capacity - 1

    def __len__(self) -> int:
        return len(self._items)