"""ARGB colour values with hue, saturation and brightness queries."""

from __future__ import annotations

from dataclasses import dataclass, replace


def _to_byte(value: float) -> int:
    """Map a 0..1 float to a byte, rounding half up and clamping."""
    return max(0, min(255, int(value * 255.0 + 0.5)))


@dataclass(frozen=True)
class Colour:
    """An 8-bit-per-channel colour with alpha."""

    red: int = 0
    green: int = 0
    blue: int = 0
    alpha: int = 0

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue", "alpha"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"{name} component out of range: {value}")

    @classmethod
    def from_argb(cls, argb: int) -> Colour:
        """Build a colour from a packed 0xAARRGGBB integer."""
        if not 0 <= argb <= 0xFFFFFFFF:
            raise ValueError(f"ARGB value out of range: {argb:#x}")
        return cls(
            red=(argb >> 16) & 0xFF,
            green=(argb >> 8) & 0xFF,
            blue=argb & 0xFF,
            alpha=(argb >> 24) & 0xFF,
        )

    @property
    def argb(self) -> int:
        """The colour packed as 0xAARRGGBB."""
        return (self.alpha << 24) | (self.red << 16) | (self.green << 8) | self.blue

    def brightness(self) -> float:
        """Brightness in HSB terms: the largest channel, 0..1."""
        return max(self.red, self.green, self.blue) / 255.0

    def saturation(self) -> float:
        """Saturation in HSB terms, 0..1."""
        hi = max(self.red, self.green, self.blue)
        lo = min(self.red, self.green, self.blue)
        return (hi - lo) / hi if hi > 0 else 0.0

    def hue(self) -> float:
        """Hue in HSB terms, in the range [0, 1)."""
        hi = max(self.red, self.green, self.blue)
        lo = min(self.red, self.green, self.blue)
        if hi == 0 or hi == lo:
            return 0.0
        inv_diff = 1.0 / (hi - lo)
        red = (hi - self.red) * inv_diff
        green = (hi - self.green) * inv_diff
        blue = (hi - self.blue) * inv_diff
        if self.red == hi:
            hue = blue - green
        elif self.green == hi:
            hue = 2.0 + red - blue
        else:
            hue = 4.0 + green - red
        hue /= 6.0
        if hue < 0.0:
            hue += 1.0
        return hue

    def with_alpha(self, alpha: float) -> Colour:
        """Return a copy with alpha set from a 0..1 float."""
        return replace(self, alpha=_to_byte(alpha))


TRANSPARENT_BLACK = Colour.from_argb(0x00000000)
BLACK = Colour.from_argb(0xFF000000)
WHITE = Colour.from_argb(0xFFFFFFFF)
RED = Colour.from_argb(0xFFFF0000)
GREEN = Colour.from_argb(0xFF008000)
LIME = Colour.from_argb(0xFF00FF00)
BLUE = Colour.from_argb(0xFF0000FF)