"""
Color model - RGBA pixel value

Every pixel buffer in the system (universe buffers, physical strand buffers)
holds Color values. Colors are immutable so a buffer slot can be overwritten
without aliasing surprises.
"""

from dataclasses import dataclass
from typing import Tuple
from utils.colors import hex_to_rgb, lerp_rgb


@dataclass(frozen=True)
class Color:
    """
    RGBA pixel value, each channel 0-255

    A default-constructed Color is fully blank (0, 0, 0, 0), which is what
    freshly allocated buffers contain.

    Examples:
        red = Color.from_rgb(255, 0, 0)
        amber = Color.from_hex(0xEE8800)
        halfway = red.blend(amber, 0.5)
    """
    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0

    # === CONSTRUCTORS ===

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> 'Color':
        """Create an opaque color from RGB (0-255)"""
        return cls(r, g, b, 0xFF)

    @classmethod
    def from_hex(cls, hex_color: int) -> 'Color':
        """Create an opaque color from a 24-bit 0xRRGGBB value"""
        return cls.from_rgb(*hex_to_rgb(hex_color))

    # === RENDERING ===

    def to_rgb(self) -> Tuple[int, int, int]:
        """(r, g, b) tuple for hardware encoders"""
        return (self.r, self.g, self.b)

    def to_hex(self) -> int:
        return (self.r << 16) | (self.g << 8) | self.b

    def opaque(self) -> 'Color':
        """Same RGB with full alpha"""
        return Color(self.r, self.g, self.b, 0xFF)

    def blend(self, other: 'Color', t: float) -> 'Color':
        """
        Blend towards another color

        Args:
            other: Target color (reached at t=1.0)
            t: Progress 0.0-1.0 (clamped)

        Returns:
            New opaque Color
        """
        return Color.from_rgb(*lerp_rgb(self.to_rgb(), other.to_rgb(), t))

    @staticmethod
    def black() -> 'Color':
        return Color.from_rgb(0, 0, 0)

    @staticmethod
    def white() -> 'Color':
        return Color.from_rgb(255, 255, 255)

    @staticmethod
    def red() -> 'Color':
        return Color.from_rgb(255, 0, 0)

    @staticmethod
    def green() -> 'Color':
        return Color.from_rgb(0, 255, 0)

    @staticmethod
    def blue() -> 'Color':
        return Color.from_rgb(0, 0, 255)

    def __str__(self) -> str:
        return f"Color(#{self.to_hex():06X}, a={self.a})"
