"""
Color conversion utilities

Pure functions for hex decoding and channel blending. No color-space
modelling beyond straight RGB interpolation.
"""

from typing import Tuple


def hex_to_rgb(hex_color: int) -> Tuple[int, int, int]:
    """
    Decode a 24-bit 0xRRGGBB value into an (r, g, b) tuple

    Example:
        r, g, b = hex_to_rgb(0xEE8800)  # (238, 136, 0)
    """
    return ((hex_color >> 16) & 0xFF, (hex_color >> 8) & 0xFF, hex_color & 0xFF)


def clamp_channel(value: float) -> int:
    """Round and clamp a channel value into 0-255"""
    return max(0, min(255, int(round(value))))


def lerp_channel(start: int, end: int, t: float) -> int:
    """
    Linear interpolation between two channel values

    Args:
        start: Channel value at t=0
        end: Channel value at t=1
        t: Progress, clamped to 0.0-1.0

    Returns:
        Interpolated channel value (0-255)
    """
    t = max(0.0, min(1.0, t))
    return clamp_channel(start + (end - start) * t)


def lerp_rgb(
    start: Tuple[int, int, int],
    end: Tuple[int, int, int],
    t: float,
) -> Tuple[int, int, int]:
    """Interpolate each RGB channel independently"""
    return (
        lerp_channel(start[0], end[0], t),
        lerp_channel(start[1], end[1], t),
        lerp_channel(start[2], end[2], t),
    )
