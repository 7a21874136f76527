"""
Utility functions for the LED sequencing engine
"""

from .colors import (
    hex_to_rgb,
    clamp_channel,
    lerp_channel,
    lerp_rgb,
)

__all__ = [
    'hex_to_rgb',
    'clamp_channel',
    'lerp_channel',
    'lerp_rgb',
]
