"""
Animation effects

Provides the effect contract used by the SequenceRunner and a few stock
effects built on it.
"""

from .base import BaseAnimation
from .interpolate_solid import InterpolateSolidAnimation
from .solid_color import SolidColorAnimation
from .loop import LoopAnimation

__all__ = [
    "BaseAnimation",
    "InterpolateSolidAnimation",
    "SolidColorAnimation",
    "LoopAnimation",
]
