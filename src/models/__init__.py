"""
Models package - Data models for the LED sequencing engine
"""

from .enums import StepState, LogLevel, LogCategory
from .color import Color
from .sequence import Step, Sequence
from .universe import PixelLocation, PhysicalRange, UniverseInfo, StrandData
from .installation import InstallationConfig, UniverseDefinition

__all__ = [
    'StepState',
    'LogLevel',
    'LogCategory',
    'Color',
    'Step',
    'Sequence',
    'PixelLocation',
    'PhysicalRange',
    'UniverseInfo',
    'StrandData',
    'InstallationConfig',
    'UniverseDefinition',
]
