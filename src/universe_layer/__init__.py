"""
Universe layer - logical universe to physical pixel mapping
"""

from .universe_mapping import UniverseMapping

__all__ = ["UniverseMapping"]
