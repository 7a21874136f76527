"""Installation configuration models

Explicitly constructed description of the physical installation: which
boards exist, how many pixels each strand carries, and which logical
universes are composed from which physical ranges. Built once at startup
(usually by ConfigManager) and passed to whatever needs it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

from models.universe import PhysicalRange


@dataclass(frozen=True)
class UniverseDefinition:
    """Named universe composed of ordered physical ranges"""
    name: str
    ranges: List[PhysicalRange]

    def __post_init__(self):
        """Validate that the universe is addressable"""
        if not self.name:
            raise ValueError("UniverseDefinition requires a name")

    @property
    def pixel_count(self) -> int:
        return sum(r.size for r in self.ranges)


@dataclass
class InstallationConfig:
    """
    Boards, strands and universes of one installation

    Attributes:
        boards: One entry per controller board; each entry lists the pixel
                count of every strand on that board
        universes: Universe definitions in registration (= id) order

    Example:
        InstallationConfig(
            boards=[[10, 8, 19], [1, 23, 64, 17]],
            universes=[UniverseDefinition("one", [PhysicalRange(0, 2, 3, 4)])],
        )
    """
    boards: List[List[int]] = field(default_factory=list)
    universes: List[UniverseDefinition] = field(default_factory=list)

    def universe_sizes(self) -> List[int]:
        """Pixel count per universe id, as expected by SequenceRunner"""
        return [u.pixel_count for u in self.universes]

    def universe_index(self, name: str) -> int:
        """
        Position of a universe definition (equals its mapping id)

        Raises:
            KeyError if no universe has that name
        """
        for idx, universe in enumerate(self.universes):
            if universe.name == name:
                return idx
        raise KeyError(f"Universe '{name}' not defined in installation")

    @property
    def strand_count(self) -> int:
        return sum(len(strands) for strands in self.boards)
