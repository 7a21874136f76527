"""Universe-to-Physical Mapping Models

Defines the relationship between logical universes and physical
(board, strand, pixel) addresses. No mapping logic - pure data models.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

from models.color import Color


@dataclass(frozen=True)
class PixelLocation:
    """{board, strand, pixel} tuple identifying one physical pixel"""
    board: int
    strand: int
    pixel: int


@dataclass(frozen=True)
class PhysicalRange:
    """
    Contiguous run of pixels on a single (board, strand) pair

    Example:
        PhysicalRange(board=1, strand=2, start_pixel=61, size=3)
        # pixels 61, 62, 63 on board 1 strand 2
    """
    board: int
    strand: int
    start_pixel: int
    size: int

    def __post_init__(self):
        """Reject negative addresses"""
        if min(self.board, self.strand, self.start_pixel, self.size) < 0:
            raise ValueError(f"PhysicalRange fields must be non-negative: {self}")

    @property
    def end_pixel(self) -> int:
        """Last pixel index covered (inclusive)"""
        return self.start_pixel + self.size - 1

    def locations(self) -> Iterator[PixelLocation]:
        """Enumerate covered pixels in ascending order"""
        for pixel in range(self.start_pixel, self.start_pixel + self.size):
            yield PixelLocation(self.board, self.strand, pixel)

    @classmethod
    def from_dict(cls, data: dict) -> PhysicalRange:
        """Build from config mapping {board, strand, start, size}"""
        return cls(
            board=int(data["board"]),
            strand=int(data["strand"]),
            start_pixel=int(data.get("start", data.get("start_pixel", 0))),
            size=int(data["size"]),
        )


@dataclass(frozen=True)
class UniverseInfo:
    """Registered universe: dense id, name and physical pixels in logical order"""
    id: int
    name: str
    locations: Tuple[PixelLocation, ...]

    @property
    def pixel_count(self) -> int:
        return len(self.locations)


@dataclass
class StrandData:
    """Pixel data of one physical strand, as handed to a transport encoder"""
    board: int
    strand: int
    pixels: List[Color] = field(default_factory=list)
