# universe_layer/universe_mapping.py
"""
UniverseMapping
===============
Maps logical universes → physical (board, strand, pixel) addresses and
holds the physical pixel store those addresses point into.

Handles:
- Universe registration from ordered physical ranges (range order = logical order)
- Bounds validation against the configured board/strand extents
- Copying finished universe buffers into physical strand buffers
- Name → dense universe id lookup
"""

from __future__ import annotations
from typing import Dict, Iterator, List, Optional, Sequence, Set

from models.color import Color
from models.enums import LogCategory
from models.errors import (
    DuplicateUniverseError,
    PixelOutOfRangeError,
    SizeMismatchError,
    UniverseNotFoundError,
)
from models.installation import InstallationConfig
from models.universe import PhysicalRange, PixelLocation, StrandData, UniverseInfo
from utils.logger import BoundLogger, get_category_logger


class UniverseMapping:
    """
    Universe → physical pixel mapper.

    The physical store has three levels of indexing:
      1. Controller board
      2. Strand within the board
      3. Pixel within the strand

    Usage:
        mapping = UniverseMapping([[10, 8, 19], [1, 23, 64, 17]])
        mapping.add_universe("one", [PhysicalRange(0, 2, 3, 4)])
        mapping.update_universe(mapping.id_for_universe("one"), pixels)
        strand = mapping.get_strand_data(0, 2)

    Two universes may map the same physical pixel; the most recent
    update_universe() call wins for that pixel.
    """

    def __init__(self, dimensions: Sequence[Sequence[int]], log: Optional[BoundLogger] = None) -> None:
        """
        Args:
            dimensions: One entry per board, listing the pixel count of each strand
            log: Diagnostic sink (defaults to the MAPPING category logger)
        """
        self._log = log or get_category_logger(LogCategory.MAPPING)

        self._physical: List[List[List[Color]]] = []
        for board_idx, strands in enumerate(dimensions):
            board: List[List[Color]] = []
            for strand_idx, pixel_count in enumerate(strands):
                if pixel_count < 0:
                    raise PixelOutOfRangeError(board_idx, strand_idx)
                board.append([Color()] * int(pixel_count))
            self._physical.append(board)

        self._universes: List[UniverseInfo] = []
        self._name_to_id: Dict[str, int] = {}
        self._claimed: Set[PixelLocation] = set()

        self._log.debug(
            "UniverseMapping created",
            boards=len(self._physical),
            strands=sum(len(b) for b in self._physical),
        )

    @classmethod
    def from_config(cls, config: InstallationConfig, log: Optional[BoundLogger] = None) -> UniverseMapping:
        """
        Build the physical store and register every configured universe in order.

        Raises:
            DuplicateUniverseError, PixelOutOfRangeError: A universe definition was rejected
        """
        mapping = cls(config.boards, log=log)
        for definition in config.universes:
            if definition.name in mapping._name_to_id:
                raise DuplicateUniverseError(definition.name)
            mapping._validate_ranges(definition.ranges)
            mapping._register(definition.name, definition.ranges)
        return mapping

    # === Registration ===

    def add_universe(self, name: str, ranges: Sequence[PhysicalRange]) -> bool:
        """
        Register a universe composed of the given physical ranges.

        Universe size is the total size of all ranges; the next dense id is
        assigned.

        Returns:
            True if added; False if the name already exists or a range falls
            outside the configured extents (prior mappings are untouched).
        """
        if name in self._name_to_id:
            self._log.warn("Universe name already registered", name=name)
            return False

        try:
            self._validate_ranges(ranges)
        except PixelOutOfRangeError as ex:
            self._log.warn("Universe rejected", name=name, error=ex.message)
            return False

        self._register(name, ranges)
        return True

    def _validate_ranges(self, ranges: Sequence[PhysicalRange]) -> None:
        for r in ranges:
            strand = self._strand(r.board, r.strand)
            if r.size and r.start_pixel + r.size > len(strand):
                raise PixelOutOfRangeError(r.board, r.strand, r.end_pixel)

    def _register(self, name: str, ranges: Sequence[PhysicalRange]) -> UniverseInfo:
        universe_id = len(self._universes)
        locations = tuple(loc for r in ranges for loc in r.locations())

        shared = sum(1 for loc in set(locations) if loc in self._claimed)
        self._claimed.update(locations)
        if shared:
            self._log.debug("Universe shares physical pixels", name=name, shared=shared)

        info = UniverseInfo(id=universe_id, name=name, locations=locations)
        self._universes.append(info)
        self._name_to_id[name] = universe_id

        self._log.info("Universe registered", name=name, id=universe_id, pixels=info.pixel_count)
        return info

    # === Lookup ===

    def id_for_universe(self, name: str) -> int:
        """
        Raises:
            UniverseNotFoundError: No universe with that name
        """
        try:
            return self._name_to_id[name]
        except KeyError:
            raise UniverseNotFoundError(name) from None

    def universe(self, universe_id: int) -> UniverseInfo:
        if not 0 <= universe_id < len(self._universes):
            raise UniverseNotFoundError(universe_id)
        return self._universes[universe_id]

    def universe_size(self, universe_id: int) -> int:
        return self.universe(universe_id).pixel_count

    def universe_names(self) -> List[str]:
        """Registered names in id order"""
        return [u.name for u in self._universes]

    def universe_sizes(self) -> List[int]:
        """Pixel count per id, suitable for SequenceRunner"""
        return [u.pixel_count for u in self._universes]

    # === Physical writes ===

    def update_universe(self, universe_id: int, data: Sequence[Color]) -> None:
        """
        Copy logical pixel i of `data` into the physical pixel mapped for i.

        Raises:
            UniverseNotFoundError: Unknown universe id
            SizeMismatchError: len(data) differs from the universe size; nothing is written
        """
        info = self.universe(universe_id)
        if len(data) != info.pixel_count:
            raise SizeMismatchError(universe_id, info.pixel_count, len(data))

        physical = self._physical
        for loc, color in zip(info.locations, data):
            physical[loc.board][loc.strand][loc.pixel] = color

    def clear(self) -> None:
        """Blank every physical pixel"""
        for board in self._physical:
            for strand in board:
                strand[:] = [Color()] * len(strand)

    # === Physical reads ===

    def _strand(self, board: int, strand: int) -> List[Color]:
        if not 0 <= board < len(self._physical):
            raise PixelOutOfRangeError(board, strand)
        strands = self._physical[board]
        if not 0 <= strand < len(strands):
            raise PixelOutOfRangeError(board, strand)
        return strands[strand]

    def get_strand_data(self, board: int, strand: int) -> List[Color]:
        """
        Live physical buffer for one strand (valid until the next update).

        Raises:
            PixelOutOfRangeError: No such board or strand
        """
        return self._strand(board, strand)

    def iter_strands(self) -> Iterator[StrandData]:
        """Every strand in (board, strand) order, for a transport encoder"""
        for board_idx, board in enumerate(self._physical):
            for strand_idx, pixels in enumerate(board):
                yield StrandData(board=board_idx, strand=strand_idx, pixels=pixels)

    @property
    def board_count(self) -> int:
        return len(self._physical)

    def strand_count(self, board: int) -> int:
        if not 0 <= board < len(self._physical):
            raise PixelOutOfRangeError(board, 0)
        return len(self._physical[board])

    @property
    def universe_count(self) -> int:
        return len(self._universes)
