import pytest
from typing import List
from unittest.mock import MagicMock

from animations.base import BaseAnimation
from models.color import Color
from utils.logger import get_logger


START = 100.0
TICK = 0.5


class PatternAnimation(BaseAnimation):
    """
    Deterministic single-shot effect: pixel i gets
    (first + 3i, first + 3i + 1, first + 3i + 2, 0), wrapping at 256.
    """

    def __init__(self, first: int):
        super().__init__()
        self.first = first
        self.frames = 0

    def frame(self, buffer: List[Color], now: float) -> bool:
        count = self.first
        for idx in range(len(buffer)):
            buffer[idx] = Color(count % 256, (count + 1) % 256, (count + 2) % 256, 0)
            count += 3
        self.frames += 1
        return True


class CountdownAnimation(BaseAnimation):
    """Concludes on its Nth frame; records every start() call"""

    def __init__(self, frames: int):
        super().__init__()
        self.remaining = frames
        self.starts: List[float] = []

    def start(self, reference_time: float) -> None:
        super().start(reference_time)
        self.starts.append(reference_time)

    def frame(self, buffer: List[Color], now: float) -> bool:
        self.remaining -= 1
        return self.remaining <= 0


def pattern(first: int, size: int) -> List[Color]:
    """Expected buffer content for PatternAnimation(first)"""
    out = []
    count = first
    for _ in range(size):
        out.append(Color(count % 256, (count + 1) % 256, (count + 2) % 256, 0))
        count += 3
    return out


@pytest.fixture
def make_pattern():
    return PatternAnimation


@pytest.fixture
def make_countdown():
    return CountdownAnimation


@pytest.fixture
def expected_pattern():
    return pattern


@pytest.fixture
def at():
    """Timestamp of tick n"""
    return lambda tick: START + tick * TICK


@pytest.fixture
def mock_log():
    """Stand-in for a BoundLogger; records diagnostics without printing"""
    return MagicMock()


@pytest.fixture
def captured_logs():
    """Collect every record emitted through the logger singleton"""
    records = []
    logger = get_logger()
    logger.set_sink(lambda **record: records.append(record))
    yield records
    logger.set_sink(None)
