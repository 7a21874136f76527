"""
Base Animation Class

All effects inherit from BaseAnimation and implement frame().
"""

from typing import List, Optional

from models.color import Color


class BaseAnimation:
    """
    Base class for all LED effects

    Contract used by the SequenceRunner:
    - start(reference_time) records the origin of a run, nothing else.
    - frame(buffer, now) is called once per tick. It writes this instant's
      pixels into `buffer` in place (never resizing it) and returns True when
      the run has concluded at or before `now`.

    A concluded effect can be restarted by calling start() again, which is
    how looping animations are built (see LoopAnimation).

    IMPORTANT:
    - One instance of animation = ONE UNIVERSE at a time.
    - Buffers are live, reused across ticks. Do not keep references.
    """

    def __init__(self):
        self.start_time: Optional[float] = None

    # ------------------------------------------------------------
    # Runtime
    # ------------------------------------------------------------

    def start(self, reference_time: float) -> None:
        self.start_time = reference_time

    def frame(self, buffer: List[Color], now: float) -> bool:
        raise NotImplementedError

    # ------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------

    @property
    def started(self) -> bool:
        return self.start_time is not None

    def elapsed(self, now: float) -> float:
        """Seconds since start(); 0.0 if never started"""
        if self.start_time is None:
            return 0.0
        return now - self.start_time

    @staticmethod
    def fill(buffer: List[Color], color: Color) -> None:
        """Set every pixel of the buffer to one color"""
        for i in range(len(buffer)):
            buffer[i] = color

    def __repr__(self) -> str:
        return f"{type(self).__name__}(start_time={self.start_time})"
