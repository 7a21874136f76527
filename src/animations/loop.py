"""
Loop Animation

Replays a wrapped effect by restarting it each time it concludes.
"""

from typing import List, Optional

from animations.base import BaseAnimation
from models.color import Color
from utils.logger import LogCategory, get_category_logger

log = get_category_logger(LogCategory.ANIMATION)


class LoopAnimation(BaseAnimation):
    """
    Restart-on-completion wrapper.

    Each time the inner effect reports completion it is restarted with
    start(now), beginning the next pass on the following frame.
    With loops=None the wrapper never concludes (run it on its own universe
    or it will block that universe's queue forever); otherwise it concludes
    when the final pass does.
    """

    def __init__(self, inner: BaseAnimation, loops: Optional[int] = None):
        super().__init__()
        if loops is not None and loops < 1:
            raise ValueError(f"loops must be >= 1 or None, got {loops}")
        self.inner = inner
        self.loops = loops
        self.completed_loops = 0

    def start(self, reference_time: float) -> None:
        super().start(reference_time)
        self.completed_loops = 0
        self.inner.start(reference_time)

    def frame(self, buffer: List[Color], now: float) -> bool:
        if self.start_time is None:
            self.start(now)

        if not self.inner.frame(buffer, now):
            return False

        self.completed_loops += 1
        if self.loops is not None and self.completed_loops >= self.loops:
            log.debug("Loop finished", passes=self.completed_loops)
            return True

        self.inner.start(now)
        return False
