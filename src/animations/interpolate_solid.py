"""
Interpolate Solid Animation

Transition the whole universe from one solid color to another over a fixed
duration.
"""

from typing import List

from animations.base import BaseAnimation
from models.color import Color
from utils.logger import LogCategory, get_category_logger

log = get_category_logger(LogCategory.ANIMATION)


class InterpolateSolidAnimation(BaseAnimation):
    """
    Solid color fade: every pixel shows the same color, blended from
    start_color to end_color as time passes.

    The run concludes on the first frame strictly after
    start_time + duration; the frame at exactly start_time + duration still
    renders end_color.

    If start_on_current is set, the start color is sampled from pixel 0 of
    the buffer on the first frame, so the fade continues from whatever the
    universe currently shows.
    """

    def __init__(
        self,
        start_color: Color,
        end_color: Color,
        duration: float,
        start_on_current: bool = False,
    ):
        super().__init__()
        self.start_color = start_color
        self.end_color = end_color
        self.duration = max(0.0, duration)
        self.start_on_current = start_on_current

    @classmethod
    def from_hex(cls, start_color: int, end_color: int, duration: float) -> 'InterpolateSolidAnimation':
        """Create from 24-bit 0xRRGGBB colors"""
        return cls(Color.from_hex(start_color), Color.from_hex(end_color), duration)

    @classmethod
    def to_hex(cls, end_color: int, duration: float) -> 'InterpolateSolidAnimation':
        """Fade from the universe's current color to a 0xRRGGBB color"""
        return cls(Color.black(), Color.from_hex(end_color), duration, start_on_current=True)

    def start(self, reference_time: float) -> None:
        log.debug("Interpolation started", start_time=reference_time, duration=self.duration)
        super().start(reference_time)

    def frame(self, buffer: List[Color], now: float) -> bool:
        """Render one frame; True once the duration has passed"""
        if self.start_time is None:
            self.start(now)

        elapsed = self.elapsed(now)
        if elapsed > self.duration:
            log.debug("Interpolation done", now=now, start_time=self.start_time)
            return True

        if self.start_on_current:
            # Blank buffers have alpha 0; sample RGB only
            if buffer:
                self.start_color = buffer[0].opaque()
            self.start_on_current = False

        progress = elapsed / self.duration if self.duration > 0 else 1.0
        self.fill(buffer, self.start_color.blend(self.end_color, progress))
        return False
