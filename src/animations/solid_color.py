"""
Solid Color Animation

Paint the universe one color and hold it.
"""

from typing import List

from animations.base import BaseAnimation
from models.color import Color


class SolidColorAnimation(BaseAnimation):
    """
    Fill every pixel with one color.

    With hold=0 the effect is single-shot: it paints and concludes on its
    first frame. Otherwise it keeps painting until `hold` seconds have passed.
    """

    def __init__(self, color: Color, hold: float = 0.0):
        super().__init__()
        self.color = color
        self.hold = max(0.0, hold)

    def frame(self, buffer: List[Color], now: float) -> bool:
        if self.start_time is None:
            self.start(now)
        self.fill(buffer, self.color)
        return self.elapsed(now) >= self.hold
