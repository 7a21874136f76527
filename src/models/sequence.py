"""
Sequence models

A Sequence is an ordered list of Steps built by calling code and handed to
SequenceRunner.init_sequence(). Steps are plain data; all scheduling state
lives inside the runner.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from animations.base import BaseAnimation


@dataclass
class Step:
    """
    One application of an animation effect to one universe

    Attributes:
        universe_id: Universe the effect renders into (0..N-1)
        effect: Animation instance to play
        delay: Seconds to wait once eligible (after sequence start, or after
               the gating step completes when on_completion_of is set)
        on_completion_of: step_id of the step that must complete first
        step_id: Identifier other steps can gate on (None = not referenceable)

    Example:
        Step(universe_id=2, effect=fade, on_completion_of=1, delay=0.5)
        # starts 0.5s after the step with step_id=1 completes
    """
    universe_id: int
    effect: BaseAnimation
    delay: float = 0.0
    on_completion_of: Optional[int] = None
    step_id: Optional[int] = None

    @property
    def is_gated(self) -> bool:
        return self.on_completion_of is not None

    @property
    def has_delay(self) -> bool:
        return self.delay > 0


@dataclass
class Sequence:
    """Ordered collection of steps, the unit passed to the runner"""
    steps: List[Step] = field(default_factory=list)

    def add(self, step: Step) -> Sequence:
        """Append a step, returning the sequence for chaining"""
        self.steps.append(step)
        return self

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)
