"""
SequenceRunner - discrete-event step scheduler for per-universe effects.

Architecture:
  - One pixel buffer and one active queue per universe (dense ids 0..N-1)
  - Only the head of a universe queue is live; siblings wait their turn
  - Steps waiting on time sit in a run-at list, steps waiting on another
    step's completion sit in a gate list
  - process_frame(now) is one tick: promote due steps, render every live
    head, release steps gated on whatever just finished

Step lifecycle:
  WAITING_ON_GATE → (gate completes) → WAITING_ON_TIME | QUEUED
  WAITING_ON_TIME → (now >= run_at) → QUEUED
  QUEUED → (head of universe queue) → ACTIVE → (effect done) → DONE

Gate references are resolved once per init_sequence() into indices into the
step list; nothing compares step identities during a tick.

Nothing here sleeps or blocks. Pacing belongs to whoever calls
process_frame() (see ShowDriver), so the runner is fully deterministic for a
given series of timestamps.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Iterable, List, Optional

from models.color import Color
from models.enums import LogCategory, StepState
from models.errors import UniverseNotFoundError
from models.sequence import Step
from utils.logger import BoundLogger, get_category_logger


@dataclass
class _ScheduledStep:
    """Step index waiting for a point in time"""
    run_at: float
    index: int


@dataclass
class _GatedStep:
    """Step index waiting for another step index to complete"""
    gate: int
    index: int


class SequenceRunner:
    """
    Executes a Sequence of Steps against per-universe pixel buffers.

    Usage:
        runner = SequenceRunner([30, 30, 60])
        runner.init_sequence(sequence, now=clock())
        while not runner.process_frame(clock()):
            send(runner.universe_data(0))

    Buffers returned by universe_data() are live and reused across ticks:
    read them before the next process_frame() and do not keep them.
    """

    def __init__(self, universe_sizes: Iterable[int], log: Optional[BoundLogger] = None):
        """
        Initialize SequenceRunner.

        Args:
            universe_sizes: Pixel count per universe; the position is the universe id
            log: Diagnostic sink (defaults to the SEQUENCE category logger)
        """
        self._log = log or get_category_logger(LogCategory.SEQUENCE)

        self._sizes: List[int] = [int(size) for size in universe_sizes]
        for universe_id, size in enumerate(self._sizes):
            if size < 0:
                raise ValueError(f"Universe {universe_id} has negative size {size}")

        self._buffers: List[List[Color]] = [[Color()] * size for size in self._sizes]
        self._active: List[Deque[int]] = [deque() for _ in self._sizes]
        self._awaiting_time: List[_ScheduledStep] = []
        self._awaiting_gate: List[_GatedStep] = []

        self._steps: List[Step] = []
        self._states: List[StepState] = []

        self._log.debug("SequenceRunner created", universes=len(self._sizes), sizes=self._sizes)

    # === Sequence setup ===

    def init_sequence(self, sequence: Iterable[Step], now: float) -> None:
        """
        Load a sequence starting at `now`, discarding any sequence in progress.

        Safe to call repeatedly to restart a show. Buffers keep their current
        contents so effects can continue from what is displayed.

        Raises:
            UniverseNotFoundError: A step targets a universe id this runner
                does not have. Runner state is left untouched.
        """
        steps = list(sequence)
        for step in steps:
            if not 0 <= step.universe_id < len(self._sizes):
                raise UniverseNotFoundError(step.universe_id)

        self._reset()
        self._steps = steps
        self._states = [StepState.QUEUED] * len(steps)

        gates = self._resolve_gates(steps)
        viable: Dict[int, bool] = {}

        for index, step in enumerate(steps):
            if step.is_gated:
                if not self._is_viable(index, gates, viable):
                    self._drop(index, gates[index])
                    continue
                self._states[index] = StepState.WAITING_ON_GATE
                self._awaiting_gate.append(_GatedStep(gate=gates[index], index=index))
            elif step.has_delay:
                self._schedule(index, now + step.delay)
            else:
                self._enqueue(index)

        self._log.info(
            "Sequence initialized",
            steps=len(steps),
            queued=sum(len(q) for q in self._active),
            waiting_on_time=len(self._awaiting_time),
            waiting_on_gate=len(self._awaiting_gate),
            dropped=self._states.count(StepState.DROPPED),
        )

    def _reset(self) -> None:
        for queue in self._active:
            queue.clear()
        self._awaiting_time = []
        self._awaiting_gate = []
        self._steps = []
        self._states = []

    def _resolve_gates(self, steps: List[Step]) -> List[Optional[int]]:
        """Map each step's on_completion_of to the index of the referenced step"""
        by_id: Dict[int, int] = {}
        for index, step in enumerate(steps):
            if step.step_id is None:
                continue
            if step.step_id in by_id:
                self._log.warn(
                    "Duplicate step id, later step cannot be gated on",
                    step_id=step.step_id,
                    first_index=by_id[step.step_id],
                    ignored_index=index,
                )
                continue
            by_id[step.step_id] = index

        return [
            by_id.get(step.on_completion_of) if step.is_gated else None
            for step in steps
        ]

    def _is_viable(self, index: int, gates: List[Optional[int]], memo: Dict[int, bool]) -> bool:
        """
        Whether a step can ever become eligible.

        Follows the gate chain until it reaches an ungated step (viable), a
        gate that did not resolve or a cycle (not viable). Every step on the
        walked chain shares the outcome.
        """
        chain: List[int] = []
        current = index
        while True:
            if current in memo:
                result = memo[current]
                break
            if current in chain:
                result = False
                break
            chain.append(current)
            if not self._steps[current].is_gated:
                result = True
                break
            gate = gates[current]
            if gate is None:
                result = False
                break
            current = gate

        for idx in chain:
            memo[idx] = result
        return result

    def _drop(self, index: int, gate: Optional[int]) -> None:
        step = self._steps[index]
        self._states[index] = StepState.DROPPED
        if gate is None:
            self._log.warn(
                "Could not find gating step, step will be ignored",
                step_index=index,
                universe=step.universe_id,
                on_completion_of=step.on_completion_of,
            )
        else:
            self._log.warn(
                "Gating step can never complete, step will be ignored",
                step_index=index,
                universe=step.universe_id,
                on_completion_of=step.on_completion_of,
            )

    # === Queue helpers ===

    def _schedule(self, index: int, run_at: float) -> None:
        self._states[index] = StepState.WAITING_ON_TIME
        self._awaiting_time.append(_ScheduledStep(run_at=run_at, index=index))

    def _enqueue(self, index: int) -> None:
        self._states[index] = StepState.QUEUED
        self._active[self._steps[index].universe_id].append(index)

    def _promote_scheduled(self, now: float) -> None:
        """Move every step whose run-at time has arrived into its universe queue"""
        due = [entry for entry in self._awaiting_time if now >= entry.run_at]
        if not due:
            return
        self._awaiting_time = [entry for entry in self._awaiting_time if now < entry.run_at]
        for entry in due:
            self._enqueue(entry.index)

    def _complete(self, index: int, now: float) -> None:
        """Pop a finished head and release every step gated on it"""
        step = self._steps[index]
        queue = self._active[step.universe_id]
        if queue and queue[0] == index:
            queue.popleft()
        self._states[index] = StepState.DONE

        released = [entry for entry in self._awaiting_gate if entry.gate == index]
        if not released:
            return
        self._awaiting_gate = [entry for entry in self._awaiting_gate if entry.gate != index]

        for entry in released:
            waiting = self._steps[entry.index]
            if waiting.has_delay:
                self._schedule(entry.index, now + waiting.delay)
            else:
                self._enqueue(entry.index)
            self._log.debug(
                "Gate released",
                step_index=entry.index,
                gate_index=index,
                delay=waiting.delay,
            )

    # === Tick ===

    def process_frame(self, now: float) -> bool:
        """
        Advance one tick at time `now` (expected to be non-decreasing).

        Returns:
            True when no universe had a live step this tick and nothing is
            waiting on time or on a gate.
        """
        self._promote_scheduled(now)

        any_active = False
        # Queues are read live: a step released onto a later universe runs this tick
        for universe_id in range(len(self._active)):
            queue = self._active[universe_id]
            if not queue:
                continue
            any_active = True
            index = queue[0]
            step = self._steps[index]

            buffer = self._buffers[universe_id]
            try:
                if self._states[index] is not StepState.ACTIVE:
                    self._states[index] = StepState.ACTIVE
                    step.effect.start(now)
                done = step.effect.frame(buffer, now)
            except Exception as ex:
                self._log.error(
                    "Effect failed, step treated as complete",
                    step_index=index,
                    universe=universe_id,
                    effect=type(step.effect).__name__,
                    error=str(ex),
                )
                done = True

            if len(buffer) != self._sizes[universe_id]:
                self._log.error(
                    "Effect resized universe buffer, restoring",
                    universe=universe_id,
                    expected=self._sizes[universe_id],
                    actual=len(buffer),
                )
                self._restore_buffer_size(universe_id)

            if done:
                self._complete(index, now)

        return not any_active and not self._awaiting_time and not self._awaiting_gate

    def _restore_buffer_size(self, universe_id: int) -> None:
        buffer = self._buffers[universe_id]
        size = self._sizes[universe_id]
        del buffer[size:]
        buffer.extend([Color()] * (size - len(buffer)))

    # === Accessors ===

    def universe_data(self, universe_id: int) -> List[Color]:
        """
        Live buffer for a universe, updated by process_frame().

        Raises:
            UniverseNotFoundError: Unknown universe id
        """
        if not 0 <= universe_id < len(self._buffers):
            raise UniverseNotFoundError(universe_id)
        return self._buffers[universe_id]

    @property
    def universe_count(self) -> int:
        return len(self._sizes)

    def universe_size(self, universe_id: int) -> int:
        if not 0 <= universe_id < len(self._sizes):
            raise UniverseNotFoundError(universe_id)
        return self._sizes[universe_id]

    def step_state(self, index: int) -> StepState:
        """State of the step at `index` in the current sequence"""
        return self._states[index]

    def pending_count(self) -> int:
        """Steps not yet done (queued, active or waiting)"""
        return (
            sum(len(queue) for queue in self._active)
            + len(self._awaiting_time)
            + len(self._awaiting_gate)
        )
