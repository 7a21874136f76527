"""
ShowDriver - paces a SequenceRunner and pushes its buffers into a UniverseMapping.

Architecture:
  - tick(now): one runner.process_frame(now), then every universe buffer is
    copied into the mapping's physical store
  - Optional on_frame callback receives the mapping after each tick
    (hand-off point for a hardware transport encoder)
  - asyncio render loop at a target FPS, with pause/step/FPS control
  - Clock is injectable so the loop can run on synthetic time

The runner and mapping are not thread-safe; the driver's loop is meant to be
their single owner while it runs.
"""

from __future__ import annotations
import asyncio
import time
from collections import deque
from typing import Callable, Deque, Dict, Optional

from engine.sequence_runner import SequenceRunner
from models.enums import LogCategory
from models.errors import DomainError
from universe_layer.universe_mapping import UniverseMapping
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.RENDER_ENGINE)

FrameCallback = Callable[[UniverseMapping], None]


class ShowDriver:
    """
    Drives a running show.

    Manages:
    - Tick → mapping copy pipeline
    - Render loop lifecycle (start/stop)
    - Pause/step/FPS control
    - Performance metrics
    """

    def __init__(
        self,
        runner: SequenceRunner,
        mapping: UniverseMapping,
        fps: int = 40,
        clock: Callable[[], float] = time.monotonic,
        on_frame: Optional[FrameCallback] = None,
    ):
        """
        Args:
            runner: SequenceRunner producing universe buffers
            mapping: UniverseMapping receiving them (universe ids must line up)
            fps: Target tick frequency (1-240, default 40)
            clock: Time source passed to process_frame()
            on_frame: Called with the mapping after every tick
        """
        if runner.universe_count > mapping.universe_count:
            raise ValueError(
                f"Runner has {runner.universe_count} universes, "
                f"mapping only {mapping.universe_count}"
            )

        self.runner = runner
        self.mapping = mapping
        self.fps = max(1, min(fps, 240))
        self.clock = clock
        self.on_frame = on_frame

        # Runtime state
        self.running = False
        self.paused = False
        self.step_requested = False
        self.stop_when_done = False
        self.sequence_done = False
        self.render_task: Optional[asyncio.Task] = None

        # Metrics
        self.frames_rendered = 0
        self.frame_errors = 0
        self.frame_times: Deque[float] = deque(maxlen=300)

        log.info("ShowDriver initialized", fps=self.fps, universes=runner.universe_count)

    # === Single tick ===

    def tick(self, now: Optional[float] = None) -> bool:
        """
        Advance the show one tick and publish buffers to the mapping.

        sequence_done reflects the runner even if publishing then raises.

        Returns:
            The runner's done flag for this tick.
        """
        if now is None:
            now = self.clock()

        done = self.runner.process_frame(now)
        self.sequence_done = done

        for universe_id in range(self.runner.universe_count):
            self.mapping.update_universe(universe_id, self.runner.universe_data(universe_id))

        if self.on_frame:
            self.on_frame(self.mapping)

        self.frames_rendered += 1
        self.frame_times.append(time.perf_counter())
        return done

    # === Control API ===

    def pause(self) -> None: self.paused = True

    def resume(self) -> None: self.paused = False

    def step_frame(self) -> None: self.step_requested = True

    def set_fps(self, fps: int) -> None:
        """Change FPS at runtime."""
        self.fps = max(1, min(fps, 240))
        log.info(f"ShowDriver FPS set to {self.fps}")

    # === Lifecycle ===

    async def start(self, stop_when_done: bool = False) -> None:
        """Start the render loop."""
        if self.running:
            log.warn("ShowDriver already running")
            return

        self.running = True
        self.stop_when_done = stop_when_done
        self.render_task = asyncio.create_task(self._render_loop())
        log.info(f"ShowDriver render loop started @ {self.fps} FPS")

    async def stop(self) -> None:
        """Stop the render loop."""
        if not self.running:
            return
        self.running = False
        if self.render_task and self.render_task is not asyncio.current_task():
            self.render_task.cancel()
            try:
                await self.render_task
            except asyncio.CancelledError:
                pass

        log.info(
            "ShowDriver stopped",
            frames_rendered=self.frames_rendered,
            frame_errors=self.frame_errors,
        )

    async def wait_done(self) -> None:
        """Wait until the render loop exits."""
        if self.render_task:
            try:
                await self.render_task
            except asyncio.CancelledError:
                pass

    # === Metrics ===

    def get_actual_fps(self) -> float:
        """Get measured FPS over recent frames."""
        if len(self.frame_times) < 2:
            return 0.0
        duration = self.frame_times[-1] - self.frame_times[0]
        if duration <= 0:
            return 0.0
        return len(self.frame_times) / duration

    def get_metrics(self) -> Dict:
        return {
            "fps_target": self.fps,
            "fps_actual": self.get_actual_fps(),
            "frames_rendered": self.frames_rendered,
            "frame_errors": self.frame_errors,
            "pending_steps": self.runner.pending_count(),
            "sequence_done": self.sequence_done,
        }

    # === Core Render Loop ===

    async def _render_loop(self) -> None:
        """Main render loop @ target FPS."""
        frame_delay = 1.0 / self.fps
        log.info(f"Render loop @ {self.fps} FPS (delay={frame_delay*1000:.2f}ms)")

        try:
            while self.running:
                if self.paused and not self.step_requested:
                    await asyncio.sleep(0.01)
                    continue

                try:
                    self.tick()
                except DomainError as ex:
                    self.frame_errors += 1
                    log.error(f"Render error: {ex.message}", code=ex.code)
                except Exception as ex:
                    self.frame_errors += 1
                    log.error(f"Render error: {ex}", error=type(ex).__name__)

                self.step_requested = False

                # The runner has advanced even when publishing failed
                if self.sequence_done and self.stop_when_done:
                    log.info("Sequence complete, stopping render loop", frames_rendered=self.frames_rendered)
                    break

                await asyncio.sleep(1.0 / self.fps)
        finally:
            self.running = False
