"""
main.py - Demo entry point
--------------------------

Responsible for:
- loading the installation config
- building the universe mapping and sequence runner
- playing a demo sequence through the ShowDriver until it completes

Hardware transport is not part of this project; the on_frame hook only
reports how many strands were produced.
"""

import sys

# Set UTF-8 encoding for output (fixes Unicode symbol rendering)
if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore

import argparse
import asyncio
from pathlib import Path

from animations import InterpolateSolidAnimation, LoopAnimation, SolidColorAnimation
from engine import ShowDriver
from managers import ConfigManager
from models import Color, Sequence, Step
from models.enums import LogCategory, LogLevel
from models.errors import DomainError
from universe_layer import UniverseMapping
from utils.logger import configure_logger, get_logger

log = get_logger().for_category(LogCategory.SYSTEM)

DEFAULT_CONFIG = Path(__file__).parent / "config" / "installation.yaml"


def build_demo_sequence(universe_count: int) -> Sequence:
    """
    Wipe every universe to black, then cascade amber fades one universe
    after another, each starting when the previous one finishes.
    """
    sequence = Sequence()
    for universe_id in range(universe_count):
        sequence.add(Step(universe_id=universe_id, effect=SolidColorAnimation(Color.black())))

    for universe_id in range(universe_count):
        fade = InterpolateSolidAnimation.to_hex(0xEE8800, duration=1.0)
        sequence.add(Step(
            universe_id=universe_id,
            effect=LoopAnimation(fade, loops=2),
            step_id=universe_id + 1,
            on_completion_of=universe_id if universe_id else None,
            delay=0.25 if universe_id else 0.0,
        ))
    return sequence


async def main(config_path: Path, fps: int) -> None:
    log.info("Starting show", config=str(config_path), fps=fps)

    config = ConfigManager(config_path)
    config.load()
    mapping = config.build_mapping()
    runner = config.build_runner()

    def on_frame(m: UniverseMapping) -> None:
        log.debug("Frame ready", strands=sum(1 for _ in m.iter_strands()))

    driver = ShowDriver(runner, mapping, fps=fps, on_frame=on_frame)
    runner.init_sequence(build_demo_sequence(runner.universe_count), now=driver.clock())

    await driver.start(stop_when_done=True)
    await driver.wait_done()
    log.info("Show finished", **driver.get_metrics())


# ---------------------------------------------------------------------------
# ENTRY POINT
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Play a demo sequence on the configured installation")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG)
    parser.add_argument("--fps", type=int, default=40)
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args()

    configure_logger(min_level=LogLevel.DEBUG if args.debug else LogLevel.INFO)

    try:
        asyncio.run(main(args.config, args.fps))
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")
    except DomainError as e:
        log.error(f"Fatal error: {e.message}", code=e.code)
        sys.exit(1)
