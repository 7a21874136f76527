"""
Enums for the sequencing engine and universe mapping
"""

from enum import Enum, auto


class StepState(Enum):
    """
    Lifecycle of a single sequence step inside the SequenceRunner

    WAITING_ON_GATE: Gated on another step that has not completed yet
    WAITING_ON_TIME: Eligible, but holding for its delay to elapse
    QUEUED: In its universe queue behind another step
    ACTIVE: Head of its universe queue, producing frames
    DONE: Effect reported completion
    DROPPED: Could never run (unresolvable gate), removed at init time
    """
    WAITING_ON_GATE = auto()
    WAITING_ON_TIME = auto()
    QUEUED = auto()
    ACTIVE = auto()
    DONE = auto()
    DROPPED = auto()


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()         # Configuration loading, validation
    SEQUENCE = auto()       # Step scheduling, gating, completion
    MAPPING = auto()        # Universe registration, physical writes
    ANIMATION = auto()      # Effect start/finish
    RENDER_ENGINE = auto()  # Show driver loop
    SYSTEM = auto()         # Startup, shutdown, errors

    GENERAL = auto()    # Default general category
