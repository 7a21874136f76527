"""
Engine - sequencing and frame pumping
"""

from .sequence_runner import SequenceRunner
from .show_driver import ShowDriver

__all__ = ["SequenceRunner", "ShowDriver"]
