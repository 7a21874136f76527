"""
Domain errors

Configuration problems are raised synchronously to whoever triggered them.
Per-tick scheduling anomalies are never raised; the SequenceRunner logs them
and keeps the show running.
"""

from typing import Optional


class DomainError(Exception):
    """Base class for domain-specific errors"""
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(DomainError):
    """Installation layout or universe registration is invalid"""


class DuplicateUniverseError(ConfigurationError):
    """Universe name is already registered"""
    def __init__(self, name: str):
        super().__init__(
            code="DUPLICATE_UNIVERSE",
            message=f"Universe '{name}' already registered",
            details={"name": name},
        )


class UniverseNotFoundError(ConfigurationError):
    """Universe name or ID doesn't exist"""
    def __init__(self, universe):
        super().__init__(
            code="UNIVERSE_NOT_FOUND",
            message=f"Universe '{universe}' not found",
            details={"universe": universe},
        )


class PixelOutOfRangeError(ConfigurationError):
    """Board, strand or pixel address outside the configured extents"""
    def __init__(self, board: int, strand: int, pixel: Optional[int] = None):
        location = f"board {board}, strand {strand}"
        if pixel is not None:
            location += f", pixel {pixel}"
        super().__init__(
            code="PIXEL_OUT_OF_RANGE",
            message=f"Physical address out of range: {location}",
            details={"board": board, "strand": strand, "pixel": pixel},
        )


class ConfigLoadError(ConfigurationError):
    """Installation file missing or malformed"""
    def __init__(self, path: str, reason: str):
        super().__init__(
            code="CONFIG_LOAD_FAILED",
            message=f"Cannot load installation config '{path}': {reason}",
            details={"path": path, "reason": reason},
        )


class SizeMismatchError(DomainError):
    """Universe data length disagrees with the registered pixel count"""
    def __init__(self, universe_id: int, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            code="SIZE_MISMATCH",
            message=f"Universe {universe_id} expects {expected} pixels, got {actual}",
            details={"universe_id": universe_id, "expected": expected, "actual": actual},
        )
