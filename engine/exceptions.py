"""
Exception types raised by the engine.
"""


class EngineError(Exception):
    """Base class for engine errors."""


class UndefinedMarginError(EngineError, ValueError):
    """Raised when a margin or break-even figure has no finite value."""
