"""
Errors raised by the hand tracking pipeline.
"""


class HandTrackingError(RuntimeError):
    """Base class for pipeline errors."""


class InferenceError(HandTrackingError):
    """A model backend failed to run; the current tick is aborted."""


class ConfigurationError(HandTrackingError):
    """Pipeline constants disagree with the loaded models."""
