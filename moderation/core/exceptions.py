# moderation/core/exceptions.py

"""Custom exception hierarchy for the moderation engine.

This module defines the specific error types used throughout the application
to differentiate between configuration, initialization, and input errors.
"""


class ModerationError(Exception):
    """Base exception for all application-specific errors."""

    pass


class ConfigurationError(ModerationError):
    """Raised when the rule catalogue or settings fail to load or validate."""

    pass


class InitializationError(ModerationError):
    """Raised when the detector recognizers cannot be built."""

    pass


class ValidationError(ModerationError):
    """Raised when caller input is unusable (e.g., unknown policy selector)."""

    pass
