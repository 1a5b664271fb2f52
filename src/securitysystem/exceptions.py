"""Exceptions for the security system accessory."""


class SecuritySystemError(Exception):
    """Base exception for all security system errors."""


class SecuritySystemConfigError(SecuritySystemError):
    """Configuration is missing, malformed or out of range."""


class SoundError(SecuritySystemError):
    """A sound cue could not be loaded or played."""
