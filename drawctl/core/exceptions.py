"""drawctl exceptions."""


class DrawCtlError(Exception):
    """Base exception for drawctl."""


class ConfigError(DrawCtlError):
    """Invalid or missing configuration."""


class StorageError(DrawCtlError):
    """Preference store unavailable or a write could not be made durable."""
