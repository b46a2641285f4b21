"""Exceptions raised by the sync system."""


class CadSyncError(Exception):
    """Base class for sync system errors."""
    pass


class ConfigError(CadSyncError):
    """Raised when configuration values are missing or invalid."""
    pass


class SceneError(CadSyncError):
    """Raised when a scene description cannot be turned into host objects."""
    pass
