"""
HealthSync exception hierarchy.

All healthsync exceptions inherit from HealthSyncError, so callers can
report any library-level failure while still telling the modes apart.
"""


class HealthSyncError(Exception):
    """Base exception class for all healthsync errors."""


class ConfigurationError(HealthSyncError):
    """Raised for configuration errors (missing keys, invalid values)."""


class DataProcessingError(HealthSyncError):
    """Raised when building daily metrics from exports fails."""


class PayloadError(DataProcessingError):
    """Raised when an export payload cannot be interpreted at all."""


class FileIOError(HealthSyncError):
    """Raised for file I/O errors."""
