"""Tests for healthsync.core.exceptions."""

from healthsync.core.exceptions import (
    ConfigurationError,
    DataProcessingError,
    FileIOError,
    HealthSyncError,
    PayloadError,
)


def test_hierarchy():
    """All exceptions should inherit from HealthSyncError."""
    for exc_cls in [ConfigurationError, DataProcessingError, PayloadError, FileIOError]:
        assert issubclass(exc_cls, HealthSyncError)


def test_payload_error_is_processing_error():
    assert issubclass(PayloadError, DataProcessingError)


def test_exception_message():
    err = ConfigurationError("unknown timezone: Mars/Base")
    assert "unknown timezone" in str(err)
