"""Exception hierarchy for WordScan."""

from __future__ import annotations


class WordScanError(Exception):
    """Base class for all WordScan errors."""


class ConfigurationError(WordScanError):
    """Raised before a scan starts when its inputs or settings are invalid."""


class EnumerationError(WordScanError):
    """Raised when the scan root itself cannot be walked."""


class ReportWriteError(WordScanError):
    """Raised when the final report cannot be written."""
