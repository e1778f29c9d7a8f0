"""Custom exception hierarchy for the journal.

The aggregation functions never raise; these cover the layers around
them (configuration, decoding, import, storage).
"""


class JournalError(Exception):
    """Base exception for all journal errors."""


# --- Configuration ---
class ConfigError(JournalError):
    """Invalid or missing configuration."""


# --- Data ---
class DataError(JournalError):
    """A trade record could not be decoded."""


class ImportFormatError(DataError):
    """An import file does not have the expected shape."""


class MissingColumnsError(ImportFormatError):
    """CSV import is missing required columns."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            f"CSV is missing required columns: {', '.join(missing)}"
        )


# --- Storage ---
class StoreError(DataError):
    """Record store is unreadable or the requested record is unknown."""
