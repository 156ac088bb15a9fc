"""Exceptions raised by the vehicle sheets sync."""

from typing import Optional


class SheetsSyncError(Exception):
    """Base class for every failure the sync can report."""


class ConfigReadError(SheetsSyncError):
    """A configuration or credentials file could not be read."""


class ConfigParseError(SheetsSyncError):
    """The vehicle document is not valid YAML or does not have the expected shape."""


class AuthConfigError(SheetsSyncError):
    """The OAuth client secrets or cached token are malformed."""


class AuthFlowError(SheetsSyncError):
    """Obtaining or refreshing an OAuth token failed."""


class SinkWriteError(SheetsSyncError):
    """A call to the Google Sheets API failed."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
