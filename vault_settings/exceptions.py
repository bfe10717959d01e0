"""Settings store exceptions"""

from typing import Optional


class SettingsError(Exception):
    """Base class for settings store errors"""


class EncodingError(SettingsError):
    """A settings model could not be converted to JSON"""


class DecodingError(SettingsError):
    """Stored JSON could not be converted back into a settings model"""


class StorageWriteError(SettingsError):
    """Writing a record to the local settings table failed.

    The session has already been rolled back when this is raised.
    """


class RemoteCallError(SettingsError):
    """A call to a remote vault failed.

    Covers unknown connections, transport errors, timeouts, non-2xx statuses,
    malformed bodies and vault-level FAILURE responses. Raised and caught
    inside the remote store only.

    Attributes:
        url: request URL, when one was built
        status_code: HTTP status, when a response was received
    """

    def __init__(
        self, message: str, url: Optional[str] = None, status_code: Optional[int] = None
    ):
        self.url = url
        self.status_code = status_code
        super().__init__(message)

    def __str__(self) -> str:
        msg = super().__str__()
        if self.status_code is not None:
            msg = f"HTTP {self.status_code}: {msg}"
        if self.url:
            msg = f"{msg} ({self.url})"
        return msg
