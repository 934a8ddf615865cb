"""Error hierarchy for contentdesk.

Library code raises these; the CLI catches them at the command boundary.
"""

from __future__ import annotations


class ContentDeskError(Exception):
    """Base error for all contentdesk failures."""


class MissingRecordError(ContentDeskError):
    """No raw content record was supplied to the edit view."""

    def __init__(self, message: str = "No content found") -> None:
        super().__init__(message)


class DecodeFailure(ContentDeskError):
    """A channel value looked like JSON but could not be decoded.

    Raised and recovered inside the payload parser only.
    """


class ReadOnlyChannelError(ContentDeskError):
    """The channel is copy-only and cannot be replaced with flat text."""


class APIError(ContentDeskError):
    """The backend request failed or returned a non-success status."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class SaveFailure(ContentDeskError):
    """Persisting an edit session failed; the canonical model is unchanged."""

    def __init__(self, message: str = "Failed to save", cause: APIError | None = None) -> None:
        super().__init__(message)
        self.cause = cause
