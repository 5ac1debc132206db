"""Exception hierarchy for KaspaBot.

Every error raised on purpose by the bot derives from KaspaBotError so the
dispatcher can tell expected failures from programming errors in its logs.
"""

from __future__ import annotations


class KaspaBotError(Exception):
    """Base class for all KaspaBot errors."""


class UpstreamError(KaspaBotError):
    """An upstream data provider failed or returned unusable data.

    Covers transport failures, timeouts, non-2xx responses, undecodable
    JSON, missing fields and non-finite numbers.

    Args:
        message: Human-readable description of the failure.
        endpoint: URL or path that was requested.
        status: HTTP status code, if a response was received.
        body: Response body excerpt, if available.
    """

    def __init__(
        self,
        message: str,
        *,
        endpoint: str = "",
        status: int | None = None,
        body: str = "",
    ) -> None:
        super().__init__(message)
        self.endpoint = endpoint
        self.status = status
        self.body = body

    def __str__(self) -> str:
        parts = [self.args[0] if self.args else "upstream error"]
        if self.endpoint:
            parts.append(f"endpoint={self.endpoint}")
        if self.status is not None:
            parts.append(f"status={self.status}")
        return " ".join(parts)


class NoDataError(KaspaBotError):
    """The upstream answered successfully but had nothing for the asset."""


class ValidationError(KaspaBotError):
    """User-supplied command parameters are missing or of the wrong type."""


class RegistrationError(KaspaBotError):
    """A command could not be registered or published to Discord."""
