"""Hydration errors: routing, backend and missing-secret failures.

All of these abort the whole hydration of an invocation.
"""

from __future__ import annotations

from typing import Any, Iterable

from lade.errors.base import LadeError


class RoutingError(LadeError):
    """A reference could not be routed to a provider."""

    default_code = "routing_error"


class NoProviderError(RoutingError):
    default_code = "no_provider"

    def __init__(self, reference: str, **kwargs: Any) -> None:
        super().__init__(f"No provider found for {reference!r}", **kwargs)
        self.reference = reference


class InvalidReferenceError(RoutingError):
    """A provider claimed the reference by scheme but it lacks a mandatory part."""

    default_code = "invalid_reference"

    def __init__(self, reference: str, missing: str, **kwargs: Any) -> None:
        super().__init__(f"Invalid reference {reference!r}: missing {missing}", **kwargs)
        self.reference = reference
        self.missing = missing


class BackendError(LadeError):
    """An external secret manager failed or answered with unreadable output."""

    default_code = "backend_error"

    def __init__(
        self,
        provider: str,
        message: str | None = None,
        *,
        stderr: str = "",
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"{provider} error", **kwargs)
        self.provider = provider
        self.stderr = stderr


class BackendUnavailableError(BackendError):
    """The provider's CLI binary is not on the execution path."""

    default_code = "backend_unavailable"

    def __init__(self, provider: str, install_url: str, **kwargs: Any) -> None:
        super().__init__(
            provider,
            f"{provider} CLI not found. Make sure the binary is in your PATH "
            f"or install it from {install_url}.",
            **kwargs,
        )
        self.install_url = install_url


class SecretNotFoundError(LadeError):
    """The backend answered but the requested fields are absent."""

    default_code = "secret_not_found"

    def __init__(
        self,
        provider: str,
        fields: Iterable[str],
        location: str,
        **kwargs: Any,
    ) -> None:
        self.fields = sorted(fields)
        super().__init__(
            f"Variables {', '.join(self.fields)} not found in {location} ({provider})",
            **kwargs,
        )
        self.provider = provider
        self.location = location


class OutputFileError(LadeError):
    """A rule file output could not be written or removed."""

    default_code = "output_file_error"


__all__ = [
    "BackendError",
    "BackendUnavailableError",
    "InvalidReferenceError",
    "NoProviderError",
    "OutputFileError",
    "RoutingError",
    "SecretNotFoundError",
]
