"""Verification error types."""

from __future__ import annotations


class WebhookVerifyError(RuntimeError):
    """Base verification error."""


class ParseError(WebhookVerifyError):
    """A hex string had odd length or non-hex characters."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class UnsupportedTypeError(WebhookVerifyError, TypeError):
    """Input value is not one of the accepted types."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class KeyImportError(WebhookVerifyError):
    """Decoded key bytes are not a valid Ed25519 public key."""


class VerificationFailure(WebhookVerifyError):
    """Signature does not match the message under the given key."""
