"""ed25519-webhook public surface."""

from ed25519_webhook.crypto.ed25519_verify import CryptographyProvider, Ed25519Provider
from ed25519_webhook.encoding import concat_bytes, value_to_bytes
from ed25519_webhook.errors import (
    KeyImportError,
    ParseError,
    UnsupportedTypeError,
    VerificationFailure,
    WebhookVerifyError,
)
from ed25519_webhook.requests import CapturedRequest, verify_captured_request
from ed25519_webhook.verify import (
    load_public_key,
    verify_key,
    verify_key_or_raise,
    verify_key_with_reason,
)

__all__ = [
    "WebhookVerifyError",
    "ParseError",
    "UnsupportedTypeError",
    "KeyImportError",
    "VerificationFailure",
    "Ed25519Provider",
    "CryptographyProvider",
    "value_to_bytes",
    "concat_bytes",
    "load_public_key",
    "verify_key",
    "verify_key_or_raise",
    "verify_key_with_reason",
    "CapturedRequest",
    "verify_captured_request",
]
