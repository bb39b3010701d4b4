"""Ed25519 verification of signed webhook requests.

The signed message is the timestamp bytes immediately followed by the raw
body bytes. ``verify_key`` reduces every failure to ``False``;
``verify_key_with_reason`` reports which check failed.
"""

from __future__ import annotations

from typing import Union

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from ed25519_webhook.crypto.ed25519_verify import DEFAULT_PROVIDER, Ed25519Provider
from ed25519_webhook.encoding import HEX_FORMAT, ByteLike, concat_bytes, value_to_bytes
from ed25519_webhook.errors import (
    KeyImportError,
    ParseError,
    UnsupportedTypeError,
    VerificationFailure,
)

PublicKeyInput = Union[str, Ed25519PublicKey]


def load_public_key(
    public_key_hex: str,
    *,
    provider: Ed25519Provider | None = None,
) -> Ed25519PublicKey:
    """Import a hex-encoded Ed25519 public key as a verify-only handle.

    Passing the returned handle to ``verify_key`` skips the per-call import.
    """
    provider = provider or DEFAULT_PROVIDER
    try:
        raw = value_to_bytes(public_key_hex, HEX_FORMAT)
    except ParseError as exc:
        raise ParseError(str(exc), field="public_key") from exc
    return provider.import_public_key(raw)


def _resolve_public_key(public_key: PublicKeyInput, provider: Ed25519Provider) -> Ed25519PublicKey:
    if isinstance(public_key, str):
        return load_public_key(public_key, provider=provider)
    if isinstance(public_key, Ed25519PublicKey):
        return public_key
    raise UnsupportedTypeError(
        "public key must be a hex string or an Ed25519PublicKey",
        field="public_key",
    )


def verify_key_or_raise(
    raw_body: ByteLike | None,
    signature: str,
    timestamp: str,
    public_key: PublicKeyInput,
    *,
    provider: Ed25519Provider | None = None,
) -> None:
    provider = provider or DEFAULT_PROVIDER

    try:
        timestamp_data = value_to_bytes(timestamp)
    except UnsupportedTypeError as exc:
        raise UnsupportedTypeError(str(exc), field="timestamp") from exc
    try:
        body_data = value_to_bytes(raw_body)
    except UnsupportedTypeError as exc:
        raise UnsupportedTypeError(str(exc), field="body") from exc
    message = concat_bytes(timestamp_data, body_data)

    key = _resolve_public_key(public_key, provider)

    try:
        signature_data = value_to_bytes(signature, HEX_FORMAT)
    except ParseError as exc:
        raise ParseError(str(exc), field="signature") from exc

    if not provider.verify(key, signature_data, message):
        raise VerificationFailure("signature does not match message")


def _failure_reason(exc: Exception) -> str:
    if isinstance(exc, ParseError):
        if exc.field == "public_key":
            return "invalid public key hex"
        return "invalid signature hex"
    if isinstance(exc, UnsupportedTypeError):
        if exc.field == "public_key":
            return "unsupported public key type"
        if exc.field == "timestamp":
            return "unsupported timestamp type"
        return "unsupported body type"
    if isinstance(exc, KeyImportError):
        return "invalid public key"
    if isinstance(exc, VerificationFailure):
        return "invalid signature"
    return "verification error"


def verify_key_with_reason(
    raw_body: ByteLike | None,
    signature: str,
    timestamp: str,
    public_key: PublicKeyInput,
    *,
    provider: Ed25519Provider | None = None,
) -> tuple[bool, str]:
    try:
        verify_key_or_raise(raw_body, signature, timestamp, public_key, provider=provider)
    except Exception as exc:
        return False, _failure_reason(exc)
    return True, "ok"


def verify_key(
    raw_body: ByteLike | None,
    signature: str,
    timestamp: str,
    public_key: PublicKeyInput,
    *,
    provider: Ed25519Provider | None = None,
) -> bool:
    """Return whether ``signature`` is valid over ``timestamp + raw_body``.

    Args:
        raw_body: Request body as received, either text or bytes.
        signature: Hex-encoded Ed25519 signature.
        timestamp: Timestamp string sent alongside the signature.
        public_key: Hex-encoded public key or a handle from ``load_public_key``.
        provider: Optional Ed25519 provider, mainly for tests.

    Returns:
        ``True`` only for an authentic signature. Malformed input of any kind
        yields ``False`` rather than an exception.
    """
    ok, _ = verify_key_with_reason(raw_body, signature, timestamp, public_key, provider=provider)
    return ok
