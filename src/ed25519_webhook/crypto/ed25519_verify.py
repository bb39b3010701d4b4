"""Ed25519 signature verification helper."""

from __future__ import annotations

from typing import Protocol

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from ed25519_webhook.errors import KeyImportError


class Ed25519Provider(Protocol):
    def import_public_key(self, public_key: bytes) -> Ed25519PublicKey: ...

    def verify(self, key: Ed25519PublicKey, signature: bytes, message: bytes) -> bool: ...


class CryptographyProvider:
    """Provider backed by the ``cryptography`` Ed25519 primitives.

    Imported keys are public-only handles, so nothing beyond the raw bytes
    the caller already holds can be exported from them.
    """

    def import_public_key(self, public_key: bytes) -> Ed25519PublicKey:
        try:
            return Ed25519PublicKey.from_public_bytes(public_key)
        except ValueError as exc:
            raise KeyImportError(f"invalid Ed25519 public key: {exc}") from exc

    def verify(self, key: Ed25519PublicKey, signature: bytes, message: bytes) -> bool:
        try:
            key.verify(signature, message)
        except InvalidSignature:
            return False
        return True


DEFAULT_PROVIDER = CryptographyProvider()
