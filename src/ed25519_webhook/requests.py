"""Re-verification of webhook requests captured to JSON."""

from __future__ import annotations

import base64
import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, ValidationError

from ed25519_webhook.crypto.ed25519_verify import Ed25519Provider
from ed25519_webhook.verify import PublicKeyInput, verify_key_with_reason


class CapturedRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    timestamp: str
    signature: str
    body: str = ""
    body_encoding: Literal["utf-8", "base64"] = "utf-8"

    def body_bytes(self) -> bytes:
        if self.body_encoding == "base64":
            return base64.b64decode(self.body, validate=True)
        return self.body.encode("utf-8")


def load_captured_request(path: str | Path) -> dict:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def verify_captured_request(
    captured: dict | str | Path,
    *,
    public_key: PublicKeyInput,
    provider: Ed25519Provider | None = None,
) -> tuple[bool, str]:
    if isinstance(captured, dict):
        payload = captured
    else:
        try:
            payload = load_captured_request(captured)
        except json.JSONDecodeError:
            return False, "invalid captured request: not valid JSON"
    if not isinstance(payload, dict):
        return False, "invalid captured request: expected a JSON object"
    try:
        model = CapturedRequest(**payload)
    except ValidationError as exc:
        return False, f"invalid captured request: {exc.error_count()} validation error(s)"

    try:
        body = model.body_bytes()
    except ValueError:
        return False, "invalid captured request: body is not valid base64"

    return verify_key_with_reason(
        body,
        model.signature,
        model.timestamp,
        public_key,
        provider=provider,
    )
