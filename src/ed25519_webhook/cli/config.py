"""Configuration helpers for the ed25519-webhook CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_PATH = Path.home() / ".ed25519_webhook" / "config.toml"
DEFAULT_MAX_BODY_BYTES = 1024 * 1024
PUBLIC_KEY_ENV_VAR = "ED25519_WEBHOOK_PUBLIC_KEY"


@dataclass(frozen=True)
class CLIConfig:
    public_key_hex: str | None = None
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES


class ConfigError(ValueError):
    """Raised when CLI config is invalid."""


def _load_toml(path: Path) -> dict[str, Any]:
    raw = path.read_text(encoding="utf-8")

    try:  # Python 3.11+
        import tomllib  # type: ignore[attr-defined]
        try:
            return tomllib.loads(raw)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML in {path}: {exc}") from exc
    except ModuleNotFoundError:
        try:
            import tomli
        except ModuleNotFoundError as exc:
            raise ConfigError("toml parser unavailable; install tomli for Python < 3.11") from exc
        try:
            return tomli.loads(raw)
        except tomli.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML in {path}: {exc}") from exc


def _to_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{field_name} must be a positive integer")
    try:
        parsed = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{field_name} must be a positive integer") from exc
    if parsed <= 0:
        raise ConfigError(f"{field_name} must be a positive integer")
    return parsed


def load_cli_config(path: str | Path | None = None) -> CLIConfig:
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    env_public_key = (os.getenv(PUBLIC_KEY_ENV_VAR) or "").strip() or None
    if not config_path.exists():
        return CLIConfig(public_key_hex=env_public_key)

    parsed = _load_toml(config_path)
    section = parsed.get("cli")
    if isinstance(section, dict):
        source = section
    elif section is None:
        source = parsed
    else:
        raise ConfigError("[cli] must be a table")

    public_key_raw = source.get("public_key_hex")
    if public_key_raw is None:
        configured_public_key = None
    elif isinstance(public_key_raw, str):
        configured_public_key = public_key_raw.strip() or None
    else:
        raise ConfigError("public_key_hex must be a string")

    max_body_bytes = _to_positive_int(
        source.get("max_body_bytes", DEFAULT_MAX_BODY_BYTES), "max_body_bytes"
    )

    return CLIConfig(
        public_key_hex=env_public_key or configured_public_key,
        max_body_bytes=max_body_bytes,
    )
