"""Command-line interface for ed25519-webhook."""

from __future__ import annotations

import argparse
import json
import re
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version
from pathlib import Path
from typing import Sequence

from ed25519_webhook.cli.config import CLIConfig, ConfigError, load_cli_config
from ed25519_webhook.requests import verify_captured_request
from ed25519_webhook.verify import verify_key_with_reason

EXIT_SUCCESS = 0
EXIT_VALIDATION_ERROR = 1
EXIT_VERIFICATION_FAILED = 4

_SENSITIVE_FIELDS = (
    "private_key",
    "secret",
    "token",
    "authorization",
    "api_key",
)


def _sdk_version() -> str:
    try:
        return pkg_version("ed25519-webhook")
    except PackageNotFoundError:
        return "0.0.0+local"


def _add_public_key_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--public-key",
        default=None,
        help="Hex-encoded Ed25519 public key (default: $ED25519_WEBHOOK_PUBLIC_KEY or config)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ed25519-webhook")
    parser.add_argument(
        "--version",
        action="version",
        version=f"ed25519-webhook {_sdk_version()}",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to CLI config TOML (default: ~/.ed25519_webhook/config.toml)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    version = sub.add_parser("version", help="Show package version")
    version.add_argument("--json", action="store_true", help="Print version details as JSON")

    verify = sub.add_parser("verify", help="Verify a signed request body")
    verify.add_argument("--timestamp", required=True, help="Timestamp sent with the request")
    verify.add_argument("--signature", required=True, help="Hex-encoded Ed25519 signature")
    body = verify.add_mutually_exclusive_group(required=True)
    body.add_argument("--body-file", default=None, help="File holding the raw body ('-' for stdin)")
    body.add_argument("--body", default=None, help="Raw body as UTF-8 text")
    _add_public_key_argument(verify)
    verify.add_argument("--json", action="store_true")

    verify_request = sub.add_parser(
        "verify-request", help="Verify a request captured as JSON (timestamp, signature, body)"
    )
    verify_request.add_argument("request_json")
    _add_public_key_argument(verify_request)
    verify_request.add_argument("--json", action="store_true")

    return parser


def _sanitize_error_text(value: str) -> str:
    redacted = value
    for field in _SENSITIVE_FIELDS:
        redacted = re.sub(
            rf"(?i)({field}\s*[=:]\s*)([^,\s]+)",
            r"\1[REDACTED]",
            redacted,
        )
    return redacted


def _print_error(stderr, prefix: str, message: str, *, code: int) -> int:
    print(f"{prefix}: {_sanitize_error_text(message)}", file=stderr)
    return code


def _print_result(*, ok: bool, reason: str, as_json: bool, stdout) -> int:
    if as_json:
        print(json.dumps({"ok": ok, "reason": reason}, sort_keys=True), file=stdout)
    elif ok:
        print("Signature verified ✓", file=stdout)
    else:
        print(f"Signature rejected: {reason}", file=stdout)
    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED


def _resolve_public_key(args, config: CLIConfig) -> str | None:
    if args.public_key:
        return args.public_key.strip()
    return config.public_key_hex


def _read_body(args, config: CLIConfig, stdin) -> bytes:
    if args.body is not None:
        data = args.body.encode("utf-8")
    elif args.body_file == "-":
        stream = getattr(stdin, "buffer", None)
        data = stream.read() if stream is not None else stdin.read().encode("utf-8")
    else:
        data = Path(args.body_file).read_bytes()
    if len(data) > config.max_body_bytes:
        raise ValueError(f"body is {len(data)} bytes; limit is {config.max_body_bytes}")
    return data


def _run_version(*, as_json: bool, stdout) -> int:
    payload = {
        "cli": "ed25519-webhook",
        "sdk_version": _sdk_version(),
    }
    if as_json:
        print(json.dumps(payload, sort_keys=True), file=stdout)
    else:
        print(f"ed25519-webhook {payload['sdk_version']}", file=stdout)
    return EXIT_SUCCESS


def _run_verify(*, args, config: CLIConfig, stdin, stdout, stderr) -> int:
    public_key = _resolve_public_key(args, config)
    if public_key is None:
        return _print_error(
            stderr,
            "verify error",
            "no public key; provide --public-key, set ED25519_WEBHOOK_PUBLIC_KEY or public_key_hex in config",
            code=EXIT_VALIDATION_ERROR,
        )

    try:
        body = _read_body(args, config, stdin)
    except (OSError, ValueError) as exc:
        return _print_error(stderr, "verify error", f"cannot read body: {exc}", code=EXIT_VALIDATION_ERROR)

    ok, reason = verify_key_with_reason(body, args.signature, args.timestamp, public_key)
    return _print_result(ok=ok, reason=reason, as_json=args.json, stdout=stdout)


def _run_verify_request(*, args, config: CLIConfig, stdout, stderr) -> int:
    public_key = _resolve_public_key(args, config)
    if public_key is None:
        return _print_error(
            stderr,
            "verify error",
            "no public key; provide --public-key, set ED25519_WEBHOOK_PUBLIC_KEY or public_key_hex in config",
            code=EXIT_VALIDATION_ERROR,
        )

    try:
        ok, reason = verify_captured_request(args.request_json, public_key=public_key)
    except (OSError, ValueError) as exc:
        return _print_error(
            stderr,
            "verify error",
            f"cannot read captured request: {exc}",
            code=EXIT_VALIDATION_ERROR,
        )
    return _print_result(ok=ok, reason=reason, as_json=args.json, stdout=stdout)


def main(
    argv: Sequence[str] | None = None,
    *,
    stdin=sys.stdin,
    stdout=sys.stdout,
    stderr=sys.stderr,
) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_cli_config(args.config)
    except ConfigError as exc:
        return _print_error(stderr, "config error", str(exc), code=EXIT_VALIDATION_ERROR)

    if args.command == "version":
        return _run_version(as_json=args.json, stdout=stdout)

    if args.command == "verify":
        return _run_verify(args=args, config=config, stdin=stdin, stdout=stdout, stderr=stderr)

    if args.command == "verify-request":
        return _run_verify_request(args=args, config=config, stdout=stdout, stderr=stderr)

    print("unknown command", file=stderr)
    return EXIT_VALIDATION_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
