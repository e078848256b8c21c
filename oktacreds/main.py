"""oktacreds command-line entrypoint."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from oktacreds.config.settings import Settings, SettingsLoadError, load_settings
from oktacreds.core.mfa import MFAOverrides
from oktacreds.core.prompt import TerminalPrompter
from oktacreds.core.update_workflow import FailureKind, UpdateOutcome, run_update
from oktacreds.models.credential import account_key
from oktacreds.secrets.factory import backend_types
from oktacreds.telemetry.event_log import EventLog
from oktacreds.version import __version__

LOGGER = logging.getLogger(__name__)

EXIT_CODES = {
    FailureKind.STORE_UNAVAILABLE: 3,
    FailureKind.NOT_FOUND: 4,
    FailureKind.CORRUPT_RECORD: 4,
    FailureKind.PROMPT_ABORTED: 5,
    FailureKind.VALIDATION_ERROR: 6,
    FailureKind.WRITE_PERMISSION_DENIED: 7,
}

FAILURE_TITLES = {
    FailureKind.STORE_UNAVAILABLE: "Update failed: keyring backend is unavailable.",
    FailureKind.NOT_FOUND: "Update failed: no stored okta credentials.",
    FailureKind.CORRUPT_RECORD: "Update failed: stored okta credentials are unreadable.",
    FailureKind.PROMPT_ABORTED: "Update failed: new password was not entered.",
    FailureKind.VALIDATION_ERROR: "Update failed: credentials are invalid.",
    FailureKind.WRITE_PERMISSION_DENIED: "Update failed: keyring refused to store credentials.",
}


def build_parser() -> argparse.ArgumentParser:
    # Shared flags work before or after the subcommand.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", type=Path, default=argparse.SUPPRESS, help="Settings YAML path")
    common.add_argument(
        "--backend",
        default=argparse.SUPPRESS,
        help=f"Keyring backend to use: {', '.join(backend_types())} (default: first available)",
    )
    common.add_argument("--debug", action="store_true", default=argparse.SUPPRESS, help="Enable debug logging")

    parser = argparse.ArgumentParser(
        prog="oktacreds",
        description="Manage okta credentials in the OS keyring",
        parents=[common],
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    commands = parser.add_subparsers(dest="command", required=True)
    update = commands.add_parser("update", help="update your okta credentials", parents=[common])
    update.add_argument("--account", default="", help="Okta account name")
    update.add_argument("--mfa-provider", help="MFA provider (OKTA, DUO, GOOGLE, SYMANTEC, YUBICO)")
    update.add_argument("--mfa-factor-type", help="MFA factor type (push, totp, sms, call, token:hardware, u2f, webauthn)")
    update.add_argument("--mfa-duo-device", help="MFA device identifier")
    return parser


def _configure_logging(settings: Optional[Settings], debug: bool) -> None:
    level = logging.DEBUG if debug else (settings.log_level if settings else logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _report_failure(outcome: UpdateOutcome) -> int:
    failure = outcome.failure
    if failure is None:
        return 1
    LOGGER.error("update failed kind=%s from=%s", failure.kind.value, failure.failed_from.value)
    print(
        f"{FAILURE_TITLES[failure.kind]}\n"
        f"- account key: {outcome.account_key}\n"
        f"- detail: {failure.message}"
    )
    return EXIT_CODES[failure.kind]


def run_update_command(args: argparse.Namespace, settings: Settings) -> int:
    backend = getattr(args, "backend", None) or settings.keyring.backend
    telemetry: Optional[EventLog] = None
    if settings.telemetry.enabled:
        telemetry = EventLog(Path(settings.telemetry.events_path).expanduser())

    outcome = run_update(
        prompter=TerminalPrompter(),
        account_key=account_key(args.account),
        allowed_backends=[backend] if backend else [],
        service_name=settings.keyring.service_name,
        overrides=MFAOverrides(
            provider=args.mfa_provider,
            factor=args.mfa_factor_type,
            device=args.mfa_duo_device,
        ),
        telemetry=telemetry,
    )
    if not outcome.ok:
        return _report_failure(outcome)
    print(f"Updated credentials for {outcome.account_key}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    debug = getattr(args, "debug", False)
    try:
        settings = load_settings(getattr(args, "config", None))
    except SettingsLoadError as exc:
        _configure_logging(None, debug)
        LOGGER.error("startup blocked by invalid settings: %s", exc)
        print(f"Startup failed: settings are invalid.\n- detail: {exc}")
        return 2
    _configure_logging(settings, debug)

    if args.command == "update":
        return run_update_command(args, settings)
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
