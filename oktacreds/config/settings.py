"""Settings loader for oktacreds."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from oktacreds.secrets.base import DEFAULT_SERVICE_NAME
from oktacreds.secrets.factory import KNOWN_BACKEND_TYPES

DEFAULT_SETTINGS_PATH = Path("~/.config/oktacreds/settings.yaml")
DEFAULT_EVENTS_PATH = "~/.local/state/oktacreds/events.jsonl"
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


@dataclass(frozen=True)
class KeyringConfig:
    service_name: str
    backend: str


@dataclass(frozen=True)
class TelemetryConfig:
    enabled: bool
    events_path: str


@dataclass(frozen=True)
class LogConfig:
    level: str


@dataclass(frozen=True)
class Settings:
    keyring: KeyringConfig
    telemetry: TelemetryConfig
    log: LogConfig

    @property
    def log_level(self) -> int:
        return getattr(logging, self.log.level)


class SettingsLoadError(RuntimeError):
    """Raised when settings cannot be loaded."""


def _section(raw: dict[str, Any], key: str) -> dict[str, Any]:
    value = raw.get(key, {})
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise SettingsLoadError(f"{key} must be an object")
    return value


def parse_settings(raw: dict[str, Any], env: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if env is None else env
    keyring_raw = _section(raw, "keyring")
    telemetry_raw = _section(raw, "telemetry")
    log_raw = _section(raw, "log")

    service_name = str(keyring_raw.get("service_name", DEFAULT_SERVICE_NAME)).strip()
    if not service_name:
        raise SettingsLoadError("keyring.service_name must not be empty")

    backend = str(env.get("OKTACREDS_BACKEND", "") or keyring_raw.get("backend") or "").strip()
    if backend and backend not in KNOWN_BACKEND_TYPES:
        raise SettingsLoadError(f"invalid keyring.backend: {backend}")

    events_path = str(telemetry_raw.get("events_path", DEFAULT_EVENTS_PATH)).strip()
    if not events_path:
        raise SettingsLoadError("telemetry.events_path must not be empty")

    level = str(log_raw.get("level", "INFO")).strip().upper()
    if level not in LOG_LEVELS:
        raise SettingsLoadError(f"invalid log.level: {level}")

    return Settings(
        keyring=KeyringConfig(service_name=service_name, backend=backend),
        telemetry=TelemetryConfig(
            enabled=bool(telemetry_raw.get("enabled", False)),
            events_path=events_path,
        ),
        log=LogConfig(level=level),
    )


def load_settings(path: Optional[Path] = None, env: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if env is None else env
    explicit = path is not None or bool(env.get("OKTACREDS_CONFIG", "").strip())
    if path is None:
        path = Path(env.get("OKTACREDS_CONFIG", "").strip() or DEFAULT_SETTINGS_PATH)
    path = path.expanduser()

    if not path.exists():
        if explicit:
            raise SettingsLoadError(f"settings file not found: {path}")
        return parse_settings({}, env=env)

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise SettingsLoadError(f"settings file is not valid YAML: {path}") from exc
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise SettingsLoadError("settings root must be an object")
    return parse_settings(raw, env=env)
