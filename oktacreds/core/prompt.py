"""Interactive prompt collaborator."""

from __future__ import annotations

import getpass
import sys
from typing import Protocol


class PromptAborted(RuntimeError):
    """Raised when a value cannot be read from the operator."""


class Prompter(Protocol):
    def prompt(self, label: str, is_secret: bool) -> str:
        ...


class TerminalPrompter:
    def prompt(self, label: str, is_secret: bool) -> str:
        if not sys.stdin.isatty():
            raise PromptAborted(f"cannot prompt for {label}: stdin is not a terminal")
        try:
            if is_secret:
                return getpass.getpass(f"{label}: ")
            return input(f"{label}: ").strip()
        except (EOFError, KeyboardInterrupt) as exc:
            raise PromptAborted(f"input aborted while prompting for {label}") from exc
