"""MFA policy merging.

Flags given for this invocation win field-by-field over the MFA settings
already stored with the record. Nothing here reads or writes shared state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from oktacreds.models.credential import MFAConfig


@dataclass(frozen=True)
class MFAOverrides:
    provider: Optional[str] = None
    factor: Optional[str] = None
    device: Optional[str] = None

    def is_empty(self) -> bool:
        return all(not (value and value.strip()) for value in (self.provider, self.factor, self.device))


def _pick(override: Optional[str], existing: Optional[str]) -> Optional[str]:
    if override is not None and override.strip():
        return override.strip()
    return existing


def resolve_mfa_config(existing: Optional[MFAConfig], overrides: MFAOverrides) -> Optional[MFAConfig]:
    """Return the MFA policy to validate against.

    A result without a factor means no MFA is required; stored provider or
    device settings are carried through untouched.
    """
    if overrides.is_empty():
        return existing
    base = existing or MFAConfig()
    merged = MFAConfig(
        provider=_pick(overrides.provider, base.provider),
        factor=_pick(overrides.factor, base.factor),
        device=_pick(overrides.device, base.device),
    )
    if merged == MFAConfig():
        return None
    return merged
