"""Local credential checks against the MFA policy.

This never contacts the identity provider; it only confirms that the record
is complete and that the MFA settings name something usable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from oktacreds.models.credential import CredentialRecord, MFAConfig

MFA_PROVIDERS = {"OKTA", "DUO", "GOOGLE", "SYMANTEC", "YUBICO"}

# factor type -> MFAConfig fields it needs
MFA_FACTOR_REQUIREMENTS: dict[str, tuple[str, ...]] = {
    "push": (),
    "totp": (),
    "sms": (),
    "call": (),
    "webauthn": (),
    "token:hardware": ("device",),
    "u2f": ("device",),
}

PROVIDER_REQUIREMENTS: dict[str, tuple[str, ...]] = {
    "DUO": ("device",),
}


@dataclass(frozen=True)
class ValidationFailure:
    field: str
    reason: str

    def __str__(self) -> str:
        return f"{self.field}: {self.reason}"


def _validate_mfa(mfa_config: MFAConfig) -> Optional[ValidationFailure]:
    factor = (mfa_config.factor or "").strip().lower()
    provider = (mfa_config.provider or "").strip().upper()
    if provider and provider not in MFA_PROVIDERS:
        return ValidationFailure("mfaConfig.provider", f"unsupported MFA provider: {mfa_config.provider}")
    if not factor:
        return None
    if factor not in MFA_FACTOR_REQUIREMENTS:
        return ValidationFailure("mfaConfig.factor", f"unsupported factor type: {factor}")

    required = list(MFA_FACTOR_REQUIREMENTS[factor])
    if provider:
        required.extend(PROVIDER_REQUIREMENTS.get(provider, ()))

    for name in required:
        value = getattr(mfa_config, name)
        if value is None or not value.strip():
            return ValidationFailure(f"mfaConfig.{name}", f"{name} is required for factor {factor}")
    return None


def validate_credentials(record: CredentialRecord, mfa_config: Optional[MFAConfig]) -> Optional[ValidationFailure]:
    """Return None when the record may be stored, else the first failed check."""
    if not record.username.strip():
        return ValidationFailure("username", "username must not be empty")
    if not record.secret:
        return ValidationFailure("secret", "secret must not be empty")
    if mfa_config is None:
        return None
    return _validate_mfa(mfa_config)
