"""Okta credential record and its keyring wire format.

Wire format (UTF-8 JSON):
    {"username": str, "secret": str, "mfaConfig": {...} | null}
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

DEFAULT_ACCOUNT_KEY = "okta-creds"
RECORD_LABEL = "okta credentials"


class CorruptRecordError(ValueError):
    """Raised when stored bytes are not a credential record."""


class MFAConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    provider: Optional[str] = None
    factor: Optional[str] = None
    device: Optional[str] = None


class CredentialRecord(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    username: str
    secret: str = Field(repr=False)
    mfa_config: Optional[MFAConfig] = Field(default=None, alias="mfaConfig")


def account_key(alias: Optional[str] = None) -> str:
    if not alias:
        return DEFAULT_ACCOUNT_KEY
    return f"{DEFAULT_ACCOUNT_KEY}-{alias}"


def encode_record(record: CredentialRecord) -> bytes:
    return record.model_dump_json(by_alias=True).encode("utf-8")


def decode_record(data: bytes) -> CredentialRecord:
    try:
        return CredentialRecord.model_validate_json(data)
    except ValidationError as exc:
        raise CorruptRecordError(f"stored credential record is invalid ({exc.error_count()} errors)") from exc
