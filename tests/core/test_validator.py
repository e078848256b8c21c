import pytest

from oktacreds.core.validator import validate_credentials
from oktacreds.models.credential import CredentialRecord, MFAConfig


def _record(**kwargs) -> CredentialRecord:
    values = {"username": "alice", "secret": "pw"}
    values.update(kwargs)
    return CredentialRecord(**values)


def test_valid_record_without_mfa() -> None:
    assert validate_credentials(_record(), None) is None


def test_empty_secret_fails() -> None:
    failure = validate_credentials(_record(secret=""), None)
    assert failure is not None
    assert failure.field == "secret"


def test_blank_username_fails() -> None:
    failure = validate_credentials(_record(username="  "), None)
    assert failure is not None
    assert failure.field == "username"


def test_unsupported_factor_fails() -> None:
    failure = validate_credentials(_record(), MFAConfig(factor="carrier-pigeon"))
    assert failure is not None
    assert failure.field == "mfaConfig.factor"


def test_unsupported_provider_fails() -> None:
    failure = validate_credentials(_record(), MFAConfig(provider="ACME", factor="push"))
    assert failure is not None
    assert failure.field == "mfaConfig.provider"


@pytest.mark.parametrize(
    "mfa",
    [
        MFAConfig(factor="token:hardware"),
        MFAConfig(factor="u2f", device=" "),
        MFAConfig(provider="DUO", factor="push"),
    ],
)
def test_factor_requiring_device_fails_without_it(mfa: MFAConfig) -> None:
    failure = validate_credentials(_record(), mfa)
    assert failure is not None
    assert failure.field == "mfaConfig.device"


@pytest.mark.parametrize(
    "mfa",
    [
        MFAConfig(factor="push"),
        MFAConfig(provider="okta", factor="totp"),
        MFAConfig(provider="DUO", factor="push", device="phone1"),
        MFAConfig(provider="YUBICO", factor="token:hardware", device="yk-5"),
    ],
)
def test_supported_mfa_configs_pass(mfa: MFAConfig) -> None:
    assert validate_credentials(_record(), mfa) is None


def test_factor_and_provider_are_case_insensitive() -> None:
    assert validate_credentials(_record(), MFAConfig(provider="duo", factor="PUSH", device="phone1")) is None
    assert validate_credentials(_record(), MFAConfig(factor="Token:Hardware", device="yk1")) is None


def test_config_without_factor_needs_no_mfa_checks() -> None:
    assert validate_credentials(_record(), MFAConfig(provider="DUO", device="phone1")) is None
    assert validate_credentials(_record(), MFAConfig(provider="DUO")) is None


def test_config_without_factor_still_checks_provider() -> None:
    failure = validate_credentials(_record(), MFAConfig(provider="ACME"))
    assert failure is not None
    assert failure.field == "mfaConfig.provider"
