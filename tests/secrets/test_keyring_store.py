from typing import Optional

import pytest
from keyring.errors import KeyringLocked, PasswordDeleteError, PasswordSetError

from oktacreds.secrets.base import StoreItem, StoreUnavailable, WritePermissionDenied
from oktacreds.secrets.keychain_store import KeychainSecretStore


class _FakeKeyring:
    def __init__(self) -> None:
        self.values: dict[tuple[str, str], str] = {}
        self.fail_with: Optional[Exception] = None

    def get_password(self, service: str, username: str) -> Optional[str]:
        if self.fail_with:
            raise self.fail_with
        return self.values.get((service, username))

    def set_password(self, service: str, username: str, password: str) -> None:
        if self.fail_with:
            raise self.fail_with
        self.values[(service, username)] = password

    def delete_password(self, service: str, username: str) -> None:
        if (service, username) not in self.values:
            raise PasswordDeleteError("not found")
        del self.values[(service, username)]


def test_get_returns_none_for_absent_key() -> None:
    store = KeychainSecretStore(service_name="svc", backend=_FakeKeyring())
    assert store.get("okta-creds") is None


def test_set_then_get_replaces_value() -> None:
    backend = _FakeKeyring()
    store = KeychainSecretStore(service_name="svc", backend=backend)
    store.set(StoreItem(key="okta-creds", data=b'{"a": 1}', label="okta credentials"))
    store.set(StoreItem(key="okta-creds", data=b'{"a": 2}', label="okta credentials"))

    assert store.get("okta-creds") == b'{"a": 2}'
    assert backend.values == {("svc", "okta-creds"): '{"a": 2}'}


def test_set_maps_password_set_error_to_write_denied() -> None:
    backend = _FakeKeyring()
    backend.fail_with = PasswordSetError("denied")
    store = KeychainSecretStore(backend=backend)
    with pytest.raises(WritePermissionDenied):
        store.set(StoreItem(key="okta-creds", data=b"{}"))


def test_locked_keyring_is_unavailable() -> None:
    backend = _FakeKeyring()
    backend.fail_with = KeyringLocked("locked")
    store = KeychainSecretStore(backend=backend)
    with pytest.raises(StoreUnavailable):
        store.get("okta-creds")
    with pytest.raises(StoreUnavailable):
        store.set(StoreItem(key="okta-creds", data=b"{}"))


def test_delete_reports_whether_value_existed() -> None:
    backend = _FakeKeyring()
    store = KeychainSecretStore(backend=backend)
    store.set(StoreItem(key="okta-creds-work", data=b"{}"))

    assert store.delete("okta-creds-work") is True
    assert store.delete("okta-creds-work") is False
    assert store.get("okta-creds-work") is None
