"""macOS Keychain secret adapter."""

from __future__ import annotations

from oktacreds.secrets.keyring_store import KeyringSecretStore


class KeychainSecretStore(KeyringSecretStore):
    backend_type = "keychain"
    keyring_module = "keyring.backends.macOS"
    keyring_class = "Keyring"
