"""Linux desktop keyring adapters (Secret Service and KWallet)."""

from __future__ import annotations

from oktacreds.secrets.keyring_store import KeyringSecretStore


class SecretServiceSecretStore(KeyringSecretStore):
    backend_type = "secret-service"
    keyring_module = "keyring.backends.SecretService"
    keyring_class = "Keyring"


class KWalletSecretStore(KeyringSecretStore):
    backend_type = "kwallet"
    keyring_module = "keyring.backends.kwallet"
    keyring_class = "DBusKeyring"
