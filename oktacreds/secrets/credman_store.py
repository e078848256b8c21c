"""Windows Credential Manager adapter."""

from __future__ import annotations

from oktacreds.secrets.keyring_store import KeyringSecretStore


class CredManSecretStore(KeyringSecretStore):
    backend_type = "wincred"
    keyring_module = "keyring.backends.Windows"
    keyring_class = "WinVaultKeyring"
