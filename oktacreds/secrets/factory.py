"""Secret store resolver based on backend availability."""

from __future__ import annotations

import logging
from typing import Sequence

from oktacreds.secrets.base import DEFAULT_SERVICE_NAME, SecretStore, StoreUnavailable
from oktacreds.secrets.credman_store import CredManSecretStore
from oktacreds.secrets.keychain_store import KeychainSecretStore
from oktacreds.secrets.keyring_store import KeyringSecretStore
from oktacreds.secrets.linux_store import KWalletSecretStore, SecretServiceSecretStore

LOGGER = logging.getLogger(__name__)

# Default selection order; the first supported backend wins.
BACKENDS: list[type[KeyringSecretStore]] = [
    KeychainSecretStore,
    CredManSecretStore,
    SecretServiceSecretStore,
    KWalletSecretStore,
]

# Backend names accepted in settings/flags, including ones without an adapter here.
KNOWN_BACKEND_TYPES = {cls.backend_type for cls in BACKENDS} | {"pass", "file"}


def backend_types() -> list[str]:
    return [cls.backend_type for cls in BACKENDS]


def open_secret_store(
    allowed_backends: Sequence[str] = (),
    service_name: str = DEFAULT_SERVICE_NAME,
) -> SecretStore:
    allowed = [name.strip() for name in allowed_backends if name and name.strip()]
    available = set(backend_types())
    unknown = [name for name in allowed if name not in available]
    if unknown and len(unknown) == len(allowed):
        raise StoreUnavailable(
            f"no implementation for backend type: {', '.join(unknown)} "
            f"(supported: {', '.join(backend_types())})"
        )

    candidates = [cls for cls in BACKENDS if not allowed or cls.backend_type in allowed]
    for cls in candidates:
        if not cls.is_supported():
            LOGGER.debug("keyring backend not available: %s", cls.backend_type)
            continue
        LOGGER.debug("using keyring backend: %s", cls.backend_type)
        return cls(service_name=service_name)

    tried = ", ".join(cls.backend_type for cls in candidates)
    raise StoreUnavailable(f"no supported keyring backend available (tried: {tried})")
