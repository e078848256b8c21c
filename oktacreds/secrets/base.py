"""SecretStore abstractions.

Credential records live in an OS credential store, addressed by account key.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

DEFAULT_SERVICE_NAME = "aws-okta-login"


class SecretStoreError(RuntimeError):
    """Raised when the credential store cannot be used."""


class StoreUnavailable(SecretStoreError):
    """Backend cannot be opened or read."""


class WritePermissionDenied(SecretStoreError):
    """Backend refused to store the value."""


@dataclass(frozen=True)
class StoreItem:
    key: str
    data: bytes
    label: str = ""
    description: str = ""


class SecretStore(ABC):
    """Credential store interface."""

    backend_type: str = ""

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """Return stored bytes for key, or None when the key is absent."""

    @abstractmethod
    def set(self, item: StoreItem) -> None:
        """Replace any value stored under item.key."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove key. Return False when nothing was stored."""
