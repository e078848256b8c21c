"""Shared adapter over a single python-keyring backend."""

from __future__ import annotations

import importlib
import logging
from typing import Any, Optional

from keyring.errors import KeyringError, PasswordDeleteError, PasswordSetError

from oktacreds.secrets.base import (
    DEFAULT_SERVICE_NAME,
    SecretStore,
    StoreItem,
    StoreUnavailable,
    WritePermissionDenied,
)

LOGGER = logging.getLogger(__name__)


def _load_backend_class(module_name: str, class_name: str) -> Any:
    module = importlib.import_module(module_name)
    return getattr(module, class_name)


class KeyringSecretStore(SecretStore):
    """Stores records as UTF-8 text in one keyring backend.

    Subclasses pick the backend through ``backend_type``, ``keyring_module``
    and ``keyring_class``. Every record shares one keyring service name and is
    addressed by its account key.
    """

    keyring_module: str = ""
    keyring_class: str = ""

    def __init__(self, service_name: str = DEFAULT_SERVICE_NAME, backend: Any = None) -> None:
        self._service_name = service_name
        if backend is None:
            try:
                backend = _load_backend_class(self.keyring_module, self.keyring_class)()
            except Exception as exc:
                raise StoreUnavailable(f"failed to open {self.backend_type} keyring") from exc
        self._backend = backend

    @classmethod
    def is_supported(cls) -> bool:
        try:
            backend_cls = _load_backend_class(cls.keyring_module, cls.keyring_class)
        except (ImportError, AttributeError):
            return False
        try:
            return bool(backend_cls.viable)
        except Exception:  # pragma: no cover - backend probing is platform specific
            return False

    @property
    def service_name(self) -> str:
        return self._service_name

    def get(self, key: str) -> Optional[bytes]:
        try:
            value = self._backend.get_password(self._service_name, key)
        except (KeyringError, OSError) as exc:
            raise StoreUnavailable(f"failed to read {self.backend_type} secret '{key}'") from exc
        if value is None:
            return None
        return value.encode("utf-8")

    def set(self, item: StoreItem) -> None:
        LOGGER.debug("writing %s item key=%s label=%s", self.backend_type, item.key, item.label)
        try:
            self._backend.set_password(self._service_name, item.key, item.data.decode("utf-8"))
        except (PasswordSetError, PermissionError) as exc:
            raise WritePermissionDenied(f"{self.backend_type} refused to store '{item.key}'") from exc
        except (KeyringError, OSError) as exc:
            raise StoreUnavailable(f"failed to write {self.backend_type} secret '{item.key}'") from exc

    def delete(self, key: str) -> bool:
        try:
            self._backend.delete_password(self._service_name, key)
        except PasswordDeleteError:
            return False
        except (KeyringError, OSError) as exc:
            raise StoreUnavailable(f"failed to delete {self.backend_type} secret '{key}'") from exc
        return True
