"""Credential update workflow.

State transitions:
START -> LOADED -> SECRET_REPLACED -> POLICY_RESOLVED -> VALIDATED -> PERSISTED
any state -> FAILED

Only VALIDATED -> PERSISTED writes to the store. Expected failures are
returned as an UpdateOutcome, never raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from oktacreds.version import __version__
from oktacreds.core.mfa import MFAOverrides, resolve_mfa_config
from oktacreds.core.prompt import PromptAborted, Prompter
from oktacreds.core.validator import validate_credentials
from oktacreds.models.credential import (
    RECORD_LABEL,
    CorruptRecordError,
    CredentialRecord,
    decode_record,
    encode_record,
)
from oktacreds.secrets.base import (
    DEFAULT_SERVICE_NAME,
    SecretStore,
    StoreItem,
    StoreUnavailable,
    WritePermissionDenied,
)
from oktacreds.secrets.factory import open_secret_store
from oktacreds.telemetry.event_log import EventLog

LOGGER = logging.getLogger(__name__)

SECRET_PROMPT_LABEL = "New Okta password"
_ADD_HINT = "Please make sure you have added okta credentials with `oktacreds add`"


class UpdateState(str, Enum):
    START = "START"
    LOADED = "LOADED"
    SECRET_REPLACED = "SECRET_REPLACED"
    POLICY_RESOLVED = "POLICY_RESOLVED"
    VALIDATED = "VALIDATED"
    PERSISTED = "PERSISTED"
    FAILED = "FAILED"


class FailureKind(str, Enum):
    STORE_UNAVAILABLE = "store_unavailable"
    NOT_FOUND = "not_found"
    CORRUPT_RECORD = "corrupt_record"
    PROMPT_ABORTED = "prompt_aborted"
    VALIDATION_ERROR = "validation_error"
    WRITE_PERMISSION_DENIED = "write_permission_denied"


@dataclass(frozen=True)
class UpdateFailure:
    kind: FailureKind
    message: str
    failed_from: UpdateState


@dataclass(frozen=True)
class UpdateOutcome:
    state: UpdateState
    account_key: str
    failure: Optional[UpdateFailure] = None
    record: Optional[CredentialRecord] = None

    @property
    def ok(self) -> bool:
        return self.state == UpdateState.PERSISTED


class UpdateWorkflow:
    def __init__(
        self,
        store: SecretStore,
        prompter: Prompter,
        account_key: str,
        overrides: Optional[MFAOverrides] = None,
        telemetry: Optional[EventLog] = None,
    ) -> None:
        self._store = store
        self._prompter = prompter
        self._account_key = account_key
        self._overrides = overrides or MFAOverrides()
        self._telemetry = telemetry
        self._state = UpdateState.START

    @property
    def state(self) -> UpdateState:
        return self._state

    def run(self) -> UpdateOutcome:
        if self._state != UpdateState.START:
            raise RuntimeError(f"workflow already ran (state={self._state.value})")
        LOGGER.debug("Keyring key: %s", self._account_key)

        try:
            raw = self._store.get(self._account_key)
        except StoreUnavailable as exc:
            return self._fail(FailureKind.STORE_UNAVAILABLE, str(exc))
        if raw is None:
            return self._fail(
                FailureKind.NOT_FOUND,
                f"No okta credentials found under '{self._account_key}'. {_ADD_HINT}",
            )
        try:
            record = decode_record(raw)
        except CorruptRecordError as exc:
            LOGGER.debug("Failed to decode credentials: %s", exc)
            return self._fail(
                FailureKind.CORRUPT_RECORD,
                f"Failed to get okta credentials from your keyring. {_ADD_HINT}",
            )
        self._state = UpdateState.LOADED
        self._track(record)

        try:
            secret = self._prompter.prompt(SECRET_PROMPT_LABEL, True)
        except PromptAborted as exc:
            return self._fail(FailureKind.PROMPT_ABORTED, str(exc))
        record = record.model_copy(update={"secret": secret})
        self._state = UpdateState.SECRET_REPLACED

        mfa_config = resolve_mfa_config(record.mfa_config, self._overrides)
        record = record.model_copy(update={"mfa_config": mfa_config})
        self._state = UpdateState.POLICY_RESOLVED

        failure = validate_credentials(record, mfa_config)
        if failure is not None:
            LOGGER.debug("Failed to validate credentials: %s", failure)
            return self._fail(FailureKind.VALIDATION_ERROR, f"Failed to validate credentials: {failure}")
        self._state = UpdateState.VALIDATED

        item = StoreItem(key=self._account_key, data=encode_record(record), label=RECORD_LABEL)
        try:
            self._store.set(item)
        except WritePermissionDenied as exc:
            LOGGER.debug("Failed to add user to keyring: %s", exc)
            return self._fail(FailureKind.WRITE_PERMISSION_DENIED, f"Failed to set credentials in keyring: {exc}")
        except StoreUnavailable as exc:
            LOGGER.debug("Failed to add user to keyring: %s", exc)
            return self._fail(FailureKind.STORE_UNAVAILABLE, str(exc))

        self._state = UpdateState.PERSISTED
        LOGGER.info("Updated credentials for user %s", record.username)
        return UpdateOutcome(state=self._state, account_key=self._account_key, record=record)

    def _fail(self, kind: FailureKind, message: str) -> UpdateOutcome:
        failure = UpdateFailure(kind=kind, message=message, failed_from=self._state)
        self._state = UpdateState.FAILED
        return UpdateOutcome(state=self._state, account_key=self._account_key, failure=failure)

    def _track(self, record: CredentialRecord) -> None:
        if self._telemetry is None:
            return
        self._telemetry.track(
            "Ran Command",
            user_id=record.username,
            properties={
                "backend": self._store.backend_type,
                "command": "update",
                "version": __version__,
            },
        )


def run_update(
    prompter: Prompter,
    account_key: str,
    allowed_backends: Sequence[str] = (),
    service_name: str = DEFAULT_SERVICE_NAME,
    overrides: Optional[MFAOverrides] = None,
    telemetry: Optional[EventLog] = None,
) -> UpdateOutcome:
    """Open the secret store and run one update against it."""
    try:
        store = open_secret_store(allowed_backends=allowed_backends, service_name=service_name)
    except StoreUnavailable as exc:
        failure = UpdateFailure(
            kind=FailureKind.STORE_UNAVAILABLE,
            message=str(exc),
            failed_from=UpdateState.START,
        )
        return UpdateOutcome(state=UpdateState.FAILED, account_key=account_key, failure=failure)

    workflow = UpdateWorkflow(
        store=store,
        prompter=prompter,
        account_key=account_key,
        overrides=overrides,
        telemetry=telemetry,
    )
    return workflow.run()
