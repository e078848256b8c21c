"""Best-effort JSONL usage events.

Failures are logged and dropped; a command never fails because of telemetry.
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

LOGGER = logging.getLogger(__name__)


class EventLog:
    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def track(self, event: str, user_id: str, properties: Optional[dict[str, Any]] = None) -> bool:
        line = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "event_id": f"evt_{uuid.uuid4().hex}",
            "user_id": user_id,
            "event": event,
            "properties": properties or {},
        }
        try:
            payload = json.dumps(line, ensure_ascii=True)
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as fp:
                fp.write(payload + "\n")
        except (OSError, TypeError, ValueError) as exc:
            LOGGER.warning("failed to record telemetry event %s: %s", event, exc)
            return False
        return True
