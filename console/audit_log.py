from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Union

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection

from .models import AuditLogEntry, utc_now_iso

logger = logging.getLogger(__name__)


class AuditStore(Protocol):
    """Append-only backing for the audit log; ``read`` returns oldest first."""

    def append(self, entry: AuditLogEntry) -> None:
        ...

    def read(self) -> List[AuditLogEntry]:
        ...


class MemoryAuditStore:
    def __init__(self) -> None:
        self._entries: List[AuditLogEntry] = []

    def append(self, entry: AuditLogEntry) -> None:
        self._entries.append(entry)

    def read(self) -> List[AuditLogEntry]:
        return list(self._entries)


class JsonFileAuditStore:
    """A single JSON slot holding the whole history list.

    Each append reads the list, adds one entry and writes it back through a
    sibling temp file. A missing file is an empty history. An unreadable one
    reads as empty but is never overwritten.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def _load_raw(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        data = json.loads(self.path.read_text(encoding="utf-8") or "[]")
        if not isinstance(data, list):
            raise ValueError(f"Audit log {self.path} does not hold a JSON list.")
        return data

    def append(self, entry: AuditLogEntry) -> None:
        logs = self._load_raw()
        logs.append(entry.to_dict())
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(json.dumps(logs, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp_path.replace(self.path)

    def read(self) -> List[AuditLogEntry]:
        try:
            logs = self._load_raw()
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable audit log %s: %s", self.path, exc)
            return []
        return [AuditLogEntry.from_dict(doc) for doc in logs if isinstance(doc, dict)]


class MongoAuditStore:
    """One document per entry in the ``employee_status_history`` collection."""

    def __init__(
        self,
        mongo_uri: Optional[str] = None,
        db_name: str = "access_console",
        *,
        collection: Optional[Collection] = None,
    ) -> None:
        self._client: Optional[MongoClient] = None
        if collection is None:
            if not mongo_uri:
                raise ValueError("mongo_uri is required for MongoAuditStore.")
            self._client = MongoClient(mongo_uri, appname="AccessConsoleAudit")
            collection = self._client[db_name]["employee_status_history"]
        self._collection = collection

    def append(self, entry: AuditLogEntry) -> None:
        self._collection.insert_one(entry.to_dict())

    def read(self) -> List[AuditLogEntry]:
        cursor = self._collection.find({}, {"_id": 0}).sort([("timestamp", ASCENDING), ("_id", ASCENDING)])
        return [AuditLogEntry.from_dict(doc) for doc in cursor]

    def close(self) -> None:
        if self._client is not None:
            self._client.close()


class AuditLogRecorder:
    def __init__(self, store: AuditStore) -> None:
        self._store = store

    def append(self, entry: AuditLogEntry) -> None:
        try:
            self._store.append(entry)
        except Exception:
            # History is best-effort; a failed write must not block the toggle flow.
            logger.exception("Failed to persist audit entry for %s", entry.employee_name)

    def record(
        self,
        *,
        user_login: str,
        employee_name: str,
        system: str,
        old_status: bool,
        new_status: bool,
    ) -> AuditLogEntry:
        entry = AuditLogEntry(
            timestamp=utc_now_iso(),
            user_login=user_login,
            employee_name=employee_name,
            system=system,
            old_status=old_status,
            new_status=new_status,
        )
        self.append(entry)
        return entry

    def read_all(self) -> List[AuditLogEntry]:
        try:
            entries = self._store.read()
        except Exception:
            logger.exception("Failed to read audit log")
            return []
        return list(reversed(entries))
