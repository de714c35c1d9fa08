from __future__ import annotations

import copy
import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class System(str, Enum):
    """Enterprise systems an employee can hold access to."""

    ERP = "ERP"
    CRM = "CRM"
    SALES_PORTAL = "Sales Portal"
    HR_SYSTEM = "HR System"
    CLIENT_PORTAL = "Client Portal"

    @classmethod
    def parse(cls, value: Any) -> "System":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            pass
        try:
            return cls[str(value)]
        except KeyError:
            raise ValueError(f"Unknown system: {value!r}") from None


UpdateKey = Tuple[str, System]


def utc_now_iso() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat()


@dataclass
class SystemAccess:
    system: System
    status: bool
    original_id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "system": self.system.value,
            "status": self.status,
            "originalId": self.original_id,
        }

    @classmethod
    def from_dict(cls, doc: Dict[str, Any]) -> "SystemAccess":
        return cls(
            system=System.parse(doc.get("system")),
            status=bool(doc.get("status")),
            original_id=str(doc.get("originalId") or ""),
        )


@dataclass
class Employee:
    """A directory record plus its per-system access flags."""

    id: str
    name: str
    email: str
    systems: List[SystemAccess] = field(default_factory=list)
    created_at: str = ""
    last_updated: str = ""

    def __post_init__(self) -> None:
        seen = set()
        for access in self.systems:
            if access.system in seen:
                raise ValueError(
                    f"Employee {self.id} lists system {access.system.value} more than once."
                )
            seen.add(access.system)

    def access_for(self, system: System) -> Optional[SystemAccess]:
        for access in self.systems:
            if access.system == system:
                return access
        return None

    def snapshot(self) -> "Employee":
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "systems": [access.to_dict() for access in self.systems],
            "createdAt": self.created_at,
            "lastUpdated": self.last_updated,
        }

    @classmethod
    def from_dict(cls, doc: Dict[str, Any]) -> "Employee":
        return cls(
            id=str(doc["id"]),
            name=doc.get("name") or "",
            email=doc.get("email") or "",
            systems=[SystemAccess.from_dict(item) for item in doc.get("systems") or []],
            created_at=doc.get("createdAt") or "",
            last_updated=doc.get("lastUpdated") or "",
        )


@dataclass(frozen=True)
class PendingAction:
    """A staged toggle awaiting explicit confirmation."""

    employee: Employee
    system: SystemAccess
    new_status: bool

    @property
    def key(self) -> UpdateKey:
        return (self.employee.id, self.system.system)


@dataclass(frozen=True)
class AuditLogEntry:
    timestamp: str
    user_login: str
    employee_name: str
    system: str
    old_status: bool
    new_status: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "userLogin": self.user_login,
            "employeeName": self.employee_name,
            "system": self.system,
            "oldStatus": self.old_status,
            "newStatus": self.new_status,
        }

    @classmethod
    def from_dict(cls, doc: Dict[str, Any]) -> "AuditLogEntry":
        return cls(
            timestamp=doc.get("timestamp") or "",
            user_login=doc.get("userLogin") or "",
            employee_name=doc.get("employeeName") or "",
            system=doc.get("system") or "",
            old_status=bool(doc.get("oldStatus")),
            new_status=bool(doc.get("newStatus")),
        )
