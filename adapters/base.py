from __future__ import annotations

from typing import Any, Dict, List, Protocol

from console.errors import LoadFailure, ToggleRejected, ToggleTransportFailure
from console.models import Employee, System


class EmployeeApi(Protocol):
    """Common contract for the employee endpoint used by the console (HTTP or in-process demo)."""

    async def fetch_employees(self) -> List[Employee]:
        ...

    async def update_system_status(self, employee_id: str, system: System, new_status: bool) -> Dict[str, Any]:
        ...


def employees_from_response(body: Any, status_code: int) -> List[Employee]:
    if status_code >= 400 or not isinstance(body, dict) or not body.get("success"):
        message = body.get("message") if isinstance(body, dict) else None
        raise LoadFailure(message or "Failed to load employees.", status_code=status_code)
    try:
        return [Employee.from_dict(doc) for doc in body.get("data") or []]
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise LoadFailure(f"Malformed employee payload: {exc}", status_code=status_code) from exc


def toggle_result_from_response(body: Any, status_code: int) -> Dict[str, Any]:
    payload = body if isinstance(body, dict) else {}
    message = payload.get("message") or "Failed to update status."
    if status_code == 400:
        raise ToggleRejected(message, status_code=status_code)
    if status_code >= 400 or not payload.get("success"):
        raise ToggleTransportFailure(message, status_code=status_code)
    return payload
