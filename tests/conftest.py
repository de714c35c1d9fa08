"""Shared fixtures for the access console tests."""
from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

import pytest

from console.errors import LoadFailure, ToggleTransportFailure
from console.models import Employee, System


def make_employee(
    employee_id: str,
    name: str,
    email: Optional[str] = None,
    systems: Optional[Dict[str, bool]] = None,
) -> Employee:
    systems = systems if systems is not None else {"ERP": False, "CRM": True}
    return Employee.from_dict(
        {
            "id": employee_id,
            "name": name,
            "email": email or f"{name.lower().replace(' ', '.')}@company.com",
            "systems": [
                {"system": system, "status": status, "originalId": f"{system.lower()}-{employee_id}"}
                for system, status in systems.items()
            ],
            "createdAt": "2026-01-01T00:00:00+00:00",
            "lastUpdated": "2026-01-01T00:00:00+00:00",
        }
    )


class ScriptedApi:
    """Employee API double whose toggle calls settle only when a test says so."""

    def __init__(self, employees: Optional[List[Employee]] = None, *, fail_load: bool = False) -> None:
        self.employees = employees or []
        self.fail_load = fail_load
        self.calls: List[Dict[str, Any]] = []
        self._pending: List[asyncio.Future] = []

    async def fetch_employees(self) -> List[Employee]:
        if self.fail_load:
            raise LoadFailure("boom", status_code=500)
        return [employee.snapshot() for employee in self.employees]

    async def update_system_status(self, employee_id: str, system: System, new_status: bool) -> Dict[str, Any]:
        self.calls.append({"employeeId": employee_id, "system": system, "newStatus": new_status})
        future = asyncio.get_running_loop().create_future()
        self._pending.append(future)
        return await future

    def succeed(self, index: int = 0, message: str = "ok") -> None:
        self._pending[index].set_result({"success": True, "message": message})

    def fail(self, index: int = 0) -> None:
        self._pending[index].set_exception(ToggleTransportFailure("down", status_code=503))


class ImmediateApi(ScriptedApi):
    """Settles every toggle at once, succeeding or failing per ``fail_toggles``."""

    def __init__(self, employees: Optional[List[Employee]] = None, *, fail_toggles: bool = False) -> None:
        super().__init__(employees)
        self.fail_toggles = fail_toggles

    async def update_system_status(self, employee_id: str, system: System, new_status: bool) -> Dict[str, Any]:
        self.calls.append({"employeeId": employee_id, "system": system, "newStatus": new_status})
        await asyncio.sleep(0)
        if self.fail_toggles:
            raise ToggleTransportFailure("down", status_code=503)
        return {"success": True, "message": f"System {System.parse(system).value} status updated successfully"}


async def settle() -> None:
    for _ in range(5):
        await asyncio.sleep(0)


@pytest.fixture
def roster() -> List[Employee]:
    return [
        make_employee("emp-1", "Ana Silva", systems={"ERP": False, "CRM": True}),
        make_employee("emp-2", "Bruno Costa", systems={"ERP": True, "Sales Portal": True}),
        make_employee("emp-3", "Carla Dias", systems={"HR System": False, "Client Portal": False}),
        make_employee("emp-4", "Daniel Martins", systems={"CRM": False, "HR System": True}),
    ]
