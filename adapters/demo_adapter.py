from __future__ import annotations

import asyncio
import datetime as dt
import logging
import random
from copy import deepcopy
from typing import Any, Dict, List, Optional, Tuple

from console.models import Employee, System

from .base import employees_from_response, toggle_result_from_response

logger = logging.getLogger(__name__)

Response = Tuple[Dict[str, Any], int]


class DemoDirectory:
    """Simulated employee backend with a seeded roster and injectable unreliability."""

    FIRST_NAMES: List[str] = [
        "Ana", "Bruno", "Carla", "Daniel", "Eduarda", "Felipe", "Gabriela", "Henrique", "Isabela", "Joao",
        "Karen", "Lucas", "Marina", "Nicolas", "Olivia", "Paulo", "Quinn", "Rafael", "Sofia", "Tiago",
        "Ursula", "Vitor", "Wesley", "Xavier", "Yasmin", "Zeca", "Amanda", "Bernardo", "Camila", "Diego",
    ]
    LAST_NAMES: List[str] = [
        "Silva", "Costa", "Dias", "Martins", "Oliveira", "Souza", "Lima", "Almeida", "Ferreira", "Gomes",
        "Barbosa", "Rocha", "Melo", "Pereira", "Ramos", "Teixeira", "Vieira", "Cardoso", "Freitas", "Batista",
        "Monteiro", "Cavalcante", "Azevedo", "Farias", "Rezende", "Peixoto", "Cunha", "Moura", "Santos", "Campos",
    ]
    ACTIVE_RATIO = 0.7

    def __init__(
        self,
        roster_size: int = 30,
        *,
        failure_probability: float = 0.02,
        seed: Optional[int] = 42,
        rng: Optional[random.Random] = None,
        employees: Optional[List[Employee]] = None,
    ) -> None:
        if not 0.0 <= failure_probability <= 1.0:
            raise ValueError("failure_probability must be between 0 and 1.")
        self.failure_probability = failure_probability
        self._rng = rng or random.Random(seed)
        if employees is not None:
            self._employees = deepcopy(employees)
        else:
            self._employees = self._generate(roster_size, random.Random(seed))

    def _generate(self, count: int, rng: random.Random) -> List[Employee]:
        now = dt.datetime.now(dt.timezone.utc)
        systems = list(System)
        employees: List[Employee] = []
        for index in range(count):
            first = self.FIRST_NAMES[index % len(self.FIRST_NAMES)]
            last = self.LAST_NAMES[index % len(self.LAST_NAMES)]
            created = now - dt.timedelta(days=rng.uniform(0, 60))
            updated = now - dt.timedelta(days=rng.uniform(0, 10))
            picked = rng.sample(systems, 2 + rng.randrange(4))
            employees.append(
                Employee.from_dict(
                    {
                        "id": f"emp-{index + 1}",
                        "name": f"{first} {last}",
                        "email": f"{first.lower()}.{last.lower()}{index}@company.com",
                        "systems": [
                            {
                                "system": system.value,
                                "status": rng.random() < self.ACTIVE_RATIO,
                                "originalId": f"{system.value.lower().replace(' ', '-')}-{1000 + index}",
                            }
                            for system in picked
                        ],
                        "createdAt": created.isoformat(),
                        "lastUpdated": updated.isoformat(),
                    }
                )
            )
        return employees

    @staticmethod
    def _error(error: str, message: str, status_code: int) -> Response:
        return {"success": False, "error": error, "message": message}, status_code

    def list_employees(self) -> Response:
        try:
            data = [employee.to_dict() for employee in self._employees]
        except Exception:  # pragma: no cover - defensive
            logger.exception("Failed to serialise demo roster")
            return self._error("Internal server error", "Could not load employee data.", 500)
        return {
            "success": True,
            "data": data,
            "timestamp": dt.datetime.now(dt.timezone.utc).isoformat(),
        }, 200

    def update_status(self, payload: Any) -> Response:
        if not isinstance(payload, dict):
            payload = {}
        employee_id = payload.get("employeeId")
        system_ref = payload.get("system")
        new_status = payload.get("newStatus")
        if not employee_id or not system_ref or not isinstance(new_status, bool):
            return self._error("Invalid data", "employeeId, system and newStatus are required.", 400)
        try:
            system = System.parse(system_ref)
        except ValueError:
            return self._error("Invalid data", f"Unknown system: {system_ref}.", 400)

        if self._rng.random() < self.failure_probability:
            logger.info("Injected failure for %s/%s", employee_id, system.value)
            return self._error("Connection error", "Communication with the target system failed.", 503)

        updated_at = dt.datetime.now(dt.timezone.utc).isoformat()
        for employee in self._employees:
            if employee.id != employee_id:
                continue
            access = employee.access_for(system)
            if access is not None:
                access.status = new_status
                employee.last_updated = updated_at
            break

        return {
            "success": True,
            "message": f"System {system.value} status updated successfully",
            "data": {
                "employeeId": employee_id,
                "system": system.value,
                "newStatus": new_status,
                "updatedAt": updated_at,
            },
        }, 200


class DemoEmployeeApi:
    """In-process adapter over ``DemoDirectory`` that keeps the endpoint's latency."""

    def __init__(
        self,
        directory: DemoDirectory,
        *,
        fetch_latency: float = 0.3,
        toggle_latency: float = 0.2,
    ) -> None:
        self.directory = directory
        self._fetch_latency = fetch_latency
        self._toggle_latency = toggle_latency
        self.toggle_calls: List[Dict[str, Any]] = []

    async def fetch_employees(self) -> List[Employee]:
        await asyncio.sleep(self._fetch_latency)
        body, status_code = self.directory.list_employees()
        return employees_from_response(body, status_code)

    async def update_system_status(self, employee_id: str, system: System, new_status: bool) -> Dict[str, Any]:
        payload = {"employeeId": employee_id, "system": System.parse(system).value, "newStatus": new_status}
        self.toggle_calls.append(payload)
        await asyncio.sleep(self._toggle_latency)
        body, status_code = self.directory.update_status(payload)
        return toggle_result_from_response(body, status_code)
