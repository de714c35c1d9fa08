from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional

from .models import Employee, System, utc_now_iso

logger = logging.getLogger(__name__)

Listener = Callable[[str], None]


class EmployeeDirectoryStore:
    """In-memory roster; the only writer-facing state in the console.

    Mutations go through ``load``, ``mutate_system_status`` and ``edit_profile``.
    Subscribers are told which kind of change happened ("load", "status",
    "profile") and re-query on their own.
    """

    def __init__(self) -> None:
        self._employees: Dict[str, Employee] = {}
        self._listeners: List[Listener] = []

    def __len__(self) -> int:
        return len(self._employees)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, change: str) -> None:
        for listener in list(self._listeners):
            listener(change)

    def load(self, records: Iterable[Employee]) -> None:
        self._employees = {employee.id: employee for employee in records}
        logger.debug("Directory loaded with %d employees", len(self._employees))
        self._notify("load")

    def all(self) -> List[Employee]:
        return list(self._employees.values())

    def get(self, employee_id: str) -> Optional[Employee]:
        return self._employees.get(employee_id)

    def system_status(self, employee_id: str, system: System) -> Optional[bool]:
        employee = self._employees.get(employee_id)
        if employee is None:
            return None
        access = employee.access_for(system)
        return access.status if access is not None else None

    def mutate_system_status(
        self,
        employee_id: str,
        system: System,
        status: bool,
        *,
        touch: bool = True,
    ) -> bool:
        employee = self._employees.get(employee_id)
        if employee is None:
            return False
        access = employee.access_for(system)
        if access is None:
            return False
        access.status = status
        if touch:
            employee.last_updated = utc_now_iso()
        self._notify("status")
        return True

    def edit_profile(self, employee_id: str, name: str, email: str) -> bool:
        employee = self._employees.get(employee_id)
        if employee is None:
            return False
        employee.name = name
        employee.email = email
        self._notify("profile")
        return True
