"""Glue between the directory store and whatever renders the employee table.

The controller owns the query, the current page and the confirmation flow.
Renderers call ``view()`` whenever the store notifies them of a change.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Any, List, Optional

from adapters.base import EmployeeApi

from .audit_log import AuditLogRecorder, MemoryAuditStore
from .directory import get_department, get_login, get_role
from .errors import LoadFailure
from .filters import EmployeeQuery, filter_employees
from .gate import ConfirmationGate
from .models import AuditLogEntry, Employee, PendingAction, System
from .notifications import LoggingNotifier, Notifier
from .pagination import PageLink, link_sequence, paginate
from .store import EmployeeDirectoryStore
from .tracker import OptimisticUpdateTracker, ToggleOutcome

logger = logging.getLogger(__name__)

SYSTEMS: List[str] = [system.value for system in System]


@dataclass(frozen=True)
class CellView:
    system: str
    status: bool
    updating: bool


@dataclass(frozen=True)
class RowView:
    id: str
    name: str
    email: str
    login: str
    role: str
    department: str
    cells: List[CellView]


@dataclass(frozen=True)
class TableView:
    total: int
    filtered: int
    page: int
    total_pages: int
    links: List[PageLink]
    rows: List[RowView]

    @property
    def empty(self) -> bool:
        return not self.rows


class EmployeeTableController:
    def __init__(
        self,
        api: EmployeeApi,
        *,
        recorder: Optional[AuditLogRecorder] = None,
        store: Optional[EmployeeDirectoryStore] = None,
        notifier: Optional[Notifier] = None,
        page_size: int = 5,
        user_login: str = "admin",
        toggle_timeout: Optional[float] = None,
        reload_delay: float = 0.9,
    ) -> None:
        self.api = api
        self.store = store or EmployeeDirectoryStore()
        self.notifier = notifier or LoggingNotifier()
        self.recorder = recorder or AuditLogRecorder(MemoryAuditStore())
        self.tracker = OptimisticUpdateTracker(
            self.store, api, self.notifier, timeout=toggle_timeout
        )
        self.gate = ConfirmationGate(self.tracker, self.recorder, user_login=user_login)
        self.page_size = page_size
        self.reload_delay = reload_delay
        self.query = EmployeeQuery()
        self.page = 1
        self.loading = False
        self.reloading: Optional[str] = None

    async def load(self) -> bool:
        self.loading = True
        try:
            employees = await self.api.fetch_employees()
        except LoadFailure as exc:
            logger.error("Failed to load employees: %s", exc)
            self.notifier.error("Could not load employee data.")
            return False
        finally:
            self.loading = False
        self.store.load(employees)
        self.notifier.success("Employee data loaded.")
        return True

    def set_query(self, **changes: Any) -> EmployeeQuery:
        updated = replace(self.query, **changes)
        if updated != self.query:
            self.query = updated
            self.page = 1
        return self.query

    def _total_pages(self) -> int:
        return paginate(filter_employees(self.store.all(), self.query), self.page_size, 1).total_pages

    def go_to_page(self, page: int) -> int:
        self.page = page
        return self.page

    def previous_page(self) -> int:
        self.page = max(1, self.page - 1)
        return self.page

    def next_page(self) -> int:
        self.page = min(self._total_pages(), self.page + 1)
        return self.page

    def view(self) -> TableView:
        employees = self.store.all()
        filtered = filter_employees(employees, self.query)
        page = paginate(filtered, self.page_size, self.page)
        rows = [self._row(employee) for employee in page.page_items]
        return TableView(
            total=len(employees),
            filtered=len(filtered),
            page=self.page,
            total_pages=page.total_pages,
            links=link_sequence(self.page, page.total_pages),
            rows=rows,
        )

    def _row(self, employee: Employee) -> RowView:
        return RowView(
            id=employee.id,
            name=employee.name,
            email=employee.email,
            login=get_login(employee.email),
            role=get_role(employee.name),
            department=get_department(employee.name),
            cells=[
                CellView(
                    system=access.system.value,
                    status=access.status,
                    updating=self.tracker.is_updating(employee.id, access.system),
                )
                for access in employee.systems
            ],
        )

    def badge_click(self, employee_id: str, system: Any) -> Optional[PendingAction]:
        employee = self.store.get(employee_id)
        if employee is None:
            return None
        access = employee.access_for(System.parse(system))
        if access is None:
            return None
        return self.gate.stage(employee, access, not access.status)

    async def confirm(self) -> Optional[ToggleOutcome]:
        return await self.gate.confirm()

    def cancel(self) -> None:
        self.gate.cancel()

    def edit_profile(self, employee_id: str, name: str, email: str) -> bool:
        if not self.store.edit_profile(employee_id, name, email):
            return False
        self.notifier.success("Employee updated successfully.")
        return True

    async def reload_employee(self, employee_id: str) -> None:
        self.reloading = employee_id
        try:
            await asyncio.sleep(self.reload_delay)
            self.notifier.success("Employee data refreshed.")
        finally:
            if self.reloading == employee_id:
                self.reloading = None

    def history(self) -> List[AuditLogEntry]:
        return self.recorder.read_all()
