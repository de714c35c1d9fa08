from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from .directory import get_department, get_login, get_role
from .models import Employee, System

ALL = "all"

STATUS_OPTIONS = [
    {"label": "All", "value": ALL},
    {"label": "Active", "value": "active"},
    {"label": "Inactive", "value": "inactive"},
]

_STATUS_VALUES = {"active": True, "inactive": False}


@dataclass(frozen=True)
class EmployeeQuery:
    """Compound table query; every field defaults to matching everything."""

    text: str = ""
    system: str = ALL
    status: str = ALL
    department: str = ALL
    role: str = ALL


def matches_text(employee: Employee, text: str) -> bool:
    needle = text.lower()
    if not needle:
        return True
    haystack = (
        employee.name,
        employee.email,
        get_login(employee.email),
        get_role(employee.name),
        get_department(employee.name),
    )
    return any(needle in value.lower() for value in haystack)


def matches_system(employee: Employee, system: str) -> bool:
    if system == ALL:
        return True
    try:
        wanted = System.parse(system)
    except ValueError:
        return False
    return any(access.system == wanted for access in employee.systems)


def matches_status(employee: Employee, status: str) -> bool:
    # Any-of across systems: one active system is enough for "active",
    # regardless of which system the system filter picked.
    if status == ALL:
        return True
    if status not in _STATUS_VALUES:
        raise ValueError(f"Unknown status filter: {status!r}")
    wanted = _STATUS_VALUES[status]
    return any(access.status == wanted for access in employee.systems)


def matches_department(employee: Employee, department: str) -> bool:
    return department == ALL or get_department(employee.name) == department


def matches_role(employee: Employee, role: str) -> bool:
    return role == ALL or get_role(employee.name) == role


def matches(employee: Employee, query: EmployeeQuery) -> bool:
    return (
        matches_text(employee, query.text)
        and matches_system(employee, query.system)
        and matches_status(employee, query.status)
        and matches_department(employee, query.department)
        and matches_role(employee, query.role)
    )


def filter_employees(employees: Iterable[Employee], query: EmployeeQuery) -> List[Employee]:
    return [employee for employee in employees if matches(employee, query)]
