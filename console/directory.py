"""Attributes derived from an employee's name and email.

Role and department are not stored on the record; the console derives them
deterministically so search and filters can use them.
"""
from __future__ import annotations

from typing import List

ROLES: List[str] = ["Analyst", "Coordinator", "Manager", "Assistant", "Director"]
DEPARTMENTS: List[str] = ["HR", "IT", "Finance", "Sales", "Operations"]


def _char_code(text: str, index: int) -> int:
    return ord(text[index]) if len(text) > index else 0


def get_login(email: str) -> str:
    return email.split("@")[0]


def get_role(name: str) -> str:
    return ROLES[(_char_code(name, 0) + len(name)) % len(ROLES)]


def get_department(name: str) -> str:
    return DEPARTMENTS[(_char_code(name, 1) + len(name)) % len(DEPARTMENTS)]
