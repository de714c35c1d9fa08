from __future__ import annotations

import logging
from typing import Any, Dict, List

import httpx

from console.errors import LoadFailure, ToggleTransportFailure
from console.models import Employee, System

from .base import EmployeeApi, employees_from_response, toggle_result_from_response

logger = logging.getLogger(__name__)


def _json_or_empty(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return {}


class HttpEmployeeApi(EmployeeApi):
    """Talks to the ``/api/employees`` endpoint served by ``app.py``."""

    def __init__(self, base_url: str, timeout: float = 30.0) -> None:
        self.base_url = base_url.rstrip("/")
        self._timeout = timeout

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/api/employees"

    async def fetch_employees(self) -> List[Employee]:
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(self.endpoint)
        except httpx.RequestError as exc:
            logger.error("Employee API connection error: %s", exc)
            raise LoadFailure(f"Could not reach {self.endpoint}.") from exc
        return employees_from_response(_json_or_empty(response), response.status_code)

    async def update_system_status(self, employee_id: str, system: System, new_status: bool) -> Dict[str, Any]:
        payload = {
            "employeeId": employee_id,
            "system": System.parse(system).value,
            "newStatus": new_status,
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self.endpoint, json=payload)
        except httpx.RequestError as exc:
            logger.error("Employee API connection error: %s", exc)
            raise ToggleTransportFailure(f"Could not reach {self.endpoint}.") from exc
        return toggle_result_from_response(_json_or_empty(response), response.status_code)
