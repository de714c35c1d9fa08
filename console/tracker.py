from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterator, Optional, Set

from adapters.base import EmployeeApi

from .errors import ToggleError, ToggleTransportFailure
from .models import System, UpdateKey
from .notifications import LoggingNotifier, Notifier
from .store import EmployeeDirectoryStore

logger = logging.getLogger(__name__)

TOGGLE_FAILED_MESSAGE = "Could not update status. Please try again."


class ToggleOutcome(str, Enum):
    APPLIED = "applied"
    REVERTED = "reverted"
    SKIPPED = "skipped"


class InFlightSet:
    """Keys with a remote toggle outstanding.

    Everything runs on one event loop, so membership checks and updates
    between awaits cannot race; the set alone serializes work per key.
    """

    def __init__(self) -> None:
        self._keys: Set[UpdateKey] = set()

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def keys(self) -> FrozenSet[UpdateKey]:
        return frozenset(self._keys)

    def acquire(self, key: UpdateKey) -> bool:
        if key in self._keys:
            return False
        self._keys.add(key)
        return True

    def release(self, key: UpdateKey) -> None:
        self._keys.discard(key)

    @contextmanager
    def hold(self, key: UpdateKey) -> Iterator[bool]:
        acquired = self.acquire(key)
        try:
            yield acquired
        finally:
            if acquired:
                self.release(key)


class OptimisticUpdateTracker:
    """Applies status toggles locally first, then reconciles with the remote call."""

    def __init__(
        self,
        store: EmployeeDirectoryStore,
        api: EmployeeApi,
        notifier: Optional[Notifier] = None,
        *,
        timeout: Optional[float] = None,
    ) -> None:
        self._store = store
        self._api = api
        self._notifier = notifier or LoggingNotifier()
        self._timeout = timeout
        self.in_flight = InFlightSet()

    def is_updating(self, employee_id: str, system: Any) -> bool:
        return (employee_id, System.parse(system)) in self.in_flight

    async def _dispatch(self, employee_id: str, system: System, new_status: bool) -> Dict[str, Any]:
        call = self._api.update_system_status(employee_id, system, new_status)
        if self._timeout is None:
            return await call
        try:
            return await asyncio.wait_for(call, timeout=self._timeout)
        except asyncio.TimeoutError:
            raise ToggleTransportFailure(
                f"Toggle for {employee_id}/{system.value} timed out after {self._timeout}s."
            ) from None

    async def request_toggle(self, employee_id: str, system: Any, new_status: bool) -> ToggleOutcome:
        system = System.parse(system)
        key: UpdateKey = (employee_id, system)

        with self.in_flight.hold(key) as acquired:
            if not acquired:
                logger.debug("Toggle for %s/%s already in flight; skipping", employee_id, system.value)
                return ToggleOutcome.SKIPPED

            prior = self._store.system_status(employee_id, system)
            self._store.mutate_system_status(employee_id, system, new_status)

            try:
                result = await self._dispatch(employee_id, system, new_status)
            except ToggleError as exc:
                self._restore(employee_id, system, prior)
                logger.warning(
                    "Toggle for %s/%s failed, reverted to %s: %s",
                    employee_id,
                    system.value,
                    prior,
                    exc,
                )
                self._notifier.error(TOGGLE_FAILED_MESSAGE)
                return ToggleOutcome.REVERTED
            except Exception:
                self._restore(employee_id, system, prior)
                raise

            logger.info("Toggle for %s/%s applied (status=%s)", employee_id, system.value, new_status)
            message = (result or {}).get("message") or f"System {system.value} status updated successfully"
            self._notifier.success(message)
            return ToggleOutcome.APPLIED

    def _restore(self, employee_id: str, system: System, prior: Optional[bool]) -> None:
        if prior is None:
            return
        self._store.mutate_system_status(employee_id, system, prior, touch=False)
