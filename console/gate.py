from __future__ import annotations

import logging
from collections import deque
from enum import Enum
from typing import Deque, Optional

from .audit_log import AuditLogRecorder
from .models import Employee, PendingAction, SystemAccess
from .tracker import OptimisticUpdateTracker, ToggleOutcome

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 32


class GateState(str, Enum):
    IDLE = "idle"
    STAGED = "staged"
    COMMITTED = "committed"
    CANCELLED = "cancelled"


class ConfirmationGate:
    """Two-step toggle: a badge click stages, only ``confirm`` executes.

    One action can be staged at a time and a new click replaces it. Confirming
    runs the optimistic toggle, then writes the audit entry for any attempt
    that was actually dispatched.
    """

    def __init__(
        self,
        tracker: OptimisticUpdateTracker,
        recorder: AuditLogRecorder,
        *,
        user_login: str = "admin",
    ) -> None:
        self._tracker = tracker
        self._recorder = recorder
        self._user_login = user_login
        self.state = GateState.IDLE
        self.pending: Optional[PendingAction] = None
        self.history: Deque[GateState] = deque([GateState.IDLE], maxlen=HISTORY_LIMIT)
        self._commits = 0

    def _transition(self, state: GateState) -> None:
        logger.debug("Confirmation gate %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def stage(self, employee: Employee, system: SystemAccess, new_status: bool) -> PendingAction:
        action = PendingAction(
            employee=employee.snapshot(),
            system=SystemAccess(system.system, system.status, system.original_id),
            new_status=new_status,
        )
        self.pending = action
        if self.state != GateState.STAGED:
            self._transition(GateState.STAGED)
        return action

    def cancel(self) -> None:
        if self.state != GateState.STAGED:
            return
        self.pending = None
        self._transition(GateState.CANCELLED)
        self._transition(GateState.IDLE)

    async def confirm(self) -> Optional[ToggleOutcome]:
        if self.state != GateState.STAGED or self.pending is None:
            return None
        action = self.pending
        self.pending = None
        self._commits += 1
        commit = self._commits
        self._transition(GateState.COMMITTED)
        try:
            outcome = await self._tracker.request_toggle(
                action.employee.id, action.system.system, action.new_status
            )
            if outcome is not ToggleOutcome.SKIPPED:
                self._recorder.record(
                    user_login=self._user_login,
                    employee_name=action.employee.name,
                    system=action.system.system.value,
                    old_status=action.system.status,
                    new_status=action.new_status,
                )
        finally:
            # A click during the remote call may have staged the next action,
            # and a later confirm owns COMMITTED until it finishes.
            if self.state == GateState.COMMITTED and commit == self._commits:
                self._transition(GateState.IDLE)
        return outcome
