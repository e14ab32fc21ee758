"""
Scoped state for the delete confirmation and edit dialogs.
"""
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from orgusers.errors import InvalidStateError
from orgusers.models import OrganizationAssignment

logger = logging.getLogger(__name__)


class DeleteState(str, Enum):
    IDLE = 'idle'
    CONFIRM_PENDING = 'confirm-pending'
    DELETING = 'deleting'

    def __str__(self):
        return str(self.value)


class DeleteConfirmation:
    """
    Idle -> ConfirmPending -> Deleting -> Idle.

    ``confirm`` is the only way into Deleting and is refused while a delete
    is in flight. Success and failure both end in Idle with the subject cleared.
    """

    def __init__(self):
        self.state = DeleteState.IDLE
        self.subject: Optional[OrganizationAssignment] = None

    @property
    def is_open(self) -> bool:
        return self.state != DeleteState.IDLE

    @property
    def is_loading(self) -> bool:
        return self.state == DeleteState.DELETING

    def request(self, assignment: OrganizationAssignment) -> None:
        if self.state != DeleteState.IDLE:
            raise InvalidStateError(f"Cannot request a delete while {self.state.value}")
        self.subject = assignment
        self.state = DeleteState.CONFIRM_PENDING

    def cancel(self) -> None:
        if self.state == DeleteState.DELETING:
            raise InvalidStateError("Cannot cancel a delete in flight")
        self._reset()

    async def confirm(self, executor: Callable[[OrganizationAssignment], Awaitable[Any]]) -> Any:
        """
        Runs ``executor`` on the captured subject and returns its result.
        Exceptions from ``executor`` propagate after the state is reset.
        """
        if self.state != DeleteState.CONFIRM_PENDING:
            raise InvalidStateError(f"Cannot confirm a delete while {self.state.value}")
        self.state = DeleteState.DELETING
        try:
            return await executor(self.subject)
        finally:
            self._reset()

    def _reset(self) -> None:
        self.subject = None
        self.state = DeleteState.IDLE


class EditSession:
    """Holds the assignment being edited while the edit dialog is open."""

    def __init__(self):
        self.subject: Optional[OrganizationAssignment] = None
        self.saving = False

    @property
    def is_open(self) -> bool:
        return self.subject is not None

    def open(self, assignment: OrganizationAssignment) -> None:
        if self.saving:
            raise InvalidStateError("Cannot open an edit while a save is in flight")
        self.subject = assignment

    def close(self) -> None:
        if self.saving:
            raise InvalidStateError("Cannot close an edit while a save is in flight")
        self.subject = None

    async def save(self, executor: Callable[[OrganizationAssignment], Awaitable[Any]]) -> Any:
        """
        Runs ``executor`` on the edited assignment. The session closes on
        success and stays open on failure so the user can retry.
        """
        if self.subject is None:
            raise InvalidStateError("No assignment is being edited")
        if self.saving:
            raise InvalidStateError("A save is already in flight")
        self.saving = True
        try:
            result = await executor(self.subject)
        finally:
            self.saving = False
        self.subject = None
        return result
