"""
Rules deciding which actions a viewer may take on an assignment.
"""
from enum import Enum
from typing import FrozenSet, Optional

from orgusers.models import AssignmentStatus, OrganizationAssignment


class Action(str, Enum):
    EDIT = 'edit'
    RE_INVITE = 're-invite'
    DELETE = 'delete'

    def __str__(self):
        return str(self.value)


def can_act_on(target_id: Optional[str], self_id: Optional[str]) -> bool:
    """
    A viewer may act on any assignment except their own. A viewer without
    an assignment may act on all of them.
    """
    return self_id is None or target_id != self_id


def can_re_invite(assignment: OrganizationAssignment, self_id: Optional[str]) -> bool:
    return can_act_on(assignment.id, self_id) and assignment.status == AssignmentStatus.DECLINED


def available_actions(
    assignment: OrganizationAssignment,
    self_assignment: Optional[OrganizationAssignment]
) -> FrozenSet[Action]:
    """
    Actions to offer for ``assignment``. Actions that would be refused are
    never offered.
    """
    self_id = self_assignment.id if self_assignment else None
    if not can_act_on(assignment.id, self_id):
        return frozenset()
    actions = {Action.EDIT, Action.DELETE}
    if assignment.status == AssignmentStatus.DECLINED:
        actions.add(Action.RE_INVITE)
    return frozenset(actions)


STATUS_LABELS = {
    AssignmentStatus.APPROVED: 'Active',
    AssignmentStatus.DECLINED: 'Inactive',
    AssignmentStatus.PENDING: 'Pending',
}


def status_label(status) -> str:
    """Display label for an assignment status, empty for unknown values."""
    try:
        return STATUS_LABELS.get(AssignmentStatus(status), '')
    except ValueError:
        return ''
