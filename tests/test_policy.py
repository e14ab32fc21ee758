"""
Tests for the action policy: self-protection and offered actions.
"""
import pytest

from orgusers.lifecycle import Action, available_actions, can_act_on, can_re_invite, status_label
from orgusers.models import AssignmentStatus
from orgusers.repositories import find_self_assignment

from helpers import make_assignment


@pytest.mark.parametrize("target_id,self_id,expected", [
    ("a1", None, True),
    ("a1", "a2", True),
    ("a3", "a3", False),
])
def test_can_act_on(target_id, self_id, expected):
    assert can_act_on(target_id, self_id) is expected


def test_viewer_can_never_target_own_assignment():
    assignments = [
        make_assignment('a1', persona_id='p1'),
        make_assignment('a2', persona_id='p2'),
        make_assignment('a3', persona_id='p3'),
    ]
    for viewer in ('p1', 'p2', 'p3'):
        self_assignment = find_self_assignment(assignments, viewer)
        assert can_act_on(self_assignment.id, self_assignment.id) is False
        assert available_actions(self_assignment, self_assignment) == frozenset()


def test_available_actions_for_declined():
    viewer = make_assignment('a1', persona_id='p1', status=AssignmentStatus.APPROVED)
    target = make_assignment('a2', persona_id='p2', status=AssignmentStatus.DECLINED)

    assert available_actions(target, viewer) == {Action.EDIT, Action.DELETE, Action.RE_INVITE}


@pytest.mark.parametrize("status", [AssignmentStatus.PENDING, AssignmentStatus.APPROVED])
def test_re_invite_not_offered_unless_declined(status):
    viewer = make_assignment('a1', persona_id='p1')
    target = make_assignment('a2', persona_id='p2', status=status)

    assert available_actions(target, viewer) == {Action.EDIT, Action.DELETE}
    assert can_re_invite(target, viewer.id) is False


def test_actions_offered_without_self_assignment():
    target = make_assignment('a2', status=AssignmentStatus.DECLINED)

    assert Action.RE_INVITE in available_actions(target, None)
    assert can_re_invite(target, None) is True


@pytest.mark.parametrize("status,label", [
    (AssignmentStatus.APPROVED, 'Active'),
    ('DECLINED', 'Inactive'),
    ('PENDING', 'Pending'),
    ('ARCHIVED', ''),
    (None, ''),
])
def test_status_label(status, label):
    assert status_label(status) == label
