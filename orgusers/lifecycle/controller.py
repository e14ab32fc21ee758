import logging
from typing import Any, Callable, Dict, List, Optional

from orgusers.config import MembershipConfig
from orgusers.data.base import DocumentStoreAdapter
from orgusers.errors import PartialCascadeFailure, StoreError
from orgusers.models import OrganizationAssignment, Role
from orgusers.repositories import (
    AssignmentRepository,
    existing_emails,
    find_self_assignment,
    role_options,
)

from .cache import CacheKey, cache_key_for, on_assignment_deleted
from .confirmation import DeleteConfirmation, EditSession
from .engine import DeleteResult, LifecycleEngine
from .policy import Action, available_actions, status_label


class MyUsersController:
    """
    Entry points behind the organization users screen.

    Holds the cached roles and assignments of one organization, forwards
    user intent to the lifecycle engine and reports failures through
    ``show_toast``. Refused actions raise ValidationError before any store call.
    """

    def __init__(
        self,
        store: DocumentStoreAdapter,
        config: MembershipConfig,
        organization_id: str,
        viewer_persona_id: Optional[str],
        show_toast: Optional[Callable[[Dict[str, Any]], Any]] = None
    ):
        self.config = config
        self.organization_id = organization_id
        self.viewer_persona_id = viewer_persona_id
        self.show_toast = show_toast
        self.repository = AssignmentRepository(store, config)
        self.engine = LifecycleEngine(store, config)
        self.cache: Dict[CacheKey, tuple] = {}
        self.delete_confirmation = DeleteConfirmation()
        self.edit_session = EditSession()
        self.is_add_user_open = False
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def _assignment_key(self) -> CacheKey:
        return cache_key_for(self.organization_id, self.config.assignment.acronym)

    @property
    def _role_key(self) -> CacheKey:
        return CacheKey(acronym=self.config.role.acronym)

    async def refresh(self) -> None:
        roles, assignments = await self.repository.load(self.organization_id)
        self.cache[self._role_key] = tuple(roles)
        self.cache[self._assignment_key] = tuple(assignments)

    @property
    def assignments(self) -> List[OrganizationAssignment]:
        return list(self.cache.get(self._assignment_key, ()))

    @property
    def roles(self) -> List[Role]:
        return list(self.cache.get(self._role_key, ()))

    @property
    def self_assignment(self) -> Optional[OrganizationAssignment]:
        return find_self_assignment(self.assignments, self.viewer_persona_id)

    @property
    def role_options(self) -> List[Dict[str, Optional[str]]]:
        return role_options(self.roles)

    @property
    def existing_emails(self) -> List[str]:
        return existing_emails(self.assignments)

    @property
    def rows(self) -> List[Dict[str, Any]]:
        self_assignment = self.self_assignment
        return [
            {
                'id': assignment.id,
                'email': assignment.persona_email,
                'status': status_label(assignment.status),
                'role': assignment.role_label,
                'actions': available_actions(assignment, self_assignment),
            }
            for assignment in self.assignments
        ]

    def find(self, assignment_id: str) -> Optional[OrganizationAssignment]:
        return next((a for a in self.assignments if a.id == assignment_id), None)

    def _toast(self, message: str) -> None:
        self.logger.error(message)
        if self.show_toast is not None:
            self.show_toast({
                'message': message,
                'duration': self.config.toast_duration_ms,
                'horizontalPosition': 'right',
            })

    # CREATE
    def add_user(self) -> None:
        self.is_add_user_open = True

    async def user_added(self) -> None:
        self.is_add_user_open = False
        await self.refresh()

    def close_add_user(self) -> None:
        self.is_add_user_open = False

    # EDIT
    def edit_user(self, assignment_id: str) -> None:
        target = self.engine.validate(Action.EDIT, self.find(assignment_id), self.self_assignment)
        self.edit_session.open(target)

    async def save_edit(self, role_id: str) -> bool:
        self_assignment = self.self_assignment
        try:
            target = await self.edit_session.save(
                lambda subject: self.engine.edit_role(subject, role_id, self_assignment))
        except StoreError as e:
            self._toast(f"Can't edit user, {e.message}")
            return False
        role = next((r for r in self.roles if r.id == role_id), None)
        target.role_label = (role.label or '') if role is not None else ''
        return True

    def close_edit(self) -> None:
        self.edit_session.close()

    # RE INVITE
    async def re_invite(self, assignment_id: str) -> bool:
        target = self.find(assignment_id)
        try:
            await self.engine.re_invite(target, self.self_assignment)
        except StoreError as e:
            self._toast(f"Can't re-invite, {e.message}")
            return False
        return True

    # DELETE
    def request_delete(self, assignment_id: str) -> None:
        target = self.engine.validate(Action.DELETE, self.find(assignment_id), self.self_assignment)
        self.delete_confirmation.request(target)

    async def confirm_delete(self) -> Optional[DeleteResult]:
        self_assignment = self.self_assignment
        try:
            result = await self.delete_confirmation.confirm(
                lambda target: self.engine.delete(target, self_assignment))
        except PartialCascadeFailure as e:
            self._reconcile_deleted(e.assignment)
            self._toast(f"User deleted but still linked to the organization, {e.message}")
            return None
        except StoreError as e:
            self._toast(f"Can't delete user {e.message}")
            return None
        self._reconcile_deleted(result.assignment)
        return result

    def cancel_delete(self) -> None:
        self.delete_confirmation.cancel()

    def _reconcile_deleted(self, assignment: OrganizationAssignment) -> None:
        self.cache = on_assignment_deleted(
            self.cache, assignment, self.organization_id, self.config.assignment.acronym)
