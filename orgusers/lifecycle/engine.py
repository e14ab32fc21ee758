import logging
from dataclasses import dataclass
from typing import Optional

from orgusers.config import MembershipConfig
from orgusers.data.base import DocumentStoreAdapter
from orgusers.data.serializer import document_fields
from orgusers.errors import (
    AssignmentNotFound,
    InvalidTransition,
    PartialCascadeFailure,
    SelfActionError,
    StoreError,
    ValidationError,
    get_error_message,
)
from orgusers.models import AssignmentStatus, OrganizationAssignment

from .policy import Action, can_act_on


@dataclass(frozen=True)
class DeleteResult:
    """Outcome of a successful delete."""

    assignment: OrganizationAssignment
    cascaded: bool


class LifecycleEngine:
    """
    Validates membership actions and issues the matching store mutations.

    Every check runs before the first store call. Store failures are never
    retried.
    """

    def __init__(self, store: DocumentStoreAdapter, config: MembershipConfig):
        self.store = store
        self.config = config
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def validate(
        self,
        action: Action,
        target: Optional[OrganizationAssignment],
        self_assignment: Optional[OrganizationAssignment] = None
    ) -> OrganizationAssignment:
        """
        Checks ``action`` against the self-protection and status rules.

        Raises:
            AssignmentNotFound: ``target`` is None.
            SelfActionError: ``target`` is the viewer's own assignment.
            InvalidTransition: re-invite on an assignment that is not DECLINED.
        """
        if target is None:
            raise AssignmentNotFound(f"Cannot {action.value}: assignment not found")
        self_id = self_assignment.id if self_assignment else None
        if not can_act_on(target.id, self_id):
            raise SelfActionError(f"Cannot {action.value} your own assignment {target.id}")
        if action == Action.RE_INVITE and target.status != AssignmentStatus.DECLINED:
            raise InvalidTransition(
                f"Cannot re-invite assignment {target.id} with status {target.status!s}")
        return target

    async def _update(self, entity, values: dict) -> None:
        try:
            await self.store.update_document(entity.acronym, entity.schema, document_fields(values))
        except StoreError:
            raise
        except Exception as e:
            raise StoreError(get_error_message(e), e) from e

    async def re_invite(
        self,
        target: OrganizationAssignment,
        self_assignment: Optional[OrganizationAssignment] = None
    ) -> OrganizationAssignment:
        """
        Resets a DECLINED assignment to PENDING. No other field is written.
        """
        self.validate(Action.RE_INVITE, target, self_assignment)
        self.logger.info(f"Re-inviting assignment {target.id}")
        await self._update(self.config.assignment, {
            'id': target.id,
            'status': AssignmentStatus.PENDING.value,
        })
        target.status = AssignmentStatus.PENDING
        return target

    async def edit_role(
        self,
        target: OrganizationAssignment,
        role_id: str,
        self_assignment: Optional[OrganizationAssignment] = None
    ) -> OrganizationAssignment:
        """
        Moves an assignment to another role. Only ``roleId`` is written.
        """
        self.validate(Action.EDIT, target, self_assignment)
        if not role_id:
            raise ValidationError("A role is required")
        self.logger.info(f"Changing role of assignment {target.id} to {role_id}")
        await self._update(self.config.assignment, {'id': target.id, 'roleId': role_id})
        target.role_id = role_id
        return target

    async def delete(
        self,
        target: OrganizationAssignment,
        self_assignment: Optional[OrganizationAssignment] = None
    ) -> DeleteResult:
        """
        Deletes an assignment. APPROVED assignments also detach the persona
        from the organization; PENDING and DECLINED ones are removed alone.
        """
        self.validate(Action.DELETE, target, self_assignment)
        if target.status == AssignmentStatus.APPROVED:
            return await self.cascading_delete(target)
        return await self.simple_delete(target)

    async def simple_delete(self, target: OrganizationAssignment) -> DeleteResult:
        await self._delete_assignment(target)
        return DeleteResult(assignment=target, cascaded=False)

    async def cascading_delete(self, target: OrganizationAssignment) -> DeleteResult:
        """
        Deletes the assignment, then clears the persona's organization
        reference. The second step only runs once the first succeeded.

        Raises:
            ValidationError: the assignment has no persona to detach.
            StoreError: the assignment delete failed; nothing changed.
            PartialCascadeFailure: the assignment is gone but the persona
                still references the organization.
        """
        if not target.persona_id:
            raise ValidationError(f"Assignment {target.id} has no persona to detach")

        await self._delete_assignment(target)

        persona = self.config.persona
        try:
            await self.store.update_document(persona.acronym, persona.schema, document_fields({
                'id': target.persona_id,
                'businessOrganizationId': '',
            }))
        except Exception as e:
            message = get_error_message(e)
            self.logger.error(
                f"Assignment {target.id} deleted but persona {target.persona_id} "
                f"still references organization {target.business_organization_id}: {message}")
            raise PartialCascadeFailure(message, target, target.persona_id, e) from e

        self.logger.info(f"Detached persona {target.persona_id} from organization {target.business_organization_id}")
        return DeleteResult(assignment=target, cascaded=True)

    async def _delete_assignment(self, target: OrganizationAssignment) -> None:
        self.logger.info(f"Deleting assignment {target.id} ({target.status!s})")
        try:
            await self.store.delete_document(self.config.assignment.acronym, target.id)
        except Exception as e:
            self.logger.error(f"Deleting assignment {target.id} failed: {get_error_message(e)}")
            if isinstance(e, StoreError):
                raise
            raise StoreError(get_error_message(e), e) from e
