import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from orgusers.config import MembershipConfig
from orgusers.data.base import DocumentStoreAdapter
from orgusers.data.serializer import build_where, document_serializer
from orgusers.errors import get_error_message
from orgusers.models import OrganizationAssignment, Role


def _linked_value(record: Dict[str, Any], field: str, key: str) -> str:
    linked = record.get(f"{field}_linked")
    if isinstance(linked, dict):
        value = linked.get(key)
        return value if value is not None else ''
    return ''


def join_assignments(records: Iterable[Dict[str, Any]]) -> List[OrganizationAssignment]:
    """
    Builds assignments from flattened store records, projecting the linked
    persona email and role label onto each one.

    Args:
        records (Iterable[Dict[str, Any]]): output of ``document_serializer``

    Returns:
        List[OrganizationAssignment]: assignments in store order
    """
    assignments = []
    for record in records:
        assignment = OrganizationAssignment.from_dict(record)
        assignment.persona_email = _linked_value(record, 'personaId', 'email')
        assignment.role_label = _linked_value(record, 'roleId', 'label')
        assignments.append(assignment)
    return assignments


def find_self_assignment(
    assignments: Sequence[OrganizationAssignment],
    viewer_persona_id: Optional[str]
) -> Optional[OrganizationAssignment]:
    """finds the assignment that belongs to the acting viewer

    Args:
        assignments (Sequence[OrganizationAssignment]): loaded assignments
        viewer_persona_id (str, optional): persona id of the viewer

    Returns:
        Optional[OrganizationAssignment]: first matching assignment, None if the viewer has none
    """
    if viewer_persona_id is None:
        return None
    return next((a for a in assignments if a.persona_id == viewer_persona_id), None)


def role_options(roles: Iterable[Role]) -> List[Dict[str, Optional[str]]]:
    """Select options for role pickers."""
    return [{'label': role.label, 'value': role.id, 'name': role.name} for role in roles]


def existing_emails(assignments: Iterable[OrganizationAssignment]) -> List[str]:
    """Emails already assigned, used by the add-user flow to reject duplicates."""
    return [assignment.persona_email for assignment in assignments]


class AssignmentRepository:
    """
    Loads roles and organization assignments from the document store.

    Read failures never propagate: they are logged and an empty list is returned.
    """

    def __init__(self, store: DocumentStoreAdapter, config: MembershipConfig):
        self.store = store
        self.config = config
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    async def _query_records(self, entity, where: Optional[str] = None) -> List[Dict[str, Any]]:
        try:
            documents = await self.store.query(
                entity.acronym, list(entity.fields), entity.schema, where=where)
        except Exception as e:
            self.logger.warning(f"Query on {entity.acronym} failed: {get_error_message(e)}")
            return []
        return document_serializer(documents or [])

    async def load_roles(self) -> List[Role]:
        records = await self._query_records(self.config.role)
        return [Role.from_dict(record) for record in records]

    async def load_assignments(self, organization_id: str) -> List[OrganizationAssignment]:
        """
        Loads the assignments of an organization joined with persona email and role label.
        """
        where = build_where(businessOrganizationId=organization_id)
        records = await self._query_records(self.config.assignment, where=where)
        return join_assignments(records)

    async def load(self, organization_id: str) -> Tuple[List[Role], List[OrganizationAssignment]]:
        """
        Loads roles and assignments concurrently.
        """
        roles, assignments = await asyncio.gather(
            self.load_roles(), self.load_assignments(organization_id))
        self.logger.info(
            f"Loaded {len(roles)} roles and {len(assignments)} assignments for organization {organization_id}")
        return roles, assignments

    find_self_assignment = staticmethod(find_self_assignment)
