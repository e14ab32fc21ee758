"""
Shared fixtures for the orgusers tests.
"""
import os
from unittest.mock import AsyncMock, MagicMock, patch

from orgusers.config import MembershipConfig
from orgusers.data.base import DocumentStoreAdapter
from orgusers.data.memory import InMemoryDocumentStore
from orgusers.models import AssignmentStatus, OrganizationAssignment

ORG_ID = "org-1"
OTHER_ORG_ID = "org-2"


def make_config(**env) -> MembershipConfig:
    """Builds a MembershipConfig from ``env`` only, ignoring the process environment."""
    with patch.dict(os.environ, env, clear=True):
        return MembershipConfig()


def make_store_mock() -> MagicMock:
    """A store whose three calls are AsyncMocks attached to one parent, so call order is recorded."""
    store = MagicMock(spec=DocumentStoreAdapter)
    store.query = AsyncMock(return_value=[])
    store.update_document = AsyncMock(side_effect=lambda acronym, schema, document: {
        'id': document['fields'][0]['value']})
    store.delete_document = AsyncMock(side_effect=lambda acronym, document_id: {'id': document_id})
    return store


def make_assignment(assignment_id, persona_id="p1", status=AssignmentStatus.PENDING,
                    organization_id=ORG_ID, role_id="r1", **kwargs) -> OrganizationAssignment:
    return OrganizationAssignment(
        id=assignment_id,
        persona_id=persona_id,
        business_organization_id=organization_id,
        role_id=role_id,
        status=status,
        **kwargs
    )


def make_memory_store(config: MembershipConfig) -> InMemoryDocumentStore:
    """
    Memory store seeded with two roles, three personas and four assignments
    (three in ORG_ID, one in OTHER_ORG_ID).
    """
    store = InMemoryDocumentStore(link_map=config.link_map())
    store.seed(config.role.acronym, [
        {'id': 'r1', 'name': 'admin', 'label': 'Admin'},
        {'id': 'r2', 'name': 'buyer', 'label': 'Buyer'},
    ])
    store.seed(config.persona.acronym, [
        {'id': 'p1', 'email': 'ana@example.com', 'businessOrganizationId': ORG_ID},
        {'id': 'p2', 'email': 'bo@example.com', 'businessOrganizationId': ORG_ID},
        {'id': 'p3', 'email': 'cy@example.com', 'businessOrganizationId': ''},
        {'id': 'p4', 'email': 'di@example.com', 'businessOrganizationId': OTHER_ORG_ID},
    ])
    store.seed(config.assignment.acronym, [
        {'id': 'a1', 'personaId': 'p1', 'businessOrganizationId': ORG_ID,
         'roleId': 'r1', 'status': 'APPROVED'},
        {'id': 'a2', 'personaId': 'p2', 'businessOrganizationId': ORG_ID,
         'roleId': 'r2', 'status': 'APPROVED'},
        {'id': 'a3', 'personaId': 'p3', 'businessOrganizationId': ORG_ID,
         'roleId': 'r2', 'status': 'DECLINED'},
        {'id': 'a4', 'personaId': 'p4', 'businessOrganizationId': OTHER_ORG_ID,
         'roleId': 'r1', 'status': 'APPROVED'},
    ])
    return store
