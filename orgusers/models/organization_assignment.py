"""
OrganizationAssignment model
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from .base_model import BaseModel
from .enums import AssignmentStatus


@dataclass
class OrganizationAssignment(BaseModel):
    """
    Join record binding a persona to an organization with a role and a status.

    ``persona_email`` and ``role_label`` are read-only projections of the
    linked persona and role documents. They are never written back.
    """

    persona_id: Optional[str] = field(default=None, metadata={'alias': 'personaId'})
    business_organization_id: Optional[str] = field(
        default=None, metadata={'alias': 'businessOrganizationId'})
    role_id: Optional[str] = field(default=None, metadata={'alias': 'roleId'})
    status: Union[AssignmentStatus, str, None] = None

    persona_email: str = field(default='', metadata={'projection': True})
    role_label: str = field(default='', metadata={'projection': True})

    @property
    def is_active(self) -> bool:
        return self.status == AssignmentStatus.APPROVED
