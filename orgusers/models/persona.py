"""
Persona model
"""

from dataclasses import dataclass, field
from typing import Optional

from .base_model import BaseModel


@dataclass
class Persona(BaseModel):
    """A person who belongs to at most one organization at a time."""

    email: Optional[str] = None
    business_organization_id: Optional[str] = field(
        default=None, metadata={'alias': 'businessOrganizationId'})
