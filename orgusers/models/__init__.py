"""
Models for orgusers
"""

from .base_model import BaseModel, get_uuid_hex
from .enums import AssignmentStatus
from .persona import Persona
from .role import Role
from .organization_assignment import OrganizationAssignment
