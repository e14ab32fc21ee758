"""
Config class that reads entity acronyms and schemas from the environment
and/or a .env file.
"""
import os
import logging
from abc import abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from orgusers.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_BUSINESS_ROLE_FIELDS = ['id', 'name', 'label']
DEFAULT_ORG_ASSIGNMENT_FIELDS = [
    'id', 'personaId', 'personaId_linked', 'businessOrganizationId',
    'roleId', 'roleId_linked', 'status',
]
DEFAULT_PERSONA_FIELDS = ['id', 'email', 'businessOrganizationId']


@dataclass(frozen=True)
class EntitySchema:
    """Addressing data for one entity in the document store."""

    acronym: str
    schema: str
    fields: Tuple[str, ...] = ()


class BaseConfig():
    """
    Config class that snapshots the environment after loading a .env file.
    """
    def __init__(self):
        load_dotenv()
        self.env_vars = {key: os.getenv(key) for key in os.environ}

    def get_env_vars(self) -> dict:
        """
        Return the dictionary containing all environment variables
        """
        return self.env_vars

    def get_env_var(self, var_name: str, default: Optional[str] = None):
        """
        Retrieve the value of the specified environment variable
        Args:
            var_name (str) : Name of the env var to fetch
            default (str) : Value returned when the variable is not set
        """
        if var_name in self.env_vars.keys():
            return self.env_vars[var_name]
        if default is None:
            logger.warning("Variable %s not found.", var_name)
        return default

    def get_var_as_list(self, var_name: str, default: Optional[List[str]] = None) -> Optional[List[str]]:
        """
        Returns a comma-delimited var as list
        """
        if var_name in self.env_vars.keys():
            return [env_var.strip() for env_var in self.env_vars[var_name].split(",") if env_var.strip()]
        if default is None:
            logger.warning("Warning: var %s not found.", var_name)
        return default

    @abstractmethod
    def validate_env_vars(self):
        """
        Abstract method for validation of the env vars.
        """


class MembershipConfig(BaseConfig):
    """
    Entity acronyms, schemas and field projections used by the membership
    repository and lifecycle engine.
    """

    def __init__(self):
        super().__init__()
        self.persona = EntitySchema(
            acronym=self.get_env_var('PERSONA_ACRONYM', 'persona'),
            schema=self.get_env_var('PERSONA_SCHEMA', 'persona-schema-v1'),
            fields=tuple(self.get_var_as_list('PERSONA_FIELDS', DEFAULT_PERSONA_FIELDS)),
        )
        self.role = EntitySchema(
            acronym=self.get_env_var('BUSINESS_ROLE_ACRONYM', 'business_role'),
            schema=self.get_env_var('BUSINESS_ROLE_SCHEMA', 'business-role-schema-v1'),
            fields=tuple(self.get_var_as_list('BUSINESS_ROLE_FIELDS', DEFAULT_BUSINESS_ROLE_FIELDS)),
        )
        self.assignment = EntitySchema(
            acronym=self.get_env_var('ORG_ASSIGNMENT_ACRONYM', 'organization_assignment'),
            schema=self.get_env_var('ORG_ASSIGNMENT_SCHEMA', 'organization-assignment-schema-v1'),
            fields=tuple(self.get_var_as_list('ORG_ASSIGNMENT_FIELDS', DEFAULT_ORG_ASSIGNMENT_FIELDS)),
        )
        try:
            self.toast_duration_ms = int(self.get_env_var('TOAST_DURATION_MS', '5000'))
        except ValueError as e:
            raise ConfigError(f"TOAST_DURATION_MS must be an integer: {e}") from e

    def entity(self, name: str) -> EntitySchema:
        """
        Returns the EntitySchema for ``persona``, ``role`` or ``assignment``.
        """
        if name not in ('persona', 'role', 'assignment'):
            raise ConfigError(f"Unknown entity '{name}'")
        return getattr(self, name)

    def link_map(self) -> dict:
        """
        Maps assignment reference fields to the acronym of the entity they point at.
        """
        return {
            'personaId': self.persona.acronym,
            'roleId': self.role.acronym,
        }

    def validate_env_vars(self):
        errors = []
        for name in ('persona', 'role', 'assignment'):
            entity = self.entity(name)
            if not entity.acronym:
                errors.append(f"Acronym for {name} is empty")
            if not entity.schema:
                errors.append(f"Schema for {name} is empty")
            if 'id' not in entity.fields:
                errors.append(f"Fields for {name} must include 'id'")
        if errors:
            raise ConfigError("\n".join(errors))
