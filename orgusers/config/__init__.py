from .config import BaseConfig, MembershipConfig, EntitySchema
