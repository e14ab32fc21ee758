"""
Role model
"""

from dataclasses import dataclass
from typing import Optional

from .base_model import BaseModel


@dataclass
class Role(BaseModel):
    """A named permission level. Read-only from this package's perspective."""

    name: Optional[str] = None
    label: Optional[str] = None
