"""
Base dataclass for documents read from and written to the document store.
"""
import logging
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Union, get_args, get_origin, get_type_hints
from uuid import uuid4

logger = logging.getLogger(__name__)


def get_uuid_hex():
    """
    Returns a random UUID in hex format.
    """
    return uuid4().hex


@dataclass(kw_only=True)
class BaseModel:
    """
    A base class for store documents.

    Field names are python-style; the name used by the document store is
    declared through the ``alias`` metadata key (``personaId`` for
    ``persona_id``). Unknown keys loaded from the store are kept in ``extra``.
    """

    id: str = field(default_factory=get_uuid_hex)
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def fields(cls) -> List[str]:
        """
        Get a list of field names for this model.

        Returns:
            List[str]: A list of field names.
        """
        return [f.name for f in fields(cls) if f.name != 'extra']

    @classmethod
    def _build_alias_mapping(cls) -> Dict[str, str]:
        """Build a mapping from field aliases to field names."""
        return {f.metadata['alias']: f.name for f in fields(cls) if f.metadata.get('alias')}

    @classmethod
    def _try_convert_enum(cls, v, expected_type) -> Any:
        """Try to convert a string to an enum value, keeping the raw value otherwise."""
        origin = get_origin(expected_type)
        candidates = get_args(expected_type) if origin is Union else (expected_type,)
        for arg in candidates:
            if isinstance(arg, type) and issubclass(arg, Enum):
                try:
                    return arg(v)
                except ValueError:
                    logger.info(f"'{v}' is not a valid {arg.__name__}.")
        return v

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BaseModel":
        """
        Load a model from a flat document dict (store keys or field names).
        """
        alias_to_field = cls._build_alias_mapping()
        converted = {alias_to_field.get(k, k): v for k, v in data.items()}
        model_fields = cls.fields()
        clean_data = {k: v for k, v in converted.items() if k in model_fields}
        hints = get_type_hints(cls)

        for k, v in clean_data.items():
            if isinstance(v, str) and k in hints:
                clean_data[k] = cls._try_convert_enum(v, hints[k])

        instance = cls(**clean_data)
        instance.extra = {k: v for k, v in converted.items() if k not in model_fields}
        return instance

    def as_dict(self, use_aliases: bool = True, include_extra: bool = False) -> Dict[str, Any]:
        """
        Convert this model to a dictionary.

        Args:
            use_aliases (bool): Whether to emit store key names instead of field names.
            include_extra (bool): Whether to merge the ``extra`` keys into the output.

        Returns:
            Dict[str, Any]: A dictionary representation of this model.
        """
        result = {}
        for f in fields(self):
            if f.name == 'extra' or f.metadata.get('projection'):
                continue
            value = getattr(self, f.name)
            if isinstance(value, Enum):
                value = value.value
            key = f.metadata.get('alias', f.name) if use_aliases else f.name
            result[key] = value
        if include_extra and self.extra:
            result.update(self.extra)
        return result
