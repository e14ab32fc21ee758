"""
Conversion between raw store documents and flat dicts.
"""
import json
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

LINKED_SUFFIX = '_linked'


def _decode_linked(key: str, value: Any) -> Any:
    if not isinstance(value, str) or not value:
        return value
    try:
        return json.loads(value)
    except ValueError:
        logger.info(f"Linked field '{key}' is not valid JSON, keeping raw value.")
        return value


def document_serializer(documents: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Flattens raw store documents into plain dicts.

    The ``fields`` key/value list becomes dict entries, ``*_linked`` values
    sent as JSON strings are decoded, and the document id is kept when the
    field list omits it.
    """
    result = []
    for document in documents or []:
        flat: Dict[str, Any] = {}
        for entry in document.get('fields') or []:
            key = entry.get('key')
            if key is None:
                continue
            value = entry.get('value')
            if key.endswith(LINKED_SUFFIX):
                value = _decode_linked(key, value)
            flat[key] = value
        if 'id' not in flat and document.get('id') is not None:
            flat['id'] = document['id']
        result.append(flat)
    return result


def document_fields(values: Dict[str, Any]) -> Dict[str, Any]:
    """
    Builds the ``{"fields": [{"key", "value"}, ...]}`` payload expected by
    ``update_document``.
    """
    return {'fields': [{'key': key, 'value': value} for key, value in values.items()]}


def fields_to_dict(document: Dict[str, Any]) -> Dict[str, Any]:
    """Returns the field list of an update payload as a dict."""
    return {entry['key']: entry.get('value') for entry in document.get('fields') or []}


def build_where(**conditions: Any) -> str:
    """Builds a ``key=value AND key=value`` where clause."""
    return ' AND '.join(f"{key}={value}" for key, value in conditions.items())


def parse_where(where: Optional[str]) -> List[Tuple[str, str]]:
    """
    Parses a ``key=value AND key=value`` where clause into pairs.
    """
    if not where:
        return []
    pairs = []
    for clause in where.split(' AND '):
        key, sep, value = clause.partition('=')
        if not sep or not key.strip():
            raise ValueError(f"Invalid where clause: {clause!r}")
        pairs.append((key.strip(), value.strip()))
    return pairs


def project_document(
    data: Dict[str, Any],
    fields: Iterable[str],
    resolve_linked=None
) -> Dict[str, Any]:
    """
    Builds a raw store document from a stored dict, keeping only ``fields``.

    A ``<field>_linked`` projection is filled by ``resolve_linked(field, value)``,
    which returns the linked document (or None) and is sent JSON encoded.
    """
    entries = []
    for key in fields:
        if key.endswith(LINKED_SUFFIX):
            source = key[:-len(LINKED_SUFFIX)]
            linked = resolve_linked(source, data.get(source)) if resolve_linked else None
            value = json.dumps(linked) if linked is not None else None
        else:
            value = data.get(key)
        entries.append({'key': key, 'value': value})
    return {'id': data.get('id'), 'fields': entries}
