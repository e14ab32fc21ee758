import copy
import logging
from typing import Any, Dict, List, Optional, Sequence

from orgusers.errors import StoreError

from .base import DocumentStoreAdapter
from .serializer import fields_to_dict, parse_where, project_document


class InMemoryDocumentStore(DocumentStoreAdapter):
    """
    Dict backed document store.

    ``link_map`` maps a reference field (``personaId``) to the acronym of
    the entity it points at, so ``personaId_linked`` projections resolve.
    """

    def __init__(self, link_map: Optional[Dict[str, str]] = None):
        self.collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.link_map = link_map or {}
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def seed(self, acronym: str, documents: List[Dict[str, Any]]) -> None:
        """Inserts plain dicts (each with an ``id``) into a collection."""
        collection = self.collections.setdefault(acronym, {})
        for document in documents:
            collection[document['id']] = copy.deepcopy(document)

    def get(self, acronym: str, document_id: str) -> Optional[Dict[str, Any]]:
        document = self.collections.get(acronym, {}).get(document_id)
        return copy.deepcopy(document) if document is not None else None

    def _resolve_linked(self, field: str, value: Any) -> Optional[Dict[str, Any]]:
        acronym = self.link_map.get(field)
        if not acronym or value is None:
            return None
        return self.get(acronym, value)

    async def query(
        self,
        acronym: str,
        fields: Sequence[str],
        schema: str,
        where: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        try:
            conditions = parse_where(where)
        except ValueError as e:
            raise StoreError(f"query failed: {e}", e) from e
        result = []
        for data in self.collections.get(acronym, {}).values():
            if all(str(data.get(key)) == value for key, value in conditions):
                result.append(project_document(data, fields, self._resolve_linked))
        return result

    async def update_document(
        self,
        acronym: str,
        schema: str,
        document: Dict[str, Any]
    ) -> Dict[str, Any]:
        values = fields_to_dict(document)
        document_id = values.get('id')
        if not document_id:
            raise StoreError("update_document failed: 'id' is required in fields")
        self.logger.info(f"Updating id={document_id} in {acronym}")
        stored = self.collections.setdefault(acronym, {}).setdefault(document_id, {})
        stored.update(values)
        return {'id': document_id}

    async def delete_document(self, acronym: str, document_id: str) -> Dict[str, Any]:
        collection = self.collections.get(acronym, {})
        if document_id not in collection:
            raise StoreError(f"delete_document failed: document {document_id} not found in {acronym}")
        self.logger.info(f"Deleting id={document_id} from {acronym}")
        del collection[document_id]
        return {'id': document_id}
