from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence


class DocumentStoreAdapter(ABC):
    """
    Abstract base class for document store clients.

    Documents are addressed by an entity acronym (logical collection name)
    and an id. Reads return raw documents shaped as
    ``{"id": ..., "fields": [{"key": ..., "value": ...}, ...]}``.
    """

    @abstractmethod
    async def query(
        self,
        acronym: str,
        fields: Sequence[str],
        schema: str,
        where: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Fetches the documents of an entity matching an optional ``where`` clause."""
        pass

    @abstractmethod
    async def update_document(
        self,
        acronym: str,
        schema: str,
        document: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Upserts a document keyed by the ``id`` entry of its field list."""
        pass

    @abstractmethod
    async def delete_document(self, acronym: str, document_id: str) -> Dict[str, Any]:
        """Deletes a document by id and returns ``{"id": document_id}``."""
        pass
