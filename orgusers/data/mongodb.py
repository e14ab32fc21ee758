import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence

from pymongo import MongoClient, errors
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.read_concern import ReadConcern
from pymongo.write_concern import WriteConcern

from orgusers.errors import StoreError

from .base import DocumentStoreAdapter
from .serializer import fields_to_dict, parse_where, project_document


class MongoDocumentStore(DocumentStoreAdapter):
    """
    MongoDB backed document store, one collection per entity acronym.

    Blocking pymongo calls run in a worker thread so the coroutine
    interface never blocks the event loop:
      - Retryable writes enabled
      - Majority write concern
      - Configurable timeouts and pool sizes
    """

    def __init__(
        self,
        mongo_uri: str,
        mongo_database: str,
        link_map: Optional[Dict[str, str]] = None,
        **client_options: Any
    ):
        options = {
            'retryWrites': True,
            'w': 'majority',
            'serverSelectionTimeoutMS': 5000,
            'connectTimeoutMS': 5000,
            'maxPoolSize': 100,
            'tz_aware': True,
        }
        options.update(client_options)
        self.client: MongoClient = MongoClient(mongo_uri, **options)
        self.db: Database = self.client.get_database(mongo_database)
        self.link_map = link_map or {}
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        if not logging.getLogger().hasHandlers():
            logging.basicConfig(
                level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    def _get_collection(self, name: str, write: bool = False) -> Collection:
        """
        Get a MongoDB collection with a local read concern, and a majority
        write concern when ``write`` is True.
        """
        rc = ReadConcern('local')
        if write:
            return self.db.get_collection(name, read_concern=rc, write_concern=WriteConcern('majority'))
        return self.db.get_collection(name, read_concern=rc)

    def _resolve_linked(self, field: str, value: Any) -> Optional[Dict[str, Any]]:
        acronym = self.link_map.get(field)
        if not acronym or value is None:
            return None
        linked = self._get_collection(acronym).find_one({'_id': value})
        if linked is None:
            return None
        linked.pop('_id', None)
        linked.setdefault('id', value)
        return linked

    def _query(self, acronym: str, fields: Sequence[str], where: Optional[str]) -> List[Dict[str, Any]]:
        conditions = dict(parse_where(where))
        documents = []
        for data in self._get_collection(acronym).find(conditions):
            data['id'] = data.pop('_id')
            documents.append(project_document(data, fields, self._resolve_linked))
        return documents

    def _update(self, acronym: str, values: Dict[str, Any]) -> Dict[str, Any]:
        document_id = values['id']
        coll = self._get_collection(acronym, write=True)
        coll.update_one({'_id': document_id}, {'$set': values}, upsert=True)
        return {'id': document_id}

    def _delete(self, acronym: str, document_id: str) -> Dict[str, Any]:
        coll = self._get_collection(acronym, write=True)
        result = coll.delete_one({'_id': document_id})
        if result.deleted_count == 0:
            raise StoreError(f"delete_document failed: document {document_id} not found in {acronym}")
        return {'id': document_id}

    async def query(
        self,
        acronym: str,
        fields: Sequence[str],
        schema: str,
        where: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        Fetch documents of ``acronym`` matching ``where``.

        Raises:
            StoreError: If the where clause is invalid or the query fails due to a PyMongoError.
        """
        try:
            return await asyncio.to_thread(self._query, acronym, fields, where)
        except ValueError as e:
            raise StoreError(f"query failed: {e}", e) from e
        except errors.PyMongoError as e:
            raise StoreError(f"query failed: {e}", e) from e

    async def update_document(
        self,
        acronym: str,
        schema: str,
        document: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Upsert the fields of ``document`` into the document keyed by its ``id`` field.

        Raises:
            StoreError: If ``id`` is missing or the update fails due to a PyMongoError.
        """
        values = fields_to_dict(document)
        if not values.get('id'):
            raise StoreError("update_document failed: 'id' is required in fields")
        self.logger.info(f"Updating id={values['id']} in {acronym}")
        try:
            return await asyncio.to_thread(self._update, acronym, values)
        except errors.PyMongoError as e:
            raise StoreError(f"update_document failed: {e}", e) from e

    async def delete_document(self, acronym: str, document_id: str) -> Dict[str, Any]:
        """
        Hard delete a document by id.

        Raises:
            StoreError: If no document matched or the delete fails due to a PyMongoError.
        """
        self.logger.info(f"Deleting id={document_id} from {acronym}")
        try:
            return await asyncio.to_thread(self._delete, acronym, document_id)
        except errors.PyMongoError as e:
            raise StoreError(f"delete_document failed: {e}", e) from e

    def close(self) -> None:
        self.client.close()


def mongo_store_from_config(config, **client_options: Any) -> MongoDocumentStore:
    """
    Builds a MongoDocumentStore from ``MONGO_URI`` / ``MONGO_DATABASE`` and
    links assignment references to the configured persona and role entities.
    """
    mongo_uri = config.get_env_var('MONGO_URI')
    mongo_database = config.get_env_var('MONGO_DATABASE')
    if not mongo_uri or not mongo_database:
        raise StoreError("MONGO_URI and MONGO_DATABASE must be set")
    return MongoDocumentStore(mongo_uri, mongo_database, link_map=config.link_map(), **client_options)
