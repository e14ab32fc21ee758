"""
Tests for the MongoDB document store.

MongoClient is patched; no database is needed.
"""
import json
import unittest
from unittest.mock import MagicMock, patch

from pymongo import errors

from orgusers.data.mongodb import MongoDocumentStore, mongo_store_from_config
from orgusers.data.serializer import document_fields
from orgusers.errors import StoreError

from helpers import make_config

TEST_URI = "mongodb://localhost:27017"
TEST_DATABASE = "test_database"


class MongoDocumentStoreTestCase(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        patcher = patch('orgusers.data.mongodb.MongoClient')
        self.mock_mongo_client = patcher.start()
        self.addCleanup(patcher.stop)
        self.collection = MagicMock()
        self.db = self.mock_mongo_client.return_value.get_database.return_value
        self.db.get_collection.return_value = self.collection
        self.store = MongoDocumentStore(
            TEST_URI, TEST_DATABASE, link_map={'roleId': 'business_role'})

    def test_init_with_default_options(self):
        """
        Test that MongoClient gets the uri and the default options.
        """
        self.mock_mongo_client.assert_called_once_with(
            TEST_URI,
            retryWrites=True,
            w='majority',
            serverSelectionTimeoutMS=5000,
            connectTimeoutMS=5000,
            maxPoolSize=100,
            tz_aware=True,
        )
        self.mock_mongo_client.return_value.get_database.assert_called_once_with(TEST_DATABASE)

    async def test_query_projects_fields_and_links(self):
        self.collection.find.return_value = [
            {'_id': 'a1', 'status': 'PENDING', 'roleId': 'r1', 'businessOrganizationId': 'org-1'}]
        self.collection.find_one.return_value = {'_id': 'r1', 'label': 'Admin'}

        documents = await self.store.query(
            'organization_assignment', ['id', 'status', 'roleId_linked'], 'schema',
            where='businessOrganizationId=org-1')

        self.collection.find.assert_called_once_with({'businessOrganizationId': 'org-1'})
        self.collection.find_one.assert_called_once_with({'_id': 'r1'})
        self.assertEqual(documents[0]['id'], 'a1')
        values = {entry['key']: entry['value'] for entry in documents[0]['fields']}
        self.assertEqual(values['status'], 'PENDING')
        self.assertEqual(json.loads(values['roleId_linked']), {'id': 'r1', 'label': 'Admin'})

    async def test_query_failure_raises_store_error(self):
        self.collection.find.side_effect = errors.PyMongoError("boom")

        with self.assertRaises(StoreError) as ctx:
            await self.store.query('organization_assignment', ['id'], 'schema')
        self.assertIn("boom", ctx.exception.message)

    async def test_update_document_upserts_by_id(self):
        result = await self.store.update_document(
            'persona', 'schema', document_fields({'id': 'p1', 'businessOrganizationId': ''}))

        self.assertEqual(result, {'id': 'p1'})
        self.collection.update_one.assert_called_once_with(
            {'_id': 'p1'}, {'$set': {'id': 'p1', 'businessOrganizationId': ''}}, upsert=True)

    async def test_update_document_without_id(self):
        with self.assertRaises(StoreError):
            await self.store.update_document('persona', 'schema', document_fields({'email': 'x'}))
        self.collection.update_one.assert_not_called()

    async def test_delete_document(self):
        self.collection.delete_one.return_value.deleted_count = 1

        result = await self.store.delete_document('organization_assignment', 'a1')

        self.assertEqual(result, {'id': 'a1'})
        self.collection.delete_one.assert_called_once_with({'_id': 'a1'})

    async def test_delete_missing_document(self):
        self.collection.delete_one.return_value.deleted_count = 0

        with self.assertRaises(StoreError):
            await self.store.delete_document('organization_assignment', 'a1')

    async def test_delete_failure_raises_store_error(self):
        self.collection.delete_one.side_effect = errors.PyMongoError("not primary")

        with self.assertRaises(StoreError) as ctx:
            await self.store.delete_document('organization_assignment', 'a1')
        self.assertIsInstance(ctx.exception.original, errors.PyMongoError)


class MongoStoreFromConfigTestCase(unittest.TestCase):

    @patch('orgusers.data.mongodb.MongoClient')
    def test_builds_store_with_link_map(self, mock_mongo_client):
        config = make_config(MONGO_URI=TEST_URI, MONGO_DATABASE=TEST_DATABASE)

        store = mongo_store_from_config(config)

        self.assertEqual(store.link_map, {'personaId': 'persona', 'roleId': 'business_role'})
        mock_mongo_client.return_value.get_database.assert_called_once_with(TEST_DATABASE)

    def test_missing_connection_settings(self):
        with self.assertRaises(StoreError):
            mongo_store_from_config(make_config())


if __name__ == '__main__':
    unittest.main()
