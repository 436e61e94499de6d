import json
import tempfile
import unittest
from pathlib import Path

import httpx

from shopsmart.domain.exceptions import ConfigurationError, StorageError
from shopsmart.infra.Document_Store import (
    FirebaseDocumentStore, JsonDocumentStore, build_document_store
)


class TestJsonDocumentStore(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / 'store.json'
        self.store = JsonDocumentStore(self.path)

    def tearDown(self):
        self._tmp.cleanup()

    def test_missing_file_reads_as_empty(self):
        self.assertIsNone(self.store.get('shoppingList'))
        self.assertFalse(self.path.exists())

    def test_set_get_remove(self):
        self.store.set('dietPlans/principale', {'week': {'monday': 'a'}})
        self.assertEqual(self.store.get('dietPlans/principale/week/monday'), 'a')
        self.store.remove('dietPlans/principale')
        self.assertEqual(self.store.get('dietPlans'), {})

    def test_multi_path_update(self):
        self.store.set('shoppingList/pane', {'name': 'Pane'})
        self.store.update({
            'shoppingList/riso': {'name': 'Riso'},
            'shoppingList/pane': None,
        })
        with open(self.path, encoding='utf-8') as f:
            data = json.load(f)
        self.assertEqual(data, {'shoppingList': {'riso': {'name': 'Riso'}}})
        leftovers = [p.name for p in self.path.parent.iterdir() if p.name != 'store.json']
        self.assertEqual(leftovers, [])

    def test_invalid_json_is_a_configuration_error(self):
        self.path.write_text('{not json', encoding='utf-8')
        with self.assertRaises(ConfigurationError):
            self.store.get('shoppingList')

    def test_unknown_backend(self):
        with self.assertRaises(ConfigurationError):
            build_document_store('sqlite')


class TestFirebaseDocumentStore(unittest.TestCase):

    def _store(self, handler, token='secret'):
        client = httpx.Client(transport=httpx.MockTransport(handler))
        return FirebaseDocumentStore('https://demo.firebaseio.com/', token, client=client)

    def test_requires_https_url(self):
        with self.assertRaises(ConfigurationError):
            FirebaseDocumentStore('')
        with self.assertRaises(ConfigurationError):
            FirebaseDocumentStore('http://demo.firebaseio.com')

    def test_get_uses_rest_path_and_auth(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={'name': 'Riso'})

        store = self._store(handler)
        self.assertEqual(store.get('shoppingList/riso'), {'name': 'Riso'})
        self.assertEqual(seen[0].method, 'GET')
        self.assertEqual(seen[0].url.path, '/shoppingList/riso.json')
        self.assertEqual(seen[0].url.params['auth'], 'secret')

    def test_update_is_one_root_patch(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={})

        store = self._store(handler, token='')
        store.update({'shoppingList/riso': {'name': 'Riso'}, '/shoppingList/pane': None})
        self.assertEqual(len(seen), 1)
        self.assertEqual(seen[0].method, 'PATCH')
        self.assertEqual(seen[0].url.path, '/.json')
        self.assertEqual(json.loads(seen[0].content),
                         {'shoppingList/riso': {'name': 'Riso'}, 'shoppingList/pane': None})

    def test_null_body_reads_as_none(self):
        store = self._store(lambda request: httpx.Response(200, content=b'null'))
        self.assertIsNone(store.get('dietPlans'))

    def test_http_errors_become_storage_errors(self):
        store = self._store(lambda request: httpx.Response(401, json={'error': 'Permission denied'}))
        with self.assertRaises(StorageError):
            store.get('dietPlans')

    def test_transport_errors_become_storage_errors(self):
        def handler(request):
            raise httpx.ConnectError('connection refused', request=request)

        store = self._store(handler)
        with self.assertRaises(StorageError):
            store.update({'shoppingList/riso': None})
