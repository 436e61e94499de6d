"""Key-value document stores holding the diet plans and the shopping list.

Both implementations expose the same tree operations addressed by
slash-separated paths ("dietPlans/principale", "shoppingList/riso"):

    get(path)          -> value or None
    set(path, value)   -> replace the subtree
    remove(path)       -> delete the subtree
    update(updates)    -> atomic multi-path write, a None value deletes

JsonDocumentStore keeps the whole tree in one JSON file replaced atomically;
FirebaseDocumentStore talks to a Firebase Realtime Database over REST.
"""
from __future__ import annotations
import copy
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional

import httpx

from shopsmart.domain.exceptions import ConfigurationError, StorageError

logger = logging.getLogger(__name__)


def _split(path: str) -> list[str]:
    return [part for part in (path or '').strip('/').split('/') if part]


class DocumentStore:
    def get(self, path: str) -> Any:
        raise NotImplementedError

    def set(self, path: str, value: Any) -> None:
        raise NotImplementedError

    def remove(self, path: str) -> None:
        raise NotImplementedError

    def update(self, updates: Dict[str, Any]) -> None:
        raise NotImplementedError


class JsonDocumentStore(DocumentStore):
    """Whole tree in one JSON file; every write replaces the file atomically."""

    def __init__(self, file_path: Path):
        self.file_path = Path(file_path)
        self._lock = Lock()

    # --- File helpers ------------------------------------------------------
    def _load(self) -> Dict[str, Any]:
        if not self.file_path.exists():
            return {}
        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in data store {self.file_path}: {e}") from e
        except OSError as e:
            raise StorageError(f"Cannot read data store {self.file_path}: {e}") from e
        return data if isinstance(data, dict) else {}

    def _atomic_write(self, tree: Dict[str, Any]) -> None:
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=str(self.file_path.parent), prefix=".shopsmart_", suffix=".json"
            )
        except OSError as e:
            raise ConfigurationError(f"Data directory not writable: {self.file_path.parent}: {e}") from e
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as tmp:
                json.dump(tree, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, self.file_path)
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to write data store %s: %s", self.file_path, e)
            raise StorageError(f"Failed to write data store: {e}") from e
        finally:
            if os.path.exists(tmp_path):
                try:
                    os.remove(tmp_path)
                except OSError:
                    logger.warning("Could not remove temporary file %s", tmp_path)

    @staticmethod
    def _apply(tree: Dict[str, Any], path: str, value: Any) -> None:
        parts = _split(path)
        if not parts:
            tree.clear()
            if isinstance(value, dict):
                tree.update(copy.deepcopy(value))
            return
        node = tree
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                if value is None:
                    return
                child = {}
                node[part] = child
            node = child
        if value is None:
            node.pop(parts[-1], None)
        else:
            node[parts[-1]] = copy.deepcopy(value)

    # --- DocumentStore -----------------------------------------------------
    def get(self, path: str) -> Any:
        with self._lock:
            node: Any = self._load()
        for part in _split(path):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    def set(self, path: str, value: Any) -> None:
        self.update({path: value})

    def remove(self, path: str) -> None:
        self.update({path: None})

    def update(self, updates: Dict[str, Any]) -> None:
        if not updates:
            return
        with self._lock:
            tree = self._load()
            for path, value in updates.items():
                self._apply(tree, path, value)
            self._atomic_write(tree)


class FirebaseDocumentStore(DocumentStore):
    """Firebase Realtime Database REST client; update() is a single multi-path PATCH."""

    def __init__(self, database_url: str, auth_token: str = "", timeout: float = 10.0,
                 client: Optional[httpx.Client] = None):
        if not database_url or not database_url.startswith('https'):
            raise ConfigurationError(
                "Invalid or missing FIREBASE_DATABASE_URL. Please provide the full URL of your "
                "Realtime Database (e.g., https://<your-project>.firebaseio.com)."
            )
        self.database_url = database_url.rstrip('/')
        self._params = {'auth': auth_token} if auth_token else {}
        self._client = client or httpx.Client(timeout=timeout)

    def _url(self, path: str) -> str:
        return f"{self.database_url}/{'/'.join(_split(path))}.json"

    def _request(self, method: str, path: str, payload: Any = None) -> Any:
        kwargs: Dict[str, Any] = {'params': self._params}
        if payload is not None:
            kwargs['json'] = payload
        try:
            response = self._client.request(method, self._url(path), **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("Firebase %s %s failed: %s", method, path, e.response.status_code)
            raise StorageError(f"Database rejected {method} {path}: HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error("Firebase %s %s unreachable: %s", method, path, e)
            raise StorageError(f"Database unreachable: {e}") from e
        if not response.content:
            return None
        return response.json()

    def get(self, path: str) -> Any:
        return self._request('GET', path)

    def set(self, path: str, value: Any) -> None:
        self._request('PUT', path, value)

    def remove(self, path: str) -> None:
        self._request('DELETE', path)

    def update(self, updates: Dict[str, Any]) -> None:
        if not updates:
            return
        payload = {'/'.join(_split(path)): value for path, value in updates.items()}
        self._request('PATCH', '', payload)

    def close(self) -> None:
        self._client.close()


def build_document_store(backend: Optional[str] = None) -> DocumentStore:
    """Create the configured document store (STORAGE_BACKEND: json | firebase)."""
    from shopsmart.utilities import config
    from shopsmart.infra.paths import STORE_FILE

    backend = (backend or config.STORAGE_BACKEND).strip().lower()
    if backend == 'json':
        return JsonDocumentStore(STORE_FILE)
    if backend == 'firebase':
        return FirebaseDocumentStore(
            config.FIREBASE_DATABASE_URL,
            config.FIREBASE_AUTH_TOKEN,
            timeout=config.FIREBASE_TIMEOUT_SECONDS,
        )
    raise ConfigurationError(f"Unknown STORAGE_BACKEND '{backend}' (expected 'json' or 'firebase')")


__all__ = ['DocumentStore', 'JsonDocumentStore', 'FirebaseDocumentStore', 'build_document_store']
