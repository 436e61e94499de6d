"""FastAPI dependencies wiring the repositories to the configured document store.

Tests swap the store with app.dependency_overrides[get_document_store].
"""
from functools import lru_cache

from fastapi import Depends

from shopsmart.infra.Diet_Repository import DietRepository
from shopsmart.infra.Document_Store import DocumentStore, build_document_store
from shopsmart.infra.Shopping_Repository import ShoppingRepository


@lru_cache(maxsize=1)
def get_document_store() -> DocumentStore:
    return build_document_store()


def get_diet_repository(store: DocumentStore = Depends(get_document_store)) -> DietRepository:
    return DietRepository(store)


def get_shopping_repository(store: DocumentStore = Depends(get_document_store)) -> ShoppingRepository:
    return ShoppingRepository(store)


def close_document_store() -> None:
    """Release the cached store's HTTP client, if one was created."""
    if get_document_store.cache_info().currsize:
        store = get_document_store()
        close = getattr(store, 'close', None)
        if close is not None:
            close()
        get_document_store.cache_clear()


__all__ = ['get_document_store', 'get_diet_repository', 'get_shopping_repository', 'close_document_store']
