"""Event helper utilities.

Quick import:
    from shopsmart.events.event_helpers import (
        publish_recomputed, publish_item_updated, publish_suggestion_failed
    )
"""
from __future__ import annotations
from typing import Any
from .Event_Bus import (
    crea,
    SHOPPING_LIST_RECOMPUTED, SHOPPING_ITEM_UPDATED, AI_SUGGESTION_FAILED,
)

__all__ = [
    'publish_recomputed', 'publish_item_updated', 'publish_suggestion_failed',
    'SHOPPING_LIST_RECOMPUTED', 'SHOPPING_ITEM_UPDATED', 'AI_SUGGESTION_FAILED',
]


def publish_recomputed(count: int, upserts: list[str], deleted: list[str], trigger: str = ""):
    """Publish a shopping_list.recomputed event."""
    crea(SHOPPING_LIST_RECOMPUTED, {
        'count': count,
        'upserts': upserts,
        'deleted': deleted,
        'trigger': trigger,
    })


def publish_item_updated(item: Any):
    crea(SHOPPING_ITEM_UPDATED, {'item': item})


def publish_suggestion_failed(item_name: str, error: str):
    """Publish an ai.suggestion_failed event (transient, retryable notice)."""
    crea(AI_SUGGESTION_FAILED, {
        'item': item_name,
        'error': error,
    })
