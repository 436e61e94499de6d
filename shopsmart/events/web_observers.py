"""Web-facing observers for shopping list events.

Subscribes to the GLOBAL_EVENT_BUS and keeps a small in-memory ring buffer of
user-facing notices that the API exposes for polling (since=<last id seen>).

  * Each notice carries an auto-increment integer id used as a cursor.
  * A Lock guards the buffer; with several worker processes each keeps its own.
  * MAX_EVENTS caps memory use.
"""
from __future__ import annotations
import logging
from typing import List, Dict, Any
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import (
    GLOBAL_EVENT_BUS, SHOPPING_LIST_RECOMPUTED, SHOPPING_ITEM_UPDATED, AI_SUGGESTION_FAILED
)

logger = logging.getLogger(__name__)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 300
_started = False

_LEVELS = {
    SHOPPING_LIST_RECOMPUTED: 'info',
    SHOPPING_ITEM_UPDATED: 'info',
    AI_SUGGESTION_FAILED: 'warning',
}


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'level': _LEVELS.get(event_name, 'info'),
            'ts': datetime.now(timezone.utc).isoformat(),
        }
        if isinstance(payload, dict):
            item = payload.get('item')
            if item is not None and hasattr(item, 'id'):
                evt['item_id'] = item.id
                evt['name'] = getattr(item, 'name', '')
            elif isinstance(item, str):
                evt['name'] = item
            for k in ('count', 'upserts', 'deleted', 'trigger', 'error'):
                if k in payload:
                    evt[k] = payload[k]
        if event_name == AI_SUGGESTION_FAILED:
            evt['retryable'] = True
        _events.append(evt)
        _next_id += 1
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    for name in _LEVELS:
        GLOBAL_EVENT_BUS.subscribe(name, _record)
    _started = True
    logger.debug("Notice observers subscribed")


def get_events(since: int | None = None) -> Dict[str, Any]:
    """Return notices newer than 'since' (exclusive) plus next_cursor for the next poll."""
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events']
