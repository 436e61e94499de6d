"""Simple Event Bus / Observer implementation for shopping list notices.

Event names used so far:
  shopping_list.recomputed -> payload {"count": int, "upserts": [ids], "deleted": [ids], "trigger": str}
  shopping_list.item_updated -> payload {"item": ShoppingItem}
  ai.suggestion_failed -> payload {"item": str, "error": str}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
SHOPPING_LIST_RECOMPUTED = "shopping_list.recomputed"
SHOPPING_ITEM_UPDATED = "shopping_list.item_updated"
AI_SUGGESTION_FAILED = "ai.suggestion_failed"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				# listener errors never reach the publisher
				logger.exception("Error delivering %s to %r", event_name, cb)


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


def crea(event_name: str, payload: Any = None) -> None:
	"""Publish an event on the global bus (sugar function)."""
	GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'crea',
	'SHOPPING_LIST_RECOMPUTED', 'SHOPPING_ITEM_UPDATED', 'AI_SUGGESTION_FAILED'
]
