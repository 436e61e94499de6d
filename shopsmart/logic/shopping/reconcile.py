"""Reconciliation merge.

Turns the aggregated gram totals into ShoppingItem rows, keeping the fields
the user owns (prices, freshness, highlight) from the previously stored list,
and computes the upsert/delete change-set to commit.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Tuple

from shopsmart.domain.Freshness import Freshness
from shopsmart.domain.ShoppingItem import ShoppingItem
from shopsmart.logic.shopping.aggregator import AggregatedItem
from shopsmart.utilities.constants import (
    FORBIDDEN_ID_CHARS, GRAMS_PER_KG, KG_THRESHOLD_GRAMS, QUANTITY_DECIMALS
)

logger = logging.getLogger(__name__)

_ID_TRANSLATION = str.maketrans({ch: '_' for ch in FORBIDDEN_ID_CHARS})


def sanitize_item_id(name: str) -> str:
    """Trimmed lower-case name with each of . # $ [ ] / replaced by '_'."""
    return (name or '').strip().lower().translate(_ID_TRANSLATION)


def _clean_number(value: float):
    value = round(value, QUANTITY_DECIMALS)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def to_display_quantity(grams: float) -> Tuple[float, str]:
    """Return (quantity, unit): kg from 1000 g upwards, grams below; 2 decimals."""
    if grams >= KG_THRESHOLD_GRAMS:
        return _clean_number(grams / GRAMS_PER_KG), 'kg'
    return _clean_number(grams), 'g'


def capitalize_first(name: str) -> str:
    return name[:1].upper() + name[1:]


def _merge_colliding_ids(aggregated: Mapping[str, AggregatedItem]) -> Dict[str, AggregatedItem]:
    """Group aggregated entries by storage id; names differing only in . # $ [ ] / share one row."""
    merged: Dict[str, AggregatedItem] = {}
    for entry in aggregated.values():
        item_id = sanitize_item_id(entry.display_name)
        existing = merged.get(item_id)
        if existing is None:
            merged[item_id] = AggregatedItem(entry.display_name, entry.quantity_grams, dict(entry.carried_prices))
            continue
        logger.warning("Items %r and %r share the id %r; merging their quantities",
                       existing.display_name, entry.display_name, item_id)
        existing.quantity_grams += entry.quantity_grams
    return merged


def reconcile(aggregated: Mapping[str, AggregatedItem], prior_list: Iterable[ShoppingItem]) -> List[ShoppingItem]:
    """Build the new shopping list from aggregated totals and the stored list.

    Derived fields (id, name, quantity, unit) always come from the aggregation.
    prices come from the stored item when one exists, otherwise from the price
    map carried by the first occurrence in the diet plans. freshness and
    is_highlighted come from the stored item or default to fresh / False.
    """
    prior_by_id: Dict[str, ShoppingItem] = {item.id: item for item in prior_list}
    result: List[ShoppingItem] = []

    for item_id, entry in _merge_colliding_ids(aggregated).items():
        if entry.quantity_grams == 0:
            continue
        quantity, unit = to_display_quantity(entry.quantity_grams)
        prior = prior_by_id.get(item_id)

        if prior is not None:
            prices = dict(prior.prices)
            freshness = prior.freshness or Freshness.FRESH
            highlighted = bool(prior.is_highlighted)
        else:
            prices = dict(entry.carried_prices)
            freshness = Freshness.FRESH
            highlighted = False

        result.append(ShoppingItem(
            id=item_id,
            name=capitalize_first(entry.display_name),
            quantity=quantity,
            unit=unit,
            prices=prices,
            freshness=freshness,
            is_highlighted=highlighted,
        ))
    return result


@dataclass
class ShoppingListChanges:
    upserts: List[ShoppingItem] = field(default_factory=list)
    delete_ids: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.upserts and not self.delete_ids

    def to_dict(self):
        return {
            'upserts': [item.id for item in self.upserts],
            'deleted': list(self.delete_ids),
        }


def diff_shopping_list(new_list: Iterable[ShoppingItem], prior_list: Iterable[ShoppingItem]) -> ShoppingListChanges:
    """Items that are new or changed (upserts) and stored ids no longer present (deletes)."""
    prior_by_id = {item.id: item.to_dict() for item in prior_list}
    changes = ShoppingListChanges()
    new_ids = set()
    for item in new_list:
        new_ids.add(item.id)
        if prior_by_id.get(item.id) != item.to_dict():
            changes.upserts.append(item)
    changes.delete_ids = [item_id for item_id in prior_by_id if item_id not in new_ids]
    return changes


__all__ = [
    'ShoppingListChanges', 'capitalize_first', 'diff_shopping_list', 'reconcile',
    'sanitize_item_id', 'to_display_quantity',
]
