"""Plan aggregator.

Folds every profile's diet plan into one mapping of normalized item name to
total grams required for the week, plus the first-seen display name and
price map. Provides aggregate(profiles).
"""
from dataclasses import dataclass, field
from typing import Dict, Mapping

from shopsmart.domain.DietPlan import DietPlan
from shopsmart.domain.Store import Store
from shopsmart.utilities.constants import GRAMS_PER_KG


@dataclass
class AggregatedItem:
    display_name: str
    quantity_grams: float = 0
    carried_prices: Dict[Store, float] = field(default_factory=dict)


def normalize_name(name: str) -> str:
    return (name or '').strip().lower()


def to_grams(quantity: float, unit: str) -> float:
    if unit == 'kg':
        return quantity * GRAMS_PER_KG
    return quantity


def aggregate(profiles: Mapping[str, DietPlan]) -> Dict[str, AggregatedItem]:
    """Sum the weekly quantity of every food item across all profiles.

    Args:
        profiles: profile id -> DietPlan.

    Returns:
        Insertion-ordered dict keyed by the trimmed lower-case item name.
        Day types no weekday refers to contribute nothing; items with an empty
        name or a non-positive quantity are skipped.
    """
    totals: Dict[str, AggregatedItem] = {}

    for plan in profiles.values():
        if plan is None:
            continue
        usage = plan.usage_counts()
        for day_type in plan.day_types:
            multiplier = usage.get(day_type.id, 0)
            if multiplier == 0:
                continue
            for item in day_type.all_items():
                display_name = (item.name or '').strip()
                if not display_name:
                    continue
                if not isinstance(item.quantity, (int, float)) or not item.quantity > 0:
                    continue
                key = normalize_name(display_name)
                grams = to_grams(item.quantity, item.unit) * multiplier
                entry = totals.get(key)
                if entry is None:
                    totals[key] = AggregatedItem(display_name, grams, dict(item.prices))
                else:
                    entry.quantity_grams += grams

    return totals


__all__ = ['AggregatedItem', 'aggregate', 'normalize_name', 'to_grams']
