"""Store selection and cost estimation.

The preferred store is charged whenever its price is within the tolerance band
above the cheapest store; otherwise the strictly cheapest store wins, ties
going to the first store in the fixed store order.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from shopsmart.domain.ShoppingItem import ShoppingItem
from shopsmart.domain.Store import Store
from shopsmart.utilities.constants import PREFERRED_STORE, PREFERRED_STORE_TOLERANCE

__all__ = ["StoreSelection", "select_store", "item_cost", "total_cost", "format_cost"]


@dataclass(frozen=True)
class StoreSelection:
    store: Store
    price: float

    def to_dict(self):
        return {"store": self.store.value, "price": self.price}


def _valid_price(value) -> Optional[float]:
    if value is None or isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value) if value > 0 else None


def select_store(prices: Mapping[Store, float] | None, *,
                 preferred: Store | str = PREFERRED_STORE,
                 tolerance: float = PREFERRED_STORE_TOLERANCE) -> Optional[StoreSelection]:
    """Pick the store to charge an item against, or None without usable prices."""
    prices = prices or {}
    valid = []
    for store in Store.ordered():
        price = _valid_price(prices.get(store))
        if price is not None:
            valid.append(StoreSelection(store, price))
    if not valid:
        return None

    cheapest = valid[0]
    for candidate in valid[1:]:
        if candidate.price < cheapest.price:
            cheapest = candidate

    preferred_store = Store.parse(preferred)
    preferred_price = _valid_price(prices.get(preferred_store)) if preferred_store else None
    if preferred_price is not None and preferred_price <= cheapest.price * (1 + tolerance):
        return StoreSelection(preferred_store, preferred_price)
    return cheapest


def item_cost(item: ShoppingItem) -> Optional[float]:
    """Estimated cost of one list row (selected price x kg), None without price data."""
    selection = select_store(item.prices)
    if selection is None:
        return None
    return selection.price * item.quantity_in_kg()


def total_cost(items: Iterable[ShoppingItem]) -> float:
    """Exact estimated total; rows without price data contribute 0."""
    total = 0.0
    for item in items:
        cost = item_cost(item)
        if cost is not None:
            total += cost
    return total


def format_cost(value: Optional[float]) -> str:
    if value is None:
        return "N/A"
    return f"€{value:.2f}"
