"""ShoppingItem entity: one row of the consolidated shopping list.

Derived fields (id, name, quantity, unit) are recomputed from the diet plans;
user-owned fields (prices, freshness, is_highlighted) survive recomputation.
"""
from typing import Dict, Optional

from shopsmart.domain.Freshness import Freshness
from shopsmart.domain.Store import Store, prices_from_dict, prices_to_dict
from shopsmart.utilities.constants import GRAMS_PER_KG


class ShoppingItem:
    def __init__(self, id: str, name: str = "", quantity: float = 0, unit: str = "g",
                 prices: Optional[Dict[Store, float]] = None,
                 freshness: Freshness = Freshness.FRESH, is_highlighted: bool = False):
        self.id = id
        self.name = name
        self.quantity = quantity
        self.unit = unit
        self.prices = dict(prices) if prices else {}
        self.freshness = freshness
        self.is_highlighted = is_highlighted

    def quantity_in_kg(self) -> float:
        '''Quantity expressed in kilograms (unit "g" is divided by 1000).'''
        if self.unit == "g":
            return self.quantity / GRAMS_PER_KG
        return self.quantity

    def __eq__(self, other):
        if not isinstance(other, ShoppingItem):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __str__(self) -> str:
        flag = " *" if self.is_highlighted else ""
        return f"{self.name} - {self.quantity} {self.unit} [{self.freshness.value}]{flag}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a ShoppingItem from a stored dictionary (camelCase keys).'''
        d = data if isinstance(data, dict) else {}
        quantity = d.get("quantity", 0)
        try:
            quantity = float(quantity) if quantity is not None else 0
        except (TypeError, ValueError):
            quantity = 0
        if isinstance(quantity, float) and quantity.is_integer():
            quantity = int(quantity)
        return ShoppingItem(
            id=str(d.get("id") or ""),
            name=d.get("name") or "",
            quantity=quantity,
            unit=d.get("unit") or "g",
            prices=prices_from_dict(d.get("prices")),
            freshness=Freshness.parse(d.get("freshness")),
            is_highlighted=bool(d.get("isHighlighted", False)),
        )

    def to_dict(self):
        '''Converts the item to the stored/serialized dictionary form.'''
        return {
            "id": self.id,
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "prices": prices_to_dict(self.prices),
            "freshness": self.freshness.value,
            "isHighlighted": self.is_highlighted,
        }
