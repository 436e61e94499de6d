from typing import Final

DEFAULT_PROFILE_ID: Final[str] = "principale"

# Fixed store order: ties on the cheapest price go to the first store listed.
STORE_ORDER: Final[tuple[str, ...]] = ("famila", "lidl", "primoprezzo")
PREFERRED_STORE: Final[str] = "famila"
PREFERRED_STORE_TOLERANCE: Final[float] = 0.20

WEEKDAYS: Final[tuple[str, ...]] = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"
)
MEAL_SLOTS: Final[tuple[str, ...]] = ("breakfast", "lunch", "dinner")

GRAMS_PER_KG: Final[int] = 1000
KG_THRESHOLD_GRAMS: Final[int] = 1000
QUANTITY_DECIMALS: Final[int] = 2

# Characters the document store refuses in keys.
FORBIDDEN_ID_CHARS: Final[str] = ".#$[]/"

DIET_PLANS_ROOT: Final[str] = "dietPlans"
SHOPPING_LIST_PATH: Final[str] = "shoppingList"

FRESHNESS_LABELS: Final[dict[str, str]] = {
    "fresh": "Fresco (> 6 giorni)",
    "soon": "In scadenza (3-6 giorni)",
    "urgent": "Urgente (< 3 giorni)",
}
LEGACY_FRESHNESS: Final[dict[str, str]] = {
    "red": "urgent",
    "yellow": "soon",
    "blue": "fresh",
    "green": "fresh",
}

SORT_ORDERS: Final[tuple[str, ...]] = ("default", "alphabetical", "freshness")

SUGGESTION_PROMPT_TEMPLATE: Final[str] = (
    """
Based on the item, quantity, unit, and prices at different stores, suggest alternative items from other stores that have a lower price per unit.

Item: {item}
Quantity: {quantity}
Unit: {unit}
Famila Price: {famila_price}
Lidl Price: {lidl_price}
Primoprezzo Price: {primoprezzo_price}

Consider these factors when suggesting alternatives:
- Price per unit compared to other stores.
- Similarity of the alternative item to the original item.
- Availability of the item at the suggested store.

Suggest at least one alternative if possible.
Answer ONLY with JSON in the following format:
"""
)
SUGGESTION_JSON_FORMAT: Final[str] = (
    """
{
    "suggestedAlternatives": [
      {
        "store": str,
        "alternativeItem": str,
        "price": float,
        "pricePerUnit": float,
        "reason": str
      }
    ]
}
    """
)
