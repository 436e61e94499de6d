"""Search and sort for the shopping list; all inputs are explicit parameters."""
from typing import Iterable, List

from shopsmart.domain.ShoppingItem import ShoppingItem
from shopsmart.utilities.constants import SORT_ORDERS


def _name_key(item: ShoppingItem) -> str:
    return (item.name or '').casefold()


def filter_and_sort(items: Iterable[ShoppingItem], query: str = "", sort_order: str = "default") -> List[ShoppingItem]:
    """Filter by case-insensitive name substring, then sort.

    Sort orders:
        default: highlighted ("to buy") items first, then by name.
        alphabetical: by name.
        freshness: urgent, soon, fresh; original order kept within a level.
    """
    if sort_order not in SORT_ORDERS:
        raise ValueError(f"Unknown sort order: {sort_order!r}")
    needle = (query or '').strip().casefold()
    selected = [i for i in items if i.name and needle in i.name.casefold()]

    if sort_order == "default":
        return sorted(selected, key=lambda i: (not i.is_highlighted, _name_key(i)))
    if sort_order == "alphabetical":
        return sorted(selected, key=_name_key)
    return sorted(selected, key=lambda i: i.freshness.rank)


__all__ = ["filter_and_sort"]
