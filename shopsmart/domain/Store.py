"""Store value object: the closed set of retailers with independent pricing."""
from enum import Enum
from typing import Dict, Optional

from shopsmart.utilities.constants import STORE_ORDER


class Store(str, Enum):
    FAMILA = "famila"
    LIDL = "lidl"
    PRIMOPREZZO = "primoprezzo"

    @classmethod
    def ordered(cls):
        '''Returns the stores in the fixed tie-break order.'''
        return [cls(value) for value in STORE_ORDER]

    @classmethod
    def parse(cls, value) -> Optional["Store"]:
        '''Returns the Store for a key (case-insensitive) or None if unknown.'''
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


def prices_from_dict(data) -> Dict[Store, float]:
    '''Builds a partial Store -> price map, ignoring unknown stores and non-numeric values.'''
    prices: Dict[Store, float] = {}
    if not isinstance(data, dict):
        return prices
    for key, value in data.items():
        store = Store.parse(key)
        if store is None or value is None or isinstance(value, bool):
            continue
        try:
            prices[store] = float(value)
        except (TypeError, ValueError):
            continue
    return prices


def prices_to_dict(prices: Dict[Store, float]) -> Dict[str, float]:
    '''Serializes a price map in store order.'''
    return {store.value: prices[store] for store in Store.ordered() if store in prices}
