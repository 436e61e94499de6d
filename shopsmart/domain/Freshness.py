"""Freshness: coarse perishability indicator used for urgency sorting."""
from enum import Enum
from typing import Optional

from shopsmart.utilities.constants import FRESHNESS_LABELS, LEGACY_FRESHNESS


class Freshness(str, Enum):
    URGENT = "urgent"
    SOON = "soon"
    FRESH = "fresh"

    @property
    def label(self) -> str:
        return FRESHNESS_LABELS[self.value]

    @property
    def rank(self) -> int:
        '''Sort rank: urgent items first.'''
        return _RANK[self]

    @classmethod
    def lookup(cls, value) -> Optional["Freshness"]:
        '''Maps a stored value to a level, migrating the old colour names; None if unknown.'''
        if isinstance(value, cls):
            return value
        if not isinstance(value, str) or not value.strip():
            return None
        key = value.strip().lower()
        key = LEGACY_FRESHNESS.get(key, key)
        try:
            return cls(key)
        except ValueError:
            return None

    @classmethod
    def parse(cls, value) -> "Freshness":
        '''Like lookup() but falls back to FRESH.'''
        return cls.lookup(value) or cls.FRESH


_RANK = {Freshness.URGENT: 0, Freshness.SOON: 1, Freshness.FRESH: 2}
