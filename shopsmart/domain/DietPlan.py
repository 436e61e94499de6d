"""Diet plan entities: food items grouped into reusable day types, assigned to weekdays."""
import time
from typing import Dict, List, Optional

from shopsmart.domain.Store import Store, prices_from_dict, prices_to_dict
from shopsmart.utilities.constants import MEAL_SLOTS, WEEKDAYS


class DietFoodItem:
    def __init__(self, name: str = "", quantity: float = 0, unit: str = "g",
                 prices: Optional[Dict[Store, float]] = None, id: str = ""):
        self.id = id
        self.name = name
        self.quantity = quantity
        self.unit = unit
        self.prices = dict(prices) if prices else {}

    def __str__(self) -> str:
        return f"{self.name} - {self.quantity} {self.unit}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a DietFoodItem from a stored dictionary. Ignores unknown keys.'''
        d = data if isinstance(data, dict) else {}
        quantity = d.get("quantity", 0)
        try:
            quantity = float(quantity) if quantity is not None else 0
        except (TypeError, ValueError):
            quantity = 0
        return DietFoodItem(
            name=d.get("name") or "",
            quantity=quantity,
            unit=d.get("unit") or "g",
            prices=prices_from_dict(d.get("prices")),
            id=d.get("id") or "",
        )

    def to_dict(self):
        data = {
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "prices": prices_to_dict(self.prices),
        }
        if self.id:
            data["id"] = self.id
        return data


class DayType:
    def __init__(self, id: str, name: str = "", breakfast: Optional[List[DietFoodItem]] = None,
                 lunch: Optional[List[DietFoodItem]] = None, dinner: Optional[List[DietFoodItem]] = None):
        self.id = id
        self.name = name
        self.breakfast = breakfast[:] if breakfast else []
        self.lunch = lunch[:] if lunch else []
        self.dinner = dinner[:] if dinner else []

    def all_items(self) -> List[DietFoodItem]:
        '''Items of one occurrence of this day: breakfast, then lunch, then dinner.'''
        return [*self.breakfast, *self.lunch, *self.dinner]

    def __str__(self) -> str:
        return f"DayType {self.id} ({self.name}) - {len(self.all_items())} items"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = data if isinstance(data, dict) else {}
        # The document store drops empty lists, so missing slots read as empty.
        slots = {slot: [DietFoodItem.from_dict(i) for i in (d.get(slot) or [])] for slot in MEAL_SLOTS}
        return DayType(id=str(d.get("id") or ""), name=d.get("name") or "", **slots)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "breakfast": [i.to_dict() for i in self.breakfast],
            "lunch": [i.to_dict() for i in self.lunch],
            "dinner": [i.to_dict() for i in self.dinner],
        }


def empty_week() -> Dict[str, Optional[str]]:
    return {day: None for day in WEEKDAYS}


class DietPlan:
    def __init__(self, day_types: Optional[List[DayType]] = None,
                 week: Optional[Dict[str, Optional[str]]] = None):
        self.day_types = day_types[:] if day_types else []
        self.week = empty_week()
        for day, day_type_id in (week or {}).items():
            key = str(day).strip().lower()
            if key in self.week:
                self.week[key] = day_type_id or None

    def usage_counts(self) -> Dict[str, int]:
        '''Number of weekdays referencing each day type id.'''
        counts: Dict[str, int] = {}
        for day_type_id in self.week.values():
            if day_type_id:
                counts[day_type_id] = counts.get(day_type_id, 0) + 1
        return counts

    def get_day_type(self, day_type_id: str) -> Optional[DayType]:
        return next((dt for dt in self.day_types if dt.id == day_type_id), None)

    def add_day_type(self, name: str = "") -> DayType:
        '''Appends a new empty day type with a time-based id.'''
        day_type = DayType(
            id=f"day-type-{int(time.time() * 1000)}",
            name=name.strip() if name and name.strip() else f"Giorno {len(self.day_types) + 1}",
        )
        while self.get_day_type(day_type.id) is not None:
            day_type.id += "-1"
        self.day_types.append(day_type)
        return day_type

    def remove_day_type(self, day_type_id: str) -> bool:
        '''Removes a day type and clears every weekday that referenced it.'''
        before = len(self.day_types)
        self.day_types = [dt for dt in self.day_types if dt.id != day_type_id]
        for day, assigned in self.week.items():
            if assigned == day_type_id:
                self.week[day] = None
        return len(self.day_types) != before

    def __str__(self) -> str:
        return f"DietPlan ({len(self.day_types)} day types) week={self.week}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = data if isinstance(data, dict) else {}
        raw_day_types = d.get("dayTypes") or []
        if isinstance(raw_day_types, dict):
            # Firebase returns sparse arrays as objects keyed by index
            raw_day_types = [raw_day_types[k] for k in sorted(raw_day_types, key=_index_key)]
        day_types = [DayType.from_dict(dt) for dt in raw_day_types if isinstance(dt, dict)]
        week = d.get("week") if isinstance(d.get("week"), dict) else {}
        return DietPlan(day_types=day_types, week=week)

    def to_dict(self):
        return {
            "dayTypes": [dt.to_dict() for dt in self.day_types],
            "week": dict(self.week),
        }


def _index_key(key):
    try:
        return int(key)
    except (TypeError, ValueError):
        return 0
