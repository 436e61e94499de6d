"""
Input validation schemas using Pydantic for better data integrity.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Dict, List, Optional

from shopsmart.domain.DietPlan import DietPlan
from shopsmart.domain.Freshness import Freshness
from shopsmart.utilities.constants import STORE_ORDER, WEEKDAYS


def _check_store_prices(v):
    """Reject unknown stores and negative prices; keys are lower-cased."""
    if v is None:
        return v
    cleaned = {}
    for store, price in v.items():
        key = store.strip().lower()
        if key not in STORE_ORDER:
            raise ValueError(f"Unknown store '{store}' (expected one of {', '.join(STORE_ORDER)})")
        if price is not None and price < 0:
            raise ValueError(f"Price for {key} cannot be negative")
        cleaned[key] = price
    return cleaned


class DietFoodItemInput(BaseModel):
    """Schema for a food item inside a day type."""
    id: Optional[str] = None
    name: str = Field("", max_length=100)
    quantity: float = Field(0, ge=0, le=1000000)
    unit: str = Field("g", min_length=1, max_length=20)
    prices: Dict[str, Optional[float]] = Field(default_factory=dict)

    @field_validator('name', 'unit')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('prices')
    @classmethod
    def validate_prices(cls, v):
        return {k: p for k, p in _check_store_prices(v).items() if p is not None}


class DayTypeInput(BaseModel):
    """Schema for a reusable day template."""
    id: str = Field(..., min_length=1, max_length=100)
    name: str = Field("", max_length=100)
    breakfast: List[DietFoodItemInput] = Field(default_factory=list)
    lunch: List[DietFoodItemInput] = Field(default_factory=list)
    dinner: List[DietFoodItemInput] = Field(default_factory=list)


class DietPlanInput(BaseModel):
    """Schema for saving a profile's full diet plan."""
    model_config = ConfigDict(populate_by_name=True)

    day_types: List[DayTypeInput] = Field(default_factory=list, alias="dayTypes")
    week: Dict[str, Optional[str]] = Field(default_factory=dict)

    @field_validator('week')
    @classmethod
    def validate_week(cls, v):
        """Weekday keys only; empty values mean no day type."""
        week = {}
        for day, day_type_id in v.items():
            key = day.strip().lower()
            if key not in WEEKDAYS:
                raise ValueError(f"Unknown weekday '{day}'")
            week[key] = day_type_id or None
        return week

    @model_validator(mode='after')
    def validate_references(self):
        ids = [dt.id for dt in self.day_types]
        if len(ids) != len(set(ids)):
            raise ValueError('Day type ids must be unique within a profile')
        unknown = {d: ref for d, ref in self.week.items() if ref and ref not in ids}
        if unknown:
            raise ValueError(f"Week references unknown day types: {unknown}")
        return self

    def to_domain(self) -> DietPlan:
        return DietPlan.from_dict(self.model_dump(by_alias=True))


class DayTypeCreateInput(BaseModel):
    name: str = Field("", max_length=100)


class ShoppingItemUpdate(BaseModel):
    """User-owned fields of a shopping item; omitted fields are left unchanged.

    A price set to null removes that store's price.
    """
    model_config = ConfigDict(populate_by_name=True)

    prices: Optional[Dict[str, Optional[float]]] = None
    freshness: Optional[Freshness] = None
    is_highlighted: Optional[bool] = Field(None, alias="isHighlighted")

    @field_validator('freshness', mode='before')
    @classmethod
    def parse_freshness(cls, v):
        """Accept the legacy colour names as well."""
        if v is None:
            return v
        parsed = Freshness.lookup(v)
        if parsed is None:
            raise ValueError(f"Unknown freshness '{v}'")
        return parsed

    @field_validator('prices')
    @classmethod
    def validate_prices(cls, v):
        return _check_store_prices(v)


class SuggestionRequest(BaseModel):
    """Schema for an ad-hoc AI savings request."""
    model_config = ConfigDict(populate_by_name=True)

    item: str = Field(..., min_length=1, max_length=100)
    quantity: float = Field(..., gt=0)
    unit: str = Field(..., min_length=1, max_length=20)
    famila_price: Optional[float] = Field(None, alias="familaPrice", ge=0)
    lidl_price: Optional[float] = Field(None, alias="lidlPrice", ge=0)
    primoprezzo_price: Optional[float] = Field(None, alias="primoprezzoPrice", ge=0)

    def prices(self) -> Dict[str, float]:
        values = {
            "famila": self.famila_price,
            "lidl": self.lidl_price,
            "primoprezzo": self.primoprezzo_price,
        }
        return {k: v for k, v in values.items() if v is not None}


class SuggestedAlternative(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    store: str
    alternative_item: str = Field(..., alias="alternativeItem")
    price: float
    price_per_unit: float = Field(..., alias="pricePerUnit")
    reason: str = ""


class SuggestSavingsOutput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    suggested_alternatives: List[SuggestedAlternative] = Field(default_factory=list, alias="suggestedAlternatives")
