from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

DEFAULT_COMPANY_NAME = "Real Estate Agency"


class PropertyType(str, Enum):
    HOUSE = "HOUSE"
    APARTMENT = "APARTMENT"
    LAND = "LAND"
    COMMERCIAL = "COMMERCIAL"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, raw) -> "PropertyType":
        """Normalizes a wire value, falling back to HOUSE for anything unknown."""
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return cls.HOUSE
        key = raw.strip().upper()
        return _TYPE_ALIASES.get(key, cls.HOUSE)


# The listing service still emits the legacy Portuguese codes for older records
_TYPE_ALIASES = {
    "HOUSE": PropertyType.HOUSE,
    "APARTMENT": PropertyType.APARTMENT,
    "LAND": PropertyType.LAND,
    "COMMERCIAL": PropertyType.COMMERCIAL,
    "CASA": PropertyType.HOUSE,
    "APARTAMENTO": PropertyType.APARTMENT,
    "TERRENO": PropertyType.LAND,
    "COMERCIAL": PropertyType.COMMERCIAL,
}


class Company(BaseModel):
    name: str


class Listing(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    title: str = ""
    city: str = ""
    state: str = ""
    address: str = ""
    description: str = ""
    details: str = ""
    value: float = 0.0
    rent_value: float = Field(default=0.0, validation_alias=AliasChoices("rent_value", "rentValue"))
    type: PropertyType = PropertyType.HOUSE
    available: bool = True
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    garage: bool = False
    built_area: Optional[float] = Field(default=None, validation_alias=AliasChoices("built_area", "builtArea"))
    photos: List[str] = Field(default_factory=list)
    company: Optional[Company] = None

    # Only the id is mandatory. Every other field degrades to its default
    # so one bad attribute never costs the whole record.

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v):
        if isinstance(v, bool):
            raise ValueError("listing id must be a string or number")
        if isinstance(v, (int, float)):
            v = str(v)
        if not isinstance(v, str) or not v.strip():
            raise ValueError("listing id is missing")
        return v

    @field_validator("title", "city", "state", "address", "description", "details", mode="before")
    @classmethod
    def _coerce_text(cls, v):
        if isinstance(v, str):
            return v
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return ""

    @field_validator("value", "rent_value", mode="before")
    @classmethod
    def _coerce_amount(cls, v):
        amount = _to_number(v)
        if amount is None or amount < 0:
            return 0.0
        return amount

    @field_validator("built_area", mode="before")
    @classmethod
    def _coerce_area(cls, v):
        area = _to_number(v)
        if area is None or area < 0:
            return None
        return area

    @field_validator("bedrooms", "bathrooms", mode="before")
    @classmethod
    def _coerce_count(cls, v):
        count = _to_number(v)
        if count is None or count < 0:
            return None
        return int(count)

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, v):
        return PropertyType.parse(v)

    @field_validator("available", mode="before")
    @classmethod
    def _coerce_available(cls, v):
        return _to_bool(v, default=True)

    @field_validator("garage", mode="before")
    @classmethod
    def _coerce_garage(cls, v):
        return _to_bool(v, default=False)

    @field_validator("photos", mode="before")
    @classmethod
    def _coerce_photos(cls, v):
        if not isinstance(v, (list, tuple)):
            return []
        return [p for p in v if isinstance(p, str) and p.strip()]

    @field_validator("company", mode="before")
    @classmethod
    def _coerce_company(cls, v):
        if isinstance(v, Company):
            return v
        if isinstance(v, dict) and isinstance(v.get("name"), str) and v["name"].strip():
            return {"name": v["name"]}
        return None

    @property
    def company_name(self) -> str:
        if self.company:
            return self.company.name
        return DEFAULT_COMPANY_NAME

    @property
    def search_fields(self) -> dict:
        return {
            "title": self.title,
            "city": self.city,
            "address": self.address,
            "description": self.description,
        }


def _to_number(v) -> Optional[float]:
    if v is None or isinstance(v, bool):
        return None
    try:
        number = float(v)
    except (TypeError, ValueError):
        return None
    if number != number or number in (float("inf"), float("-inf")):
        return None
    return number


def _to_bool(v, default: bool) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        lowered = v.strip().lower()
        if lowered in ("true", "1", "yes"):
            return True
        if lowered in ("false", "0", "no"):
            return False
    if isinstance(v, int):
        return v != 0
    return default


class BaseListingSource(ABC):
    @abstractmethod
    async def fetch(self, term: str, credential: Optional[str] = None) -> List[Listing]:
        pass
