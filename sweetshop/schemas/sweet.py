"""Request, response and search shapes for the sweets catalog."""

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator

from sweetshop.models.sweet import DEFAULT_IMAGE_URL, DEFAULT_WEIGHT, MAX_QUANTITY

WEIGHT_PATTERN = re.compile(r'^\d+(\.\d+)?\s*(g|kg|mg|oz|lb)$', re.IGNORECASE)


class SweetCategory(str, Enum):
    MILK_BASED = 'Milk-based'
    SYRUP_BASED = 'Syrup-based'
    DRY_FRUITS = 'Dry Fruits'
    SEASONAL = 'Seasonal'
    SPECIAL = 'Special'


def _validate_name(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip()
    if not 2 <= len(normalized) <= 100:
        raise ValueError('Sweet name must be between 2 and 100 characters')
    return normalized


def _validate_description(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip()
    if not 10 <= len(normalized) <= 500:
        raise ValueError('Description must be between 10 and 500 characters')
    return normalized


def _validate_image(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip()
    parsed = urlparse(normalized)
    if parsed.scheme not in {'http', 'https'} or not parsed.netloc:
        raise ValueError('Image must be a valid URL')
    return normalized


def _validate_ingredients(value: list[str] | None) -> list[str] | None:
    if value is None:
        return None
    normalized = [ingredient.strip() for ingredient in value]
    if any(not ingredient for ingredient in normalized):
        raise ValueError('Ingredient cannot be empty')
    return normalized


def _validate_weight(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip()
    if not WEIGHT_PATTERN.match(normalized):
        raise ValueError('Weight must be in format like: 250g, 1kg, 500mg')
    return normalized


class SweetCreate(BaseModel):
    """A fully defaulted sweet record, ready to be persisted."""

    name: str
    category: SweetCategory
    price: float = Field(gt=0)
    quantity: int = Field(ge=0, le=MAX_QUANTITY)
    description: str
    image: str = DEFAULT_IMAGE_URL
    ingredients: list[str] = Field(default_factory=list)
    weight: str = DEFAULT_WEIGHT

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        return _validate_name(value)

    @field_validator('description')
    @classmethod
    def validate_description(cls, value: str) -> str:
        return _validate_description(value)

    @field_validator('image')
    @classmethod
    def validate_image(cls, value: str) -> str:
        return _validate_image(value)

    @field_validator('ingredients')
    @classmethod
    def validate_ingredients(cls, value: list[str]) -> list[str]:
        return _validate_ingredients(value)

    @field_validator('weight')
    @classmethod
    def validate_weight(cls, value: str) -> str:
        return _validate_weight(value)

    def to_record(self) -> dict:
        record = self.model_dump()
        record['category'] = self.category.value
        return record


class SweetUpdate(BaseModel):
    name: str | None = None
    category: SweetCategory | None = None
    price: float | None = Field(default=None, gt=0)
    quantity: int | None = Field(default=None, ge=0, le=MAX_QUANTITY)
    description: str | None = None
    image: str | None = None
    ingredients: list[str] | None = None
    weight: str | None = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str | None) -> str | None:
        return _validate_name(value)

    @field_validator('description')
    @classmethod
    def validate_description(cls, value: str | None) -> str | None:
        return _validate_description(value)

    @field_validator('image')
    @classmethod
    def validate_image(cls, value: str | None) -> str | None:
        return _validate_image(value)

    @field_validator('ingredients')
    @classmethod
    def validate_ingredients(cls, value: list[str] | None) -> list[str] | None:
        return _validate_ingredients(value)

    @field_validator('weight')
    @classmethod
    def validate_weight(cls, value: str | None) -> str | None:
        return _validate_weight(value)

    def to_changes(self) -> dict:
        # Explicit nulls are treated the same as omitted fields.
        changes = self.model_dump(exclude_unset=True, exclude_none=True)
        if 'category' in changes:
            changes['category'] = self.category.value
        return changes


class QuantityRequest(BaseModel):
    quantity: int | None = None


@dataclass(frozen=True)
class SweetSearchCriteria:
    name: str | None = None
    category: SweetCategory | None = None
    min_price: float | None = None
    max_price: float | None = None


class SweetResponse(BaseModel):
    id: int
    name: str
    category: str
    price: float
    quantity: int
    description: str
    image: str
    ingredients: list[str]
    weight: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class SweetListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[SweetResponse]


class SweetDetailResponse(BaseModel):
    success: bool = True
    message: str | None = None
    data: SweetResponse


class MessageResponse(BaseModel):
    success: bool = True
    message: str
