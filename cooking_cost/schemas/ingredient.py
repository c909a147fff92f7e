"""Pydantic schemas for Ingredient."""
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from cooking_cost.constants import INGREDIENT_GENRES


def check_genre(value: str) -> str:
    if value not in INGREDIENT_GENRES:
        raise ValueError(f"genre must be one of: {', '.join(INGREDIENT_GENRES)}")
    return value


Genre = Annotated[str, AfterValidator(check_genre)]


class IngredientBase(BaseModel):
    """Base ingredient fields."""

    name: str = Field(..., min_length=1, max_length=255)
    store: str = Field(..., min_length=1, max_length=100, description="Where it was purchased")
    quantity: Decimal = Field(..., gt=0, description="Purchased amount, in `unit`")
    unit: str = Field(..., min_length=1, max_length=20, description="e.g. 'g', 'ml', 'pack'")
    price: Decimal = Field(..., gt=0, description="Purchase price for the whole quantity")
    genre: Genre = Field(..., description=f"One of: {', '.join(INGREDIENT_GENRES)}")


class IngredientCreate(IngredientBase):
    """Schema for creating an ingredient."""

    pass


class IngredientUpdate(BaseModel):
    """Schema for updating an ingredient. All fields optional."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    store: Optional[str] = Field(None, min_length=1, max_length=100)
    quantity: Optional[Decimal] = Field(None, gt=0)
    unit: Optional[str] = Field(None, min_length=1, max_length=20)
    price: Optional[Decimal] = Field(None, gt=0)
    genre: Optional[Genre] = None


class IngredientResponse(BaseModel):
    """Schema for ingredient response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    store: str
    quantity: Decimal
    unit: str
    price: Decimal
    unit_price: Decimal
    genre: str
    created_at: datetime
    updated_at: datetime


class IngredientUsage(BaseModel):
    """A dish line that uses the ingredient."""

    dish_id: int
    dish_name: str
    used_quantity: Decimal
    used_cost: Decimal
    created_at: Optional[datetime] = None


class IngredientWithUsage(IngredientResponse):
    """Ingredient with its most recent dish usages."""

    usage_history: list[IngredientUsage] = []


class IngredientSearch(BaseModel):
    """Search criteria for ingredients."""

    name: Optional[str] = None
    store: Optional[str] = None
    genre: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None
    page: Optional[int] = None
    limit: Optional[int] = None
    offset: Optional[int] = None
