"""Pydantic schemas for Dish and DishIngredient."""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DishIngredientCreate(BaseModel):
    """One ingredient line of a dish."""

    ingredient_id: int
    used_quantity: Decimal = Field(..., gt=0, description="Amount used, in the ingredient's unit")


class DishIngredientResponse(BaseModel):
    """Ingredient line with ingredient details."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    ingredient_id: int
    used_quantity: Decimal
    used_cost: Decimal
    ingredient_name: Optional[str] = None
    ingredient_unit: Optional[str] = None
    ingredient_genre: Optional[str] = None


class DishCreate(BaseModel):
    """Schema for creating a dish with its ingredients."""

    name: str = Field(..., min_length=1, max_length=255)
    genre: Optional[str] = Field(None, max_length=50, description="Defaults to 'main'")
    description: Optional[str] = None
    ingredients: list[DishIngredientCreate] = Field(..., min_length=1)


class DishUpdate(BaseModel):
    """Schema for updating a dish. All fields optional.

    A non-empty `ingredients` list replaces every line and recomputes the
    total cost; omitting it (or sending []) keeps the current lines.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    genre: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = None
    ingredients: Optional[list[DishIngredientCreate]] = None


class DishResponse(BaseModel):
    """Dish without its lines."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    genre: str
    description: Optional[str] = None
    total_cost: Decimal
    created_at: datetime
    updated_at: datetime


class DishWithIngredients(DishResponse):
    """Dish with resolved ingredient lines."""

    ingredients: list[DishIngredientResponse] = []


class DishSearch(BaseModel):
    """Search criteria for dishes."""

    name: Optional[str] = None
    genre: Optional[str] = None
    min_cost: Optional[Decimal] = None
    max_cost: Optional[Decimal] = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None
    page: Optional[int] = None
    limit: Optional[int] = None
    offset: Optional[int] = None
