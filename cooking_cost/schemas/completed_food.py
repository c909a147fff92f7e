"""Pydantic schemas for CompletedFood and FoodDish."""
from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

UsageUnit = Literal["ratio", "serving"]


class FoodDishCreate(BaseModel):
    """One dish line of a completed food."""

    dish_id: int
    usage_quantity: Decimal = Field(..., gt=0)
    usage_unit: UsageUnit = Field("serving", description="'ratio' or 'serving'")
    description: Optional[str] = None


class FoodDishResponse(BaseModel):
    """Dish line with dish details."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    dish_id: int
    usage_quantity: Decimal
    usage_unit: str
    usage_cost: Decimal
    description: Optional[str] = None
    dish_name: Optional[str] = None
    dish_genre: Optional[str] = None
    dish_total_cost: Optional[Decimal] = None


class CompletedFoodCreate(BaseModel):
    """Schema for creating a completed food with its dishes."""

    name: str = Field(..., min_length=1, max_length=255)
    price: Optional[Decimal] = Field(None, ge=0, description="Selling price")
    description: Optional[str] = None
    dishes: list[FoodDishCreate] = Field(..., min_length=1)


class CompletedFoodUpdate(BaseModel):
    """Schema for updating a completed food. All fields optional.

    A non-empty `dishes` list replaces every line and recomputes the total
    cost; otherwise the cost is left untouched.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    price: Optional[Decimal] = Field(None, ge=0)
    description: Optional[str] = None
    dishes: Optional[list[FoodDishCreate]] = None


class CompletedFoodResponse(BaseModel):
    """Completed food with derived profit figures."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: Optional[Decimal] = None
    total_cost: Decimal
    profit: Decimal
    profit_rate: Decimal
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class CompletedFoodWithDishes(CompletedFoodResponse):
    """Completed food with resolved dish lines."""

    dishes: list[FoodDishResponse] = []


class CompletedFoodSearch(BaseModel):
    """Search criteria for completed foods."""

    name: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    min_cost: Optional[Decimal] = None
    max_cost: Optional[Decimal] = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None
    page: Optional[int] = None
    limit: Optional[int] = None
    offset: Optional[int] = None
