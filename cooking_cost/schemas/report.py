"""Pydantic schemas for read-only reports."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class IngredientGenreStats(BaseModel):
    genre: str
    ingredient_count: int
    avg_unit_price: Optional[float] = None
    min_unit_price: Optional[float] = None
    max_unit_price: Optional[float] = None
    total_purchase_cost: Optional[float] = None


class DishGenreStats(BaseModel):
    genre: str
    dish_count: int
    avg_total_cost: Optional[float] = None
    min_total_cost: Optional[float] = None
    max_total_cost: Optional[float] = None


class GenreStatistics(BaseModel):
    ingredients: list[IngredientGenreStats]
    dishes: list[DishGenreStats]


class PopularIngredient(BaseModel):
    id: int
    name: str
    store: str
    genre: str
    usage_count: int
    avg_used_quantity: Optional[float] = None
    total_used_cost: float = 0


class PopularDish(BaseModel):
    id: int
    name: str
    genre: str
    total_cost: float
    usage_count: int
    avg_usage_cost: Optional[float] = None


class ProfitableFood(BaseModel):
    id: int
    name: str
    price: float
    total_cost: float
    profit: float
    profit_rate: float


class ProfitabilityBucket(BaseModel):
    label: str
    min_rate: Optional[float] = None
    max_rate: Optional[float] = None
    count: int


class ProfitabilityDistribution(BaseModel):
    buckets: list[ProfitabilityBucket]
    total: int


class IngredientTrend(BaseModel):
    bucket: str
    avg_unit_price: float
    ingredient_count: int


class DishTrend(BaseModel):
    bucket: str
    avg_total_cost: float
    dish_count: int


class FoodTrend(BaseModel):
    bucket: str
    avg_total_cost: float
    avg_profit_rate: float
    food_count: int


class CostTrends(BaseModel):
    period: str
    days: int
    ingredients: list[IngredientTrend]
    dishes: list[DishTrend]
    foods: list[FoodTrend]


class DashboardSummary(BaseModel):
    total_ingredients: int
    total_dishes: int
    total_completed_foods: int
    avg_profit_rate: float
    total_revenue: float
    total_cost: float
    total_profit: float


class RecentActivity(BaseModel):
    type: str
    id: int
    name: str
    timestamp: Optional[datetime] = None


class Dashboard(BaseModel):
    summary: DashboardSummary
    recent_activity: list[RecentActivity]
