"""SQLAlchemy models for the cooking cost system."""
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Import all models to register them with Base.metadata
from .ingredient import Ingredient
from .dish import Dish, DishIngredient
from .completed_food import CompletedFood, FoodDish
from .memo import Memo

__all__ = [
    "Base",
    "Ingredient",
    "Dish",
    "DishIngredient",
    "CompletedFood",
    "FoodDish",
    "Memo",
]
