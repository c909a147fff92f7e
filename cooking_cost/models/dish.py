"""Dish and DishIngredient models."""
from datetime import datetime

from sqlalchemy import Column, String, Integer, Text, TIMESTAMP, ForeignKey, Numeric, Index
from sqlalchemy.orm import relationship

from . import Base


class Dish(Base):
    """A dish composed of ingredients, with a snapshotted total cost."""

    __tablename__ = "dishes"
    __table_args__ = (
        Index("idx_dishes_genre", "genre"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    genre = Column(String(50), nullable=False, default="main")
    description = Column(Text)
    total_cost = Column(Numeric(12, 2), nullable=False, default=0)  # sum of used_cost
    created_at = Column(TIMESTAMP, default=datetime.utcnow)
    updated_at = Column(TIMESTAMP, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    ingredients = relationship(
        "DishIngredient",
        back_populates="dish",
        cascade="all, delete-orphan",
        order_by="DishIngredient.id",
    )
    food_dishes = relationship("FoodDish", back_populates="dish")

    def __repr__(self):
        return f"<Dish(name='{self.name}', total_cost={self.total_cost})>"


class DishIngredient(Base):
    """Ingredient line of a dish. used_cost is fixed when the line is written."""

    __tablename__ = "dish_ingredients"
    __table_args__ = (
        Index("idx_dish_ingredients_dish", "dish_id"),
        Index("idx_dish_ingredients_ingredient", "ingredient_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    dish_id = Column(Integer, ForeignKey("dishes.id", ondelete="CASCADE"), nullable=False)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=False)
    used_quantity = Column(Numeric(10, 3), nullable=False)
    used_cost = Column(Numeric(12, 2), nullable=False)  # unit_price * used_quantity
    created_at = Column(TIMESTAMP, default=datetime.utcnow)

    # Relationships
    dish = relationship("Dish", back_populates="ingredients")
    ingredient = relationship("Ingredient", back_populates="dish_ingredients")

    def __repr__(self):
        return f"<DishIngredient(dish_id={self.dish_id}, ingredient_id={self.ingredient_id})>"
