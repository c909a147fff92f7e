"""CompletedFood and FoodDish models."""
from datetime import datetime

from sqlalchemy import Column, String, Integer, Text, TIMESTAMP, ForeignKey, Numeric, Index
from sqlalchemy.orm import relationship

from cooking_cost.services.cost_calculator import calculate_profit, calculate_profit_rate

from . import Base


class CompletedFood(Base):
    """A sellable menu item composed of dishes."""

    __tablename__ = "completed_foods"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(12, 2))  # Nullable until the item is priced
    total_cost = Column(Numeric(12, 2), nullable=False, default=0)  # sum of usage_cost
    description = Column(Text)
    created_at = Column(TIMESTAMP, default=datetime.utcnow)
    updated_at = Column(TIMESTAMP, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    dishes = relationship(
        "FoodDish",
        back_populates="food",
        cascade="all, delete-orphan",
        order_by="FoodDish.id",
    )

    @property
    def profit(self):
        return calculate_profit(self.price, self.total_cost)

    @property
    def profit_rate(self):
        return calculate_profit_rate(self.price, self.total_cost)

    def __repr__(self):
        return f"<CompletedFood(name='{self.name}', price={self.price})>"


class FoodDish(Base):
    """Dish line of a completed food. usage_cost is fixed when the line is written."""

    __tablename__ = "food_dishes"
    __table_args__ = (
        Index("idx_food_dishes_food", "food_id"),
        Index("idx_food_dishes_dish", "dish_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    food_id = Column(Integer, ForeignKey("completed_foods.id", ondelete="CASCADE"), nullable=False)
    dish_id = Column(Integer, ForeignKey("dishes.id"), nullable=False)
    usage_quantity = Column(Numeric(10, 3), nullable=False)
    usage_unit = Column(String(10), nullable=False, default="serving")  # 'ratio' or 'serving'
    usage_cost = Column(Numeric(12, 2), nullable=False)  # dish.total_cost * usage_quantity
    description = Column(Text)
    created_at = Column(TIMESTAMP, default=datetime.utcnow)

    # Relationships
    food = relationship("CompletedFood", back_populates="dishes")
    dish = relationship("Dish", back_populates="food_dishes")

    def __repr__(self):
        return f"<FoodDish(food_id={self.food_id}, dish_id={self.dish_id}, usage_unit='{self.usage_unit}')>"
