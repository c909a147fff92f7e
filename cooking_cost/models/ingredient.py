"""Ingredient model."""
from datetime import datetime

from sqlalchemy import Column, String, Integer, TIMESTAMP, Numeric, UniqueConstraint, Index
from sqlalchemy.orm import relationship

from . import Base


class Ingredient(Base):
    """Purchased ingredient with its derived unit price."""

    __tablename__ = "ingredients"
    __table_args__ = (
        UniqueConstraint("name", "store", "unit", name="uk_ingredient"),
        Index("idx_ingredients_genre", "genre"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    store = Column(String(100), nullable=False)
    quantity = Column(Numeric(10, 3), nullable=False)
    unit = Column(String(20), nullable=False)  # 'g', 'ml', 'pack', ...
    price = Column(Numeric(12, 2), nullable=False)
    unit_price = Column(Numeric(12, 4), nullable=False, default=0)  # price / quantity
    genre = Column(String(20), nullable=False)  # see constants.INGREDIENT_GENRES
    created_at = Column(TIMESTAMP, default=datetime.utcnow)
    updated_at = Column(TIMESTAMP, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    dish_ingredients = relationship("DishIngredient", back_populates="ingredient")

    def __repr__(self):
        return f"<Ingredient(name='{self.name}', store='{self.store}')>"
