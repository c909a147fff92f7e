#!/usr/bin/env python3
"""Seed a database with a small sample menu.

Goes through the services so unit prices, dish costs and profit figures are
computed exactly as the API would compute them.

Usage:
    python scripts/seed_sample_data.py                 # uses DATABASE_URL / DB_*
    python scripts/seed_sample_data.py --create-tables # create tables first (dev only)
"""
import argparse
import sys
from decimal import Decimal

from cooking_cost.database import get_engine, get_session
from cooking_cost.exceptions import AppError
from cooking_cost.models import Base
from cooking_cost.schemas.completed_food import CompletedFoodCreate, FoodDishCreate
from cooking_cost.schemas.dish import DishCreate, DishIngredientCreate
from cooking_cost.schemas.ingredient import IngredientCreate
from cooking_cost.services.completed_food_service import create_completed_food
from cooking_cost.services.dish_service import create_dish
from cooking_cost.services.ingredient_service import create_ingredient

# (name, store, quantity, unit, price, genre)
INGREDIENTS = [
    ("Pork loin", "Butcher", "500", "g", "450", "meat"),
    ("Cabbage", "Greengrocer", "3000", "g", "300", "vegetable"),
    ("Rice", "Supermarket", "5000", "g", "2500", "vegetable"),
    ("Panko", "Supermarket", "200", "g", "180", "seasoning"),
    ("Tonkatsu sauce", "Supermarket", "500", "ml", "400", "sauce"),
    ("Miso", "Supermarket", "750", "g", "600", "seasoning"),
]

# dish name -> (genre, [(ingredient name, used quantity)])
DISHES = {
    "Tonkatsu": ("main", [("Pork loin", "200"), ("Panko", "20"), ("Tonkatsu sauce", "30")]),
    "Shredded cabbage": ("side", [("Cabbage", "100")]),
    "Steamed rice": ("side", [("Rice", "200")]),
    "Miso soup": ("soup", [("Miso", "15")]),
}

# food name -> (price, [(dish name, usage quantity, usage unit)])
FOODS = {
    "Tonkatsu set": ("1200", [
        ("Tonkatsu", "1", "serving"),
        ("Shredded cabbage", "1", "serving"),
        ("Steamed rice", "1", "serving"),
        ("Miso soup", "1", "serving"),
    ]),
    "Half tonkatsu lunch": ("850", [
        ("Tonkatsu", "0.5", "ratio"),
        ("Shredded cabbage", "1", "serving"),
        ("Steamed rice", "1", "serving"),
    ]),
    "Rice and soup": (None, [
        ("Steamed rice", "1", "serving"),
        ("Miso soup", "1", "serving"),
    ]),
}


def seed(db) -> None:
    ingredients = {}
    for name, store, quantity, unit, price, genre in INGREDIENTS:
        ing = create_ingredient(db, IngredientCreate(
            name=name,
            store=store,
            quantity=Decimal(quantity),
            unit=unit,
            price=Decimal(price),
            genre=genre,
        ))
        ingredients[name] = ing
        print(f"  ingredient  {ing.name:<18} unit_price={ing.unit_price}")

    dishes = {}
    for name, (genre, lines) in DISHES.items():
        dish = create_dish(db, DishCreate(
            name=name,
            genre=genre,
            ingredients=[
                DishIngredientCreate(ingredient_id=ingredients[ing].id, used_quantity=Decimal(qty))
                for ing, qty in lines
            ],
        ))
        dishes[name] = dish
        print(f"  dish        {dish.name:<18} total_cost={dish.total_cost}")

    for name, (price, lines) in FOODS.items():
        food = create_completed_food(db, CompletedFoodCreate(
            name=name,
            price=Decimal(price) if price else None,
            dishes=[
                FoodDishCreate(dish_id=dishes[dish].id, usage_quantity=Decimal(qty), usage_unit=unit)
                for dish, qty, unit in lines
            ],
        ))
        print(f"  food        {food.name:<18} total_cost={food.total_cost} "
              f"profit={food.profit} profit_rate={food.profit_rate}%")


def main():
    parser = argparse.ArgumentParser(description="Seed sample ingredients, dishes and menu items")
    parser.add_argument("--create-tables", action="store_true",
                        help="Create tables from the models before seeding (use alembic in production)")
    args = parser.parse_args()

    if args.create_tables:
        Base.metadata.create_all(get_engine())
        print("Tables created")

    db = get_session()
    try:
        print("Seeding sample data...")
        seed(db)
        print("Done")
    except AppError as e:
        print(f"Seeding failed: {e.message}", file=sys.stderr)
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
