"""Test fixtures and configuration."""
from decimal import Decimal

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cooking_cost.models import Base
from cooking_cost.schemas.completed_food import CompletedFoodCreate, FoodDishCreate
from cooking_cost.schemas.dish import DishCreate, DishIngredientCreate
from cooking_cost.schemas.ingredient import IngredientCreate
from cooking_cost.services.completed_food_service import create_completed_food
from cooking_cost.services.dish_service import create_dish
from cooking_cost.services.ingredient_service import create_ingredient


@pytest.fixture(scope="function")
def engine():
    """Create an in-memory SQLite engine for testing."""
    # Use check_same_thread=False for compatibility with FastAPI TestClient
    # Use StaticPool to ensure all connections use the same in-memory database
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    """Create a test database session."""
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.rollback()
    session.close()


# ---------------------------------------------------------------------------
# Factory helpers
#
# Factories go through the services so rows are committed with the same
# cost rules the application applies. A later service rollback therefore
# never discards fixture data.
# ---------------------------------------------------------------------------


@pytest.fixture
def ingredient_factory(db):
    """Factory to create committed ingredients."""
    def _create(name="Test Ingredient", store="Test Market", quantity="1000", unit="g",
                price="500", genre="vegetable"):
        return create_ingredient(
            db,
            IngredientCreate(
                name=name,
                store=store,
                quantity=Decimal(str(quantity)),
                unit=unit,
                price=Decimal(str(price)),
                genre=genre,
            ),
        )
    return _create


@pytest.fixture
def dish_factory(db):
    """Factory to create committed dishes from (ingredient, used_quantity) pairs."""
    def _create(lines, name="Test Dish", genre=None, description=None):
        return create_dish(
            db,
            DishCreate(
                name=name,
                genre=genre,
                description=description,
                ingredients=[
                    DishIngredientCreate(ingredient_id=ing.id, used_quantity=Decimal(str(qty)))
                    for ing, qty in lines
                ],
            ),
        )
    return _create


@pytest.fixture
def food_factory(db):
    """Factory to create committed completed foods from (dish, usage_quantity) pairs."""
    def _create(lines, name="Test Food", price=None, usage_unit="serving", description=None):
        return create_completed_food(
            db,
            CompletedFoodCreate(
                name=name,
                price=Decimal(str(price)) if price is not None else None,
                description=description,
                dishes=[
                    FoodDishCreate(dish_id=dish.id, usage_quantity=Decimal(str(qty)), usage_unit=usage_unit)
                    for dish, qty in lines
                ],
            ),
        )
    return _create


@pytest.fixture
def tonkatsu_set(ingredient_factory, dish_factory, food_factory):
    """Pork cutlet set: 0.9/g pork x 200 + 0.1/g cabbage x 100 = 190, sold at 850."""
    pork = ingredient_factory(name="Pork loin", store="Butcher", quantity="500", price="450", genre="meat")
    cabbage = ingredient_factory(name="Cabbage", store="Greengrocer", quantity="3000", price="300")
    dish = dish_factory([(pork, 200), (cabbage, 100)], name="Tonkatsu")
    food = food_factory([(dish, 1)], name="Tonkatsu set", price=850)
    return {"pork": pork, "cabbage": cabbage, "dish": dish, "food": food}
