"""Completed food aggregation: dish lines, snapshotted costs and profit."""
import logging
from decimal import Decimal

from sqlalchemy.orm import Session, joinedload

from cooking_cost.constants import COMPLETED_FOOD_SORT_FIELDS
from cooking_cost.database import transaction
from cooking_cost.exceptions import NotFoundError
from cooking_cost.models.completed_food import CompletedFood, FoodDish
from cooking_cost.models.dish import Dish
from cooking_cost.schemas.completed_food import (
    CompletedFoodCreate,
    CompletedFoodResponse,
    CompletedFoodSearch,
    CompletedFoodUpdate,
    CompletedFoodWithDishes,
    FoodDishCreate,
    FoodDishResponse,
)
from cooking_cost.services.cost_calculator import calculate_usage_cost, sum_costs
from cooking_cost.services.repository import Page, Repository, at_least, at_most, contains

logger = logging.getLogger(__name__)

completed_foods = Repository(CompletedFood, COMPLETED_FOOD_SORT_FIELDS, label="Completed food")


def _attach_dishes(db: Session, food: CompletedFood, lines: list[FoodDishCreate]) -> Decimal:
    """
    Write one FoodDish per line and return the food total.

    usage_cost is the dish's current total_cost times usage_quantity for
    both usage units. A missing dish aborts the caller's transaction.
    """
    costs = []
    for line in lines:
        dish = db.get(Dish, line.dish_id)
        if dish is None:
            raise NotFoundError(f"Dish with ID {line.dish_id} not found")

        usage_cost = calculate_usage_cost(dish.total_cost, line.usage_quantity, line.usage_unit)
        food.dishes.append(
            FoodDish(
                dish_id=dish.id,
                usage_quantity=line.usage_quantity,
                usage_unit=line.usage_unit,
                usage_cost=usage_cost,
                description=line.description,
            )
        )
        costs.append(usage_cost)
    return sum_costs(costs)


def create_completed_food(db: Session, data: CompletedFoodCreate) -> CompletedFood:
    """Create a completed food and its dish lines in one transaction."""
    with transaction(db):
        food = CompletedFood(
            name=data.name,
            price=data.price,
            description=data.description,
            total_cost=Decimal("0"),
        )
        db.add(food)
        db.flush()

        food.total_cost = _attach_dishes(db, food, data.dishes)

    logger.info(
        f"Created completed food {food.id} '{food.name}' with {len(data.dishes)} dish(es), "
        f"total_cost={food.total_cost}, profit={food.profit}"
    )
    return food


def update_completed_food(db: Session, food_id: int, data: CompletedFoodUpdate) -> CompletedFood:
    """Update supplied fields; a non-empty dish list replaces all lines."""
    update_data = data.model_dump(exclude_unset=True, exclude={"dishes"})

    with transaction(db):
        food = completed_foods.get_or_404(db, food_id)
        for field, value in update_data.items():
            if value is None and field == "name":
                continue
            setattr(food, field, value)

        if data.dishes:
            food.dishes.clear()
            db.flush()
            food.total_cost = _attach_dishes(db, food, data.dishes)

    logger.info(f"Updated completed food {food_id} (dishes replaced: {bool(data.dishes)})")
    return food


def delete_completed_food(db: Session, food_id: int) -> None:
    """Delete a completed food together with its dish lines."""
    with transaction(db):
        food = completed_foods.get_or_404(db, food_id)
        db.delete(food)

    logger.info(f"Deleted completed food {food_id}")


def get_completed_food_with_dishes(db: Session, food_id: int) -> CompletedFoodWithDishes:
    """Completed food with its lines joined to dish name, genre and current cost."""
    food = (
        db.query(CompletedFood)
        .options(joinedload(CompletedFood.dishes).joinedload(FoodDish.dish))
        .filter(CompletedFood.id == food_id)
        .first()
    )
    if not food:
        raise NotFoundError(f"Completed food with ID {food_id} not found")

    lines = []
    for fd in food.dishes:
        lines.append(
            FoodDishResponse(
                id=fd.id,
                dish_id=fd.dish_id,
                usage_quantity=fd.usage_quantity,
                usage_unit=fd.usage_unit,
                usage_cost=fd.usage_cost,
                description=fd.description,
                dish_name=fd.dish.name if fd.dish else None,
                dish_genre=fd.dish.genre if fd.dish else None,
                dish_total_cost=fd.dish.total_cost if fd.dish else None,
            )
        )

    return CompletedFoodWithDishes(
        **CompletedFoodResponse.model_validate(food).model_dump(),
        dishes=lines,
    )


def search_completed_foods(db: Session, criteria: CompletedFoodSearch) -> Page[CompletedFood]:
    filters = [
        contains(CompletedFood.name, criteria.name),
        at_least(CompletedFood.price, criteria.min_price),
        at_most(CompletedFood.price, criteria.max_price),
        at_least(CompletedFood.total_cost, criteria.min_cost),
        at_most(CompletedFood.total_cost, criteria.max_cost),
    ]
    return completed_foods.search(
        db,
        filters,
        sort_by=criteria.sort_by,
        sort_order=criteria.sort_order,
        page=criteria.page,
        limit=criteria.limit,
        offset=criteria.offset,
    )
