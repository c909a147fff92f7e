"""Dish aggregation: ingredient lines, snapshotted costs and referential rules."""
import logging
from decimal import Decimal

from sqlalchemy.orm import Session, joinedload

from cooking_cost.constants import DEFAULT_DISH_GENRE, DISH_SORT_FIELDS
from cooking_cost.database import transaction
from cooking_cost.exceptions import ConflictError, NotFoundError
from cooking_cost.models.completed_food import FoodDish
from cooking_cost.models.dish import Dish, DishIngredient
from cooking_cost.models.ingredient import Ingredient
from cooking_cost.schemas.dish import (
    DishCreate,
    DishIngredientCreate,
    DishIngredientResponse,
    DishResponse,
    DishSearch,
    DishUpdate,
    DishWithIngredients,
)
from cooking_cost.services.cost_calculator import calculate_used_cost, sum_costs
from cooking_cost.services.repository import Page, Repository, at_least, at_most, contains, equals

logger = logging.getLogger(__name__)

dishes = Repository(Dish, DISH_SORT_FIELDS, label="Dish")

# Columns that may not be set to NULL through a partial update
_REQUIRED_FIELDS = {"name", "genre"}


def _attach_ingredients(db: Session, dish: Dish, lines: list[DishIngredientCreate]) -> Decimal:
    """
    Write one DishIngredient per line and return the dish total.

    Each line's used_cost is the ingredient's current unit_price times the
    used quantity. A missing ingredient aborts the caller's transaction.
    """
    costs = []
    for line in lines:
        ingredient = db.get(Ingredient, line.ingredient_id)
        if ingredient is None:
            raise NotFoundError(f"Ingredient with ID {line.ingredient_id} not found")

        used_cost = calculate_used_cost(ingredient.unit_price, line.used_quantity)
        dish.ingredients.append(
            DishIngredient(
                ingredient_id=ingredient.id,
                used_quantity=line.used_quantity,
                used_cost=used_cost,
            )
        )
        costs.append(used_cost)
    return sum_costs(costs)


def create_dish(db: Session, data: DishCreate) -> Dish:
    """Create a dish and its ingredient lines in one transaction."""
    with transaction(db):
        dish = Dish(
            name=data.name,
            genre=data.genre or DEFAULT_DISH_GENRE,
            description=data.description,
            total_cost=Decimal("0"),
        )
        db.add(dish)
        db.flush()

        dish.total_cost = _attach_ingredients(db, dish, data.ingredients)

    logger.info(
        f"Created dish {dish.id} '{dish.name}' with {len(data.ingredients)} ingredient(s), "
        f"total_cost={dish.total_cost}"
    )
    return dish


def update_dish(db: Session, dish_id: int, data: DishUpdate) -> Dish:
    """
    Update supplied fields; a non-empty ingredient list replaces all lines.

    Without new lines the existing lines and total_cost stay as they are.
    """
    update_data = data.model_dump(exclude_unset=True, exclude={"ingredients"})

    with transaction(db):
        dish = dishes.get_or_404(db, dish_id)
        for field, value in update_data.items():
            if value is None and field in _REQUIRED_FIELDS:
                continue
            setattr(dish, field, value)

        if data.ingredients:
            dish.ingredients.clear()
            db.flush()
            dish.total_cost = _attach_ingredients(db, dish, data.ingredients)

    logger.info(f"Updated dish {dish_id} (ingredients replaced: {bool(data.ingredients)})")
    return dish


def delete_dish(db: Session, dish_id: int) -> None:
    """Delete a dish and its lines, unless a completed food uses it."""
    with transaction(db):
        dish = dishes.get_or_404(db, dish_id)
        usage_count = db.query(FoodDish).filter(FoodDish.dish_id == dish_id).count()
        if usage_count:
            raise ConflictError(
                f"Dish '{dish.name}' is used by {usage_count} completed food line(s) and cannot be deleted"
            )
        db.delete(dish)

    logger.info(f"Deleted dish {dish_id}")


def get_dish_with_ingredients(db: Session, dish_id: int) -> DishWithIngredients:
    """Dish with its lines joined to ingredient name, unit and genre."""
    dish = (
        db.query(Dish)
        .options(joinedload(Dish.ingredients).joinedload(DishIngredient.ingredient))
        .filter(Dish.id == dish_id)
        .first()
    )
    if not dish:
        raise NotFoundError(f"Dish with ID {dish_id} not found")

    lines = []
    for di in dish.ingredients:
        lines.append(
            DishIngredientResponse(
                id=di.id,
                ingredient_id=di.ingredient_id,
                used_quantity=di.used_quantity,
                used_cost=di.used_cost,
                ingredient_name=di.ingredient.name if di.ingredient else None,
                ingredient_unit=di.ingredient.unit if di.ingredient else None,
                ingredient_genre=di.ingredient.genre if di.ingredient else None,
            )
        )

    return DishWithIngredients(
        **DishResponse.model_validate(dish).model_dump(),
        ingredients=lines,
    )


def search_dishes(db: Session, criteria: DishSearch) -> Page[Dish]:
    filters = [
        contains(Dish.name, criteria.name),
        equals(Dish.genre, criteria.genre),
        at_least(Dish.total_cost, criteria.min_cost),
        at_most(Dish.total_cost, criteria.max_cost),
    ]
    return dishes.search(
        db,
        filters,
        sort_by=criteria.sort_by,
        sort_order=criteria.sort_order,
        page=criteria.page,
        limit=criteria.limit,
        offset=criteria.offset,
    )
