"""Ingredient store: purchase records and their unit prices."""
import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from cooking_cost.constants import INGREDIENT_GENRES, INGREDIENT_SORT_FIELDS
from cooking_cost.database import transaction
from cooking_cost.exceptions import ConflictError, ValidationError
from cooking_cost.models.dish import Dish, DishIngredient
from cooking_cost.models.ingredient import Ingredient
from cooking_cost.schemas.ingredient import (
    IngredientCreate,
    IngredientSearch,
    IngredientUpdate,
    IngredientUsage,
)
from cooking_cost.services.cost_calculator import calculate_unit_price
from cooking_cost.services.repository import Page, Repository, at_least, at_most, contains, equals

logger = logging.getLogger(__name__)

ingredients = Repository(Ingredient, INGREDIENT_SORT_FIELDS, label="Ingredient")


def _validate_fields(quantity=None, price=None, genre=None) -> None:
    """Reject non-positive quantity/price and unknown genres."""
    errors = []
    if quantity is not None and Decimal(str(quantity)) <= 0:
        errors.append({"field": "quantity", "message": "Must be greater than 0"})
    if price is not None and Decimal(str(price)) <= 0:
        errors.append({"field": "price", "message": "Must be greater than 0"})
    if genre is not None and genre not in INGREDIENT_GENRES:
        errors.append({"field": "genre", "message": f"Must be one of: {', '.join(INGREDIENT_GENRES)}"})
    if errors:
        raise ValidationError("Invalid ingredient data", details=errors)


def create_ingredient(db: Session, data: IngredientCreate) -> Ingredient:
    """Register a purchased ingredient and derive its unit price."""
    _validate_fields(data.quantity, data.price, data.genre)

    unit_price = calculate_unit_price(data.price, data.quantity)
    with transaction(db):
        ingredient = Ingredient(
            name=data.name,
            store=data.store,
            quantity=data.quantity,
            unit=data.unit,
            price=data.price,
            unit_price=unit_price if unit_price is not None else Decimal("0"),
            genre=data.genre,
        )
        db.add(ingredient)

    logger.info(f"Created ingredient {ingredient.id} '{ingredient.name}' ({ingredient.store}, {ingredient.genre})")
    return ingredient


def update_ingredient(db: Session, ingredient_id: int, data: IngredientUpdate) -> Ingredient:
    """
    Partially update an ingredient.

    unit_price is recomputed from the merged quantity and price whenever either
    one is supplied. Dishes that already use this ingredient keep their
    snapshotted costs.
    """
    update_data = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
    _validate_fields(update_data.get("quantity"), update_data.get("price"), update_data.get("genre"))

    with transaction(db):
        ingredient = ingredients.get_or_404(db, ingredient_id)
        for field, value in update_data.items():
            setattr(ingredient, field, value)

        if "quantity" in update_data or "price" in update_data:
            unit_price = calculate_unit_price(ingredient.price, ingredient.quantity)
            if unit_price is not None:
                ingredient.unit_price = unit_price

    logger.info(f"Updated ingredient {ingredient_id} (fields: {', '.join(update_data) or 'none'})")
    return ingredient


def delete_ingredient(db: Session, ingredient_id: int) -> None:
    """Delete an ingredient that no dish uses."""
    with transaction(db):
        ingredient = ingredients.get_or_404(db, ingredient_id)
        usage_count = (
            db.query(DishIngredient)
            .filter(DishIngredient.ingredient_id == ingredient_id)
            .count()
        )
        if usage_count:
            raise ConflictError(
                f"Ingredient '{ingredient.name}' is used by {usage_count} dish line(s) and cannot be deleted"
            )
        db.delete(ingredient)

    logger.info(f"Deleted ingredient {ingredient_id}")


def get_ingredient(db: Session, ingredient_id: int) -> Ingredient:
    return ingredients.get_or_404(db, ingredient_id)


def get_usage_history(db: Session, ingredient_id: int, limit: int = 10) -> list[IngredientUsage]:
    """Most recent dish lines that use the ingredient."""
    rows = (
        db.query(
            DishIngredient.dish_id,
            Dish.name.label("dish_name"),
            DishIngredient.used_quantity,
            DishIngredient.used_cost,
            DishIngredient.created_at,
        )
        .join(Dish, DishIngredient.dish_id == Dish.id)
        .filter(DishIngredient.ingredient_id == ingredient_id)
        .order_by(DishIngredient.created_at.desc(), DishIngredient.id.desc())
        .limit(limit)
        .all()
    )
    return [
        IngredientUsage(
            dish_id=row.dish_id,
            dish_name=row.dish_name,
            used_quantity=row.used_quantity,
            used_cost=row.used_cost,
            created_at=row.created_at,
        )
        for row in rows
    ]


def search_ingredients(db: Session, criteria: IngredientSearch) -> Page[Ingredient]:
    filters = [
        contains(Ingredient.name, criteria.name),
        contains(Ingredient.store, criteria.store),
        equals(Ingredient.genre, criteria.genre),
        at_least(Ingredient.price, criteria.min_price),
        at_most(Ingredient.price, criteria.max_price),
    ]
    page = ingredients.search(
        db,
        filters,
        sort_by=criteria.sort_by,
        sort_order=criteria.sort_order,
        page=criteria.page,
        limit=criteria.limit,
        offset=criteria.offset,
    )
    logger.debug(f"Ingredient search returned {len(page.items)} of {page.total}")
    return page
