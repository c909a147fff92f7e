"""Dish endpoints."""
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from cooking_cost.database import get_db
from cooking_cost.schemas.common import ApiResponse, DeleteResult, PaginatedResponse, PaginationMeta
from cooking_cost.schemas.dish import (
    DishCreate,
    DishResponse,
    DishSearch,
    DishUpdate,
    DishWithIngredients,
)
from cooking_cost.services import dish_service

router = APIRouter(prefix="/dishes", tags=["dishes"])


@router.get("", response_model=PaginatedResponse[DishResponse])
def search_dishes(
    name: Optional[str] = Query(None),
    genre: Optional[str] = Query(None),
    min_cost: Optional[Decimal] = Query(None, alias="minCost"),
    max_cost: Optional[Decimal] = Query(None, alias="maxCost"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
    offset: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    criteria = DishSearch(
        name=name,
        genre=genre,
        min_cost=min_cost,
        max_cost=max_cost,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
        offset=offset,
    )
    result = dish_service.search_dishes(db, criteria)
    return PaginatedResponse[DishResponse](
        data=[DishResponse.model_validate(d) for d in result.items],
        pagination=PaginationMeta(**result.pagination),
    )


@router.post("", response_model=ApiResponse[DishWithIngredients], status_code=201)
def create_dish(data: DishCreate, db: Session = Depends(get_db)):
    """Create a dish; its cost is computed from current ingredient unit prices."""
    dish = dish_service.create_dish(db, data)
    return ApiResponse[DishWithIngredients](
        data=dish_service.get_dish_with_ingredients(db, dish.id),
        message="Dish created",
    )


@router.get("/{dish_id}", response_model=ApiResponse[DishWithIngredients])
def get_dish(dish_id: int, db: Session = Depends(get_db)):
    return ApiResponse[DishWithIngredients](data=dish_service.get_dish_with_ingredients(db, dish_id))


@router.put("/{dish_id}", response_model=ApiResponse[DishWithIngredients])
def update_dish(dish_id: int, data: DishUpdate, db: Session = Depends(get_db)):
    """Update a dish. Sending ingredients replaces all lines and recomputes the cost."""
    dish_service.update_dish(db, dish_id, data)
    return ApiResponse[DishWithIngredients](
        data=dish_service.get_dish_with_ingredients(db, dish_id),
        message="Dish updated",
    )


@router.delete("/{dish_id}", response_model=ApiResponse[DeleteResult])
def delete_dish(dish_id: int, db: Session = Depends(get_db)):
    """Delete a dish unless a completed food uses it."""
    dish_service.delete_dish(db, dish_id)
    return ApiResponse[DeleteResult](data=DeleteResult(id=dish_id), message="Dish deleted")
