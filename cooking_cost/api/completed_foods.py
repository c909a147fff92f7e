"""Completed food (menu item) endpoints."""
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from cooking_cost.database import get_db
from cooking_cost.schemas.common import ApiResponse, DeleteResult, PaginatedResponse, PaginationMeta
from cooking_cost.schemas.completed_food import (
    CompletedFoodCreate,
    CompletedFoodResponse,
    CompletedFoodSearch,
    CompletedFoodUpdate,
    CompletedFoodWithDishes,
)
from cooking_cost.services import completed_food_service

router = APIRouter(prefix="/completed-foods", tags=["completed-foods"])


@router.get("", response_model=PaginatedResponse[CompletedFoodResponse])
def search_completed_foods(
    name: Optional[str] = Query(None),
    min_price: Optional[Decimal] = Query(None, alias="minPrice"),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice"),
    min_cost: Optional[Decimal] = Query(None, alias="minCost"),
    max_cost: Optional[Decimal] = Query(None, alias="maxCost"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
    offset: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    criteria = CompletedFoodSearch(
        name=name,
        min_price=min_price,
        max_price=max_price,
        min_cost=min_cost,
        max_cost=max_cost,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
        offset=offset,
    )
    result = completed_food_service.search_completed_foods(db, criteria)
    return PaginatedResponse[CompletedFoodResponse](
        data=[CompletedFoodResponse.model_validate(f) for f in result.items],
        pagination=PaginationMeta(**result.pagination),
    )


@router.post("", response_model=ApiResponse[CompletedFoodWithDishes], status_code=201)
def create_completed_food(data: CompletedFoodCreate, db: Session = Depends(get_db)):
    """Create a completed food; its cost is computed from current dish costs."""
    food = completed_food_service.create_completed_food(db, data)
    return ApiResponse[CompletedFoodWithDishes](
        data=completed_food_service.get_completed_food_with_dishes(db, food.id),
        message="Completed food created",
    )


@router.get("/{food_id}", response_model=ApiResponse[CompletedFoodWithDishes])
def get_completed_food(food_id: int, db: Session = Depends(get_db)):
    return ApiResponse[CompletedFoodWithDishes](
        data=completed_food_service.get_completed_food_with_dishes(db, food_id)
    )


@router.put("/{food_id}", response_model=ApiResponse[CompletedFoodWithDishes])
def update_completed_food(food_id: int, data: CompletedFoodUpdate, db: Session = Depends(get_db)):
    """Update a completed food. Sending dishes replaces all lines and recomputes the cost."""
    completed_food_service.update_completed_food(db, food_id, data)
    return ApiResponse[CompletedFoodWithDishes](
        data=completed_food_service.get_completed_food_with_dishes(db, food_id),
        message="Completed food updated",
    )


@router.delete("/{food_id}", response_model=ApiResponse[DeleteResult])
def delete_completed_food(food_id: int, db: Session = Depends(get_db)):
    completed_food_service.delete_completed_food(db, food_id)
    return ApiResponse[DeleteResult](data=DeleteResult(id=food_id), message="Completed food deleted")
