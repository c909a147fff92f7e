"""Ingredient CRUD and search endpoints."""
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from cooking_cost.constants import INGREDIENT_GENRES
from cooking_cost.database import get_db
from cooking_cost.schemas.common import ApiResponse, DeleteResult, PaginatedResponse, PaginationMeta
from cooking_cost.schemas.ingredient import (
    IngredientCreate,
    IngredientResponse,
    IngredientSearch,
    IngredientUpdate,
    IngredientWithUsage,
)
from cooking_cost.services import ingredient_service

router = APIRouter(prefix="/ingredients", tags=["ingredients"])


@router.get("", response_model=PaginatedResponse[IngredientResponse])
def search_ingredients(
    name: Optional[str] = Query(None, description="Substring of the name"),
    store: Optional[str] = Query(None, description="Substring of the store"),
    genre: Optional[str] = Query(None, description="Exact genre"),
    min_price: Optional[Decimal] = Query(None, alias="minPrice"),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
    offset: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    """Search ingredients with filters, sorting and pagination."""
    criteria = IngredientSearch(
        name=name,
        store=store,
        genre=genre or None,
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
        offset=offset,
    )
    result = ingredient_service.search_ingredients(db, criteria)
    return PaginatedResponse[IngredientResponse](
        data=[IngredientResponse.model_validate(i) for i in result.items],
        pagination=PaginationMeta(**result.pagination),
    )


@router.get("/genres", response_model=ApiResponse[list[str]])
def list_genres():
    """List accepted ingredient genres."""
    return ApiResponse[list[str]](data=INGREDIENT_GENRES)


@router.post("", response_model=ApiResponse[IngredientResponse], status_code=201)
def create_ingredient(data: IngredientCreate, db: Session = Depends(get_db)):
    """Register a purchased ingredient."""
    ingredient = ingredient_service.create_ingredient(db, data)
    return ApiResponse[IngredientResponse](
        data=IngredientResponse.model_validate(ingredient),
        message="Ingredient created",
    )


@router.get("/{ingredient_id}", response_model=ApiResponse[IngredientWithUsage])
def get_ingredient(ingredient_id: int, db: Session = Depends(get_db)):
    """Get an ingredient with the dishes that recently used it."""
    ingredient = ingredient_service.get_ingredient(db, ingredient_id)
    usage = ingredient_service.get_usage_history(db, ingredient_id)
    return ApiResponse[IngredientWithUsage](
        data=IngredientWithUsage(
            **IngredientResponse.model_validate(ingredient).model_dump(),
            usage_history=usage,
        )
    )


@router.put("/{ingredient_id}", response_model=ApiResponse[IngredientResponse])
def update_ingredient(ingredient_id: int, data: IngredientUpdate, db: Session = Depends(get_db)):
    """Partially update an ingredient; unit price follows quantity and price."""
    ingredient = ingredient_service.update_ingredient(db, ingredient_id, data)
    return ApiResponse[IngredientResponse](
        data=IngredientResponse.model_validate(ingredient),
        message="Ingredient updated",
    )


@router.delete("/{ingredient_id}", response_model=ApiResponse[DeleteResult])
def delete_ingredient(ingredient_id: int, db: Session = Depends(get_db)):
    """Delete an ingredient that no dish uses."""
    ingredient_service.delete_ingredient(db, ingredient_id)
    return ApiResponse[DeleteResult](data=DeleteResult(id=ingredient_id), message="Ingredient deleted")
