"""Read-only reporting endpoints."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from cooking_cost.database import get_db
from cooking_cost.schemas.common import ApiResponse
from cooking_cost.schemas.report import (
    CostTrends,
    Dashboard,
    GenreStatistics,
    PopularDish,
    PopularIngredient,
    ProfitabilityDistribution,
    ProfitableFood,
)
from cooking_cost.services import reports

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/dashboard", response_model=ApiResponse[Dashboard])
def get_dashboard(db: Session = Depends(get_db)):
    """Headline counts, profit totals and the latest activity."""
    return ApiResponse[Dashboard](data=reports.dashboard_summary(db))


@router.get("/genre-stats", response_model=ApiResponse[GenreStatistics])
def get_genre_stats(db: Session = Depends(get_db)):
    return ApiResponse[GenreStatistics](data=reports.genre_statistics(db))


@router.get("/popular-ingredients", response_model=ApiResponse[list[PopularIngredient]])
def get_popular_ingredients(
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return ApiResponse[list[PopularIngredient]](data=reports.popular_ingredients(db, limit=limit))


@router.get("/popular-dishes", response_model=ApiResponse[list[PopularDish]])
def get_popular_dishes(
    limit: int = Query(15, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return ApiResponse[list[PopularDish]](data=reports.popular_dishes(db, limit=limit))


@router.get("/profitable-foods", response_model=ApiResponse[list[ProfitableFood]])
def get_profitable_foods(
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return ApiResponse[list[ProfitableFood]](data=reports.profitable_foods(db, limit=limit))


@router.get("/profitability", response_model=ApiResponse[ProfitabilityDistribution])
def get_profitability(db: Session = Depends(get_db)):
    """Completed food counts per profit-rate band."""
    return ApiResponse[ProfitabilityDistribution](data=reports.profitability_distribution(db))


@router.get("/trends", response_model=ApiResponse[CostTrends])
def get_trends(
    period: str = Query("daily", description="daily, weekly or monthly"),
    days: int = Query(30, ge=1, le=365),
    db: Session = Depends(get_db),
):
    """Average costs over time, newest bucket first."""
    return ApiResponse[CostTrends](data=reports.cost_trends(db, period=period, days=days))
