"""Read-only roll-ups over ingredients, dishes and completed foods.

Every function here is a pure query: no writes, no caching. Query errors
propagate to the caller unchanged.
"""
from collections import defaultdict
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable

from sqlalchemy import func
from sqlalchemy.orm import Session

from cooking_cost.constants import (
    PROFITABILITY_BUCKETS,
    TREND_PERIODS,
    UNSET_PROFITABILITY_BUCKET,
)
from cooking_cost.exceptions import ValidationError
from cooking_cost.models.completed_food import CompletedFood, FoodDish
from cooking_cost.models.dish import Dish, DishIngredient
from cooking_cost.models.ingredient import Ingredient
from cooking_cost.schemas.report import (
    CostTrends,
    Dashboard,
    DashboardSummary,
    DishGenreStats,
    DishTrend,
    FoodTrend,
    GenreStatistics,
    IngredientGenreStats,
    IngredientTrend,
    PopularDish,
    PopularIngredient,
    ProfitabilityBucket,
    ProfitabilityDistribution,
    ProfitableFood,
    RecentActivity,
)
from cooking_cost.services.cost_calculator import calculate_profit, calculate_profit_rate


def _float(value) -> float | None:
    return float(value) if value is not None else None


# ============================================================================
# Genre statistics
# ============================================================================


def genre_statistics(db: Session) -> GenreStatistics:
    """Count/avg/min/max per ingredient genre and per dish genre."""
    ingredient_rows = (
        db.query(
            Ingredient.genre,
            func.count(Ingredient.id).label("ingredient_count"),
            func.avg(Ingredient.unit_price).label("avg_unit_price"),
            func.min(Ingredient.unit_price).label("min_unit_price"),
            func.max(Ingredient.unit_price).label("max_unit_price"),
            func.sum(Ingredient.price).label("total_purchase_cost"),
        )
        .group_by(Ingredient.genre)
        .order_by(Ingredient.genre)
        .all()
    )
    dish_rows = (
        db.query(
            Dish.genre,
            func.count(Dish.id).label("dish_count"),
            func.avg(Dish.total_cost).label("avg_total_cost"),
            func.min(Dish.total_cost).label("min_total_cost"),
            func.max(Dish.total_cost).label("max_total_cost"),
        )
        .group_by(Dish.genre)
        .order_by(Dish.genre)
        .all()
    )

    return GenreStatistics(
        ingredients=[
            IngredientGenreStats(
                genre=row.genre,
                ingredient_count=row.ingredient_count,
                avg_unit_price=_float(row.avg_unit_price),
                min_unit_price=_float(row.min_unit_price),
                max_unit_price=_float(row.max_unit_price),
                total_purchase_cost=_float(row.total_purchase_cost),
            )
            for row in ingredient_rows
        ],
        dishes=[
            DishGenreStats(
                genre=row.genre,
                dish_count=row.dish_count,
                avg_total_cost=_float(row.avg_total_cost),
                min_total_cost=_float(row.min_total_cost),
                max_total_cost=_float(row.max_total_cost),
            )
            for row in dish_rows
        ],
    )


# ============================================================================
# Rankings
# ============================================================================


def popular_ingredients(db: Session, limit: int = 10) -> list[PopularIngredient]:
    """Ingredients ranked by how many dish lines use them, then by total used cost."""
    usage_count = func.count(DishIngredient.id)
    total_used_cost = func.coalesce(func.sum(DishIngredient.used_cost), 0)
    rows = (
        db.query(
            Ingredient.id,
            Ingredient.name,
            Ingredient.store,
            Ingredient.genre,
            usage_count.label("usage_count"),
            func.avg(DishIngredient.used_quantity).label("avg_used_quantity"),
            total_used_cost.label("total_used_cost"),
        )
        .outerjoin(DishIngredient, DishIngredient.ingredient_id == Ingredient.id)
        .group_by(Ingredient.id, Ingredient.name, Ingredient.store, Ingredient.genre)
        .order_by(usage_count.desc(), total_used_cost.desc(), Ingredient.id)
        .limit(limit)
        .all()
    )
    return [
        PopularIngredient(
            id=row.id,
            name=row.name,
            store=row.store,
            genre=row.genre,
            usage_count=row.usage_count,
            avg_used_quantity=_float(row.avg_used_quantity),
            total_used_cost=float(row.total_used_cost or 0),
        )
        for row in rows
    ]


def popular_dishes(db: Session, limit: int = 15) -> list[PopularDish]:
    """Dishes ranked by how many completed-food lines use them, cheapest first on ties."""
    usage_count = func.count(FoodDish.id)
    rows = (
        db.query(
            Dish.id,
            Dish.name,
            Dish.genre,
            Dish.total_cost,
            usage_count.label("usage_count"),
            func.avg(FoodDish.usage_cost).label("avg_usage_cost"),
        )
        .outerjoin(FoodDish, FoodDish.dish_id == Dish.id)
        .group_by(Dish.id, Dish.name, Dish.genre, Dish.total_cost)
        .order_by(usage_count.desc(), Dish.total_cost.asc(), Dish.id)
        .limit(limit)
        .all()
    )
    return [
        PopularDish(
            id=row.id,
            name=row.name,
            genre=row.genre,
            total_cost=float(row.total_cost),
            usage_count=row.usage_count,
            avg_usage_cost=_float(row.avg_usage_cost),
        )
        for row in rows
    ]


def _priced_foods(db: Session) -> list[CompletedFood]:
    return (
        db.query(CompletedFood)
        .filter(CompletedFood.price != None)
        .filter(CompletedFood.price > 0)
        .all()
    )


def profitable_foods(db: Session, limit: int = 10) -> list[ProfitableFood]:
    """Priced completed foods ordered by profit rate, highest first."""
    foods = sorted(_priced_foods(db), key=lambda f: (f.profit_rate, f.id), reverse=True)
    return [
        ProfitableFood(
            id=food.id,
            name=food.name,
            price=float(food.price),
            total_cost=float(food.total_cost),
            profit=float(food.profit),
            profit_rate=float(food.profit_rate),
        )
        for food in foods[:limit]
    ]


def _bucket_for(rate: Decimal) -> str:
    for label, lower, upper in PROFITABILITY_BUCKETS:
        if (lower is None or rate >= lower) and (upper is None or rate < upper):
            return label
    return PROFITABILITY_BUCKETS[-1][0]


def profitability_distribution(db: Session) -> ProfitabilityDistribution:
    """Count completed foods per profit-rate band; unpriced foods go to 'unset'."""
    counts: dict[str, int] = defaultdict(int)
    foods = db.query(CompletedFood.price, CompletedFood.total_cost).all()
    for price, total_cost in foods:
        if price is None or price <= 0:
            counts[UNSET_PROFITABILITY_BUCKET] += 1
            continue
        counts[_bucket_for(calculate_profit_rate(price, total_cost))] += 1

    buckets = [
        ProfitabilityBucket(
            label=label,
            min_rate=lower,
            max_rate=upper,
            count=counts[label],
        )
        for label, lower, upper in PROFITABILITY_BUCKETS
    ]
    buckets.append(ProfitabilityBucket(label=UNSET_PROFITABILITY_BUCKET, count=counts[UNSET_PROFITABILITY_BUCKET]))
    return ProfitabilityDistribution(buckets=buckets, total=len(foods))


# ============================================================================
# Trends
# ============================================================================


def bucket_key(moment: datetime, period: str) -> str:
    """Label of the day, ISO week (Monday) or month a timestamp falls in."""
    if period == "daily":
        return moment.date().isoformat()
    if period == "weekly":
        return (moment.date() - timedelta(days=moment.weekday())).isoformat()
    if period == "monthly":
        return moment.strftime("%Y-%m")
    raise ValueError(f"Unknown trend period: {period}")


def _group(rows: Iterable, period: str) -> dict[str, list]:
    grouped: dict[str, list] = defaultdict(list)
    for row in rows:
        grouped[bucket_key(row.created_at, period)].append(row)
    return grouped


def _average(values: list) -> float:
    if not values:
        return 0.0
    return float(sum(Decimal(str(v or 0)) for v in values) / len(values))


def cost_trends(db: Session, period: str = "daily", days: int = 30) -> CostTrends:
    """Average costs of rows created in the last `days`, per day/week/month. Newest first."""
    if period not in TREND_PERIODS:
        raise ValidationError(
            f"Invalid period '{period}'",
            details=[{"field": "period", "message": f"Must be one of: {', '.join(TREND_PERIODS)}"}],
        )
    if days < 1:
        raise ValidationError("days must be at least 1", details=[{"field": "days", "message": "Must be >= 1"}])

    cutoff = datetime.utcnow() - timedelta(days=days)

    ingredient_rows = (
        db.query(Ingredient.created_at, Ingredient.unit_price)
        .filter(Ingredient.created_at >= cutoff)
        .all()
    )
    dish_rows = (
        db.query(Dish.created_at, Dish.total_cost)
        .filter(Dish.created_at >= cutoff)
        .all()
    )
    food_rows = (
        db.query(CompletedFood.created_at, CompletedFood.price, CompletedFood.total_cost)
        .filter(CompletedFood.created_at >= cutoff)
        .all()
    )

    ingredients = [
        IngredientTrend(
            bucket=bucket,
            avg_unit_price=_average([r.unit_price for r in rows]),
            ingredient_count=len(rows),
        )
        for bucket, rows in _group(ingredient_rows, period).items()
    ]
    dishes = [
        DishTrend(
            bucket=bucket,
            avg_total_cost=_average([r.total_cost for r in rows]),
            dish_count=len(rows),
        )
        for bucket, rows in _group(dish_rows, period).items()
    ]
    foods = [
        FoodTrend(
            bucket=bucket,
            avg_total_cost=_average([r.total_cost for r in rows]),
            avg_profit_rate=_average([calculate_profit_rate(r.price, r.total_cost) for r in rows]),
            food_count=len(rows),
        )
        for bucket, rows in _group(food_rows, period).items()
    ]

    return CostTrends(
        period=period,
        days=days,
        ingredients=sorted(ingredients, key=lambda t: t.bucket, reverse=True),
        dishes=sorted(dishes, key=lambda t: t.bucket, reverse=True),
        foods=sorted(foods, key=lambda t: t.bucket, reverse=True),
    )


# ============================================================================
# Dashboard
# ============================================================================


def dashboard_summary(db: Session, recent_limit: int = 10) -> Dashboard:
    """Headline counts, profit totals over priced foods, and recent activity."""
    priced = _priced_foods(db)
    revenue = sum((f.price for f in priced), Decimal("0"))
    cost = sum((f.total_cost for f in priced), Decimal("0"))
    profit = sum((calculate_profit(f.price, f.total_cost) for f in priced), Decimal("0"))
    avg_rate = _average([f.profit_rate for f in priced])

    summary = DashboardSummary(
        total_ingredients=db.query(func.count(Ingredient.id)).scalar() or 0,
        total_dishes=db.query(func.count(Dish.id)).scalar() or 0,
        total_completed_foods=db.query(func.count(CompletedFood.id)).scalar() or 0,
        avg_profit_rate=round(avg_rate, 2),
        total_revenue=float(revenue),
        total_cost=float(cost),
        total_profit=float(profit),
    )

    activity = []
    for kind, model in (("ingredient", Ingredient), ("dish", Dish), ("food", CompletedFood)):
        rows = (
            db.query(model.id, model.name, model.created_at)
            .order_by(model.created_at.desc(), model.id.desc())
            .limit(5)
            .all()
        )
        activity.extend(
            RecentActivity(type=kind, id=row.id, name=row.name, timestamp=row.created_at)
            for row in rows
        )
    activity.sort(key=lambda a: a.timestamp or datetime.min, reverse=True)

    return Dashboard(summary=summary, recent_activity=activity[:recent_limit])
