"""Tests for cooking_cost/services/reports.py."""
from datetime import datetime, timedelta

import pytest

from cooking_cost.exceptions import ValidationError
from cooking_cost.models.ingredient import Ingredient
from cooking_cost.services import reports


class TestGenreStatistics:
    def test_groups_by_genre(self, db, tonkatsu_set):
        stats = reports.genre_statistics(db)

        by_genre = {s.genre: s for s in stats.ingredients}
        assert set(by_genre) == {"meat", "vegetable"}
        assert by_genre["meat"].ingredient_count == 1
        assert by_genre["meat"].avg_unit_price == pytest.approx(0.9)
        assert by_genre["vegetable"].total_purchase_cost == pytest.approx(300)

        assert [(d.genre, d.dish_count) for d in stats.dishes] == [("main", 1)]
        assert stats.dishes[0].avg_total_cost == pytest.approx(190)

    def test_empty(self, db):
        stats = reports.genre_statistics(db)
        assert stats.ingredients == []
        assert stats.dishes == []


class TestPopularIngredients:
    def test_ranked_by_usage(self, db, tonkatsu_set, ingredient_factory, dish_factory):
        pork = tonkatsu_set["pork"]
        dish_factory([(pork, 100)], name="Pork stir fry")
        ingredient_factory(name="Saffron", genre="seasoning")

        ranking = reports.popular_ingredients(db)

        assert [r.name for r in ranking] == ["Pork loin", "Cabbage", "Saffron"]
        assert ranking[0].usage_count == 2
        assert ranking[0].total_used_cost == pytest.approx(270)
        assert ranking[2].usage_count == 0
        assert ranking[2].total_used_cost == 0

    def test_limit(self, db, tonkatsu_set):
        assert len(reports.popular_ingredients(db, limit=1)) == 1


class TestPopularDishes:
    def test_ranked_by_usage_then_cheapest(self, db, tonkatsu_set, ingredient_factory, dish_factory):
        cabbage = tonkatsu_set["cabbage"]
        dish_factory([(cabbage, 100)], name="Coleslaw")  # 10, unused
        dish_factory([(cabbage, 500)], name="Cabbage soup")  # 50, unused

        ranking = reports.popular_dishes(db)

        assert [r.name for r in ranking] == ["Tonkatsu", "Coleslaw", "Cabbage soup"]
        assert ranking[0].usage_count == 1
        assert ranking[0].avg_usage_cost == pytest.approx(190)
        assert ranking[1].avg_usage_cost is None


class TestProfitableFoods:
    def test_highest_rate_first_and_unpriced_excluded(self, db, tonkatsu_set, food_factory):
        dish = tonkatsu_set["dish"]
        food_factory([(dish, 1)], name="Cheap set", price=380)  # 50%
        food_factory([(dish, 1)], name="Staff meal")  # unpriced

        ranking = reports.profitable_foods(db)

        assert [(r.name, r.profit_rate) for r in ranking] == [
            ("Tonkatsu set", pytest.approx(77.65)),
            ("Cheap set", pytest.approx(50.0)),
        ]
        assert ranking[0].profit == pytest.approx(660)


class TestProfitabilityDistribution:
    def test_bucketing(self, db, tonkatsu_set, food_factory):
        dish = tonkatsu_set["dish"]
        food_factory([(dish, 1)], name="Exactly fifty", price=380)  # 50.00 -> excellent
        food_factory([(dish, 1)], name="Thirty", price="271.43")  # 30.00 -> good
        food_factory([(dish, 1)], name="Loss leader", price=150)  # negative -> poor
        food_factory([(dish, 1)], name="Staff meal")  # unset

        dist = reports.profitability_distribution(db)
        counts = {b.label: b.count for b in dist.buckets}

        assert counts == {"excellent": 2, "good": 1, "fair": 0, "low": 0, "poor": 1, "unset": 1}
        assert dist.total == 5

    def test_bucket_bounds(self, db):
        dist = reports.profitability_distribution(db)
        bounds = {b.label: (b.min_rate, b.max_rate) for b in dist.buckets}
        assert bounds["excellent"] == (50, None)
        assert bounds["good"] == (30, 50)
        assert bounds["poor"] == (None, 10)
        assert dist.total == 0


class TestCostTrends:
    def test_bucket_key(self):
        moment = datetime(2026, 10, 15, 13, 30)  # a Thursday
        assert reports.bucket_key(moment, "daily") == "2026-10-15"
        assert reports.bucket_key(moment, "weekly") == "2026-10-12"
        assert reports.bucket_key(moment, "monthly") == "2026-10"

    def test_invalid_period(self, db):
        with pytest.raises(ValidationError):
            reports.cost_trends(db, period="hourly")

    def test_invalid_days(self, db):
        with pytest.raises(ValidationError):
            reports.cost_trends(db, days=0)

    def test_groups_recent_rows_newest_first(self, db, tonkatsu_set, ingredient_factory):
        old = ingredient_factory(name="Old stock", quantity="10", price="10")
        old_row = db.get(Ingredient, old.id)
        old_row.created_at = datetime.utcnow() - timedelta(days=3)
        db.commit()

        trends = reports.cost_trends(db, period="daily", days=30)

        assert trends.period == "daily"
        assert len(trends.ingredients) == 2
        assert trends.ingredients[0].bucket > trends.ingredients[1].bucket
        assert trends.ingredients[0].ingredient_count == 2
        assert trends.ingredients[1].ingredient_count == 1
        assert trends.dishes[0].avg_total_cost == pytest.approx(190)
        assert trends.foods[0].avg_profit_rate == pytest.approx(77.65)

    def test_window_excludes_old_rows(self, db, ingredient_factory):
        ing = ingredient_factory()
        ing.created_at = datetime.utcnow() - timedelta(days=45)
        db.commit()

        assert reports.cost_trends(db, days=30).ingredients == []


class TestDashboard:
    def test_summary(self, db, tonkatsu_set, food_factory):
        food_factory([(tonkatsu_set["dish"], 1)], name="Staff meal")

        dashboard = reports.dashboard_summary(db)
        summary = dashboard.summary

        assert summary.total_ingredients == 2
        assert summary.total_dishes == 1
        assert summary.total_completed_foods == 2
        assert summary.total_revenue == pytest.approx(850)
        assert summary.total_cost == pytest.approx(190)
        assert summary.total_profit == pytest.approx(660)
        assert summary.avg_profit_rate == pytest.approx(77.65)

    def test_recent_activity(self, db, tonkatsu_set):
        activity = reports.dashboard_summary(db).recent_activity
        assert {(a.type, a.name) for a in activity} == {
            ("ingredient", "Pork loin"),
            ("ingredient", "Cabbage"),
            ("dish", "Tonkatsu"),
            ("food", "Tonkatsu set"),
        }
        timestamps = [a.timestamp for a in activity]
        assert timestamps == sorted(timestamps, reverse=True)

    def test_empty_database(self, db):
        dashboard = reports.dashboard_summary(db)
        assert dashboard.summary.total_ingredients == 0
        assert dashboard.summary.avg_profit_rate == 0
        assert dashboard.recent_activity == []
