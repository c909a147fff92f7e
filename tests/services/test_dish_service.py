"""Tests for cooking_cost/services/dish_service.py."""
from decimal import Decimal

import pytest

from cooking_cost.exceptions import ConflictError, NotFoundError
from cooking_cost.models.dish import Dish, DishIngredient
from cooking_cost.schemas.dish import DishCreate, DishIngredientCreate, DishSearch, DishUpdate
from cooking_cost.services import dish_service


class TestCreateDish:
    def test_lines_and_total(self, db, ingredient_factory):
        pork = ingredient_factory(name="Pork", quantity="500", price="450", genre="meat")
        cabbage = ingredient_factory(name="Cabbage", quantity="3000", price="300")

        dish = dish_service.create_dish(db, DishCreate(
            name="Tonkatsu",
            ingredients=[
                DishIngredientCreate(ingredient_id=pork.id, used_quantity=Decimal("200")),
                DishIngredientCreate(ingredient_id=cabbage.id, used_quantity=Decimal("100")),
            ],
        ))

        assert dish.total_cost == Decimal("190")
        assert dish.genre == "main"
        assert [line.used_cost for line in dish.ingredients] == [Decimal("180"), Decimal("10")]

    def test_missing_ingredient_rolls_back(self, db, ingredient_factory):
        pork = ingredient_factory(name="Pork", genre="meat")

        with pytest.raises(NotFoundError, match="Ingredient with ID 999"):
            dish_service.create_dish(db, DishCreate(
                name="Broken",
                ingredients=[
                    DishIngredientCreate(ingredient_id=pork.id, used_quantity=Decimal("10")),
                    DishIngredientCreate(ingredient_id=999, used_quantity=Decimal("10")),
                ],
            ))

        assert db.query(Dish).count() == 0
        assert db.query(DishIngredient).count() == 0

    def test_needs_at_least_one_ingredient(self):
        with pytest.raises(ValueError):
            DishCreate(name="Empty", ingredients=[])


class TestUpdateDish:
    def test_replacing_lines_recomputes_total(self, db, tonkatsu_set):
        dish = tonkatsu_set["dish"]
        cabbage = tonkatsu_set["cabbage"]

        updated = dish_service.update_dish(db, dish.id, DishUpdate(
            ingredients=[DishIngredientCreate(ingredient_id=cabbage.id, used_quantity=Decimal("300"))],
        ))

        assert updated.total_cost == Decimal("30")
        assert len(updated.ingredients) == 1
        assert db.query(DishIngredient).filter(DishIngredient.dish_id == dish.id).count() == 1

    def test_scalar_update_keeps_lines(self, db, tonkatsu_set):
        dish = tonkatsu_set["dish"]

        updated = dish_service.update_dish(db, dish.id, DishUpdate(name="Katsu", genre="side"))

        assert updated.name == "Katsu"
        assert updated.genre == "side"
        assert updated.total_cost == Decimal("190")
        assert len(updated.ingredients) == 2

    def test_empty_list_keeps_lines(self, db, tonkatsu_set):
        dish = tonkatsu_set["dish"]
        updated = dish_service.update_dish(db, dish.id, DishUpdate(ingredients=[]))
        assert len(updated.ingredients) == 2
        assert updated.total_cost == Decimal("190")

    def test_failed_replacement_keeps_old_lines(self, db, tonkatsu_set):
        dish = tonkatsu_set["dish"]

        with pytest.raises(NotFoundError):
            dish_service.update_dish(db, dish.id, DishUpdate(
                ingredients=[DishIngredientCreate(ingredient_id=999, used_quantity=Decimal("1"))],
            ))

        db.expire_all()
        assert db.get(Dish, dish.id).total_cost == Decimal("190")
        assert db.query(DishIngredient).filter(DishIngredient.dish_id == dish.id).count() == 2

    def test_completed_food_cost_is_snapshot(self, db, tonkatsu_set):
        dish = tonkatsu_set["dish"]
        cabbage = tonkatsu_set["cabbage"]

        dish_service.update_dish(db, dish.id, DishUpdate(
            ingredients=[DishIngredientCreate(ingredient_id=cabbage.id, used_quantity=Decimal("300"))],
        ))

        db.refresh(tonkatsu_set["food"])
        assert tonkatsu_set["food"].total_cost == Decimal("190")

    def test_missing_dish(self, db):
        with pytest.raises(NotFoundError):
            dish_service.update_dish(db, 999, DishUpdate(name="Ghost"))


class TestDeleteDish:
    def test_delete_cascades_lines(self, db, ingredient_factory, dish_factory):
        ing = ingredient_factory()
        dish = dish_factory([(ing, 10)])

        dish_service.delete_dish(db, dish.id)

        assert db.get(Dish, dish.id) is None
        assert db.query(DishIngredient).count() == 0

    def test_delete_used_dish_conflicts(self, db, tonkatsu_set):
        dish_id = tonkatsu_set["dish"].id

        with pytest.raises(ConflictError):
            dish_service.delete_dish(db, dish_id)

        assert db.get(Dish, dish_id) is not None
        assert db.query(DishIngredient).filter(DishIngredient.dish_id == dish_id).count() == 2

    def test_delete_missing(self, db):
        with pytest.raises(NotFoundError):
            dish_service.delete_dish(db, 999)


class TestGetDish:
    def test_lines_carry_ingredient_details(self, db, tonkatsu_set):
        result = dish_service.get_dish_with_ingredients(db, tonkatsu_set["dish"].id)

        assert result.name == "Tonkatsu"
        assert [(i.ingredient_name, i.ingredient_unit) for i in result.ingredients] == [
            ("Pork loin", "g"),
            ("Cabbage", "g"),
        ]
        assert result.ingredients[0].ingredient_genre == "meat"

    def test_missing(self, db):
        with pytest.raises(NotFoundError, match="Dish with ID 7 not found"):
            dish_service.get_dish_with_ingredients(db, 7)


class TestSearchDishes:
    def test_cost_range_and_genre(self, db, ingredient_factory, dish_factory):
        ing = ingredient_factory(quantity="100", price="100")  # 1.00 per g
        dish_factory([(ing, 50)], name="Small salad", genre="side")
        dish_factory([(ing, 150)], name="Big salad", genre="side")
        dish_factory([(ing, 500)], name="Roast", genre="main")

        page = dish_service.search_dishes(db, DishSearch(genre="side"))
        assert page.total == 2

        page = dish_service.search_dishes(db, DishSearch(min_cost=Decimal("100"), max_cost=Decimal("200")))
        assert [d.name for d in page.items] == ["Big salad"]

        page = dish_service.search_dishes(db, DishSearch(sort_by="total_cost", sort_order="ASC"))
        assert [d.name for d in page.items] == ["Small salad", "Big salad", "Roast"]
