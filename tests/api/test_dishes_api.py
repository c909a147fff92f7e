"""Tests for dish API endpoints."""
from decimal import Decimal


class TestCreateDish:
    def test_create_computes_cost(self, client, ingredient_factory):
        pork = ingredient_factory(name="Pork", quantity="500", price="450", genre="meat")
        cabbage = ingredient_factory(name="Cabbage", quantity="3000", price="300")

        response = client.post("/api/v1/dishes", json={
            "name": "Tonkatsu",
            "ingredients": [
                {"ingredient_id": pork.id, "used_quantity": 200},
                {"ingredient_id": cabbage.id, "used_quantity": 100},
            ],
        })

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["genre"] == "main"
        assert Decimal(str(data["total_cost"])) == Decimal("190")
        assert [i["ingredient_name"] for i in data["ingredients"]] == ["Pork", "Cabbage"]
        assert [Decimal(str(i["used_cost"])) for i in data["ingredients"]] == [Decimal("180"), Decimal("10")]

    def test_unknown_ingredient(self, client, ingredient_factory):
        ing = ingredient_factory()
        response = client.post("/api/v1/dishes", json={
            "name": "Broken",
            "ingredients": [
                {"ingredient_id": ing.id, "used_quantity": 1},
                {"ingredient_id": 999, "used_quantity": 1},
            ],
        })
        assert response.status_code == 404
        assert client.get("/api/v1/dishes").json()["pagination"]["total"] == 0

    def test_requires_ingredients(self, client):
        response = client.post("/api/v1/dishes", json={"name": "Air", "ingredients": []})
        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "ingredients"

    def test_non_positive_quantity(self, client, ingredient_factory):
        ing = ingredient_factory()
        response = client.post("/api/v1/dishes", json={
            "name": "Nothing",
            "ingredients": [{"ingredient_id": ing.id, "used_quantity": 0}],
        })
        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "ingredients.0.used_quantity"


class TestRepeatedReads:
    def test_detail_is_stable(self, client, tonkatsu_set):
        url = f"/api/v1/dishes/{tonkatsu_set['dish'].id}"
        first = client.get(url).json()
        second = client.get(url).json()
        first.pop("timestamp")
        second.pop("timestamp")
        assert first == second
        assert Decimal(str(second["data"]["total_cost"])) == Decimal("190")


class TestUpdateDish:
    def test_replace_ingredients(self, client, tonkatsu_set):
        dish_id = tonkatsu_set["dish"].id
        response = client.put(f"/api/v1/dishes/{dish_id}", json={
            "ingredients": [{"ingredient_id": tonkatsu_set["cabbage"].id, "used_quantity": 300}],
        })
        assert response.status_code == 200
        data = response.json()["data"]
        assert Decimal(str(data["total_cost"])) == Decimal("30")
        assert len(data["ingredients"]) == 1

    def test_rename_keeps_cost(self, client, tonkatsu_set):
        dish_id = tonkatsu_set["dish"].id
        response = client.put(f"/api/v1/dishes/{dish_id}", json={"name": "Katsu"})
        data = response.json()["data"]
        assert data["name"] == "Katsu"
        assert Decimal(str(data["total_cost"])) == Decimal("190")


class TestDeleteDish:
    def test_in_use_conflicts(self, client, tonkatsu_set):
        dish_id = tonkatsu_set["dish"].id
        response = client.delete(f"/api/v1/dishes/{dish_id}")
        assert response.status_code == 409
        assert client.get(f"/api/v1/dishes/{dish_id}").status_code == 200

    def test_delete(self, client, ingredient_factory, dish_factory):
        dish = dish_factory([(ingredient_factory(), 5)])
        response = client.delete(f"/api/v1/dishes/{dish.id}")
        assert response.status_code == 200
        assert client.get(f"/api/v1/dishes/{dish.id}").status_code == 404


class TestSearchDishes:
    def test_cost_filters(self, client, ingredient_factory, dish_factory):
        ing = ingredient_factory(quantity="100", price="100")
        dish_factory([(ing, 50)], name="Small")
        dish_factory([(ing, 150)], name="Medium")
        dish_factory([(ing, 500)], name="Large")

        response = client.get("/api/v1/dishes?minCost=100&maxCost=200")
        assert [d["name"] for d in response.json()["data"]] == ["Medium"]

        response = client.get("/api/v1/dishes?sortBy=total_cost&sortOrder=DESC&limit=2")
        body = response.json()
        assert [d["name"] for d in body["data"]] == ["Large", "Medium"]
        assert body["pagination"]["hasNext"] is True
