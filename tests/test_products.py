import pytest


@pytest.fixture
def catalog(make_category, make_product):
    books = make_category("Books")
    food = make_category("Groceries")
    return {
        "novel": make_product("Novel", 14.5, 50, books),
        "apples": make_product("Apples", 0.99, 200, food),
        "laptop": make_product("Laptop", 699.99, 10, None),
    }


def names(resp):
    assert resp.status_code == 200
    return [p["product_name"] for p in resp.get_json()]


def test_list_products_joins_category_and_orders_by_name(client, catalog):
    r = client.get("/api/products")
    assert names(r) == ["Apples", "Laptop", "Novel"]
    apples = r.get_json()[0]
    assert apples == {
        "product_id": catalog["apples"],
        "product_name": "Apples",
        "price": 0.99,
        "stock_quantity": 200,
        "category_name": "Groceries",
    }
    assert r.get_json()[1]["category_name"] is None


def test_filters_conjoin_supplied_bounds(client, catalog):
    assert names(client.get("/api/products?minPrice=1")) == ["Laptop", "Novel"]
    assert names(client.get("/api/products?maxPrice=14.5")) == ["Apples", "Novel"]
    assert names(client.get("/api/products?minQty=11&maxQty=100")) == ["Novel"]
    assert names(client.get("/api/products?minPrice=1&maxQty=10")) == ["Laptop"]


def test_malformed_filters_are_ignored(client, catalog):
    assert names(client.get("/api/products?minPrice=abc&maxQty=lots")) == ["Apples", "Laptop", "Novel"]
    injected = client.get("/api/products", query_string={"minPrice": "0 OR 1=1; DROP TABLE Products"})
    assert names(injected) == ["Apples", "Laptop", "Novel"]


def test_listing_twice_is_identical(client, catalog):
    assert client.get("/api/products").get_json() == client.get("/api/products").get_json()
    assert client.get("/api/categories").get_json() == client.get("/api/categories").get_json()


def test_create_product_returns_id(client):
    r = client.post("/api/products", json={"name": "Pen", "price": "1.255", "quantity": 3})
    assert r.status_code == 201
    pid = r.get_json()["id"]
    product = client.get(f"/api/products/{pid}").get_json()
    assert product["price"] == 1.26
    assert product["category_id"] is None


@pytest.mark.parametrize("body, message", [
    ({"price": 1, "quantity": 1}, "name is required"),
    ({"name": "Pen", "quantity": 1}, "price must be a number"),
    ({"name": "Pen", "price": -1, "quantity": 1}, "price must be >= 0"),
    ({"name": "Pen", "price": 1}, "quantity must be an integer"),
    ({"name": "Pen", "price": 1, "quantity": 1.5}, "quantity must be an integer"),
    ({"name": "Pen", "price": 1, "quantity": -3}, "quantity must be >= 0"),
    ({"name": "Pen", "price": 1, "quantity": 1, "category_id": "books"},
     "category_id must be an integer or null"),
    ({"name": "Pen", "price": "", "quantity": 1}, "price must be a number"),
    ({"name": "Pen", "price": "   ", "quantity": 1}, "price must be a number"),
    ({"name": "Pen", "price": "1e30", "quantity": 1}, "price must be a number"),
    ({"name": "Pen", "price": 100000000, "quantity": 1}, "price must be <= 99999999.99"),
    ({"name": "Pen", "price": 1, "quantity": 10 ** 20}, "quantity is out of range"),
    ({"name": "Pen", "price": 1, "quantity": 1, "category_id": 10 ** 20}, "category does not exist"),
])
def test_invalid_product_bodies_are_rejected(client, body, message):
    r = client.post("/api/products", json=body)
    assert r.status_code == 400
    assert r.get_json()["error"] == message
    assert client.get("/api/products").get_json() == []


def test_unknown_category_is_rejected(client):
    r = client.post("/api/products", json={"name": "Pen", "price": 1, "quantity": 1, "category_id": 999})
    assert r.status_code == 400
    assert r.get_json()["error"] == "category does not exist"


def test_update_product_replaces_fields(client, catalog, make_category):
    toys = make_category("Toys")
    r = client.put(f"/api/products/{catalog['laptop']}", json={
        "name": "Toy Laptop", "price": 20, "quantity": 3, "category_id": toys,
    })
    assert r.status_code == 200
    assert r.get_json() == {"message": "Updated successfully", "changes": 1}

    product = client.get(f"/api/products/{catalog['laptop']}").get_json()
    assert product["product_name"] == "Toy Laptop"
    assert product["price"] == 20
    assert product["stock_quantity"] == 3
    assert product["category_name"] == "Toys"


def test_update_with_unchanged_values_still_counts_the_row(client, catalog):
    r = client.put(f"/api/products/{catalog['apples']}", json={
        "name": "Apples", "price": 0.99, "quantity": 200, "category_id": None,
    })
    assert r.status_code == 200
    assert r.get_json()["changes"] == 1


def test_update_missing_product_is_not_found(client):
    r = client.put("/api/products/999", json={"name": "X", "price": 1, "quantity": 1})
    assert r.status_code == 404
    assert r.get_json()["message"] == "Product not found"


def test_delete_product(client, catalog):
    r = client.delete(f"/api/products/{catalog['novel']}")
    assert r.status_code == 200
    assert r.get_json() == {"message": "Deleted successfully", "changes": 1}
    assert client.get(f"/api/products/{catalog['novel']}").status_code == 404

    r = client.delete(f"/api/products/{catalog['novel']}")
    assert r.status_code == 404
    assert r.get_json()["message"] == "Product not found"


def test_unknown_route_is_json(client):
    r = client.get("/api/nothing-here")
    assert r.status_code == 404
    assert "error" in r.get_json()


def test_health(client):
    assert client.get("/").get_json() == {"ok": True, "msg": "API running"}


@pytest.mark.parametrize("body", [[1, 2, 3], 42, "Pen"])
def test_non_object_bodies_are_rejected(client, catalog, body):
    r = client.post("/api/products", json=body)
    assert r.status_code == 400
    assert r.get_json()["error"] == "request body must be a JSON object"

    r = client.put(f"/api/products/{catalog['apples']}", json=body)
    assert r.status_code == 400
    assert r.get_json()["error"] == "request body must be a JSON object"


def test_out_of_range_quantity_bound_is_ignored(client, catalog):
    r = client.get("/api/products", query_string={"minQty": "99999999999999999999"})
    assert names(r) == ["Apples", "Laptop", "Novel"]


def test_out_of_range_product_id_is_not_found(client, catalog):
    huge = 10 ** 20
    assert client.get(f"/api/products/{huge}").status_code == 404
    assert client.delete(f"/api/products/{huge}").status_code == 404
    r = client.put(f"/api/products/{huge}", json={"name": "X", "price": 1, "quantity": 1})
    assert r.status_code == 404
