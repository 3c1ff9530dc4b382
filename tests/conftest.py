import pytest

from inventory_api import create_app
from inventory_api.extensions import db


@pytest.fixture
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'inventory.db'}",
        "SEED_DEMO_DATA": False,
        "STORE_TIMEOUT": 10,
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


@pytest.fixture
def make_category(client):
    def _make(name):
        r = client.post("/api/categories", json={"name": name})
        assert r.status_code == 201, r.get_json()
        return r.get_json()["id"]
    return _make


@pytest.fixture
def make_product(client):
    def _make(name="Widget", price=1.0, quantity=0, category_id=None):
        r = client.post("/api/products", json={
            "name": name, "price": price, "quantity": quantity, "category_id": category_id,
        })
        assert r.status_code == 201, r.get_json()
        return r.get_json()["id"]
    return _make


@pytest.fixture
def stock_of(client):
    def _stock(pid):
        r = client.get(f"/api/products/{pid}")
        assert r.status_code == 200
        return r.get_json()["stock_quantity"]
    return _stock
