# --- category/routes.py ---
from ..extensions import db
from ..services import InventoryRepository
from ..utils.api import json_body, ok
from . import bp

# ------------------------ CATEGORY ROUTES ------------------------

@bp.get("")
def list_categories():
    return ok(InventoryRepository(db.session).list_categories())


@bp.post("")
def create_category():
    data = json_body()
    category = InventoryRepository(db.session).create_category(data.get("name"))
    return ok(category, status_code=201)
