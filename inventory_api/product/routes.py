from flask import request

from ..extensions import db
from ..services import InventoryRepository, ProductFilter, ProductPayload
from ..utils.api import json_body, ok
from . import bp

# ---------- routes ----------
# GET /api/products
@bp.get("")
def list_products():
    """
    Query params:
      minPrice -> float
      maxPrice -> float
      minQty   -> int
      maxQty   -> int
    A bound that does not parse is ignored.
    """
    product_filter = ProductFilter.from_args(request.args)
    return ok(InventoryRepository(db.session).list_products(product_filter))

# GET /api/products/<id>
@bp.get("/<int:pid>")
def get_product(pid):
    return ok(InventoryRepository(db.session).get_product(pid))

# POST /api/products
@bp.post("")
def create_product():
    payload = ProductPayload.from_json(json_body())
    return ok(InventoryRepository(db.session).create_product(payload), status_code=201)

# PUT /api/products/<id>
@bp.put("/<int:pid>")
def update_product(pid):
    payload = ProductPayload.from_json(json_body())
    return ok(InventoryRepository(db.session).update_product(pid, payload))

# DELETE /api/products/<id>
@bp.delete("/<int:pid>")
def delete_product(pid):
    return ok(InventoryRepository(db.session).delete_product(pid))
