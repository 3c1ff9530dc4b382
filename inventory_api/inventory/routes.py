from ..errors import ValidationError
from ..extensions import db
from ..services import StockTransfer
from ..utils.api import json_body, ok
from . import bp


# POST /api/inventory/adjust
@bp.post("/adjust")
def adjust_stock():
    """Move stock between two products: {from_product_id, to_product_id, quantity}."""
    data = json_body()
    for field in ("from_product_id", "to_product_id", "quantity"):
        if data.get(field) is None:
            raise ValidationError(f"{field} is required")

    result = StockTransfer(db.engine).transfer(
        data["from_product_id"], data["to_product_id"], data["quantity"]
    )
    return ok(result.as_api())
