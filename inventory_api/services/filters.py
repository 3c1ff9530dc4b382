# inventory_api/services/filters.py
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import and_, select

from ..model import Category, Product
from ..utils.parsing import parse_opt_float, parse_opt_int


@dataclass(frozen=True)
class ProductFilter:
    """
    Optional numeric bounds for listing products.

    Query params (all optional):
      minPrice / maxPrice -> float, inclusive
      minQty   / maxQty   -> int, inclusive

    Parsing is lenient: a missing, empty, non-numeric or non-finite value
    means the bound is absent. Quantity bounds must be whole numbers
    ("2.5" is dropped, not truncated).
    """
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    min_qty: Optional[int] = None
    max_qty: Optional[int] = None

    @classmethod
    def from_args(cls, args):
        return cls(
            min_price=parse_opt_float(args.get("minPrice")),
            max_price=parse_opt_float(args.get("maxPrice")),
            min_qty=parse_opt_int(args.get("minQty")),
            max_qty=parse_opt_int(args.get("maxQty")),
        )

    def clauses(self):
        out = []
        if self.min_price is not None:
            out.append(Product.price >= self.min_price)
        if self.max_price is not None:
            out.append(Product.price <= self.max_price)
        if self.min_qty is not None:
            out.append(Product.stock_quantity >= self.min_qty)
        if self.max_qty is not None:
            out.append(Product.stock_quantity <= self.max_qty)
        return out


def build_product_query(product_filter=None):
    stmt = (
        select(
            Product.product_id,
            Product.product_name,
            Product.price,
            Product.stock_quantity,
            Category.category_name,
        )
        .select_from(Product)
        .outerjoin(Category, Product.category_id == Category.category_id)
    )
    clauses = (product_filter or ProductFilter()).clauses()
    if clauses:
        stmt = stmt.where(and_(*clauses))
    return stmt.order_by(Product.product_name.asc(), Product.product_id.asc())
