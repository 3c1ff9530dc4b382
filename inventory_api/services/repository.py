# inventory_api/services/repository.py
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..errors import ConflictError, NotFoundError, StoreError, ValidationError
from ..model import Category, Product
from ..utils.money import MAX_PRICE, parse_money
from ..utils.parsing import in_int_range, parse_opt_int
from .filters import ProductFilter, build_product_query

logger = logging.getLogger(__name__)


def _store_text(exc):
    return str(getattr(exc, "orig", None) or exc)


def _is_unique_violation(exc: IntegrityError):
    msg = _store_text(exc).lower()
    return "unique" in msg or "duplicate" in msg


def _is_foreign_key_violation(exc: IntegrityError):
    return "foreign key" in _store_text(exc).lower()


def _require_product_id(pid):
    # ids beyond the store's integer range cannot match a row
    if not in_int_range(pid):
        raise NotFoundError("Product not found")


@dataclass(frozen=True)
class ProductPayload:
    name: str
    price: Decimal
    quantity: int
    category_id: Optional[int] = None

    @classmethod
    def from_json(cls, data):
        data = data or {}
        if not isinstance(data, dict):
            raise ValidationError("request body must be a JSON object")

        name = data.get("name")
        name = name.strip() if isinstance(name, str) else ""
        if not name:
            raise ValidationError("name is required")

        price = parse_money(data.get("price"))
        if price is None:
            raise ValidationError("price must be a number")
        if price < 0:
            raise ValidationError("price must be >= 0")
        if price > MAX_PRICE:
            raise ValidationError(f"price must be <= {MAX_PRICE}")

        raw_qty = data.get("quantity")
        quantity = parse_opt_int(raw_qty, bounded=False)
        if quantity is None:
            raise ValidationError("quantity must be an integer")
        if quantity < 0:
            raise ValidationError("quantity must be >= 0")
        if not in_int_range(quantity):
            raise ValidationError("quantity is out of range")

        raw_cid = data.get("category_id")
        category_id = parse_opt_int(raw_cid, bounded=False)
        if category_id is None and raw_cid not in (None, "", "null"):
            raise ValidationError("category_id must be an integer or null")
        if category_id is not None and not in_int_range(category_id):
            raise ValidationError("category does not exist")

        return cls(name=name, price=price, quantity=quantity, category_id=category_id)

    def values(self):
        return {
            "product_name": self.name,
            "price": self.price,
            "stock_quantity": self.quantity,
            "category_id": self.category_id,
        }


class InventoryRepository:
    """Single-statement reads and writes over Categories and Products."""

    def __init__(self, session):
        self.session = session

    # ---------------- categories ----------------

    def list_categories(self):
        stmt = select(Category).order_by(Category.category_name.asc())
        try:
            return [c.as_dict() for c in self.session.scalars(stmt)]
        except SQLAlchemyError as e:
            raise StoreError(_store_text(e)) from e

    def create_category(self, name):
        name = name.strip() if isinstance(name, str) else ""
        if not name:
            raise ValidationError("name is required")

        c = Category(category_name=name)
        try:
            self.session.add(c)
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            if _is_unique_violation(e):
                raise ConflictError(f"Category '{name}' already exists") from e
            raise StoreError(_store_text(e)) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(_store_text(e)) from e
        logger.info("Category %s created: %s", c.category_id, name)
        return {"id": c.category_id, "name": c.category_name}

    def category_ids_by_name(self):
        stmt = select(Category.category_name, Category.category_id)
        try:
            return {name: cid for name, cid in self.session.execute(stmt)}
        except SQLAlchemyError as e:
            raise StoreError(_store_text(e)) from e

    # ---------------- products ----------------

    def list_products(self, product_filter: Optional[ProductFilter] = None):
        stmt = build_product_query(product_filter)
        try:
            return [dict(row._mapping) for row in self.session.execute(stmt)]
        except SQLAlchemyError as e:
            raise StoreError(_store_text(e)) from e

    def get_product(self, pid):
        _require_product_id(pid)
        try:
            product = self.session.get(Product, pid)
        except SQLAlchemyError as e:
            raise StoreError(_store_text(e)) from e
        if product is None:
            raise NotFoundError("Product not found")
        return product.as_api()

    def count_products(self):
        try:
            return self.session.scalar(select(func.count()).select_from(Product))
        except SQLAlchemyError as e:
            raise StoreError(_store_text(e)) from e

    def create_product(self, payload: ProductPayload):
        p = Product(**payload.values())
        self._write(lambda: self.session.add(p))
        logger.info("Product %s created: %s", p.product_id, payload.name)
        return {"id": p.product_id}

    def create_products(self, payloads):
        """Insert every payload in one transaction; a failure leaves none of them."""
        products = [Product(**payload.values()) for payload in payloads]
        self._write(lambda: self.session.add_all(products))
        logger.info("%d product(s) created", len(products))
        return [p.product_id for p in products]

    def update_product(self, pid, payload: ProductPayload):
        _require_product_id(pid)
        stmt = (
            update(Product)
            .where(Product.product_id == pid)
            .values(**payload.values())
            .execution_options(synchronize_session=False)
        )
        changes = self._write(lambda: self.session.execute(stmt).rowcount)
        if changes == 0:
            raise NotFoundError("Product not found")
        return {"message": "Updated successfully", "changes": changes}

    def delete_product(self, pid):
        _require_product_id(pid)
        stmt = (
            delete(Product)
            .where(Product.product_id == pid)
            .execution_options(synchronize_session=False)
        )
        changes = self._write(lambda: self.session.execute(stmt).rowcount)
        if changes == 0:
            raise NotFoundError("Product not found")
        return {"message": "Deleted successfully", "changes": changes}

    def _write(self, op):
        """Run one write statement and commit it; rows affected come back from op."""
        try:
            result = op()
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            if _is_foreign_key_violation(e):
                raise ValidationError("category does not exist") from e
            if "check" in _store_text(e).lower():
                raise ValidationError(_store_text(e)) from e
            raise StoreError(_store_text(e)) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(_store_text(e)) from e
        return result
