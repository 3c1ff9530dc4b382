# inventory_api/model/product.py
from ..extensions import db


class Product(db.Model):
    __tablename__ = "Products"
    product_id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    product_name = db.Column(db.Text, nullable=False)
    # asdecimal=False: rows come back as float, ready for JSON
    price = db.Column(db.Numeric(10, 2, asdecimal=False), nullable=False)
    stock_quantity = db.Column(db.Integer, nullable=False)
    category_id = db.Column(
        db.Integer,
        db.ForeignKey("Categories.category_id"),
        nullable=True
    )

    __table_args__ = (
        db.CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        db.CheckConstraint("stock_quantity >= 0", name="ck_products_stock_non_negative"),
        db.Index("idx_products_name", "product_name"),
        db.Index("idx_products_price_stock", "price", "stock_quantity"),
    )

    def as_api(self):
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "price": self.price,
            "stock_quantity": self.stock_quantity,
            "category_id": self.category_id,
            "category_name": self.category.category_name if self.category else None,
        }
