# inventory_api/cli.py
import logging
from pathlib import Path

import click
import pandas as pd
from flask.cli import with_appcontext

from .errors import InventoryError, ValidationError
from .extensions import db
from .schema import FAILED, ensure_schema
from .services import InventoryRepository, ProductFilter, ProductPayload, StockTransfer

logger = logging.getLogger(__name__)

DEMO_CATEGORIES = ["Electronics", "Books", "Groceries"]
DEMO_PRODUCTS = [
    # name, price, quantity, category
    ("Laptop", "699.99", 10, "Electronics"),
    ("Science Fiction Novel", "14.50", 50, "Books"),
    ("Apples", "0.99", 200, "Groceries"),
]

EXPORT_COLUMNS = ["product_id", "product_name", "price", "stock_quantity", "category_name"]
IMPORT_REQUIRED = ["name", "price", "quantity"]


def seed_demo_data(repo: InventoryRepository):
    """Insert the demo categories that are missing; products only into an empty table."""
    existing = repo.category_ids_by_name()
    for name in DEMO_CATEGORIES:
        if name not in existing:
            repo.create_category(name)
    cat_ids = repo.category_ids_by_name()

    created = 0
    if repo.count_products() == 0:
        for name, price, qty, cat in DEMO_PRODUCTS:
            repo.create_product(ProductPayload.from_json(
                {"name": name, "price": price, "quantity": qty, "category_id": cat_ids[cat]}
            ))
            created += 1
    logger.info("Seeded demo data: %d product(s) created", created)
    return created


def _read_frame(path: Path):
    if path.suffix.lower() == ".xlsx":
        return pd.read_excel(path)
    return pd.read_csv(path)


def _cell(row, column):
    v = row.get(column)
    return None if v is None or pd.isna(v) else v


def read_import_rows(path: Path, categories):
    """Parse every row into a ProductPayload; any bad row aborts before a write."""
    df = _read_frame(path)
    df.columns = df.columns.str.strip()
    missing = [c for c in IMPORT_REQUIRED if c not in df.columns]
    if missing:
        raise ValidationError(f"Missing required columns: {', '.join(missing)}")

    payloads = []
    for line, row in enumerate(df.to_dict(orient="records"), start=2):
        cat_name = _cell(row, "category_name")
        category_id = None
        if cat_name is not None:
            category_id = categories.get(str(cat_name).strip())
            if category_id is None:
                raise ValidationError(f"line {line}: unknown category '{cat_name}'")
        qty = _cell(row, "quantity")
        try:
            payloads.append(ProductPayload.from_json({
                "name": _cell(row, "name"),
                "price": _cell(row, "price"),
                # pandas reads whole numbers as int64 or float64
                "quantity": int(qty) if isinstance(qty, float) and qty.is_integer() else qty,
                "category_id": category_id,
            }))
        except ValidationError as e:
            raise ValidationError(f"line {line}: {e.message}") from e
    return payloads


@click.command("init-db")
@with_appcontext
def init_db():
    report = ensure_schema(db.engine)
    for name, outcome in report.items():
        click.echo(f"{name}: {outcome}")
    if FAILED in report.values():
        raise click.ClickException("schema is incomplete, see the log")


@click.command("seed")
@with_appcontext
def seed():
    created = seed_demo_data(InventoryRepository(db.session))
    click.echo(f"Demo data ready ({created} product(s) created)")


@click.command("export-products")
@with_appcontext
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--min-price", type=float)
@click.option("--max-price", type=float)
@click.option("--min-qty", type=int)
@click.option("--max-qty", type=int)
def export_products(path, min_price, max_price, min_qty, max_qty):
    """Write the product listing to PATH (.csv, or .xlsx)."""
    product_filter = ProductFilter(min_price, max_price, min_qty, max_qty)
    rows = InventoryRepository(db.session).list_products(product_filter)
    df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)
    if path.suffix.lower() == ".xlsx":
        df.to_excel(path, index=False)
    else:
        df.to_csv(path, index=False)
    logger.info("Exported %d product(s) to %s", len(df), path)
    click.echo(f"{len(df)} product(s) exported to {path}")


@click.command("import-products")
@with_appcontext
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def import_products(path):
    """Create one product per row of PATH (.csv or .xlsx), all or none."""
    repo = InventoryRepository(db.session)
    try:
        payloads = read_import_rows(path, repo.category_ids_by_name())
        repo.create_products(payloads)
    except InventoryError as e:
        raise click.ClickException(e.message) from e
    logger.info("Imported %d product(s) from %s", len(payloads), path)
    click.echo(f"{len(payloads)} product(s) imported from {path}")


@click.command("transfer")
@with_appcontext
@click.argument("from_product_id", type=int)
@click.argument("to_product_id", type=int)
@click.argument("quantity", type=int)
def transfer(from_product_id, to_product_id, quantity):
    """Move QUANTITY units of stock between two products."""
    try:
        result = StockTransfer(db.engine).transfer(from_product_id, to_product_id, quantity)
    except InventoryError as e:
        raise click.ClickException(e.message) from e
    click.echo(result.message)


def register_cli(app):
    for command in (init_db, seed, export_products, import_products, transfer):
        app.cli.add_command(command)
