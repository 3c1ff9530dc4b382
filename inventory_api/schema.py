# --- inventory_api/schema.py ---
import logging

from sqlalchemy.exc import SQLAlchemyError

from .extensions import db
from . import model  # noqa: F401  registers the tables on db.metadata

logger = logging.getLogger(__name__)

READY = "ready"
EXISTS = "exists"
FAILED = "failed"


def _already_exists(exc):
    return "already exists" in str(getattr(exc, "orig", None) or exc).lower()


def _create(obj, engine):
    try:
        obj.create(bind=engine, checkfirst=True)
    except SQLAlchemyError as e:
        if _already_exists(e):
            logger.debug("%s already exists", obj.name)
            return EXISTS
        logger.error("Could not create %s: %s", obj.name, e)
        return FAILED
    return READY


def ensure_schema(engine, metadata=None):
    """
    Create every table, then every index, one object at a time.

    Returns a ``{name: outcome}`` mapping. A store error other than
    "already exists" is logged and reported as ``failed``; it is never raised,
    the schema may already have been provisioned by an earlier run.
    """
    metadata = metadata or db.metadata
    report = {}

    for table in metadata.sorted_tables:
        report[table.name] = _create(table, engine)

    # a table found on an earlier run skips its indexes above
    for table in metadata.sorted_tables:
        for index in sorted(table.indexes, key=lambda i: i.name):
            report[index.name] = _create(index, engine)

    for name, outcome in report.items():
        if outcome != FAILED:
            logger.info("Table/Index '%s' is %s.", name, outcome)
    return report
