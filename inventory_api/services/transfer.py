# inventory_api/services/transfer.py
"""
Atomic stock transfer between two products.

One call owns one connection and walks a fixed sequence of steps:

    begin -> debit -> check -> credit -> check -> commit

The debit carries the stock-sufficiency guard in its own WHERE clause, so the
check and the decrement are one statement evaluated by the store; rows
affected is the only signal used to decide between continuing and rolling
back. Concurrent transfers on the same row are serialized by the store's row
(or database) locks, not here.

States::

    STARTED -> DEBITED | ABORTED_INSUFFICIENT
    DEBITED -> CREDITED | ABORTED_NO_DEST
    CREDITED -> COMMITTED | COMMIT_FAILED
    BEGIN_FAILED is reached before STARTED.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError

from ..errors import (
    ConsistencyRiskError,
    DestinationNotFoundError,
    InsufficientStockError,
    TransferBeginError,
    ValidationError,
)
from ..model import Product
from ..utils.parsing import in_int_range

logger = logging.getLogger(__name__)


class TransferState(str, enum.Enum):
    STARTED = "STARTED"
    DEBITED = "DEBITED"
    CREDITED = "CREDITED"
    COMMITTED = "COMMITTED"
    BEGIN_FAILED = "BEGIN_FAILED"
    ABORTED_INSUFFICIENT = "ABORTED_INSUFFICIENT"
    ABORTED_NO_DEST = "ABORTED_NO_DEST"
    COMMIT_FAILED = "COMMIT_FAILED"


@dataclass(frozen=True)
class StepResult:
    """Outcome of one conditional statement: rows affected, or the store's error text."""
    rowcount: int = 0
    error: Optional[str] = None

    @property
    def applied(self):
        return self.error is None and self.rowcount == 1


@dataclass(frozen=True)
class TransferResult:
    state: TransferState
    from_product_id: int
    to_product_id: int
    quantity: int

    @property
    def message(self):
        return (
            f"Moved {self.quantity} unit(s) from product {self.from_product_id} "
            f"to product {self.to_product_id}"
        )

    def as_api(self):
        return {
            "message": self.message,
            "from_product_id": self.from_product_id,
            "to_product_id": self.to_product_id,
            "quantity": self.quantity,
        }


def _require_int(value, field, positive=False):
    # bool is an int subclass; "true" is not a product id
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValidationError(f"{field} must be an integer")
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise ValidationError(f"{field} must be an integer") from None
    if not in_int_range(value):
        raise ValidationError(f"{field} is out of range")
    if positive and value <= 0:
        raise ValidationError(f"{field} must be greater than 0")
    return value


def debit_statement(product_id, quantity):
    return (
        update(Product.__table__)
        .where(Product.__table__.c.product_id == product_id)
        .where(Product.__table__.c.stock_quantity >= quantity)
        .values(stock_quantity=Product.__table__.c.stock_quantity - quantity)
    )


def credit_statement(product_id, quantity):
    return (
        update(Product.__table__)
        .where(Product.__table__.c.product_id == product_id)
        .values(stock_quantity=Product.__table__.c.stock_quantity + quantity)
    )


class StockTransfer:
    """Moves stock between two products in one transaction on ``engine``."""

    def __init__(self, engine):
        self.engine = engine

    def transfer(self, from_product_id, to_product_id, quantity) -> TransferResult:
        from_product_id = _require_int(from_product_id, "from_product_id")
        to_product_id = _require_int(to_product_id, "to_product_id")
        quantity = _require_int(quantity, "quantity", positive=True)
        label = f"transfer {from_product_id}->{to_product_id} x{quantity}"

        conn = None
        try:
            conn = self.engine.connect()
            trans = conn.begin()
        except SQLAlchemyError as e:
            if conn is not None:
                conn.close()
            logger.error("%s: %s: %s", label, TransferState.BEGIN_FAILED.value, e)
            raise TransferBeginError(f"Could not start transaction: {e}") from e

        # closing the connection rolls back whatever is still open
        with conn:
            logger.debug("%s: %s", label, TransferState.STARTED.value)

            debit = self._execute(conn, debit_statement(from_product_id, quantity))
            if not debit.applied:
                self._rollback(trans, label)
                logger.warning("%s: %s (%s)", label,
                               TransferState.ABORTED_INSUFFICIENT.value,
                               debit.error or "0 rows")
                raise InsufficientStockError(debit.error)
            logger.debug("%s: %s", label, TransferState.DEBITED.value)

            credit = self._execute(conn, credit_statement(to_product_id, quantity))
            if not credit.applied:
                self._rollback(trans, label)
                logger.warning("%s: %s (%s)", label,
                               TransferState.ABORTED_NO_DEST.value,
                               credit.error or "0 rows")
                raise DestinationNotFoundError(credit.error)
            logger.debug("%s: %s", label, TransferState.CREDITED.value)

            try:
                trans.commit()
            except SQLAlchemyError as e:
                logger.error("%s: %s, consistency at risk: %s", label,
                             TransferState.COMMIT_FAILED.value, e)
                raise ConsistencyRiskError(
                    f"{ConsistencyRiskError.default_message} ({e})"
                ) from e

        logger.info("%s: %s", label, TransferState.COMMITTED.value)
        return TransferResult(
            state=TransferState.COMMITTED,
            from_product_id=from_product_id,
            to_product_id=to_product_id,
            quantity=quantity,
        )

    @staticmethod
    def _execute(conn, stmt) -> StepResult:
        try:
            return StepResult(rowcount=conn.execute(stmt).rowcount)
        except SQLAlchemyError as e:
            return StepResult(error=str(getattr(e, "orig", None) or e))

    @staticmethod
    def _rollback(trans, label):
        try:
            trans.rollback()
        except SQLAlchemyError:
            logger.exception("%s: rollback failed", label)
