"""
Domain errors raised by the repository and the transfer coordinator.

Every error knows the HTTP status it maps to; the app factory registers a
single handler that renders ``to_dict()`` as the JSON body.
"""


class InventoryError(Exception):
    status_code = 500
    reason = "error"
    default_message = "Internal error"

    def __init__(self, message=None, reason=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        if reason is not None:
            self.reason = reason

    def to_dict(self):
        return {"error": self.message, "reason": self.reason}


class ValidationError(InventoryError):
    status_code = 400
    reason = "invalid_request"
    default_message = "Invalid request"


class ConflictError(InventoryError):
    status_code = 409
    reason = "conflict"
    default_message = "Resource already exists"


class NotFoundError(InventoryError):
    status_code = 404
    reason = "not_found"
    default_message = "Not found"

    def to_dict(self):
        return {"message": self.message, "reason": self.reason}


class StoreError(InventoryError):
    status_code = 500
    reason = "store_error"
    default_message = "Store error"


# ---------------- transfer faults ----------------

class TransferError(InventoryError):
    """Base for faults raised by a stock transfer; ``state`` is the terminal state."""
    state = None


class BusinessRuleError(TransferError):
    status_code = 400


class InsufficientStockError(BusinessRuleError):
    reason = "insufficient_stock"
    state = "ABORTED_INSUFFICIENT"
    default_message = "Insufficient stock or source product not found"


class DestinationNotFoundError(BusinessRuleError):
    reason = "destination_not_found"
    state = "ABORTED_NO_DEST"
    default_message = "Destination product not found"


class TransferBeginError(TransferError):
    status_code = 500
    reason = "begin_failed"
    state = "BEGIN_FAILED"
    default_message = "Could not start transaction"


class ConsistencyRiskError(TransferError):
    status_code = 500
    reason = "commit_failed"
    state = "COMMIT_FAILED"
    default_message = (
        "Commit failed after debit and credit were applied; "
        "data consistency is at risk and stock levels must be verified"
    )

    def to_dict(self):
        body = super().to_dict()
        body["consistency_risk"] = True
        return body
