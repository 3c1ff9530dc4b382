from .filters import ProductFilter, build_product_query
from .repository import InventoryRepository, ProductPayload
from .transfer import StockTransfer, TransferResult, TransferState

__all__ = [
    "ProductFilter",
    "build_product_query",
    "InventoryRepository",
    "ProductPayload",
    "StockTransfer",
    "TransferResult",
    "TransferState",
]
