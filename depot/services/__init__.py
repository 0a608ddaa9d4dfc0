"""
Depot services — one component per concern.

    from depot.services import StockLedger, TransferExecutor, RequestLifecycle, Catalog
"""

from depot.services.catalog import Catalog
from depot.services.ledger import StockLedger
from depot.services.requests import RequestLifecycle
from depot.services.transfers import TransferExecutor

__all__ = [
    'StockLedger',
    'TransferExecutor',
    'RequestLifecycle',
    'Catalog',
]
