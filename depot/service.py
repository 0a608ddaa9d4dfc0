"""
Depot Service: the single public interface for inventory operations.

Usage:
    from depot import inventory, StockError

    inventory.transfer(TransferInput(
        item_id=item.pk, quantity=10, from_warehouse_id=main.pk, to_warehouse_id=annex.pk,
    ))
    req = inventory.submit({
        "user_id": user.pk, "item_id": item.pk, "quantity": 5,
        "from_warehouse_id": main.pk, "to_warehouse_id": annex.pk,
    })
    inventory.approve(req.pk)

A Depot is bound to one database alias and one clock; build another
instance to target a different store:

    Depot(using='replica_writer', clock=frozen_clock)
"""

from typing import Any, Mapping

from django.utils import timezone

from depot.inputs import RequestInput, TransferInput
from depot.models.movement import Movement
from depot.models.request import TransferRequest
from depot.services import Catalog, RequestLifecycle, StockLedger, TransferExecutor


class Depot:
    """Facade over the ledger, transfer, request and catalog components."""

    def __init__(self, using: str = 'default', clock=timezone.now):
        self.ledger = StockLedger(using=using)
        self.transfers = TransferExecutor(self.ledger, clock=clock)
        self.requests = RequestLifecycle(self.transfers, clock=clock)
        self.catalog = Catalog(self.ledger)

    @property
    def using(self) -> str:
        return self.ledger.using

    def transfer(self, data: TransferInput | Mapping[str, Any], user=None) -> Movement:
        """
        Direct transfer. See TransferExecutor.transfer.

        Accepts a TransferInput or a raw payload validated into one.
        """
        if not isinstance(data, TransferInput):
            data = TransferInput.from_payload(data)
        return self.transfers.transfer(
            data.item_id,
            data.quantity,
            data.from_warehouse_id,
            data.to_warehouse_id,
            user=user,
        )

    def submit(self, data: RequestInput | Mapping[str, Any]) -> TransferRequest:
        """Create a PENDING transfer request from a RequestInput or raw payload."""
        if not isinstance(data, RequestInput):
            data = RequestInput.from_payload(data)
        return self.requests.create(
            data.user_id,
            data.item_id,
            data.quantity,
            data.from_warehouse_id,
            data.to_warehouse_id,
        )

    def approve(self, request_id, user=None) -> Movement:
        return self.requests.approve(request_id, user=user)

    def reject(self, request_id) -> TransferRequest:
        return self.requests.reject(request_id)

    def reconcile(self) -> int:
        return self.requests.reconcile()

    def receive(self, item_id, quantity: int):
        return self.catalog.receive(item_id, quantity)

    def movement_report(self, warehouse_id, limit: int | None = None):
        return self.catalog.movement_report(warehouse_id, limit=limit)


_default = None


def get_inventory() -> Depot:
    """Default Depot on the 'default' alias, created on first use."""
    global _default
    if _default is None:
        _default = Depot()
    return _default
