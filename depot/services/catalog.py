"""
Catalog — warehouse and item administration, search and reports.

Quantity never changes here except through StockLedger (receive).
"""

import logging

from django.db import DatabaseError, transaction
from django.db.models import ProtectedError

from depot.conf import get_depot_settings
from depot.exceptions import StockError
from depot.inputs import ItemInput, ItemUpdateInput, WarehouseInput
from depot.models.item import Item
from depot.models.movement import Movement
from depot.models.warehouse import Warehouse
from depot.services.ledger import StockLedger, check_quantity

logger = logging.getLogger('depot')


class Catalog:
    """CRUD for warehouses and items, plus read-side queries."""

    def __init__(self, ledger: StockLedger | None = None):
        self.ledger = ledger or StockLedger()

    @property
    def using(self) -> str:
        return self.ledger.using

    def warehouses(self):
        return Warehouse.objects.using(self.using)

    # ══════════════════════════════════════════════════════════════
    # WAREHOUSES
    # ══════════════════════════════════════════════════════════════

    def create_warehouse(self, data: WarehouseInput) -> Warehouse:
        warehouse = Warehouse(name=data.name, address=data.address)
        try:
            warehouse.save(using=self.using)
        except DatabaseError as exc:
            raise StockError('PERSISTENCE_FAILURE', operation='warehouse.create') from exc
        logger.info("depot.warehouse.created", extra={"warehouse_id": warehouse.pk})
        return warehouse

    def get_warehouse(self, warehouse_id) -> Warehouse:
        try:
            return self.warehouses().get(pk=warehouse_id)
        except Warehouse.DoesNotExist:
            raise StockError('NOT_FOUND', entity='warehouse', warehouse_id=warehouse_id) from None

    def list_warehouses(self):
        return self.warehouses().all()

    def update_warehouse(self, warehouse_id, data: WarehouseInput) -> Warehouse:
        warehouse = self.get_warehouse(warehouse_id)
        warehouse.name = data.name
        warehouse.address = data.address
        try:
            warehouse.save(using=self.using, update_fields=['name', 'address', 'updated_at'])
        except DatabaseError as exc:
            raise StockError('PERSISTENCE_FAILURE', operation='warehouse.update') from exc
        return warehouse

    def delete_warehouse(self, warehouse_id) -> None:
        """
        Raises:
            StockError('IN_USE'): Items, movements or requests reference it
        """
        warehouse = self.get_warehouse(warehouse_id)
        try:
            with transaction.atomic(using=self.using):
                warehouse.delete(using=self.using)
        except ProtectedError:
            raise StockError('IN_USE', entity='warehouse', warehouse_id=warehouse_id) from None
        logger.info("depot.warehouse.deleted", extra={"warehouse_id": warehouse_id})

    # ══════════════════════════════════════════════════════════════
    # ITEMS
    # ══════════════════════════════════════════════════════════════

    def create_item(self, data: ItemInput) -> Item:
        """
        Register a stock row, optionally with an opening quantity.

        Raises:
            StockError('NOT_FOUND'): warehouse_id given but missing
            StockError('ITEM_EXISTS'): Same name already stocked there
        """
        if data.warehouse_id is not None:
            self.get_warehouse(data.warehouse_id)
            self._expect_unique(data.name, data.warehouse_id)

        item = Item(
            name=data.name,
            description=data.description,
            price=data.price,
            category=data.category,
            quantity=data.quantity,
            warehouse_id=data.warehouse_id,
        )
        try:
            item.save(using=self.using)
        except DatabaseError as exc:
            raise StockError('PERSISTENCE_FAILURE', operation='item.create') from exc
        logger.info(
            "depot.item.created",
            extra={"item_id": item.pk, "warehouse_id": item.warehouse_id, "qty": item.quantity},
        )
        return item

    def get_item(self, item_id) -> Item:
        try:
            return self.ledger.items().select_related('warehouse').get(pk=item_id)
        except Item.DoesNotExist:
            raise StockError('NOT_FOUND', entity='item', item_id=item_id) from None

    def update_item(self, item_id, data: ItemUpdateInput) -> Item:
        """
        Update the fields supplied in data; omitted fields keep their value.

        Stock never changes here. Re-homing a row is only allowed while it
        is empty: stocked quantity moves through TransferExecutor so that
        every change is logged as a Movement.

        Raises:
            StockError('INVALID_INPUT'): Warehouse change on a stocked row
            StockError('NOT_FOUND'): Target warehouse missing
            StockError('ITEM_EXISTS'): Name already stocked in the target warehouse
        """
        changes = data.model_dump(exclude_unset=True)
        if not changes:
            return self.get_item(item_id)

        try:
            with transaction.atomic(using=self.using):
                try:
                    item = self.ledger.items().select_for_update().get(pk=item_id)
                except Item.DoesNotExist:
                    raise StockError('NOT_FOUND', entity='item', item_id=item_id) from None

                warehouse_id = changes.get('warehouse_id', item.warehouse_id)
                if warehouse_id != item.warehouse_id:
                    if item.quantity > 0:
                        raise StockError(
                            'INVALID_INPUT',
                            field='warehouse_id',
                            reason='item is stocked; move it with a transfer',
                            quantity=item.quantity,
                        )
                    if warehouse_id is not None:
                        self.get_warehouse(warehouse_id)

                name = changes.get('name', item.name)
                if warehouse_id is not None and (name, warehouse_id) != (item.name, item.warehouse_id):
                    self._expect_unique(name, warehouse_id)

                for field, value in changes.items():
                    setattr(item, field, value)
                update_fields = [
                    'warehouse' if field == 'warehouse_id' else field
                    for field in changes
                ]
                item.save(using=self.using, update_fields=update_fields + ['updated_at'])
        except DatabaseError as exc:
            raise StockError('PERSISTENCE_FAILURE', operation='item.update') from exc

        logger.info(
            "depot.item.updated",
            extra={"item_id": item.pk, "fields": sorted(changes)},
        )
        return item


    def delete_item(self, item_id) -> None:
        item = self.get_item(item_id)
        try:
            with transaction.atomic(using=self.using):
                item.delete(using=self.using)
        except ProtectedError:
            raise StockError('IN_USE', entity='item', item_id=item_id) from None
        logger.info("depot.item.deleted", extra={"item_id": item_id})

    def search_items(self, name: str | None = None, category: str | None = None):
        """
        Items whose name or category contains the given terms (case-insensitive).

        Both terms empty returns every item. Capped at SEARCH_LIMIT.
        """
        qs = self.ledger.items().select_related('warehouse')
        if name or category:
            qs = qs.search(name=name, category=category)
        return qs[:get_depot_settings().SEARCH_LIMIT]

    def receive(self, item_id, quantity: int) -> Item:
        """
        Stock-in for an existing item row.

        Raises:
            StockError('INVALID_INPUT'): Item not assigned to a warehouse
        """
        check_quantity(quantity)
        item = self.get_item(item_id)
        if item.warehouse_id is None:
            raise StockError('INVALID_INPUT', field='warehouse_id', reason='item has no warehouse')
        try:
            return self.ledger.credit_or_create(
                item.name, item.warehouse_id, quantity, item.template
            )
        except DatabaseError as exc:
            raise StockError('PERSISTENCE_FAILURE', operation='receive', item_id=item_id) from exc

    # ══════════════════════════════════════════════════════════════
    # REPORTS
    # ══════════════════════════════════════════════════════════════

    def movement_report(self, warehouse_id, limit: int | None = None):
        """Movements leaving or entering the warehouse, newest first."""
        self.get_warehouse(warehouse_id)
        if limit is None:
            limit = get_depot_settings().REPORT_LIMIT
        return (
            Movement.objects.using(self.using)
            .involving(warehouse_id)
            .select_related('item', 'from_warehouse', 'to_warehouse')
            .order_by('-timestamp', '-pk')[:limit]
        )

    def _expect_unique(self, name, warehouse_id) -> None:
        if self.ledger.items().named(name).in_warehouse(warehouse_id).exists():
            raise StockError('ITEM_EXISTS', name=name, warehouse_id=warehouse_id)
