"""
Stock ledger — authoritative quantity-on-hand per (item, warehouse).

All methods run under transaction.atomic() with row locks, and every
decrement is also conditional at the SQL level, so concurrent debits
against the same row can never drive it below zero.
"""

import logging

from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from depot.exceptions import StockError
from depot.models.item import Item

logger = logging.getLogger('depot')

# Fields copied from a source row when the destination row is created
TEMPLATE_FIELDS = ('description', 'price', 'category')


def check_quantity(quantity) -> None:
    """Raise INVALID_QUANTITY unless quantity is a positive int."""
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise StockError('INVALID_QUANTITY', requested=quantity)


class StockLedger:
    """
    Read-modify-write of item quantities against one database alias.

    Usage:
        ledger = StockLedger(using='default')
        ledger.debit(item.pk, warehouse.pk, 5)
        ledger.credit_or_create(item.name, other.pk, 5, item.template)
    """

    def __init__(self, using: str = 'default'):
        self.using = using

    def items(self):
        return Item.objects.using(self.using)

    def debit(self, item_id, warehouse_id, quantity: int) -> Item:
        """
        Decrement the item row at (item_id, warehouse_id).

        Raises:
            StockError('NOT_FOUND'): No such row in that warehouse
            StockError('INSUFFICIENT_STOCK'): quantity > row.quantity
            StockError('INVALID_QUANTITY'): quantity <= 0

        Concurrency:
            - Locks the row with select_for_update()
            - UPDATE ... WHERE quantity >= requested, checked after lock
        """
        check_quantity(quantity)

        with transaction.atomic(using=self.using):
            try:
                item = self.items().select_for_update().get(
                    pk=item_id, warehouse_id=warehouse_id
                )
            except Item.DoesNotExist:
                raise StockError(
                    'NOT_FOUND',
                    entity='item',
                    item_id=item_id,
                    warehouse_id=warehouse_id,
                ) from None

            if item.quantity < quantity:
                raise StockError(
                    'INSUFFICIENT_STOCK',
                    available=item.quantity,
                    requested=quantity,
                    item_id=item_id,
                )

            updated = self.items().filter(
                pk=item.pk, quantity__gte=quantity
            ).update(
                quantity=F('quantity') - quantity,
                updated_at=timezone.now(),
            )
            item.refresh_from_db(using=self.using, fields=['quantity', 'updated_at'])

            if not updated:
                # Lost a race on a backend without row locks (SQLite)
                raise StockError(
                    'INSUFFICIENT_STOCK',
                    available=item.quantity,
                    requested=quantity,
                    item_id=item_id,
                )

            logger.info(
                "depot.ledger.debit",
                extra={
                    "item_id": item.pk,
                    "warehouse_id": warehouse_id,
                    "qty": quantity,
                    "remaining": item.quantity,
                },
            )
            return item

    def credit_or_create(self, item_name: str, warehouse_id, quantity: int,
                         template: dict | None = None) -> Item:
        """
        Increment the row named item_name at warehouse_id, creating it if absent.

        Lookup is by name, not by the source item's id: the same product
        accumulates into one row per warehouse. A new row is seeded from
        template (description, price, category).

        Concurrency:
            - Locks the existing row with select_for_update()
            - A concurrent create hitting unique_item_name_per_warehouse
              falls back to incrementing the winner's row
        """
        check_quantity(quantity)
        template = template or {}

        with transaction.atomic(using=self.using):
            item = self._locked(item_name, warehouse_id)

            if item is None:
                defaults = {
                    k: template[k] for k in TEMPLATE_FIELDS
                    if template.get(k) is not None
                }
                try:
                    with transaction.atomic(using=self.using):
                        item = self.items().create(
                            name=item_name,
                            warehouse_id=warehouse_id,
                            quantity=quantity,
                            **defaults,
                        )
                except IntegrityError:
                    item = self._locked(item_name, warehouse_id)
                    if item is None:
                        raise
                else:
                    logger.info(
                        "depot.ledger.created",
                        extra={
                            "item_id": item.pk,
                            "warehouse_id": warehouse_id,
                            "qty": quantity,
                        },
                    )
                    return item

            self.items().filter(pk=item.pk).update(
                quantity=F('quantity') + quantity,
                updated_at=timezone.now(),
            )
            item.refresh_from_db(using=self.using, fields=['quantity', 'updated_at'])
            logger.info(
                "depot.ledger.credit",
                extra={
                    "item_id": item.pk,
                    "warehouse_id": warehouse_id,
                    "qty": quantity,
                    "total": item.quantity,
                },
            )
            return item

    def _locked(self, item_name, warehouse_id) -> Item | None:
        return (
            self.items()
            .select_for_update()
            .named(item_name)
            .in_warehouse(warehouse_id)
            .first()
        )
