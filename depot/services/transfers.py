"""
Transfer executor — debit, credit and movement log as one unit.
"""

import logging

from django.db import DatabaseError, transaction
from django.utils import timezone

from depot.exceptions import StockError
from depot.models.enums import MovementType
from depot.models.movement import Movement
from depot.models.warehouse import Warehouse
from depot.services.ledger import StockLedger, check_quantity

logger = logging.getLogger('depot')


class TransferExecutor:
    """
    Executes one stock transfer and records it.

    The debit, the credit and the Movement share one transaction: a
    failure in any step rolls back the others, so the source is never
    left debited without a matching credit and log entry.
    """

    def __init__(self, ledger: StockLedger | None = None, clock=timezone.now):
        self.ledger = ledger or StockLedger()
        self.clock = clock

    @property
    def using(self) -> str:
        return self.ledger.using

    def transfer(self, item_id, quantity: int, from_warehouse_id, to_warehouse_id,
                 user=None, request=None) -> Movement:
        """
        Move quantity of item_id from one warehouse to another.

        Steps:
            1. Debit the source row (item_id at from_warehouse_id)
            2. Credit or create the destination row by the source's name
            3. Append a Movement of type 'transfer'

        Returns:
            Created Movement

        Raises:
            StockError('INVALID_QUANTITY'): quantity <= 0, nothing touched
            StockError('NOT_FOUND'): Source row or destination warehouse missing
            StockError('INSUFFICIENT_STOCK'): Source has less than quantity
            StockError('PERSISTENCE_FAILURE'): Storage failed, all steps rolled back
        """
        check_quantity(quantity)

        try:
            with transaction.atomic(using=self.using):
                if not Warehouse.objects.using(self.using).filter(pk=to_warehouse_id).exists():
                    raise StockError(
                        'NOT_FOUND',
                        entity='warehouse',
                        warehouse_id=to_warehouse_id,
                    )

                source = self.ledger.debit(item_id, from_warehouse_id, quantity)
                destination = self.ledger.credit_or_create(
                    source.name, to_warehouse_id, quantity, source.template
                )

                movement = Movement(
                    item_id=source.pk,
                    quantity=quantity,
                    timestamp=self.clock(),
                    from_warehouse_id=from_warehouse_id,
                    to_warehouse_id=to_warehouse_id,
                    type=MovementType.TRANSFER,
                    user=user,
                    request=request,
                )
                movement.save(using=self.using)
        except DatabaseError as exc:
            logger.error(
                "depot.transfer.failed",
                extra={
                    "item_id": item_id,
                    "qty": quantity,
                    "from_warehouse_id": from_warehouse_id,
                    "to_warehouse_id": to_warehouse_id,
                },
                exc_info=True,
            )
            raise StockError(
                'PERSISTENCE_FAILURE',
                operation='transfer',
                item_id=item_id,
                error=str(exc),
            ) from exc

        logger.info(
            "depot.transfer",
            extra={
                "movement_id": movement.pk,
                "item_id": source.pk,
                "destination_item_id": destination.pk,
                "qty": quantity,
                "from_warehouse_id": from_warehouse_id,
                "to_warehouse_id": to_warehouse_id,
                "request_id": request.pk if request is not None else None,
            },
        )
        return movement
