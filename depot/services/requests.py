"""
Request lifecycle — pending/approved/rejected transfer requests.

Approval delegates the stock change to TransferExecutor; rejection never
touches stock.
"""

import logging

from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction
from django.utils import timezone

from depot.exceptions import StockError
from depot.models.enums import RequestStatus
from depot.models.item import Item
from depot.models.movement import Movement
from depot.models.request import TransferRequest
from depot.models.warehouse import Warehouse
from depot.services.ledger import check_quantity
from depot.services.transfers import TransferExecutor

logger = logging.getLogger('depot')


class RequestLifecycle:
    """Transfer request state machine."""

    def __init__(self, executor: TransferExecutor | None = None, clock=timezone.now):
        self.executor = executor or TransferExecutor(clock=clock)
        self.clock = clock

    @property
    def using(self) -> str:
        return self.executor.using

    def requests(self):
        return TransferRequest.objects.using(self.using)

    def create(self, user_id, item_id, quantity: int,
               from_warehouse_id, to_warehouse_id) -> TransferRequest:
        """
        Submit a transfer request in PENDING.

        No stock check happens here; it is deferred to approve().

        Raises:
            StockError('INVALID_QUANTITY'): quantity <= 0
            StockError('NOT_FOUND'): User, item or a warehouse missing
        """
        check_quantity(quantity)

        references = [
            ('user', get_user_model(), user_id),
            ('item', Item, item_id),
            ('warehouse', Warehouse, from_warehouse_id),
            ('warehouse', Warehouse, to_warehouse_id),
        ]
        for entity, model, pk in references:
            if not model._default_manager.using(self.using).filter(pk=pk).exists():
                raise StockError('NOT_FOUND', entity=entity, id=pk)

        request = TransferRequest(
            user_id=user_id,
            item_id=item_id,
            quantity=quantity,
            from_warehouse_id=from_warehouse_id,
            to_warehouse_id=to_warehouse_id,
            timestamp=self.clock(),
            status=RequestStatus.PENDING,
        )
        try:
            request.save(using=self.using)
        except DatabaseError as exc:
            raise StockError('PERSISTENCE_FAILURE', operation='request.create') from exc

        logger.info(
            "depot.request.created",
            extra={
                "request_id": request.pk,
                "user_id": user_id,
                "item_id": item_id,
                "qty": quantity,
            },
        )
        return request

    def approve(self, request_id, user=None) -> Movement:
        """
        Approve a pending request and execute its transfer.

        Transition: PENDING -> APPROVED (only after a successful transfer)

        On transfer failure the error propagates and the request stays
        PENDING. A failure to persist the new status after the transfer
        committed is logged and the Movement is still returned;
        reconcile() repairs such requests later.

        Returns:
            Movement of the executed transfer

        Raises:
            StockError('NOT_FOUND'): No such request, or item missing at source
            StockError('INVALID_STATUS'): Request is not PENDING
            StockError('INSUFFICIENT_STOCK'): Source has less than requested
            StockError('PERSISTENCE_FAILURE'): Lock or transfer write failed
        """
        try:
            with transaction.atomic(using=self.using):
                request = self._lock(request_id)
                self._expect_pending(request)

                # A committed transfer whose status write was lost
                movement = request.movements.using(self.using).first()
                if movement is None:
                    movement = self.executor.transfer(
                        request.item_id,
                        request.quantity,
                        request.from_warehouse_id,
                        request.to_warehouse_id,
                        user=user if user is not None else request.user,
                        request=request,
                    )
                else:
                    logger.warning(
                        "depot.request.already_transferred",
                        extra={"request_id": request.pk, "movement_id": movement.pk},
                    )
        except DatabaseError as exc:
            raise StockError(
                'PERSISTENCE_FAILURE',
                operation='request.approve',
                request_id=request_id,
            ) from exc

        try:
            self._resolve(request, RequestStatus.APPROVED)
        except DatabaseError:
            logger.error(
                "depot.request.status_update_failed",
                extra={"request_id": request.pk, "movement_id": movement.pk},
                exc_info=True,
            )
            return movement

        logger.info(
            "depot.request.approved",
            extra={"request_id": request.pk, "movement_id": movement.pk},
        )
        return movement

    def reject(self, request_id) -> TransferRequest:
        """
        Reject a pending request. No stock interaction.

        Transition: PENDING -> REJECTED
        """
        try:
            with transaction.atomic(using=self.using):
                request = self._lock(request_id)
                self._expect_pending(request)
                self._resolve(request, RequestStatus.REJECTED)
        except DatabaseError as exc:
            raise StockError(
                'PERSISTENCE_FAILURE',
                operation='request.reject',
                request_id=request_id,
            ) from exc

        logger.info("depot.request.rejected", extra={"request_id": request.pk})
        return request

    def unreconciled(self):
        """PENDING requests whose transfer already committed."""
        transferred = Movement.objects.using(self.using).filter(
            request__isnull=False
        ).values('request_id')
        return self.requests().filter(
            status=RequestStatus.PENDING, pk__in=transferred
        )

    def reconcile(self) -> int:
        """
        Mark APPROVED every PENDING request that already has a Movement.

        Returns:
            Number of requests repaired
        """
        with transaction.atomic(using=self.using):
            ids = list(
                self.unreconciled().select_for_update().values_list('pk', flat=True)
            )
            if ids:
                self.requests().filter(pk__in=ids).update(
                    status=RequestStatus.APPROVED,
                    resolved_at=self.clock(),
                )

        if ids:
            logger.warning(
                "depot.requests.reconciled",
                extra={"reconciled": len(ids), "request_ids": ids},
            )
        return len(ids)

    def list_requests(self, status=None, user_id=None):
        """Requests newest first, optionally filtered."""
        qs = self.requests()
        if status is not None:
            qs = qs.filter(status=status)
        if user_id is not None:
            qs = qs.filter(user_id=user_id)
        return qs

    def _lock(self, request_id) -> TransferRequest:
        try:
            return self.requests().select_for_update().get(pk=request_id)
        except TransferRequest.DoesNotExist:
            raise StockError('NOT_FOUND', entity='request', request_id=request_id) from None

    def _expect_pending(self, request: TransferRequest) -> None:
        if request.status != RequestStatus.PENDING:
            raise StockError(
                'INVALID_STATUS',
                current=request.status,
                expected=RequestStatus.PENDING,
                request_id=request.pk,
            )

    def _resolve(self, request: TransferRequest, status) -> None:
        with transaction.atomic(using=self.using):
            request.status = status
            request.resolved_at = self.clock()
            request.save(using=self.using, update_fields=['status', 'resolved_at'])
