"""
TransferRequest model — User-submitted request to move stock.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from depot.models.enums import RequestStatus


class TransferRequest(models.Model):
    """
    Request to move stock between warehouses, pending review.

    LIFECYCLE:

        ┌─────────┐   approve() ok    ┌──────────┐
        │ PENDING │ ────────────────► │ APPROVED │
        └─────────┘                   └──────────┘
          │    ▲
          │    └── approve() failed (status unchanged)
          │
          │ reject()                  ┌──────────┐
          └─────────────────────────► │ REJECTED │
                                      └──────────┘

    APPROVED and REJECTED are terminal. No stock is checked at creation;
    validation happens on approval through TransferExecutor.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='transfer_requests',
        verbose_name=_('Requested by'),
    )
    item = models.ForeignKey(
        'depot.Item',
        on_delete=models.PROTECT,
        related_name='transfer_requests',
        verbose_name=_('Item'),
    )
    quantity = models.PositiveIntegerField(
        verbose_name=_('Quantity'),
    )
    from_warehouse = models.ForeignKey(
        'depot.Warehouse',
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('From'),
    )
    to_warehouse = models.ForeignKey(
        'depot.Warehouse',
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('To'),
    )
    timestamp = models.DateTimeField(
        default=timezone.now,
        db_index=True,
        verbose_name=_('Submitted at'),
    )
    status = models.CharField(
        max_length=20,
        choices=RequestStatus.choices,
        default=RequestStatus.PENDING,
        db_index=True,
        verbose_name=_('Status'),
    )
    resolved_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name=_('Resolved at'),
    )

    class Meta:
        verbose_name = _('Transfer request')
        verbose_name_plural = _('Transfer requests')
        ordering = ['-timestamp', '-pk']

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING

    def as_dict(self) -> dict:
        return {
            'id': self.pk,
            'user_id': self.user_id,
            'item_id': self.item_id,
            'quantity': self.quantity,
            'from_warehouse_id': self.from_warehouse_id,
            'to_warehouse_id': self.to_warehouse_id,
            'timestamp': self.timestamp,
            'status': self.status,
        }

    def __str__(self) -> str:
        return f"Request #{self.pk} ({self.status}): {self.quantity} of item {self.item_id}"
