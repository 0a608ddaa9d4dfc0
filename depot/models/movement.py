"""
Movement model — Immutable log of completed transfers.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from depot.models.enums import MovementType


class MovementQuerySet(models.QuerySet):

    def involving(self, warehouse_id):
        """Movements where the warehouse is the source or the destination."""
        return self.filter(
            models.Q(from_warehouse_id=warehouse_id) | models.Q(to_warehouse_id=warehouse_id)
        )


class Movement(models.Model):
    """
    Immutable record of an already-applied stock change.

    Rules:
    - NEVER update() or delete()
    - Created only by TransferExecutor, inside the same transaction
      as the debit and credit it describes
    """

    item = models.ForeignKey(
        'depot.Item',
        on_delete=models.PROTECT,
        related_name='movements',
        verbose_name=_('Item'),
    )
    quantity = models.PositiveIntegerField(
        verbose_name=_('Quantity'),
    )
    timestamp = models.DateTimeField(
        default=timezone.now,
        db_index=True,
        verbose_name=_('Date/Time'),
    )
    from_warehouse = models.ForeignKey(
        'depot.Warehouse',
        on_delete=models.PROTECT,
        related_name='outgoing_movements',
        verbose_name=_('From'),
    )
    to_warehouse = models.ForeignKey(
        'depot.Warehouse',
        on_delete=models.PROTECT,
        related_name='incoming_movements',
        verbose_name=_('To'),
    )
    type = models.CharField(
        max_length=20,
        choices=MovementType.choices,
        default=MovementType.TRANSFER,
        verbose_name=_('Type'),
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('User'),
    )
    request = models.ForeignKey(
        'depot.TransferRequest',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='movements',
        verbose_name=_('Request'),
    )

    objects = MovementQuerySet.as_manager()

    class Meta:
        verbose_name = _('Movement')
        verbose_name_plural = _('Movements')
        ordering = ['timestamp', 'pk']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gt=0),
                name='movement_quantity_positive',
            ),
        ]
        indexes = [
            models.Index(fields=['from_warehouse', 'timestamp'], name='depot_movem_from_wa_3b9e1d_idx'),
            models.Index(fields=['to_warehouse', 'timestamp'], name='depot_movem_to_ware_7c4a2f_idx'),
        ]

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValueError(
                "Movements are immutable. "
                "To correct stock, record a new transfer."
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("Movements are immutable and cannot be deleted.")

    def as_dict(self) -> dict:
        return {
            'id': self.pk,
            'item_id': self.item_id,
            'quantity': self.quantity,
            'from_warehouse_id': self.from_warehouse_id,
            'to_warehouse_id': self.to_warehouse_id,
            'timestamp': self.timestamp,
            'type': self.type,
        }

    def __str__(self) -> str:
        return f"{self.type} {self.quantity} | {self.from_warehouse_id} → {self.to_warehouse_id}"
