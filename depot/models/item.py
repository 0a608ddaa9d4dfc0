"""
Item model — Quantity-on-hand of one product in one warehouse.
"""

from django.db import models
from django.db.models import Q
from django.utils.translation import gettext_lazy as _


class ItemQuerySet(models.QuerySet):
    """Helpers for Item lookups."""

    def in_warehouse(self, warehouse_id):
        return self.filter(warehouse_id=warehouse_id)

    def named(self, name):
        return self.filter(name=name)

    def search(self, name=None, category=None):
        """Case-insensitive substring match, OR-combined when both are given."""
        condition = Q()
        if name:
            condition |= Q(name__icontains=name)
        if category:
            condition |= Q(category__icontains=category)
        return self.filter(condition)


class Item(models.Model):
    """
    Stock record of a product at a warehouse.

    Two rows with the same name may coexist in different warehouses: they are
    distinct stock records, not one catalog entry sharded by location.

    quantity is only changed through StockLedger and never goes negative.
    """

    name = models.CharField(
        max_length=200,
        verbose_name=_('Name'),
    )
    description = models.TextField(
        blank=True,
        default='',
        verbose_name=_('Description'),
    )
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name=_('Price'),
    )
    category = models.CharField(
        max_length=100,
        blank=True,
        default='',
        db_index=True,
        verbose_name=_('Category'),
    )
    quantity = models.PositiveIntegerField(
        default=0,
        verbose_name=_('Quantity'),
    )
    warehouse = models.ForeignKey(
        'depot.Warehouse',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='items',
        verbose_name=_('Warehouse'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ItemQuerySet.as_manager()

    class Meta:
        verbose_name = _('Item')
        verbose_name_plural = _('Items')
        ordering = ['name', 'pk']
        constraints = [
            models.CheckConstraint(
                condition=Q(quantity__gte=0),
                name='item_quantity_non_negative',
            ),
            models.UniqueConstraint(
                fields=['name', 'warehouse'],
                name='unique_item_name_per_warehouse',
            ),
        ]
        indexes = [
            models.Index(fields=['name', 'warehouse'], name='depot_item_name_0f1c2a_idx'),
        ]

    @property
    def template(self) -> dict:
        """Descriptive fields copied onto a new destination row."""
        return {
            'description': self.description,
            'price': self.price,
            'category': self.category,
        }

    def as_dict(self) -> dict:
        return {
            'id': self.pk,
            'name': self.name,
            'description': self.description,
            'price': self.price,
            'category': self.category,
            'quantity': self.quantity,
            'warehouse_id': self.warehouse_id,
        }

    def __str__(self) -> str:
        where = self.warehouse.name if self.warehouse_id else '?'
        return f"{self.name} [{where}]: {self.quantity}"
