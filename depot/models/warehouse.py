"""
Warehouse model — Where stock is kept.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Warehouse(models.Model):
    """
    A physical location holding item stock.

    Referenced by Item, Movement and TransferRequest; has no behavior itself.
    """

    name = models.CharField(
        max_length=100,
        verbose_name=_('Name'),
    )
    address = models.CharField(
        max_length=255,
        blank=True,
        default='',
        verbose_name=_('Address'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Warehouse')
        verbose_name_plural = _('Warehouses')
        ordering = ['name']

    def as_dict(self) -> dict:
        return {'id': self.pk, 'name': self.name, 'address': self.address}

    def __str__(self) -> str:
        return self.name
