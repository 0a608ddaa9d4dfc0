"""
Enums for Depot models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class RequestStatus(models.TextChoices):
    """TransferRequest lifecycle status."""
    PENDING = 'pending', _('Pending')       # Submitted, awaiting review
    APPROVED = 'approved', _('Approved')    # Transfer executed
    REJECTED = 'rejected', _('Rejected')    # Declined, no stock change


class MovementType(models.TextChoices):
    """Kind of completed stock change recorded by a Movement."""
    TRANSFER = 'transfer', _('Transfer')
