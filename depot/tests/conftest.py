"""
Pytest fixtures for Depot tests.
"""

from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from depot.models import Item, Warehouse
from depot.service import Depot


User = get_user_model()


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        username='clerk',
        password='testpass123'
    )


@pytest.fixture
def reviewer(db):
    """Create a staff user who reviews requests."""
    return User.objects.create_user(
        username='reviewer',
        password='testpass123',
        is_staff=True,
    )


@pytest.fixture
def main(db):
    """Main warehouse."""
    return Warehouse.objects.create(name='Main', address='1 Dock Road')


@pytest.fixture
def annex(db):
    """Secondary warehouse."""
    return Warehouse.objects.create(name='Annex', address='2 Dock Road')


@pytest.fixture
def widget(main):
    """10 widgets stocked at Main."""
    return Item.objects.create(
        name='Widget',
        description='Blue widget',
        price=Decimal('10.50'),
        category='Hardware',
        quantity=10,
        warehouse=main,
    )


@pytest.fixture
def now():
    return datetime(2026, 3, 6, 9, 30, tzinfo=dt_timezone.utc)


@pytest.fixture
def inventory(db, now):
    """Depot bound to the default alias and a frozen clock."""
    return Depot(using='default', clock=lambda: now)
