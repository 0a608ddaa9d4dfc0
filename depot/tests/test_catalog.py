"""
Tests for Catalog: warehouse/item administration, search and reports.
"""

from decimal import Decimal
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from depot import StockError
from depot.inputs import ItemInput, ItemUpdateInput, WarehouseInput
from depot.models import Item, Warehouse
from depot.tests.helpers import move


pytestmark = pytest.mark.django_db


class TestWarehouses:

    def test_create_and_update_warehouse(self, inventory):
        warehouse = inventory.catalog.create_warehouse(WarehouseInput(name='North'))
        inventory.catalog.update_warehouse(
            warehouse.pk, WarehouseInput(name='North Hub', address='5 Ring St')
        )

        warehouse.refresh_from_db()
        assert (warehouse.name, warehouse.address) == ('North Hub', '5 Ring St')

    def test_delete_unused_warehouse(self, inventory, annex):
        inventory.catalog.delete_warehouse(annex.pk)

        assert not Warehouse.objects.filter(pk=annex.pk).exists()

    def test_delete_warehouse_in_use(self, inventory, widget, main):
        """A warehouse still holding items cannot be deleted."""
        with pytest.raises(StockError) as exc:
            inventory.catalog.delete_warehouse(main.pk)

        assert exc.value.code == 'IN_USE'
        assert Warehouse.objects.filter(pk=main.pk).exists()

    def test_get_missing_warehouse(self, inventory):
        with pytest.raises(StockError) as exc:
            inventory.catalog.get_warehouse(999_999)

        assert exc.value.code == 'NOT_FOUND'


class TestItems:

    def test_create_item_with_opening_stock(self, inventory, main):
        item = inventory.catalog.create_item(ItemInput(
            name='Gear', price=Decimal('3.20'), category='Parts',
            quantity=12, warehouse_id=main.pk,
        ))

        assert item.quantity == 12
        assert item.warehouse_id == main.pk

    def test_create_duplicate_name_in_warehouse(self, inventory, widget, main):
        with pytest.raises(StockError) as exc:
            inventory.catalog.create_item(ItemInput(name='Widget', warehouse_id=main.pk))

        assert exc.value.code == 'ITEM_EXISTS'

    def test_same_name_in_other_warehouse_allowed(self, inventory, widget, annex):
        item = inventory.catalog.create_item(ItemInput(name='Widget', warehouse_id=annex.pk))

        assert item.pk != widget.pk

    def test_update_item_keeps_omitted_fields(self, inventory, widget, main):
        """Only supplied fields change; quantity only moves through the ledger."""
        item = inventory.catalog.update_item(widget.pk, ItemUpdateInput(description='Red widget'))

        assert item.description == 'Red widget'
        widget.refresh_from_db()
        assert widget.description == 'Red widget'
        assert widget.warehouse_id == main.pk
        assert widget.price == Decimal('10.50')
        assert widget.category == 'Hardware'
        assert widget.quantity == 10

    def test_update_item_from_payload_can_clear_price(self, inventory, widget):
        inventory.catalog.update_item(
            widget.pk, ItemUpdateInput.from_payload({'price': None, 'quantity': 999})
        )

        widget.refresh_from_db()
        assert widget.price is None
        assert widget.quantity == 10

    def test_update_stocked_item_cannot_change_warehouse(self, inventory, widget, main, annex):
        """Stocked rows move through a transfer so the change is recorded."""
        with pytest.raises(StockError) as exc:
            inventory.catalog.update_item(widget.pk, ItemUpdateInput(warehouse_id=annex.pk))

        assert exc.value.code == 'INVALID_INPUT'
        assert exc.value.data['field'] == 'warehouse_id'
        widget.refresh_from_db()
        assert widget.warehouse_id == main.pk
        assert widget.quantity == 10
        assert not Item.objects.filter(warehouse=annex).exists()

    def test_update_empty_item_can_change_warehouse(self, inventory, main, annex):
        empty = Item.objects.create(name='Bracket', quantity=0, warehouse=main)

        item = inventory.catalog.update_item(empty.pk, ItemUpdateInput(warehouse_id=annex.pk))

        assert item.warehouse_id == annex.pk
        empty.refresh_from_db()
        assert empty.warehouse_id == annex.pk

    def test_update_empty_item_to_missing_warehouse(self, inventory, main):
        empty = Item.objects.create(name='Bracket', quantity=0, warehouse=main)

        with pytest.raises(StockError) as exc:
            inventory.catalog.update_item(empty.pk, ItemUpdateInput(warehouse_id=999_999))

        assert exc.value.code == 'NOT_FOUND'

    def test_update_rename_to_existing_name(self, inventory, widget, main):
        Item.objects.create(name='Gadget', warehouse=main)

        with pytest.raises(StockError) as exc:
            inventory.catalog.update_item(widget.pk, ItemUpdateInput(name='Gadget'))

        assert exc.value.code == 'ITEM_EXISTS'
        widget.refresh_from_db()
        assert widget.name == 'Widget'

    def test_update_missing_item(self, inventory):
        with pytest.raises(StockError) as exc:
            inventory.catalog.update_item(999_999, ItemUpdateInput(name='Ghost'))

        assert exc.value.code == 'NOT_FOUND'

    def test_delete_item_with_movements_in_use(self, inventory, widget, main, annex):
        inventory.transfer(move(widget, 1, main, annex))

        with pytest.raises(StockError) as exc:
            inventory.catalog.delete_item(widget.pk)

        assert exc.value.code == 'IN_USE'

    def test_delete_item(self, inventory, widget):
        inventory.catalog.delete_item(widget.pk)

        assert not Item.objects.filter(pk=widget.pk).exists()

    def test_receive_increments_stock(self, inventory, widget):
        item = inventory.receive(widget.pk, 5)

        assert item.pk == widget.pk
        assert item.quantity == 15

    def test_receive_unassigned_item(self, inventory):
        loose = Item.objects.create(name='Loose', quantity=0)

        with pytest.raises(StockError) as exc:
            inventory.receive(loose.pk, 1)

        assert exc.value.code == 'INVALID_INPUT'


class TestSearch:

    @pytest.fixture
    def stocked(self, main, annex):
        Item.objects.create(name='Hammer', category='Tools', warehouse=main)
        Item.objects.create(name='Screwdriver', category='Tools', warehouse=annex)
        Item.objects.create(name='Paint', category='Supplies', warehouse=main)

    def test_search_by_name_case_insensitive(self, inventory, stocked):
        names = [i.name for i in inventory.catalog.search_items(name='hAmM')]

        assert names == ['Hammer']

    def test_search_by_category(self, inventory, stocked):
        names = {i.name for i in inventory.catalog.search_items(category='tools')}

        assert names == {'Hammer', 'Screwdriver'}

    def test_search_terms_are_or_combined(self, inventory, stocked):
        names = {i.name for i in inventory.catalog.search_items(name='paint', category='tools')}

        assert names == {'Hammer', 'Screwdriver', 'Paint'}

    def test_search_respects_limit(self, inventory, main, settings):
        settings.DEPOT = {'SEARCH_LIMIT': 2}
        for n in range(4):
            Item.objects.create(name=f'Bin {n}', category='Storage', warehouse=main)

        assert len(inventory.catalog.search_items(category='storage')) == 2


class TestMovementReport:

    def test_report_includes_both_directions(self, inventory, widget, main, annex):
        out = inventory.transfer(move(widget, 3, main, annex))
        back_item = Item.objects.get(name='Widget', warehouse=annex)
        back = inventory.transfer(move(back_item, 1, annex, main))
        third = Warehouse.objects.create(name='Overflow')
        unrelated = Item.objects.create(name='Crate', quantity=5, warehouse=annex)
        inventory.transfer(move(unrelated, 5, annex, third))

        report = list(inventory.movement_report(main.pk))

        assert {m.pk for m in report} == {out.pk, back.pk}

    def test_report_limit(self, inventory, widget, main, annex):
        first = inventory.transfer(move(widget, 1, main, annex))
        second = inventory.transfer(move(widget, 1, main, annex))

        assert [m.pk for m in inventory.movement_report(main.pk, limit=1)] == [second.pk]
        assert list(inventory.movement_report(main.pk, limit=0)) == []
        assert [m.pk for m in inventory.movement_report(main.pk)] == [second.pk, first.pk]

    def test_report_default_limit_from_settings(self, inventory, widget, main, annex, settings):
        settings.DEPOT = {'REPORT_LIMIT': 2}
        for _ in range(3):
            inventory.transfer(move(widget, 1, main, annex))

        assert len(inventory.movement_report(main.pk)) == 2

    def test_report_unknown_warehouse(self, inventory):
        with pytest.raises(StockError) as exc:
            inventory.movement_report(999_999)

        assert exc.value.code == 'NOT_FOUND'


class TestCommands:

    def test_movement_report_command(self, widget, main, annex):
        from depot import inventory

        inventory.transfer(move(widget, 2, main, annex))
        stdout = StringIO()

        call_command('movement_report', str(main.pk), stdout=stdout)

        output = stdout.getvalue()
        assert 'OUT' in output
        assert 'Widget' in output
        assert '1 movement(s)' in output

    def test_movement_report_command_unknown_warehouse(self, db):
        with pytest.raises(CommandError):
            call_command('movement_report', '999999', stdout=StringIO())

    def test_reconcile_requests_dry_run(self, db):
        stdout = StringIO()

        call_command('reconcile_requests', '--dry-run', stdout=stdout)

        assert '0 request(s) would be reconciled' in stdout.getvalue()
