"""
Management command to list movements in or out of a warehouse.

Usage:
    python manage.py movement_report 3
    python manage.py movement_report 3 --limit 20
"""

from django.core.management.base import BaseCommand, CommandError

from depot import inventory, StockError


class Command(BaseCommand):
    """Warehouse movement report command."""

    help = 'Lists transfers leaving or entering a warehouse, newest first'

    def add_arguments(self, parser):
        parser.add_argument('warehouse_id', type=int)
        parser.add_argument(
            '--limit',
            type=int,
            default=None,
            help='Maximum number of movements (default: DEPOT["REPORT_LIMIT"])'
        )

    def handle(self, *args, **options):
        warehouse_id = options['warehouse_id']
        try:
            movements = list(inventory.movement_report(warehouse_id, limit=options['limit']))
        except StockError as exc:
            raise CommandError(str(exc)) from exc

        for movement in movements:
            direction = 'OUT' if movement.from_warehouse_id == warehouse_id else 'IN '
            self.stdout.write(
                f'{movement.timestamp:%Y-%m-%d %H:%M} {direction} '
                f'{movement.quantity:>6} {movement.item.name} '
                f'({movement.from_warehouse.name} → {movement.to_warehouse.name})'
            )
        self.stdout.write(self.style.SUCCESS(f'{len(movements)} movement(s)'))
