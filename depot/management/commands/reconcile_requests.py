"""
Management command to approve requests whose transfer already committed.

Usage:
    python manage.py reconcile_requests
    python manage.py reconcile_requests --dry-run
"""

from django.core.management.base import BaseCommand

from depot import inventory


class Command(BaseCommand):
    """Reconcile transfer request statuses command."""

    help = 'Marks approved the pending requests that already have a movement'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be reconciled without changing anything'
        )

    def handle(self, *args, **options):
        if options['dry_run']:
            pending = inventory.requests.unreconciled().count()
            self.stdout.write(f'{pending} request(s) would be reconciled')
        else:
            count = inventory.reconcile()
            self.stdout.write(
                self.style.SUCCESS(f'{count} request(s) reconciled')
            )
