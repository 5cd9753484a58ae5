"""
Management command to audit stock balances against the movement ledger.

Usage:
    python manage.py check_ledger
    python manage.py check_ledger --fix
    python manage.py check_ledger --product 42
"""

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from stockroom import stock
from stockroom.models import Stock


class Command(BaseCommand):
    """Audit stock ledger command."""

    help = 'Compares each stock balance with the sum of its movements'

    def add_arguments(self, parser):
        parser.add_argument(
            '--fix',
            action='store_true',
            help='Recalculate drifted balances from the movement ledger'
        )
        parser.add_argument(
            '--product',
            type=int,
            help='Only check this product id'
        )

    def handle(self, *args, **options):
        stocks = Stock.objects.select_related('product').order_by('product_id')
        if options['product'] is not None:
            stocks = stocks.filter(product_id=options['product'])
            if not stocks.exists():
                raise CommandError(f"No stock row for product {options['product']}")

        drifted = 0
        for row in stocks:
            total = stock.ledger_total(row.product_id)
            if total == row.quantity:
                continue

            drifted += 1
            self.stdout.write(
                f'{row.product}: balance {row.quantity}, ledger {total}'
            )
            if options['fix']:
                with transaction.atomic():
                    Stock.objects.locked(row.product_id).recalculate()

        if drifted == 0:
            self.stdout.write(self.style.SUCCESS('Ledger consistent'))
        elif options['fix']:
            self.stdout.write(self.style.SUCCESS(f'{drifted} balance(s) corrected'))
        else:
            self.stdout.write(self.style.WARNING(f'{drifted} balance(s) drifted'))
