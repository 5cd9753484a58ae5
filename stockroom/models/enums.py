"""
Enums for Stockroom models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class MovementType(models.TextChoices):
    """
    Direction of a stock movement.

    IMPORT: Stock entering (purchase, return from customer).
    EXPORT: Stock leaving (sale, consumption, loss).
    """
    IMPORT = 'import', _('Import')
    EXPORT = 'export', _('Export')
