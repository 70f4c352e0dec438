import logging
from datetime import date

from django.db import transaction
from django.db.models import F

from orders.models import DailyOrderSequence, Order

logger = logging.getLogger(__name__)


class OrderNumberService:
    """
    Allocates human-readable order numbers of the form ORD-YYYYMMDD-NNNN.

    The sequence restarts at 0001 each day and is backed by one
    DailyOrderSequence row per day, incremented under a row lock, so two
    concurrent callers never receive the same number.
    """

    PREFIX = "ORD"

    @classmethod
    def day_prefix(cls, day: date) -> str:
        return f"{cls.PREFIX}-{day:%Y%m%d}-"

    @classmethod
    def format_number(cls, day: date, value: int) -> str:
        return f"{cls.day_prefix(day)}{value:04d}"

    @classmethod
    def allocate(cls, day: date) -> str:
        """
        Reserve the next number for `day`. Each call returns a fresh number,
        even if an earlier one was never used.
        """
        with transaction.atomic():
            sequence, created = DailyOrderSequence.objects.select_for_update().get_or_create(
                day=day,
                defaults={"last_value": cls._orders_already_numbered(day)},
            )
            DailyOrderSequence.objects.filter(pk=sequence.pk).update(
                last_value=F("last_value") + 1
            )
            sequence.refresh_from_db(fields=["last_value"])

        if created:
            logger.info(f"Started order number sequence for {day}")
        return cls.format_number(day, sequence.last_value)

    @classmethod
    def _orders_already_numbered(cls, day: date) -> int:
        # Seeds a new day's counter past any orders numbered before it existed.
        return Order.objects.filter(order_number__startswith=cls.day_prefix(day)).count()
