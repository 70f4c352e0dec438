import re
from datetime import time

import pytz
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

HHMM_PATTERN = re.compile(r"^([01][0-9]|2[0-3]):[0-5][0-9]$")

DEFAULT_START = time(8, 0)
DEFAULT_END = time(10, 30)

# Longest window an administrator may configure, in minutes.
MAX_WINDOW_MINUTES = 8 * 60


def parse_hhmm(value: str) -> time:
    """Parse a 24-hour 'HH:MM' string, raising ValidationError on anything else."""
    if not isinstance(value, str) or not HHMM_PATTERN.match(value):
        raise ValidationError(
            _("Invalid time format. Use HH:MM (24-hour format)"), code="invalid_time"
        )
    hour, minute = value.split(":")
    return time(int(hour), int(minute))


class OrderingWindow(models.Model):
    """
    Daily wall-clock interval during which new orders are accepted.

    There is exactly one row; use OrderingWindow.load() to read it.
    Weekends are always closed regardless of the configured times.
    """

    TIMEZONE_CHOICES = [
        ("UTC", "UTC"),
        ("Australia/Sydney", "Australian Eastern Time"),
        ("Australia/Melbourne", "Australian Eastern Time"),
        ("Australia/Brisbane", "Australian Eastern Time"),
        ("Australia/Adelaide", "Australian Central Time"),
        ("Australia/Perth", "Australian Western Time"),
        ("Pacific/Auckland", "New Zealand Time"),
        ("Asia/Singapore", "Singapore Time"),
        ("Europe/London", "London (GMT/BST)"),
        ("America/New_York", "Eastern Time (US)"),
        ("America/Chicago", "Central Time (US)"),
        ("America/Los_Angeles", "Pacific Time (US)"),
    ]

    start_time = models.TimeField(default=DEFAULT_START)
    end_time = models.TimeField(default=DEFAULT_END)
    timezone = models.CharField(
        max_length=50,
        choices=TIMEZONE_CHOICES,
        default="Australia/Sydney",
        help_text="Timezone the window times are expressed in.",
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Ordering Window"
        verbose_name_plural = "Ordering Window"

    def __str__(self):
        return f"{self.start_label} - {self.end_label} ({self.timezone})"

    @classmethod
    def load(cls) -> "OrderingWindow":
        obj, _created = cls.objects.get_or_create(pk=1)
        return obj

    def save(self, *args, **kwargs):
        self.pk = 1
        super().save(*args, **kwargs)

    def clean(self):
        super().clean()
        if self.timezone not in pytz.all_timezones_set:
            raise ValidationError({"timezone": _("Unknown timezone.")})

        start_minutes = self.start_time.hour * 60 + self.start_time.minute
        end_minutes = self.end_time.hour * 60 + self.end_time.minute
        if end_minutes <= start_minutes:
            raise ValidationError({"end_time": _("End time must be after start time")})
        if end_minutes - start_minutes > MAX_WINDOW_MINUTES:
            raise ValidationError(
                {"end_time": _("Ordering window cannot be longer than 8 hours")}
            )

    @property
    def start_label(self) -> str:
        return self.start_time.strftime("%H:%M")

    @property
    def end_label(self) -> str:
        return self.end_time.strftime("%H:%M")

    @property
    def tz(self):
        return pytz.timezone(self.timezone)
