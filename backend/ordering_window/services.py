import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, Optional

from django.db import transaction
from django.utils import timezone

from .models import OrderingWindow, parse_hhmm

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WindowStatus:
    active: bool
    start: str
    end: str
    local_now: datetime
    reason: Optional[str] = None

    @property
    def window(self) -> Dict[str, str]:
        return {"start": self.start, "end": self.end}

    def as_dict(self) -> Dict:
        data = {"active": self.active, "window": self.window}
        if self.reason:
            data["message"] = self.reason
        return data


class OrderingWindowService:
    """Answers whether new orders may be accepted at a given moment."""

    def __init__(self, window: Optional[OrderingWindow] = None):
        self._window = window

    @property
    def window(self) -> OrderingWindow:
        if self._window is not None:
            return self._window
        return OrderingWindow.load()

    def current_time(self) -> datetime:
        return timezone.now()

    def local_now(self, at: Optional[datetime] = None, window: Optional[OrderingWindow] = None) -> datetime:
        dt = at or self.current_time()
        tz = (window or self.window).tz
        if timezone.is_naive(dt):
            return tz.localize(dt)
        return dt.astimezone(tz)

    def today(self) -> date:
        """Calendar day orders are being placed for, in the window's timezone."""
        return self.local_now().date()

    def get_status(self, at: Optional[datetime] = None) -> WindowStatus:
        """
        Evaluate the window at `at` (defaults to now).

        The window row is re-read on every call unless one was injected.
        """
        window = self.window
        local = self.local_now(at, window)
        start, end = window.start_label, window.end_label

        if local.weekday() >= 5:
            return WindowStatus(
                active=False,
                start=start,
                end=end,
                local_now=local,
                reason="Ordering is not available on weekends",
            )

        current = local.time().replace(tzinfo=None)
        if current < window.start_time:
            return WindowStatus(False, start, end, local, f"Ordering opens at {start}")
        if current > window.end_time:
            return WindowStatus(False, start, end, local, f"Ordering closed at {end}")
        return WindowStatus(True, start, end, local)

    @transaction.atomic
    def set_window(self, start: str, end: str, tz_name: Optional[str] = None, updated_by=None) -> OrderingWindow:
        """
        Replace the configured window.

        Raises django.core.exceptions.ValidationError for a malformed time,
        an end that is not after the start, or a span longer than 8 hours.
        """
        window = OrderingWindow.objects.select_for_update().filter(pk=1).first() or OrderingWindow()
        window.start_time = parse_hhmm(start)
        window.end_time = parse_hhmm(end)
        if tz_name:
            window.timezone = tz_name
        window.updated_by = updated_by
        window.clean()
        window.save()
        logger.info(
            f"Ordering window set to {window.start_label}-{window.end_label} "
            f"({window.timezone}) by {getattr(updated_by, 'email', None) or 'system'}"
        )
        return window
