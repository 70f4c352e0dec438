import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional

from django.core.exceptions import ValidationError
from django.db.models import Count, Sum

from orders.exceptions import OrderNotFound
from orders.filters import KitchenOrderFilter
from orders.models import Order, OrderItem

logger = logging.getLogger(__name__)


class KitchenService:
    """Read-side queries for kitchen staff. All writes go through FulfillmentService."""

    @staticmethod
    def _today() -> date:
        from ordering_window.services import OrderingWindowService

        return OrderingWindowService().today()

    @staticmethod
    def get_orders(params: Optional[dict] = None):
        """
        Orders matching date (default today), fulfillmentStatus and menuItemId,
        oldest first, with owner and items loaded.

        Raises django.core.exceptions.ValidationError for malformed filters.
        """
        data = dict(params or {})
        if not data.get("date"):
            data["date"] = KitchenService._today().isoformat()

        queryset = Order.objects.select_related("user").prefetch_related("items__menu_item")
        order_filter = KitchenOrderFilter(data, queryset=queryset)
        if not order_filter.is_valid():
            raise ValidationError(order_filter.errors)
        return order_filter.qs.order_by("created_at")

    @staticmethod
    def get_summary(day: Optional[date] = None) -> List[dict]:
        """
        Per menu item totals for one day, most ordered first. Each entry lists
        the contributing order lines with the customer's display name.
        Payment status is not filtered on.
        """
        day = day or KitchenService._today()
        items = (
            OrderItem.objects.filter(order__order_date=day)
            .select_related("menu_item", "order", "order__user")
            .order_by("order__created_at", "created_at")
        )

        summary = {}
        for item in items:
            entry = summary.get(item.menu_item_id)
            if entry is None:
                entry = summary[item.menu_item_id] = {
                    "menuItem": item.menu_item,
                    "totalQuantity": 0,
                    "orders": [],
                }
            entry["totalQuantity"] += item.quantity
            entry["orders"].append(
                {
                    "orderId": str(item.order_id),
                    "orderItemId": str(item.pk),
                    "orderNumber": item.order.order_number,
                    "quantity": item.quantity,
                    "customizations": item.customizations,
                    "selectedVariations": item.selected_variations,
                    "customerName": item.order.customer_display_name,
                    "fulfillmentStatus": item.fulfillment_status,
                }
            )

        return sorted(summary.values(), key=lambda entry: entry["totalQuantity"], reverse=True)

    @staticmethod
    def get_daily_stats(day: Optional[date] = None) -> dict:
        """
        Order count, revenue (sum of order totals regardless of payment
        status) and counts per fulfillment and payment status for one day.
        """
        day = day or KitchenService._today()
        orders = Order.objects.filter(order_date=day)

        totals = orders.aggregate(count=Count("id"), revenue=Sum("total_amount"))

        by_status = {status: 0 for status in Order.FulfillmentStatus.values}
        for row in orders.values("fulfillment_status").annotate(n=Count("id")).order_by():
            by_status[row["fulfillment_status"]] = row["n"]

        by_payment = {status: 0 for status in Order.PaymentStatus.values}
        for row in orders.values("payment_status").annotate(n=Count("id")).order_by():
            by_payment[row["payment_status"]] = row["n"]

        return {
            "date": day.isoformat(),
            "totalOrders": totals["count"],
            "totalRevenue": totals["revenue"] or Decimal("0.00"),
            "ordersByStatus": by_status,
            "ordersByPayment": by_payment,
        }

    @staticmethod
    def get_order(order_id) -> Order:
        order = (
            Order.objects.select_related("user")
            .prefetch_related("items__menu_item")
            .filter(pk=order_id)
            .first()
        )
        if order is None:
            raise OrderNotFound()
        return order
