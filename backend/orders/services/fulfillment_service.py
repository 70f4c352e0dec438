import logging
from datetime import date
from typing import Iterable, Optional

from django.db import transaction
from django.utils import timezone

from orders.exceptions import IllegalStatusTransition, OrderItemNotFound, OrderNotFound
from orders.models import Order, OrderItem

logger = logging.getLogger(__name__)

ItemStatus = OrderItem.FulfillmentStatus
OrderStatus = Order.FulfillmentStatus


class FulfillmentService:
    """
    Kitchen fulfillment state machine.

    Items move PLACED -> FULFILLED only. The order's fulfillment_status is
    always recomputed from the full set of its item statuses while the order
    row is locked, so concurrent item updates cannot leave it stale.
    """

    @staticmethod
    def derive_order_status(item_statuses: Iterable[str]) -> str:
        """
        FULFILLED when every item is fulfilled, PLACED when none is,
        PARTIALLY_FULFILLED otherwise. An order without items is PLACED.
        """
        statuses = list(item_statuses)
        fulfilled = 0
        for status in statuses:
            if status == ItemStatus.FULFILLED:
                fulfilled += 1
            elif status != ItemStatus.PLACED:
                raise ValueError(f"'{status}' is not a valid item fulfillment status.")

        if statuses and fulfilled == len(statuses):
            return OrderStatus.FULFILLED
        elif fulfilled == 0:
            return OrderStatus.PLACED
        else:
            return OrderStatus.PARTIALLY_FULFILLED

    @staticmethod
    def check_transition(current: str, target: str):
        if target not in ItemStatus.values:
            raise ValueError(f"'{target}' is not a valid item fulfillment status.")
        if current == ItemStatus.FULFILLED and target == ItemStatus.PLACED:
            raise IllegalStatusTransition(current, target)

    @staticmethod
    def _sync_order_status(order: Order) -> Order:
        """Recompute and persist the order status; the order row must be locked."""
        statuses = order.items.values_list("fulfillment_status", flat=True)
        derived = FulfillmentService.derive_order_status(statuses)
        if derived != order.fulfillment_status:
            Order.objects.filter(pk=order.pk).update(
                fulfillment_status=derived, updated_at=timezone.now()
            )
            logger.info(
                f"Order {order.order_number} fulfillment {order.fulfillment_status} -> {derived}"
            )
            order.fulfillment_status = derived
        return order

    @staticmethod
    @transaction.atomic
    def update_item_status(item_id, status: str) -> OrderItem:
        """
        Transition one order item, then roll the change up to its order.

        Raises OrderItemNotFound or IllegalStatusTransition; state is left
        untouched on either.
        """
        order_id = OrderItem.objects.filter(pk=item_id).values_list("order_id", flat=True).first()
        if order_id is None:
            raise OrderItemNotFound()

        # Lock order before item, the same order update_order_status uses.
        order = Order.objects.select_for_update().get(pk=order_id)
        item = OrderItem.objects.select_for_update().get(pk=item_id)

        FulfillmentService.check_transition(item.fulfillment_status, status)
        if item.fulfillment_status != status:
            item.fulfillment_status = status
            item.save(update_fields=["fulfillment_status", "updated_at"])
            logger.info(f"Order {order.order_number} item {item.pk} -> {status}")

        item.order = FulfillmentService._sync_order_status(order)
        return item

    @staticmethod
    @transaction.atomic
    def update_order_status(order_id, status: str) -> Order:
        """
        Set every item of an order to `status` and recompute the order status
        from the result. Reverting an order with fulfilled items to PLACED
        raises IllegalStatusTransition.
        """
        order = Order.objects.select_for_update().filter(pk=order_id).first()
        if order is None:
            raise OrderNotFound()

        items = list(order.items.select_for_update())
        for item in items:
            FulfillmentService.check_transition(item.fulfillment_status, status)

        updated = order.items.exclude(fulfillment_status=status).update(
            fulfillment_status=status, updated_at=timezone.now()
        )
        if updated:
            logger.info(f"Order {order.order_number}: {updated} item(s) -> {status}")

        return FulfillmentService._sync_order_status(order)

    @staticmethod
    def fulfill_menu_item_for_date(menu_item_id, day: Optional[date] = None) -> dict:
        """
        Mark every unfulfilled item for a menu item on `day` (default today)
        as FULFILLED. Each item is its own transaction: progress made before
        a failure stays, and rerunning is harmless.

        Returns {"updated", "alreadyFulfilled", "failed"} counts.
        """
        if day is None:
            from ordering_window.services import OrderingWindowService

            day = OrderingWindowService().today()

        items = OrderItem.objects.filter(menu_item_id=menu_item_id, order__order_date=day)
        already = items.filter(fulfillment_status=ItemStatus.FULFILLED).count()
        pending_ids = list(
            items.filter(fulfillment_status=ItemStatus.PLACED).values_list("pk", flat=True)
        )

        result = {"updated": 0, "alreadyFulfilled": already, "failed": 0}
        for item_id in pending_ids:
            try:
                FulfillmentService.update_item_status(item_id, ItemStatus.FULFILLED)
                result["updated"] += 1
            except (OrderItemNotFound, IllegalStatusTransition) as e:
                result["failed"] += 1
                logger.warning(f"Could not fulfill order item {item_id}: {e}")

        logger.info(f"Batch fulfill menu item {menu_item_id} for {day}: {result}")
        return result
