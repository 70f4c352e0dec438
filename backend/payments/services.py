import logging
import uuid
from typing import Optional

from django.db import transaction
from django.utils import timezone

from orders.models import Order

from .gateway import PaymentGateway, get_payment_gateway
from .exceptions import PaymentNotCompleted

logger = logging.getLogger(__name__)

PaymentStatus = Order.PaymentStatus


class PaymentStatusService:
    """
    Owns Order.payment_status once an order exists.

    PENDING -> COMPLETED | FAILED, FAILED -> COMPLETED (late success),
    COMPLETED -> REFUNDED. REFUNDED is terminal. Repeating the current
    status is a no-op.
    """

    VALID_TRANSITIONS = {
        PaymentStatus.PENDING: [PaymentStatus.COMPLETED, PaymentStatus.FAILED],
        PaymentStatus.FAILED: [PaymentStatus.COMPLETED],
        PaymentStatus.COMPLETED: [PaymentStatus.REFUNDED],
        PaymentStatus.REFUNDED: [],
    }

    @staticmethod
    def find_order(payment_id: Optional[str], metadata: Optional[dict] = None) -> Optional[Order]:
        """
        Locate an order by stored payment reference, then by the order id in
        the payment metadata. A metadata match is rejected when the order
        already holds a different payment.
        """
        if payment_id:
            order = Order.objects.filter(payment_id=payment_id).first()
            if order is not None:
                return order

        try:
            order_id = uuid.UUID(str((metadata or {}).get("order_id")))
        except ValueError:
            return None

        order = Order.objects.filter(pk=order_id).first()
        if order is None or (order.payment_id and order.payment_id != payment_id):
            return None
        return order

    @staticmethod
    @transaction.atomic
    def transition(order: Order, new_status: str) -> bool:
        """
        Move an order's payment status if the transition is allowed.
        Returns True when the status changed.
        """
        locked = Order.objects.select_for_update().get(pk=order.pk)
        current = locked.payment_status

        if current == new_status:
            return False
        if new_status not in PaymentStatusService.VALID_TRANSITIONS.get(current, []):
            logger.warning(
                f"Ignoring payment status change {current} -> {new_status} for order {locked.order_number}"
            )
            return False

        Order.objects.filter(pk=locked.pk).update(
            payment_status=new_status, updated_at=timezone.now()
        )
        order.payment_status = new_status
        logger.info(f"Order {locked.order_number} payment {current} -> {new_status}")
        return True


class PaymentWebhookService:
    """
    Applies verified gateway events to orders.

    A successful payment that matches no order was charged without being
    recorded; it is refunded.
    """

    def __init__(self, gateway: Optional[PaymentGateway] = None):
        self.gateway = gateway or get_payment_gateway()

    def handle_event(self, event: dict) -> str:
        """Dispatch one event. Returns a short outcome string for logging and tests."""
        event_type = event.get("type")
        obj = (event.get("data") or {}).get("object") or {}

        if event_type == "payment_intent.succeeded":
            return self._handle_payment_succeeded(obj)
        elif event_type in ("payment_intent.payment_failed", "payment_intent.canceled"):
            return self._handle_payment_failed(obj)
        elif event_type == "charge.refunded":
            return self._handle_charge_refunded(obj)
        else:
            logger.info(f"Unhandled webhook event type {event_type}")
            return "ignored"

    def _handle_payment_succeeded(self, intent: dict) -> str:
        order = PaymentStatusService.find_order(intent.get("id"), intent.get("metadata"))
        if order is None:
            logger.error(
                f"Payment {intent.get('id')} succeeded with no matching order "
                f"(metadata={intent.get('metadata')}); refunding"
            )
            self.gateway.refund(intent["id"])
            return "refunded_orphan"

        changed = PaymentStatusService.transition(order, PaymentStatus.COMPLETED)
        return "completed" if changed else "unchanged"

    def _handle_payment_failed(self, intent: dict) -> str:
        order = PaymentStatusService.find_order(intent.get("id"), intent.get("metadata"))
        if order is None:
            logger.warning(f"Payment {intent.get('id')} failed with no matching order")
            return "no_order"

        changed = PaymentStatusService.transition(order, PaymentStatus.FAILED)
        return "failed" if changed else "unchanged"

    def _handle_charge_refunded(self, charge: dict) -> str:
        order = PaymentStatusService.find_order(charge.get("payment_intent"), charge.get("metadata"))
        if order is None:
            logger.warning(f"Refund for payment {charge.get('payment_intent')} with no matching order")
            return "no_order"

        changed = PaymentStatusService.transition(order, PaymentStatus.REFUNDED)
        return "refunded" if changed else "unchanged"


def confirm_payment(payment_id: str, gateway: Optional[PaymentGateway] = None) -> dict:
    """
    Check with the gateway that a payment succeeded and record it on the order.

    Raises PaymentNotCompleted if the customer has not finished paying.
    """
    gateway = gateway or get_payment_gateway()
    authorization = gateway.retrieve_authorization(payment_id)
    if not authorization.succeeded:
        raise PaymentNotCompleted(payment_id, authorization.status)

    order = PaymentStatusService.find_order(authorization.id, authorization.metadata)
    if order is not None:
        PaymentStatusService.transition(order, PaymentStatus.COMPLETED)
    else:
        logger.warning(f"Confirmed payment {payment_id} has no matching order")

    return {
        "id": authorization.id,
        "status": authorization.status,
        "amount": str(authorization.amount),
        "orderId": str(order.pk) if order else None,
    }
