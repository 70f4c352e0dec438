import logging
import uuid
from typing import List, NamedTuple, Optional

from django.conf import settings
from django.core.paginator import Paginator
from django.db import IntegrityError, transaction

from menu.services import CatalogService
from ordering_window.services import OrderingWindowService
from orders.exceptions import (
    GuestEmailAlreadyRegistered,
    InvalidMenuItems,
    OrderingClosed,
    OrderNotFound,
    OrderNumberConflict,
    PaymentAuthorizationFailed,
)
from orders.models import Order, OrderItem
from payments.exceptions import PaymentGatewayError
from payments.gateway import PaymentAuthorization, get_payment_gateway
from users.models import User
from users.services import UserService

from .order_number_service import OrderNumberService
from .pricing_service import PricingService

logger = logging.getLogger(__name__)


class PlacedOrder(NamedTuple):
    order: Order
    client_secret: Optional[str]


class OrderService:
    """
    Single entry point for placing orders, for authenticated and guest callers.

    Placement runs as a saga:
      1. validate and price the cart (read-only)
      2. allocate an order number
      3. create the payment authorization, outside any DB transaction
      4. persist the order and its items in one transaction

    A failure in step 4 voids the authorization from step 3. Collaborators
    are injected so tests can substitute fakes.
    """

    def __init__(
        self,
        payment_gateway=None,
        window_service=None,
        catalog=None,
        number_allocator=None,
        accounts=None,
    ):
        self._payment_gateway = payment_gateway
        self.window_service = window_service or OrderingWindowService()
        self.catalog = catalog or CatalogService
        self.number_allocator = number_allocator or OrderNumberService
        self.accounts = accounts or UserService

    @property
    def payment_gateway(self):
        if self._payment_gateway is None:
            self._payment_gateway = get_payment_gateway()
        return self._payment_gateway

    # --- Placement ---

    def create_order(self, user: User, items: List[dict], delivery_notes: str = None) -> PlacedOrder:
        """
        Place an order for an authenticated user.

        `items` are dicts with menu_item_id, quantity and optionally
        selected_variations ([{group_id, option_ids}]), customizations and
        special_requests.
        """
        owner = {"user": user}
        return self._place(owner, self.accounts.get_billing_email(user), items, delivery_notes)

    def create_guest_order(
        self, email: str, first_name: str, last_name: str, items: List[dict], delivery_notes: str = None
    ) -> PlacedOrder:
        """
        Place an order for a guest. An email that already belongs to an
        account is refused before anything else happens.
        """
        if self.accounts.email_is_registered(email):
            logger.info("Guest checkout refused: email already registered")
            raise GuestEmailAlreadyRegistered(email)

        owner = {
            "guest_email": email,
            "guest_first_name": first_name,
            "guest_last_name": last_name,
        }
        return self._place(owner, email, items, delivery_notes)

    def _place(self, owner: dict, billing_email: str, items: List[dict], delivery_notes) -> PlacedOrder:
        status = self.window_service.get_status()
        if not status.active:
            raise OrderingClosed(status.reason, status.window)
        order_date = status.local_now.date()

        lines = self._price_lines(items)
        total = PricingService.order_total(
            (line["price_at_purchase"], line["quantity"]) for line in lines
        )

        # The id is fixed before payment so the authorization metadata keeps
        # pointing at this order even if the order number changes on retry.
        order_id = uuid.uuid4()
        order_number = self.number_allocator.allocate(order_date)
        authorization = self._authorize(total, billing_email, order_id, order_number)

        max_attempts = getattr(settings, "ORDER_NUMBER_MAX_RETRIES", 5)
        attempt = 1
        while True:
            try:
                order = self._persist(
                    order_id, order_number, owner, total, order_date, delivery_notes, authorization.id, lines
                )
                break
            except IntegrityError:
                if not Order.objects.filter(order_number=order_number).exists():
                    self._compensate(authorization, order_number)
                    raise
                if attempt >= max_attempts:
                    self._compensate(authorization, order_number)
                    raise OrderNumberConflict(attempt)
                logger.warning(
                    f"Order number {order_number} already taken, retrying ({attempt}/{max_attempts})"
                )
                attempt += 1
                order_number = self.number_allocator.allocate(order_date)
            except Exception:
                self._compensate(authorization, order_number)
                raise

        logger.info(
            f"Order {order.order_number} placed for {order.order_date} "
            f"total={order.total_amount} payment={authorization.id}"
        )
        return PlacedOrder(order=order, client_secret=authorization.client_secret)

    def _price_lines(self, items: List[dict]) -> List[dict]:
        requested_ids = []
        for item in items:
            menu_item_id = str(item["menu_item_id"])
            if menu_item_id not in requested_ids:
                requested_ids.append(menu_item_id)

        menu_items = self.catalog.get_active_items(requested_ids)
        missing = [pk for pk in requested_ids if pk not in menu_items]
        if missing:
            raise InvalidMenuItems(missing)

        for item in items:
            PricingService.validate_selections(
                menu_items[str(item["menu_item_id"])], item.get("selected_variations")
            )

        lines = []
        for item in items:
            menu_item = menu_items[str(item["menu_item_id"])]
            selections = item.get("selected_variations")
            lines.append(
                {
                    "menu_item": menu_item,
                    "quantity": item["quantity"],
                    "price_at_purchase": PricingService.unit_price(menu_item, selections),
                    "selected_variations": PricingService.variation_snapshot(menu_item, selections),
                    "customizations": self._customizations(item),
                }
            )
        return lines

    @staticmethod
    def _customizations(item: dict) -> Optional[dict]:
        data = {}
        if item.get("customizations"):
            data["customizations"] = item["customizations"]
        if item.get("special_requests"):
            data["specialRequests"] = item["special_requests"]
        return data or None

    def _authorize(self, total, billing_email, order_id, order_number) -> PaymentAuthorization:
        try:
            return self.payment_gateway.create_authorization(
                amount=total,
                customer_email=billing_email,
                metadata={"order_id": str(order_id)},
            )
        except PaymentGatewayError as e:
            logger.warning(f"Payment authorization failed for {order_number}: {e}")
            raise PaymentAuthorizationFailed(str(e)) from e

    @staticmethod
    @transaction.atomic
    def _persist(order_id, order_number, owner, total, order_date, delivery_notes, payment_id, lines) -> Order:
        order = Order.objects.create(
            id=order_id,
            order_number=order_number,
            total_amount=total,
            payment_status=Order.PaymentStatus.PENDING,
            fulfillment_status=Order.FulfillmentStatus.PLACED,
            order_date=order_date,
            special_requests=delivery_notes or None,
            payment_id=payment_id,
            **owner,
        )
        OrderItem.objects.bulk_create(
            [
                OrderItem(
                    order=order,
                    menu_item=line["menu_item"],
                    quantity=line["quantity"],
                    price_at_purchase=line["price_at_purchase"],
                    selected_variations=line["selected_variations"],
                    customizations=line["customizations"],
                    fulfillment_status=OrderItem.FulfillmentStatus.PLACED,
                )
                for line in lines
            ]
        )
        return order

    def _compensate(self, authorization: PaymentAuthorization, order_number: str):
        """
        Void the authorization of an order that could not be recorded.
        A failure here is left to webhook reconciliation.
        """
        try:
            self.payment_gateway.void_authorization(authorization.id)
            logger.warning(f"Voided payment {authorization.id} after failing to record {order_number}")
        except PaymentGatewayError as e:
            logger.error(
                f"Could not void payment {authorization.id} for unrecorded order {order_number}: {e}"
            )

    # --- Reads ---

    @staticmethod
    def _with_items(queryset):
        return queryset.select_related("user").prefetch_related("items__menu_item")

    @staticmethod
    def get_order_for_user(order_id, user: User) -> Order:
        order = OrderService._with_items(Order.objects.filter(id=order_id, user=user)).first()
        if order is None:
            raise OrderNotFound()
        return order

    @staticmethod
    def get_guest_order(order_id, email: str) -> Order:
        order = OrderService._with_items(
            Order.objects.filter(
                id=order_id, user__isnull=True, guest_email__iexact=(email or "").strip()
            )
        ).first()
        if order is None or not email:
            raise OrderNotFound()
        return order

    @staticmethod
    def list_user_orders(user: User, start_date=None, end_date=None, page: int = 1, limit: int = 20) -> dict:
        """The user's orders, newest first, paginated."""
        queryset = Order.objects.filter(user=user)
        if start_date:
            queryset = queryset.filter(order_date__gte=start_date)
        if end_date:
            queryset = queryset.filter(order_date__lte=end_date)
        queryset = OrderService._with_items(queryset.order_by("-created_at"))

        paginator = Paginator(queryset, limit)
        page_obj = paginator.get_page(page)
        return {
            "orders": list(page_obj.object_list),
            "total": paginator.count,
            "page": page_obj.number,
            "totalPages": paginator.num_pages,
        }
