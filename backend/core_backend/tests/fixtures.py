"""
Shared test fixtures for all backend tests.

This module provides reusable pytest fixtures for common test objects
like users, menu items, orders and the fake payment gateway.
"""
import hashlib
import hmac
import json
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from decimal import Decimal

import pytest
import pytz
from django.db import connection

from menu.models import MenuItem, VariationGroup, VariationOption
from ordering_window.services import OrderingWindowService
from orders.models import Order, OrderItem
from payments.exceptions import PaymentGatewayError
from payments.gateway import PaymentAuthorization, StripePaymentGateway
from users.models import User

TEST_TIMEZONE = pytz.timezone("Australia/Sydney")

# Wednesday 14 October 2026, 09:00 local: inside the default 08:00-10:30 window
WEEKDAY_MORNING = TEST_TIMEZONE.localize(datetime(2026, 10, 14, 9, 0))
# Saturday 17 October 2026, 09:00 local
SATURDAY_MORNING = TEST_TIMEZONE.localize(datetime(2026, 10, 17, 9, 0))

WEBHOOK_SECRET = "whsec_test_secret"


# ============================================================================
# FAKE PAYMENT GATEWAY
# ============================================================================

class FakePaymentGateway(StripePaymentGateway):
    """
    In-memory payment gateway. State is class-level so the instances created
    by views and services during one test all see the same authorizations.
    Webhook signature verification is inherited from the Stripe gateway.
    """

    authorizations = {}
    calls = []
    lock = threading.Lock()
    fail_next_create = None
    fail_void = False

    @classmethod
    def reset(cls):
        cls.authorizations = {}
        cls.calls = []
        cls.fail_next_create = None
        cls.fail_void = False

    @classmethod
    def call_names(cls):
        return [name for name, _ in cls.calls]

    @classmethod
    def mark_succeeded(cls, payment_id):
        cls.authorizations[payment_id].status = PaymentAuthorization.SUCCEEDED

    def create_authorization(self, amount, customer_email, metadata=None):
        FakePaymentGateway.calls.append(("create", {"amount": amount, "email": customer_email}))
        if FakePaymentGateway.fail_next_create is not None:
            error, FakePaymentGateway.fail_next_create = FakePaymentGateway.fail_next_create, None
            raise error

        with FakePaymentGateway.lock:
            payment_id = f"pi_test_{len(FakePaymentGateway.authorizations) + 1:04d}"
            authorization = PaymentAuthorization(
                id=payment_id,
                client_secret=f"{payment_id}_secret_test",
                status="requires_payment_method",
                amount=amount,
                metadata=dict(metadata or {}),
            )
            FakePaymentGateway.authorizations[payment_id] = authorization
        return authorization

    def retrieve_authorization(self, payment_id):
        FakePaymentGateway.calls.append(("retrieve", payment_id))
        try:
            return FakePaymentGateway.authorizations[payment_id]
        except KeyError:
            raise PaymentGatewayError(f"No such payment_intent: '{payment_id}'", payment_id=payment_id)

    def void_authorization(self, payment_id):
        FakePaymentGateway.calls.append(("void", payment_id))
        if FakePaymentGateway.fail_void:
            raise PaymentGatewayError("Request timed out", payment_id=payment_id)
        FakePaymentGateway.authorizations[payment_id].status = "canceled"

    def refund(self, payment_id):
        FakePaymentGateway.calls.append(("refund", payment_id))


@pytest.fixture
def fake_gateway(settings):
    """
    Route every payment gateway lookup to FakePaymentGateway.

    Usage:
        def test_checkout(fake_gateway):
            fake_gateway.fail_next_create = PaymentGatewayError("Request timed out")
    """
    settings.PAYMENT_GATEWAY_CLASS = "core_backend.tests.fixtures.FakePaymentGateway"
    settings.STRIPE_WEBHOOK_SECRET = WEBHOOK_SECRET
    FakePaymentGateway.reset()
    yield FakePaymentGateway
    FakePaymentGateway.reset()


def sign_webhook_payload(payload: str, secret: str = WEBHOOK_SECRET, timestamp: int = None) -> str:
    """Build a Stripe-Signature header for `payload` the way Stripe does."""
    timestamp = timestamp or int(time.time())
    signed = f"{timestamp}.{payload}".encode("utf-8")
    signature = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"


def stripe_event(event_type: str, obj: dict, event_id: str = "evt_test_1") -> str:
    return json.dumps({"id": event_id, "object": "event", "type": event_type, "data": {"object": obj}})


# ============================================================================
# CLOCK / ORDERING WINDOW FIXTURES
# ============================================================================

@pytest.fixture
def frozen_clock(monkeypatch):
    """
    Pin the ordering window clock. Returns a setter for moving it.

    Usage:
        def test_weekend(frozen_clock):
            frozen_clock(SATURDAY_MORNING)
    """
    current = {"now": WEEKDAY_MORNING}
    monkeypatch.setattr(OrderingWindowService, "current_time", lambda self: current["now"])

    def set_now(value):
        current["now"] = value

    return set_now


@pytest.fixture
def ordering_open(db, frozen_clock):
    """Ordering window open: a weekday morning inside the default window."""
    frozen_clock(WEEKDAY_MORNING)
    return WEEKDAY_MORNING


@pytest.fixture
def order_day(ordering_open):
    return ordering_open.date()


# ============================================================================
# USER FIXTURES
# ============================================================================

@pytest.fixture
def staff_user(db):
    """Create a regular staff member who orders lunch"""
    return User.objects.create_user(
        email='sam.staff@example.com',
        password='password123',
        first_name='Sam',
        last_name='Staff',
        role=User.Role.STAFF,
    )


@pytest.fixture
def other_staff_user(db):
    return User.objects.create_user(
        email='other.staff@example.com',
        password='password123',
        first_name='Olive',
        last_name='Other',
        role=User.Role.STAFF,
    )


@pytest.fixture
def kitchen_user(db):
    """Create kitchen staff"""
    return User.objects.create_user(
        email='kit.chen@example.com',
        password='password123',
        first_name='Kit',
        last_name='Chen',
        role=User.Role.KITCHEN,
    )


@pytest.fixture
def admin_user(db):
    """Create admin user"""
    return User.objects.create_superuser(
        email='admin@example.com',
        password='password123',
    )


# ============================================================================
# MENU FIXTURES
# ============================================================================

@pytest.fixture
def falafel_wrap(db):
    """
    Falafel Wrap, $10.50, with a required SINGLE "Spice Level" group and a
    MULTI "Extras" group.
    """
    item = MenuItem.objects.create(
        name='Falafel Wrap',
        price=Decimal('10.50'),
        category=MenuItem.Category.MAIN,
        weekdays=['MONDAY', 'WEDNESDAY', 'FRIDAY'],
    )
    spice = VariationGroup.objects.create(
        menu_item=item,
        name='Spice Level',
        selection_type=VariationGroup.SelectionType.SINGLE,
        required=True,
        display_order=0,
    )
    VariationOption.objects.create(variation_group=spice, name='Mild', is_default=True, display_order=0)
    VariationOption.objects.create(variation_group=spice, name='Hot', display_order=1)
    VariationOption.objects.create(
        variation_group=spice, name='Extra Hot', price_modifier=Decimal('0.00'), display_order=2
    )
    extras = VariationGroup.objects.create(
        menu_item=item,
        name='Extras',
        selection_type=VariationGroup.SelectionType.MULTI,
        required=False,
        display_order=1,
    )
    VariationOption.objects.create(
        variation_group=extras, name='Avocado', price_modifier=Decimal('2.00'), display_order=0
    )
    VariationOption.objects.create(
        variation_group=extras, name='Halloumi', price_modifier=Decimal('3.00'), display_order=1
    )
    VariationOption.objects.create(
        variation_group=extras, name='No Pickles', price_modifier=Decimal('-0.50'), display_order=2
    )
    return item


@pytest.fixture
def chicken_bowl(db):
    """Plain item without variations"""
    return MenuItem.objects.create(
        name='Chicken Bowl',
        price=Decimal('14.00'),
        category=MenuItem.Category.MAIN,
        weekdays=['TUESDAY', 'WEDNESDAY', 'THURSDAY'],
    )


@pytest.fixture
def iced_tea(db):
    return MenuItem.objects.create(
        name='Iced Tea',
        price=Decimal('4.25'),
        category=MenuItem.Category.DRINK,
    )


@pytest.fixture
def inactive_item(db):
    return MenuItem.objects.create(
        name='Retired Lasagne',
        price=Decimal('15.00'),
        is_active=False,
    )


def option(menu_item, group_name, option_name):
    """Look up a variation option by group and option name."""
    return VariationOption.objects.get(
        variation_group__menu_item=menu_item,
        variation_group__name=group_name,
        name=option_name,
    )


def selection(menu_item, group_name, *option_names):
    """Build a service-level selection dict for the named options."""
    group = VariationGroup.objects.get(menu_item=menu_item, name=group_name)
    return {
        'group_id': group.id,
        'option_ids': [option(menu_item, group_name, name).id for name in option_names],
    }


# ============================================================================
# ORDER FIXTURES
# ============================================================================

def make_order(order_day, order_number, items, user=None, guest_email=None, **extra):
    """
    Create an order directly, bypassing placement. `items` is a list of
    (menu_item, quantity) or (menu_item, quantity, status) tuples.
    """
    lines = [(entry + (OrderItem.FulfillmentStatus.PLACED,))[:3] for entry in items]
    total = sum((menu_item.price * qty for menu_item, qty, _ in lines), Decimal('0.00'))
    order = Order.objects.create(
        order_number=order_number,
        user=user,
        guest_email=guest_email,
        total_amount=total,
        order_date=order_day,
        **extra,
    )
    for menu_item, qty, status in lines:
        OrderItem.objects.create(
            order=order,
            menu_item=menu_item,
            quantity=qty,
            price_at_purchase=menu_item.price,
            fulfillment_status=status,
        )
    return order


@pytest.fixture
def three_item_order(order_day, staff_user, falafel_wrap, chicken_bowl, iced_tea):
    """An order for today with three PLACED lines"""
    return make_order(
        order_day,
        'ORD-20261014-0001',
        [(falafel_wrap, 1), (chicken_bowl, 2), (iced_tea, 1)],
        user=staff_user,
    )


# ============================================================================
# API CLIENT FIXTURES
# ============================================================================

def _bearer_client(user):
    from rest_framework.test import APIClient
    from rest_framework_simplejwt.tokens import RefreshToken

    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def staff_client(staff_user):
    """
    API client authenticated as staff_user with a simplejwt bearer token.

    Usage:
        def test_my_orders(staff_client):
            response = staff_client.get('/api/orders')
            assert response.status_code == 200
    """
    return _bearer_client(staff_user)


@pytest.fixture
def kitchen_client(kitchen_user):
    """API client authenticated as kitchen staff"""
    return _bearer_client(kitchen_user)


def minutes_into_window(minutes):
    """An aware datetime `minutes` after WEEKDAY_MORNING, for ordering created_at."""
    from datetime import timedelta
    return WEEKDAY_MORNING + timedelta(minutes=minutes)


# ============================================================================
# CONCURRENCY HELPERS
# ============================================================================

def run_concurrently(*calls):
    """
    Run each zero-argument callable on its own thread, and so its own
    database connection, all released at once. Results come back in call
    order; an exception raised by any call is re-raised here.

    Only meaningful in tests marked django_db(transaction=True), where the
    other threads can see committed fixture data.
    """
    barrier = threading.Barrier(len(calls))

    def run(call):
        try:
            barrier.wait(timeout=10)
            return call()
        finally:
            connection.close()

    with ThreadPoolExecutor(max_workers=len(calls)) as executor:
        futures = [executor.submit(run, call) for call in calls]
        return [future.result() for future in futures]
