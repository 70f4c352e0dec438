"""Kitchen read-side queries: order list, per-item summary and daily stats."""
from datetime import timedelta
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from core_backend.tests.fixtures import make_order, minutes_into_window
from orders.models import Order, OrderItem
from orders.services import KitchenService


@pytest.fixture
def kitchen_day(order_day, staff_user, other_staff_user, falafel_wrap, chicken_bowl, iced_tea):
    """Three orders today and one yesterday, created a minute apart"""
    orders = [
        make_order(order_day, 'ORD-20261014-0001', [(falafel_wrap, 1), (iced_tea, 1)], user=staff_user),
        make_order(
            order_day, 'ORD-20261014-0002', [(chicken_bowl, 2, OrderItem.FulfillmentStatus.FULFILLED)],
            user=other_staff_user, fulfillment_status=Order.FulfillmentStatus.FULFILLED,
            payment_status=Order.PaymentStatus.COMPLETED,
        ),
        make_order(
            order_day, 'ORD-20261014-0003', [(falafel_wrap, 3)],
            guest_email='visitor@example.org', guest_first_name='Vera', guest_last_name='Visitor',
            payment_status=Order.PaymentStatus.FAILED,
        ),
        make_order(order_day - timedelta(days=1), 'ORD-20261013-0001', [(falafel_wrap, 5)], user=staff_user),
    ]
    for n, order in enumerate(orders):
        Order.objects.filter(pk=order.pk).update(created_at=minutes_into_window(n))
    return orders


@pytest.mark.django_db
class TestKitchenOrders:

    def test_defaults_to_today_oldest_first(self, kitchen_day):
        orders = list(KitchenService.get_orders())

        assert [o.order_number for o in orders] == [
            'ORD-20261014-0001', 'ORD-20261014-0002', 'ORD-20261014-0003'
        ]

    def test_explicit_date(self, kitchen_day, order_day):
        orders = KitchenService.get_orders({'date': (order_day - timedelta(days=1)).isoformat()})
        assert [o.order_number for o in orders] == ['ORD-20261013-0001']

    def test_filter_by_fulfillment_status(self, kitchen_day):
        orders = KitchenService.get_orders({'fulfillmentStatus': 'FULFILLED'})
        assert [o.order_number for o in orders] == ['ORD-20261014-0002']

    def test_filter_by_menu_item_without_duplicates(self, kitchen_day, falafel_wrap):
        orders = KitchenService.get_orders({'menuItemId': str(falafel_wrap.id)})
        assert [o.order_number for o in orders] == ['ORD-20261014-0001', 'ORD-20261014-0003']

    def test_malformed_filters_raise(self, kitchen_day):
        with pytest.raises(ValidationError):
            KitchenService.get_orders({'date': 'yesterday'})
        with pytest.raises(ValidationError):
            KitchenService.get_orders({'fulfillmentStatus': 'COOKING'})


@pytest.mark.django_db
class TestKitchenSummary:

    def test_totals_per_menu_item_most_ordered_first(self, kitchen_day, order_day, falafel_wrap, chicken_bowl, iced_tea):
        summary = KitchenService.get_summary(order_day)

        assert [(entry['menuItem'], entry['totalQuantity']) for entry in summary] == [
            (falafel_wrap, 4),
            (chicken_bowl, 2),
            (iced_tea, 1),
        ]

    def test_lists_contributing_orders_with_customer_names(self, kitchen_day, order_day):
        wraps = KitchenService.get_summary(order_day)[0]

        assert [(o['orderNumber'], o['quantity'], o['customerName']) for o in wraps['orders']] == [
            ('ORD-20261014-0001', 1, 'Sam Staff'),
            ('ORD-20261014-0003', 3, 'Vera Visitor'),
        ]
        assert wraps['orders'][0]['fulfillmentStatus'] == 'PLACED'

    def test_empty_day(self, kitchen_day, order_day):
        assert KitchenService.get_summary(order_day + timedelta(days=1)) == []


@pytest.mark.django_db
class TestKitchenStats:

    def test_counts_and_revenue(self, kitchen_day, order_day):
        stats = KitchenService.get_daily_stats(order_day)

        assert stats['date'] == '2026-10-14'
        assert stats['totalOrders'] == 3
        # 10.50 + 4.25, 2 x 14.00, 3 x 10.50; payment status is not filtered on
        assert stats['totalRevenue'] == Decimal('74.25')
        assert stats['ordersByStatus'] == {'PLACED': 2, 'PARTIALLY_FULFILLED': 0, 'FULFILLED': 1}
        assert stats['ordersByPayment'] == {'PENDING': 1, 'COMPLETED': 1, 'FAILED': 1, 'REFUNDED': 0}

    def test_empty_day(self, kitchen_day, order_day):
        stats = KitchenService.get_daily_stats(order_day + timedelta(days=1))

        assert stats['totalOrders'] == 0
        assert stats['totalRevenue'] == Decimal('0.00')
