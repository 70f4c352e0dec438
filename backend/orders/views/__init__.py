"""
Orders views package.
"""

from .order_views import (
    OrderListCreateView,
    GuestOrderCreateView,
    OrderDetailView,
    GuestOrderDetailView,
)
from .kitchen_views import (
    KitchenOrderListView,
    KitchenSummaryView,
    KitchenStatsView,
    KitchenOrderStatusView,
    KitchenOrderItemStatusView,
    KitchenFulfillMenuItemView,
)

__all__ = [
    'OrderListCreateView',
    'GuestOrderCreateView',
    'OrderDetailView',
    'GuestOrderDetailView',
    'KitchenOrderListView',
    'KitchenSummaryView',
    'KitchenStatsView',
    'KitchenOrderStatusView',
    'KitchenOrderItemStatusView',
    'KitchenFulfillMenuItemView',
]
