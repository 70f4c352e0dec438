"""
Orders serializers package. JSON field names are camelCase.
"""

from .order_item_serializers import MenuItemSummarySerializer, OrderItemSerializer
from .order_serializers import (
    OrderSerializer,
    VariationSelectionSerializer,
    CartItemSerializer,
    OrderCreateSerializer,
    GuestOrderCreateSerializer,
    OrderListQuerySerializer,
)
from .status_serializers import (
    UpdateFulfillmentStatusSerializer,
    FulfillMenuItemSerializer,
    KitchenDateQuerySerializer,
)

__all__ = [
    'MenuItemSummarySerializer',
    'OrderItemSerializer',
    'OrderSerializer',
    'VariationSelectionSerializer',
    'CartItemSerializer',
    'OrderCreateSerializer',
    'GuestOrderCreateSerializer',
    'OrderListQuerySerializer',
    'UpdateFulfillmentStatusSerializer',
    'FulfillMenuItemSerializer',
    'KitchenDateQuerySerializer',
]
