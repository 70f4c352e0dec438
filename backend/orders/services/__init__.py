"""
Orders services package.

- PricingService: unit prices and variation snapshots (pure)
- OrderNumberService: per-day ORD-YYYYMMDD-NNNN allocation
- OrderService: order placement saga and order reads
- FulfillmentService: item/order fulfillment state machine
- KitchenService: kitchen-facing queries
"""

from .pricing_service import PricingService
from .order_number_service import OrderNumberService
from .order_service import OrderService, PlacedOrder
from .fulfillment_service import FulfillmentService
from .kitchen_service import KitchenService

__all__ = [
    'PricingService',
    'OrderNumberService',
    'OrderService',
    'PlacedOrder',
    'FulfillmentService',
    'KitchenService',
]
