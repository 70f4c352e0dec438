import logging

from rest_framework.response import Response
from rest_framework.views import APIView

from orders.serializers import (
    FulfillMenuItemSerializer,
    KitchenDateQuerySerializer,
    MenuItemSummarySerializer,
    OrderItemSerializer,
    OrderSerializer,
    UpdateFulfillmentStatusSerializer,
)
from orders.services import FulfillmentService, KitchenService
from users.permissions import IsKitchenStaff

logger = logging.getLogger(__name__)


class KitchenAPIView(APIView):
    permission_classes = [IsKitchenStaff]

    def get_day(self, request):
        query = KitchenDateQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        return query.validated_data.get("date")


class KitchenOrderListView(KitchenAPIView):
    """Orders for a day (default today), filterable by fulfillmentStatus and menuItemId."""

    def get(self, request):
        orders = KitchenService.get_orders(request.query_params.dict())
        return Response(OrderSerializer(orders, many=True).data)


class KitchenSummaryView(KitchenAPIView):
    def get(self, request):
        summary = KitchenService.get_summary(self.get_day(request))
        for entry in summary:
            entry["menuItem"] = MenuItemSummarySerializer(entry["menuItem"]).data
        return Response(summary)


class KitchenStatsView(KitchenAPIView):
    def get(self, request):
        stats = KitchenService.get_daily_stats(self.get_day(request))
        stats["totalRevenue"] = str(stats["totalRevenue"])
        return Response(stats)


class KitchenOrderStatusView(KitchenAPIView):
    """Set every item of an order to PLACED or FULFILLED."""

    def patch(self, request, pk):
        serializer = UpdateFulfillmentStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        FulfillmentService.update_order_status(pk, serializer.validated_data["status"])
        order = KitchenService.get_order(pk)
        return Response(OrderSerializer(order).data)


class KitchenOrderItemStatusView(KitchenAPIView):
    """Set one order item's fulfillment status."""

    def patch(self, request, pk):
        serializer = UpdateFulfillmentStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = FulfillmentService.update_item_status(pk, serializer.validated_data["status"])
        data = OrderItemSerializer(item).data
        data["orderFulfillmentStatus"] = item.order.fulfillment_status
        return Response(data)


class KitchenFulfillMenuItemView(KitchenAPIView):
    """Fulfill every open line for a menu item on a day (default today)."""

    def post(self, request, pk):
        serializer = FulfillMenuItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = FulfillmentService.fulfill_menu_item_for_date(
            pk, serializer.validated_data.get("date")
        )
        return Response(result)
