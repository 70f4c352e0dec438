import logging

from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from orders.serializers import (
    GuestOrderCreateSerializer,
    OrderCreateSerializer,
    OrderListQuerySerializer,
    OrderSerializer,
)
from orders.services import OrderService

logger = logging.getLogger(__name__)


def _placed_order_response(placed):
    return Response(
        {
            "order": OrderSerializer(placed.order).data,
            "clientSecret": placed.client_secret,
        },
        status=status.HTTP_201_CREATED,
    )


class OrderListCreateView(APIView):
    """
    GET: the caller's orders, newest first (startDate, endDate, page, limit).
    POST: place an order for the authenticated caller.
    """

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        query = OrderListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        result = OrderService.list_user_orders(request.user, **query.validated_data)
        result["orders"] = OrderSerializer(result["orders"], many=True).data
        return Response(result)

    def post(self, request):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        placed = OrderService().create_order(
            request.user, data["items"], data.get("delivery_notes")
        )
        return _placed_order_response(placed)


class GuestOrderCreateView(APIView):
    """Place an order without an account."""

    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = GuestOrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        placed = OrderService().create_guest_order(
            email=data["email"],
            first_name=data["first_name"],
            last_name=data["last_name"],
            items=data["items"],
            delivery_notes=data.get("delivery_notes"),
        )
        return _placed_order_response(placed)


class OrderDetailView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, pk):
        order = OrderService.get_order_for_user(pk, request.user)
        return Response(OrderSerializer(order).data)


class GuestOrderDetailView(APIView):
    """A guest order, visible only with the email it was placed under (?email=)."""

    permission_classes = [permissions.AllowAny]

    def get(self, request, pk):
        order = OrderService.get_guest_order(pk, request.query_params.get("email", ""))
        return Response(OrderSerializer(order).data)
