from rest_framework import serializers

from orders.models import Order

from .order_item_serializers import OrderItemSerializer


class OrderSerializer(serializers.ModelSerializer):
    """Read representation of an order with its items."""

    orderNumber = serializers.CharField(source="order_number", read_only=True)
    userId = serializers.IntegerField(source="user_id", read_only=True)
    guestEmail = serializers.EmailField(source="guest_email", read_only=True)
    guestFirstName = serializers.CharField(source="guest_first_name", read_only=True)
    guestLastName = serializers.CharField(source="guest_last_name", read_only=True)
    customerName = serializers.CharField(source="customer_display_name", read_only=True)
    totalAmount = serializers.DecimalField(
        source="total_amount", max_digits=10, decimal_places=2, read_only=True
    )
    paymentStatus = serializers.CharField(source="payment_status", read_only=True)
    fulfillmentStatus = serializers.CharField(source="fulfillment_status", read_only=True)
    orderDate = serializers.DateField(source="order_date", read_only=True)
    specialRequests = serializers.CharField(source="special_requests", read_only=True)
    paymentId = serializers.CharField(source="payment_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "orderNumber",
            "userId",
            "guestEmail",
            "guestFirstName",
            "guestLastName",
            "customerName",
            "totalAmount",
            "paymentStatus",
            "fulfillmentStatus",
            "orderDate",
            "specialRequests",
            "paymentId",
            "createdAt",
            "updatedAt",
            "items",
        ]
        read_only_fields = fields


# --- Input serializers ---


class VariationSelectionSerializer(serializers.Serializer):
    groupId = serializers.UUIDField(source="group_id")
    optionIds = serializers.ListField(
        child=serializers.UUIDField(), source="option_ids", allow_empty=True
    )


class CartItemSerializer(serializers.Serializer):
    menuItemId = serializers.UUIDField(source="menu_item_id")
    quantity = serializers.IntegerField(min_value=1)
    selectedVariations = VariationSelectionSerializer(
        many=True, required=False, source="selected_variations"
    )
    customizations = serializers.CharField(required=False, allow_blank=True, max_length=1000)
    specialRequests = serializers.CharField(
        required=False, allow_blank=True, max_length=1000, source="special_requests"
    )


class OrderCreateSerializer(serializers.Serializer):
    """Body of POST /orders."""

    items = CartItemSerializer(many=True, allow_empty=False)
    deliveryNotes = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=1000, source="delivery_notes"
    )


class GuestOrderCreateSerializer(OrderCreateSerializer):
    """Body of POST /orders/guest: the cart plus the guest's identity."""

    email = serializers.EmailField()
    firstName = serializers.CharField(max_length=150, source="first_name")
    lastName = serializers.CharField(max_length=150, source="last_name")

    def validate_email(self, value):
        return value.strip().lower()


class OrderListQuerySerializer(serializers.Serializer):
    startDate = serializers.DateField(required=False, source="start_date")
    endDate = serializers.DateField(required=False, source="end_date")
    page = serializers.IntegerField(required=False, min_value=1, default=1)
    limit = serializers.IntegerField(required=False, min_value=1, max_value=100, default=20)

    def validate(self, attrs):
        start, end = attrs.get("start_date"), attrs.get("end_date")
        if start and end and end < start:
            raise serializers.ValidationError("endDate must not be before startDate.")
        return attrs
