from rest_framework import serializers

from menu.models import MenuItem
from orders.models import OrderItem


class MenuItemSummarySerializer(serializers.ModelSerializer):
    imageUrl = serializers.URLField(source="image_url", read_only=True)

    class Meta:
        model = MenuItem
        fields = ["id", "name", "description", "category", "price", "imageUrl"]
        read_only_fields = fields


class OrderItemSerializer(serializers.ModelSerializer):
    menuItemId = serializers.UUIDField(source="menu_item_id", read_only=True)
    menuItem = MenuItemSummarySerializer(source="menu_item", read_only=True)
    priceAtPurchase = serializers.DecimalField(
        source="price_at_purchase", max_digits=10, decimal_places=2, read_only=True
    )
    selectedVariations = serializers.JSONField(source="selected_variations", read_only=True)
    fulfillmentStatus = serializers.CharField(source="fulfillment_status", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "menuItemId",
            "menuItem",
            "quantity",
            "priceAtPurchase",
            "selectedVariations",
            "customizations",
            "fulfillmentStatus",
            "updatedAt",
        ]
        read_only_fields = fields
