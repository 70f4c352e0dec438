from rest_framework import serializers

from orders.models import OrderItem


class UpdateFulfillmentStatusSerializer(serializers.Serializer):
    """Body of the kitchen status PATCH endpoints."""

    status = serializers.ChoiceField(choices=OrderItem.FulfillmentStatus.choices)


class FulfillMenuItemSerializer(serializers.Serializer):
    date = serializers.DateField(required=False)


class KitchenDateQuerySerializer(serializers.Serializer):
    date = serializers.DateField(required=False)
