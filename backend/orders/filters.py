import django_filters

from .models import Order


class KitchenOrderFilter(django_filters.FilterSet):
    """
    Filters for the kitchen order list.

    `date` matches the order date; callers pass today when it is omitted.
    `menuItemId` keeps orders containing at least one line for that item.
    """

    date = django_filters.DateFilter(field_name="order_date")
    fulfillmentStatus = django_filters.ChoiceFilter(
        field_name="fulfillment_status", choices=Order.FulfillmentStatus.choices
    )
    menuItemId = django_filters.UUIDFilter(method="filter_menu_item")

    class Meta:
        model = Order
        fields = ["date", "fulfillmentStatus", "menuItemId"]

    def filter_menu_item(self, queryset, name, value):
        return queryset.filter(items__menu_item_id=value).distinct()
