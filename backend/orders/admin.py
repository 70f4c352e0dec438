from django.contrib import admin

from .models import DailyOrderSequence, Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = (
        "menu_item",
        "quantity",
        "price_at_purchase",
        "get_line_item_total",
        "selected_variations",
        "customizations",
        "fulfillment_status",
    )
    fields = readonly_fields
    can_delete = False

    def get_line_item_total(self, obj):
        return f"${obj.total_price:,.2f}"

    get_line_item_total.short_description = "Line Item Total"

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Read-mostly admin for orders. Totals, owners and statuses are written by
    the order services only.
    """

    list_display = (
        "order_number",
        "customer_display_name",
        "order_date",
        "total_amount",
        "payment_status",
        "fulfillment_status",
        "created_at",
    )
    list_filter = ("order_date", "payment_status", "fulfillment_status")
    search_fields = ("order_number", "guest_email", "user__email", "payment_id")
    readonly_fields = [f.name for f in Order._meta.fields]
    inlines = [OrderItemInline]
    ordering = ("-created_at",)

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("user")

    def has_add_permission(self, request):
        return False


@admin.register(DailyOrderSequence)
class DailyOrderSequenceAdmin(admin.ModelAdmin):
    list_display = ("day", "last_value")
    ordering = ("-day",)
    readonly_fields = ("day", "last_value")

    def has_add_permission(self, request):
        return False
