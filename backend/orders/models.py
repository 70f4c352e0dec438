import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from menu.models import MenuItem


class Order(models.Model):
    """
    A lunch order placed either by an authenticated user or by a guest.

    `total_amount` is fixed at creation. `fulfillment_status` mirrors the
    statuses of the order's items and is only written by FulfillmentService.
    """

    class PaymentStatus(models.TextChoices):
        PENDING = "PENDING", _("Pending")
        COMPLETED = "COMPLETED", _("Completed")
        FAILED = "FAILED", _("Failed")
        REFUNDED = "REFUNDED", _("Refunded")

    class FulfillmentStatus(models.TextChoices):
        PLACED = "PLACED", _("Placed")
        PARTIALLY_FULFILLED = "PARTIALLY_FULFILLED", _("Partially Fulfilled")
        FULFILLED = "FULFILLED", _("Fulfilled")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order_number = models.CharField(max_length=20, unique=True)

    # --- Owner: exactly one of user / guest identity ---
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="orders",
    )
    guest_email = models.EmailField(
        blank=True,
        null=True,
        help_text=_("Email address for guest orders"),
    )
    guest_first_name = models.CharField(max_length=150, blank=True, null=True)
    guest_last_name = models.CharField(max_length=150, blank=True, null=True)

    total_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text=_("Sum of item price_at_purchase * quantity, fixed at creation."),
    )
    payment_status = models.CharField(
        max_length=20, choices=PaymentStatus.choices, default=PaymentStatus.PENDING
    )
    fulfillment_status = models.CharField(
        max_length=20,
        choices=FulfillmentStatus.choices,
        default=FulfillmentStatus.PLACED,
    )
    order_date = models.DateField(help_text=_("The day the meal is for."))
    special_requests = models.TextField(blank=True, null=True)
    payment_id = models.CharField(
        max_length=255,
        blank=True,
        null=True,
        help_text=_("Payment gateway authorization reference."),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name = _("Order")
        verbose_name_plural = _("Orders")
        indexes = [
            models.Index(fields=["order_date", "fulfillment_status"], name="order_date_fulfil_idx"),
            models.Index(fields=["order_date", "payment_status"], name="order_date_pay_idx"),
            models.Index(fields=["user", "-created_at"], name="order_user_created_idx"),
            models.Index(fields=["guest_email"], name="order_guest_email_idx"),
            models.Index(fields=["payment_id"], name="order_payment_id_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(user__isnull=False, guest_email__isnull=True)
                    | models.Q(user__isnull=True, guest_email__isnull=False)
                ),
                name="order_exactly_one_owner",
            ),
        ]

    def __str__(self):
        return f"Order {self.order_number} - {self.fulfillment_status}"

    @property
    def customer_display_name(self):
        """Name shown to kitchen staff: the account's name, else the guest's."""
        if self.user_id:
            return self.user.full_name or self.user.email
        full_name = f"{self.guest_first_name or ''} {self.guest_last_name or ''}".strip()
        return full_name or self.guest_email or "Guest"


class OrderItem(models.Model):
    class FulfillmentStatus(models.TextChoices):
        PLACED = "PLACED", _("Placed")
        FULFILLED = "FULFILLED", _("Fulfilled")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    menu_item = models.ForeignKey(
        MenuItem, on_delete=models.PROTECT, related_name="order_items"
    )
    quantity = models.PositiveIntegerField(default=1)

    # Price snapshot, modifiers included
    price_at_purchase = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text=_("Unit price charged at the time of purchase, including variations."),
    )
    selected_variations = models.JSONField(
        null=True,
        blank=True,
        help_text=_("Denormalized snapshot of the chosen variation options."),
    )
    customizations = models.JSONField(
        null=True,
        blank=True,
        help_text=_("Free-text customizations and special requests."),
    )
    fulfillment_status = models.CharField(
        max_length=20,
        choices=FulfillmentStatus.choices,
        default=FulfillmentStatus.PLACED,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at"]
        verbose_name = _("Order Item")
        verbose_name_plural = _("Order Items")
        indexes = [
            models.Index(fields=["order", "fulfillment_status"], name="item_order_fulfil_idx"),
            models.Index(fields=["menu_item", "fulfillment_status"], name="item_menu_fulfil_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_item_quantity_positive",
            ),
        ]

    def __str__(self):
        return f"{self.quantity} x {self.menu_item.name} in Order {self.order.order_number}"

    @property
    def total_price(self) -> Decimal:
        return self.quantity * self.price_at_purchase


class DailyOrderSequence(models.Model):
    """Per-day counter backing ORD-YYYYMMDD-NNNN order numbers."""

    day = models.DateField(unique=True)
    last_value = models.PositiveIntegerField(default=0)

    class Meta:
        verbose_name = _("Daily Order Sequence")

    def __str__(self):
        return f"{self.day:%Y-%m-%d}: {self.last_value}"
