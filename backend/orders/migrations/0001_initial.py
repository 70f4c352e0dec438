import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("menu", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="DailyOrderSequence",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("day", models.DateField(unique=True)),
                ("last_value", models.PositiveIntegerField(default=0)),
            ],
            options={
                "verbose_name": "Daily Order Sequence",
            },
        ),
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("order_number", models.CharField(max_length=20, unique=True)),
                (
                    "guest_email",
                    models.EmailField(
                        blank=True, help_text="Email address for guest orders", max_length=254, null=True
                    ),
                ),
                ("guest_first_name", models.CharField(blank=True, max_length=150, null=True)),
                ("guest_last_name", models.CharField(blank=True, max_length=150, null=True)),
                (
                    "total_amount",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Sum of item price_at_purchase * quantity, fixed at creation.",
                        max_digits=10,
                    ),
                ),
                (
                    "payment_status",
                    models.CharField(
                        choices=[
                            ("PENDING", "Pending"),
                            ("COMPLETED", "Completed"),
                            ("FAILED", "Failed"),
                            ("REFUNDED", "Refunded"),
                        ],
                        default="PENDING",
                        max_length=20,
                    ),
                ),
                (
                    "fulfillment_status",
                    models.CharField(
                        choices=[
                            ("PLACED", "Placed"),
                            ("PARTIALLY_FULFILLED", "Partially Fulfilled"),
                            ("FULFILLED", "Fulfilled"),
                        ],
                        default="PLACED",
                        max_length=20,
                    ),
                ),
                ("order_date", models.DateField(help_text="The day the meal is for.")),
                ("special_requests", models.TextField(blank=True, null=True)),
                (
                    "payment_id",
                    models.CharField(
                        blank=True,
                        help_text="Payment gateway authorization reference.",
                        max_length=255,
                        null=True,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Order",
                "verbose_name_plural": "Orders",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["order_date", "fulfillment_status"], name="order_date_fulfil_idx"),
                    models.Index(fields=["order_date", "payment_status"], name="order_date_pay_idx"),
                    models.Index(fields=["user", "-created_at"], name="order_user_created_idx"),
                    models.Index(fields=["guest_email"], name="order_guest_email_idx"),
                    models.Index(fields=["payment_id"], name="order_payment_id_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=(
                            models.Q(("guest_email__isnull", True), ("user__isnull", False))
                            | models.Q(("guest_email__isnull", False), ("user__isnull", True))
                        ),
                        name="order_exactly_one_owner",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("quantity", models.PositiveIntegerField(default=1)),
                (
                    "price_at_purchase",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Unit price charged at the time of purchase, including variations.",
                        max_digits=10,
                    ),
                ),
                (
                    "selected_variations",
                    models.JSONField(
                        blank=True, help_text="Denormalized snapshot of the chosen variation options.", null=True
                    ),
                ),
                (
                    "customizations",
                    models.JSONField(
                        blank=True, help_text="Free-text customizations and special requests.", null=True
                    ),
                ),
                (
                    "fulfillment_status",
                    models.CharField(
                        choices=[("PLACED", "Placed"), ("FULFILLED", "Fulfilled")],
                        default="PLACED",
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "menu_item",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="order_items",
                        to="menu.menuitem",
                    ),
                ),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "verbose_name": "Order Item",
                "verbose_name_plural": "Order Items",
                "ordering": ["created_at"],
                "indexes": [
                    models.Index(fields=["order", "fulfillment_status"], name="item_order_fulfil_idx"),
                    models.Index(fields=["menu_item", "fulfillment_status"], name="item_menu_fulfil_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("quantity__gte", 1)),
                        name="order_item_quantity_positive",
                    ),
                ],
            },
        ),
    ]
