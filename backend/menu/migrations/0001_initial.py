import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="MenuItem",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True)),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Base price before any variation modifiers.",
                        max_digits=10,
                    ),
                ),
                (
                    "category",
                    models.CharField(
                        choices=[("MAIN", "Main"), ("SIDE", "Side"), ("DRINK", "Drink"), ("DESSERT", "Dessert")],
                        default="MAIN",
                        max_length=20,
                    ),
                ),
                (
                    "weekdays",
                    models.JSONField(
                        blank=True,
                        default=list,
                        help_text="Weekday names this item is offered on, e.g. ['MONDAY', 'FRIDAY'].",
                    ),
                ),
                ("image_url", models.URLField(blank=True)),
                ("is_active", models.BooleanField(db_index=True, default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Menu Item",
                "verbose_name_plural": "Menu Items",
                "ordering": ["category", "name"],
            },
        ),
        migrations.CreateModel(
            name="VariationGroup",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(help_text="Customer-facing name, e.g., 'Spice Level'", max_length=100)),
                (
                    "selection_type",
                    models.CharField(
                        choices=[("SINGLE", "Single Choice"), ("MULTI", "Multiple Choices")],
                        default="SINGLE",
                        max_length=10,
                    ),
                ),
                ("required", models.BooleanField(default=False, help_text="At least one option must be selected.")),
                ("display_order", models.PositiveIntegerField(default=0)),
                (
                    "menu_item",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="variation_groups",
                        to="menu.menuitem",
                    ),
                ),
            ],
            options={
                "ordering": ["display_order", "name"],
                "unique_together": {("menu_item", "name")},
            },
        ),
        migrations.CreateModel(
            name="VariationOption",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=100)),
                (
                    "price_modifier",
                    models.DecimalField(
                        decimal_places=2,
                        default=0,
                        help_text="The amount to add or subtract from the base item price.",
                        max_digits=10,
                    ),
                ),
                (
                    "is_default",
                    models.BooleanField(
                        default=False,
                        help_text="Pre-selected in the ordering UI. Not a substitute for a selection.",
                    ),
                ),
                ("display_order", models.PositiveIntegerField(default=0)),
                (
                    "variation_group",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="options",
                        to="menu.variationgroup",
                    ),
                ),
            ],
            options={
                "ordering": ["display_order", "name"],
                "unique_together": {("variation_group", "name")},
            },
        ),
    ]
