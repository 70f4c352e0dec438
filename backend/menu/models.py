import uuid

from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _


class Weekday(models.TextChoices):
    MONDAY = "MONDAY", _("Monday")
    TUESDAY = "TUESDAY", _("Tuesday")
    WEDNESDAY = "WEDNESDAY", _("Wednesday")
    THURSDAY = "THURSDAY", _("Thursday")
    FRIDAY = "FRIDAY", _("Friday")


class MenuItem(models.Model):
    class Category(models.TextChoices):
        MAIN = "MAIN", _("Main")
        SIDE = "SIDE", _("Side")
        DRINK = "DRINK", _("Drink")
        DESSERT = "DESSERT", _("Dessert")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text=_("Base price before any variation modifiers."),
    )
    category = models.CharField(
        max_length=20, choices=Category.choices, default=Category.MAIN
    )
    weekdays = models.JSONField(
        default=list,
        blank=True,
        help_text=_("Weekday names this item is offered on, e.g. ['MONDAY', 'FRIDAY']."),
    )
    image_url = models.URLField(blank=True)
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["category", "name"]
        verbose_name = _("Menu Item")
        verbose_name_plural = _("Menu Items")

    def __str__(self):
        return self.name

    def clean(self):
        invalid = [day for day in self.weekdays or [] if day not in Weekday.values]
        if invalid:
            raise ValidationError(
                {"weekdays": f"Unknown weekday(s): {', '.join(map(str, invalid))}"}
            )


class VariationGroup(models.Model):
    class SelectionType(models.TextChoices):
        SINGLE = "SINGLE", _("Single Choice")
        MULTI = "MULTI", _("Multiple Choices")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    menu_item = models.ForeignKey(
        MenuItem, on_delete=models.CASCADE, related_name="variation_groups"
    )
    name = models.CharField(
        max_length=100, help_text=_("Customer-facing name, e.g., 'Spice Level'")
    )
    selection_type = models.CharField(
        max_length=10, choices=SelectionType.choices, default=SelectionType.SINGLE
    )
    required = models.BooleanField(
        default=False, help_text=_("At least one option must be selected.")
    )
    display_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["display_order", "name"]
        unique_together = ("menu_item", "name")

    def __str__(self):
        return f"{self.menu_item.name} - {self.name}"


class VariationOption(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    variation_group = models.ForeignKey(
        VariationGroup, on_delete=models.CASCADE, related_name="options"
    )
    name = models.CharField(max_length=100)
    price_modifier = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=0,
        help_text=_("The amount to add or subtract from the base item price."),
    )
    is_default = models.BooleanField(
        default=False,
        help_text=_("Pre-selected in the ordering UI. Not a substitute for a selection."),
    )
    display_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["display_order", "name"]
        unique_together = ("variation_group", "name")

    def __str__(self):
        return f"{self.variation_group.name} - {self.name}"
