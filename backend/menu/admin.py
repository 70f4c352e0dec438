from django.contrib import admin
from .models import MenuItem, VariationGroup, VariationOption


class VariationOptionInline(admin.TabularInline):
    model = VariationOption
    extra = 1
    fields = ("name", "price_modifier", "is_default", "display_order")


class VariationGroupInline(admin.StackedInline):
    model = VariationGroup
    extra = 0
    fields = ("name", "selection_type", "required", "display_order")
    show_change_link = True


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "price", "is_active")
    list_filter = ("category", "is_active")
    search_fields = ("name",)
    inlines = [VariationGroupInline]


@admin.register(VariationGroup)
class VariationGroupAdmin(admin.ModelAdmin):
    list_display = ("name", "menu_item", "selection_type", "required")
    list_filter = ("selection_type", "required")
    inlines = [VariationOptionInline]
