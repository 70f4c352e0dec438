import logging

from django.db.models import Prefetch

from .models import MenuItem, VariationGroup

logger = logging.getLogger(__name__)


class CatalogService:
    """Read-only access to the menu for order placement."""

    @staticmethod
    def get_active_items(menu_item_ids) -> dict:
        """
        Resolves the given ids against active menu items, with their variation
        groups and options prefetched so pricing needs no further queries.

        Returns a dict of {str(menu_item_id): MenuItem}. Ids that are missing or
        inactive are simply absent from the result.
        """
        groups = VariationGroup.objects.prefetch_related("options").order_by(
            "display_order", "name"
        )
        items = MenuItem.objects.filter(
            id__in=set(menu_item_ids), is_active=True
        ).prefetch_related(Prefetch("variation_groups", queryset=groups))
        return {str(item.id): item for item in items}
