from decimal import Decimal
from typing import Dict, List, Optional

from django.conf import settings

from menu.models import MenuItem, VariationGroup
from payments.money import sum_amounts

from ..exceptions import InvalidVariationSelection


def _merge_selections(selections) -> Dict[str, List[str]]:
    """
    Normalizes [{"group_id", "option_ids"}] into {group_id: [option_id, ...]},
    merging repeated groups and dropping repeated options.
    """
    merged: Dict[str, List[str]] = {}
    for selection in selections or []:
        group_id = str(selection.get("group_id"))
        option_ids = merged.setdefault(group_id, [])
        for option_id in selection.get("option_ids") or []:
            option_id = str(option_id)
            if option_id not in option_ids:
                option_ids.append(option_id)
    return merged


class PricingService:
    """
    Prices order lines from a menu item's base price plus the modifiers of
    the selected variation options. No database access: the menu item must
    arrive with its variation groups and options prefetched.
    """

    @staticmethod
    def resolve_selections(menu_item: MenuItem, selections) -> List[dict]:
        """
        Returns the snapshot entries for every selected option that resolves
        against the item. Unknown group or option ids are skipped.
        """
        requested = _merge_selections(selections)
        resolved = []
        for group in menu_item.variation_groups.all():
            option_ids = requested.get(str(group.id))
            if not option_ids:
                continue
            options = {str(option.id): option for option in group.options.all()}
            for option_id in option_ids:
                option = options.get(option_id)
                if option is None:
                    continue
                resolved.append(
                    {
                        "groupId": str(group.id),
                        "groupName": group.name,
                        "optionId": str(option.id),
                        "optionName": option.name,
                        "priceModifier": str(option.price_modifier),
                    }
                )
        return resolved

    @staticmethod
    def unit_price(menu_item: MenuItem, selections) -> Decimal:
        """Base price plus the modifier of every resolvable selected option."""
        resolved = PricingService.resolve_selections(menu_item, selections)
        modifier = sum((Decimal(entry["priceModifier"]) for entry in resolved), Decimal("0"))
        return menu_item.price + modifier

    @staticmethod
    def variation_snapshot(menu_item: MenuItem, selections) -> Optional[dict]:
        """Denormalized record of the chosen options, or None when nothing resolved."""
        resolved = PricingService.resolve_selections(menu_item, selections)
        if not resolved:
            return None
        total = sum((Decimal(entry["priceModifier"]) for entry in resolved), Decimal("0"))
        return {"variations": resolved, "totalModifier": str(total)}

    @staticmethod
    def line_total(unit_price: Decimal, quantity: int) -> Decimal:
        return unit_price * quantity

    @staticmethod
    def order_total(lines) -> Decimal:
        """
        Sum of unit_price * quantity over (unit_price, quantity) pairs,
        rounded once to currency precision.
        """
        return sum_amounts(
            settings.STRIPE_CURRENCY,
            (PricingService.line_total(price, qty) for price, qty in lines),
        )

    @staticmethod
    def validate_selections(menu_item: MenuItem, selections, strict: Optional[bool] = None):
        """
        Checks selections against the item's variation groups: every required
        group needs at least one option and SINGLE groups accept at most one.

        With strict validation (ORDERS_STRICT_VARIATION_SELECTIONS) selections
        naming unknown groups or options are rejected too.

        Raises InvalidVariationSelection listing the offending group names.
        """
        if strict is None:
            strict = getattr(settings, "ORDERS_STRICT_VARIATION_SELECTIONS", False)

        requested = _merge_selections(selections)
        groups = {str(group.id): group for group in menu_item.variation_groups.all()}
        violations = []

        for group_id, group in groups.items():
            known = {str(option.id) for option in group.options.all()}
            chosen = [oid for oid in requested.get(group_id, []) if oid in known]
            unknown = [oid for oid in requested.get(group_id, []) if oid not in known]

            if group.required and not chosen:
                violations.append(group.name)
            elif group.selection_type == VariationGroup.SelectionType.SINGLE and len(chosen) > 1:
                violations.append(group.name)
            elif strict and unknown:
                violations.append(group.name)

        if strict:
            violations.extend(gid for gid in requested if gid not in groups)

        if violations:
            raise InvalidVariationSelection(menu_item, violations)
