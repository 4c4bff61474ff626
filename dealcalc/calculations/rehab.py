"""
Rehab Cost Estimator

Catalog-driven rehab budget. Each item carries a rental-grade and a
flip-grade unit price; retail grade is the flip price marked up.
"""

from typing import List, Optional

from dealcalc.calculations.types import (
    RehabCategory,
    RehabClass,
    RehabItem,
    RehabLineItem,
    RehabSelection,
    RehabTotalResult,
    UnitType,
)

DEFAULT_RETAIL_MULTIPLIER = 1.5

_FLOORING = RehabCategory.FLOORING
_KITCHEN = RehabCategory.KITCHEN
_BATH = RehabCategory.BATHROOMS
_GENERAL = RehabCategory.GENERAL
_INFRA = RehabCategory.INFRASTRUCTURE
_CONTINGENCY = RehabCategory.CONTINGENCY

# Unit prices in dollars: (rental grade, flip grade)
REHAB_CATALOG: List[RehabItem] = [
    # Flooring
    RehabItem("flooring-lvp", "LVP Flooring (per sq ft)", _FLOORING, UnitType.PER_SQFT, 4.5, 6.5, default_quantity=1000),
    RehabItem("flooring-carpet", "Carpeting (per sq ft)", _FLOORING, UnitType.PER_SQFT, 3, 4.5, default_quantity=1000),
    RehabItem("flooring-bath-tile", "Tile for Bathroom Floor", _FLOORING, UnitType.PER_BATH, 800, 1200),
    # Kitchen
    RehabItem("kitchen-cabinets", "Kitchen Cabinets", _KITCHEN, UnitType.PER_KITCHEN, 5000, 8000),
    RehabItem("kitchen-countertops", "Kitchen Countertops", _KITCHEN, UnitType.PER_KITCHEN, 3000, 5000),
    RehabItem("kitchen-appliances", "Kitchen Appliance Package", _KITCHEN, UnitType.PER_SET, 2500, 4000),
    RehabItem("kitchen-sink", "Kitchen Sink & Faucet", _KITCHEN, UnitType.PER_UNIT, 400, 700),
    # Bathrooms
    RehabItem("bath-full-reno", "Full Bathroom Renovation", _BATH, UnitType.PER_BATH, 4500, 7500),
    RehabItem("bath-vanity", "New Vanity with Sink", _BATH, UnitType.PER_UNIT, 600, 1200),
    RehabItem("bath-toilet", "New Toilet", _BATH, UnitType.PER_UNIT, 300, 500),
    RehabItem("bath-mirror-light", "Bathroom Mirror & Light", _BATH, UnitType.PER_SET, 200, 400),
    # General
    RehabItem("general-interior-paint", "Interior Paint (per sq ft)", _GENERAL, UnitType.PER_SQFT, 1.5, 2.5, default_quantity=1000),
    RehabItem("general-drywall-repair", "Drywall Repair (per sq ft)", _GENERAL, UnitType.PER_SQFT, 0.5, 0.8, default_quantity=1000),
    RehabItem("general-wall-prep", "Wall Prep & Patching (per sq ft)", _GENERAL, UnitType.PER_SQFT, 0.3, 0.5, default_quantity=1000),
    RehabItem("general-interior-doors", "New Interior Doors", _GENERAL, UnitType.PER_DOOR, 250, 350, default_quantity=6),
    RehabItem("general-door-knobs", "Door Knobs and Hardware", _GENERAL, UnitType.PER_SET, 35, 65, default_quantity=6),
    RehabItem("general-exterior-doors", "New Exterior Doors", _GENERAL, UnitType.PER_DOOR, 500, 800, default_quantity=2),
    RehabItem("general-windows", "New Windows", _GENERAL, UnitType.PER_WINDOW, 450, 650, default_quantity=10),
    RehabItem("general-blinds", "Window Blinds", _GENERAL, UnitType.PER_WINDOW, 50, 80, default_quantity=10),
    RehabItem("general-smoke-co", "Smoke/CO Detectors", _GENERAL, UnitType.PER_UNIT, 35, 35, default_quantity=4),
    # Infrastructure
    RehabItem("infra-exterior-paint", "Exterior Paint", _INFRA, UnitType.PER_PROJECT, 4000, 6000),
    RehabItem("infra-roof", "New Roof", _INFRA, UnitType.PER_PROJECT, 8000, 10000),
    RehabItem("infra-siding", "New Siding/Fascia", _INFRA, UnitType.PER_PROJECT, 3500, 5000),
    RehabItem("infra-electrical", "Electrical Update", _INFRA, UnitType.PER_PROJECT, 4000, 6000),
    RehabItem("infra-plumbing", "Plumbing Update", _INFRA, UnitType.PER_PROJECT, 3500, 5000),
    RehabItem("infra-water-heater", "Water Heater", _INFRA, UnitType.PER_UNIT, 1200, 1800),
    RehabItem("infra-ac", "New AC Unit", _INFRA, UnitType.PER_UNIT, 5000, 6500),
    RehabItem("infra-furnace", "New Furnace", _INFRA, UnitType.PER_UNIT, 4500, 5500),
    RehabItem("infra-landscaping", "Landscaping", _INFRA, UnitType.PER_PROJECT, 2000, 3500),
    RehabItem("infra-concrete", "Concrete/Porch Work", _INFRA, UnitType.PER_PROJECT, 2500, 4000),
    RehabItem("infra-waterproofing", "Basement Waterproofing", _INFRA, UnitType.PER_PROJECT, 3000, 4000),
    # Contingency / custom
    RehabItem("contingency", "Contingency (per sq ft)", _CONTINGENCY, UnitType.PER_SQFT, 2, 3, default_quantity=1000),
    RehabItem("custom-1", "Custom Item 1", _CONTINGENCY, UnitType.PER_CUSTOM, 0, 0),
]


def get_unit_price(item: RehabItem, grade: RehabClass) -> float:
    """
    Catalog unit price for a finish grade.

    Retail marks up the flip price (or the rental price for items without
    one) by the item's multiplier, 1.5x when unset.
    """
    if grade == RehabClass.RENTAL:
        return item.rental_price
    if grade == RehabClass.FLIP:
        return item.flip_price
    if grade == RehabClass.RETAIL:
        multiplier = (
            item.retail_multiplier
            if item.retail_multiplier is not None
            else DEFAULT_RETAIL_MULTIPLIER
        )
        return (item.flip_price or item.rental_price) * multiplier
    raise ValueError(f"Unhandled rehab grade: {grade}")


def find_item(item_id: str, catalog: List[RehabItem]) -> Optional[RehabItem]:
    return next((item for item in catalog if item.id == item_id), None)


def calculate_rehab_total(
    selections: List[RehabSelection],
    grade: RehabClass = RehabClass.RENTAL,
    catalog: Optional[List[RehabItem]] = None,
) -> RehabTotalResult:
    """
    Price a list of rehab selections.

    Args:
        selections: Items chosen, with optional quantity and price overrides
        grade: Finish grade used for catalog pricing
        catalog: Item catalog (defaults to REHAB_CATALOG)

    Returns:
        RehabTotalResult with the grand total and one line per enabled item

    Raises:
        ValueError: If a selection references an item not in the catalog
    """
    if catalog is None:
        catalog = REHAB_CATALOG

    line_items = []
    for selection in selections:
        if not selection.enabled:
            continue

        item = find_item(selection.item_id, catalog)
        if item is None:
            raise ValueError(f"Unknown rehab item: {selection.item_id}")

        if grade == RehabClass.RETAIL and selection.custom_retail_price:
            default_unit = selection.custom_retail_price
        else:
            default_unit = get_unit_price(item, grade)

        unit_price = (
            selection.custom_unit_price
            if selection.custom_unit_price is not None
            else default_unit
        )
        if selection.quantity is not None:
            quantity = selection.quantity
        else:
            quantity = item.default_quantity or 0

        line_items.append(
            RehabLineItem(
                item=item,
                quantity=quantity,
                unit_price=unit_price,
                line_total=unit_price * quantity,
            )
        )

    return RehabTotalResult(
        total=sum(line.line_total for line in line_items),
        line_items=line_items,
    )


def default_selections(catalog: Optional[List[RehabItem]] = None) -> List[RehabSelection]:
    """One enabled selection per catalog item at its default quantity."""
    if catalog is None:
        catalog = REHAB_CATALOG
    return [
        RehabSelection(item_id=item.id, quantity=item.default_quantity or 0)
        for item in catalog
    ]
