"""
Property Value Schedule

Monthly valuation path: the as-is value appreciates until the rehab ends,
steps to ARV the month after, then ARV appreciates from there.
"""

from dealcalc.calculations.timeline import derive_timeline
from dealcalc.calculations.types import (
    PropertyValueEntry,
    PropertyValueInputs,
    PropertyValueResult,
)


def monthly_appreciation_rate(annual_percent: float) -> float:
    """Monthly compounded equivalent of an annual appreciation rate."""
    return (1 + annual_percent / 100) ** (1 / 12) - 1


def build_property_value_schedule(
    inputs: PropertyValueInputs, months: int
) -> PropertyValueResult:
    """
    Build the property value schedule for months 1..months.

    Without a rehab the property simply appreciates from the as-is value
    (purchase price when no as-is value is given), with no ARV step.
    """
    rent = inputs.rent
    phases = derive_timeline(rent)
    rate = monthly_appreciation_rate(inputs.annual_appreciation_percent)
    as_is_value = (
        rent.as_is_value if rent.as_is_value is not None else inputs.purchase_price
    )
    rehab_end = phases.rehab_end_month
    values = []

    for month in range(1, months + 1):
        if rent.rehab_planned and rehab_end > 0:
            if month <= rehab_end:
                value = as_is_value * (1 + rate) ** month
            elif month == rehab_end + 1:
                value = inputs.arv
            else:
                value = inputs.arv * (1 + rate) ** (month - rehab_end - 1)
        else:
            value = as_is_value * (1 + rate) ** month

        values.append(PropertyValueEntry(month=month, value=value))

    return PropertyValueResult(values=values, monthly_appreciation_rate=rate)
