"""
Deal Calculation Engine

Pure projection functions for Buy & Hold, BRRRR and Flip deals. Every call
computes a fresh result from its inputs; nothing is cached or shared.
"""

from dealcalc.calculations import (
    amortization,
    bridge,
    brrrr,
    buy_hold,
    cashflow,
    flip,
    irr,
    property_value,
    rehab,
    rent,
    timeline,
)
from dealcalc.calculations.amortization import (
    build_amortization,
    ipmt,
    monthly_rate,
    pmt,
    ppmt,
)
from dealcalc.calculations.brrrr import calculate_brrrr
from dealcalc.calculations.buy_hold import calculate_buy_hold
from dealcalc.calculations.flip import calculate_flip, calculate_flip_detailed
from dealcalc.calculations.property_value import build_property_value_schedule
from dealcalc.calculations.rehab import REHAB_CATALOG, calculate_rehab_total
from dealcalc.calculations.rent import build_rent_schedule
from dealcalc.calculations.timeline import derive_timeline

__all__ = [
    "amortization",
    "bridge",
    "brrrr",
    "buy_hold",
    "cashflow",
    "flip",
    "irr",
    "property_value",
    "rehab",
    "rent",
    "timeline",
    "build_amortization",
    "build_property_value_schedule",
    "build_rent_schedule",
    "calculate_brrrr",
    "calculate_buy_hold",
    "calculate_flip",
    "calculate_flip_detailed",
    "calculate_rehab_total",
    "derive_timeline",
    "ipmt",
    "monthly_rate",
    "pmt",
    "ppmt",
    "REHAB_CATALOG",
]
