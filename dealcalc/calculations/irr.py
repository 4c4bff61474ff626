"""
IRR and NPV Calculations

Implements IRR using Newton-Raphson method, matching Excel's IRR function.
"""

import logging
from typing import List, Optional

import numpy as np

from dealcalc.calculations.types import MonthlyResult

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 100
TOLERANCE = 1e-7
DEFAULT_GUESS = 0.1
MONTHLY_GUESS = 0.01


def calculate_npv(cash_flows: List[float], discount_rate: float) -> float:
    """
    Calculate NPV (Net Present Value) of periodic cash flows.

    Args:
        cash_flows: Array of cash flows (negative = outflow, positive = inflow)
        discount_rate: Discount rate per period (e.g., 0.10 for 10%)

    Returns:
        NPV value
    """
    flows = np.asarray(cash_flows, dtype=float)
    periods = np.arange(len(flows))
    return float(np.sum(flows / (1 + discount_rate) ** periods))


def _npv_derivative(cash_flows: List[float], rate: float) -> float:
    """Calculate derivative of NPV with respect to rate (for Newton-Raphson)."""
    flows = np.asarray(cash_flows, dtype=float)
    periods = np.arange(len(flows))
    return float(-np.sum(periods * flows / (1 + rate) ** (periods + 1)))


def calculate_irr(cash_flows: List[float], guess: float = DEFAULT_GUESS) -> float:
    """
    Calculate IRR (Internal Rate of Return) using Newton-Raphson method.

    Args:
        cash_flows: Array of periodic cash flows
        guess: Initial guess for rate (default 0.1 = 10%)

    Returns:
        Per-period IRR as decimal

    Raises:
        ValueError: If IRR cannot be calculated
    """
    if len(cash_flows) < 2:
        raise ValueError("At least 2 cash flows required")

    has_positive = any(cf > 0 for cf in cash_flows)
    has_negative = any(cf < 0 for cf in cash_flows)

    if not has_positive or not has_negative:
        raise ValueError("Cash flows must contain both positive and negative values")

    rate = guess

    for _ in range(MAX_ITERATIONS):
        npv = calculate_npv(cash_flows, rate)
        dnpv = _npv_derivative(cash_flows, rate)

        if abs(dnpv) < TOLERANCE:
            raise ValueError("IRR calculation failed: derivative too small")

        new_rate = rate - npv / dnpv

        if new_rate <= -1:
            raise ValueError("IRR calculation diverged below -100%")

        if abs(new_rate - rate) < TOLERANCE:
            return new_rate

        rate = new_rate

    raise ValueError("IRR calculation did not converge")


def monthly_to_annual_irr(monthly_irr: float) -> float:
    """Convert monthly IRR to annual IRR."""
    return ((1 + monthly_irr) ** 12) - 1


def calculate_projection_irr(
    cash_required: float, monthly: List[MonthlyResult]
) -> Optional[float]:
    """
    Annualized IRR of a hold: cash in at month 0, monthly cash flows, and
    the ending equity realized with the final month.

    Returns None when the flows have no IRR (no investment, no sign change,
    or no convergence).
    """
    if cash_required <= 0 or not monthly:
        return None

    cash_flows = [-cash_required] + [row.cash_flow for row in monthly]
    cash_flows[-1] += monthly[-1].equity

    try:
        return monthly_to_annual_irr(calculate_irr(cash_flows, MONTHLY_GUESS))
    except ValueError as e:
        logger.debug(f"IRR not available: {e}")
        return None
