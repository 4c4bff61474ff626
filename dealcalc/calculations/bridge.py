"""
Bridge Loan Calculations

Sizing and interest accrual for the short-term, interest-only loan that
carries a deal until refinance (BRRRR) or sale (Flip). Rehab financed by the
bridge is drawn in equal monthly amounts over the rehab window, so interest
accrues on a balance that grows during the rehab.
"""

from dataclasses import dataclass
from typing import List

from dealcalc.calculations.amortization import monthly_rate
from dealcalc.calculations.types import BridgeLoanInputs, RehabPhase


@dataclass
class BridgeLoan:
    """Bridge loan sizing."""

    purchase_financed: float  # Funded at closing
    rehab_financed: float  # Drawn over the rehab window
    principal: float  # Fully drawn balance
    points: float
    closing_costs: float
    monthly_rate: float
    equity_gap: float  # Unfinanced share of purchase (+ rehab when bridged)
    rehab_cash: float  # Rehab paid in cash when not bridged


def size_bridge_loan(
    purchase_price: float, rehab_total: float, bridge: BridgeLoanInputs
) -> BridgeLoan:
    """
    Size a bridge loan at its LTV against purchase (and rehab when bridged).

    Points are charged on the full principal, closing costs on the purchase
    price.
    """
    bridge = bridge.resolved()
    ltv = bridge.ltv_percent / 100
    financed_rehab_base = rehab_total if bridge.include_rehab_in_bridge else 0.0

    purchase_financed = purchase_price * ltv
    rehab_financed = financed_rehab_base * ltv
    principal = purchase_financed + rehab_financed

    return BridgeLoan(
        purchase_financed=purchase_financed,
        rehab_financed=rehab_financed,
        principal=principal,
        points=bridge.points_percent * principal / 100,
        closing_costs=bridge.closing_costs_percent * purchase_price / 100,
        monthly_rate=monthly_rate(bridge.interest_rate_annual_percent),
        equity_gap=max(purchase_price + financed_rehab_base - principal, 0.0),
        rehab_cash=0.0 if bridge.include_rehab_in_bridge else rehab_total,
    )


def build_bridge_balances(
    loan: BridgeLoan, phases: RehabPhase, months: int
) -> List[float]:
    """
    Outstanding bridge balance for months 1..months (index 0 is month 1).

    Each rehab month draws rehab_financed / rehab_months at the start of the
    month, so that month's interest includes the draw. Without a rehab window
    any financed rehab is drawn in full in month 1.
    """
    window = phases.rehab_months
    monthly_draw = loan.rehab_financed / window if window > 0 else 0.0

    balances = []
    balance = loan.purchase_financed
    for month in range(1, months + 1):
        if window > 0:
            if phases.rehab_start_month <= month <= phases.rehab_end_month:
                balance += monthly_draw
        elif month == 1:
            balance += loan.rehab_financed
        balances.append(balance)

    return balances


def accrue_bridge_interest(
    balances: List[float], rate: float, through_month: int
) -> float:
    """Interest on the outstanding balance, summed over months 1..through_month."""
    return sum(balance * rate for balance in balances[: max(through_month, 0)])


def final_balance(loan: BridgeLoan, balances: List[float], through_month: int) -> float:
    """Balance at the end of through_month; the full principal if no month elapsed."""
    if through_month < 1 or not balances:
        return loan.principal
    return balances[min(through_month, len(balances)) - 1]
