"""
Flip Calculators

Buy, rehab and sell at ARV on a bridge loan. The financed period runs
through any inherited tenancy, the rehab, and the post-rehab hold.

calculate_flip charges interest on the full bridge principal for every
financed month and a flat monthly carry. calculate_flip_detailed draws
bridge-financed rehab incrementally and nets scheduled rent against carry.
"""

import logging
from dataclasses import dataclass

from dealcalc.calculations.bridge import (
    BridgeLoan,
    accrue_bridge_interest,
    build_bridge_balances,
    size_bridge_loan,
)
from dealcalc.calculations.rent import build_rent_schedule
from dealcalc.calculations.timeline import derive_timeline
from dealcalc.calculations.types import (
    FlipDetailedResult,
    FlipInputs,
    FlipResult,
    RehabPhase,
    RentTimelineInputs,
)

logger = logging.getLogger(__name__)


@dataclass
class _FlipTerms:
    """Resolved timeline and financing shared by both flip calculators."""

    rent: RentTimelineInputs
    phases: RehabPhase
    months_financed: int
    bridge: BridgeLoan
    agent_fee: float
    selling_costs: float
    project_cost: float  # Purchase + rehab regardless of financing


def _months_financed(inputs: FlipInputs, phases: RehabPhase) -> int:
    if phases.rehab_end_month:
        rehab_duration = phases.rehab_months
    else:
        rehab_duration = inputs.rehab_months
    return rehab_duration + inputs.hold_months + phases.tenant_months


def months_financed(inputs: FlipInputs) -> int:
    """Months the bridge is outstanding: tenancy, rehab and hold. Sale follows the last one."""
    return _months_financed(inputs, derive_timeline(inputs.resolved_rent()))


def _resolve_terms(inputs: FlipInputs) -> _FlipTerms:
    rent = inputs.resolved_rent()
    phases = derive_timeline(rent)
    months_financed = _months_financed(inputs, phases)

    logger.debug(f"Flip sale month {months_financed} ({phases})")

    return _FlipTerms(
        rent=rent,
        phases=phases,
        months_financed=months_financed,
        bridge=size_bridge_loan(inputs.purchase_price, inputs.rehab_total, inputs.bridge),
        agent_fee=inputs.arv * inputs.agent_fee_percent / 100,
        selling_costs=inputs.arv * inputs.selling_costs_percent / 100,
        project_cost=inputs.purchase_price + inputs.rehab_total,
    )


def _sale_result(
    inputs: FlipInputs, terms: _FlipTerms, interest: float, carrying: float
) -> FlipResult:
    """Profit, tax and ROI at sale. Losses are never taxed."""
    total_costs = (
        terms.project_cost
        + terms.bridge.points
        + terms.bridge.closing_costs
        + interest
        + carrying
        + terms.agent_fee
        + terms.selling_costs
    )
    net_profit = inputs.arv - total_costs
    tax_rate = (inputs.marginal_tax_rate_percent or 0.0) / 100
    tax_on_profit = net_profit * tax_rate if net_profit > 0 else 0.0
    profit_after_tax = net_profit - tax_on_profit

    return FlipResult(
        sale_month=terms.months_financed,
        sale_price=inputs.arv,
        total_costs=total_costs,
        net_profit=net_profit,
        roi=net_profit / total_costs if total_costs else 0.0,
        tax_on_profit=tax_on_profit,
        profit_after_tax=profit_after_tax,
        roi_after_tax=profit_after_tax / total_costs if total_costs else 0.0,
    )


def calculate_flip(inputs: FlipInputs) -> FlipResult:
    """Flip with interest on the full bridge principal and a flat carry."""
    terms = _resolve_terms(inputs)
    months = terms.months_financed

    interest = terms.bridge.principal * terms.bridge.monthly_rate * months
    carrying = (inputs.taxes_monthly + inputs.insurance_monthly) * months

    return _sale_result(inputs, terms, interest, carrying)


def calculate_flip_detailed(inputs: FlipInputs) -> FlipDetailedResult:
    """
    Flip with incremental rehab draws and rent-offset carry.

    Each financed month carries taxes and insurance less the scheduled rent,
    so a stabilized month before sale can push carrying below zero.
    """
    terms = _resolve_terms(inputs)
    months = terms.months_financed
    bridge = terms.bridge

    balances = build_bridge_balances(bridge, terms.phases, months)
    interest = accrue_bridge_interest(balances, bridge.monthly_rate, months)

    rent_schedule = build_rent_schedule(terms.rent, months=months)
    monthly_carry = inputs.taxes_monthly + inputs.insurance_monthly
    carrying = sum(monthly_carry - entry.rent for entry in rent_schedule.schedule)

    sale = _sale_result(inputs, terms, interest, carrying)

    equity_required = max(terms.project_cost - bridge.principal, 0.0)
    cash_invested = max(
        equity_required + bridge.points + bridge.closing_costs + interest + carrying,
        0.0,
    )

    return FlipDetailedResult(
        sale_month=sale.sale_month,
        sale_price=sale.sale_price,
        total_costs=sale.total_costs,
        net_profit=sale.net_profit,
        roi=sale.roi,
        tax_on_profit=sale.tax_on_profit,
        profit_after_tax=sale.profit_after_tax,
        roi_after_tax=sale.roi_after_tax,
        months_financed=months,
        bridge_principal=bridge.principal,
        points=bridge.points,
        closing=bridge.closing_costs,
        interest=interest,
        carrying=carrying,
        agent_fee=terms.agent_fee,
        selling_costs=terms.selling_costs,
        project_cost=terms.project_cost,
        equity_required=equity_required,
        cash_invested=cash_invested,
        cash_on_cash_roi=sale.net_profit / cash_invested if cash_invested else 0.0,
    )
