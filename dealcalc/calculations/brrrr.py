"""
BRRRR Calculator

Buy, Rehab, Rent, Refinance, Repeat. The deal starts on an interest-only
bridge loan and pivots to a long-term amortizing loan at the refinance
month, which follows the rehab (or the tenant turnover when there is none).
"""

import logging

from dealcalc.calculations.amortization import build_amortization
from dealcalc.calculations.bridge import (
    accrue_bridge_interest,
    build_bridge_balances,
    final_balance,
    size_bridge_loan,
)
from dealcalc.calculations.cashflow import (
    annualize_monthly_results,
    generate_monthly_results,
)
from dealcalc.calculations.irr import calculate_projection_irr
from dealcalc.calculations.property_value import build_property_value_schedule
from dealcalc.calculations.rent import build_rent_schedule
from dealcalc.calculations.types import (
    BRRRRInputs,
    BRRRRResult,
    BuyHoldMetrics,
    CashRequiredBreakdown,
    MortgagePayment,
    PropertyValueInputs,
)

logger = logging.getLogger(__name__)


def calculate_brrrr(inputs: BRRRRInputs) -> BRRRRResult:
    """
    Project a BRRRR deal.

    Before the refinance month each row is a synthetic interest-only bridge
    payment on the outstanding (drawn) balance. At refinance the property is
    valued off the schedule, the new loan pays off the bridge plus accrued
    interest, and any surplus after refinance costs is cash out (never
    negative). From then on rows follow the new loan's amortization.
    """
    rent_inputs = inputs.rent.resolved(inputs.purchase_price)
    long_term_loan = inputs.long_term_loan.resolved()
    operating = inputs.operating.resolved()

    rent_schedule = build_rent_schedule(rent_inputs, months=inputs.months)
    phases = rent_schedule.phases
    refinance_month = phases.refinance_month
    bridge_months = refinance_month - 1

    # Bridge period
    bridge = size_bridge_loan(inputs.purchase_price, inputs.rehab_total, inputs.bridge)
    balances = build_bridge_balances(
        bridge, phases, max(bridge_months, inputs.months)
    )
    bridge_interest = accrue_bridge_interest(balances, bridge.monthly_rate, bridge_months)
    carrying_costs = operating.fixed_monthly * max(bridge_months, 0)

    # Refinance
    property_values = build_property_value_schedule(
        PropertyValueInputs(
            rent=rent_inputs,
            arv=inputs.arv,
            purchase_price=inputs.purchase_price,
            annual_appreciation_percent=inputs.annual_appreciation_percent,
        ),
        inputs.months,
    )
    # ARV stands in when the horizon ends before the refinance
    value_at_refi = next(
        (v.value for v in property_values.values if v.month == refinance_month),
        inputs.arv,
    )
    refinance_amount = value_at_refi * inputs.refinance_ltv_percent / 100

    amortization = build_amortization(
        principal=refinance_amount,
        annual_rate_percent=long_term_loan.interest_rate_annual_percent,
        term_months=long_term_loan.term_years * 12,
    )
    schedule = amortization.schedule

    closing_percent = (
        inputs.refinance_closing_costs_percent
        if inputs.refinance_closing_costs_percent is not None
        else long_term_loan.closing_costs_percent
    )
    points_percent = (
        inputs.refinance_points_percent
        if inputs.refinance_points_percent is not None
        else long_term_loan.lender_points_percent
    )
    refinance_closing_costs = refinance_amount * closing_percent / 100
    refinance_points = refinance_amount * points_percent / 100
    refinance_reserves = (inputs.refinance_reserve_months or 0) * amortization.payment
    refinance_costs = refinance_closing_costs + refinance_points + refinance_reserves

    payoff_bridge = final_balance(bridge, balances, bridge_months) + bridge_interest
    cash_out = max(refinance_amount - payoff_bridge - refinance_costs, 0.0)

    logger.debug(
        f"BRRRR refinance at month {refinance_month}: value {value_at_refi:.2f}, "
        f"new loan {refinance_amount:.2f}, payoff {payoff_bridge:.2f}, "
        f"cash out {cash_out:.2f}"
    )

    def mortgage_for_month(month: int) -> MortgagePayment:
        if month >= refinance_month:
            return schedule[min(month - refinance_month, len(schedule) - 1)]
        balance = balances[month - 1]
        interest = balance * bridge.monthly_rate
        return MortgagePayment(
            month=month,
            payment=interest,
            principal=0.0,
            interest=interest,
            balance=balance,
        )

    monthly = generate_monthly_results(
        months=inputs.months,
        rent_schedule=rent_schedule,
        property_values=property_values,
        operating=operating,
        mortgage_for_month=mortgage_for_month,
        fallback_value=value_at_refi,
    )

    cash_required = (
        bridge.equity_gap
        + bridge.closing_costs
        + bridge.points
        + bridge.rehab_cash
        + bridge_interest
        + carrying_costs
        + refinance_costs
    )
    annual = annualize_monthly_results(monthly, cash_required, inputs.purchase_price)

    post_refi_cash_flow = sum(
        row.cash_flow for row in monthly if row.month >= refinance_month
    )
    final = monthly[-1] if monthly else None

    metrics = BuyHoldMetrics(
        cash_required=cash_required,
        cash_required_breakdown=CashRequiredBreakdown(
            down_payment=bridge.equity_gap,
            closing_costs=bridge.closing_costs,
            lender_points=bridge.points,
            rehab=bridge.rehab_cash,
            carrying=carrying_costs + bridge_interest,
            refinance=refinance_costs,
        ),
        total_return=(
            final.cumulative_cash_flow + final.equity if final is not None else 0.0
        ),
        irr=calculate_projection_irr(cash_required, monthly),
        coc=post_refi_cash_flow / cash_required if cash_required else 0.0,
        dscr=annual[0].dscr if annual else None,
    )

    return BRRRRResult(
        monthly=monthly,
        annual=annual,
        metrics=metrics,
        refinance_month=refinance_month,
        bridge_interest=bridge_interest,
        cash_out=cash_out,
        value_at_refi=value_at_refi,
        refinance_amount=refinance_amount,
        payoff_bridge=payoff_bridge,
        carrying_costs=carrying_costs,
        refinance_closing_costs=refinance_closing_costs,
        refinance_points=refinance_points,
        refinance_reserves=refinance_reserves,
    )
