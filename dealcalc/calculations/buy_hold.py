"""
Buy & Hold Calculator

Purchase with a long-term amortizing loan and hold as a rental.
"""

import logging

from dealcalc.calculations.amortization import build_amortization
from dealcalc.calculations.cashflow import (
    annualize_monthly_results,
    generate_monthly_results,
)
from dealcalc.calculations.irr import calculate_projection_irr
from dealcalc.calculations.property_value import build_property_value_schedule
from dealcalc.calculations.rent import build_rent_schedule
from dealcalc.calculations.types import (
    BuyHoldInputs,
    BuyHoldMetrics,
    BuyHoldOutputs,
    CashRequiredBreakdown,
    PropertyValueInputs,
)

logger = logging.getLogger(__name__)


def calculate_buy_hold(inputs: BuyHoldInputs) -> BuyHoldOutputs:
    """
    Project a Buy & Hold deal.

    Cash required is the down payment, closing costs, lender points and the
    rehab total (callers exclude rehab by passing 0). Past the loan term the
    last amortization row keeps applying.
    """
    rent_inputs = inputs.rent.resolved(inputs.purchase_price)
    loan = inputs.loan.resolved()
    operating = inputs.operating.resolved()
    rehab_total = inputs.rehab_total or 0.0

    loan_amount = inputs.purchase_price * (1 - loan.down_payment_percent / 100)
    down_payment = inputs.purchase_price - loan_amount
    closing_costs = loan.closing_costs_percent * inputs.purchase_price / 100
    lender_points = loan.lender_points_percent * loan_amount / 100
    cash_required = down_payment + closing_costs + lender_points + rehab_total

    amortization = build_amortization(
        principal=loan_amount,
        annual_rate_percent=loan.interest_rate_annual_percent,
        term_months=loan.term_years * 12,
    )
    schedule = amortization.schedule

    rent_schedule = build_rent_schedule(rent_inputs, months=inputs.months)
    property_values = build_property_value_schedule(
        PropertyValueInputs(
            rent=rent_inputs,
            arv=inputs.arv,
            purchase_price=inputs.purchase_price,
            annual_appreciation_percent=inputs.annual_appreciation_percent,
        ),
        inputs.months,
    )

    monthly = generate_monthly_results(
        months=inputs.months,
        rent_schedule=rent_schedule,
        property_values=property_values,
        operating=operating,
        mortgage_for_month=lambda month: schedule[min(month, len(schedule)) - 1],
        fallback_value=inputs.purchase_price,
    )
    annual = annualize_monthly_results(monthly, cash_required, inputs.purchase_price)

    final = monthly[-1] if monthly else None
    metrics = BuyHoldMetrics(
        cash_required=cash_required,
        cash_required_with_rehab=cash_required,
        cash_required_breakdown=CashRequiredBreakdown(
            down_payment=down_payment,
            closing_costs=closing_costs,
            lender_points=lender_points,
            rehab=rehab_total,
        ),
        total_return=(
            final.cumulative_cash_flow + final.equity if final is not None else 0.0
        ),
        irr=calculate_projection_irr(cash_required, monthly),
        coc=annual[0].cash_on_cash if annual else None,
        dscr=annual[0].dscr if annual else None,
    )

    logger.debug(
        f"Buy & Hold: loan {loan_amount:.2f}, cash required {cash_required:.2f}, "
        f"{inputs.months} months"
    )
    return BuyHoldOutputs(monthly=monthly, annual=annual, metrics=metrics)
