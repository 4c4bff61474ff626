"""
Tests for the Buy & Hold calculator.
"""

import pytest

from dealcalc.calculations.buy_hold import calculate_buy_hold
from dealcalc.calculations.types import (
    BuyHoldInputs,
    LoanInputs,
    OperatingInputs,
    RehabTiming,
    RentTimelineInputs,
)


def make_inputs(
    purchase_price=100000.0,
    rent=1000.0,
    months=12,
    rehab_total=0.0,
    **loan_overrides,
) -> BuyHoldInputs:
    """100k purchase, 25% down at 6% for 30 years, no operating costs."""
    loan = dict(
        purchase_price=purchase_price,
        down_payment_percent=25,
        interest_rate_annual_percent=6,
        term_years=30,
    )
    loan.update(loan_overrides)
    return BuyHoldInputs(
        rent=RentTimelineInputs(
            model_current_vs_future=False,
            is_occupied=False,
            current_monthly_rent=0.0,
            months_until_tenant_leaves=0,
            target_monthly_rent=rent,
            rehab_planned=False,
            rehab_timing=RehabTiming.IMMEDIATE,
            rehab_length_months=0,
        ),
        loan=LoanInputs(**loan),
        operating=OperatingInputs(
            taxes_annual=0,
            insurance_annual=0,
            repairs_percent=0,
            capex_percent=0,
            management_percent=0,
            vacancy_percent=0,
        ),
        arv=purchase_price,
        purchase_price=purchase_price,
        annual_appreciation_percent=0,
        months=months,
        rehab_total=rehab_total,
    )


class TestBuyHoldBaseline:
    """100k rental at 1,000/month over one year."""

    def test_cash_required(self):
        result = calculate_buy_hold(make_inputs())
        assert result.metrics.cash_required == 25000
        breakdown = result.metrics.cash_required_breakdown
        assert breakdown.down_payment == 25000
        assert breakdown.total == 25000

    def test_mortgage_payment(self):
        result = calculate_buy_hold(make_inputs())
        assert abs(result.monthly[0].mortgage.payment - 449.66) < 0.01

    def test_year_one_cash_flow(self):
        result = calculate_buy_hold(make_inputs())
        assert len(result.annual) == 1
        assert abs(result.annual[0].cash_flow - 6604) < 1
        assert result.monthly[-1].cumulative_cash_flow == pytest.approx(
            result.annual[0].cash_flow
        )

    def test_month_twelve_equity(self):
        result = calculate_buy_hold(make_inputs())
        assert abs(result.monthly[11].equity - 25921) < 1

    def test_return_metrics(self):
        result = calculate_buy_hold(make_inputs())
        metrics = result.metrics
        assert metrics.coc == pytest.approx(result.annual[0].cash_flow / 25000)
        assert metrics.dscr == pytest.approx(12000 / result.annual[0].debt_service)
        assert metrics.total_return == pytest.approx(
            result.monthly[-1].cumulative_cash_flow + result.monthly[-1].equity
        )
        assert metrics.irr is not None
        assert metrics.irr > 0

    def test_annual_summary(self):
        year = calculate_buy_hold(make_inputs()).annual[0]
        assert year.noi == 12000
        assert year.cap_rate == pytest.approx(0.12)
        assert year.appreciation == 0
        assert year.principal_paid == pytest.approx(921, abs=1)


class TestBuyHoldCosts:
    """Test cash required components."""

    def test_rehab_added_to_cash_required(self):
        result = calculate_buy_hold(
            make_inputs(purchase_price=200000, rehab_total=50000)
        )
        assert result.metrics.cash_required == 100000
        assert result.metrics.cash_required_with_rehab == 100000
        assert result.metrics.cash_required_breakdown.rehab == 50000

    def test_closing_costs_and_points(self):
        """Closing on the price, points on the loan."""
        result = calculate_buy_hold(
            make_inputs(closing_costs_percent=3, lender_points_percent=1)
        )
        breakdown = result.metrics.cash_required_breakdown
        assert breakdown.closing_costs == 3000
        assert breakdown.lender_points == 750
        assert result.metrics.cash_required == 28750

    def test_operating_expenses_reduce_cash_flow(self):
        inputs = make_inputs()
        inputs.operating.vacancy_percent = 10
        inputs.operating.taxes_annual = 1200
        result = calculate_buy_hold(inputs)
        expenses = result.monthly[0].expenses
        assert expenses.vacancy == 100
        assert expenses.taxes == 100
        assert result.monthly[0].noi == 800


class TestBuyHoldHorizon:
    """Test horizons shorter and longer than the loan."""

    def test_multi_year_rows(self):
        result = calculate_buy_hold(make_inputs(months=30))
        assert len(result.monthly) == 30
        assert [y.year for y in result.annual] == [1, 2, 3]

    def test_horizon_past_loan_term(self):
        result = calculate_buy_hold(make_inputs(months=18, term_years=1))
        assert len(result.monthly) == 18
        assert result.monthly[-1].mortgage.month == 12

    def test_zero_months(self):
        result = calculate_buy_hold(make_inputs(months=0))
        assert result.monthly == []
        assert result.annual == []
        assert result.metrics.total_return == 0
        assert result.metrics.irr is None

    def test_appreciation(self):
        inputs = make_inputs(months=24)
        inputs.annual_appreciation_percent = 3
        result = calculate_buy_hold(inputs)
        assert result.monthly[11].property_value == pytest.approx(103000)
        assert result.annual[1].appreciation > 0
