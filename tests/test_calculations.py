"""
Tests for the timeline, rent, value, loan and IRR building blocks.
"""

import pytest
from datetime import date

from dealcalc.calculations.amortization import (
    annual_rate_from_monthly,
    build_amortization,
    ipmt,
    monthly_rate,
    pmt,
    ppmt,
    total_interest,
)
from dealcalc.calculations.irr import (
    calculate_irr,
    calculate_npv,
    calculate_projection_irr,
    monthly_to_annual_irr,
)
from dealcalc.calculations.property_value import (
    build_property_value_schedule,
    monthly_appreciation_rate,
)
from dealcalc.calculations.rent import build_rent_schedule, rent_growth_factor
from dealcalc.calculations.timeline import derive_timeline, month_dates
from dealcalc.calculations.types import (
    PropertyValueInputs,
    RehabTiming,
    RentPhase,
    RentTimelineInputs,
)


def make_timeline(**overrides) -> RentTimelineInputs:
    """Phased, vacant, no rehab unless overridden."""
    values = dict(
        model_current_vs_future=True,
        is_occupied=False,
        current_monthly_rent=0.0,
        months_until_tenant_leaves=0,
        target_monthly_rent=1500.0,
        rehab_planned=False,
        rehab_timing=RehabTiming.IMMEDIATE,
        rehab_length_months=0,
    )
    values.update(overrides)
    return RentTimelineInputs(**values)


class TestIRRCalculations:
    """Test IRR calculation functions."""

    def test_calculate_irr_simple(self):
        """Test IRR calculation with simple cash flows."""
        # Investment of 100, returns of 110 after 1 year = 10% return
        cash_flows = [-100, 110]
        irr = calculate_irr(cash_flows)
        assert abs(irr - 0.10) < 0.001

    def test_calculate_irr_multi_period(self):
        """Test IRR with multiple periods."""
        # Investment of 100, annual returns of 20, sale of 100 at end
        cash_flows = [-100, 20, 20, 20, 20, 120]
        irr = calculate_irr(cash_flows)
        assert abs(irr - 0.20) < 0.01  # ~20% IRR

    def test_npv_at_irr_is_zero(self):
        """NPV discounted at the IRR is zero."""
        assert abs(calculate_npv([-100, 110], 0.10)) < 1e-9

    def test_irr_requires_sign_change(self):
        """All-positive flows have no IRR."""
        with pytest.raises(ValueError):
            calculate_irr([100, 110])

    def test_irr_requires_two_flows(self):
        with pytest.raises(ValueError):
            calculate_irr([-100])

    def test_monthly_to_annual(self):
        """1% monthly compounds to about 12.68% annually."""
        assert abs(monthly_to_annual_irr(0.01) - 0.126825) < 1e-6

    def test_projection_irr_without_investment(self):
        """No cash in means no IRR."""
        assert calculate_projection_irr(0.0, []) is None


class TestAmortization:
    """Test Excel-compatible loan functions."""

    def test_pmt_standard_mortgage(self):
        """75,000 at 6% for 30 years."""
        payment = pmt(0.005, 360, 75000)
        assert abs(payment - 449.66) < 0.01

    def test_pmt_zero_rate(self):
        """Zero rate splits principal evenly."""
        assert pmt(0, 12, 1200) == 100

    def test_pmt_rejects_non_positive_periods(self):
        with pytest.raises(ValueError):
            pmt(0.005, 0, 75000)

    def test_ipmt_first_period(self):
        """First month's interest is the full balance times the rate."""
        assert abs(ipmt(0.005, 1, 360, 75000) - 375.0) < 1e-9

    def test_ipmt_out_of_range(self):
        with pytest.raises(ValueError):
            ipmt(0.005, 361, 360, 75000)
        with pytest.raises(ValueError):
            ipmt(0.005, 0, 360, 75000)

    def test_ipmt_payment_type_does_not_change_first_period(self):
        """Interest is the opening balance times the rate for either payment timing."""
        assert abs(ipmt(0.005, 1, 360, 75000, payment_type=1) - 375.0) < 1e-9

    def test_ipmt_annuity_due_later_period(self):
        """Payments at period start reduce the balance before it compounds."""
        payment = pmt(0.005, 360, 75000, payment_type=1)
        expected = (75000 - payment) * 1.005 * 0.005
        assert abs(ipmt(0.005, 2, 360, 75000, payment_type=1) - expected) < 1e-9

    def test_ppmt_is_payment_less_interest(self):
        principal = ppmt(0.005, 1, 360, 75000)
        assert abs(principal - (pmt(0.005, 360, 75000) - 375.0)) < 1e-9

    def test_schedule_conserves_principal(self):
        """Principal paid sums to the loan and the balance ends at zero."""
        result = build_amortization(75000, 6, 360)
        assert len(result.schedule) == 360
        assert abs(sum(row.principal for row in result.schedule) - 75000) < 0.01
        assert result.schedule[-1].balance < 0.01
        assert all(row.balance >= 0 for row in result.schedule)

    def test_schedule_zero_rate(self):
        result = build_amortization(1200, 0, 12)
        assert result.payment == 100
        assert total_interest(result.schedule) == 0
        assert result.schedule[-1].balance == 0

    def test_monthly_rate(self):
        assert monthly_rate(6) == pytest.approx(0.005)
        assert annual_rate_from_monthly(0.5) == pytest.approx(6)


class TestTimeline:
    """Test phase derivation."""

    def test_rehab_after_tenant_leaves(self):
        """Tenant leaves after 3 months, 2 month rehab follows."""
        phases = derive_timeline(
            make_timeline(
                is_occupied=True,
                current_monthly_rent=900,
                months_until_tenant_leaves=3,
                rehab_planned=True,
                rehab_timing=RehabTiming.AFTER_TENANT,
                rehab_length_months=2,
            )
        )
        assert phases.tenant_months == 3
        assert phases.rehab_start_month == 4
        assert phases.rehab_end_month == 5
        assert phases.stabilized_month == 6
        assert phases.refinance_month == 6

    def test_occupied_unit_forces_rehab_after_tenant(self):
        """IMMEDIATE is overridden while a tenant is in place."""
        phases = derive_timeline(
            make_timeline(
                is_occupied=True,
                months_until_tenant_leaves=2,
                rehab_planned=True,
                rehab_timing=RehabTiming.IMMEDIATE,
                rehab_length_months=2,
            )
        )
        assert phases.rehab_start_month == 3
        assert phases.rehab_end_month == 4
        assert phases.refinance_month == 5

    def test_no_rehab_collapses_window(self):
        """Without rehab the window is empty and refinance follows turnover."""
        phases = derive_timeline(
            make_timeline(is_occupied=True, months_until_tenant_leaves=3)
        )
        assert phases.rehab_start_month == 4
        assert phases.rehab_end_month == 3
        assert phases.rehab_months == 0
        assert phases.stabilized_month == 4
        assert phases.refinance_month == 4

    def test_zero_length_rehab_treated_as_none(self):
        phases = derive_timeline(make_timeline(rehab_planned=True, rehab_length_months=0))
        assert phases.rehab_months == 0
        assert phases.refinance_month == 1

    def test_legacy_mode_ignores_tenant(self):
        """Legacy modelling has no current phase."""
        phases = derive_timeline(
            make_timeline(
                model_current_vs_future=False,
                is_occupied=True,
                months_until_tenant_leaves=5,
                rehab_planned=True,
                rehab_length_months=2,
            )
        )
        assert phases.tenant_months == 0
        assert phases.rehab_start_month == 1
        assert phases.stabilized_month == 3

    def test_phase_ordering(self):
        """start <= end + 1 <= stabilized for a spread of inputs."""
        for tenant in range(0, 4):
            for length in range(0, 4):
                for occupied in (True, False):
                    phases = derive_timeline(
                        make_timeline(
                            is_occupied=occupied,
                            months_until_tenant_leaves=tenant,
                            rehab_planned=length > 0,
                            rehab_length_months=length,
                            rehab_timing=RehabTiming.AFTER_TENANT,
                        )
                    )
                    assert phases.tenant_months >= 0
                    assert phases.rehab_start_month <= phases.rehab_end_month + 1
                    assert phases.rehab_end_month + 1 <= phases.stabilized_month

    def test_month_dates(self):
        """Month 1 falls on the start date; month ends are clamped."""
        assert month_dates(date(2025, 1, 31), 3) == [
            date(2025, 1, 31),
            date(2025, 2, 28),
            date(2025, 3, 31),
        ]


class TestRentSchedule:
    """Test rent schedule construction."""

    def test_current_rehab_stabilized(self):
        """Tenant pays one month, rehab pauses rent, target rent follows."""
        result = build_rent_schedule(
            make_timeline(
                is_occupied=True,
                current_monthly_rent=900,
                months_until_tenant_leaves=1,
                rehab_planned=True,
                rehab_timing=RehabTiming.AFTER_TENANT,
                rehab_length_months=2,
            ),
            months=6,
        )
        assert [e.rent for e in result.schedule] == [900, 0, 0, 1500, 1500, 1500]
        assert [e.phase for e in result.schedule] == [
            RentPhase.CURRENT,
            RentPhase.REHAB,
            RentPhase.REHAB,
            RentPhase.STABILIZED,
            RentPhase.STABILIZED,
            RentPhase.STABILIZED,
        ]
        assert result.total_rent == 5400
        assert result.zero_months == 2

    def test_vacant_current_phase_collects_nothing(self):
        result = build_rent_schedule(
            make_timeline(current_monthly_rent=900, months_until_tenant_leaves=2),
            months=4,
        )
        assert [e.rent for e in result.schedule] == [0, 0, 1500, 1500]
        assert result.schedule[0].phase == RentPhase.CURRENT

    def test_rehab_months_have_no_rent(self):
        result = build_rent_schedule(
            make_timeline(rehab_planned=True, rehab_length_months=3), months=12
        )
        rehab_rows = [e for e in result.schedule if e.phase == RentPhase.REHAB]
        assert len(rehab_rows) == 3
        assert all(e.rent == 0 for e in rehab_rows)

    def test_rehab_window_never_collects_rent(self):
        """Every month inside the rehab window pays nothing, in every mode."""
        for phased in [True, False]:
            for occupied in [True, False]:
                for timing in [RehabTiming.IMMEDIATE, RehabTiming.AFTER_TENANT]:
                    for length in [1, 3, 6]:
                        result = build_rent_schedule(
                            make_timeline(
                                model_current_vs_future=phased,
                                is_occupied=occupied,
                                current_monthly_rent=900,
                                months_until_tenant_leaves=2,
                                rehab_planned=True,
                                rehab_timing=timing,
                                rehab_length_months=length,
                                annual_rent_growth_percent=5,
                            ),
                            months=24,
                        )
                        phases = result.phases
                        window = [
                            e
                            for e in result.schedule
                            if phases.rehab_start_month <= e.month <= phases.rehab_end_month
                        ]
                        assert window, (phased, occupied, timing, length)
                        assert all(e.rent == 0 for e in window)
                        assert all(
                            e.phase == RentPhase.REHAB
                            for e in window
                            if e.month > phases.tenant_months
                        )
                        if phases.stabilized_month > phases.tenant_months:
                            stabilized = result.schedule[phases.stabilized_month - 1]
                            assert stabilized.phase == RentPhase.STABILIZED
                            assert stabilized.rent > 0

    def test_legacy_mode_stabilized_from_month_one(self):
        result = build_rent_schedule(
            make_timeline(model_current_vs_future=False), months=3
        )
        assert [e.rent for e in result.schedule] == [1500, 1500, 1500]
        assert result.zero_months == 0

    def test_rent_growth(self):
        """Rent grows a full year's rate by month 13."""
        result = build_rent_schedule(
            make_timeline(annual_rent_growth_percent=12), months=13
        )
        assert result.schedule[0].rent == pytest.approx(1500)
        assert result.schedule[12].rent == pytest.approx(1500 * 1.12)
        assert rent_growth_factor(0, 24) == 1

    def test_zero_months(self):
        result = build_rent_schedule(make_timeline(), months=0)
        assert result.schedule == []
        assert result.total_rent == 0


class TestPropertyValues:
    """Test the valuation path."""

    def _inputs(self, **timeline_overrides):
        return PropertyValueInputs(
            rent=make_timeline(as_is_value=200000, **timeline_overrides),
            arv=320000,
            purchase_price=200000,
            annual_appreciation_percent=3,
        )

    def test_steps_to_arv_after_rehab(self):
        result = build_property_value_schedule(
            self._inputs(rehab_planned=True, rehab_length_months=2), 15
        )
        rate = monthly_appreciation_rate(3)
        assert result.values[0].value == pytest.approx(200000 * (1 + rate))
        assert result.values[1].value == pytest.approx(200000 * (1 + rate) ** 2)
        assert result.values[2].value == 320000
        assert result.values[14].value == pytest.approx(329600)

    def test_no_rehab_appreciates_as_is(self):
        result = build_property_value_schedule(self._inputs(), 12)
        assert result.values[11].value == pytest.approx(206000)
        assert all(v.value < 320000 for v in result.values)

    def test_as_is_defaults_to_purchase_price(self):
        inputs = self._inputs()
        inputs.rent.as_is_value = None
        inputs.purchase_price = 150000
        result = build_property_value_schedule(inputs, 12)
        assert result.values[11].value == pytest.approx(154500)

    def test_monthly_rate_compounds_to_annual(self):
        assert (1 + monthly_appreciation_rate(3)) ** 12 == pytest.approx(1.03)
