"""
Seed the database with one demo deal per strategy.

Each deal is run through the calculators and saved as a scenario with its
summary metrics.
"""
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.encoders import jsonable_encoder

from dealcalc.calculations.brrrr import calculate_brrrr
from dealcalc.calculations.buy_hold import calculate_buy_hold
from dealcalc.calculations.flip import calculate_flip_detailed
from dealcalc.calculations.rehab import calculate_rehab_total, default_selections
from dealcalc.calculations.types import (
    BridgeLoanInputs,
    BRRRRInputs,
    BuyHoldInputs,
    FlipInputs,
    LoanInputs,
    OperatingInputs,
    RehabClass,
    RehabTiming,
    RentTimelineInputs,
    Strategy,
)
from dealcalc.db.database import get_db_context, init_db
from dealcalc.db.models import Scenario


def demo_operating():
    return OperatingInputs(
        taxes_annual=3600,
        insurance_annual=1200,
        repairs_percent=5,
        capex_percent=5,
        management_percent=8,
        vacancy_percent=5,
    )


def demo_deals():
    """(name, strategy, inputs, calculator, summary fields)"""
    rental_rehab = calculate_rehab_total(default_selections(), RehabClass.RENTAL).total
    flip_rehab = calculate_rehab_total(default_selections(), RehabClass.FLIP).total

    buy_hold = BuyHoldInputs(
        rent=RentTimelineInputs(
            model_current_vs_future=True,
            is_occupied=True,
            current_monthly_rent=1400,
            months_until_tenant_leaves=6,
            target_monthly_rent=1650,
            rehab_planned=False,
            rehab_timing=RehabTiming.AFTER_TENANT,
            rehab_length_months=0,
            annual_rent_growth_percent=3,
        ),
        loan=LoanInputs(
            purchase_price=180000,
            down_payment_percent=25,
            interest_rate_annual_percent=6.75,
            term_years=30,
            closing_costs_percent=3,
        ),
        operating=demo_operating(),
        arv=180000,
        purchase_price=180000,
        annual_appreciation_percent=3,
        months=120,
    )

    brrrr = BRRRRInputs(
        rent=RentTimelineInputs(
            model_current_vs_future=True,
            is_occupied=False,
            current_monthly_rent=0,
            months_until_tenant_leaves=0,
            target_monthly_rent=1900,
            rehab_planned=True,
            rehab_timing=RehabTiming.IMMEDIATE,
            rehab_length_months=3,
        ),
        long_term_loan=LoanInputs(
            purchase_price=150000,
            down_payment_percent=25,
            interest_rate_annual_percent=7,
            term_years=30,
            closing_costs_percent=2,
        ),
        operating=demo_operating(),
        bridge=BridgeLoanInputs(
            interest_rate_annual_percent=11,
            points_percent=2,
            closing_costs_percent=2,
            ltv_percent=90,
        ),
        refinance_ltv_percent=75,
        purchase_price=150000,
        arv=260000,
        rehab_total=rental_rehab,
        annual_appreciation_percent=3,
        months=120,
        refinance_reserve_months=3,
    )

    flip = FlipInputs(
        purchase_price=210000,
        arv=340000,
        rehab_total=flip_rehab,
        rehab_months=4,
        hold_months=2,
        bridge=BridgeLoanInputs(
            interest_rate_annual_percent=12,
            points_percent=2,
            closing_costs_percent=2,
            ltv_percent=85,
        ),
        selling_costs_percent=2,
        agent_fee_percent=5,
        taxes_monthly=300,
        insurance_monthly=100,
        marginal_tax_rate_percent=24,
    )

    return [
        (
            "Demo Rental - Elm Court",
            Strategy.BUY_HOLD,
            buy_hold,
            calculate_buy_hold,
            lambda r: {"cash_required": r.metrics.cash_required, "irr": r.metrics.irr},
        ),
        (
            "Demo BRRRR - Oak Street",
            Strategy.BRRRR,
            brrrr,
            calculate_brrrr,
            lambda r: {
                "cash_required": r.metrics.cash_required,
                "cash_out": r.cash_out,
                "refinance_month": r.refinance_month,
            },
        ),
        (
            "Demo Flip - Maple Ave",
            Strategy.FLIP,
            flip,
            calculate_flip_detailed,
            lambda r: {
                "net_profit": r.net_profit,
                "sale_month": r.sale_month,
                "cash_on_cash_roi": r.cash_on_cash_roi,
            },
        ),
    ]


def main():
    init_db()

    with get_db_context() as db:
        for name, strategy, inputs, calculator, summarize in demo_deals():
            existing = (
                db.query(Scenario)
                .filter(Scenario.name == name, Scenario.is_deleted == False)
                .first()
            )
            if existing:
                print(f"Scenario '{name}' already exists (ID: {existing.id})")
                continue

            result = calculator(inputs)
            scenario = Scenario(
                name=name,
                strategy=strategy,
                payload=jsonable_encoder(inputs),
                summary=jsonable_encoder(summarize(result)),
            )
            db.add(scenario)
            db.flush()
            print(f"Created scenario: {name} (ID: {scenario.id})")

    print("Done.")


if __name__ == "__main__":
    main()
