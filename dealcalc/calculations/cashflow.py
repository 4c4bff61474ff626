"""
Cash Flow Calculations

Generates monthly operating cash flow projections for a single rental and
rolls them up into annual summaries.
"""

from typing import Callable, List

from dealcalc.calculations.types import (
    AnnualSummary,
    MonthlyExpenses,
    MonthlyResult,
    MortgagePayment,
    OperatingInputs,
    PropertyValueResult,
    RentScheduleResult,
)

MONTHS_PER_YEAR = 12


def calculate_operating_expenses(
    rent: float, operating: OperatingInputs
) -> MonthlyExpenses:
    """
    Itemize one month's operating expenses.

    Vacancy, repairs, capex and management are a percent of the month's rent;
    taxes and insurance are the annual amounts spread evenly.
    """
    return MonthlyExpenses(
        vacancy=rent * operating.vacancy_percent / 100,
        repairs=rent * operating.repairs_percent / 100,
        capex=rent * operating.capex_percent / 100,
        management=rent * operating.management_percent / 100,
        taxes=operating.taxes_annual / 12,
        insurance=operating.insurance_annual / 12,
        utilities=operating.utilities_monthly or 0.0,
        other=operating.other_monthly_expenses or 0.0,
    )


def generate_monthly_results(
    months: int,
    rent_schedule: RentScheduleResult,
    property_values: PropertyValueResult,
    operating: OperatingInputs,
    mortgage_for_month: Callable[[int], MortgagePayment],
    fallback_value: float,
) -> List[MonthlyResult]:
    """
    Build month-by-month cash flow rows.

    Args:
        months: Projection horizon
        rent_schedule: Scheduled rent covering the horizon
        property_values: Valuation path covering the horizon
        operating: Operating assumptions
        mortgage_for_month: Debt row applying to a 1-indexed month
        fallback_value: Property value used past the valuation path

    Returns:
        One MonthlyResult per month with running cumulative cash flow
    """
    monthly = []
    cumulative_cash_flow = 0.0

    for i in range(months):
        month = i + 1
        rent = rent_schedule.schedule[i].rent if i < len(rent_schedule.schedule) else 0.0
        expenses = calculate_operating_expenses(rent, operating)
        mortgage = mortgage_for_month(month)

        noi = rent - expenses.total
        cash_flow = noi - mortgage.payment
        cumulative_cash_flow += cash_flow

        if i < len(property_values.values):
            property_value = property_values.values[i].value
        else:
            property_value = fallback_value

        monthly.append(
            MonthlyResult(
                month=month,
                rent=rent,
                expenses=expenses,
                mortgage=mortgage,
                cash_flow=cash_flow,
                cumulative_cash_flow=cumulative_cash_flow,
                property_value=property_value,
                equity=property_value - mortgage.balance,
            )
        )

    return monthly


def annualize_monthly_results(
    monthly: List[MonthlyResult], cash_required: float, purchase_price: float
) -> List[AnnualSummary]:
    """
    Convert monthly rows to annual summaries.

    Years are consecutive 12-month slices; a shorter final year is kept.
    """
    annual = []

    for start in range(0, len(monthly), MONTHS_PER_YEAR):
        year_rows = monthly[start:start + MONTHS_PER_YEAR]

        noi = sum(row.noi for row in year_rows)
        cash_flow = sum(row.cash_flow for row in year_rows)
        debt_service = sum(row.mortgage.payment for row in year_rows)
        principal_paid = sum(row.mortgage.principal for row in year_rows)
        appreciation = max(
            0.0, year_rows[-1].property_value - year_rows[0].property_value
        )

        annual.append(
            AnnualSummary(
                year=start // MONTHS_PER_YEAR + 1,
                noi=noi,
                cash_flow=cash_flow,
                debt_service=debt_service,
                principal_paid=principal_paid,
                appreciation=appreciation,
                ending_equity=year_rows[-1].equity,
                cash_on_cash=cash_flow / cash_required if cash_required else 0.0,
                cap_rate=noi / purchase_price if purchase_price else 0.0,
                dscr=noi / debt_service if debt_service else 0.0,
            )
        )

    return annual
