"""
Loan Amortization Calculations

Implements loan payment and amortization schedule calculations,
matching Excel's PMT, IPMT, and PPMT functions.
"""

from typing import List

from dealcalc.calculations.types import AmortizationResult, MortgagePayment


def monthly_rate(annual_percent: float) -> float:
    """Monthly rate as decimal from an annual percentage (6 -> 0.005)."""
    return annual_percent / 100 / 12


def annual_rate_from_monthly(monthly_percent: float) -> float:
    return monthly_percent * 12


def pmt(
    rate: float,
    periods: int,
    present_value: float,
    future_value: float = 0.0,
    payment_type: int = 0,
) -> float:
    """
    Calculate the periodic payment of an annuity.

    Matches Excel's PMT() function, but returns a positive amount.

    Args:
        rate: Interest rate per period as decimal
        periods: Number of payments
        present_value: Loan principal
        future_value: Balance left after the last payment
        payment_type: 0 = payments at period end, 1 = at period start

    Returns:
        Payment per period (positive number)

    Raises:
        ValueError: If periods is not positive
    """
    if periods <= 0:
        raise ValueError("Number of payments must be greater than zero")

    if rate == 0:
        return abs((present_value + future_value) / periods)

    pvif = (1 + rate) ** periods
    payment = (rate * (present_value * pvif + future_value)) / (
        (1 + rate * payment_type) * (pvif - 1)
    )

    return abs(payment)


def ipmt(
    rate: float,
    period: int,
    periods: int,
    present_value: float,
    future_value: float = 0.0,
    payment_type: int = 0,
) -> float:
    """
    Interest portion of the payment in a 1-indexed period.

    Walks the balance forward from period 1 rather than using the closed
    form, which stays stable for long terms.

    Raises:
        ValueError: If period is outside [1, periods]
    """
    if period < 1 or period > periods:
        raise ValueError(
            f"Period {period} is outside the payment schedule (1-{periods})"
        )

    payment = pmt(rate, periods, present_value, future_value, payment_type)
    balance = present_value

    for _ in range(1, period):
        if payment_type == 1:
            balance -= payment
        balance *= 1 + rate
        if payment_type == 0:
            balance -= payment

    return balance * rate


def ppmt(
    rate: float,
    period: int,
    periods: int,
    present_value: float,
    future_value: float = 0.0,
    payment_type: int = 0,
) -> float:
    """Principal portion of the payment in a 1-indexed period."""
    payment = pmt(rate, periods, present_value, future_value, payment_type)
    interest = ipmt(rate, period, periods, present_value, future_value, payment_type)
    return payment - interest


def build_amortization(
    principal: float, annual_rate_percent: float, term_months: int
) -> AmortizationResult:
    """
    Generate a fully amortizing schedule with a constant payment.

    The balance is floored at zero, so principal paid over the schedule may
    fall short of the loan by floating-point drift; the final payment is not
    trued up.

    Args:
        principal: Loan principal amount
        annual_rate_percent: Annual interest rate in percent (e.g., 6 for 6%)
        term_months: Total loan term in months

    Returns:
        AmortizationResult with the payment and one row per month
    """
    rate = monthly_rate(annual_rate_percent)
    payment = pmt(rate, term_months, principal)
    balance = principal
    schedule = []

    for month in range(1, term_months + 1):
        interest = balance * rate
        principal_paid = payment - interest
        balance = max(balance - principal_paid, 0.0)

        schedule.append(
            MortgagePayment(
                month=month,
                payment=payment,
                principal=principal_paid,
                interest=interest,
                balance=balance,
            )
        )

    return AmortizationResult(payment=payment, schedule=schedule)


def total_interest(schedule: List[MortgagePayment]) -> float:
    """Calculate total interest paid over a schedule."""
    return sum(row.interest for row in schedule)
