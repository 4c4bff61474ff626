"""
Rent Schedule

Builds a month-indexed rent roll for a single unit across the current
tenant, rehab and stabilized phases.
"""

from typing import List

from dealcalc.calculations.timeline import derive_timeline
from dealcalc.calculations.types import (
    RentEntry,
    RentPhase,
    RentScheduleResult,
    RentTimelineInputs,
)


def rent_growth_factor(annual_percent: float, month: int) -> float:
    """
    Escalation factor for a 1-indexed month, compounding monthly.

    Month 1 collects rent at face value.
    """
    return (1 + annual_percent / 100) ** ((month - 1) / 12)


def build_rent_schedule(
    inputs: RentTimelineInputs, months: int = 12
) -> RentScheduleResult:
    """
    Build the rent schedule.

    - Current phase: months 1..tenant_months, rent only if occupied.
    - Rehab phase: rent is always 0.
    - Stabilized phase: target rent from the month after rehab (or turnover).

    Args:
        inputs: Occupancy and rehab timing
        months: Number of months to schedule

    Returns:
        RentScheduleResult with the monthly entries and totals
    """
    phases = derive_timeline(inputs)
    growth = inputs.annual_rent_growth_percent or 0.0
    schedule: List[RentEntry] = []

    for month in range(1, months + 1):
        phase = RentPhase.STABILIZED
        rent = inputs.target_monthly_rent * rent_growth_factor(growth, month)

        if inputs.model_current_vs_future and month <= phases.tenant_months:
            phase = RentPhase.CURRENT
            rent = (
                inputs.current_monthly_rent * rent_growth_factor(growth, month)
                if inputs.is_occupied
                else 0.0
            )
        elif (
            inputs.rehab_planned
            and phases.rehab_start_month > 0
            and phases.rehab_start_month <= month <= phases.rehab_end_month
        ):
            phase = RentPhase.REHAB
            rent = 0.0
        elif not inputs.model_current_vs_future and month == 1:
            # Legacy mode: stabilized from day one
            phase = RentPhase.STABILIZED
            rent = inputs.target_monthly_rent

        schedule.append(RentEntry(month=month, phase=phase, rent=rent))

    return RentScheduleResult(
        schedule=schedule,
        phases=phases,
        total_rent=sum(entry.rent for entry in schedule),
        zero_months=sum(1 for entry in schedule if entry.rent == 0),
    )
