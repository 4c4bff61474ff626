"""
Deal Timeline

Derives the month boundaries of the current-tenant, rehab and stabilized
phases. Months are 1-indexed: month 1 is the first month after purchase.
"""

import logging
from datetime import date
from typing import List

from dateutil.relativedelta import relativedelta

from dealcalc.calculations.types import RehabPhase, RehabTiming, RentTimelineInputs

logger = logging.getLogger(__name__)


def derive_timeline(inputs: RentTimelineInputs) -> RehabPhase:
    """
    Derive phase boundaries from timing inputs.

    An occupied unit under phased modelling cannot be rehabbed while tenanted,
    so the rehab is pushed past the tenant regardless of the requested timing.
    Without a rehab the window collapses (start = end + 1) at the tenant
    turnover, and refinance anchors to that same month.

    Args:
        inputs: Occupancy and rehab timing

    Returns:
        RehabPhase with tenant, rehab, stabilized and refinance months
    """
    phased = inputs.model_current_vs_future
    tenant_months = max(inputs.months_until_tenant_leaves, 0) if phased else 0

    rehab_planned = inputs.rehab_planned and inputs.rehab_length_months > 0
    forced_after_tenant = phased and inputs.is_occupied
    after_tenant = forced_after_tenant or (
        phased and inputs.rehab_timing == RehabTiming.AFTER_TENANT
    )

    if rehab_planned:
        rehab_start_month = tenant_months + 1 if after_tenant else 1
        rehab_end_month = rehab_start_month + inputs.rehab_length_months - 1
        stabilized_month = rehab_end_month + 1
    else:
        rehab_start_month = tenant_months + 1
        rehab_end_month = tenant_months
        stabilized_month = tenant_months + 1

    phase = RehabPhase(
        tenant_months=tenant_months,
        rehab_start_month=rehab_start_month,
        rehab_end_month=rehab_end_month,
        stabilized_month=stabilized_month,
        refinance_month=rehab_end_month + 1,
    )
    logger.debug(f"Derived timeline: {phase}")
    return phase


def month_dates(start_date: date, months: int) -> List[date]:
    """Calendar date of each projection month; month 1 falls on start_date."""
    return [start_date + relativedelta(months=i) for i in range(months)]
