"""
Deal calculation API endpoints.

These endpoints accept inputs and return calculated results. Nothing is
read from or written to the database.
"""

import logging
from datetime import date
from typing import Callable, List, Optional, TypeVar

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from dealcalc.calculations import brrrr, buy_hold, flip, property_value, rent, timeline
from dealcalc.calculations.amortization import build_amortization, total_interest
from dealcalc.calculations.rehab import (
    DEFAULT_RETAIL_MULTIPLIER,
    REHAB_CATALOG,
    calculate_rehab_total,
)
from dealcalc.calculations.types import (
    BRRRRInputs,
    BuyHoldInputs,
    FlipInputs,
    PropertyValueInputs,
    RehabClass,
    RehabSelection,
    RentTimelineInputs,
)
from dealcalc.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter()

T = TypeVar("T")


class RentScheduleRequest(BaseModel):
    """Input for a standalone rent schedule."""

    rent: RentTimelineInputs
    months: int = 12


class PropertyValueRequest(BaseModel):
    """Input for a standalone property value schedule."""

    inputs: PropertyValueInputs
    months: Optional[int] = None  # Defaults to default_projection_months


class AmortizationRequest(BaseModel):
    """Input for amortization schedule."""

    principal: float
    annual_rate_percent: float
    term_months: int
    start_date: Optional[date] = None


class AmortizationRow(BaseModel):
    month: int
    payment_date: Optional[date] = None
    payment: float
    principal: float
    interest: float
    balance: float


class AmortizationResponse(BaseModel):
    """Amortization schedule with totals."""

    payment: float
    total_interest: float
    total_paid: float
    schedule: List[AmortizationRow]


class RehabRequest(BaseModel):
    """Input for pricing rehab selections."""

    selections: List[RehabSelection]
    grade: RehabClass = RehabClass.RENTAL


def _check_horizon(months: int) -> None:
    """Reject projection horizons outside 0..max_projection_months."""
    limit = get_settings().max_projection_months
    if months < 0 or months > limit:
        logger.warning(f"Rejected projection horizon of {months} months")
        raise HTTPException(
            status_code=400,
            detail=f"months must be between 0 and {limit}",
        )


def _run(calculation: Callable[..., T], *args) -> T:
    """Run an engine call, reporting invalid inputs as 400."""
    try:
        return calculation(*args)
    except ValueError as e:
        logger.warning(f"{calculation.__name__} rejected input: {e}")
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/timeline")
async def calculate_timeline(inputs: RentTimelineInputs):
    """Derive tenant, rehab, stabilization and refinance months."""
    return _run(timeline.derive_timeline, inputs)


@router.post("/rent-schedule")
async def calculate_rent_schedule(request: RentScheduleRequest):
    """Month-by-month rent with its phase."""
    _check_horizon(request.months)
    return _run(rent.build_rent_schedule, request.rent, request.months)


@router.post("/property-values")
async def calculate_property_values(request: PropertyValueRequest):
    """Month-by-month property value (as-is, ARV step, appreciation)."""
    months = request.months
    if months is None:
        months = get_settings().default_projection_months
    _check_horizon(months)
    return _run(property_value.build_property_value_schedule, request.inputs, months)


@router.post("/amortization", response_model=AmortizationResponse)
async def calculate_amortization(request: AmortizationRequest):
    """Calculate loan amortization schedule, optionally dated."""
    _check_horizon(request.term_months)
    result = _run(
        build_amortization,
        request.principal,
        request.annual_rate_percent,
        request.term_months,
    )

    dates: List[Optional[date]] = [None] * len(result.schedule)
    if request.start_date is not None:
        dates = timeline.month_dates(request.start_date, len(result.schedule))

    return AmortizationResponse(
        payment=result.payment,
        total_interest=total_interest(result.schedule),
        total_paid=sum(row.payment for row in result.schedule),
        schedule=[
            AmortizationRow(
                month=row.month,
                payment_date=row_date,
                payment=row.payment,
                principal=row.principal,
                interest=row.interest,
                balance=row.balance,
            )
            for row, row_date in zip(result.schedule, dates)
        ],
    )


@router.get("/rehab/catalog")
async def get_rehab_catalog():
    """Built-in rehab line items with rental and flip pricing."""
    return {
        "items": REHAB_CATALOG,
        "total": len(REHAB_CATALOG),
        "default_retail_multiplier": DEFAULT_RETAIL_MULTIPLIER,
    }


@router.post("/rehab")
async def calculate_rehab(request: RehabRequest):
    """Price rehab selections at a finish grade."""
    return _run(calculate_rehab_total, request.selections, request.grade)


@router.post("/buy-hold")
async def calculate_buy_hold(inputs: BuyHoldInputs):
    """Project a Buy & Hold deal."""
    _check_horizon(inputs.months)
    return _run(buy_hold.calculate_buy_hold, inputs)


@router.post("/brrrr")
async def calculate_brrrr(inputs: BRRRRInputs):
    """Project a BRRRR deal through refinance."""
    _check_horizon(inputs.months)
    phases = _run(timeline.derive_timeline, inputs.rent.resolved(inputs.purchase_price))
    _check_horizon(phases.refinance_month - 1)
    return _run(brrrr.calculate_brrrr, inputs)


@router.post("/flip")
async def calculate_flip(inputs: FlipInputs):
    """Flip profit with flat interest and carry."""
    _check_horizon(_run(flip.months_financed, inputs))
    return _run(flip.calculate_flip, inputs)


@router.post("/flip-detailed")
async def calculate_flip_detailed(inputs: FlipInputs):
    """Flip profit with incremental draws and rent-offset carry."""
    _check_horizon(_run(flip.months_financed, inputs))
    return _run(flip.calculate_flip_detailed, inputs)
