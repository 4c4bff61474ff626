"""
Deal Model Types

Inputs, derived phases and result rows shared by the calculation engine.
Percentages are whole numbers (6 means 6%).
"""

import enum
from dataclasses import dataclass, field, replace
from typing import List, Optional


class Strategy(str, enum.Enum):
    """Investment strategy."""
    BUY_HOLD = "BUY_HOLD"
    BRRRR = "BRRRR"
    FLIP = "FLIP"


class RehabTiming(str, enum.Enum):
    """When the rehab begins relative to purchase and tenancy."""
    IMMEDIATE = "IMMEDIATE"
    AFTER_TENANT = "AFTER_TENANT"


class RentPhase(str, enum.Enum):
    CURRENT = "CURRENT"
    REHAB = "REHAB"
    STABILIZED = "STABILIZED"


class RehabClass(str, enum.Enum):
    """Finish grade used to price rehab line items."""
    RENTAL = "RENTAL"
    FLIP = "FLIP"
    RETAIL = "RETAIL"


class UnitType(str, enum.Enum):
    PER_SQFT = "PER_SQFT"
    PER_KITCHEN = "PER_KITCHEN"
    PER_BATH = "PER_BATH"
    PER_PROJECT = "PER_PROJECT"
    PER_WINDOW = "PER_WINDOW"
    PER_DOOR = "PER_DOOR"
    PER_SET = "PER_SET"
    PER_UNIT = "PER_UNIT"
    PER_CUSTOM = "PER_CUSTOM"


class RehabCategory(str, enum.Enum):
    FLOORING = "Flooring"
    KITCHEN = "Kitchen"
    BATHROOMS = "Bathrooms"
    GENERAL = "General"
    INFRASTRUCTURE = "Infrastructure"
    CONTINGENCY = "Contingency"


# =============================================================================
# TIMELINE / RENT / VALUE
# =============================================================================


@dataclass
class RentTimelineInputs:
    """Occupancy and rehab timing for one deal."""

    model_current_vs_future: bool  # False = legacy stabilized-from-month-1
    is_occupied: bool
    current_monthly_rent: float  # Ignored if vacant
    months_until_tenant_leaves: int
    target_monthly_rent: float  # Rent after turnover / rehab
    rehab_planned: bool
    rehab_timing: RehabTiming
    rehab_length_months: int
    as_is_value: Optional[float] = None  # Defaults to purchase price
    annual_rent_growth_percent: Optional[float] = None

    def resolved(self, purchase_price: float) -> "RentTimelineInputs":
        """Copy with every optional field filled in."""
        return replace(
            self,
            as_is_value=(
                self.as_is_value if self.as_is_value is not None else purchase_price
            ),
            annual_rent_growth_percent=self.annual_rent_growth_percent or 0.0,
        )


@dataclass(frozen=True)
class RehabPhase:
    """Month boundaries derived from a RentTimelineInputs."""

    tenant_months: int
    rehab_start_month: int
    rehab_end_month: int
    stabilized_month: int
    refinance_month: int

    @property
    def rehab_months(self) -> int:
        return self.rehab_end_month - self.rehab_start_month + 1


@dataclass
class RentEntry:
    month: int
    phase: RentPhase
    rent: float


@dataclass
class RentScheduleResult:
    schedule: List[RentEntry]
    phases: RehabPhase
    total_rent: float  # Rent collected in the schedule window
    zero_months: int  # Vacancy plus rehab pause


@dataclass
class PropertyValueInputs:
    rent: RentTimelineInputs
    arv: float
    purchase_price: float
    annual_appreciation_percent: float


@dataclass
class PropertyValueEntry:
    month: int
    value: float


@dataclass
class PropertyValueResult:
    values: List[PropertyValueEntry]
    monthly_appreciation_rate: float


# =============================================================================
# FINANCING / OPERATIONS
# =============================================================================


@dataclass
class LoanInputs:
    """Long-term amortizing loan."""

    purchase_price: float
    down_payment_percent: float
    interest_rate_annual_percent: float
    term_years: int
    closing_costs_percent: Optional[float] = None
    lender_points_percent: Optional[float] = None

    def resolved(self) -> "LoanInputs":
        return replace(
            self,
            closing_costs_percent=self.closing_costs_percent or 0.0,
            lender_points_percent=self.lender_points_percent or 0.0,
        )


@dataclass
class BridgeLoanInputs:
    """Short-term interest-only loan used before refinance or sale."""

    interest_rate_annual_percent: float
    points_percent: Optional[float] = None
    closing_costs_percent: Optional[float] = None
    ltv_percent: Optional[float] = None  # Defaults to 100
    include_rehab_in_bridge: Optional[bool] = None  # Defaults to True

    def resolved(self) -> "BridgeLoanInputs":
        return replace(
            self,
            points_percent=self.points_percent or 0.0,
            closing_costs_percent=self.closing_costs_percent or 0.0,
            ltv_percent=100.0 if self.ltv_percent is None else self.ltv_percent,
            include_rehab_in_bridge=(
                True
                if self.include_rehab_in_bridge is None
                else self.include_rehab_in_bridge
            ),
        )


@dataclass
class OperatingInputs:
    taxes_annual: float
    insurance_annual: float
    repairs_percent: float  # Percent of rent
    capex_percent: float
    management_percent: float
    vacancy_percent: float
    utilities_monthly: Optional[float] = None
    other_monthly_expenses: Optional[float] = None

    def resolved(self) -> "OperatingInputs":
        return replace(
            self,
            utilities_monthly=self.utilities_monthly or 0.0,
            other_monthly_expenses=self.other_monthly_expenses or 0.0,
        )

    @property
    def fixed_monthly(self) -> float:
        """Taxes, insurance, utilities and other: the carry owed regardless of rent."""
        return (
            self.taxes_annual / 12
            + self.insurance_annual / 12
            + (self.utilities_monthly or 0.0)
            + (self.other_monthly_expenses or 0.0)
        )


@dataclass
class MortgagePayment:
    month: int
    payment: float
    principal: float
    interest: float
    balance: float


@dataclass
class AmortizationResult:
    payment: float
    schedule: List[MortgagePayment]


# =============================================================================
# PROJECTION ROWS
# =============================================================================


@dataclass
class MonthlyExpenses:
    vacancy: float
    repairs: float
    capex: float
    management: float
    taxes: float
    insurance: float
    utilities: float
    other: float

    @property
    def total(self) -> float:
        return (
            self.vacancy
            + self.repairs
            + self.capex
            + self.management
            + self.taxes
            + self.insurance
            + self.utilities
            + self.other
        )


@dataclass
class MonthlyResult:
    month: int
    rent: float
    expenses: MonthlyExpenses
    mortgage: MortgagePayment
    cash_flow: float
    cumulative_cash_flow: float
    property_value: float
    equity: float  # property_value - mortgage balance

    @property
    def noi(self) -> float:
        return self.rent - self.expenses.total


@dataclass
class AnnualSummary:
    year: int
    noi: float
    cash_flow: float
    debt_service: float
    principal_paid: float
    appreciation: float  # Never negative
    ending_equity: float
    cash_on_cash: float
    cap_rate: float
    dscr: float  # 0 when there is no debt service


@dataclass
class CashRequiredBreakdown:
    down_payment: float
    closing_costs: float
    lender_points: float
    rehab: float = 0.0
    carrying: float = 0.0
    refinance: float = 0.0

    @property
    def total(self) -> float:
        return (
            self.down_payment
            + self.closing_costs
            + self.lender_points
            + self.rehab
            + self.carrying
            + self.refinance
        )


@dataclass
class BuyHoldMetrics:
    cash_required: float
    cash_required_breakdown: CashRequiredBreakdown
    total_return: float
    cash_required_with_rehab: Optional[float] = None
    irr: Optional[float] = None  # Annualized; None when not solvable
    coc: Optional[float] = None
    dscr: Optional[float] = None


@dataclass
class BuyHoldOutputs:
    monthly: List[MonthlyResult]
    annual: List[AnnualSummary]
    metrics: BuyHoldMetrics


# =============================================================================
# STRATEGY INPUTS / RESULTS
# =============================================================================


@dataclass
class BuyHoldInputs:
    rent: RentTimelineInputs
    loan: LoanInputs
    operating: OperatingInputs
    arv: float
    purchase_price: float
    annual_appreciation_percent: float
    months: int
    rehab_total: float = 0.0  # Pass 0 to exclude rehab from cash required


@dataclass
class BRRRRInputs:
    rent: RentTimelineInputs
    long_term_loan: LoanInputs
    operating: OperatingInputs
    bridge: BridgeLoanInputs
    refinance_ltv_percent: float
    purchase_price: float
    arv: float
    rehab_total: float
    annual_appreciation_percent: float
    months: int
    refinance_closing_costs_percent: Optional[float] = None
    refinance_points_percent: Optional[float] = None
    refinance_reserve_months: Optional[int] = None


@dataclass
class BRRRRResult(BuyHoldOutputs):
    refinance_month: int = 1
    bridge_interest: float = 0.0
    cash_out: float = 0.0
    value_at_refi: float = 0.0
    refinance_amount: float = 0.0
    payoff_bridge: float = 0.0
    carrying_costs: float = 0.0
    refinance_closing_costs: float = 0.0
    refinance_points: float = 0.0
    refinance_reserves: float = 0.0


@dataclass
class FlipInputs:
    purchase_price: float
    arv: float
    rehab_total: float
    rehab_months: int
    hold_months: int  # Post-rehab holding period before sale
    bridge: BridgeLoanInputs
    selling_costs_percent: float
    agent_fee_percent: float
    taxes_monthly: float
    insurance_monthly: float
    marginal_tax_rate_percent: Optional[float] = None
    rent: Optional[RentTimelineInputs] = None

    def resolved_rent(self) -> RentTimelineInputs:
        """Timeline to use: the given one, or a vacant immediate rehab."""
        if self.rent is not None:
            return self.rent.resolved(self.purchase_price)
        return RentTimelineInputs(
            model_current_vs_future=False,
            is_occupied=False,
            current_monthly_rent=0.0,
            months_until_tenant_leaves=0,
            target_monthly_rent=0.0,
            rehab_planned=True,
            rehab_timing=RehabTiming.IMMEDIATE,
            rehab_length_months=self.rehab_months,
            as_is_value=self.purchase_price,
            annual_rent_growth_percent=0.0,
        )


@dataclass
class FlipResult:
    sale_month: int
    sale_price: float
    total_costs: float
    net_profit: float
    roi: float
    tax_on_profit: float
    profit_after_tax: float
    roi_after_tax: float


@dataclass
class FlipDetailedResult(FlipResult):
    months_financed: int = 0
    bridge_principal: float = 0.0
    points: float = 0.0
    closing: float = 0.0
    interest: float = 0.0
    carrying: float = 0.0  # Negative when rent outruns the carry
    agent_fee: float = 0.0
    selling_costs: float = 0.0
    project_cost: float = 0.0
    equity_required: float = 0.0
    cash_invested: float = 0.0
    cash_on_cash_roi: float = 0.0


# =============================================================================
# REHAB
# =============================================================================


@dataclass
class RehabItem:
    id: str
    label: str
    category: RehabCategory
    unit_type: UnitType
    rental_price: float
    flip_price: float
    retail_multiplier: Optional[float] = None  # 1.5x when unset
    default_quantity: Optional[float] = None
    notes: Optional[str] = None


@dataclass
class RehabSelection:
    item_id: str
    quantity: Optional[float] = None
    enabled: bool = True
    custom_unit_price: Optional[float] = None
    custom_retail_price: Optional[float] = None


@dataclass
class RehabLineItem:
    item: RehabItem
    quantity: float
    unit_price: float
    line_total: float


@dataclass
class RehabTotalResult:
    total: float
    line_items: List[RehabLineItem] = field(default_factory=list)
