"""
Scenario management API endpoints.
"""

import logging
from fastapi import APIRouter, HTTPException, Depends, Query
from pydantic import BaseModel, field_validator
from typing import Any, Dict, Optional, List
from sqlalchemy.orm import Session

from dealcalc.calculations.types import Strategy
from dealcalc.config import get_settings
from dealcalc.db.database import get_db
from dealcalc.db.models import Scenario

logger = logging.getLogger(__name__)

router = APIRouter()


class ScenarioCreate(BaseModel):
    """Schema for creating a scenario."""

    name: str
    strategy: Strategy
    payload: Dict[str, Any]
    summary: Optional[Dict[str, Any]] = None
    version: int = 1


class ScenarioUpdate(BaseModel):
    """Schema for updating a scenario."""

    name: Optional[str] = None
    strategy: Optional[Strategy] = None
    payload: Optional[Dict[str, Any]] = None
    summary: Optional[Dict[str, Any]] = None
    version: Optional[int] = None

    @field_validator("name", "strategy", "payload", "version")
    def reject_null(cls, v, info):
        """Only summary may be cleared; the other columns are required."""
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class ScenarioResponse(BaseModel):
    """Schema for scenario response."""

    id: str
    name: str
    strategy: Strategy
    payload: Dict[str, Any]
    summary: Optional[Dict[str, Any]]
    version: int
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ScenarioListResponse(BaseModel):
    """Response for listing scenarios."""

    items: List[ScenarioResponse]
    total: int
    limit: int
    offset: int


def scenario_to_response(scenario: Scenario) -> ScenarioResponse:
    """Convert Scenario model to response schema."""
    return ScenarioResponse(
        id=scenario.id,
        name=scenario.name,
        strategy=scenario.strategy,
        payload=scenario.payload or {},
        summary=scenario.summary,
        version=scenario.version,
        created_at=scenario.created_at.isoformat() if scenario.created_at else None,
        updated_at=scenario.updated_at.isoformat() if scenario.updated_at else None,
    )


def _get_active_scenario(db: Session, scenario_id: str) -> Scenario:
    scenario = (
        db.query(Scenario)
        .filter(Scenario.id == scenario_id, Scenario.is_deleted == False)
        .first()
    )

    if not scenario:
        raise HTTPException(status_code=404, detail="Scenario not found")

    return scenario


@router.get("/", response_model=ScenarioListResponse)
async def list_scenarios(
    q: Optional[str] = None,
    strategy: Optional[Strategy] = None,
    limit: Optional[int] = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    """List saved scenarios, newest first, optionally filtered by name and strategy."""
    if limit is None:
        limit = get_settings().scenario_page_limit

    query = db.query(Scenario).filter(Scenario.is_deleted == False)

    if q:
        pattern = q.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        query = query.filter(Scenario.name.ilike(f"%{pattern}%", escape="\\"))
    if strategy:
        query = query.filter(Scenario.strategy == strategy)

    total = query.count()
    scenarios = (
        query.order_by(Scenario.created_at.desc()).offset(offset).limit(limit).all()
    )

    return ScenarioListResponse(
        items=[scenario_to_response(s) for s in scenarios],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.post("/", response_model=ScenarioResponse, status_code=201)
async def create_scenario(
    scenario_data: ScenarioCreate,
    db: Session = Depends(get_db),
):
    """Save a new scenario."""
    scenario = Scenario(
        name=scenario_data.name,
        strategy=scenario_data.strategy,
        payload=scenario_data.payload,
        summary=scenario_data.summary,
        version=scenario_data.version,
    )

    db.add(scenario)
    db.commit()
    db.refresh(scenario)

    logger.info(f"Created scenario {scenario.id} ({scenario.strategy.value})")
    return scenario_to_response(scenario)


@router.get("/{scenario_id}", response_model=ScenarioResponse)
async def get_scenario(
    scenario_id: str,
    db: Session = Depends(get_db),
):
    """Get a scenario by ID."""
    return scenario_to_response(_get_active_scenario(db, scenario_id))


@router.put("/{scenario_id}", response_model=ScenarioResponse)
async def update_scenario(
    scenario_id: str,
    scenario_data: ScenarioUpdate,
    db: Session = Depends(get_db),
):
    """Update a scenario."""
    scenario = _get_active_scenario(db, scenario_id)

    # Update only provided fields
    update_data = scenario_data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(scenario, field, value)

    db.commit()
    db.refresh(scenario)

    logger.info(f"Updated scenario {scenario_id}: {sorted(update_data)}")
    return scenario_to_response(scenario)


@router.delete("/{scenario_id}")
async def delete_scenario(
    scenario_id: str,
    db: Session = Depends(get_db),
):
    """Soft delete a scenario."""
    scenario = _get_active_scenario(db, scenario_id)

    # Soft delete
    scenario.is_deleted = True
    db.commit()

    logger.info(f"Deleted scenario {scenario_id}")
    return {"deleted": True, "id": scenario_id}
