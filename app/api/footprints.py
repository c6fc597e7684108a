import logging
import datetime as dt
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.db.crud import create_footprint, get_recent_footprints
from app.services.emissions import estimate_footprint

logger = logging.getLogger(__name__)

router = APIRouter()

# --------------------------------------------------
# Request / Response Schemas
# --------------------------------------------------

class FootprintIn(BaseModel):
    user_id: str
    date: Optional[dt.date] = None

    # Either a precomputed total ...
    total_emissions: Optional[float] = Field(None, ge=0)

    # ... or an activity breakdown to estimate from
    travel_mode: Optional[str] = None
    distance_km: Optional[float] = Field(None, ge=0)
    kwh: Optional[float] = Field(None, ge=0)
    food_category: Optional[str] = None


class FootprintOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    date: dt.date
    transport_emissions: float
    electricity_emissions: float
    food_emissions: float
    total_emissions: float

# --------------------------------------------------
# Create Footprint Entry
# --------------------------------------------------

@router.post("/", response_model=FootprintOut)
def add_footprint(payload: FootprintIn, db: Session = Depends(get_db)):
    """
    Record one footprint entry for a user.
    """
    has_breakdown = any(
        v is not None for v in (payload.distance_km, payload.kwh, payload.food_category)
    )

    if payload.total_emissions is not None:
        breakdown = {
            "transport_emissions": 0.0,
            "electricity_emissions": 0.0,
            "food_emissions": 0.0,
            "total_emissions": payload.total_emissions,
        }
    elif has_breakdown:
        try:
            breakdown = estimate_footprint(
                travel_mode=payload.travel_mode,
                distance_km=payload.distance_km,
                kwh=payload.kwh,
                food_category=payload.food_category,
            )
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
    else:
        raise HTTPException(
            status_code=400,
            detail="total_emissions or an activity breakdown is required"
        )

    fp = create_footprint(
        db,
        user_id=payload.user_id,
        on=payload.date or dt.date.today(),
        **breakdown,
    )
    logger.info("Stored footprint %s for %s: %.4f kg", fp.id, fp.user_id, fp.total_emissions)
    return fp

# --------------------------------------------------
# List Footprint Entries
# --------------------------------------------------

@router.get("/users/{user_id}", response_model=List[FootprintOut])
def list_footprints(
    user_id: str,
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db)
):
    """
    Most recent entries first.
    """
    return get_recent_footprints(db, user_id=user_id, limit=limit)
