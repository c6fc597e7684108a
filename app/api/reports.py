# backend/app/api/reports.py
import logging
from typing import List

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.db.crud import get_user_footprints, to_emission_records
from app.services.reports import generate_report

logger = logging.getLogger(__name__)

router = APIRouter()

class ReportOut(BaseModel):
    period: str
    total_entries: int
    title: str
    labels: List[str]
    data: List[float]
    average: float
    latest_value: float
    prev_value: float

@router.get("/users/{user_id}", response_model=ReportOut)
def user_report(
    user_id: str,
    period: str = Query("monthly"),
    db: Session = Depends(get_db),
):
    rows = get_user_footprints(db, user_id=user_id)
    logger.debug("Loaded %d footprints for %s", len(rows), user_id)

    summary = generate_report(period, to_emission_records(rows))

    return ReportOut(
        period=period,
        total_entries=len(rows),
        title=summary.title,
        labels=summary.labels,
        data=summary.data,
        average=summary.average,
        latest_value=summary.latest_value,
        prev_value=summary.prev_value,
    )
