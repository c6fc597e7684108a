# backend/app/db/crud.py
from datetime import date
from typing import Iterable, List

from sqlalchemy.orm import Session

from app.db.models import CarbonFootprint, User
from app.services.reports import EmissionRecord


def create_user(db: Session, username: str, password: str) -> User:
    hashed = User.hash_password(password)
    user = User(username=username, password_hash=hashed)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user

def get_user_by_username(db: Session, username: str):
    return db.query(User).filter(User.username == username).first()


def create_footprint(db: Session, user_id: str, on: date, total_emissions: float,
                     transport_emissions: float = 0.0, electricity_emissions: float = 0.0,
                     food_emissions: float = 0.0) -> CarbonFootprint:
    fp = CarbonFootprint(
        user_id=user_id,
        date=on,
        transport_emissions=transport_emissions,
        electricity_emissions=electricity_emissions,
        food_emissions=food_emissions,
        total_emissions=total_emissions,
    )
    db.add(fp)
    db.commit()
    db.refresh(fp)
    return fp

def get_user_footprints(db: Session, user_id: str) -> List[CarbonFootprint]:
    return (
        db.query(CarbonFootprint)
        .filter(CarbonFootprint.user_id == user_id)
        .order_by(CarbonFootprint.date.asc(), CarbonFootprint.id.asc())
        .all()
    )

def get_recent_footprints(db: Session, user_id: str, limit: int = 50) -> List[CarbonFootprint]:
    return (
        db.query(CarbonFootprint)
        .filter(CarbonFootprint.user_id == user_id)
        .order_by(CarbonFootprint.date.desc(), CarbonFootprint.id.desc())
        .limit(limit)
        .all()
    )


def to_emission_records(rows: Iterable[CarbonFootprint]) -> List[EmissionRecord]:
    return [EmissionRecord(date=r.date, total_emissions=float(r.total_emissions or 0.0)) for r in rows]
