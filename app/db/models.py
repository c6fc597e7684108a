# backend/app/db/models.py
from sqlalchemy import Column, Integer, String, Float, Date, DateTime
from sqlalchemy.orm import declarative_base
from datetime import datetime
from passlib.context import CryptContext

Base = declarative_base()


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    @staticmethod
    def hash_password(password: str) -> str:
        return pwd_context.hash(password)

    def verify_password(self, password: str) -> bool:
        return pwd_context.verify(password, self.password_hash)

class CarbonFootprint(Base):
    __tablename__ = "carbon_footprints"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, index=True, nullable=False)
    date = Column(Date, index=True, nullable=False)

    # kg CO2e
    transport_emissions = Column(Float, nullable=False, default=0.0)
    electricity_emissions = Column(Float, nullable=False, default=0.0)
    food_emissions = Column(Float, nullable=False, default=0.0)
    total_emissions = Column(Float, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
