import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.db.crud import create_user, get_user_by_username

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

class RegisterIn(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

class LoginIn(BaseModel):
    username: str
    password: str

@router.post("/register")
def register(data: RegisterIn, db: Session = Depends(get_db)):
    if get_user_by_username(db, data.username):
        raise HTTPException(400, "Username already exists")
    user = create_user(db, data.username, data.password)
    logger.info("Registered user %s", user.username)
    return {"id": user.id, "username": user.username}

@router.post("/login")
def login(data: LoginIn, db: Session = Depends(get_db)):
    user = get_user_by_username(db, data.username)
    if not user or not user.verify_password(data.password):
        raise HTTPException(401, "Invalid credentials")
    return {"message": "Login success", "user_id": user.username}
