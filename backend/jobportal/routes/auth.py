import logging
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from .. import storage
from ..auth import authenticate, get_current_user, hash_password, login_session, logout_session
from ..database import get_db
from ..dependencies import get_mailer
from ..models import User
from ..schemas import UserResponse

logger = logging.getLogger(__name__)

router = APIRouter()


class JobPreferences(BaseModel):
    titles: Optional[List[str]] = None
    locations: Optional[List[str]] = None


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+$")
    role: Literal["seeker", "agency"] = "seeker"
    company_name: Optional[str] = None
    company_logo: Optional[str] = None
    company_description: Optional[str] = None
    location: Optional[str] = None
    job_preferences: Optional[JobPreferences] = None


class LoginRequest(BaseModel):
    username: str
    password: str


@router.post("/register", response_model=UserResponse, status_code=201)
def register(
    data: RegisterRequest,
    request: Request,
    db: Session = Depends(get_db),
    mailer=Depends(get_mailer),
):
    logger.info("Registration attempt for username: %s", data.username)
    if storage.get_user_by_username(db, data.username):
        raise HTTPException(status_code=400, detail="Username already exists")

    fields = data.model_dump(exclude={"password", "job_preferences"})
    if data.job_preferences is not None:
        fields["job_preferences"] = data.job_preferences.model_dump(exclude_none=True)

    try:
        user = storage.create_user(db, password=hash_password(data.password), **fields)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))

    login_session(request, user)
    if not mailer.send_welcome_email(user.email, user.username):
        logger.warning("Welcome email not delivered to user %s", user.id)
    logger.info("User registered: %s", user.username)
    return user


@router.post("/login", response_model=UserResponse)
def login(data: LoginRequest, request: Request, db: Session = Depends(get_db)):
    user = authenticate(db, data.username, data.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid username or password")
    login_session(request, user)
    logger.info("Login successful for user: %s", user.username)
    return user


@router.post("/logout")
def logout(request: Request):
    logout_session(request)
    return Response(status_code=200)


@router.get("/user", response_model=UserResponse)
def current_user(user: User = Depends(get_current_user)):
    return user


@router.put("/user/preferences", response_model=UserResponse)
def update_preferences(
    preferences: JobPreferences,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return storage.update_job_preferences(db, user.id, preferences.model_dump(exclude_none=True))
