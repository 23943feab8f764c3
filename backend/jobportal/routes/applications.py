import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from .. import storage
from ..auth import get_current_user
from ..database import get_db
from ..dependencies import get_auto_applier
from ..matching import AutoApplier
from ..models import User
from ..schemas import ApplicationResponse

logger = logging.getLogger(__name__)

router = APIRouter()


class ApplicationCreate(BaseModel):
    job_id: int
    resume_id: int


class AutoApplyRequest(BaseModel):
    resume_id: Optional[int] = None


class AutoApplyResponse(BaseModel):
    applications: List[ApplicationResponse]


@router.post("/applications", response_model=ApplicationResponse, status_code=201)
def create_application(
    application: ApplicationCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    applier: AutoApplier = Depends(get_auto_applier),
):
    job = storage.get_job(db, application.job_id)
    if not job:
        raise HTTPException(status_code=400, detail="Job not found")
    resume = storage.get_resume(db, application.resume_id)
    if not resume or resume.user_id != user.id:
        raise HTTPException(status_code=400, detail="Invalid resume")

    try:
        return applier.apply_to_job(db, user, job, resume)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/applications", response_model=List[ApplicationResponse])
def list_applications(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return storage.get_user_applications(db, user.id)


@router.post("/auto-apply", response_model=AutoApplyResponse)
def auto_apply(
    data: AutoApplyRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    applier: AutoApplier = Depends(get_auto_applier),
):
    if not data.resume_id:
        raise HTTPException(status_code=400, detail="Resume ID is required")

    resume = storage.get_resume(db, data.resume_id)
    if not resume or resume.user_id != user.id:
        raise HTTPException(status_code=400, detail="Invalid resume")

    if user.job_preferences is None:
        raise HTTPException(status_code=400, detail="No job preferences set")

    return {"applications": applier.auto_apply(db, user, resume)}
