import logging
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from .. import storage
from ..auth import get_current_user, require_role
from ..database import get_db
from ..matching import NoPreferencesError, match_jobs
from ..models import User
from ..schemas import JobResponse

logger = logging.getLogger(__name__)

router = APIRouter()


class JobCreate(BaseModel):
    title: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    description: str
    requirements: str
    salary: Optional[str] = None
    type: Literal["full-time", "part-time", "contract"]
    source: str = "direct"
    source_url: Optional[str] = None


class JobStatusUpdate(BaseModel):
    status: Literal["active", "filled", "expired"]


@router.post("/jobs", response_model=JobResponse, status_code=201)
def create_job(
    job: JobCreate,
    user: User = Depends(require_role("agency")),
    db: Session = Depends(get_db),
):
    try:
        created = storage.create_job(db, user_id=user.id, **job.model_dump())
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))
    logger.info("Agency %s posted job %s", user.id, created.id)
    return created


@router.get("/jobs", response_model=List[JobResponse])
def list_jobs(db: Session = Depends(get_db)):
    return storage.get_all_jobs(db)


# Declared before /jobs/{job_id} so "matching" is not read as an id
@router.get("/jobs/matching", response_model=List[JobResponse])
def matching_jobs(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        return match_jobs(user.job_preferences, storage.get_all_jobs(db))
    except NoPreferencesError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/jobs/{job_id}", response_model=JobResponse)
def get_job(job_id: int, db: Session = Depends(get_db)):
    job = storage.get_job(db, job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


@router.patch("/jobs/{job_id}/status", response_model=JobResponse)
def update_job_status(
    job_id: int,
    update: JobStatusUpdate,
    user: User = Depends(require_role("agency", "admin")),
    db: Session = Depends(get_db),
):
    job = storage.get_job(db, job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    if user.role != "admin" and job.user_id != user.id:
        raise HTTPException(status_code=401, detail="Not authorized")
    return storage.update_job_status(db, job_id, update.status)
