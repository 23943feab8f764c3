from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from .. import storage
from ..ai_service import AIServiceError
from ..auth import get_current_user
from ..database import get_db
from ..dependencies import get_ai_service
from ..models import Resume, User
from ..schemas import ResumeResponse

router = APIRouter()

Template = Literal["shanghai", "toronto", "stockholm", "newyork"]


class ResumeCreate(BaseModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    template: Template


class ResumeUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = Field(None, min_length=1)
    template: Optional[Template] = None


def get_owned_resume(resume_id: int, user: User, db: Session) -> Resume:
    resume = storage.get_resume(db, resume_id)
    if not resume:
        raise HTTPException(status_code=404, detail="Resume not found")
    if resume.user_id != user.id:
        raise HTTPException(status_code=401, detail="Not authorized")
    return resume


@router.post("/resumes", response_model=ResumeResponse, status_code=201)
def create_resume(
    resume: ResumeCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return storage.create_resume(db, user_id=user.id, **resume.model_dump())
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/resumes", response_model=List[ResumeResponse])
def list_resumes(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return storage.get_user_resumes(db, user.id)


@router.get("/resumes/{resume_id}", response_model=ResumeResponse)
def get_resume(resume_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_owned_resume(resume_id, user, db)


@router.patch("/resumes/{resume_id}", response_model=ResumeResponse)
def update_resume(
    resume_id: int,
    updates: ResumeUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    resume = get_owned_resume(resume_id, user, db)
    changes = updates.model_dump(exclude_none=True)
    if not changes:
        return resume
    return storage.update_resume(db, resume.id, **changes)


@router.post("/resumes/{resume_id}/enhance", response_model=ResumeResponse)
def enhance_resume(
    resume_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    ai=Depends(get_ai_service),
):
    resume = get_owned_resume(resume_id, user, db)
    try:
        enhanced = ai.enhance_resume(resume.content)
    except AIServiceError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return storage.update_resume(db, resume.id, content=enhanced)


@router.post("/resumes/{resume_id}/score", response_model=ResumeResponse)
def score_resume(
    resume_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    ai=Depends(get_ai_service),
):
    resume = get_owned_resume(resume_id, user, db)
    analysis = ai.analyze_resume(resume.content)
    return storage.update_resume(db, resume.id, score=analysis["total"], suggestions=analysis["suggestions"])
