"""AI writing helpers for the resume builder and job posting forms."""
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ..ai_service import AIServiceError
from ..auth import get_current_user
from ..dependencies import get_ai_service

router = APIRouter(dependencies=[Depends(get_current_user)])


class ContentRequest(BaseModel):
    content: str = Field(..., min_length=1)


class BulletRequest(BaseModel):
    role: str = Field(..., min_length=1)


class SkillsRequest(BaseModel):
    job_description: str = Field(..., min_length=1)


class JobDescriptionRequest(BaseModel):
    title: str = Field(..., min_length=1)
    requirements: str = ""


class ScoreCategory(BaseModel):
    name: str
    score: int
    count: int
    total: int


class ResumeAnalysis(BaseModel):
    total: int
    categories: List[ScoreCategory]
    suggestions: List[str]


def _ai_call(fn, *args) -> Any:
    try:
        return fn(*args)
    except AIServiceError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/enhance-resume")
def enhance_resume(data: ContentRequest, ai=Depends(get_ai_service)) -> Dict[str, str]:
    return {"enhanced": _ai_call(ai.enhance_resume, data.content)}


@router.post("/analyze-resume", response_model=ResumeAnalysis)
def analyze_resume(data: ContentRequest, ai=Depends(get_ai_service)):
    return ai.analyze_resume(data.content)


@router.post("/generate-bullet")
def generate_bullet(data: BulletRequest, ai=Depends(get_ai_service)) -> Dict[str, str]:
    return {"bullet": _ai_call(ai.generate_bullet, data.role)}


@router.post("/suggest-skills")
def suggest_skills(data: SkillsRequest, ai=Depends(get_ai_service)) -> Dict[str, List[str]]:
    return {"skills": _ai_call(ai.suggest_skills, data.job_description)}


@router.post("/generate-job-description")
def generate_job_description(data: JobDescriptionRequest, ai=Depends(get_ai_service)) -> Dict[str, str]:
    return {"description": _ai_call(ai.generate_job_description, data.title, data.requirements)}
