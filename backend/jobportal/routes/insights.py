from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from .. import insights, storage
from ..auth import get_current_user
from ..database import get_db
from ..schemas import JobResponse

router = APIRouter(prefix="/insights", dependencies=[Depends(get_current_user)])


class SalaryTrend(BaseModel):
    role: str
    count: int
    total_salary: int
    avg_salary: int


class LocationTrend(BaseModel):
    location: str
    count: int


class SkillTrend(BaseModel):
    skill: str
    count: int


@router.get("/salary-trends", response_model=List[SalaryTrend])
def salary_trends(db: Session = Depends(get_db)):
    return insights.salary_trends(storage.get_all_jobs(db))


@router.get("/location-trends", response_model=List[LocationTrend])
def location_trends(db: Session = Depends(get_db)):
    return insights.location_trends(storage.get_all_jobs(db))


@router.get("/skill-trends", response_model=List[SkillTrend])
def skill_trends(db: Session = Depends(get_db)):
    return insights.skill_trends(storage.get_all_jobs(db))


@router.get("/recent-jobs", response_model=List[JobResponse])
def recent_jobs(db: Session = Depends(get_db)):
    return insights.recent_jobs(storage.get_all_jobs(db))
