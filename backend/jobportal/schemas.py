from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    role: str
    subscription_tier: Optional[str] = None
    stripe_customer_id: Optional[str] = None
    stripe_subscription_id: Optional[str] = None
    company_name: Optional[str] = None
    company_logo: Optional[str] = None
    company_description: Optional[str] = None
    location: Optional[str] = None
    job_preferences: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ResumeResponse(BaseModel):
    id: int
    user_id: int
    title: str
    content: str
    template: str
    score: Optional[int] = None
    suggestions: Optional[List[str]] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class JobResponse(BaseModel):
    id: int
    user_id: Optional[int] = None
    title: str
    company: str
    location: str
    description: str
    requirements: str
    salary: Optional[str] = None
    type: str
    source: Optional[str] = None
    source_url: Optional[str] = None
    status: str
    applications_count: int = 0
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ApplicationResponse(BaseModel):
    id: int
    user_id: int
    job_id: int
    resume_id: int
    status: str
    email_sent: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
