from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.sql import func
from .database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, nullable=False, index=True)
    password = Column(String, nullable=False)  # "<scrypt hex>.<salt>"
    email = Column(String, nullable=False)
    role = Column(String, nullable=False, default="seeker")  # "seeker", "agency", "admin"
    stripe_customer_id = Column(String)
    stripe_subscription_id = Column(String)
    subscription_tier = Column(String, default="free")  # "free", "basic", "pro", "premium"
    company_name = Column(String)
    company_logo = Column(String)
    company_description = Column(Text)
    location = Column(String)
    job_preferences = Column(JSON)  # {"titles": [...], "locations": [...]}
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Resume(Base):
    __tablename__ = "resumes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    template = Column(String, nullable=False)
    score = Column(Integer)
    suggestions = Column(JSON)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"))  # null for ingested jobs
    title = Column(String, nullable=False)
    company = Column(String, nullable=False)
    location = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    requirements = Column(Text, nullable=False)
    salary = Column(String)
    type = Column(String, nullable=False)  # "full-time", "part-time", "contract"
    source = Column(String)  # "direct", "twitter"
    source_url = Column(String)
    status = Column(String, nullable=False, default="active")  # "active", "filled", "expired"
    applications_count = Column(Integer, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Application(Base):
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), index=True)
    resume_id = Column(Integer, ForeignKey("resumes.id"))
    status = Column(String, nullable=False, default="pending")  # "pending", "accepted", "rejected"
    email_sent = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class TwitterJob(Base):
    __tablename__ = "twitter_jobs"

    id = Column(Integer, primary_key=True, index=True)
    tweet_id = Column(String, unique=True, nullable=False, index=True)
    content = Column(Text, nullable=False)
    author = Column(String, nullable=False)
    parsed_title = Column(String)
    parsed_company = Column(String)
    parsed_location = Column(String)
    processed = Column(Boolean, default=False)
    job_id = Column(Integer, ForeignKey("jobs.id"))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
