"""
Data access for the job portal.

Every mutating helper commits its own unit of work, so a multi-step flow
(apply, increment, notify) is a sequence of independent commits rather
than one transaction.
"""
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from .models import Application, Job, Resume, TwitterJob, User


class NotFoundError(Exception):
    """Raised when an update targets a row that does not exist."""


def _save(db: Session, obj):
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


# --- users ---

def get_user(db: Session, user_id: Optional[int]) -> Optional[User]:
    if user_id is None:
        return None
    return db.get(User, user_id)


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def get_all_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.id).all()


def create_user(db: Session, **fields) -> User:
    fields.setdefault("role", "seeker")
    user = User(subscription_tier="free", **fields)
    return _save(db, user)


def _require_user(db: Session, user_id: int) -> User:
    user = get_user(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def update_stripe_customer_id(db: Session, user_id: int, customer_id: str) -> User:
    user = _require_user(db, user_id)
    user.stripe_customer_id = customer_id
    return _save(db, user)


def update_user_stripe_info(
    db: Session, user_id: int, stripe_subscription_id: Optional[str], subscription_tier: str
) -> User:
    user = _require_user(db, user_id)
    user.stripe_subscription_id = stripe_subscription_id
    user.subscription_tier = subscription_tier
    return _save(db, user)


def update_job_preferences(db: Session, user_id: int, preferences: Optional[Dict[str, Any]]) -> User:
    user = _require_user(db, user_id)
    # JSON columns only notice reassignment
    user.job_preferences = dict(preferences) if preferences is not None else None
    return _save(db, user)


# --- resumes ---

def create_resume(db: Session, user_id: int, **fields) -> Resume:
    return _save(db, Resume(user_id=user_id, **fields))


def get_resume(db: Session, resume_id: Optional[int]) -> Optional[Resume]:
    if resume_id is None:
        return None
    return db.get(Resume, resume_id)


def get_user_resumes(db: Session, user_id: int) -> List[Resume]:
    return db.query(Resume).filter(Resume.user_id == user_id).order_by(Resume.id).all()


def update_resume(db: Session, resume_id: int, **updates) -> Resume:
    resume = get_resume(db, resume_id)
    if not resume:
        raise NotFoundError("Resume not found")
    for key, value in updates.items():
        setattr(resume, key, value)
    return _save(db, resume)


# --- jobs ---

def create_job(db: Session, **fields) -> Job:
    fields.setdefault("status", "active")
    fields.setdefault("applications_count", 0)
    return _save(db, Job(**fields))


def get_job(db: Session, job_id: Optional[int]) -> Optional[Job]:
    if job_id is None:
        return None
    return db.get(Job, job_id)


def get_all_jobs(db: Session) -> List[Job]:
    return db.query(Job).order_by(Job.id).all()


def update_job_application_count(db: Session, job_id: int) -> Job:
    job = get_job(db, job_id)
    if not job:
        raise NotFoundError("Job not found")
    job.applications_count = (job.applications_count or 0) + 1
    return _save(db, job)


def update_job_status(db: Session, job_id: int, status: str) -> Job:
    job = get_job(db, job_id)
    if not job:
        raise NotFoundError("Job not found")
    job.status = status
    return _save(db, job)


# --- applications ---

def create_application(db: Session, user_id: int, job_id: int, resume_id: int) -> Application:
    application = Application(
        user_id=user_id,
        job_id=job_id,
        resume_id=resume_id,
        status="pending",
        email_sent=False,
    )
    return _save(db, application)


def get_application(db: Session, application_id: int) -> Optional[Application]:
    return db.get(Application, application_id)


def get_user_applications(db: Session, user_id: int) -> List[Application]:
    return db.query(Application).filter(Application.user_id == user_id).order_by(Application.id).all()


def get_all_applications(db: Session) -> List[Application]:
    return db.query(Application).order_by(Application.id).all()


def mark_application_email_sent(db: Session, application_id: int) -> Application:
    application = get_application(db, application_id)
    if not application:
        raise NotFoundError("Application not found")
    application.email_sent = True
    return _save(db, application)


# --- ingested tweets ---

def create_twitter_job(db: Session, tweet_id: str, content: str, author: str) -> TwitterJob:
    return _save(db, TwitterJob(tweet_id=tweet_id, content=content, author=author, processed=False))


def get_twitter_job_by_tweet_id(db: Session, tweet_id: str) -> Optional[TwitterJob]:
    return db.query(TwitterJob).filter(TwitterJob.tweet_id == tweet_id).first()


def update_twitter_job(db: Session, twitter_job_id: int, **updates) -> TwitterJob:
    twitter_job = db.get(TwitterJob, twitter_job_id)
    if not twitter_job:
        raise NotFoundError("Twitter job not found")
    for key, value in updates.items():
        setattr(twitter_job, key, value)
    return _save(db, twitter_job)
