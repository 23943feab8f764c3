import logging
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from . import storage
from .models import Application, Job, Resume, User

logger = logging.getLogger(__name__)


class NoPreferencesError(Exception):
    """The user has never set job preferences."""


def job_matches(job: Job, preferences: Dict[str, Any]) -> bool:
    if job.status != "active":
        return False

    titles = preferences.get("titles")
    if titles is not None:
        job_title = (job.title or "").lower()
        if not any(str(t).lower() in job_title for t in titles):
            return False

    locations = preferences.get("locations")
    if locations is not None and job.location not in locations:
        return False

    return True


def match_jobs(preferences: Optional[Dict[str, Any]], jobs: Iterable[Job]) -> List[Job]:
    """
    Filter jobs down to active ones that fit the user's preferences.

    ``titles`` matches when any entry is a case-insensitive substring of the job
    title; ``locations`` requires an exact membership match. A missing key means
    no filter on that field. Missing preferences altogether is an error rather
    than an empty result.
    """
    if preferences is None:
        raise NoPreferencesError("No job preferences set")
    return [job for job in jobs if job_matches(job, preferences)]


class AutoApplier:
    """Applies a seeker's resume to every active job, one job at a time."""

    def __init__(self, mailer):
        self.mailer = mailer

    def apply_to_job(self, db: Session, user: User, job: Job, resume: Resume) -> Application:
        """Create one application and run its follow-up steps.

        Used for both manual and bulk applications. Raises on any failure;
        steps already committed stay committed.
        """
        application = storage.create_application(db, user_id=user.id, job_id=job.id, resume_id=resume.id)
        storage.update_job_application_count(db, job.id)

        employer = storage.get_user(db, job.user_id)
        if employer:
            sent = self.mailer.send_application_notification(employer.email, job.title, user.username)
            if sent:
                application = storage.mark_application_email_sent(db, application.id)
            else:
                logger.warning("Notification for application %s was not delivered", application.id)
        return application

    def auto_apply(self, db: Session, user: User, resume: Resume) -> List[Application]:
        """
        Apply to every active job in the full job collection.

        A failure on one job is logged and skipped; the caller only sees the
        applications that went through every step. There is no check against
        applications the user already has.
        """
        applications = []
        jobs = storage.get_all_jobs(db)

        for job in jobs:
            if job.status != "active":
                continue
            try:
                applications.append(self.apply_to_job(db, user, job, resume))
            except Exception as e:
                db.rollback()
                logger.error("Failed to apply for job %s: %s", job.id, e)

        logger.info(
            "Auto-apply for user %s created %d applications across %d jobs",
            user.id, len(applications), len(jobs),
        )
        return applications
