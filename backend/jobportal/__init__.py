"""Job portal backend: resumes, job listings, applications, billing and admin API."""

__version__ = "1.0.0"
