import re
from typing import Any, Dict, Iterable, List

from .models import Job

TRACKED_SKILLS = ["javascript", "python", "react", "node", "sql", "aws", "docker"]
_SKILL_PATTERN = re.compile(r"\b(?:" + "|".join(TRACKED_SKILLS) + r")\b")
TOP_N = 10


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def salary_trends(jobs: Iterable[Job]) -> List[Dict[str, Any]]:
    """Average salary per role, where role is the first word of the title."""
    trends: Dict[str, Dict[str, Any]] = {}
    for job in jobs:
        if not job.salary:
            continue
        digits = re.sub(r"[^0-9]", "", job.salary)
        if not digits:
            continue
        salary = int(digits)
        role = job.title.split(" ")[0]

        entry = trends.get(role)
        if entry is None:
            entry = trends[role] = {"role": role, "count": 0, "total_salary": 0, "avg_salary": 0}
        entry["count"] += 1
        entry["total_salary"] += salary
        entry["avg_salary"] = _round_half_up(entry["total_salary"] / entry["count"])
    return list(trends.values())


def location_trends(jobs: Iterable[Job]) -> List[Dict[str, Any]]:
    counts: Dict[str, int] = {}
    for job in jobs:
        counts[job.location] = counts.get(job.location, 0) + 1
    rows = [{"location": location, "count": count} for location, count in counts.items()]
    rows.sort(key=lambda row: row["count"], reverse=True)
    return rows[:TOP_N]


def skill_trends(jobs: Iterable[Job]) -> List[Dict[str, Any]]:
    counts: Dict[str, int] = {}
    for job in jobs:
        for skill in _SKILL_PATTERN.findall((job.requirements or "").lower()):
            counts[skill] = counts.get(skill, 0) + 1
    rows = [{"skill": skill, "count": count} for skill, count in counts.items()]
    rows.sort(key=lambda row: row["count"], reverse=True)
    return rows[:TOP_N]


def recent_jobs(jobs: Iterable[Job]) -> List[Job]:
    ordered = sorted(jobs, key=lambda job: (job.created_at is not None, job.created_at, job.id), reverse=True)
    return ordered[:TOP_N]
