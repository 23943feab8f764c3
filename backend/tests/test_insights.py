from datetime import datetime, timedelta

from conftest import post_job

from jobportal import insights
from jobportal.models import Job


def job(id, title="Engineer", location="Remote", salary=None, requirements="", created_at=None):
    return Job(id=id, title=title, location=location, salary=salary, requirements=requirements,
               company="Acme", description="", type="full-time", status="active", created_at=created_at)


def test_salary_trends_group_by_first_title_word():
    jobs = [
        job(1, "Engineer I", salary="$100,000"),
        job(2, "Engineer II", salary="101000"),
        job(3, "Designer", salary="80k"),
        job(4, "Designer", salary=None),
        job(5, "Designer", salary="negotiable"),
    ]
    assert insights.salary_trends(jobs) == [
        {"role": "Engineer", "count": 2, "total_salary": 201000, "avg_salary": 100500},
        {"role": "Designer", "count": 1, "total_salary": 80, "avg_salary": 80},
    ]


def test_salary_average_rounds_half_up():
    jobs = [job(1, salary="1"), job(2, salary="2")]
    assert insights.salary_trends(jobs)[0]["avg_salary"] == 2


def test_location_trends_top_ten_by_count():
    jobs = [job(i, location=f"City {i}") for i in range(12)]
    jobs += [job(100, location="Remote"), job(101, location="Remote")]
    rows = insights.location_trends(jobs)
    assert len(rows) == 10
    assert rows[0] == {"location": "Remote", "count": 2}
    # ties keep first-seen order
    assert rows[1]["location"] == "City 0"


def test_skill_trends_count_whole_words():
    jobs = [
        job(1, requirements="Python, SQL and Docker. More python!"),
        job(2, requirements="React/Node; nosql is not sql; pythonic does not count"),
    ]
    rows = insights.skill_trends(jobs)
    counts = {row["skill"]: row["count"] for row in rows}
    assert counts == {"python": 2, "sql": 2, "docker": 1, "react": 1, "node": 1}
    assert rows[0]["count"] == 2


def test_recent_jobs_newest_first():
    now = datetime(2024, 1, 1)
    jobs = [job(i, created_at=now + timedelta(minutes=i)) for i in range(15)]
    assert [j.id for j in insights.recent_jobs(jobs)] == list(range(14, 4, -1))


def test_insight_endpoints_require_login(make_client, seeker, agency):
    post_job(agency[0], requirements="python and aws")
    anonymous = make_client()
    client, _ = seeker
    for path in ("salary-trends", "location-trends", "skill-trends", "recent-jobs"):
        assert anonymous.get(f"/api/insights/{path}").status_code == 401
        assert client.get(f"/api/insights/{path}").status_code == 200

    skills = client.get("/api/insights/skill-trends").json()
    assert {row["skill"] for row in skills} == {"python", "aws"}
    assert client.get("/api/insights/salary-trends").json()[0]["avg_salary"] == 100000
