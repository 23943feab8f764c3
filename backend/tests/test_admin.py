from conftest import create_resume, post_job

from jobportal.ingestion import TwitterJobProcessor


class StaticTwitter:
    def search_job_tweets(self):
        return [{"id": "77", "text": "hiring", "author_id": "1"}]


class StaticParser:
    def parse_job_post(self, text):
        return {"title": "Engineer", "company": "Acme", "location": "Remote",
                "requirements": "", "type": "full-time", "confidence": 0.8}


def test_admin_endpoints_reject_non_admins(seeker, make_client):
    client, _ = seeker
    anonymous = make_client()
    for path in ("/api/admin/users", "/api/admin/applications"):
        assert client.get(path).status_code == 401
        assert anonymous.get(path).status_code == 401
    assert client.post("/api/admin/ingest").status_code == 401


def test_admin_lists_users_and_applications(admin, seeker, agency):
    job = post_job(agency[0])
    client, _ = seeker
    resume = create_resume(client)
    client.post("/api/applications", json={"job_id": job["id"], "resume_id": resume["id"]})

    users = admin.get("/api/admin/users").json()
    assert {u["username"] for u in users} == {"admin", "seeker1", "agency1"}
    assert all("password" not in u for u in users)

    applications = admin.get("/api/admin/applications").json()
    assert len(applications) == 1
    assert applications[0]["job_id"] == job["id"]


def test_admin_triggers_ingestion(admin, app):
    app.state.twitter_processor = TwitterJobProcessor(StaticTwitter(), StaticParser())
    response = admin.post("/api/admin/ingest")
    assert response.status_code == 200
    assert response.json()["results"]["saved"] == 1
    assert [j["source"] for j in admin.get("/api/jobs").json()] == ["twitter"]


def test_health(make_client):
    client = make_client()
    assert client.get("/health").json() == {"status": "healthy"}
