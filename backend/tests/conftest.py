import pytest
from fastapi.testclient import TestClient

from jobportal import storage
from jobportal.auth import hash_password
from jobportal.config import Settings
from jobportal.main import create_app


class FakeMailer:
    def __init__(self):
        self.sent = []
        self.undeliverable = set()
        self.broken = set()

    def send_application_notification(self, employer_email, job_title, candidate_name):
        if employer_email in self.broken:
            raise RuntimeError(f"mail transport down for {employer_email}")
        self.sent.append(("application", employer_email, job_title, candidate_name))
        return employer_email not in self.undeliverable

    def send_welcome_email(self, email, username):
        self.sent.append(("welcome", email, username))
        return True


class FakeAI:
    def __init__(self):
        self.fail = False

    def _check(self):
        from jobportal.ai_service import AIServiceError
        if self.fail:
            raise AIServiceError("provider unavailable")

    def enhance_resume(self, content):
        self._check()
        return content.upper()

    def generate_bullet(self, role):
        self._check()
        return f"Led three {role} projects to launch"

    def suggest_skills(self, job_description):
        self._check()
        return ["Python", "SQL"]

    def generate_job_description(self, title, requirements):
        self._check()
        return f"{title}: {requirements}"

    def analyze_resume(self, content):
        return {
            "total": 67,
            "categories": [{"name": "Sections", "score": 67, "count": 2, "total": 3}],
            "suggestions": ["Add numbers to your achievements."],
        }


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        seed_demo_users=False,
        email_enabled=False,
        ai_api_key="",
        stripe_secret_key="sk_test",
        twitter_bearer_token="",
        ingestion_enabled=False,
        session_secret="test-secret",
    )


@pytest.fixture
def app(settings):
    app = create_app(settings)
    app.state.mailer = FakeMailer()
    app.state.ai_service = FakeAI()
    return app


@pytest.fixture
def mailer(app):
    return app.state.mailer


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture
def make_client(app):
    """Each client keeps its own session cookie, i.e. one logged-in user."""

    def factory():
        return TestClient(app)

    return factory


def register(client, username, role="seeker", **extra):
    payload = {"username": username, "password": "secret123", "email": f"{username}@example.com", "role": role}
    payload.update(extra)
    response = client.post("/api/register", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def seeker(make_client):
    client = make_client()
    user = register(client, "seeker1", job_preferences={"titles": ["engineer"], "locations": ["Remote"]})
    return client, user


@pytest.fixture
def agency(make_client):
    client = make_client()
    user = register(client, "agency1", role="agency", company_name="Acme Staffing")
    return client, user


@pytest.fixture
def admin(make_client, db):
    storage.create_user(
        db, username="admin", password=hash_password("admin123"), email="admin@example.com", role="admin"
    )
    client = make_client()
    response = client.post("/api/login", json={"username": "admin", "password": "admin123"})
    assert response.status_code == 200
    return client


def post_job(client, **overrides):
    payload = {
        "title": "Software Engineer",
        "company": "Acme",
        "location": "Remote",
        "description": "Build things",
        "requirements": "Python, SQL",
        "salary": "$100,000",
        "type": "full-time",
    }
    payload.update(overrides)
    response = client.post("/api/jobs", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def create_resume(client, **overrides):
    payload = {"title": "My Resume", "content": "Summary\nLed a team of 5", "template": "toronto"}
    payload.update(overrides)
    response = client.post("/api/resumes", json=payload)
    assert response.status_code == 201, response.text
    return response.json()
