from conftest import post_job, register


def test_only_agencies_post_jobs(agency, seeker):
    agency_client, agency_user = agency
    job = post_job(agency_client)
    assert job["user_id"] == agency_user["id"]
    assert job["status"] == "active"
    assert job["applications_count"] == 0
    assert job["source"] == "direct"

    seeker_client, _ = seeker
    response = seeker_client.post("/api/jobs", json={"title": "x"})
    assert response.status_code == 401


def test_invalid_job_type_is_rejected(agency):
    client, _ = agency
    response = client.post("/api/jobs", json={
        "title": "Engineer", "company": "Acme", "location": "Remote",
        "description": "", "requirements": "", "type": "gig",
    })
    assert response.status_code == 400


def test_job_listing_is_public(agency, make_client):
    client, _ = agency
    job = post_job(client)
    anonymous = make_client()
    assert [j["id"] for j in anonymous.get("/api/jobs").json()] == [job["id"]]
    assert anonymous.get(f"/api/jobs/{job['id']}").json()["title"] == job["title"]
    assert anonymous.get("/api/jobs/999").status_code == 404


def test_matching_without_preferences_is_an_error(agency, make_client):
    post_job(agency[0])
    client = make_client()
    register(client, "noprefs")
    response = client.get("/api/jobs/matching")
    assert response.status_code == 400
    assert response.json()["detail"] == "No job preferences set"


def test_matching_excludes_filled_jobs(agency, seeker):
    agency_client, _ = agency
    open_job = post_job(agency_client, title="Backend Engineer")
    filled = post_job(agency_client, title="Platform Engineer")
    post_job(agency_client, title="Backend Engineer", location="Paris")
    agency_client.patch(f"/api/jobs/{filled['id']}/status", json={"status": "filled"})

    seeker_client, _ = seeker
    matched = seeker_client.get("/api/jobs/matching").json()
    assert [j["id"] for j in matched] == [open_job["id"]]


def test_status_update_requires_owner(agency, make_client):
    job = post_job(agency[0])
    other = make_client()
    register(other, "agency2", role="agency")
    assert other.patch(f"/api/jobs/{job['id']}/status", json={"status": "expired"}).status_code == 401

    response = agency[0].patch(f"/api/jobs/{job['id']}/status", json={"status": "expired"})
    assert response.status_code == 200
    assert response.json()["status"] == "expired"


def test_admin_can_update_any_job_status(agency, admin):
    job = post_job(agency[0])
    response = admin.patch(f"/api/jobs/{job['id']}/status", json={"status": "filled"})
    assert response.status_code == 200
    assert response.json()["status"] == "filled"
