"""End-to-end tests: HTTP API, auth, error mapping and the change feed socket."""
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from careertrail.auth import token_for_user
from careertrail.db import database
from careertrail.main import app
from careertrail.schemas import LinkedInJobInfo
from careertrail.services.linkedin import RateLimitError


@pytest.fixture
def client(engine):
    database.configure(engine)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def token(user):
    return token_for_user(user)


@pytest.fixture
def auth(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def job(client, auth):
    resp = client.post("/api/jobs", json={"company": "Acme", "role": "SRE"}, headers=auth)
    assert resp.status_code == 201
    return resp.json()


class TestAuth:

    def test_missing_token(self, client):
        assert client.get("/api/jobs").status_code in (401, 403)

    def test_bad_token(self, client):
        resp = client.get("/api/jobs", headers={"Authorization": "Bearer nope"})
        assert resp.status_code == 401

    def test_health_is_public(self, client):
        body = client.get("/health").json()
        assert body["database"] == "healthy"


class TestJobs:

    def test_create_and_list(self, client, auth, job):
        assert job["status"] == "applied"
        listed = client.get("/api/jobs", headers=auth).json()
        assert [j["id"] for j in listed] == [job["id"]]

    def test_update_status(self, client, auth, job):
        resp = client.patch(f"/api/jobs/{job['id']}/status", json={"status": "offer"}, headers=auth)
        assert resp.status_code == 200
        assert resp.json()["status"] == "offer"

        activities = client.get(f"/api/jobs/{job['id']}/activities", headers=auth).json()
        assert {a["activity_type"] for a in activities} == {"applied", "offer_received"}

    def test_invalid_status_is_unprocessable(self, client, auth, job):
        resp = client.patch(f"/api/jobs/{job['id']}/status", json={"status": "ghosted"}, headers=auth)
        assert resp.status_code == 422

    def test_unknown_job_is_not_found(self, client, auth):
        resp = client.patch("/api/jobs/missing/status", json={"status": "offer"}, headers=auth)
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Job missing not found"

    def test_other_users_job_is_not_found(self, client, job, other_user):
        other = {"Authorization": f"Bearer {token_for_user(other_user)}"}
        assert client.get(f"/api/jobs/{job['id']}", headers=other).status_code == 404

    def test_board(self, client, auth, job):
        client.post("/api/jobs", json={"company": "Globex", "role": "SRE", "status": "rejected"}, headers=auth)
        board = client.get("/api/jobs/board", headers=auth).json()
        assert [j["company"] for j in board["applied"]] == ["Acme"]
        assert [j["company"] for j in board["rejected"]] == ["Globex"]
        assert board["interviewing"] == [] and board["offer"] == []

    def test_delete(self, client, auth, job):
        assert client.delete(f"/api/jobs/{job['id']}", headers=auth).status_code == 204
        assert client.get(f"/api/jobs/{job['id']}", headers=auth).status_code == 404


class TestOtherResources:

    def test_contact_link_conflict(self, client, auth, job):
        contact = client.post(
            "/api/contacts", json={"first_name": "Jo", "last_name": "Doe"}, headers=auth,
        ).json()
        url = f"/api/contacts/{contact['id']}/jobs/{job['id']}"
        assert client.post(url, json={"relationship_type": "referrer"}, headers=auth).status_code == 201
        assert client.post(url, json={}, headers=auth).status_code == 409

    def test_follow_ups_route_is_not_a_contact_id(self, client, auth):
        resp = client.get("/api/contacts/interactions/follow-ups", headers=auth)
        assert resp.status_code == 200
        assert resp.json() == []

    def test_interview_upcoming(self, client, auth):
        client.post("/api/interviews", json={
            "title": "Screen", "interview_type": "phone", "scheduled_date": "2999-01-01T10:00:00Z",
        }, headers=auth)
        upcoming = client.get("/api/interviews/upcoming", headers=auth).json()
        assert [i["title"] for i in upcoming] == ["Screen"]

    def test_metrics(self, client, auth, job):
        client.patch(f"/api/jobs/{job['id']}/status", json={"status": "interviewing"}, headers=auth)
        m = client.get("/api/metrics", headers=auth).json()
        assert m["total_applications"] == 1
        assert m["interview_rate"] == 100.0

    def test_preferences(self, client, auth):
        assert client.get("/api/preferences", headers=auth).json() == {"active_tab": "list"}
        assert client.put("/api/preferences", json={"active_tab": "board"}, headers=auth).status_code == 200
        assert client.get("/api/preferences", headers=auth).json() == {"active_tab": "board"}

    def test_ai_without_key_is_unavailable(self, client, auth):
        resp = client.post("/api/ai/analyze-document", json={"content": "My resume"}, headers=auth)
        assert resp.status_code == 503

    def test_ai_rejects_unknown_content_type(self, client, auth):
        resp = client.post("/api/ai/optimize-application", json={
            "job_description": "x", "current_content": "y", "content_type": "portfolio",
        }, headers=auth)
        assert resp.status_code == 400

    def test_linkedin_rejects_non_job_url(self, client, auth):
        resp = client.post("/api/linkedin/parse", json={"url": "https://example.com/jobs/1"}, headers=auth)
        assert resp.status_code == 400


class TestDocumentsAndPrep:

    def test_folder_tree_and_path(self, client, auth):
        top = client.post("/api/folders", json={"name": "Applications"}, headers=auth).json()
        leaf = client.post(
            "/api/folders", json={"name": "Acme", "parent_folder_id": top["id"]}, headers=auth,
        ).json()
        tree = client.get("/api/folders/tree", headers=auth).json()
        assert [n["name"] for n in tree] == ["Applications"]
        assert [c["name"] for c in tree[0]["children"]] == ["Acme"]
        assert client.get(f"/api/folders/{leaf['id']}/path", headers=auth).json() == ["Applications", "Acme"]

    def test_folder_cycle_is_bad_request(self, client, auth):
        top = client.post("/api/folders", json={"name": "A"}, headers=auth).json()
        resp = client.put(f"/api/folders/{top['id']}", json={"parent_folder_id": top["id"]}, headers=auth)
        assert resp.status_code == 400

    def test_document_lifecycle(self, client, auth):
        resp = client.post("/api/documents", json={
            "name": "cv.pdf", "file_path": "u/cv.pdf", "file_size": 2048,
            "file_type": "application/pdf", "category": "resume",
        }, headers=auth)
        assert resp.status_code == 201
        doc = resp.json()
        assert client.get(f"/api/documents/{doc['id']}/analysis", headers=auth).json() is None
        saved = client.post(f"/api/documents/{doc['id']}/optimizations", json={
            "job_description": "SRE", "optimization_result": {"matchScore": 70},
        }, headers=auth)
        assert saved.status_code == 201
        assert client.get("/api/documents/optimizations/count", headers=auth).json() == {"count": 1}
        assert client.delete(f"/api/documents/{doc['id']}", headers=auth).status_code == 204
        assert client.get(f"/api/documents/{doc['id']}", headers=auth).status_code == 404

    def test_oversized_document_is_bad_request(self, client, auth):
        resp = client.post("/api/documents", json={
            "name": "big.pdf", "file_path": "u/big.pdf", "file_size": 11 * 1024 * 1024,
            "file_type": "application/pdf",
        }, headers=auth)
        assert resp.status_code == 400

    def test_profile(self, client, auth):
        assert client.get("/api/profile", headers=auth).json()["display_name"] == "ada"
        client.put("/api/profile", json={"bio": "SRE"}, headers=auth)
        body = client.put("/api/profile/preferences", json={"job_alerts": False}, headers=auth).json()
        assert body["bio"] == "SRE"
        assert body["preferences"]["job_alerts"] is False

    def test_duplicate_round_conflicts(self, client, auth):
        interview = client.post("/api/interviews", json={
            "title": "Loop", "interview_type": "onsite", "scheduled_date": "2999-01-01T10:00:00Z",
        }, headers=auth).json()
        url = f"/api/interviews/{interview['id']}/rounds"
        payload = {"round_number": 1, "round_type": "technical", "scheduled_date": "2999-01-01T10:00:00Z"}
        assert client.post(url, json=payload, headers=auth).status_code == 201
        assert client.post(url, json=payload, headers=auth).status_code == 409
        assert [r["round_number"] for r in client.get(url, headers=auth).json()] == [1]

    def test_question_bank_route_is_not_an_interview_id(self, client, auth):
        client.post("/api/interviews/questions", json={"category": "general", "question": "Why us?"}, headers=auth)
        assert [q["question"] for q in client.get("/api/interviews/questions", headers=auth).json()] == ["Why us?"]

    def test_analysis_of_unknown_document_is_not_found(self, client, auth):
        resp = client.post(
            "/api/ai/analyze-document", json={"content": "My resume", "document_id": "missing"}, headers=auth,
        )
        assert resp.status_code == 404


class TestChangeFeedSocket:

    def test_status_change_is_pushed(self, client, auth, token, job):
        with client.websocket_connect(f"/ws/changes?token={token}&tables=jobs") as ws:
            client.patch(f"/api/jobs/{job['id']}/status", json={"status": "interviewing"}, headers=auth)
            change = ws.receive_json()

        assert change["table"] == "jobs"
        assert change["event_type"] == "update"
        assert change["record"]["id"] == job["id"]
        assert change["record"]["status"] == "interviewing"

    def test_bad_token_closes_with_policy_violation(self, client):
        with pytest.raises(WebSocketDisconnect) as exc:
            with client.websocket_connect("/ws/changes?token=bad"):
                pass
        assert exc.value.code == 1008

    def test_unknown_table_closes(self, client, token):
        with pytest.raises(WebSocketDisconnect) as exc:
            with client.websocket_connect(f"/ws/changes?token={token}&tables=user_preferences"):
                pass
        assert exc.value.code == 1008


class TestLinkedInParse:

    URL = "https://www.linkedin.com/jobs/view/42/senior-engineer?location=Berlin"

    def test_url_only(self, client, auth):
        body = client.post("/api/linkedin/parse", json={"url": self.URL}, headers=auth).json()
        assert body["job_id"] == "42"
        assert body["job_title"] == "senior engineer"
        assert body["location"] == "Berlin"

    @patch("careertrail.services.linkedin.fetch_job_details", new_callable=AsyncMock)
    def test_fetched_details_win(self, mock_fetch, client, auth):
        mock_fetch.return_value = LinkedInJobInfo(
            job_url="https://www.linkedin.com/jobs/view/42",
            job_id="42",
            job_title="Senior Engineer",
            company="Acme",
        )
        body = client.post(
            "/api/linkedin/parse", json={"url": self.URL, "fetch_details": True}, headers=auth,
        ).json()

        mock_fetch.assert_awaited_once_with("42")
        assert body["job_title"] == "Senior Engineer"
        assert body["company"] == "Acme"
        assert body["location"] == "Berlin"
        assert body["job_url"] == self.URL

    @patch("careertrail.services.linkedin.fetch_job_details", new_callable=AsyncMock)
    def test_rate_limit_maps_to_429(self, mock_fetch, client, auth):
        mock_fetch.side_effect = RateLimitError("LinkedIn rate limit hit. Retry after 60 seconds.")
        resp = client.post(
            "/api/linkedin/parse", json={"url": self.URL, "fetch_details": True}, headers=auth,
        )
        assert resp.status_code == 429
