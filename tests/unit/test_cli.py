"""Tests for the careertrail command line."""
from unittest.mock import patch

import pytest

from careertrail.auth import verify_token
from careertrail.cli import main
from tests.fixtures.jobs import make_job


@pytest.fixture
def db_url(tmp_path):
    url = f"sqlite:///{tmp_path / 'cli.db'}"
    assert main(["init-db", "--database", url]) == 0
    return url


def test_create_user_and_token(db_url, capsys):
    assert main(["create-user", "ada@example.com", "--name", "Ada", "--database", db_url]) == 0
    assert "Created user" in capsys.readouterr().out

    assert main(["token", "ada@example.com", "--database", db_url]) == 0
    token = capsys.readouterr().out.strip()
    assert verify_token(token).email == "ada@example.com"


def test_duplicate_user(db_url, capsys):
    main(["create-user", "ada@example.com", "--database", db_url])
    assert main(["create-user", "ada@example.com", "--database", db_url]) == 1
    assert "already exists" in capsys.readouterr().out


def test_token_for_unknown_user(db_url, capsys):
    assert main(["token", "nobody@example.com", "--database", db_url]) == 1


class FakeClient:
    """Stands in for CareerTrailClient in the remote commands."""

    fail = None

    def __init__(self, url=None, token=None):
        self.calls = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return None

    async def list_jobs(self):
        return [make_job("abc123", company="Acme"), make_job("def456", company="Globex")]

    async def update_job_status(self, job_id, status):
        if self.fail:
            raise self.fail
        return make_job(job_id, status, company="Acme")


class TestMove:

    @patch("careertrail.client.CareerTrailClient", FakeClient)
    def test_move_by_prefix(self, capsys):
        assert main(["move", "abc", "offer"]) == 0
        assert "Moved Acme to offer" in capsys.readouterr().out

    @patch("careertrail.client.CareerTrailClient", FakeClient)
    def test_failure_exits_nonzero(self, capsys):
        with patch.object(FakeClient, "fail", RuntimeError("offline")):
            assert main(["move", "abc", "offer"]) == 1
        assert "Failed to update job status: offline" in capsys.readouterr().out

    @patch("careertrail.client.CareerTrailClient", FakeClient)
    def test_invalid_column(self, capsys):
        assert main(["move", "abc", "archived"]) == 1
        assert "Invalid column" in capsys.readouterr().out

    @patch("careertrail.client.CareerTrailClient", FakeClient)
    def test_unknown_job(self, capsys):
        assert main(["move", "zzz", "offer"]) == 1
        assert "No job matching" in capsys.readouterr().out
