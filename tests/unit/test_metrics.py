"""Tests for dashboard metrics."""
from datetime import date, datetime, timezone
from types import SimpleNamespace

from careertrail.schemas import JobCreate
from careertrail.services.jobs import create_job, update_job_status
from careertrail.services.metrics import compute_metrics, get_metrics

TODAY = date(2026, 4, 15)


def _job(company, status, applied, moved=None):
    applied_at = datetime.combine(applied, datetime.min.time(), tzinfo=timezone.utc)
    return SimpleNamespace(
        company=company,
        status=status,
        applied_date=applied,
        updated_at=moved or applied_at,
    )


def test_empty_set_gives_zeros():
    m = compute_metrics([], today=TODAY)
    assert m.total_applications == 0
    assert m.interview_rate == 0.0
    assert m.offer_rate == 0.0
    assert m.average_response_time == 0
    assert m.status_breakdown == {"applied": 0, "interviewing": 0, "offer": 0, "rejected": 0}
    assert m.top_companies == []


def test_rates_and_breakdown():
    jobs = [
        _job("Acme", "applied", date(2026, 4, 1)),
        _job("Acme", "interviewing", date(2026, 4, 2), datetime(2026, 4, 5, 12, tzinfo=timezone.utc)),
        _job("Globex", "offer", date(2026, 3, 20), datetime(2026, 3, 27, 9, tzinfo=timezone.utc)),
        _job("Initech", "rejected", date(2026, 3, 1), datetime(2026, 3, 1, 20, tzinfo=timezone.utc)),
    ]
    m = compute_metrics(jobs, today=TODAY)

    assert m.total_applications == 4
    assert m.applications_this_month == 2
    assert m.interview_rate == 50.0
    assert m.offer_rate == 25.0
    assert m.status_breakdown == {"applied": 1, "interviewing": 1, "offer": 1, "rejected": 1}
    # 4, 8 and 1 days (partial days round up)
    assert m.average_response_time == 4
    assert [(c.company, c.count) for c in m.top_companies][0] == ("Acme", 2)


def test_top_companies_capped_at_five():
    jobs = [_job(f"Co{i}", "applied", TODAY) for i in range(7)]
    assert len(compute_metrics(jobs, today=TODAY).top_companies) == 5


def test_get_metrics_reads_the_users_rows(session, user, other_user):
    job = create_job(session, user.id, JobCreate(company="Acme", role="SRE", applied_date=TODAY))
    update_job_status(session, user.id, job.id, "offer")
    create_job(session, other_user.id, JobCreate(company="Globex", role="SRE"))

    m = get_metrics(session, user.id, today=TODAY)
    assert m.total_applications == 1
    assert m.offer_rate == 100.0
    assert {a.activity_type for a in m.recent_activity} == {"applied", "offer_received"}
