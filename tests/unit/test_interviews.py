"""Tests for the interview service."""
from datetime import datetime, timedelta, timezone

import pytest

from careertrail.errors import ConflictError, NotFoundError
from careertrail.schemas import (
    InterviewCreate,
    InterviewQuestionCreate,
    InterviewQuestionUpdate,
    InterviewRoundCreate,
    InterviewRoundUpdate,
    InterviewUpdate,
    JobCreate,
    QuestionResponseCreate,
)
from careertrail.services import interviews as interview_service
from careertrail.services.jobs import create_job

NOW = datetime(2026, 5, 1, 9, 0, tzinfo=timezone.utc)


def _schedule(session, user, title, offset_days, **extra):
    return interview_service.create_interview(session, user.id, InterviewCreate(
        title=title,
        interview_type="video",
        scheduled_date=NOW + timedelta(days=offset_days),
        **extra,
    ))


def test_upcoming_only_includes_future_scheduled(session, user):
    _schedule(session, user, "Past screen", -2)
    _schedule(session, user, "Onsite", 3)
    _schedule(session, user, "Tech", 1)
    _schedule(session, user, "Cancelled call", 2, status="cancelled")

    upcoming = interview_service.upcoming_interviews(session, user.id, now=NOW)
    assert [i.title for i in upcoming] == ["Tech", "Onsite"]
    assert [i.title for i in interview_service.upcoming_interviews(session, user.id, now=NOW, limit=1)] == ["Tech"]


def test_list_is_in_schedule_order_and_filters_by_job(session, user):
    job = create_job(session, user.id, JobCreate(company="Acme", role="SRE"))
    _schedule(session, user, "Second", 2, job_id=job.id)
    _schedule(session, user, "First", 1)

    assert [i.title for i in interview_service.list_interviews(session, user.id)] == ["First", "Second"]
    assert [i.title for i in interview_service.list_interviews(session, user.id, job_id=job.id)] == ["Second"]


def test_update_records_outcome(session, user):
    interview = _schedule(session, user, "Final", 1)
    updated = interview_service.update_interview(
        session, user.id, interview.id,
        InterviewUpdate(status="completed", outcome="offer", feedback="Great"),
    )
    assert (updated.status, updated.outcome, updated.duration_minutes) == ("completed", "offer", 60)


def test_foreign_job_is_rejected(session, user, other_user):
    foreign = create_job(session, other_user.id, JobCreate(company="Globex", role="SRE"))
    with pytest.raises(NotFoundError):
        _schedule(session, user, "Sneaky", 1, job_id=foreign.id)


def test_delete(session, user):
    interview = _schedule(session, user, "Screen", 1)
    interview_service.delete_interview(session, user.id, interview.id)
    with pytest.raises(NotFoundError):
        interview_service.get_interview(session, user.id, interview.id)


def _round(session, user, interview, number, **extra):
    return interview_service.create_round(session, user.id, interview.id, InterviewRoundCreate(
        round_number=number,
        round_type="technical",
        scheduled_date=NOW + timedelta(days=number),
        **extra,
    ))


class TestRounds:

    def test_listed_by_round_number(self, session, user):
        interview = _schedule(session, user, "Loop", 1)
        _round(session, user, interview, 2)
        _round(session, user, interview, 1, interviewer_name="Lin")

        rounds = interview_service.list_rounds(session, user.id, interview.id)
        assert [r.round_number for r in rounds] == [1, 2]
        assert rounds[0].status == "scheduled"

    def test_duplicate_round_number_conflicts(self, session, user):
        interview = _schedule(session, user, "Loop", 1)
        _round(session, user, interview, 1)
        with pytest.raises(ConflictError):
            _round(session, user, interview, 1)
        assert len(interview_service.list_rounds(session, user.id, interview.id)) == 1

    def test_update_outcome(self, session, user):
        interview = _schedule(session, user, "Loop", 1)
        first = _round(session, user, interview, 1)
        updated = interview_service.update_round(
            session, user.id, first.id, InterviewRoundUpdate(status="completed", outcome="next_round"),
        )
        assert (updated.status, updated.outcome) == ("completed", "next_round")

    def test_other_users_round_is_not_found(self, session, user, other_user):
        interview = _schedule(session, user, "Loop", 1)
        first = _round(session, user, interview, 1)
        with pytest.raises(NotFoundError):
            interview_service.get_round(session, other_user.id, first.id)
        with pytest.raises(NotFoundError):
            interview_service.list_rounds(session, other_user.id, interview.id)

    def test_deleting_interview_removes_rounds(self, session, user):
        interview = _schedule(session, user, "Loop", 1)
        first = _round(session, user, interview, 1)
        interview_service.delete_interview(session, user.id, interview.id)
        with pytest.raises(NotFoundError):
            interview_service.get_round(session, user.id, first.id)


class TestQuestionBank:

    def test_filters(self, session, user, other_user):
        interview_service.create_question(session, user.id, InterviewQuestionCreate(
            category="behavioral", question="Tell me about a conflict", is_favorite=True,
        ))
        interview_service.create_question(session, user.id, InterviewQuestionCreate(
            category="technical", question="Explain a B-tree", tags=["databases"],
        ))
        interview_service.create_question(session, other_user.id, InterviewQuestionCreate(
            category="technical", question="Not mine",
        ))

        assert len(interview_service.list_questions(session, user.id)) == 2
        technical = interview_service.list_questions(session, user.id, category="technical")
        assert [q.question for q in technical] == ["Explain a B-tree"]
        assert technical[0].tags == ["databases"]
        favorites = interview_service.list_questions(session, user.id, favorites_only=True)
        assert [q.question for q in favorites] == ["Tell me about a conflict"]

    def test_update(self, session, user):
        question = interview_service.create_question(session, user.id, InterviewQuestionCreate(
            category="general", question="Why us?",
        ))
        updated = interview_service.update_question(
            session, user.id, question.id, InterviewQuestionUpdate(answer_template="Mission", is_favorite=True),
        )
        assert (updated.answer_template, updated.is_favorite) == ("Mission", True)


class TestResponses:

    def test_answer_keeps_text_after_question_is_deleted(self, session, user):
        interview = _schedule(session, user, "Screen", 1)
        question = interview_service.create_question(session, user.id, InterviewQuestionCreate(
            category="behavioral", question="Biggest failure?",
        ))
        response = interview_service.create_response(session, user.id, interview.id, QuestionResponseCreate(
            question_id=question.id, question_text=question.question, response="Missed a deadline", rating=4,
        ))

        interview_service.delete_question(session, user.id, question.id)

        kept = interview_service.get_response(session, user.id, response.id)
        assert kept.question_id is None
        assert kept.question_text == "Biggest failure?"

    def test_foreign_question_is_rejected(self, session, user, other_user):
        interview = _schedule(session, user, "Screen", 1)
        theirs = interview_service.create_question(session, other_user.id, InterviewQuestionCreate(
            category="general", question="Secret",
        ))
        with pytest.raises(NotFoundError):
            interview_service.create_response(session, user.id, interview.id, QuestionResponseCreate(
                question_id=theirs.id, question_text="Secret",
            ))

    def test_listed_per_interview(self, session, user):
        screen = _schedule(session, user, "Screen", 1)
        onsite = _schedule(session, user, "Onsite", 2)
        interview_service.create_response(session, user.id, screen.id, QuestionResponseCreate(question_text="Q1"))
        interview_service.create_response(session, user.id, onsite.id, QuestionResponseCreate(question_text="Q2"))

        assert [r.question_text for r in interview_service.list_responses(session, user.id, screen.id)] == ["Q1"]
