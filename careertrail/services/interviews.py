"""Interview service: interviews, their rounds, the question bank and answers.

Rounds and answers have no owner column of their own; access goes through
the parent interview, so a foreign interview behaves like a missing one.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from careertrail.db.models import (
    Interview,
    InterviewQuestion,
    InterviewQuestionResponse,
    InterviewRound,
)
from careertrail.errors import ConflictError, NotFoundError
from careertrail.schemas import (
    InterviewCreate,
    InterviewQuestionCreate,
    InterviewQuestionUpdate,
    InterviewRoundCreate,
    InterviewRoundUpdate,
    InterviewUpdate,
    QuestionResponseCreate,
    QuestionResponseUpdate,
)
from careertrail.services.jobs import get_job

logger = logging.getLogger(__name__)


def list_interviews(session: Session, user_id: str, job_id: Optional[str] = None) -> list[Interview]:
    """Interviews in scheduled order (earliest first)."""
    query = session.query(Interview).filter(Interview.user_id == user_id)
    if job_id is not None:
        query = query.filter(Interview.job_id == job_id)
    return query.order_by(Interview.scheduled_date, Interview.id).all()


def upcoming_interviews(
    session: Session,
    user_id: str,
    now: Optional[datetime] = None,
    limit: Optional[int] = None,
) -> list[Interview]:
    """Still-scheduled interviews from ``now`` on."""
    now = now or datetime.now(timezone.utc)
    query = (
        session.query(Interview)
        .filter(
            Interview.user_id == user_id,
            Interview.status == "scheduled",
            Interview.scheduled_date >= now,
        )
        .order_by(Interview.scheduled_date)
    )
    if limit:
        query = query.limit(limit)
    return query.all()


def get_interview(session: Session, user_id: str, interview_id: str) -> Interview:
    interview = (
        session.query(Interview)
        .filter(Interview.id == interview_id, Interview.user_id == user_id)
        .first()
    )
    if interview is None:
        raise NotFoundError("Interview", interview_id)
    return interview


def create_interview(session: Session, user_id: str, data: InterviewCreate) -> Interview:
    if data.job_id is not None:
        get_job(session, user_id, data.job_id)
    interview = Interview(user_id=user_id, **data.model_dump())
    session.add(interview)
    session.commit()
    session.refresh(interview)
    logger.info(f"Scheduled interview {interview.id}: {interview.title} @ {interview.scheduled_date}")
    return interview


def update_interview(session: Session, user_id: str, interview_id: str, data: InterviewUpdate) -> Interview:
    interview = get_interview(session, user_id, interview_id)
    changes = data.model_dump(exclude_unset=True)
    if changes.get("job_id") is not None:
        get_job(session, user_id, changes["job_id"])
    for field, value in changes.items():
        setattr(interview, field, value)
    session.commit()
    session.refresh(interview)
    return interview


def delete_interview(session: Session, user_id: str, interview_id: str) -> None:
    interview = get_interview(session, user_id, interview_id)
    session.delete(interview)
    session.commit()
    logger.info(f"Deleted interview {interview_id}")


# --- Rounds ---


def list_rounds(session: Session, user_id: str, interview_id: str) -> list[InterviewRound]:
    get_interview(session, user_id, interview_id)
    return (
        session.query(InterviewRound)
        .filter(InterviewRound.interview_id == interview_id)
        .order_by(InterviewRound.round_number)
        .all()
    )


def _commit_round(session: Session, interview_id: str, round_number: int) -> None:
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise ConflictError(f"Interview {interview_id} already has a round {round_number}")


def create_round(
    session: Session, user_id: str, interview_id: str, data: InterviewRoundCreate
) -> InterviewRound:
    """Add a round; round numbers are unique per interview (409 otherwise)."""
    interview = get_interview(session, user_id, interview_id)
    interview_round = InterviewRound(interview_id=interview.id, **data.model_dump())
    session.add(interview_round)
    _commit_round(session, interview_id, data.round_number)
    session.refresh(interview_round)
    logger.info(f"Interview {interview_id}: added round {interview_round.round_number}")
    return interview_round


def get_round(session: Session, user_id: str, round_id: str) -> InterviewRound:
    interview_round = (
        session.query(InterviewRound)
        .join(Interview, InterviewRound.interview_id == Interview.id)
        .filter(InterviewRound.id == round_id, Interview.user_id == user_id)
        .first()
    )
    if interview_round is None:
        raise NotFoundError("Interview round", round_id)
    return interview_round


def update_round(
    session: Session, user_id: str, round_id: str, data: InterviewRoundUpdate
) -> InterviewRound:
    interview_round = get_round(session, user_id, round_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(interview_round, field, value)
    _commit_round(session, interview_round.interview_id, interview_round.round_number)
    session.refresh(interview_round)
    return interview_round


def delete_round(session: Session, user_id: str, round_id: str) -> None:
    session.delete(get_round(session, user_id, round_id))
    session.commit()


# --- Question bank ---


def list_questions(
    session: Session,
    user_id: str,
    category: Optional[str] = None,
    favorites_only: bool = False,
) -> list[InterviewQuestion]:
    """The user's question bank, newest first."""
    query = session.query(InterviewQuestion).filter(InterviewQuestion.user_id == user_id)
    if category:
        query = query.filter(InterviewQuestion.category == category)
    if favorites_only:
        query = query.filter(InterviewQuestion.is_favorite.is_(True))
    return query.order_by(InterviewQuestion.created_at.desc(), InterviewQuestion.id).all()


def get_question(session: Session, user_id: str, question_id: str) -> InterviewQuestion:
    question = (
        session.query(InterviewQuestion)
        .filter(InterviewQuestion.id == question_id, InterviewQuestion.user_id == user_id)
        .first()
    )
    if question is None:
        raise NotFoundError("Interview question", question_id)
    return question


def create_question(session: Session, user_id: str, data: InterviewQuestionCreate) -> InterviewQuestion:
    question = InterviewQuestion(user_id=user_id, **data.model_dump())
    session.add(question)
    session.commit()
    session.refresh(question)
    return question


def update_question(
    session: Session, user_id: str, question_id: str, data: InterviewQuestionUpdate
) -> InterviewQuestion:
    question = get_question(session, user_id, question_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(question, field, value)
    session.commit()
    session.refresh(question)
    return question


def delete_question(session: Session, user_id: str, question_id: str) -> None:
    """Remove from the bank; answers that referenced it keep their text."""
    question = get_question(session, user_id, question_id)
    for response in (
        session.query(InterviewQuestionResponse)
        .filter(InterviewQuestionResponse.question_id == question_id)
    ):
        response.question_id = None
    session.delete(question)
    session.commit()


# --- Answers given during an interview ---


def list_responses(session: Session, user_id: str, interview_id: str) -> list[InterviewQuestionResponse]:
    get_interview(session, user_id, interview_id)
    return (
        session.query(InterviewQuestionResponse)
        .filter(InterviewQuestionResponse.interview_id == interview_id)
        .order_by(InterviewQuestionResponse.created_at, InterviewQuestionResponse.id)
        .all()
    )


def create_response(
    session: Session, user_id: str, interview_id: str, data: QuestionResponseCreate
) -> InterviewQuestionResponse:
    interview = get_interview(session, user_id, interview_id)
    if data.question_id is not None:
        get_question(session, user_id, data.question_id)
    response = InterviewQuestionResponse(interview_id=interview.id, **data.model_dump())
    session.add(response)
    session.commit()
    session.refresh(response)
    return response


def get_response(session: Session, user_id: str, response_id: str) -> InterviewQuestionResponse:
    response = (
        session.query(InterviewQuestionResponse)
        .join(Interview, InterviewQuestionResponse.interview_id == Interview.id)
        .filter(InterviewQuestionResponse.id == response_id, Interview.user_id == user_id)
        .first()
    )
    if response is None:
        raise NotFoundError("Interview response", response_id)
    return response


def update_response(
    session: Session, user_id: str, response_id: str, data: QuestionResponseUpdate
) -> InterviewQuestionResponse:
    response = get_response(session, user_id, response_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(response, field, value)
    session.commit()
    session.refresh(response)
    return response


def delete_response(session: Session, user_id: str, response_id: str) -> None:
    session.delete(get_response(session, user_id, response_id))
    session.commit()
