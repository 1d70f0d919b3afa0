"""
Interviews API Endpoints

Interviews, their rounds and recorded answers, and the question bank.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from careertrail.auth import get_current_user
from careertrail.db.database import get_db
from careertrail.db.models import User
from careertrail.schemas import (
    InterviewCreate,
    InterviewQuestionCreate,
    InterviewQuestionRead,
    InterviewQuestionUpdate,
    InterviewRead,
    InterviewRoundCreate,
    InterviewRoundRead,
    InterviewRoundUpdate,
    InterviewUpdate,
    QuestionCategory,
    QuestionResponseCreate,
    QuestionResponseRead,
    QuestionResponseUpdate,
)
from careertrail.services import interviews as interview_service

router = APIRouter()


@router.get("", response_model=List[InterviewRead])
async def list_interviews(
    job_id: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return interview_service.list_interviews(db, current_user.id, job_id=job_id)


@router.post("", response_model=InterviewRead, status_code=status.HTTP_201_CREATED)
async def create_interview(
    data: InterviewCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return interview_service.create_interview(db, current_user.id, data)


@router.get("/upcoming", response_model=List[InterviewRead])
async def upcoming_interviews(
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Scheduled interviews from now on, soonest first"""
    return interview_service.upcoming_interviews(db, current_user.id, limit=limit)


# Fixed paths before /{interview_id}


@router.get("/questions", response_model=List[InterviewQuestionRead])
async def list_questions(
    category: Optional[QuestionCategory] = None,
    favorites: bool = False,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """The question bank, newest first"""
    return interview_service.list_questions(
        db, current_user.id, category=category, favorites_only=favorites
    )


@router.post("/questions", response_model=InterviewQuestionRead, status_code=status.HTTP_201_CREATED)
async def create_question(
    data: InterviewQuestionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return interview_service.create_question(db, current_user.id, data)


@router.put("/questions/{question_id}", response_model=InterviewQuestionRead)
async def update_question(
    question_id: str,
    data: InterviewQuestionUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return interview_service.update_question(db, current_user.id, question_id, data)


@router.delete("/questions/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_question(
    question_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    interview_service.delete_question(db, current_user.id, question_id)


@router.put("/rounds/{round_id}", response_model=InterviewRoundRead)
async def update_round(
    round_id: str,
    data: InterviewRoundUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return interview_service.update_round(db, current_user.id, round_id, data)


@router.delete("/rounds/{round_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_round(
    round_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    interview_service.delete_round(db, current_user.id, round_id)


@router.put("/responses/{response_id}", response_model=QuestionResponseRead)
async def update_response(
    response_id: str,
    data: QuestionResponseUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return interview_service.update_response(db, current_user.id, response_id, data)


@router.delete("/responses/{response_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_response(
    response_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    interview_service.delete_response(db, current_user.id, response_id)


@router.get("/{interview_id}", response_model=InterviewRead)
async def get_interview(
    interview_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return interview_service.get_interview(db, current_user.id, interview_id)


@router.put("/{interview_id}", response_model=InterviewRead)
async def update_interview(
    interview_id: str,
    data: InterviewUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return interview_service.update_interview(db, current_user.id, interview_id, data)


@router.delete("/{interview_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_interview(
    interview_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    interview_service.delete_interview(db, current_user.id, interview_id)


@router.get("/{interview_id}/rounds", response_model=List[InterviewRoundRead])
async def list_rounds(
    interview_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return interview_service.list_rounds(db, current_user.id, interview_id)


@router.post(
    "/{interview_id}/rounds",
    response_model=InterviewRoundRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_round(
    interview_id: str,
    data: InterviewRoundCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Add a round (409 if the round number is taken)"""
    return interview_service.create_round(db, current_user.id, interview_id, data)


@router.get("/{interview_id}/responses", response_model=List[QuestionResponseRead])
async def list_responses(
    interview_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return interview_service.list_responses(db, current_user.id, interview_id)


@router.post(
    "/{interview_id}/responses",
    response_model=QuestionResponseRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_response(
    interview_id: str,
    data: QuestionResponseCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return interview_service.create_response(db, current_user.id, interview_id, data)
