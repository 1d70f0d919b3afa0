"""
Contacts API Endpoints

Contacts, their interaction log, and links between contacts and jobs.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from careertrail.auth import get_current_user
from careertrail.db.database import get_db
from careertrail.db.models import User
from careertrail.schemas import (
    ContactCategory,
    ContactCreate,
    ContactJobCreate,
    ContactJobRead,
    ContactRead,
    ContactStatus,
    ContactUpdate,
    InteractionCreate,
    InteractionRead,
    InteractionUpdate,
)
from careertrail.services import contacts as contact_service

router = APIRouter()


@router.get("", response_model=List[ContactRead])
async def list_contacts(
    search: Optional[str] = None,
    category: Optional[ContactCategory] = None,
    status: Optional[ContactStatus] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return contact_service.list_contacts(
        db, current_user.id, search=search, category=category, status=status
    )


@router.post("", response_model=ContactRead, status_code=status.HTTP_201_CREATED)
async def create_contact(
    data: ContactCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return contact_service.create_contact(db, current_user.id, data)


# Fixed paths before /{contact_id}


@router.get("/interactions/follow-ups", response_model=List[InteractionRead])
async def list_follow_ups(
    on_or_before: Optional[date] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Interactions whose follow-up is due (default: today)"""
    return contact_service.due_follow_ups(db, current_user.id, on_or_before)


@router.put("/interactions/{interaction_id}", response_model=InteractionRead)
async def update_interaction(
    interaction_id: str,
    data: InteractionUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return contact_service.update_interaction(db, current_user.id, interaction_id, data)


@router.delete("/interactions/{interaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_interaction(
    interaction_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    contact_service.delete_interaction(db, current_user.id, interaction_id)


@router.get("/{contact_id}", response_model=ContactRead)
async def get_contact(
    contact_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return contact_service.get_contact(db, current_user.id, contact_id)


@router.put("/{contact_id}", response_model=ContactRead)
async def update_contact(
    contact_id: str,
    data: ContactUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return contact_service.update_contact(db, current_user.id, contact_id, data)


@router.delete("/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contact(
    contact_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    contact_service.delete_contact(db, current_user.id, contact_id)


@router.get("/{contact_id}/interactions", response_model=List[InteractionRead])
async def list_interactions(
    contact_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return contact_service.list_interactions(db, current_user.id, contact_id)


@router.post(
    "/{contact_id}/interactions",
    response_model=InteractionRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_interaction(
    contact_id: str,
    data: InteractionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return contact_service.create_interaction(db, current_user.id, contact_id, data)


@router.get("/{contact_id}/jobs", response_model=List[ContactJobRead])
async def list_job_links(
    contact_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return contact_service.list_job_links(db, current_user.id, contact_id)


@router.post(
    "/{contact_id}/jobs/{job_id}",
    response_model=ContactJobRead,
    status_code=status.HTTP_201_CREATED,
)
async def link_job(
    contact_id: str,
    job_id: str,
    data: Optional[ContactJobCreate] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return contact_service.link_job(db, current_user.id, contact_id, job_id, data)


@router.delete("/{contact_id}/jobs/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unlink_job(
    contact_id: str,
    job_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    contact_service.unlink_job(db, current_user.id, contact_id, job_id)
