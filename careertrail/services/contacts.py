"""Contact service: contacts, their interactions, and contact-job links."""
import logging
from datetime import date
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from careertrail.db.models import Contact, ContactInteraction, ContactJob
from careertrail.errors import ConflictError, NotFoundError
from careertrail.schemas import (
    ContactCreate,
    ContactJobCreate,
    ContactUpdate,
    InteractionCreate,
    InteractionUpdate,
)
from careertrail.services.jobs import get_job

logger = logging.getLogger(__name__)


# --- Contacts ---


def list_contacts(
    session: Session,
    user_id: str,
    search: Optional[str] = None,
    category: Optional[str] = None,
    status: Optional[str] = None,
) -> list[Contact]:
    """List contacts, newest first.

    ``search`` matches first/last name, company, role or email.
    """
    query = session.query(Contact).filter(Contact.user_id == user_id)
    if search:
        pattern = f"%{search.lower()}%"
        query = query.filter(or_(
            Contact.first_name.ilike(pattern),
            Contact.last_name.ilike(pattern),
            Contact.company.ilike(pattern),
            Contact.role.ilike(pattern),
            Contact.email.ilike(pattern),
        ))
    if category:
        query = query.filter(Contact.category == category)
    if status:
        query = query.filter(Contact.status == status)
    return query.order_by(Contact.created_at.desc(), Contact.id).all()


def get_contact(session: Session, user_id: str, contact_id: str) -> Contact:
    contact = (
        session.query(Contact)
        .filter(Contact.id == contact_id, Contact.user_id == user_id)
        .first()
    )
    if contact is None:
        raise NotFoundError("Contact", contact_id)
    return contact


def create_contact(session: Session, user_id: str, data: ContactCreate) -> Contact:
    contact = Contact(user_id=user_id, **data.model_dump())
    session.add(contact)
    session.commit()
    session.refresh(contact)
    logger.info(f"Created contact {contact.id}: {contact.first_name} {contact.last_name}")
    return contact


def update_contact(session: Session, user_id: str, contact_id: str, data: ContactUpdate) -> Contact:
    contact = get_contact(session, user_id, contact_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(contact, field, value)
    session.commit()
    session.refresh(contact)
    return contact


def delete_contact(session: Session, user_id: str, contact_id: str) -> None:
    contact = get_contact(session, user_id, contact_id)
    session.delete(contact)
    session.commit()
    logger.info(f"Deleted contact {contact_id}")


# --- Interactions ---


def list_interactions(
    session: Session,
    user_id: str,
    contact_id: Optional[str] = None,
) -> list[ContactInteraction]:
    """Interactions newest first; one contact's, or all of the user's."""
    query = session.query(ContactInteraction).filter(ContactInteraction.user_id == user_id)
    if contact_id is not None:
        get_contact(session, user_id, contact_id)
        query = query.filter(ContactInteraction.contact_id == contact_id)
    return query.order_by(ContactInteraction.created_at.desc()).all()


def get_interaction(session: Session, user_id: str, interaction_id: str) -> ContactInteraction:
    interaction = (
        session.query(ContactInteraction)
        .filter(
            ContactInteraction.id == interaction_id,
            ContactInteraction.user_id == user_id,
        )
        .first()
    )
    if interaction is None:
        raise NotFoundError("Interaction", interaction_id)
    return interaction


def create_interaction(
    session: Session,
    user_id: str,
    contact_id: str,
    data: InteractionCreate,
) -> ContactInteraction:
    get_contact(session, user_id, contact_id)
    if data.job_id is not None:
        get_job(session, user_id, data.job_id)
    interaction = ContactInteraction(user_id=user_id, contact_id=contact_id, **data.model_dump())
    session.add(interaction)
    session.commit()
    session.refresh(interaction)
    logger.info(f"Logged {interaction.interaction_type} with contact {contact_id}")
    return interaction


def update_interaction(
    session: Session,
    user_id: str,
    interaction_id: str,
    data: InteractionUpdate,
) -> ContactInteraction:
    interaction = get_interaction(session, user_id, interaction_id)
    changes = data.model_dump(exclude_unset=True)
    if changes.get("job_id") is not None:
        get_job(session, user_id, changes["job_id"])
    for field, value in changes.items():
        setattr(interaction, field, value)
    session.commit()
    session.refresh(interaction)
    return interaction


def delete_interaction(session: Session, user_id: str, interaction_id: str) -> None:
    interaction = get_interaction(session, user_id, interaction_id)
    session.delete(interaction)
    session.commit()


def due_follow_ups(
    session: Session,
    user_id: str,
    on_or_before: Optional[date] = None,
) -> list[ContactInteraction]:
    """Interactions whose follow-up date is due, oldest due date first."""
    day = on_or_before or date.today()
    return (
        session.query(ContactInteraction)
        .filter(
            ContactInteraction.user_id == user_id,
            ContactInteraction.follow_up_date.is_not(None),
            ContactInteraction.follow_up_date <= day,
        )
        .order_by(ContactInteraction.follow_up_date, ContactInteraction.created_at)
        .all()
    )


# --- Contact <-> job links ---


def link_job(
    session: Session,
    user_id: str,
    contact_id: str,
    job_id: str,
    data: Optional[ContactJobCreate] = None,
) -> ContactJob:
    """Link a contact to a job.

    Raises:
        ConflictError: the pair is already linked
    """
    get_contact(session, user_id, contact_id)
    get_job(session, user_id, job_id)
    data = data or ContactJobCreate()
    link = ContactJob(contact_id=contact_id, job_id=job_id, **data.model_dump())
    session.add(link)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise ConflictError(f"Contact {contact_id} is already linked to job {job_id}")
    session.refresh(link)
    return link


def list_job_links(session: Session, user_id: str, contact_id: str) -> list[ContactJob]:
    contact = get_contact(session, user_id, contact_id)
    return list(contact.job_links)


def unlink_job(session: Session, user_id: str, contact_id: str, job_id: str) -> None:
    get_contact(session, user_id, contact_id)
    link = (
        session.query(ContactJob)
        .filter(ContactJob.contact_id == contact_id, ContactJob.job_id == job_id)
        .first()
    )
    if link is None:
        raise NotFoundError("Contact link", f"{contact_id}/{job_id}")
    session.delete(link)
    session.commit()
