"""Tests for contacts, interactions and contact-job links."""
from datetime import date

import pytest

from careertrail.errors import ConflictError, NotFoundError
from careertrail.schemas import ContactCreate, ContactUpdate, InteractionCreate, JobCreate
from careertrail.services import contacts as contact_service
from careertrail.services.jobs import create_job


@pytest.fixture
def recruiter(session, user):
    return contact_service.create_contact(session, user.id, ContactCreate(
        first_name="Jo",
        last_name="Recruiter",
        company="Acme",
        category="recruiter",
        tags=["python"],
    ))


@pytest.fixture
def job(session, user):
    return create_job(session, user.id, JobCreate(company="Acme", role="SRE"))


class TestContacts:

    def test_create_and_update(self, session, user, recruiter):
        assert recruiter.tags == ["python"]
        updated = contact_service.update_contact(
            session, user.id, recruiter.id, ContactUpdate(relationship_strength=4),
        )
        assert updated.relationship_strength == 4
        assert updated.category == "recruiter"

    def test_search_and_filters(self, session, user, recruiter):
        contact_service.create_contact(session, user.id, ContactCreate(first_name="Sam", last_name="Peer"))
        assert [c.first_name for c in contact_service.list_contacts(session, user.id, search="acme")] == ["Jo"]
        assert [c.first_name for c in contact_service.list_contacts(session, user.id, category="networking")] == ["Sam"]
        assert len(contact_service.list_contacts(session, user.id, status="active")) == 2

    def test_scoped_to_owner(self, session, other_user, recruiter):
        with pytest.raises(NotFoundError):
            contact_service.get_contact(session, other_user.id, recruiter.id)

    def test_delete_removes_interactions(self, session, user, recruiter):
        contact_service.create_interaction(
            session, user.id, recruiter.id, InteractionCreate(interaction_type="call"),
        )
        contact_service.delete_contact(session, user.id, recruiter.id)
        assert contact_service.list_interactions(session, user.id) == []


class TestInteractions:

    def test_log_interaction_against_job(self, session, user, recruiter, job):
        interaction = contact_service.create_interaction(
            session, user.id, recruiter.id,
            InteractionCreate(interaction_type="email", subject="Intro", job_id=job.id),
        )
        assert interaction.direction == "outbound"
        assert interaction.job_id == job.id
        assert contact_service.list_interactions(session, user.id, recruiter.id) == [interaction]

    def test_job_must_belong_to_user(self, session, user, other_user, recruiter):
        foreign = create_job(session, other_user.id, JobCreate(company="Globex", role="SRE"))
        with pytest.raises(NotFoundError):
            contact_service.create_interaction(
                session, user.id, recruiter.id,
                InteractionCreate(interaction_type="email", job_id=foreign.id),
            )

    def test_due_follow_ups(self, session, user, recruiter):
        for day in (date(2026, 3, 1), date(2026, 3, 10), None):
            contact_service.create_interaction(
                session, user.id, recruiter.id,
                InteractionCreate(interaction_type="note", follow_up_date=day),
            )
        due = contact_service.due_follow_ups(session, user.id, on_or_before=date(2026, 3, 5))
        assert [i.follow_up_date for i in due] == [date(2026, 3, 1)]
        later = contact_service.due_follow_ups(session, user.id, on_or_before=date(2026, 3, 31))
        assert [i.follow_up_date for i in later] == [date(2026, 3, 1), date(2026, 3, 10)]


class TestJobLinks:

    def test_link_and_unlink(self, session, user, recruiter, job):
        link = contact_service.link_job(session, user.id, recruiter.id, job.id)
        assert link.relationship_type == "other"
        assert [l.job_id for l in contact_service.list_job_links(session, user.id, recruiter.id)] == [job.id]

        contact_service.unlink_job(session, user.id, recruiter.id, job.id)
        with pytest.raises(NotFoundError):
            contact_service.unlink_job(session, user.id, recruiter.id, job.id)

    def test_duplicate_link_conflicts(self, session, user, recruiter, job):
        contact_service.link_job(session, user.id, recruiter.id, job.id)
        with pytest.raises(ConflictError, match="already linked"):
            contact_service.link_job(session, user.id, recruiter.id, job.id)
