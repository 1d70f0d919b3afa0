"""SQLAlchemy 2.0 models for CareerTrail.

Tables:
- users:                         owners of every other row
- user_profiles:                 display name, links, notification preferences
- jobs:                          job applications, the central entity
- job_activities:                audit trail, written automatically on create/status change
- contacts:                      recruiters, hiring managers, referrals ...
- contact_interactions:          emails, calls, meetings with a contact
- contact_jobs:                  contact <-> job links
- interviews:                    scheduled/completed interviews
- interview_rounds:              numbered rounds of a multi-round interview
- interview_questions:           per-user question bank
- interview_question_responses:  answers given during an interview
- folders:                       nested document folders
- documents:                     document metadata; the file itself lives in external storage
- document_analyses:             stored model analyses of a document
- document_optimizations:        stored tailoring results, one per job description
- user_preferences:              persisted UI state (active dashboard tab)
"""
import uuid
from datetime import date, datetime, timezone
from typing import Any, Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    JSON,
    String,
    Text,
    UniqueConstraint,
    event,
    inspect,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    Session,
    mapped_column,
    relationship,
)

JOB_STATUSES = ("applied", "interviewing", "offer", "rejected")

CONTACT_CATEGORIES = (
    "recruiter", "hiring_manager", "colleague", "networking", "referral", "other",
)
CONTACT_STATUSES = ("active", "inactive", "archived")
CONTACT_SOURCES = (
    "linkedin", "referral", "cold_outreach", "event", "mutual_connection", "other",
)
INTERACTION_TYPES = (
    "email", "call", "meeting", "linkedin_message", "note", "coffee_chat",
    "referral_request",
)
INTERACTION_DIRECTIONS = ("inbound", "outbound")
RELATIONSHIP_TYPES = (
    "referrer", "interviewer", "hiring_manager", "colleague", "decision_maker", "other",
)
INTERVIEW_TYPES = (
    "phone", "video", "onsite", "technical", "behavioral", "final", "coffee_chat", "other",
)
INTERVIEW_STATUSES = (
    "scheduled", "in_progress", "completed", "cancelled", "rescheduled", "no_show",
)
INTERVIEW_OUTCOMES = (
    "pending", "positive", "negative", "neutral", "offer", "rejection", "next_round",
)
ROUND_OUTCOMES = (
    "pending", "positive", "negative", "neutral", "next_round", "rejection",
)
QUESTION_CATEGORIES = (
    "technical", "behavioral", "company", "role_specific", "general", "custom",
)
DOCUMENT_CATEGORIES = ("resume", "cover_letter", "portfolio", "certificate", "other")
DEFAULT_FOLDER_COLOR = "#3B82F6"
DEFAULT_PROFILE_PREFERENCES = {
    "email_notifications": True,
    "weekly_summary": True,
    "job_alerts": True,
}
DASHBOARD_TABS = ("list", "board", "metrics", "documents", "contacts", "interviews")


def _uuid() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _in(column: str, values: tuple) -> str:
    quoted = ", ".join(f"'{v}'" for v in values)
    return f"{column} IN ({quoted})"


class Base(DeclarativeBase):
    """Shared declarative base for all CareerTrail models."""

    def to_dict(self) -> dict[str, Any]:
        """Column values as JSON-friendly primitives (used by the change feed)."""
        out = {}
        for attr in inspect(self).mapper.column_attrs:
            value = getattr(self, attr.key)
            if isinstance(value, (datetime, date)):
                value = value.isoformat()
            out[attr.key] = value
        return out


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"


class Job(Base):
    """A job application. Status drives the Kanban board column."""
    __tablename__ = "jobs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    company: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="applied")
    applied_date: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)
    link: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, onupdate=_now
    )

    activities: Mapped[list["JobActivity"]] = relationship(
        back_populates="job",
        cascade="all, delete-orphan",
        order_by="JobActivity.activity_date.desc()",
    )
    contact_links: Mapped[list["ContactJob"]] = relationship(
        back_populates="job",
        cascade="all, delete-orphan",
    )
    # Rows that outlive the job; their job_id is cleared on delete
    interviews: Mapped[list["Interview"]] = relationship(back_populates="job")
    interactions: Mapped[list["ContactInteraction"]] = relationship()
    documents: Mapped[list["Document"]] = relationship()

    __table_args__ = (
        CheckConstraint(_in("status", JOB_STATUSES), name="ck_jobs_status"),
        Index("ix_jobs_user_id", "user_id"),
        Index("ix_jobs_status", "status"),
        Index("ix_jobs_applied_date", "applied_date"),
    )

    def __repr__(self) -> str:
        return (
            f"<Job(id={self.id}, "
            f"company='{self.company}', "
            f"role='{self.role[:40]}', "
            f"status='{self.status}')>"
        )


class JobActivity(Base):
    """Audit trail: one row per job creation or status change."""
    __tablename__ = "job_activities"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    job_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False
    )
    activity_type: Mapped[str] = mapped_column(String(40), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    activity_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now
    )

    job: Mapped["Job"] = relationship(back_populates="activities")

    __table_args__ = (
        Index("ix_job_activities_job_id", "job_id"),
        Index("ix_job_activities_date", "activity_date"),
    )

    def __repr__(self) -> str:
        return f"<JobActivity(job_id={self.job_id}, type='{self.activity_type}')>"


class Contact(Base):
    __tablename__ = "contacts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    company: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    role: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    linkedin_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(20), nullable=False, default="networking")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")
    source: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    relationship_strength: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, onupdate=_now
    )

    interactions: Mapped[list["ContactInteraction"]] = relationship(
        back_populates="contact",
        cascade="all, delete-orphan",
        order_by="ContactInteraction.created_at.desc()",
    )
    job_links: Mapped[list["ContactJob"]] = relationship(
        back_populates="contact",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        CheckConstraint(_in("category", CONTACT_CATEGORIES), name="ck_contacts_category"),
        CheckConstraint(_in("status", CONTACT_STATUSES), name="ck_contacts_status"),
        CheckConstraint(
            "relationship_strength IS NULL OR "
            "(relationship_strength >= 1 AND relationship_strength <= 5)",
            name="ck_contacts_strength",
        ),
        Index("ix_contacts_user_id", "user_id"),
        Index("ix_contacts_company", "company"),
        Index("ix_contacts_category", "category"),
    )

    def __repr__(self) -> str:
        return f"<Contact(id={self.id}, name='{self.first_name} {self.last_name}')>"


class ContactInteraction(Base):
    __tablename__ = "contact_interactions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    contact_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("contacts.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    job_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("jobs.id", ondelete="SET NULL"), nullable=True
    )
    interaction_type: Mapped[str] = mapped_column(String(20), nullable=False)
    subject: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    direction: Mapped[str] = mapped_column(String(10), nullable=False, default="outbound")
    response_received: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    follow_up_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now
    )

    contact: Mapped["Contact"] = relationship(back_populates="interactions")

    __table_args__ = (
        CheckConstraint(
            _in("interaction_type", INTERACTION_TYPES), name="ck_interactions_type"
        ),
        CheckConstraint(
            _in("direction", INTERACTION_DIRECTIONS), name="ck_interactions_direction"
        ),
        Index("ix_interactions_contact_id", "contact_id"),
        Index("ix_interactions_follow_up", "follow_up_date"),
    )


class ContactJob(Base):
    __tablename__ = "contact_jobs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    contact_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("contacts.id", ondelete="CASCADE"), nullable=False
    )
    job_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False
    )
    relationship_type: Mapped[str] = mapped_column(String(20), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now
    )

    contact: Mapped["Contact"] = relationship(back_populates="job_links")
    job: Mapped["Job"] = relationship(back_populates="contact_links")

    __table_args__ = (
        UniqueConstraint("contact_id", "job_id", name="uq_contact_jobs"),
        CheckConstraint(
            _in("relationship_type", RELATIONSHIP_TYPES), name="ck_contact_jobs_type"
        ),
    )


class Interview(Base):
    __tablename__ = "interviews"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    job_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("jobs.id", ondelete="SET NULL"), nullable=True
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    interview_type: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="scheduled")
    scheduled_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=60)
    location: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    meeting_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    interviewer_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    interviewer_role: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    interviewer_email: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    preparation_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    feedback: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    outcome: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, onupdate=_now
    )

    job: Mapped[Optional["Job"]] = relationship(back_populates="interviews")
    rounds: Mapped[list["InterviewRound"]] = relationship(
        back_populates="interview",
        cascade="all, delete-orphan",
        order_by="InterviewRound.round_number",
    )
    responses: Mapped[list["InterviewQuestionResponse"]] = relationship(
        back_populates="interview",
        cascade="all, delete-orphan",
        order_by="InterviewQuestionResponse.created_at",
    )

    __table_args__ = (
        CheckConstraint(_in("interview_type", INTERVIEW_TYPES), name="ck_interviews_type"),
        CheckConstraint(_in("status", INTERVIEW_STATUSES), name="ck_interviews_status"),
        CheckConstraint(
            "outcome IS NULL OR " + _in("outcome", INTERVIEW_OUTCOMES),
            name="ck_interviews_outcome",
        ),
        Index("ix_interviews_user_id", "user_id"),
        Index("ix_interviews_scheduled", "scheduled_date"),
    )

    def __repr__(self) -> str:
        return f"<Interview(id={self.id}, title='{self.title}', status='{self.status}')>"


class InterviewRound(Base):
    """One numbered round of a multi-round interview."""
    __tablename__ = "interview_rounds"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    interview_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("interviews.id", ondelete="CASCADE"), nullable=False
    )
    round_number: Mapped[int] = mapped_column(Integer, nullable=False)
    round_type: Mapped[str] = mapped_column(String(20), nullable=False)
    scheduled_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=60)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="scheduled")
    interviewer_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    interviewer_role: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    interviewer_email: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    location: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    meeting_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    feedback: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    outcome: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, onupdate=_now
    )

    interview: Mapped["Interview"] = relationship(back_populates="rounds")

    __table_args__ = (
        UniqueConstraint("interview_id", "round_number", name="uq_interview_rounds_number"),
        CheckConstraint(_in("round_type", INTERVIEW_TYPES), name="ck_rounds_type"),
        CheckConstraint(_in("status", INTERVIEW_STATUSES), name="ck_rounds_status"),
        CheckConstraint(
            "outcome IS NULL OR " + _in("outcome", ROUND_OUTCOMES),
            name="ck_rounds_outcome",
        ),
        Index("ix_interview_rounds_interview_id", "interview_id"),
    )

    def __repr__(self) -> str:
        return f"<InterviewRound(interview_id={self.interview_id}, round={self.round_number})>"


class InterviewQuestion(Base):
    """Question bank entry, reusable across interviews."""
    __tablename__ = "interview_questions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    category: Mapped[str] = mapped_column(String(20), nullable=False)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    answer_template: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    is_favorite: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, onupdate=_now
    )

    __table_args__ = (
        CheckConstraint(_in("category", QUESTION_CATEGORIES), name="ck_questions_category"),
        Index("ix_interview_questions_user_id", "user_id"),
        Index("ix_interview_questions_category", "category"),
    )


class InterviewQuestionResponse(Base):
    """An answer given during one interview, optionally tied to a bank question."""
    __tablename__ = "interview_question_responses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    interview_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("interviews.id", ondelete="CASCADE"), nullable=False
    )
    question_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("interview_questions.id", ondelete="SET NULL"), nullable=True
    )
    question_text: Mapped[str] = mapped_column(Text, nullable=False)
    response: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    rating: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now
    )

    interview: Mapped["Interview"] = relationship(back_populates="responses")

    __table_args__ = (
        CheckConstraint(
            "rating IS NULL OR (rating >= 1 AND rating <= 5)", name="ck_responses_rating"
        ),
        Index("ix_interview_responses_interview_id", "interview_id"),
    )


class Folder(Base):
    """Document folder; ``parent_folder_id`` nests folders into a tree."""
    __tablename__ = "folders"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    color: Mapped[str] = mapped_column(String(7), nullable=False, default=DEFAULT_FOLDER_COLOR)
    parent_folder_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("folders.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, onupdate=_now
    )

    __table_args__ = (
        Index("ix_folders_user_id", "user_id"),
        Index("ix_folders_parent", "parent_folder_id"),
    )

    def __repr__(self) -> str:
        return f"<Folder(id={self.id}, name='{self.name}')>"


class Document(Base):
    """Metadata of an uploaded file. Deleting only clears ``is_active``."""
    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    job_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("jobs.id", ondelete="SET NULL"), nullable=True
    )
    folder_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("folders.id", ondelete="SET NULL"), nullable=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    file_path: Mapped[str] = mapped_column(Text, nullable=False)
    file_size: Mapped[int] = mapped_column(Integer, nullable=False)
    file_type: Mapped[str] = mapped_column(String(120), nullable=False)
    category: Mapped[str] = mapped_column(String(20), nullable=False, default="other")
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, onupdate=_now
    )

    __table_args__ = (
        CheckConstraint(_in("category", DOCUMENT_CATEGORIES), name="ck_documents_category"),
        Index("ix_documents_user_id", "user_id"),
        Index("ix_documents_job_id", "job_id"),
        Index("ix_documents_folder_id", "folder_id"),
    )

    def __repr__(self) -> str:
        return f"<Document(id={self.id}, name='{self.name}', category='{self.category}')>"


class DocumentAnalysis(Base):
    __tablename__ = "document_analyses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    document_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("documents.id", ondelete="CASCADE"), nullable=False
    )
    result: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now
    )

    __table_args__ = (
        Index("ix_document_analyses_document_id", "document_id"),
    )


class DocumentOptimization(Base):
    __tablename__ = "document_optimizations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    document_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("documents.id", ondelete="CASCADE"), nullable=False
    )
    job_description: Mapped[str] = mapped_column(Text, nullable=False)
    optimization_result: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, onupdate=_now
    )

    __table_args__ = (
        Index("ix_document_optimizations_document_id", "document_id"),
        Index("ix_document_optimizations_created_at", "created_at"),
    )


class UserProfile(Base):
    """Public profile and notification preferences, one row per user."""
    __tablename__ = "user_profiles"

    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    first_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    display_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    location: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    website: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    linkedin: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    github: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    avatar_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    timezone: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    preferences: Mapped[dict] = mapped_column(
        JSON, nullable=False, default=lambda: dict(DEFAULT_PROFILE_PREFERENCES)
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, onupdate=_now
    )


class UserPreference(Base):
    """Persisted dashboard UI state, one row per user."""
    __tablename__ = "user_preferences"

    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    active_tab: Mapped[str] = mapped_column(String(20), nullable=False, default="list")
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, onupdate=_now
    )

    __table_args__ = (
        CheckConstraint(_in("active_tab", DASHBOARD_TABS), name="ck_prefs_tab"),
    )


# ---------------------------------------------------------------------------
# Auto-activity via SQLAlchemy event listeners
# ---------------------------------------------------------------------------
STATUS_ACTIVITY = {
    "applied": "applied",
    "interviewing": "interview_scheduled",
    "offer": "offer_received",
    "rejected": "rejected",
}


def track_job_changes(session):
    """Collect activity entries for new jobs and status changes.

    Call this BEFORE session.commit() or register via SessionEvents.before_flush.
    Uses attribute history to detect status transitions.
    """
    changes = []
    for obj in session.new:
        if not isinstance(obj, Job):
            continue
        activity = JobActivity(
            user_id=obj.user_id,
            activity_type=STATUS_ACTIVITY.get(obj.status or "applied", "status_changed"),
            description=f"Added {obj.role} at {obj.company}",
        )
        obj.activities.append(activity)
        changes.append(activity)

    for obj in session.dirty:
        if not isinstance(obj, Job):
            continue
        hist = inspect(obj).attrs["status"].history
        if not hist.has_changes():
            continue
        old = hist.deleted[0] if hist.deleted else None
        new = hist.added[0] if hist.added else None
        if old == new:
            continue
        activity = JobActivity(
            user_id=obj.user_id,
            job_id=obj.id,
            activity_type=STATUS_ACTIVITY.get(new, "status_changed"),
            description=f"Status changed from {old} to {new}",
        )
        session.add(activity)
        changes.append(activity)
    return changes


@event.listens_for(Session, "before_flush")
def _before_flush_track_changes(session, flush_context, instances):
    """Automatically create activity entries during flush."""
    track_job_changes(session)
