"""001_initial: create users, jobs, job_activities, contacts, interactions, interviews, preferences.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = "001_initial"
down_revision = None
branch_labels = None
depends_on = None


def _in(column, values):
    quoted = ", ".join(f"'{v}'" for v in values)
    return f"{column} IN ({quoted})"


def _user_fk():
    return sa.Column(
        "user_id", sa.String(36),
        sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    # --- jobs ---
    op.create_table(
        "jobs",
        sa.Column("id", sa.String(36), nullable=False),
        _user_fk(),
        sa.Column("company", sa.Text(), nullable=False),
        sa.Column("role", sa.Text(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("applied_date", sa.Date(), nullable=False),
        sa.Column("link", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            _in("status", ("applied", "interviewing", "offer", "rejected")),
            name="ck_jobs_status",
        ),
    )
    op.create_index("ix_jobs_user_id", "jobs", ["user_id"])
    op.create_index("ix_jobs_status", "jobs", ["status"])
    op.create_index("ix_jobs_applied_date", "jobs", ["applied_date"])

    # --- job_activities ---
    op.create_table(
        "job_activities",
        sa.Column("id", sa.String(36), nullable=False),
        _user_fk(),
        sa.Column(
            "job_id", sa.String(36),
            sa.ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("activity_type", sa.String(40), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("activity_date", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_job_activities_job_id", "job_activities", ["job_id"])
    op.create_index("ix_job_activities_date", "job_activities", ["activity_date"])

    # --- contacts ---
    op.create_table(
        "contacts",
        sa.Column("id", sa.String(36), nullable=False),
        _user_fk(),
        sa.Column("first_name", sa.Text(), nullable=False),
        sa.Column("last_name", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("phone", sa.Text(), nullable=True),
        sa.Column("company", sa.Text(), nullable=True),
        sa.Column("role", sa.Text(), nullable=True),
        sa.Column("linkedin_url", sa.Text(), nullable=True),
        sa.Column("category", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("source", sa.String(20), nullable=True),
        sa.Column("relationship_strength", sa.Integer(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            _in("category", (
                "recruiter", "hiring_manager", "colleague", "networking", "referral", "other",
            )),
            name="ck_contacts_category",
        ),
        sa.CheckConstraint(
            _in("status", ("active", "inactive", "archived")), name="ck_contacts_status",
        ),
        sa.CheckConstraint(
            "relationship_strength IS NULL OR "
            "(relationship_strength >= 1 AND relationship_strength <= 5)",
            name="ck_contacts_strength",
        ),
    )
    op.create_index("ix_contacts_user_id", "contacts", ["user_id"])
    op.create_index("ix_contacts_company", "contacts", ["company"])
    op.create_index("ix_contacts_category", "contacts", ["category"])

    # --- contact_interactions ---
    op.create_table(
        "contact_interactions",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column(
            "contact_id", sa.String(36),
            sa.ForeignKey("contacts.id", ondelete="CASCADE"), nullable=False,
        ),
        _user_fk(),
        sa.Column(
            "job_id", sa.String(36),
            sa.ForeignKey("jobs.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("interaction_type", sa.String(20), nullable=False),
        sa.Column("subject", sa.Text(), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("direction", sa.String(10), nullable=False),
        sa.Column("response_received", sa.Boolean(), nullable=False),
        sa.Column("follow_up_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            _in("interaction_type", (
                "email", "call", "meeting", "linkedin_message", "note", "coffee_chat",
                "referral_request",
            )),
            name="ck_interactions_type",
        ),
        sa.CheckConstraint(
            _in("direction", ("inbound", "outbound")), name="ck_interactions_direction",
        ),
    )
    op.create_index("ix_interactions_contact_id", "contact_interactions", ["contact_id"])
    op.create_index("ix_interactions_follow_up", "contact_interactions", ["follow_up_date"])

    # --- contact_jobs ---
    op.create_table(
        "contact_jobs",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column(
            "contact_id", sa.String(36),
            sa.ForeignKey("contacts.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "job_id", sa.String(36),
            sa.ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("relationship_type", sa.String(20), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("contact_id", "job_id", name="uq_contact_jobs"),
        sa.CheckConstraint(
            _in("relationship_type", (
                "referrer", "interviewer", "hiring_manager", "colleague", "decision_maker",
                "other",
            )),
            name="ck_contact_jobs_type",
        ),
    )

    # --- interviews ---
    op.create_table(
        "interviews",
        sa.Column("id", sa.String(36), nullable=False),
        _user_fk(),
        sa.Column(
            "job_id", sa.String(36),
            sa.ForeignKey("jobs.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("interview_type", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("scheduled_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False),
        sa.Column("location", sa.Text(), nullable=True),
        sa.Column("meeting_url", sa.Text(), nullable=True),
        sa.Column("interviewer_name", sa.Text(), nullable=True),
        sa.Column("interviewer_role", sa.Text(), nullable=True),
        sa.Column("interviewer_email", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("preparation_notes", sa.Text(), nullable=True),
        sa.Column("feedback", sa.Text(), nullable=True),
        sa.Column("outcome", sa.String(20), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            _in("interview_type", (
                "phone", "video", "onsite", "technical", "behavioral", "final",
                "coffee_chat", "other",
            )),
            name="ck_interviews_type",
        ),
        sa.CheckConstraint(
            _in("status", (
                "scheduled", "in_progress", "completed", "cancelled", "rescheduled", "no_show",
            )),
            name="ck_interviews_status",
        ),
        sa.CheckConstraint(
            "outcome IS NULL OR " + _in("outcome", (
                "pending", "positive", "negative", "neutral", "offer", "rejection", "next_round",
            )),
            name="ck_interviews_outcome",
        ),
    )
    op.create_index("ix_interviews_user_id", "interviews", ["user_id"])
    op.create_index("ix_interviews_scheduled", "interviews", ["scheduled_date"])

    # --- user_preferences ---
    op.create_table(
        "user_preferences",
        sa.Column(
            "user_id", sa.String(36),
            sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("active_tab", sa.String(20), nullable=False, server_default="list"),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("user_id"),
        sa.CheckConstraint(
            _in("active_tab", ("list", "board", "metrics", "contacts", "interviews")),
            name="ck_prefs_tab",
        ),
    )


def downgrade() -> None:
    op.drop_table("user_preferences")
    op.drop_index("ix_interviews_scheduled", "interviews")
    op.drop_index("ix_interviews_user_id", "interviews")
    op.drop_table("interviews")
    op.drop_table("contact_jobs")
    op.drop_index("ix_interactions_follow_up", "contact_interactions")
    op.drop_index("ix_interactions_contact_id", "contact_interactions")
    op.drop_table("contact_interactions")
    op.drop_index("ix_contacts_category", "contacts")
    op.drop_index("ix_contacts_company", "contacts")
    op.drop_index("ix_contacts_user_id", "contacts")
    op.drop_table("contacts")
    op.drop_index("ix_job_activities_date", "job_activities")
    op.drop_index("ix_job_activities_job_id", "job_activities")
    op.drop_table("job_activities")
    op.drop_index("ix_jobs_applied_date", "jobs")
    op.drop_index("ix_jobs_status", "jobs")
    op.drop_index("ix_jobs_user_id", "jobs")
    op.drop_table("jobs")
    op.drop_table("users")
