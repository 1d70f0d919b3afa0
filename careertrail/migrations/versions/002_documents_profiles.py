"""002_documents_profiles: interview prep, folders, documents, profiles.

Revision ID: 002_documents_profiles
Revises: 001_initial
Create Date: 2026-10-18
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = "002_documents_profiles"
down_revision = "001_initial"
branch_labels = None
depends_on = None

INTERVIEW_TYPES = (
    "phone", "video", "onsite", "technical", "behavioral", "final", "coffee_chat", "other",
)
INTERVIEW_STATUSES = (
    "scheduled", "in_progress", "completed", "cancelled", "rescheduled", "no_show",
)


def _in(column, values):
    quoted = ", ".join(f"'{v}'" for v in values)
    return f"{column} IN ({quoted})"


def _user_fk():
    return sa.Column(
        "user_id", sa.String(36),
        sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    # --- interview_rounds ---
    op.create_table(
        "interview_rounds",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column(
            "interview_id", sa.String(36),
            sa.ForeignKey("interviews.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("round_number", sa.Integer(), nullable=False),
        sa.Column("round_type", sa.String(20), nullable=False),
        sa.Column("scheduled_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("interviewer_name", sa.Text(), nullable=True),
        sa.Column("interviewer_role", sa.Text(), nullable=True),
        sa.Column("interviewer_email", sa.Text(), nullable=True),
        sa.Column("location", sa.Text(), nullable=True),
        sa.Column("meeting_url", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("feedback", sa.Text(), nullable=True),
        sa.Column("outcome", sa.String(20), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("interview_id", "round_number", name="uq_interview_rounds_number"),
        sa.CheckConstraint(_in("round_type", INTERVIEW_TYPES), name="ck_rounds_type"),
        sa.CheckConstraint(_in("status", INTERVIEW_STATUSES), name="ck_rounds_status"),
        sa.CheckConstraint(
            "outcome IS NULL OR " + _in("outcome", (
                "pending", "positive", "negative", "neutral", "next_round", "rejection",
            )),
            name="ck_rounds_outcome",
        ),
    )
    op.create_index("ix_interview_rounds_interview_id", "interview_rounds", ["interview_id"])

    # --- interview_questions ---
    op.create_table(
        "interview_questions",
        sa.Column("id", sa.String(36), nullable=False),
        _user_fk(),
        sa.Column("category", sa.String(20), nullable=False),
        sa.Column("question", sa.Text(), nullable=False),
        sa.Column("answer_template", sa.Text(), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("is_favorite", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            _in("category", (
                "technical", "behavioral", "company", "role_specific", "general", "custom",
            )),
            name="ck_questions_category",
        ),
    )
    op.create_index("ix_interview_questions_user_id", "interview_questions", ["user_id"])
    op.create_index("ix_interview_questions_category", "interview_questions", ["category"])

    # --- interview_question_responses ---
    op.create_table(
        "interview_question_responses",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column(
            "interview_id", sa.String(36),
            sa.ForeignKey("interviews.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "question_id", sa.String(36),
            sa.ForeignKey("interview_questions.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("question_text", sa.Text(), nullable=False),
        sa.Column("response", sa.Text(), nullable=True),
        sa.Column("rating", sa.Integer(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "rating IS NULL OR (rating >= 1 AND rating <= 5)", name="ck_responses_rating"
        ),
    )
    op.create_index(
        "ix_interview_responses_interview_id", "interview_question_responses", ["interview_id"]
    )

    # --- folders ---
    op.create_table(
        "folders",
        sa.Column("id", sa.String(36), nullable=False),
        _user_fk(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("color", sa.String(7), nullable=False, server_default="#3B82F6"),
        sa.Column(
            "parent_folder_id", sa.String(36),
            sa.ForeignKey("folders.id", ondelete="SET NULL"), nullable=True,
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_folders_user_id", "folders", ["user_id"])
    op.create_index("ix_folders_parent", "folders", ["parent_folder_id"])

    # --- documents ---
    op.create_table(
        "documents",
        sa.Column("id", sa.String(36), nullable=False),
        _user_fk(),
        sa.Column(
            "job_id", sa.String(36),
            sa.ForeignKey("jobs.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column(
            "folder_id", sa.String(36),
            sa.ForeignKey("folders.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("file_path", sa.Text(), nullable=False),
        sa.Column("file_size", sa.Integer(), nullable=False),
        sa.Column("file_type", sa.String(120), nullable=False),
        sa.Column("category", sa.String(20), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            _in("category", ("resume", "cover_letter", "portfolio", "certificate", "other")),
            name="ck_documents_category",
        ),
    )
    op.create_index("ix_documents_user_id", "documents", ["user_id"])
    op.create_index("ix_documents_job_id", "documents", ["job_id"])
    op.create_index("ix_documents_folder_id", "documents", ["folder_id"])

    # --- document_analyses ---
    op.create_table(
        "document_analyses",
        sa.Column("id", sa.String(36), nullable=False),
        _user_fk(),
        sa.Column(
            "document_id", sa.String(36),
            sa.ForeignKey("documents.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("result", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_document_analyses_document_id", "document_analyses", ["document_id"])

    # --- document_optimizations ---
    op.create_table(
        "document_optimizations",
        sa.Column("id", sa.String(36), nullable=False),
        _user_fk(),
        sa.Column(
            "document_id", sa.String(36),
            sa.ForeignKey("documents.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("job_description", sa.Text(), nullable=False),
        sa.Column("optimization_result", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_document_optimizations_document_id", "document_optimizations", ["document_id"]
    )
    op.create_index(
        "ix_document_optimizations_created_at", "document_optimizations", ["created_at"]
    )

    # --- user_profiles ---
    op.create_table(
        "user_profiles",
        sa.Column(
            "user_id", sa.String(36),
            sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("first_name", sa.Text(), nullable=True),
        sa.Column("last_name", sa.Text(), nullable=True),
        sa.Column("display_name", sa.Text(), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("location", sa.Text(), nullable=True),
        sa.Column("website", sa.Text(), nullable=True),
        sa.Column("linkedin", sa.Text(), nullable=True),
        sa.Column("github", sa.Text(), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("phone", sa.Text(), nullable=True),
        sa.Column("timezone", sa.String(64), nullable=True),
        sa.Column("preferences", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("user_id"),
    )

    # "documents" joins the dashboard tabs
    with op.batch_alter_table("user_preferences") as batch:
        batch.drop_constraint("ck_prefs_tab", type_="check")
        batch.create_check_constraint(
            "ck_prefs_tab",
            _in("active_tab", ("list", "board", "metrics", "documents", "contacts", "interviews")),
        )


def downgrade() -> None:
    with op.batch_alter_table("user_preferences") as batch:
        batch.drop_constraint("ck_prefs_tab", type_="check")
        batch.create_check_constraint(
            "ck_prefs_tab",
            _in("active_tab", ("list", "board", "metrics", "contacts", "interviews")),
        )
    op.drop_table("user_profiles")
    op.drop_index("ix_document_optimizations_created_at", "document_optimizations")
    op.drop_index("ix_document_optimizations_document_id", "document_optimizations")
    op.drop_table("document_optimizations")
    op.drop_index("ix_document_analyses_document_id", "document_analyses")
    op.drop_table("document_analyses")
    op.drop_index("ix_documents_folder_id", "documents")
    op.drop_index("ix_documents_job_id", "documents")
    op.drop_index("ix_documents_user_id", "documents")
    op.drop_table("documents")
    op.drop_index("ix_folders_parent", "folders")
    op.drop_index("ix_folders_user_id", "folders")
    op.drop_table("folders")
    op.drop_index("ix_interview_responses_interview_id", "interview_question_responses")
    op.drop_table("interview_question_responses")
    op.drop_index("ix_interview_questions_category", "interview_questions")
    op.drop_index("ix_interview_questions_user_id", "interview_questions")
    op.drop_table("interview_questions")
    op.drop_index("ix_interview_rounds_interview_id", "interview_rounds")
    op.drop_table("interview_rounds")
