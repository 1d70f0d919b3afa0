"""Pydantic request/response models for the CareerTrail API."""

from datetime import date, datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

JobStatus = Literal["applied", "interviewing", "offer", "rejected"]
ContactCategory = Literal[
    "recruiter", "hiring_manager", "colleague", "networking", "referral", "other"
]
ContactStatus = Literal["active", "inactive", "archived"]
ContactSource = Literal[
    "linkedin", "referral", "cold_outreach", "event", "mutual_connection", "other"
]
InteractionType = Literal[
    "email", "call", "meeting", "linkedin_message", "note", "coffee_chat", "referral_request"
]
Direction = Literal["inbound", "outbound"]
RelationshipType = Literal[
    "referrer", "interviewer", "hiring_manager", "colleague", "decision_maker", "other"
]
InterviewType = Literal[
    "phone", "video", "onsite", "technical", "behavioral", "final", "coffee_chat", "other"
]
InterviewStatus = Literal[
    "scheduled", "in_progress", "completed", "cancelled", "rescheduled", "no_show"
]
InterviewOutcome = Literal[
    "pending", "positive", "negative", "neutral", "offer", "rejection", "next_round"
]
RoundOutcome = Literal["pending", "positive", "negative", "neutral", "next_round", "rejection"]
QuestionCategory = Literal[
    "technical", "behavioral", "company", "role_specific", "general", "custom"
]
DocumentCategory = Literal["resume", "cover_letter", "portfolio", "certificate", "other"]
DashboardTab = Literal["list", "board", "metrics", "documents", "contacts", "interviews"]
EventType = Literal["insert", "update", "delete"]


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


# --- Jobs ---


class JobCreate(BaseModel):
    company: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1)
    status: JobStatus = "applied"
    applied_date: date = Field(default_factory=date.today)
    link: Optional[str] = None
    notes: Optional[str] = None


class JobUpdate(BaseModel):
    company: Optional[str] = Field(None, min_length=1)
    role: Optional[str] = Field(None, min_length=1)
    status: Optional[JobStatus] = None
    applied_date: Optional[date] = None
    link: Optional[str] = None
    notes: Optional[str] = None


class JobStatusUpdate(BaseModel):
    """PATCH /api/jobs/{id}/status request body."""
    status: JobStatus


class JobRead(BaseModel):
    id: str
    company: str
    role: str
    status: JobStatus
    applied_date: date
    link: Optional[str] = None
    notes: Optional[str] = None
    user_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class BoardColumns(BaseModel):
    """GET /api/jobs/board response: jobs partitioned by status."""
    applied: list[JobRead] = []
    interviewing: list[JobRead] = []
    offer: list[JobRead] = []
    rejected: list[JobRead] = []


class JobActivityRead(BaseModel):
    id: str
    job_id: str
    activity_type: str
    description: Optional[str] = None
    activity_date: datetime

    class Config:
        from_attributes = True


# --- Contacts ---


class ContactCreate(BaseModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    role: Optional[str] = None
    linkedin_url: Optional[str] = None
    category: ContactCategory = "networking"
    status: ContactStatus = "active"
    source: Optional[ContactSource] = None
    relationship_strength: Optional[int] = Field(None, ge=1, le=5)
    notes: Optional[str] = None
    tags: list[str] = []


class ContactUpdate(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    role: Optional[str] = None
    linkedin_url: Optional[str] = None
    category: Optional[ContactCategory] = None
    status: Optional[ContactStatus] = None
    source: Optional[ContactSource] = None
    relationship_strength: Optional[int] = Field(None, ge=1, le=5)
    notes: Optional[str] = None
    tags: Optional[list[str]] = None


class ContactRead(BaseModel):
    id: str
    user_id: str
    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    role: Optional[str] = None
    linkedin_url: Optional[str] = None
    category: ContactCategory
    status: ContactStatus
    source: Optional[ContactSource] = None
    relationship_strength: Optional[int] = None
    notes: Optional[str] = None
    tags: list[str] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class InteractionCreate(BaseModel):
    job_id: Optional[str] = None
    interaction_type: InteractionType
    subject: Optional[str] = None
    content: Optional[str] = None
    direction: Direction = "outbound"
    response_received: bool = False
    follow_up_date: Optional[date] = None

    @field_validator("job_id", "follow_up_date", mode="before")
    @classmethod
    def _blank_optional(cls, v):
        # Forms send "" for untouched optional fields
        return _blank_to_none(v)


class InteractionUpdate(BaseModel):
    job_id: Optional[str] = None
    interaction_type: Optional[InteractionType] = None
    subject: Optional[str] = None
    content: Optional[str] = None
    direction: Optional[Direction] = None
    response_received: Optional[bool] = None
    follow_up_date: Optional[date] = None

    @field_validator("job_id", "follow_up_date", mode="before")
    @classmethod
    def _blank_optional(cls, v):
        return _blank_to_none(v)


class InteractionRead(BaseModel):
    id: str
    contact_id: str
    user_id: str
    job_id: Optional[str] = None
    interaction_type: InteractionType
    subject: Optional[str] = None
    content: Optional[str] = None
    direction: Direction
    response_received: bool
    follow_up_date: Optional[date] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ContactJobCreate(BaseModel):
    relationship_type: RelationshipType = "other"
    notes: Optional[str] = None


class ContactJobRead(BaseModel):
    id: str
    contact_id: str
    job_id: str
    relationship_type: RelationshipType
    notes: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


# --- Interviews ---


class InterviewCreate(BaseModel):
    job_id: Optional[str] = None
    title: str = Field(..., min_length=1)
    interview_type: InterviewType
    status: InterviewStatus = "scheduled"
    scheduled_date: datetime
    duration_minutes: int = Field(60, gt=0)
    location: Optional[str] = None
    meeting_url: Optional[str] = None
    interviewer_name: Optional[str] = None
    interviewer_role: Optional[str] = None
    interviewer_email: Optional[str] = None
    notes: Optional[str] = None
    preparation_notes: Optional[str] = None
    feedback: Optional[str] = None
    outcome: Optional[InterviewOutcome] = None

    @field_validator("job_id", mode="before")
    @classmethod
    def _blank_optional(cls, v):
        return _blank_to_none(v)


class InterviewUpdate(BaseModel):
    job_id: Optional[str] = None
    title: Optional[str] = Field(None, min_length=1)
    interview_type: Optional[InterviewType] = None
    status: Optional[InterviewStatus] = None
    scheduled_date: Optional[datetime] = None
    duration_minutes: Optional[int] = Field(None, gt=0)
    location: Optional[str] = None
    meeting_url: Optional[str] = None
    interviewer_name: Optional[str] = None
    interviewer_role: Optional[str] = None
    interviewer_email: Optional[str] = None
    notes: Optional[str] = None
    preparation_notes: Optional[str] = None
    feedback: Optional[str] = None
    outcome: Optional[InterviewOutcome] = None


class InterviewRead(InterviewCreate):
    id: str
    user_id: str
    status: InterviewStatus
    duration_minutes: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class InterviewRoundCreate(BaseModel):
    round_number: int = Field(..., ge=1)
    round_type: InterviewType
    scheduled_date: datetime
    duration_minutes: int = Field(60, gt=0)
    status: InterviewStatus = "scheduled"
    interviewer_name: Optional[str] = None
    interviewer_role: Optional[str] = None
    interviewer_email: Optional[str] = None
    location: Optional[str] = None
    meeting_url: Optional[str] = None
    notes: Optional[str] = None
    feedback: Optional[str] = None
    outcome: Optional[RoundOutcome] = None


class InterviewRoundUpdate(BaseModel):
    round_number: Optional[int] = Field(None, ge=1)
    round_type: Optional[InterviewType] = None
    scheduled_date: Optional[datetime] = None
    duration_minutes: Optional[int] = Field(None, gt=0)
    status: Optional[InterviewStatus] = None
    interviewer_name: Optional[str] = None
    interviewer_role: Optional[str] = None
    interviewer_email: Optional[str] = None
    location: Optional[str] = None
    meeting_url: Optional[str] = None
    notes: Optional[str] = None
    feedback: Optional[str] = None
    outcome: Optional[RoundOutcome] = None


class InterviewRoundRead(InterviewRoundCreate):
    id: str
    interview_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class InterviewQuestionCreate(BaseModel):
    category: QuestionCategory
    question: str = Field(..., min_length=1)
    answer_template: Optional[str] = None
    tags: list[str] = []
    is_favorite: bool = False


class InterviewQuestionUpdate(BaseModel):
    category: Optional[QuestionCategory] = None
    question: Optional[str] = Field(None, min_length=1)
    answer_template: Optional[str] = None
    tags: Optional[list[str]] = None
    is_favorite: Optional[bool] = None


class InterviewQuestionRead(InterviewQuestionCreate):
    id: str
    user_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class QuestionResponseCreate(BaseModel):
    question_id: Optional[str] = None
    question_text: str = Field(..., min_length=1)
    response: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=5)
    notes: Optional[str] = None

    @field_validator("question_id", mode="before")
    @classmethod
    def _blank_optional(cls, v):
        return _blank_to_none(v)


class QuestionResponseUpdate(BaseModel):
    question_text: Optional[str] = Field(None, min_length=1)
    response: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=5)
    notes: Optional[str] = None


class QuestionResponseRead(QuestionResponseCreate):
    id: str
    interview_id: str
    created_at: datetime

    class Config:
        from_attributes = True


# --- Folders & documents ---


class FolderCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    color: Optional[str] = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")
    parent_folder_id: Optional[str] = None

    @field_validator("parent_folder_id", mode="before")
    @classmethod
    def _blank_optional(cls, v):
        return _blank_to_none(v)


class FolderUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    color: Optional[str] = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")
    parent_folder_id: Optional[str] = None

    @field_validator("parent_folder_id", mode="before")
    @classmethod
    def _blank_optional(cls, v):
        return _blank_to_none(v)


class FolderRead(BaseModel):
    id: str
    user_id: str
    name: str
    description: Optional[str] = None
    color: str
    parent_folder_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class FolderNode(FolderRead):
    """A folder with its nested subfolders (GET /api/folders/tree)."""
    children: list["FolderNode"] = []


class DocumentCreate(BaseModel):
    """Metadata of a file already placed in storage at ``file_path``."""
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    file_path: str = Field(..., min_length=1)
    file_size: int = Field(..., ge=0)
    file_type: str
    category: DocumentCategory = "other"
    job_id: Optional[str] = None
    folder_id: Optional[str] = None

    @field_validator("job_id", "folder_id", mode="before")
    @classmethod
    def _blank_optional(cls, v):
        return _blank_to_none(v)


class DocumentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    category: Optional[DocumentCategory] = None
    job_id: Optional[str] = None
    folder_id: Optional[str] = None

    @field_validator("job_id", "folder_id", mode="before")
    @classmethod
    def _blank_optional(cls, v):
        return _blank_to_none(v)


class DocumentRead(BaseModel):
    id: str
    user_id: str
    job_id: Optional[str] = None
    folder_id: Optional[str] = None
    name: str
    description: Optional[str] = None
    file_path: str
    file_size: int
    file_type: str
    category: DocumentCategory
    version: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class DocumentAnalysisRead(BaseModel):
    id: str
    document_id: str
    result: dict[str, Any]
    created_at: datetime

    class Config:
        from_attributes = True


class OptimizationSave(BaseModel):
    job_description: str = Field(..., min_length=1)
    optimization_result: dict[str, Any]


class DocumentOptimizationRead(BaseModel):
    id: str
    document_id: str
    job_description: str
    optimization_result: dict[str, Any]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# --- Profile ---


class NotificationPreferences(BaseModel):
    email_notifications: bool = True
    weekly_summary: bool = True
    job_alerts: bool = True


class ProfileUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    display_name: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    avatar_url: Optional[str] = None
    phone: Optional[str] = None
    timezone: Optional[str] = None
    preferences: Optional[NotificationPreferences] = None


class ProfileRead(ProfileUpdate):
    user_id: str
    preferences: NotificationPreferences
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# --- Metrics ---


class CompanyCount(BaseModel):
    company: str
    count: int


class JobMetrics(BaseModel):
    """GET /api/metrics response."""
    total_applications: int = 0
    applications_this_month: int = 0
    interview_rate: float = 0.0
    offer_rate: float = 0.0
    average_response_time: int = 0
    status_breakdown: dict[str, int] = Field(
        default_factory=lambda: {"applied": 0, "interviewing": 0, "offer": 0, "rejected": 0}
    )
    recent_activity: list[JobActivityRead] = []
    top_companies: list[CompanyCount] = []


# --- Preferences ---


class PreferenceRead(BaseModel):
    active_tab: DashboardTab = "list"

    class Config:
        from_attributes = True


class PreferenceUpdate(BaseModel):
    active_tab: DashboardTab


# --- Real-time ---


class ChangeEvent(BaseModel):
    """A row change delivered on the real-time channel."""
    table: str
    event_type: EventType
    record: dict[str, Any]
    user_id: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)


# --- LinkedIn ---


class LinkedInParseRequest(BaseModel):
    url: str
    fetch_details: bool = False


class LinkedInJobInfo(BaseModel):
    job_url: str
    job_id: str
    job_title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None


# --- AI ---


class DocumentAnalysisRequest(BaseModel):
    content: str = Field(..., min_length=1)
    document_type: Literal["resume", "cover_letter", "other"] = "other"
    filename: Optional[str] = None
    target_role: Optional[str] = None
    target_company: Optional[str] = None
    industry: Optional[str] = None
    # When set, the result is stored as the document's latest analysis
    document_id: Optional[str] = None


class OptimizationRequest(BaseModel):
    job_description: str = Field(..., min_length=1)
    current_content: str = Field(..., min_length=1)
    content_type: str
    target_role: Optional[str] = None
    target_company: Optional[str] = None
    # When set, the result is added to the document's optimization history
    document_id: Optional[str] = None
