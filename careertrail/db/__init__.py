from .models import (
    Base,
    User,
    UserProfile,
    Job,
    JobActivity,
    Contact,
    ContactInteraction,
    ContactJob,
    Interview,
    InterviewRound,
    InterviewQuestion,
    InterviewQuestionResponse,
    Folder,
    Document,
    DocumentAnalysis,
    DocumentOptimization,
    UserPreference,
    JOB_STATUSES,
)
from .database import (
    get_engine,
    get_session,
    get_session_factory,
    init_db,
    configure,
    current_engine,
    get_db,
)

__all__ = [
    "Base",
    "User",
    "UserProfile",
    "Job",
    "JobActivity",
    "Contact",
    "ContactInteraction",
    "ContactJob",
    "Interview",
    "InterviewRound",
    "InterviewQuestion",
    "InterviewQuestionResponse",
    "Folder",
    "Document",
    "DocumentAnalysis",
    "DocumentOptimization",
    "UserPreference",
    "JOB_STATUSES",
    "get_engine",
    "get_session",
    "get_session_factory",
    "init_db",
    "configure",
    "current_engine",
    "get_db",
]
