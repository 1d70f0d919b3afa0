"""Document service: metadata, stored analyses and optimization history.

The file bytes live in external storage; a document row records where
(``file_path``) together with its size, type and category. Deleting a
document is soft: ``is_active`` is cleared and the row disappears from
every listing, while its analyses and optimizations stay in the database.

Usage:
    doc = create_document(session, user.id, DocumentCreate(...))
    save_analysis(session, user.id, doc.id, result)
"""
import logging
from typing import Any, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from careertrail.db.models import Document, DocumentAnalysis, DocumentOptimization
from careertrail.errors import NotFoundError
from careertrail.schemas import DocumentCreate, DocumentUpdate
from careertrail.services.folders import get_folder
from careertrail.services.jobs import get_job

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 10 * 1024 * 1024

ALLOWED_FILE_TYPES = (
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "text/plain",
    "image/jpeg",
    "image/png",
)


def format_file_size(size: int) -> str:
    """Human-readable size: ``0 Bytes``, ``1.5 KB``, ``2 MB``."""
    if size == 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    value = float(size)
    exponent = 0
    while value >= 1024 and exponent < len(units) - 1:
        value /= 1024
        exponent += 1
    return f"{round(value, 2):g} {units[exponent]}"


def _check_links(session: Session, user_id: str, job_id: Optional[str], folder_id: Optional[str]) -> None:
    if job_id is not None:
        get_job(session, user_id, job_id)
    if folder_id is not None:
        get_folder(session, user_id, folder_id)


# --- Documents ---


def list_documents(
    session: Session,
    user_id: str,
    job_id: Optional[str] = None,
    folder_id: Optional[str] = None,
    category: Optional[str] = None,
) -> list[Document]:
    """Active documents, newest first."""
    query = session.query(Document).filter(
        Document.user_id == user_id,
        Document.is_active.is_(True),
    )
    if job_id is not None:
        query = query.filter(Document.job_id == job_id)
    if folder_id is not None:
        query = query.filter(Document.folder_id == folder_id)
    if category is not None:
        query = query.filter(Document.category == category)
    return query.order_by(Document.created_at.desc(), Document.id).all()


def get_document(session: Session, user_id: str, document_id: str) -> Document:
    document = (
        session.query(Document)
        .filter(
            Document.id == document_id,
            Document.user_id == user_id,
            Document.is_active.is_(True),
        )
        .first()
    )
    if document is None:
        raise NotFoundError("Document", document_id)
    return document


def create_document(session: Session, user_id: str, data: DocumentCreate) -> Document:
    """Record an uploaded file.

    Raises:
        ValueError: file larger than 10 MB or of an unsupported type
        NotFoundError: job_id or folder_id not owned by the user
    """
    if data.file_size > MAX_FILE_SIZE:
        raise ValueError("File size must be less than 10MB")
    if data.file_type not in ALLOWED_FILE_TYPES:
        raise ValueError("File type not supported. Please upload PDF, Word, or image files.")
    _check_links(session, user_id, data.job_id, data.folder_id)

    document = Document(user_id=user_id, version=1, is_active=True, **data.model_dump())
    session.add(document)
    session.commit()
    session.refresh(document)
    logger.info(f"Added document {document.id}: {document.name} ({format_file_size(document.file_size)})")
    return document


def update_document(session: Session, user_id: str, document_id: str, data: DocumentUpdate) -> Document:
    document = get_document(session, user_id, document_id)
    changes = data.model_dump(exclude_unset=True)
    _check_links(session, user_id, changes.get("job_id"), changes.get("folder_id"))
    for field, value in changes.items():
        setattr(document, field, value)
    session.commit()
    session.refresh(document)
    return document


def delete_document(session: Session, user_id: str, document_id: str) -> Document:
    """Soft delete; returns the deactivated row so callers can drop the stored file."""
    document = get_document(session, user_id, document_id)
    document.is_active = False
    session.commit()
    logger.info(f"Deleted document {document_id} (stored at {document.file_path})")
    return document


# --- Analyses ---


def save_analysis(session: Session, user_id: str, document_id: str, result: dict[str, Any]) -> DocumentAnalysis:
    get_document(session, user_id, document_id)
    analysis = DocumentAnalysis(user_id=user_id, document_id=document_id, result=result)
    session.add(analysis)
    session.commit()
    session.refresh(analysis)
    return analysis


def get_last_analysis(session: Session, user_id: str, document_id: str) -> Optional[DocumentAnalysis]:
    """Most recent stored analysis, or None if the document was never analysed."""
    get_document(session, user_id, document_id)
    return (
        session.query(DocumentAnalysis)
        .filter(
            DocumentAnalysis.user_id == user_id,
            DocumentAnalysis.document_id == document_id,
        )
        .order_by(DocumentAnalysis.created_at.desc())
        .first()
    )


# --- Optimization history ---


def save_optimization(
    session: Session,
    user_id: str,
    document_id: str,
    job_description: str,
    result: dict[str, Any],
) -> DocumentOptimization:
    get_document(session, user_id, document_id)
    optimization = DocumentOptimization(
        user_id=user_id,
        document_id=document_id,
        job_description=job_description,
        optimization_result=result,
    )
    session.add(optimization)
    session.commit()
    session.refresh(optimization)
    logger.info(f"Saved optimization {optimization.id} for document {document_id}")
    return optimization


def list_optimizations(session: Session, user_id: str, document_id: str) -> list[DocumentOptimization]:
    """Optimization history of a document, newest first."""
    get_document(session, user_id, document_id)
    return (
        session.query(DocumentOptimization)
        .filter(
            DocumentOptimization.user_id == user_id,
            DocumentOptimization.document_id == document_id,
        )
        .order_by(DocumentOptimization.created_at.desc())
        .all()
    )


def get_latest_optimization(session: Session, user_id: str, document_id: str) -> Optional[DocumentOptimization]:
    history = list_optimizations(session, user_id, document_id)
    return history[0] if history else None


def delete_optimization(session: Session, user_id: str, optimization_id: str) -> None:
    optimization = (
        session.query(DocumentOptimization)
        .filter(
            DocumentOptimization.id == optimization_id,
            DocumentOptimization.user_id == user_id,
        )
        .first()
    )
    if optimization is None:
        raise NotFoundError("Optimization", optimization_id)
    session.delete(optimization)
    session.commit()


def count_optimizations(session: Session, user_id: str) -> int:
    return (
        session.query(func.count(DocumentOptimization.id))
        .filter(DocumentOptimization.user_id == user_id)
        .scalar()
    )
