"""
Documents API Endpoints

Document metadata, the last stored analysis and the optimization history.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from careertrail.auth import get_current_user
from careertrail.db.database import get_db
from careertrail.db.models import User
from careertrail.schemas import (
    DocumentAnalysisRead,
    DocumentCategory,
    DocumentCreate,
    DocumentOptimizationRead,
    DocumentRead,
    DocumentUpdate,
    OptimizationSave,
)
from careertrail.services import documents as document_service

router = APIRouter()


@router.get("", response_model=List[DocumentRead])
async def list_documents(
    job_id: Optional[str] = None,
    folder_id: Optional[str] = None,
    category: Optional[DocumentCategory] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return document_service.list_documents(
        db, current_user.id, job_id=job_id, folder_id=folder_id, category=category
    )


@router.post("", response_model=DocumentRead, status_code=status.HTTP_201_CREATED)
async def create_document(
    data: DocumentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Record a file already uploaded to storage"""
    return document_service.create_document(db, current_user.id, data)


# Fixed paths before /{document_id}


@router.get("/optimizations/count")
async def count_optimizations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"count": document_service.count_optimizations(db, current_user.id)}


@router.delete("/optimizations/{optimization_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_optimization(
    optimization_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    document_service.delete_optimization(db, current_user.id, optimization_id)


@router.get("/{document_id}", response_model=DocumentRead)
async def get_document(
    document_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return document_service.get_document(db, current_user.id, document_id)


@router.put("/{document_id}", response_model=DocumentRead)
async def update_document(
    document_id: str,
    data: DocumentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return document_service.update_document(db, current_user.id, document_id, data)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    document_service.delete_document(db, current_user.id, document_id)


@router.get("/{document_id}/analysis", response_model=Optional[DocumentAnalysisRead])
async def last_analysis(
    document_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Most recent stored analysis, or null"""
    return document_service.get_last_analysis(db, current_user.id, document_id)


@router.get("/{document_id}/optimizations", response_model=List[DocumentOptimizationRead])
async def list_optimizations(
    document_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return document_service.list_optimizations(db, current_user.id, document_id)


@router.post(
    "/{document_id}/optimizations",
    response_model=DocumentOptimizationRead,
    status_code=status.HTTP_201_CREATED,
)
async def save_optimization(
    document_id: str,
    data: OptimizationSave,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return document_service.save_optimization(
        db, current_user.id, document_id, data.job_description, data.optimization_result
    )


@router.get("/{document_id}/optimizations/latest", response_model=Optional[DocumentOptimizationRead])
async def latest_optimization(
    document_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return document_service.get_latest_optimization(db, current_user.id, document_id)
