"""
AI Document Endpoints
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from careertrail.auth import get_current_user
from careertrail.db.database import get_db
from careertrail.db.models import User
from careertrail.schemas import DocumentAnalysisRequest, OptimizationRequest
from careertrail.services import ai_analysis
from careertrail.services import documents as document_service

router = APIRouter()


@router.post("/analyze-document")
async def analyze_document(
    request: DocumentAnalysisRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> dict[str, Any]:
    """Score a resume or cover letter; stored when document_id is given"""
    if request.document_id:
        document_service.get_document(db, current_user.id, request.document_id)
    analysis = await ai_analysis.analyze_document(request)
    if request.document_id:
        document_service.save_analysis(db, current_user.id, request.document_id, analysis)
    return analysis


@router.post("/optimize-application")
async def optimize_application(
    request: OptimizationRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> dict[str, Any]:
    """Tailor a resume or cover letter to a job description"""
    if request.content_type not in ai_analysis.OPTIMIZABLE_TYPES:
        raise HTTPException(
            status_code=400,
            detail='content_type must be either "resume" or "cover_letter"',
        )
    if request.document_id:
        document_service.get_document(db, current_user.id, request.document_id)
    result = await ai_analysis.optimize_application(request)
    if request.document_id:
        document_service.save_optimization(
            db, current_user.id, request.document_id, request.job_description, result
        )
    return result
