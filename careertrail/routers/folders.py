"""
Folders API Endpoints
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from careertrail.auth import get_current_user
from careertrail.db.database import get_db
from careertrail.db.models import User
from careertrail.schemas import FolderCreate, FolderNode, FolderRead, FolderUpdate
from careertrail.services import folders as folder_service

router = APIRouter()


@router.get("", response_model=List[FolderRead])
async def list_folders(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return folder_service.list_folders(db, current_user.id)


@router.post("", response_model=FolderRead, status_code=status.HTTP_201_CREATED)
async def create_folder(
    data: FolderCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return folder_service.create_folder(db, current_user.id, data)


@router.get("/tree", response_model=List[FolderNode])
async def folder_tree(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Root folders with their subfolders nested under ``children``"""
    return folder_service.get_folder_hierarchy(db, current_user.id)


@router.get("/{folder_id}", response_model=FolderRead)
async def get_folder(
    folder_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return folder_service.get_folder(db, current_user.id, folder_id)


@router.get("/{folder_id}/path", response_model=List[str])
async def folder_path(
    folder_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Folder names from the root down to this folder"""
    folder_service.get_folder(db, current_user.id, folder_id)
    return folder_service.folder_path(folder_service.list_folders(db, current_user.id), folder_id)


@router.put("/{folder_id}", response_model=FolderRead)
async def update_folder(
    folder_id: str,
    data: FolderUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return folder_service.update_folder(db, current_user.id, folder_id, data)


@router.delete("/{folder_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_folder(
    folder_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete a folder; its documents and subfolders move to the root"""
    folder_service.delete_folder(db, current_user.id, folder_id)
