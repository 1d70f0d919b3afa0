"""Folder service: nested document folders.

Deleting a folder never deletes its contents; documents and subfolders
move up to the root.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from careertrail.db.models import DEFAULT_FOLDER_COLOR, Document, Folder
from careertrail.errors import NotFoundError
from careertrail.schemas import FolderCreate, FolderNode, FolderUpdate

logger = logging.getLogger(__name__)


def list_folders(session: Session, user_id: str) -> list[Folder]:
    """The user's folders, newest first."""
    return (
        session.query(Folder)
        .filter(Folder.user_id == user_id)
        .order_by(Folder.created_at.desc(), Folder.id)
        .all()
    )


def get_folder(session: Session, user_id: str, folder_id: str) -> Folder:
    folder = (
        session.query(Folder)
        .filter(Folder.id == folder_id, Folder.user_id == user_id)
        .first()
    )
    if folder is None:
        raise NotFoundError("Folder", folder_id)
    return folder


def _check_parent(session: Session, user_id: str, folder_id: Optional[str], parent_id: Optional[str]) -> None:
    if parent_id is None:
        return
    get_folder(session, user_id, parent_id)
    if folder_id is None:
        return
    # Walk up from the new parent; meeting the folder itself would close a cycle
    folders = {f.id: f for f in list_folders(session, user_id)}
    current = parent_id
    while current is not None:
        if current == folder_id:
            raise ValueError("A folder cannot be moved inside itself")
        current = folders[current].parent_folder_id if current in folders else None


def create_folder(session: Session, user_id: str, data: FolderCreate) -> Folder:
    _check_parent(session, user_id, None, data.parent_folder_id)
    folder = Folder(
        user_id=user_id,
        name=data.name,
        description=data.description,
        color=data.color or DEFAULT_FOLDER_COLOR,
        parent_folder_id=data.parent_folder_id,
    )
    session.add(folder)
    session.commit()
    session.refresh(folder)
    logger.info(f"Created folder {folder.id}: {folder.name}")
    return folder


def update_folder(session: Session, user_id: str, folder_id: str, data: FolderUpdate) -> Folder:
    folder = get_folder(session, user_id, folder_id)
    changes = data.model_dump(exclude_unset=True)
    if "parent_folder_id" in changes:
        _check_parent(session, user_id, folder_id, changes["parent_folder_id"])
    if changes.get("color") is None:
        changes.pop("color", None)
    for field, value in changes.items():
        setattr(folder, field, value)
    session.commit()
    session.refresh(folder)
    return folder


def delete_folder(session: Session, user_id: str, folder_id: str) -> None:
    folder = get_folder(session, user_id, folder_id)
    documents = (
        session.query(Document)
        .filter(Document.folder_id == folder_id, Document.user_id == user_id)
        .all()
    )
    for document in documents:
        document.folder_id = None
    subfolders = (
        session.query(Folder)
        .filter(Folder.parent_folder_id == folder_id, Folder.user_id == user_id)
        .all()
    )
    for subfolder in subfolders:
        subfolder.parent_folder_id = None
    session.delete(folder)
    session.commit()
    logger.info(
        f"Deleted folder {folder_id}; moved {len(documents)} document(s) "
        f"and {len(subfolders)} subfolder(s) to the root"
    )


def build_hierarchy(folders: list) -> list[FolderNode]:
    """Nest folders under their parents.

    A folder whose parent is not in ``folders`` is dropped, matching a
    parent that belongs to another user or no longer exists.
    """
    nodes = {f.id: FolderNode.model_validate(f) for f in folders}
    roots = []
    for folder in folders:
        node = nodes[folder.id]
        if folder.parent_folder_id:
            parent = nodes.get(folder.parent_folder_id)
            if parent is not None:
                parent.children.append(node)
        else:
            roots.append(node)
    return roots


def get_folder_hierarchy(session: Session, user_id: str) -> list[FolderNode]:
    return build_hierarchy(list_folders(session, user_id))


def folder_path(folders: list, folder_id: str) -> list[str]:
    """Folder names from the root down to ``folder_id``."""
    by_id = {f.id: f for f in folders}
    path = []
    current = folder_id
    while current and current in by_id and len(path) < len(by_id):
        folder = by_id[current]
        path.insert(0, folder.name)
        current = folder.parent_folder_id
    return path
