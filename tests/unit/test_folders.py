"""Tests for document folders."""
from datetime import datetime, timezone

import pytest

from careertrail.db import Folder
from careertrail.errors import NotFoundError
from careertrail.schemas import DocumentCreate, FolderCreate, FolderUpdate
from careertrail.services import documents as document_service
from careertrail.services import folders as folder_service


def _folder(session, user, name, parent=None, **extra):
    return folder_service.create_folder(session, user.id, FolderCreate(
        name=name,
        parent_folder_id=parent.id if parent else None,
        **extra,
    ))


def test_default_color(session, user):
    assert _folder(session, user, "Resumes").color == "#3B82F6"
    assert _folder(session, user, "Letters", color="#10B981").color == "#10B981"


def test_hierarchy_nests_children(session, user, other_user):
    applications = _folder(session, user, "Applications")
    acme = _folder(session, user, "Acme", parent=applications)
    _folder(session, user, "Offers", parent=acme)
    _folder(session, user, "Misc")
    _folder(session, other_user, "Theirs")

    tree = {node.name: node for node in folder_service.get_folder_hierarchy(session, user.id)}
    assert set(tree) == {"Applications", "Misc"}
    (acme_node,) = tree["Applications"].children
    assert acme_node.name == "Acme"
    assert [c.name for c in acme_node.children] == ["Offers"]
    assert tree["Misc"].children == []


def test_orphans_are_dropped_from_hierarchy():
    stamp = datetime(2026, 1, 1, tzinfo=timezone.utc)
    folders = [
        Folder(id="a", user_id="u", name="Root", color="#3B82F6", created_at=stamp, updated_at=stamp),
        Folder(id="b", user_id="u", name="Lost", color="#3B82F6", parent_folder_id="gone",
               created_at=stamp, updated_at=stamp),
    ]
    assert [n.name for n in folder_service.build_hierarchy(folders)] == ["Root"]


def test_path_from_root(session, user):
    top = _folder(session, user, "Applications")
    mid = _folder(session, user, "Acme", parent=top)
    leaf = _folder(session, user, "Offers", parent=mid)

    folders = folder_service.list_folders(session, user.id)
    assert folder_service.folder_path(folders, leaf.id) == ["Applications", "Acme", "Offers"]
    assert folder_service.folder_path(folders, "missing") == []


def test_cannot_move_into_own_subtree(session, user):
    top = _folder(session, user, "Applications")
    child = _folder(session, user, "Acme", parent=top)

    with pytest.raises(ValueError, match="inside itself"):
        folder_service.update_folder(session, user.id, top.id, FolderUpdate(parent_folder_id=child.id))
    with pytest.raises(ValueError, match="inside itself"):
        folder_service.update_folder(session, user.id, top.id, FolderUpdate(parent_folder_id=top.id))

    moved = folder_service.update_folder(session, user.id, child.id, FolderUpdate(parent_folder_id=None))
    assert moved.parent_folder_id is None


def test_foreign_parent_is_rejected(session, user, other_user):
    theirs = _folder(session, other_user, "Theirs")
    with pytest.raises(NotFoundError):
        _folder(session, user, "Mine", parent=theirs)


def test_delete_moves_contents_to_root(session, user):
    top = _folder(session, user, "Applications")
    child = _folder(session, user, "Acme", parent=top)
    document = document_service.create_document(session, user.id, DocumentCreate(
        name="cv.pdf", file_path="u/cv.pdf", file_size=1024, file_type="application/pdf", folder_id=top.id,
    ))

    folder_service.delete_folder(session, user.id, top.id)

    with pytest.raises(NotFoundError):
        folder_service.get_folder(session, user.id, top.id)
    assert folder_service.get_folder(session, user.id, child.id).parent_folder_id is None
    assert document_service.get_document(session, user.id, document.id).folder_id is None
