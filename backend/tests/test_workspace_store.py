from datetime import UTC, datetime

import pytest

from invites_api.models import WorkspaceRecord
from invites_api.services.workspace_store import SqlWorkspaceStore, WorkspaceStoreError


def test_get_returns_document_fields(db_session, make_workspace):
    make_workspace(members={"u3": "viewer"}, member_names={"u3": "Carol"})

    document = SqlWorkspaceStore(db_session).get("ws-1")

    assert document == {
        "ownerId": "u1",
        "members": {"u3": "viewer"},
        "memberNames": {"u3": "Carol"},
        "inviteEnabled": True,
        "inviteRole": "editor",
        "updatedAt": None,
    }


def test_get_missing_workspace(db_session):
    assert SqlWorkspaceStore(db_session).get("missing") is None


def test_get_returns_detached_snapshot(db_session, make_workspace):
    make_workspace()
    store = SqlWorkspaceStore(db_session)

    document = store.get("ws-1")
    document["members"]["u9"] = "editor"

    assert store.get("ws-1")["members"] == {}


def test_update_merges_named_fields_only(db_session, make_workspace):
    make_workspace(invite_enabled=True, invite_role="editor")
    store = SqlWorkspaceStore(db_session)
    snapshot = store.get("ws-1")

    # Owner edits the invite policy after the snapshot was taken.
    db_session.query(WorkspaceRecord).filter(WorkspaceRecord.id == "ws-1").update(
        {"invite_enabled": False, "invite_role": "viewer"}
    )
    db_session.commit()

    members = dict(snapshot["members"], u2="editor")
    store.update("ws-1", {"members": members, "memberNames": {"u2": "Alice"}, "updatedAt": store.now()})

    db_session.expire_all()
    record = db_session.get(WorkspaceRecord, "ws-1")
    assert record.members == {"u2": "editor"}
    assert record.member_names == {"u2": "Alice"}
    assert record.invite_enabled is False
    assert record.invite_role == "viewer"
    assert record.updated_at is not None


def test_update_rejects_unknown_fields(db_session, make_workspace):
    make_workspace()

    with pytest.raises(WorkspaceStoreError):
        SqlWorkspaceStore(db_session).update("ws-1", {"name": "Renamed"})


def test_update_missing_workspace(db_session):
    with pytest.raises(WorkspaceStoreError):
        SqlWorkspaceStore(db_session).update("missing", {"members": {}})


def test_now_is_timezone_aware(db_session):
    now = SqlWorkspaceStore(db_session).now()

    assert now.tzinfo is not None
    assert abs((datetime.now(UTC) - now).total_seconds()) < 5
