from __future__ import annotations

import copy
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from invites_api.models import WorkspaceRecord

# Document field name -> WorkspaceRecord column.
DOCUMENT_COLUMNS = {
    "ownerId": "owner_id",
    "members": "members",
    "memberNames": "member_names",
    "inviteEnabled": "invite_enabled",
    "inviteRole": "invite_role",
    "updatedAt": "updated_at",
}


class WorkspaceStoreError(Exception):
    pass


class WorkspaceStore(Protocol):
    def get(self, workspace_id: str) -> dict[str, Any] | None: ...

    def update(self, workspace_id: str, fields: Mapping[str, Any]) -> None: ...

    def now(self) -> datetime: ...


def record_to_document(record: WorkspaceRecord) -> dict[str, Any]:
    return {
        field: copy.deepcopy(getattr(record, column))
        for field, column in DOCUMENT_COLUMNS.items()
    }


def _columns_for(fields: Mapping[str, Any]) -> dict[str, Any]:
    unknown = sorted(set(fields) - set(DOCUMENT_COLUMNS))
    if unknown:
        raise WorkspaceStoreError(f"Unknown workspace fields: {', '.join(unknown)}")
    return {DOCUMENT_COLUMNS[field]: value for field, value in fields.items()}


class SqlWorkspaceStore:
    """Workspace documents kept in the ``workspaces`` table.

    ``update`` issues a single UPDATE naming only the given columns, so fields
    the caller did not pass (e.g. an owner's concurrent ``invite_enabled``
    change) are left as they are.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, workspace_id: str) -> dict[str, Any] | None:
        try:
            record = self.db.get(WorkspaceRecord, workspace_id)
        except SQLAlchemyError as exc:
            raise WorkspaceStoreError(f"Failed to load workspace {workspace_id}") from exc
        if record is None:
            return None
        return record_to_document(record)

    def update(self, workspace_id: str, fields: Mapping[str, Any]) -> None:
        values = _columns_for(fields)
        try:
            matched = (
                self.db.query(WorkspaceRecord)
                .filter(WorkspaceRecord.id == workspace_id)
                .update(values, synchronize_session="fetch")
            )
            if not matched:
                self.db.rollback()
                raise WorkspaceStoreError(f"Workspace {workspace_id} does not exist")
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise WorkspaceStoreError(f"Failed to update workspace {workspace_id}") from exc

    def now(self) -> datetime:
        return datetime.now(UTC)


class InMemoryWorkspaceStore:
    def __init__(self, documents: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self.documents: dict[str, dict[str, Any]] = {
            key: copy.deepcopy(dict(value)) for key, value in (documents or {}).items()
        }
        self.updates: list[tuple[str, dict[str, Any]]] = []

    def get(self, workspace_id: str) -> dict[str, Any] | None:
        document = self.documents.get(workspace_id)
        if document is None:
            return None
        return copy.deepcopy(document)

    def update(self, workspace_id: str, fields: Mapping[str, Any]) -> None:
        _columns_for(fields)
        if workspace_id not in self.documents:
            raise WorkspaceStoreError(f"Workspace {workspace_id} does not exist")
        fields = copy.deepcopy(dict(fields))
        self.documents[workspace_id].update(fields)
        self.updates.append((workspace_id, fields))

    def now(self) -> datetime:
        return datetime.now(UTC)
