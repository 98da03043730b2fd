from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from invites_api.core.auth import CallerIdentity
from invites_api.core.errors import (
    CallableError,
    FailedPreconditionError,
    InternalError,
    InvalidArgumentError,
    NotFoundError,
    UnauthenticatedError,
)
from invites_api.models.enums import Role
from invites_api.schemas.invites import AcceptInviteRequest, AcceptInviteResponse
from invites_api.services.workspace_store import WorkspaceStore, WorkspaceStoreError

log = logging.getLogger(__name__)

DEFAULT_INVITE_ROLE = Role.VIEWER
FALLBACK_DISPLAY_NAME = "Member"


def resolve_invite_role(value: Any) -> Role:
    if not value:
        return DEFAULT_INVITE_ROLE
    if not isinstance(value, str):
        raise InternalError("Invalid invite role.")
    try:
        return Role(value)
    except ValueError:
        raise InternalError("Invalid invite role.") from None


def resolve_display_name(caller: CallerIdentity) -> str:
    if caller.name:
        return caller.name
    if caller.email:
        local_part = caller.email.split("@")[0]
        if local_part:
            return local_part
    return FALLBACK_DISPLAY_NAME


class InviteAcceptanceHandler:
    """Adds the caller to a workspace using the workspace id as invite code.

    Every check runs against one snapshot and nothing is written until they
    all pass. The read-then-update is not transactional: two callers joining
    at once both write, and the later map write wins.
    """

    def __init__(self, store: WorkspaceStore) -> None:
        self.store = store

    def accept_invite(self, caller: CallerIdentity | None, data: Any) -> AcceptInviteResponse:
        try:
            return self._accept(caller, data)
        except CallableError as exc:
            log.info("acceptInvite rejected: %s (%s)", exc.kind.value, exc.message)
            raise

    def _accept(self, caller: CallerIdentity | None, data: Any) -> AcceptInviteResponse:
        if caller is None:
            raise UnauthenticatedError("Sign in to join a workspace.")

        try:
            request = AcceptInviteRequest.model_validate(data)
        except ValidationError:
            raise InvalidArgumentError("Invite code is required.") from None
        workspace_id = request.workspace_id

        workspace = self._load(workspace_id)
        if workspace is None:
            raise NotFoundError("Workspace not found. Check the invite code.")

        uid = caller.uid
        if workspace.get("ownerId") == uid:
            raise InvalidArgumentError("You already own this workspace.")

        members = dict(workspace.get("members") or {})
        if uid in members:
            raise FailedPreconditionError("You are already a member of this workspace.")

        if not workspace.get("inviteEnabled"):
            raise FailedPreconditionError("This workspace is not accepting invites right now.")

        role = resolve_invite_role(workspace.get("inviteRole"))
        display_name = resolve_display_name(caller)

        member_names = dict(workspace.get("memberNames") or {})
        members[uid] = role.value
        member_names[uid] = display_name

        try:
            self.store.update(
                workspace_id,
                {
                    "members": members,
                    "memberNames": member_names,
                    "updatedAt": self.store.now(),
                },
            )
        except WorkspaceStoreError as exc:
            log.exception("Failed to persist membership for %s in %s", uid, workspace_id)
            raise InternalError("Could not join the workspace. Try again.") from exc

        log.info("User %s joined workspace %s as %s", uid, workspace_id, role.value)
        return AcceptInviteResponse(success=True, message="You have joined the workspace.")

    def _load(self, workspace_id: str) -> dict[str, Any] | None:
        try:
            return self.store.get(workspace_id)
        except WorkspaceStoreError as exc:
            log.exception("Failed to load workspace %s", workspace_id)
            raise InternalError("Could not join the workspace. Try again.") from exc
