from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from invites_api.core.auth import CallerIdentity, get_caller
from invites_api.db.session import get_db
from invites_api.schemas.invites import CallableResponse
from invites_api.services.invite_service import InviteAcceptanceHandler
from invites_api.services.workspace_store import SqlWorkspaceStore

router = APIRouter(prefix="")


def get_invite_handler(db: Session = Depends(get_db)) -> InviteAcceptanceHandler:
    return InviteAcceptanceHandler(SqlWorkspaceStore(db))


@router.post("/acceptInvite", response_model=CallableResponse)
def accept_invite(
    payload: Any = Body(default=None),
    caller: CallerIdentity | None = Depends(get_caller),
    handler: InviteAcceptanceHandler = Depends(get_invite_handler),
) -> CallableResponse:
    data = payload.get("data") if isinstance(payload, dict) else None
    result = handler.accept_invite(caller, data)
    return CallableResponse(result=result.model_dump())
