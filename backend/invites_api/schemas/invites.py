from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AcceptInviteRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, strict=True)

    workspace_id: str = Field(alias="workspaceId", min_length=1)


class AcceptInviteResponse(BaseModel):
    success: bool = True
    message: str


class CallableResponse(BaseModel):
    result: dict[str, Any]
