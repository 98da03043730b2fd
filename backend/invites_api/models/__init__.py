from invites_api.models.base import Base
from invites_api.models.entities import WorkspaceRecord
from invites_api.models.enums import ErrorKind, Role

__all__ = ["Base", "ErrorKind", "Role", "WorkspaceRecord"]
