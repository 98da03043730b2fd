from sqlalchemy import JSON, Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from invites_api.models.base import Base, TimestampMixin


class WorkspaceRecord(TimestampMixin, Base):
    """A workspace document. The primary key doubles as the invite code."""

    __tablename__ = "workspaces"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    owner_id: Mapped[str] = mapped_column(String(255), nullable=False)
    members: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    member_names: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    invite_enabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    # Free text: a misconfigured role must still load so it can be reported.
    invite_role: Mapped[str | None] = mapped_column(String(32), nullable=True)
