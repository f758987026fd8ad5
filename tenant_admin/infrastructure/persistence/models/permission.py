"""Permission ORM model and the RBAC association tables (RolePermission, UserRole)."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from tenant_admin.infrastructure.persistence.database import Base
from tenant_admin.infrastructure.persistence.models.mixins import (
    SoftDeleteMixin,
    TimestampMixin,
)


class Permission(TimestampMixin, SoftDeleteMixin, Base):
    """Permission. Table: permission. Integer id; name (e.g. 'doc:write') unique among active rows."""

    __tablename__ = "permission"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)

    __table_args__ = (
        Index(
            "uq_permission_name_active",
            "name",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )


class RolePermission(Base):
    """Role-permission pair. Table: role_permission. The pair is the primary key."""

    __tablename__ = "role_permission"

    role_id: Mapped[str] = mapped_column(
        String, ForeignKey("role.id", ondelete="CASCADE"), primary_key=True
    )
    permission_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("permission.id", ondelete="CASCADE"), primary_key=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (Index("ix_role_permission_permission", "permission_id"),)


class UserRole(Base):
    """User-role pair. Table: user_role. The pair is the primary key."""

    __tablename__ = "user_role"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="CASCADE"), primary_key=True
    )
    role_id: Mapped[str] = mapped_column(
        String, ForeignKey("role.id", ondelete="CASCADE"), primary_key=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (Index("ix_user_role_role", "role_id"),)
