"""UserTenant ORM model: membership of a user in a tenant."""

from sqlalchemy import Boolean, ForeignKey, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from tenant_admin.infrastructure.persistence.database import Base
from tenant_admin.infrastructure.persistence.models.mixins import Entity


class UserTenant(Entity, Base):
    """Membership. Table: user_tenant. No soft delete: leaving a tenant removes the row."""

    __tablename__ = "user_tenant"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    tenant_id: Mapped[str] = mapped_column(
        String, ForeignKey("tenant.id", ondelete="CASCADE"), nullable=False, index=True
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )

    __table_args__ = (UniqueConstraint("user_id", "tenant_id", name="uq_user_tenant"),)
