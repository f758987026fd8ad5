"""Tenant ORM model. Root of the multi-tenant hierarchy."""

from sqlalchemy import Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from tenant_admin.infrastructure.persistence.database import Base
from tenant_admin.infrastructure.persistence.models.mixins import SoftDeleteEntity


class Tenant(SoftDeleteEntity, Base):
    """Tenant. Table: tenant. Name unique among active (not soft-deleted) rows."""

    __tablename__ = "tenant"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index(
            "uq_tenant_name_active",
            "name",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )
