"""Role ORM model."""

from sqlalchemy import Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from tenant_admin.infrastructure.persistence.database import Base
from tenant_admin.infrastructure.persistence.models.mixins import SoftDeleteEntity


class Role(SoftDeleteEntity, Base):
    """Role. Table: role. Name unique among active rows."""

    __tablename__ = "role"

    name: Mapped[str] = mapped_column(String(128), nullable=False)

    __table_args__ = (
        Index(
            "uq_role_name_active",
            "name",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )
