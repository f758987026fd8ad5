"""User ORM model. Local record for an identity held by the external provider."""

from sqlalchemy import Boolean, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from tenant_admin.infrastructure.persistence.database import Base
from tenant_admin.infrastructure.persistence.models.mixins import SoftDeleteEntity


class User(SoftDeleteEntity, Base):
    """User. Table: app_user.

    external_subject_id is the provider's stable subject (Cognito 'sub').
    It and username are unique among active rows. No password is stored.
    """

    __tablename__ = "app_user"

    external_subject_id: Mapped[str] = mapped_column(String(255), nullable=False)
    username: Mapped[str] = mapped_column(String(128), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )

    __table_args__ = (
        Index(
            "uq_app_user_subject_active",
            "external_subject_id",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
        Index(
            "uq_app_user_username_active",
            "username",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )
