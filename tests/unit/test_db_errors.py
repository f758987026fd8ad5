"""translate_db_error classification by SQLSTATE and by driver message."""

import pytest
from sqlalchemy.exc import DataError, IntegrityError, OperationalError

from tenant_admin.domain.exceptions import (
    ConflictException,
    InternalException,
    ValidationException,
)
from tenant_admin.infrastructure.persistence.errors import translate_db_error


class _DriverError(Exception):
    def __init__(self, message: str, sqlstate: str | None = None) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


def _integrity(message: str, sqlstate: str | None = None) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, _DriverError(message, sqlstate))


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (_integrity("duplicate key value", "23505"), ConflictException),
        (_integrity("violates foreign key constraint", "23503"), ValidationException),
        (_integrity("null value in column", "23502"), ValidationException),
        (_integrity("new row violates check constraint", "23514"), ValidationException),
        (_integrity("UNIQUE constraint failed: role.name"), ConflictException),
        (_integrity("FOREIGN KEY constraint failed"), ValidationException),
        (_integrity("NOT NULL constraint failed: app_user.email"), ValidationException),
        (_integrity("CHECK constraint failed: positive"), ValidationException),
    ],
)
def test_integrity_errors_are_classified(exc: IntegrityError, expected: type) -> None:
    assert isinstance(translate_db_error(exc, "Role", "create"), expected)


def test_data_error_is_validation() -> None:
    exc = DataError("INSERT ...", {}, _DriverError("value too long"))
    assert isinstance(translate_db_error(exc, "Role", "create"), ValidationException)


def test_other_errors_are_internal_without_backend_text() -> None:
    exc = OperationalError("SELECT ...", {}, _DriverError("connection refused to 10.0.0.5"))
    translated = translate_db_error(exc, "Role", "find_all")
    assert isinstance(translated, InternalException)
    assert "10.0.0.5" not in translated.message
