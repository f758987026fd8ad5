"""Translate SQLAlchemy errors into domain exceptions.

Repositories call translate_db_error at their boundary so callers never see
a raw backend exception.
"""

from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError

from tenant_admin.domain.exceptions import (
    AdminException,
    ConflictException,
    InternalException,
    ValidationException,
)

# Postgres SQLSTATE codes (class 23, integrity constraint violation)
_UNIQUE_VIOLATION = "23505"
_FOREIGN_KEY_VIOLATION = "23503"
_NOT_NULL_VIOLATION = "23502"
_CHECK_VIOLATION = "23514"

# Message fragments for drivers that do not expose a SQLSTATE (sqlite)
_UNIQUE_MARKERS = ("unique constraint", "duplicate key")
_FOREIGN_KEY_MARKERS = ("foreign key",)
_NOT_NULL_MARKERS = ("not null constraint", "not-null constraint")
_CHECK_MARKERS = ("check constraint",)


def _sqlstate(exc: IntegrityError) -> str | None:
    orig = exc.orig
    if orig is None:
        return None
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    return str(code) if code else None


def _classify_integrity_error(exc: IntegrityError) -> str:
    """Return 'unique', 'foreign_key', 'not_null', 'check' or 'other'."""
    by_code = {
        _UNIQUE_VIOLATION: "unique",
        _FOREIGN_KEY_VIOLATION: "foreign_key",
        _NOT_NULL_VIOLATION: "not_null",
        _CHECK_VIOLATION: "check",
    }
    code = _sqlstate(exc)
    if code in by_code:
        return by_code[code]
    text = str(exc.orig if exc.orig is not None else exc).lower()
    for kind, markers in (
        ("foreign_key", _FOREIGN_KEY_MARKERS),
        ("not_null", _NOT_NULL_MARKERS),
        ("check", _CHECK_MARKERS),
        ("unique", _UNIQUE_MARKERS),
    ):
        if any(marker in text for marker in markers):
            return kind
    return "other"


def translate_db_error(
    exc: SQLAlchemyError, resource_type: str, operation: str
) -> AdminException:
    """Map a SQLAlchemy exception to Conflict/Validation/Internal.

    - IntegrityError on a unique index (or unclassified): ConflictException.
    - IntegrityError on a foreign key: ValidationException (referenced row missing).
    - IntegrityError on NOT NULL or CHECK: ValidationException.
    - DataError (bad type, value too long): ValidationException.
    - Anything else: InternalException with a generic message.
    """
    if isinstance(exc, IntegrityError):
        kind = _classify_integrity_error(exc)
        if kind == "foreign_key":
            return ValidationException(
                f"{resource_type} references a record that does not exist"
            )
        if kind in ("not_null", "check"):
            return ValidationException(
                f"Invalid data for {resource_type}: a required value is missing "
                "or out of range"
            )
        return ConflictException(
            f"{resource_type} conflicts with an existing record",
            resource_type=resource_type,
        )
    if isinstance(exc, DataError):
        return ValidationException(f"Invalid data for {resource_type}")
    return InternalException(operation=f"{resource_type}.{operation}")
