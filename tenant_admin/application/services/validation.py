"""Input checks shared by the domain services."""

from tenant_admin.domain.exceptions import ValidationException


def require_text(value: str | None, field: str, max_length: int = 255) -> str:
    """Return value stripped; raise ValidationException if blank or too long."""
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationException(f"{field} is required", field=field)
    if len(cleaned) > max_length:
        raise ValidationException(
            f"{field} must be at most {max_length} characters", field=field
        )
    return cleaned


def require_email(email: str | None, field: str = "email") -> str:
    """Return email stripped; raise ValidationException if blank, too long or without '@'."""
    email = require_text(email, field, max_length=320)
    if "@" not in email:
        raise ValidationException(f"{field} is not a valid address", field=field)
    return email
