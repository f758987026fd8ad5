"""String primary keys: CUID2 ids for every entity except Permission."""

from cuid2 import cuid_wrapper

_next_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new CUID2 (lowercase alphanumeric, collision resistant)."""
    return str(_next_cuid())
