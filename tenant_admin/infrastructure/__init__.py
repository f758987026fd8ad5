"""Infrastructure: persistence (SQLAlchemy) and identity provider adapters."""
