"""SQLAlchemy models."""

from rencontre_repas.models.user import UserAccount

__all__ = ["UserAccount"]
