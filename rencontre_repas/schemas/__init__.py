"""Pydantic schemas for API requests."""

from rencontre_repas.schemas.signup import SignupRequest

__all__ = ["SignupRequest"]
