"""Signup schemas."""

from pydantic import BaseModel, ConfigDict, Field

SIGNUP_FIELDS = ("name", "email", "password", "food_pref", "hobby")


class SignupRequest(BaseModel):
    """Registration submission.

    Every field is optional at the schema level so that an incomplete form
    reaches the signup service, which answers with the "all fields required"
    message instead of a schema error.
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(None)
    email: str | None = Field(None)
    password: str | None = Field(None)
    food_pref: str | None = Field(None)
    hobby: str | None = Field(None)

    def missing_fields(self) -> list[str]:
        """Names of fields that are absent or empty."""
        return [field for field in SIGNUP_FIELDS if not getattr(self, field)]
