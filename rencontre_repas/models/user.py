"""User account model."""

from sqlalchemy import Column, DateTime, Integer, String, func

from rencontre_repas.database import Base


class UserAccount(Base):
    """A registered user's profile.

    ``email`` carries a unique index: the database, not the application,
    guarantees that two concurrent signups cannot both store the same address.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    food_pref = Column(String(255), nullable=False)
    hobby = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<UserAccount id={self.id} email={self.email!r}>"
