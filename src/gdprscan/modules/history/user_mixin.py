"""User record helpers for HistoryManager."""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from gdprscan.db.models import User
from gdprscan.errors import StorageError


class UserMixin:
    """Provide user lookup and creation."""

    def create_user(self, email: str, tier: str = "free") -> User:
        """Create a new user record."""
        user = User(email=email, tier=tier)
        self.session.add(user)
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StorageError(f"Failed to create user {email}: {exc}") from exc
        return user

    def get_user(self, user_id: int) -> User | None:
        """Get a user by id."""
        return self.session.get(User, user_id)

    def get_user_by_email(self, email: str) -> User | None:
        """Get a user by email."""
        return self.session.query(User).filter_by(email=email).first()

    def get_or_create_user(self, email: str) -> User:
        """Return the user for ``email``, creating it on first use."""
        return self.get_user_by_email(email) or self.create_user(email)
