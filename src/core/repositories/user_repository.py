"""Abstract contract for user record persistence."""

from abc import ABC, abstractmethod

from core.models.user import User


class UserRepository(ABC):
    """Contract for storing and retrieving `User` records.

    Implementations must enforce uniqueness of `oauth_key` and
    `display_name` atomically with the write.
    """

    @abstractmethod
    def find_by_id(self, user_id: str) -> User | None:
        """Return the user with `user_id`, or None."""

    @abstractmethod
    def find_by_oauth_key(self, oauth_key: str) -> User | None:
        """Return the user linked to `oauth_key`, or None.

        Must observe every previously committed create.
        """

    @abstractmethod
    def find_all_by_ids(self, user_ids: set[str]) -> dict[str, User]:
        """Return the existing users among `user_ids`, keyed by id."""

    @abstractmethod
    def find_all(self) -> list[User]:
        """Return all users in no particular order."""

    @abstractmethod
    def create(self, user: User) -> User:
        """Persist a new user, assigning id and timestamps.

        Raises:
            DuplicateUserError: If `oauth_key` or `display_name` is taken
            MetadataOperationFailedError: If the write fails
        """

    @abstractmethod
    def save(self, user: User) -> User:
        """Update an existing user (currently only `display_name` changes).

        Raises:
            DuplicateUserError: If the new `display_name` is taken
            MetadataOperationFailedError: If the write fails
        """
