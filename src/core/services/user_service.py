"""Business logic for the user directory.

Users are created on first sight of an external identity and looked up
by id or by that identity thereafter.
"""

import time

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_users import DynamoDBUsers
from core.models.errors import DuplicateUserError, MetadataOperationFailedError
from core.models.user import User
from core.repositories.user_repository import UserRepository
from core.utils.constants import (
    MAX_DISPLAY_NAME_ATTEMPTS,
    MAX_IDENTITY_CONFLICT_RETRIES,
    OAUTH_REREAD_ATTEMPTS,
    OAUTH_REREAD_DELAY_SECONDS,
)

logger = Logger(UTC=True)


class UserService:
    """Application service responsible for `User` records.

    This service orchestrates:
    - Resolution of identity-provider keys to local users
    - Self-only access checks
    - Ordered listing and persistence of users
    """

    def __init__(self, users: UserRepository | None = None) -> None:
        self.users = users or DynamoDBUsers()

    def get_or_create(self, oauth_key: str, display_name: str) -> User:
        """Return the user linked to `oauth_key`, creating one if none exists.

        Concurrent first logins with the same key race on the repository's
        uniqueness constraint; the loser re-reads and returns the winner's
        record, retrying the create if the winner never becomes visible. If
        the hinted `display_name` belongs to someone else, a numeric suffix
        is appended until a free name is found.

        Raises:
            MetadataOperationFailedError: If persistence fails, an identity
                conflict cannot be resolved or no free display name is found
        """
        existing = self.users.find_by_oauth_key(oauth_key)
        if existing is not None:
            return existing

        attempt = 1
        conflicts = 0
        while attempt <= MAX_DISPLAY_NAME_ATTEMPTS:
            candidate = display_name if attempt == 1 else f"{display_name} {attempt}"

            try:
                user = self.users.create(User(oauth_key=oauth_key, display_name=candidate))
            except DuplicateUserError as exc:
                if exc.field != "oauth_key":
                    logger.debug("Display name taken, retrying", extra={"attempt": attempt})
                    attempt += 1
                    continue

                winner = self._reread_winner(oauth_key)
                if winner is not None:
                    logger.info("Concurrent user creation resolved", extra={"user_id": winner.id})
                    return winner

                conflicts += 1
                if conflicts > MAX_IDENTITY_CONFLICT_RETRIES:
                    raise MetadataOperationFailedError(
                        message="Unable to resolve user",
                        details={"reason": "conflicting user vanished"},
                    ) from exc
                logger.info("Identity conflict unresolved, retrying", extra={"conflicts": conflicts})
                continue

            logger.info("User created on first login", extra={"user_id": user.id})
            return user

        raise MetadataOperationFailedError(
            message="Unable to find a free display name",
            details={"attempts": MAX_DISPLAY_NAME_ATTEMPTS},
        )

    def _reread_winner(self, oauth_key: str) -> User | None:
        """Look up the concurrent creator's record, waiting briefly for it to commit."""
        for reread in range(OAUTH_REREAD_ATTEMPTS):
            if reread:
                time.sleep(OAUTH_REREAD_DELAY_SECONDS * reread)
            winner = self.users.find_by_oauth_key(oauth_key)
            if winner is not None:
                return winner
        return None

    def get(self, user_id: str) -> User | None:
        return self.users.find_by_id(user_id)

    @staticmethod
    def get_owned(user_id: str, principal: User) -> User | None:
        """Return `principal` itself when it is the requested user, else None.

        No lookup is made; other users' ids are indistinguishable from
        unknown ids.
        """
        return principal if principal.id is not None and principal.id == user_id else None

    def get_all(self) -> list[User]:
        """All users ordered by display name."""
        return sorted(self.users.find_all(), key=lambda user: user.display_name)

    def save(self, user: User) -> User:
        return self.users.save(user)
