"""DynamoDB-backed implementation of UserRepository.

Profiles live in the user table, keyed by `user_id`. Uniqueness of
`oauth_key` and `display_name` is guaranteed by marker items in the keys
table (`oauth_key#<key>`, `display_name#<name>`) written in the same
transaction as the profile, each conditional on not existing yet.
"""

from typing import Any, NoReturn
import uuid

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter, DynamoDBAdapterProtocol
from core.models.errors import DuplicateUserError, MetadataOperationFailedError
from core.models.user import User
from core.repositories.user_repository import UserRepository
from core.utils.constants import (
    DISPLAY_NAME_MARKER_PREFIX,
    OAUTH_KEY_MARKER_PREFIX,
    ENV_USER_KEYS_TABLE_NAME,
    ENV_USER_TABLE_NAME,
    ERROR_CODE_METADATA_CREATE_FAILED,
    ERROR_CODE_METADATA_FETCH_FAILED,
    ERROR_CODE_METADATA_LIST_FAILED,
    ERROR_CODE_METADATA_SAVE_FAILED,
)
from core.utils.time import touch_timestamp, utc_now_iso

Item = dict[str, Any]

logger = Logger(UTC=True)

TRANSACTION_CANCELED = "TransactionCanceledException"


def oauth_key_marker(oauth_key: str) -> str:
    return f"{OAUTH_KEY_MARKER_PREFIX}{oauth_key}"


def display_name_marker(display_name: str) -> str:
    return f"{DISPLAY_NAME_MARKER_PREFIX}{display_name}"


class DynamoDBUsers(UserRepository):
    """DynamoDB-backed user storage with error handling.

    All boto3 errors are caught and translated into
    domain-specific errors with stable semantics.
    """

    def __init__(
        self,
        adapter: DynamoDBAdapterProtocol | None = None,
        keys_adapter: DynamoDBAdapterProtocol | None = None,
    ) -> None:
        self._db: DynamoDBAdapterProtocol = adapter or DynamoDBAdapter(
            ENV_USER_TABLE_NAME, key_attribute="user_id"
        )
        self._keys: DynamoDBAdapterProtocol = keys_adapter or DynamoDBAdapter(
            ENV_USER_KEYS_TABLE_NAME, key_attribute="unique_key"
        )

    def find_by_id(self, user_id: str, *, consistent: bool = False) -> User | None:
        try:
            item = self._db.fetch(user_id, consistent=consistent)
        except (ClientError, BotoCoreError) as exc:
            logger.error("DynamoDB user lookup failed", extra={"user_id": user_id})
            raise MetadataOperationFailedError(
                message="Unable to retrieve user",
                error_code=ERROR_CODE_METADATA_FETCH_FAILED,
                details={"user_id": user_id},
            ) from exc

        return self._to_user(item) if item else None

    def find_by_oauth_key(self, oauth_key: str) -> User | None:
        user_id = self._marker_owner(oauth_key_marker(oauth_key))
        if user_id is None:
            return None
        return self.find_by_id(user_id, consistent=True)

    def find_all_by_ids(self, user_ids: set[str]) -> dict[str, User]:
        users: dict[str, User] = {}
        for user_id in user_ids:
            user = self.find_by_id(user_id)
            if user is not None:
                users[user_id] = user
        return users

    def find_all(self) -> list[User]:
        try:
            items = self._db.scan_all()
        except (ClientError, BotoCoreError, TypeError) as exc:
            logger.error("DynamoDB scan failed", extra={"table": self._db.table_name})
            raise MetadataOperationFailedError(
                message="Unable to list users",
                error_code=ERROR_CODE_METADATA_LIST_FAILED,
            ) from exc

        return [self._to_user(item) for item in items]

    def create(self, user: User) -> User:
        user_id = str(uuid.uuid4())
        now = utc_now_iso()
        item: Item = {
            "user_id": user_id,
            "oauth_key": user.oauth_key,
            "display_name": user.display_name,
            "created": now,
            "updated": now,
        }

        logger.debug("Creating user", extra={"user_id": user_id})

        try:
            self._db.transact(
                [
                    self._db.insert_request(item),
                    self._claim(oauth_key_marker(user.oauth_key), user_id),
                    self._claim(display_name_marker(user.display_name), user_id),
                ]
            )
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") == TRANSACTION_CANCELED:
                self._raise_conflict(user, exc)

            logger.error("DynamoDB user transaction failed", extra={"user_id": user_id})
            raise MetadataOperationFailedError(
                message="Unable to save user at this time",
                error_code=ERROR_CODE_METADATA_CREATE_FAILED,
                details={"user_id": user_id},
            ) from exc
        except BotoCoreError as exc:
            logger.exception("Unexpected error creating user")
            raise MetadataOperationFailedError(
                message="Unable to save user at this time",
                error_code=ERROR_CODE_METADATA_CREATE_FAILED,
                details={"user_id": user_id},
            ) from exc

        logger.info("User created", extra={"user_id": user_id})
        return self._to_user(item)

    def save(self, user: User) -> User:
        if user.id is None:
            return self.create(user)

        current = self.find_by_id(user.id, consistent=True)
        if current is None:
            raise MetadataOperationFailedError(
                message="Unable to save user at this time",
                error_code=ERROR_CODE_METADATA_SAVE_FAILED,
                details={"user_id": user.id},
            )

        item: Item = {
            "user_id": user.id,
            "oauth_key": current.oauth_key,
            "display_name": user.display_name,
            "created": current.created,
            "updated": touch_timestamp(current.updated),
        }

        writes = [self._db.replace_request(item)]
        if user.display_name != current.display_name:
            writes.append(self._claim(display_name_marker(user.display_name), user.id))
            writes.append(self._keys.remove_request(display_name_marker(current.display_name)))

        try:
            self._db.transact(writes)
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") == TRANSACTION_CANCELED:
                owner = self._marker_owner(display_name_marker(user.display_name))
                if owner is not None and owner != user.id:
                    raise DuplicateUserError(
                        message="Display name is already in use",
                        field="display_name",
                    ) from exc

            logger.error("DynamoDB user update failed", extra={"user_id": user.id})
            raise MetadataOperationFailedError(
                message="Unable to save user at this time",
                error_code=ERROR_CODE_METADATA_SAVE_FAILED,
                details={"user_id": user.id},
            ) from exc
        except BotoCoreError as exc:
            logger.exception("Unexpected error saving user")
            raise MetadataOperationFailedError(
                message="Unable to save user at this time",
                error_code=ERROR_CODE_METADATA_SAVE_FAILED,
                details={"user_id": user.id},
            ) from exc

        logger.info("User saved", extra={"user_id": user.id})
        return self._to_user(item)

    def _marker_owner(self, marker: str) -> str | None:
        """Return the user id holding a uniqueness marker (strongly consistent read)."""
        try:
            item = self._keys.fetch(marker, consistent=True)
        except (ClientError, BotoCoreError) as exc:
            logger.error("DynamoDB marker lookup failed")
            raise MetadataOperationFailedError(
                message="Unable to retrieve user",
                error_code=ERROR_CODE_METADATA_FETCH_FAILED,
            ) from exc

        if not item:
            return None
        return str(item["user_id"])

    def _raise_conflict(self, user: User, exc: ClientError) -> NoReturn:
        """Name the constraint that cancelled a create transaction.

        Cancellations no stored marker explains (e.g. `TransactionConflict`
        with a concurrent create) are reported as an identity conflict so
        the caller re-reads and retries.
        """
        if self._marker_owner(oauth_key_marker(user.oauth_key)) is not None:
            logger.info("User create lost race on oauth key")
            raise DuplicateUserError(
                message="A user with this identity already exists",
                field="oauth_key",
            ) from exc

        if self._marker_owner(display_name_marker(user.display_name)) is not None:
            logger.info("User create collided on display name")
            raise DuplicateUserError(
                message="Display name is already in use",
                field="display_name",
            ) from exc

        # A concurrent transaction on the same markers has not committed yet
        reasons = [reason.get("Code") for reason in exc.response.get("CancellationReasons", [])]
        logger.info("User create cancelled without a visible owner", extra={"reasons": reasons})
        raise DuplicateUserError(
            message="A user with this identity is being created",
            field="oauth_key",
        ) from exc

    def _claim(self, marker: str, user_id: str) -> Item:
        return self._keys.insert_request({"unique_key": marker, "user_id": user_id})

    @staticmethod
    def _to_user(item: Item) -> User:
        return User(
            id=str(item["user_id"]),
            created=item.get("created"),
            updated=item.get("updated"),
            oauth_key=str(item["oauth_key"]),
            display_name=str(item["display_name"]),
        )
