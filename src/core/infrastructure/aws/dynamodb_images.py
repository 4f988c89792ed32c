"""DynamoDB-backed implementation of ImageRepository.

Records are keyed by `image_id`; the `contributor-created-index` global
secondary index serves per-contributor queries in creation order. Text
filters use DynamoDB `contains`, which is a case-sensitive substring test.
"""

from typing import Any
import uuid

from aws_lambda_powertools import Logger
from boto3.dynamodb.conditions import Attr, ConditionBase, Key
from botocore.exceptions import BotoCoreError, ClientError

from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter, DynamoDBAdapterProtocol
from core.infrastructure.aws.dynamodb_users import DynamoDBUsers
from core.models.errors import MetadataOperationFailedError
from core.models.image import Image
from core.repositories.image_repository import ImageRepository
from core.repositories.user_repository import UserRepository
from core.utils.constants import (
    CONTRIBUTOR_CREATED_INDEX,
    ENV_IMAGE_TABLE_NAME,
    ERROR_CODE_METADATA_CREATE_FAILED,
    ERROR_CODE_METADATA_DELETE_FAILED,
    ERROR_CODE_METADATA_FETCH_FAILED,
    ERROR_CODE_METADATA_LIST_FAILED,
    ERROR_CODE_METADATA_SAVE_FAILED,
)
from core.utils.time import touch_timestamp, utc_now_iso

Item = dict[str, Any]

logger = Logger(UTC=True)


class DynamoDBImages(ImageRepository):
    """DynamoDB-backed image metadata storage with error handling.

    Contributors are loaded through a `UserRepository` so that every
    returned `Image` carries its full contributor record.
    """

    def __init__(
        self,
        adapter: DynamoDBAdapterProtocol | None = None,
        users: UserRepository | None = None,
    ) -> None:
        self._db: DynamoDBAdapterProtocol = adapter or DynamoDBAdapter(
            ENV_IMAGE_TABLE_NAME, key_attribute="image_id"
        )
        self._users: UserRepository = users or DynamoDBUsers()

    def find_by_id(self, image_id: str) -> Image | None:
        logger.debug("Fetching image", extra={"image_id": image_id})

        try:
            item = self._db.fetch(image_id)
        except (ClientError, BotoCoreError) as exc:
            logger.error("DynamoDB image lookup failed", extra={"image_id": image_id})
            raise MetadataOperationFailedError(
                message="Unable to retrieve image metadata",
                error_code=ERROR_CODE_METADATA_FETCH_FAILED,
                details={"image_id": image_id},
            ) from exc

        if not item:
            return None

        images = self._to_images([item])
        return images[0] if images else None

    def find_all(self) -> list[Image]:
        return self._scan()

    def find_all_by_contributor(self, contributor_id: str) -> list[Image]:
        return self._query_contributor(contributor_id)

    def find_all_by_title_contains(
        self, fragment: str, *, contributor_id: str | None = None
    ) -> list[Image]:
        condition = Attr("title").contains(fragment)
        if contributor_id is not None:
            return self._query_contributor(contributor_id, filter_expression=condition)
        return self._scan(filter_expression=condition)

    def find_all_by_description_contains(
        self, fragment: str, *, contributor_id: str | None = None
    ) -> list[Image]:
        condition = Attr("description").contains(fragment)
        if contributor_id is not None:
            return self._query_contributor(contributor_id, filter_expression=condition)
        return self._scan(filter_expression=condition)

    def create(self, image: Image) -> Image:
        image_id = str(uuid.uuid4())
        now = utc_now_iso()
        item = self._to_item(image, image_id=image_id, created=now, updated=now)

        logger.debug(
            "Creating image metadata",
            extra={"image_id": image_id, "contributor_id": image.contributor.id},
        )

        try:
            self._db.insert(item)
        except (ClientError, BotoCoreError) as exc:
            logger.error("DynamoDB image insert failed", extra={"image_id": image_id})
            raise MetadataOperationFailedError(
                message="Unable to save image metadata at this time",
                error_code=ERROR_CODE_METADATA_CREATE_FAILED,
                details={"image_id": image_id},
            ) from exc

        logger.info("Image metadata created", extra={"image_id": image_id})
        return image.model_copy(update={"id": image_id, "created": now, "updated": now})

    def save(self, image: Image) -> Image:
        if image.id is None:
            return self.create(image)

        updated = touch_timestamp(image.updated)
        item = self._to_item(
            image,
            image_id=image.id,
            created=image.created or updated,
            updated=updated,
        )

        try:
            self._db.replace(item)
        except (ClientError, BotoCoreError) as exc:
            logger.error("DynamoDB image replace failed", extra={"image_id": image.id})
            raise MetadataOperationFailedError(
                message="Unable to save image metadata at this time",
                error_code=ERROR_CODE_METADATA_SAVE_FAILED,
                details={"image_id": image.id},
            ) from exc

        logger.info("Image metadata saved", extra={"image_id": image.id})
        return image.model_copy(update={"created": item["created"], "updated": updated})

    def delete(self, image_id: str) -> None:
        logger.debug("Removing image metadata", extra={"image_id": image_id})

        try:
            self._db.remove(image_id)
        except (ClientError, BotoCoreError) as exc:
            logger.error("DynamoDB image delete failed", extra={"image_id": image_id})
            raise MetadataOperationFailedError(
                message="Unable to delete image metadata",
                error_code=ERROR_CODE_METADATA_DELETE_FAILED,
                details={"image_id": image_id},
            ) from exc

        logger.info("Image metadata removed", extra={"image_id": image_id})

    def _scan(self, *, filter_expression: ConditionBase | None = None) -> list[Image]:
        try:
            items = self._db.scan_all(filter_expression=filter_expression)
        except (ClientError, BotoCoreError, TypeError) as exc:
            logger.error("DynamoDB scan failed", extra={"table": self._db.table_name})
            raise MetadataOperationFailedError(
                message="Unable to list images",
                error_code=ERROR_CODE_METADATA_LIST_FAILED,
            ) from exc

        return self._to_images(items)

    def _query_contributor(
        self, contributor_id: str, *, filter_expression: ConditionBase | None = None
    ) -> list[Image]:
        try:
            items = self._db.query_index(
                CONTRIBUTOR_CREATED_INDEX,
                Key("contributor_id").eq(contributor_id),
                filter_expression=filter_expression,
            )
        except (ClientError, BotoCoreError, TypeError) as exc:
            logger.error("DynamoDB query failed", extra={"contributor_id": contributor_id})
            raise MetadataOperationFailedError(
                message="Unable to list images for this user",
                error_code=ERROR_CODE_METADATA_LIST_FAILED,
                details={"contributor_id": contributor_id},
            ) from exc

        return self._to_images(items)

    def _to_images(self, items: list[Item]) -> list[Image]:
        """Build images, loading each distinct contributor once."""
        contributor_ids = {str(item["contributor_id"]) for item in items}
        contributors = self._users.find_all_by_ids(contributor_ids) if contributor_ids else {}

        images: list[Image] = []
        for item in items:
            contributor = contributors.get(str(item["contributor_id"]))
            if contributor is None:
                logger.warning(
                    "Skipping image with unknown contributor",
                    extra={"image_id": item.get("image_id")},
                )
                continue

            images.append(
                Image(
                    id=str(item["image_id"]),
                    created=item.get("created"),
                    updated=item.get("updated"),
                    title=item.get("title"),
                    description=item.get("description"),
                    name=str(item["name"]),
                    path=str(item["path"]),
                    content_type=str(item["content_type"]),
                    contributor=contributor,
                )
            )
        return images

    @staticmethod
    def _to_item(image: Image, *, image_id: str, created: str, updated: str) -> Item:
        if image.contributor.id is None:
            raise ValueError("Image contributor must be persisted before the image")

        item: Item = {
            "image_id": image_id,
            "name": image.name,
            "path": image.path,
            "content_type": image.content_type,
            "contributor_id": image.contributor.id,
            "created": created,
            "updated": updated,
        }
        # Absent text fields are omitted so `contains` filters never see NULL
        if image.title is not None:
            item["title"] = image.title
        if image.description is not None:
            item["description"] = image.description
        return item
