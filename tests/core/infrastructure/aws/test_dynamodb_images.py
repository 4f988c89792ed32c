"""Tests for the DynamoDB image catalog."""

from collections.abc import Callable
from typing import Any

import pytest
from botocore.exceptions import ClientError

from core.infrastructure.aws.dynamodb_images import DynamoDBImages
from core.infrastructure.aws.dynamodb_users import DynamoDBUsers
from core.models.errors import MetadataOperationFailedError
from core.models.image import Image
from core.models.user import User


class DummyAdapter:
    """Minimal DynamoDBAdapter stub."""

    table_name: str
    fetch: Callable[..., Any]
    insert: Callable[..., None]
    replace: Callable[..., None]
    remove: Callable[..., None]
    query_index: Callable[..., list]
    scan_all: Callable[..., list]

    def __init__(self) -> None:
        self.table_name = "image"
        self.fetch = lambda *_, **__: None
        self.insert = lambda *_: None
        self.replace = lambda *_: None
        self.remove = lambda *_: None
        self.query_index = lambda *_, **__: []
        self.scan_all = lambda **_: []


class DummyUsers:
    """In-memory stand-in for the user directory."""

    def __init__(self, *users: User) -> None:
        self._users = {user.id: user for user in users}

    def find_all_by_ids(self, user_ids: set[str]) -> dict[str, User]:
        return {uid: self._users[uid] for uid in user_ids if uid in self._users}


def throttled(*_: Any, **__: Any) -> None:
    raise ClientError({"Error": {"Code": "ProvisionedThroughputExceededException"}}, "Op")


@pytest.fixture
def users(gallery_tables) -> DynamoDBUsers:
    return DynamoDBUsers()


@pytest.fixture
def images(users) -> DynamoDBImages:
    return DynamoDBImages(users=users)


@pytest.fixture
def contributors(users) -> tuple[User, User]:
    return (
        users.create(User(oauth_key="k-alice", display_name="Alice")),
        users.create(User(oauth_key="k-bob", display_name="Bob")),
    )


def new_image(contributor: User, name: str, *, title=None, description=None) -> Image:
    return Image(
        title=title,
        description=description,
        name=name,
        path=f"ref-{name}",
        content_type="image/png",
        contributor=contributor,
    )


class TestDynamoDBImages:
    def test_create_and_find_by_id(self, images, contributors) -> None:
        alice, _ = contributors

        created = images.create(new_image(alice, "a.png", title="Sunset"))

        assert created.id
        assert created.created == created.updated
        found = images.find_by_id(created.id)
        assert found == created
        assert found.contributor == alice
        assert found.path == "ref-a.png"

    def test_find_by_id_missing(self, images) -> None:
        assert images.find_by_id("nope") is None

    def test_find_all_by_contributor_newest_first(self, images, contributors) -> None:
        alice, bob = contributors
        first = images.create(new_image(alice, "1.png"))
        second = images.create(new_image(alice, "2.png"))
        images.create(new_image(bob, "3.png"))

        assert [i.id for i in images.find_all_by_contributor(alice.id)] == [second.id, first.id]

    def test_title_contains_is_case_sensitive(self, images, contributors) -> None:
        alice, _ = contributors
        sunset = images.create(new_image(alice, "a.png", title="Sunset"))
        images.create(new_image(alice, "b.png", title="Moonrise"))

        assert images.find_all_by_title_contains("Sun") == [sunset]
        assert images.find_all_by_title_contains("sun") == []

    def test_description_contains_scoped_to_contributor(self, images, contributors) -> None:
        alice, bob = contributors
        mine = images.create(new_image(alice, "a.png", description="the sun sets"))
        images.create(new_image(bob, "b.png", description="the sun rises"))

        assert images.find_all_by_description_contains("sun", contributor_id=alice.id) == [mine]
        assert len(images.find_all_by_description_contains("sun")) == 2

    def test_untitled_images_never_match_title_search(self, images, contributors) -> None:
        alice, _ = contributors
        images.create(new_image(alice, "sunset.png"))

        assert images.find_all_by_title_contains("sun") == []

    def test_save_updates_text_and_timestamp(self, images, contributors) -> None:
        alice, _ = contributors
        created = images.create(new_image(alice, "a.png", title="Sunset"))

        created.title = None
        created.description = "Evening sky"
        saved = images.save(created)

        found = images.find_by_id(created.id)
        assert found.title is None
        assert found.description == "Evening sky"
        assert found.created == created.created
        assert saved.updated >= created.updated

    def test_save_unpersisted_creates(self, images, contributors) -> None:
        alice, _ = contributors
        saved = images.save(new_image(alice, "a.png"))
        assert images.find_by_id(saved.id) == saved

    def test_delete(self, images, contributors) -> None:
        alice, _ = contributors
        created = images.create(new_image(alice, "a.png"))

        images.delete(created.id)

        assert images.find_by_id(created.id) is None
        assert images.find_all() == []

    def test_images_with_unknown_contributor_are_skipped(self, dynamodb_put_item, images) -> None:
        dynamodb_put_item(
            {
                "image_id": "orphan",
                "name": "o.png",
                "path": "o.png",
                "content_type": "image/png",
                "contributor_id": "ghost",
                "created": "2024-01-01T00:00:00.000000+00:00",
                "updated": "2024-01-01T00:00:00.000000+00:00",
            }
        )

        assert images.find_by_id("orphan") is None
        assert images.find_all() == []


class TestDynamoDBImagesFailures:
    def test_create_requires_persisted_contributor(self) -> None:
        images = DynamoDBImages(DummyAdapter(), DummyUsers())

        with pytest.raises(ValueError):
            images.create(new_image(User(oauth_key="k", display_name="Nobody"), "a.png"))

    @pytest.mark.parametrize("operation", ["insert", "fetch", "remove", "query_index", "scan_all"])
    def test_client_errors_translated(self, alice, operation) -> None:
        adapter = DummyAdapter()
        setattr(adapter, operation, throttled)
        images = DynamoDBImages(adapter, DummyUsers(alice))

        calls = {
            "insert": lambda: images.create(new_image(alice, "a.png")),
            "fetch": lambda: images.find_by_id("x"),
            "remove": lambda: images.delete("x"),
            "query_index": lambda: images.find_all_by_contributor(alice.id),
            "scan_all": lambda: images.find_all(),
        }

        with pytest.raises(MetadataOperationFailedError):
            calls[operation]()
