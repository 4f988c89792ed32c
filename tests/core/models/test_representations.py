from core.models.representations import (
    ImageRepresentation,
    UserRepresentation,
    represent_images,
    represent_users,
)

BASE = "https://api.example.com/v1"


class TestRepresentations:
    def test_user_representation_hides_oauth_key(self, alice) -> None:
        body = UserRepresentation.from_user(alice, base_url=BASE).model_dump()

        assert body["id"] == "u-alice"
        assert body["name"] == "Alice"
        assert body["href"] == f"{BASE}/users/u-alice"
        assert "oauth_key" not in body

    def test_image_representation_hides_path(self, sample_image) -> None:
        body = ImageRepresentation.from_image(sample_image, base_url=BASE).model_dump()

        assert body["href"] == f"{BASE}/images/img-1"
        assert body["name"] == "photo.jpg"
        assert body["contributor"]["href"] == f"{BASE}/users/u-alice"
        assert "path" not in body

    def test_without_base_url_href_is_omitted(self, sample_image) -> None:
        (body,) = represent_images([sample_image], base_url=None)
        assert "href" not in body
        assert "href" not in body["contributor"]

    def test_unset_optional_fields_are_omitted(self, sample_image) -> None:
        sample_image.description = None
        (body,) = represent_images([sample_image], base_url=BASE)
        assert "description" not in body

    def test_represent_users_keeps_order(self, alice, bob) -> None:
        names = [user["name"] for user in represent_users([bob, alice], base_url=BASE)]
        assert names == ["Bob", "Alice"]
