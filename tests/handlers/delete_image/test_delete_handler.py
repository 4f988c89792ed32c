from unittest.mock import patch

from core.models.errors import StorageError
from handlers.delete_image.handler import handler
from handlers.get_image.handler import handler as get_handler


def delete_event(make_event, image_id, user):
    return make_event("DELETE", f"/images/{image_id}", path_params={"image_id": image_id}, user=user)


class TestDeleteHandler:
    def test_owner_deletes(self, gallery, upload_dir, make_event, lambda_context, upload_as) -> None:
        image = upload_as("alice", title="Sunset")

        response = handler(delete_event(make_event, image["id"], "alice"), lambda_context)

        assert response["statusCode"] == 204
        assert list(upload_dir.iterdir()) == []
        fetched = get_handler(
            make_event("GET", f"/images/{image['id']}", path_params={"image_id": image["id"]}),
            lambda_context,
        )
        assert fetched["statusCode"] == 404

    def test_other_user_cannot_delete(self, gallery, make_event, lambda_context, upload_as) -> None:
        image = upload_as("alice", title="Sunset")

        response = handler(delete_event(make_event, image["id"], "bob"), lambda_context)

        assert response["statusCode"] == 404
        fetched = get_handler(
            make_event("GET", f"/images/{image['id']}", path_params={"image_id": image["id"]}),
            lambda_context,
        )
        assert fetched["statusCode"] == 200

    def test_missing_image(self, gallery, make_event, lambda_context) -> None:
        assert handler(delete_event(make_event, "nope", "alice"), lambda_context)["statusCode"] == 404

    def test_storage_failure_keeps_record(self, gallery, make_event, lambda_context, upload_as) -> None:
        image = upload_as("alice", title="Sunset")

        with patch(
            "core.infrastructure.local.filesystem_storage.LocalFileSystemStorage.delete",
            side_effect=StorageError(message="Unable to delete stored content"),
        ):
            response = handler(delete_event(make_event, image["id"], "alice"), lambda_context)

        assert response["statusCode"] == 500
        fetched = get_handler(
            make_event("GET", f"/images/{image['id']}", path_params={"image_id": image["id"]}),
            lambda_context,
        )
        assert fetched["statusCode"] == 200

    def test_anonymous_rejected(self, gallery, make_event, lambda_context) -> None:
        assert handler(delete_event(make_event, "any", None), lambda_context)["statusCode"] == 401
