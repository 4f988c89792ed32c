import pytest
from pydantic import ValidationError

from core.models.user import User


class TestUserEquality:
    def test_unpersisted_user_equals_only_itself(self) -> None:
        a = User(oauth_key="k1", display_name="Alice")
        b = User(oauth_key="k1", display_name="Alice")

        assert a == a
        assert a != b

    def test_persisted_users_compare_by_id(self, alice) -> None:
        same = User(id=alice.id, oauth_key="other", display_name="Renamed")
        assert alice == same

    def test_persisted_never_equals_unpersisted(self, alice) -> None:
        assert alice != User(oauth_key=alice.oauth_key, display_name=alice.display_name)

    def test_hash_is_stable_across_persistence(self) -> None:
        fresh = User(oauth_key="k1", display_name="Alice")
        saved = User(id="u1", oauth_key="k1", display_name="Alice")

        assert hash(fresh) == hash(saved)

    def test_not_equal_to_other_types(self, alice) -> None:
        assert alice != "u-alice"


class TestUserModel:
    def test_natural_order_is_display_name(self, alice, bob) -> None:
        assert sorted([bob, alice]) == [alice, bob]

    def test_identity_fields_are_frozen(self, alice) -> None:
        with pytest.raises(ValidationError):
            alice.oauth_key = "someone-else"
        with pytest.raises(ValidationError):
            alice.id = "u-other"

    def test_display_name_is_mutable(self, alice) -> None:
        alice.display_name = "Alice Liddell"
        assert alice.display_name == "Alice Liddell"

    def test_empty_display_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            User(oauth_key="k1", display_name="")

    def test_persisted_flag(self, alice) -> None:
        assert alice.persisted
        assert not User(oauth_key="k1", display_name="A").persisted
