import pytest

from chatter.core.exceptions import ValidationError
from chatter.services.storage_keys import (
    ResourceKind,
    image_timestamp,
    is_image_key,
    kind_prefix,
    new_image_id,
    resource_key,
)


def test_chat_key_template() -> None:
    assert resource_key("alice", ResourceKind.CHAT, "c1") == "users/alice/chats/c1.json"


def test_singleton_keys_ignore_resource_id() -> None:
    assert resource_key("alice", ResourceKind.SETTINGS) == "users/alice/settings.json"
    assert resource_key("alice", ResourceKind.SNIPPETS, "ignored") == "users/alice/snippets.json"


def test_image_key_uses_timestamp_first_id() -> None:
    image_id = new_image_id(1700000000000)
    key = resource_key("alice", ResourceKind.IMAGE, image_id)

    assert key.startswith("users/alice/images/1700000000000_")
    assert key.endswith(".png")
    assert image_timestamp(key) == 1700000000000


def test_same_chat_id_for_different_users_never_collides() -> None:
    key_a = resource_key("userA", ResourceKind.CHAT, "x")
    key_b = resource_key("userB", ResourceKind.CHAT, "x")

    assert key_a != key_b
    assert not key_b.startswith(kind_prefix("userA", ResourceKind.CHAT))


def test_user_prefix_does_not_match_longer_user_id() -> None:
    # "ann" must not list "anna"'s chats
    assert not resource_key("anna", ResourceKind.CHAT, "x").startswith(
        kind_prefix("ann", ResourceKind.CHAT)
    )


@pytest.mark.parametrize("user_id", ["", "a/b", "..", ".", "a\\b"])
def test_invalid_user_ids_are_rejected(user_id: str) -> None:
    with pytest.raises(ValidationError):
        resource_key(user_id, ResourceKind.CHAT, "x")


def test_chat_key_requires_chat_id() -> None:
    with pytest.raises(ValidationError):
        resource_key("alice", ResourceKind.CHAT)


def test_chat_id_with_slash_is_rejected() -> None:
    with pytest.raises(ValidationError):
        resource_key("alice", ResourceKind.CHAT, "../settings")


def test_image_ids_sort_chronologically() -> None:
    older = resource_key("u", ResourceKind.IMAGE, new_image_id(1000000000000))
    newer = resource_key("u", ResourceKind.IMAGE, new_image_id(1000000000500))
    assert sorted([newer, older]) == [older, newer]


@pytest.mark.parametrize(
    "key, expected",
    [
        ("users/u/images/1700000000000_abc.png", 1700000000000),
        ("users/u/images/noprefix.png", 0),
        ("users/u/images/_abc.png", 0),
        ("users/u/images/123abc_def.png", 123),
    ],
)
def test_image_timestamp_parsing(key: str, expected: int) -> None:
    assert image_timestamp(key) == expected


@pytest.mark.parametrize(
    "key, user_id, expected",
    [
        ("users/alice/images/1_x.png", None, True),
        ("users/alice/images/1_x.png", "alice", True),
        ("users/alice/images/1_x.png", "bob", False),
        ("users/alice/chats/c1.json", None, False),
        ("users/alice/settings.json", None, False),
        ("users/alice/images/", None, False),
        ("users/alice/images/a/b.png", None, False),
        ("users/../images/1_x.png", None, False),
        ("other/alice/images/1_x.png", None, False),
    ],
)
def test_is_image_key(key: str, user_id, expected: bool) -> None:
    assert is_image_key(key, user_id) is expected
