from unittest.mock import MagicMock

import pytest

from chatter.core.exceptions import ConfigurationError, PersistenceError
from chatter.infrastructure.aws.r2_store import S3ObjectStore


class _ClientError(Exception):
    def __init__(self, code: str):
        super().__init__(code)
        self.response = {"Error": {"Code": code}}


def _store_with(client: MagicMock) -> S3ObjectStore:
    store = S3ObjectStore(bucket_name="chat-bucket", endpoint_url="https://r2.example.test")
    store._client = client
    return store


def test_bucket_is_required() -> None:
    with pytest.raises(ConfigurationError):
        S3ObjectStore(bucket_name="  ")


@pytest.mark.asyncio
async def test_get_reads_body_and_decodes_metadata() -> None:
    client = MagicMock()
    body = MagicMock()
    body.read.return_value = b"png"
    client.get_object.return_value = {
        "Body": body,
        "ContentType": "image/png",
        "Metadata": {"prompt": "caf%C3%A9 at night"},
    }

    stored = await _store_with(client).get("users/u/images/1_x.png")

    client.get_object.assert_called_once_with(Bucket="chat-bucket", Key="users/u/images/1_x.png")
    assert stored.data == b"png"
    assert stored.content_type == "image/png"
    assert stored.metadata == {"prompt": "café at night"}


@pytest.mark.asyncio
@pytest.mark.parametrize("code", ["NoSuchKey", "404", "NotFound"])
async def test_get_missing_key_returns_none(code: str) -> None:
    client = MagicMock()
    client.get_object.side_effect = _ClientError(code)

    assert await _store_with(client).get("users/u/settings.json") is None


@pytest.mark.asyncio
async def test_get_other_errors_become_persistence_errors() -> None:
    client = MagicMock()
    client.get_object.side_effect = _ClientError("AccessDenied")

    with pytest.raises(PersistenceError):
        await _store_with(client).get("users/u/settings.json")


@pytest.mark.asyncio
async def test_put_encodes_metadata_as_ascii() -> None:
    client = MagicMock()

    await _store_with(client).put(
        "users/u/images/1_x.png",
        b"png",
        metadata={"Prompt": "café"},
        content_type="image/png",
    )

    client.put_object.assert_called_once_with(
        Bucket="chat-bucket",
        Key="users/u/images/1_x.png",
        Body=b"png",
        Metadata={"prompt": "caf%C3%A9"},
        ContentType="image/png",
    )


@pytest.mark.asyncio
async def test_delete_calls_delete_object() -> None:
    client = MagicMock()

    await _store_with(client).delete("users/u/chats/c1.json")

    client.delete_object.assert_called_once_with(Bucket="chat-bucket", Key="users/u/chats/c1.json")


@pytest.mark.asyncio
async def test_list_walks_pages_and_fetches_metadata_when_asked() -> None:
    client = MagicMock()
    paginator = MagicMock()
    paginator.paginate.return_value = [
        {"Contents": [{"Key": "users/u/images/1_a.png", "Size": 3}]},
        {"Contents": [{"Key": "users/u/images/2_b.png", "Size": 4}]},
        {},
    ]
    client.get_paginator.return_value = paginator
    client.head_object.return_value = {"Metadata": {"prompt": "fox"}}

    entries = await _store_with(client).list("users/u/images/", limit=10, include_metadata=True)

    assert [e.key for e in entries] == ["users/u/images/1_a.png", "users/u/images/2_b.png"]
    assert [e.size for e in entries] == [3, 4]
    assert entries[0].metadata == {"prompt": "fox"}
    paginator.paginate.assert_called_once_with(
        Bucket="chat-bucket",
        Prefix="users/u/images/",
        PaginationConfig={"MaxItems": 10},
    )


@pytest.mark.asyncio
async def test_list_skips_head_requests_without_metadata() -> None:
    client = MagicMock()
    paginator = MagicMock()
    paginator.paginate.return_value = [{"Contents": [{"Key": "users/u/chats/c.json", "Size": 2}]}]
    client.get_paginator.return_value = paginator

    entries = await _store_with(client).list("users/u/chats/")

    assert entries[0].metadata == {}
    client.head_object.assert_not_called()
