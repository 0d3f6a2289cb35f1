"""
S3-compatible object store (Cloudflare R2, AWS S3, MinIO).
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional
from urllib.parse import quote, unquote

from chatter.core.exceptions import ConfigurationError, PersistenceError
from chatter.interfaces.object_store import IObjectStore, ObjectInfo, StoredObject

_MISSING_CODES = {"NoSuchKey", "404", "NotFound"}


class S3ObjectStore(IObjectStore):
    """S3 API implementation. Blocking boto3 calls run in worker threads."""

    def __init__(
        self,
        bucket_name: str,
        endpoint_url: str = "",
        access_key_id: str = "",
        secret_access_key: str = "",
        region_name: str = "auto",
    ):
        self.bucket_name = (bucket_name or "").strip()
        self.endpoint_url = (endpoint_url or "").strip() or None
        self.access_key_id = access_key_id or None
        self.secret_access_key = secret_access_key or None
        self.region_name = (region_name or "auto").strip() or "auto"

        if not self.bucket_name:
            raise ConfigurationError("R2_BUCKET is required when STORAGE_PROVIDER=r2")

        self._boto3: Any | None = None
        self._client: Any | None = None

    def _load_boto3(self) -> Any:
        if self._boto3 is None:
            try:
                import boto3
            except ImportError as e:
                raise ConfigurationError(
                    "boto3 is not installed. Install with: pip install boto3"
                ) from e
            self._boto3 = boto3
        return self._boto3

    def _get_client(self) -> Any:
        if self._client is None:
            boto3 = self._load_boto3()
            self._client = boto3.client(
                "s3",
                endpoint_url=self.endpoint_url,
                aws_access_key_id=self.access_key_id,
                aws_secret_access_key=self.secret_access_key,
                region_name=self.region_name,
            )
        return self._client

    @staticmethod
    def _is_missing(error: Exception) -> bool:
        response = getattr(error, "response", None) or {}
        code = str(response.get("Error", {}).get("Code", ""))
        return code in _MISSING_CODES

    @staticmethod
    def _encode_metadata(metadata: Optional[dict[str, str]]) -> dict[str, str]:
        # S3 user metadata must be ASCII
        return {key.lower(): quote(str(value), safe=" ") for key, value in (metadata or {}).items()}

    @staticmethod
    def _decode_metadata(metadata: Optional[dict[str, str]]) -> dict[str, str]:
        return {key: unquote(value) for key, value in (metadata or {}).items()}

    async def get(self, key: str) -> Optional[StoredObject]:
        try:
            return await asyncio.to_thread(self._get_sync, key)
        except ConfigurationError:
            raise
        except Exception as e:
            raise PersistenceError(f"Failed to read object: {e}") from e

    def _get_sync(self, key: str) -> Optional[StoredObject]:
        client = self._get_client()
        try:
            response = client.get_object(Bucket=self.bucket_name, Key=key)
        except Exception as e:
            if self._is_missing(e):
                return None
            raise
        body = response["Body"].read()
        return StoredObject(
            key=key,
            data=body,
            content_type=response.get("ContentType"),
            metadata=self._decode_metadata(response.get("Metadata")),
        )

    async def put(
        self,
        key: str,
        data: bytes,
        metadata: Optional[dict[str, str]] = None,
        content_type: Optional[str] = None,
    ) -> None:
        kwargs: dict[str, Any] = {
            "Bucket": self.bucket_name,
            "Key": key,
            "Body": data,
            "Metadata": self._encode_metadata(metadata),
        }
        if content_type:
            kwargs["ContentType"] = content_type
        try:
            await asyncio.to_thread(lambda: self._get_client().put_object(**kwargs))
        except ConfigurationError:
            raise
        except Exception as e:
            raise PersistenceError(f"Failed to write object: {e}") from e

    async def delete(self, key: str) -> None:
        try:
            await asyncio.to_thread(
                lambda: self._get_client().delete_object(Bucket=self.bucket_name, Key=key)
            )
        except ConfigurationError:
            raise
        except Exception as e:
            raise PersistenceError(f"Failed to delete object: {e}") from e

    async def list(
        self,
        prefix: str,
        limit: Optional[int] = None,
        include_metadata: bool = False,
    ) -> list[ObjectInfo]:
        try:
            return await asyncio.to_thread(self._list_sync, prefix, limit, include_metadata)
        except ConfigurationError:
            raise
        except Exception as e:
            raise PersistenceError(f"Failed to list objects: {e}") from e

    def _list_sync(
        self,
        prefix: str,
        limit: Optional[int],
        include_metadata: bool,
    ) -> list[ObjectInfo]:
        client = self._get_client()
        paginator = client.get_paginator("list_objects_v2")
        pagination: dict[str, Any] = {}
        if limit is not None:
            pagination["MaxItems"] = limit

        entries: list[ObjectInfo] = []
        for page in paginator.paginate(
            Bucket=self.bucket_name,
            Prefix=prefix,
            PaginationConfig=pagination,
        ):
            for item in page.get("Contents", []):
                metadata: dict[str, str] = {}
                if include_metadata:
                    head = client.head_object(Bucket=self.bucket_name, Key=item["Key"])
                    metadata = self._decode_metadata(head.get("Metadata"))
                entries.append(ObjectInfo(key=item["Key"], size=item.get("Size", 0), metadata=metadata))
        return entries
