"""Object store access: narrow interface plus the boto3-backed S3 implementation."""
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from tunevault.core.errors import ListingIncomplete, ObjectNotFound, UpstreamTransient
from tunevault.models.library import StoredObject
from tunevault.models.stream import ByteRange, ObjectBody, ObjectInfo

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}


class ObjectStore(ABC):
    """What the library core needs from a bucket."""

    @abstractmethod
    def list_all(self, prefix: str) -> List[StoredObject]:
        """Return every object under prefix. Raises ListingIncomplete rather than a partial list."""

    @abstractmethod
    def head_object(self, key: str) -> ObjectInfo:
        """Metadata lookup. Raises ObjectNotFound or UpstreamTransient."""

    @abstractmethod
    def get_object(self, key: str, byte_range: Optional[ByteRange] = None) -> ObjectBody:
        """Open an object (or a span of it). Raises ObjectNotFound or UpstreamTransient."""

    @abstractmethod
    def presign(self, key: str, expires_in: int) -> str:
        """Time-limited GET URL for key."""


def _translate(key: str, exc: Exception) -> Exception:
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {})
        code = str(error.get("Code", ""))
        status = exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        if code in _NOT_FOUND_CODES or status == 404:
            return ObjectNotFound(key)
    return UpstreamTransient(f"{key}: {exc}")


class S3ObjectStore(ObjectStore):
    """S3 (or S3-compatible) bucket via boto3."""

    def __init__(
        self,
        bucket: str,
        *,
        region: Optional[str] = None,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        page_size: int = 1000,
        client=None,
    ) -> None:
        self.bucket = bucket
        self.page_size = page_size
        if client is None:
            client = boto3.client(
                "s3",
                region_name=region or None,
                aws_access_key_id=access_key_id or None,
                aws_secret_access_key=secret_access_key or None,
                endpoint_url=endpoint_url or None,
                config=BotoConfig(
                    signature_version="s3v4",
                    retries={"max_attempts": 3, "mode": "standard"},
                ),
            )
        self._client = client

    def list_all(self, prefix: str) -> List[StoredObject]:
        objects: List[StoredObject] = []
        continuation_token: Optional[str] = None
        while True:
            params = {"Bucket": self.bucket, "Prefix": prefix, "MaxKeys": self.page_size}
            if continuation_token:
                params["ContinuationToken"] = continuation_token
            try:
                page = self._client.list_objects_v2(**params)
            except (ClientError, BotoCoreError) as e:
                raise ListingIncomplete(
                    f"Listing {prefix!r} failed after {len(objects)} objects: {e}"
                ) from e
            for obj in page.get("Contents", []):
                objects.append(StoredObject(key=obj["Key"], size=int(obj.get("Size", 0))))
            logger.debug("Fetched %d objects so far...", len(objects))
            if not page.get("IsTruncated"):
                break
            continuation_token = page.get("NextContinuationToken")
            if not continuation_token:
                raise ListingIncomplete(
                    f"Listing {prefix!r} truncated without a continuation token"
                )
        logger.info("Total objects fetched under %r: %d", prefix, len(objects))
        return objects

    def head_object(self, key: str) -> ObjectInfo:
        try:
            resp = self._client.head_object(Bucket=self.bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise _translate(key, e) from e
        return ObjectInfo(
            key=key,
            size=int(resp["ContentLength"]),
            content_type=resp.get("ContentType"),
        )

    def get_object(self, key: str, byte_range: Optional[ByteRange] = None) -> ObjectBody:
        params = {"Bucket": self.bucket, "Key": key}
        if byte_range is not None:
            params["Range"] = byte_range.header_value()
        try:
            resp = self._client.get_object(**params)
        except (ClientError, BotoCoreError) as e:
            raise _translate(key, e) from e
        return ObjectBody(
            key=key,
            content_type=resp.get("ContentType"),
            content_length=int(resp.get("ContentLength", 0)),
            body=resp["Body"],
        )

    def presign(self, key: str, expires_in: int) -> str:
        try:
            return self._client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=expires_in,
            )
        except (ClientError, BotoCoreError) as e:
            raise UpstreamTransient(f"Signing {key} failed: {e}") from e
