from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, BinaryIO

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from casedocs.logging.logger import Log
from casedocs.storage.base import BaseStorage
from casedocs.storage.exceptions import StorageError, StorageNotFoundError
from casedocs.storage.models import ObjectMetadata

NOT_FOUND_CODES = frozenset({"NoSuchKey", "NotFound", "404"})


class S3Storage(BaseStorage):
    """Reads uploaded documents from an S3 bucket."""

    def __init__(self, client: Any, bucket: str) -> None:
        self._client = client
        self._bucket = bucket

    @classmethod
    def from_credentials(
        cls,
        *,
        bucket: str,
        region: str,
        access_key_id: str = "",
        secret_access_key: str = "",
    ) -> "S3Storage":
        client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key_id or None,
            aws_secret_access_key=secret_access_key or None,
        )
        return cls(client, bucket)

    def get(self, key: str) -> bytes:
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=key)
            return response["Body"].read()
        except ClientError as exc:
            raise self._translate(exc, key, "download") from exc
        except BotoCoreError as exc:
            raise StorageError(f"Failed to download {key}: {exc}") from exc

    @contextmanager
    def open(self, key: str) -> Iterator[BinaryIO]:
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=key)
        except ClientError as exc:
            raise self._translate(exc, key, "open") from exc
        except BotoCoreError as exc:
            raise StorageError(f"Failed to open {key}: {exc}") from exc
        body = response["Body"]
        try:
            yield body
        except BotoCoreError as exc:
            raise StorageError(f"Failed to read {key}: {exc}") from exc
        finally:
            body.close()

    def exists(self, key: str) -> bool:
        try:
            self._client.head_object(Bucket=self._bucket, Key=key)
        except ClientError as exc:
            if _error_code(exc) in NOT_FOUND_CODES:
                return False
            raise self._translate(exc, key, "check") from exc
        except BotoCoreError as exc:
            raise StorageError(f"Failed to check {key}: {exc}") from exc
        return True

    def get_metadata(self, key: str) -> ObjectMetadata:
        try:
            response = self._client.head_object(Bucket=self._bucket, Key=key)
        except ClientError as exc:
            raise self._translate(exc, key, "read metadata of") from exc
        except BotoCoreError as exc:
            raise StorageError(f"Failed to read metadata of {key}: {exc}") from exc
        return ObjectMetadata(
            content_type=response.get("ContentType") or "application/octet-stream",
            content_length=response.get("ContentLength") or 0,
            last_modified=response.get("LastModified") or datetime.now(timezone.utc),
            metadata=response.get("Metadata") or {},
        )

    def _translate(self, exc: ClientError, key: str, action: str) -> Exception:
        if _error_code(exc) in NOT_FOUND_CODES:
            return StorageNotFoundError(f"File not found: s3://{self._bucket}/{key}")
        Log.error(f"Failed to {action} s3://{self._bucket}/{key}: {exc}")
        return StorageError(f"Failed to {action} {key}: {exc}")


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))
