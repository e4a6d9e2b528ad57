"""S3-backed blob store (one object per document key)."""

from __future__ import annotations

from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from lotto_picks.errors import StorageUnavailableError

_MISSING_CODES = {"NoSuchKey", "404", "NotFound"}


def create_s3_client(region: str | None = None) -> Any:
    if region:
        return boto3.client("s3", region_name=region)
    # Falls back to whatever region/credentials are configured locally.
    return boto3.client("s3")


def _is_missing(exc: ClientError) -> bool:
    error = exc.response.get("Error") or {}
    status = (exc.response.get("ResponseMetadata") or {}).get("HTTPStatusCode")
    return str(error.get("Code")) in _MISSING_CODES or status == 404


class S3BlobStore:
    """Reads with ``get_object`` and overwrites with a single ``put_object``."""

    def __init__(self, bucket: str, client: Any | None = None, region: str | None = None) -> None:
        self._bucket = bucket
        self._client = client or create_s3_client(region)

    def read(self, key: str) -> str | None:
        try:
            got = self._client.get_object(Bucket=self._bucket, Key=key)
            return got["Body"].read().decode("utf-8")
        except ClientError as e:
            if _is_missing(e):
                return None
            raise StorageUnavailableError(
                "Could not read document",
                details={"backend": self.describe(), "key": key, "error": str(e)},
            ) from e
        except BotoCoreError as e:
            raise StorageUnavailableError(
                "Could not read document",
                details={"backend": self.describe(), "key": key, "error": str(e)},
            ) from e

    def write(self, key: str, text: str, content_type: str) -> None:
        try:
            self._client.put_object(
                Bucket=self._bucket,
                Key=key,
                Body=text.encode("utf-8"),
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageUnavailableError(
                "Could not write document",
                details={"backend": self.describe(), "key": key, "error": str(e)},
            ) from e

    def describe(self) -> str:
        return f"s3://{self._bucket}"
