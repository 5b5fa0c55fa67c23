import asyncio
import logging
import mimetypes
from datetime import datetime, timezone
from typing import List, Protocol

from AUZY.core.config import S3_MAX_PRESIGN_SECONDS
from AUZY.core.errors import StoreError

logger = logging.getLogger("media.storage")


class MediaRepository(Protocol):
    """Flat key/value object store with prefix listing and URL signing."""

    async def upload(self, local_path: str, key: str) -> None: ...

    async def list(self, prefix: str) -> List[str]: ...

    async def delete(self, key: str) -> None: ...

    async def sign(self, key: str, expires: datetime) -> str: ...


async def _run(action: str, key: str, fn, *args):
    try:
        return await asyncio.to_thread(fn, *args)
    except Exception as e:
        logger.exception("❌ Object store %s failed for %s: %s", action, key, e)
        raise StoreError(str(e), source=StoreError.OBJECT, key=key, action=action) from e


def _content_type(path: str) -> str:
    return mimetypes.guess_type(path)[0] or "application/octet-stream"


# ------------------------------
# Firebase Storage (Google Cloud Storage bucket)
# ------------------------------
class FirebaseMediaRepository:
    def __init__(self, bucket):
        self.bucket = bucket

    async def upload(self, local_path: str, key: str) -> None:
        blob = self.bucket.blob(key)
        await _run("upload", key, blob.upload_from_filename, local_path, _content_type(local_path))
        logger.info("Uploaded %s -> gs://%s/%s", local_path, self.bucket.name, key)

    async def list(self, prefix: str) -> List[str]:
        return await _run("list", prefix, lambda: [b.name for b in self.bucket.list_blobs(prefix=prefix)])

    async def delete(self, key: str) -> None:
        await _run("delete", key, self.bucket.blob(key).delete)
        logger.info("Deleted gs://%s/%s", self.bucket.name, key)

    async def sign(self, key: str, expires: datetime) -> str:
        # v2 signatures accept any expiration date
        blob = self.bucket.blob(key)
        return await _run(
            "sign", key,
            lambda: blob.generate_signed_url(expiration=expires, method="GET", version="v2"),
        )


# ------------------------------
# S3-compatible bucket
# ------------------------------
class S3MediaRepository:
    """
    S3-compatible bucket.

    SigV4 presigned URLs live at most S3_MAX_PRESIGN_SECONDS (7 days), so the
    far-future expiry is clamped here: URLs from this backend do expire.
    """

    def __init__(self, client, bucket: str):
        self.client = client
        self.bucket = bucket

    async def upload(self, local_path: str, key: str) -> None:
        await _run(
            "upload", key,
            lambda: self.client.upload_file(
                local_path, self.bucket, key, ExtraArgs={"ContentType": _content_type(local_path)}
            ),
        )
        logger.info("Uploaded %s -> s3://%s/%s", local_path, self.bucket, key)

    async def list(self, prefix: str) -> List[str]:
        def _list():
            keys = []
            paginator = self.client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
                keys.extend(obj["Key"] for obj in page.get("Contents", []))
            return keys

        return await _run("list", prefix, _list)

    async def delete(self, key: str) -> None:
        await _run("delete", key, lambda: self.client.delete_object(Bucket=self.bucket, Key=key))
        logger.info("Deleted s3://%s/%s", self.bucket, key)

    async def sign(self, key: str, expires: datetime) -> str:
        seconds = int((expires - datetime.now(timezone.utc)).total_seconds())
        seconds = max(1, min(seconds, S3_MAX_PRESIGN_SECONDS))
        return await _run(
            "sign", key,
            lambda: self.client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=seconds,
            ),
        )


def get_media_repository() -> MediaRepository:
    """Media backend selected by MEDIA_BACKEND."""
    from AUZY.core.config import MEDIA_BACKEND, S3_BUCKET
    from AUZY.core.firebase import get_bucket, get_s3_client

    if MEDIA_BACKEND == "s3":
        return S3MediaRepository(get_s3_client(), S3_BUCKET)
    if MEDIA_BACKEND == "firebase":
        return FirebaseMediaRepository(get_bucket())
    raise ValueError(f"Unknown MEDIA_BACKEND: {MEDIA_BACKEND}")
