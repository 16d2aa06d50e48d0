"""S3-compatible object storage (Cloudflare R2 in production)."""
import logging
from typing import BinaryIO

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from starlette.concurrency import run_in_threadpool

from imgupper.config import Settings
from imgupper.core.exceptions import StorageError

logger = logging.getLogger(__name__)


class ObjectStorage:
    """A thin wrapper around a boto3 S3 client bound to one bucket."""

    def __init__(
        self,
        bucket_name: str,
        *,
        endpoint: str,
        access_key: str,
        secret_key: str,
        region: str = "auto",
    ) -> None:
        self.bucket_name = bucket_name
        self.endpoint = endpoint
        self.client = boto3.client(
            "s3",
            endpoint_url=endpoint,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            region_name=region,
            config=Config(s3={"addressing_style": "path"}),
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ObjectStorage":
        return cls(
            settings.r2_bucket_name,
            endpoint=settings.storage_endpoint,
            access_key=settings.r2_access_key,
            secret_key=settings.r2_secret_key,
        )

    def _put(self, key: str, body: BinaryIO, content_type: str, public_read: bool) -> None:
        params = {
            "Bucket": self.bucket_name,
            "Key": key,
            "Body": body,
            "ContentType": content_type,
        }
        if public_read:
            params["ACL"] = "public-read"
        try:
            self.client.put_object(**params)
        except (BotoCoreError, ClientError) as exc:
            logger.error("put_object failed bucket=%s key=%s: %s", self.bucket_name, key, exc)
            raise StorageError(str(exc)) from exc

    async def put_object(
        self,
        key: str,
        body: BinaryIO,
        content_type: str,
        public_read: bool = True,
    ) -> None:
        """Write ``body`` to ``key``. Raises StorageError on any client failure."""
        await run_in_threadpool(self._put, key, body, content_type, public_read)
