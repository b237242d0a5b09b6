import logging
import uuid
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from storagebox.core.config import Settings
from storagebox.core.exceptions import DependencyError, UploadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredBlob:
    url: str
    key: str
    size: int


def build_s3_client(settings: Settings):
    return boto3.client(
        "s3",
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=settings.aws_secret_access_key,
        region_name=settings.aws_region,
        endpoint_url=settings.aws_endpoint_url,
    )


class S3BlobStore:
    def __init__(self, client, bucket: str, region: str, key_prefix: str = "", endpoint_url: Optional[str] = None):
        self.client = client
        self.bucket = bucket
        self.region = region
        self.key_prefix = key_prefix.strip("/")
        self.endpoint_url = endpoint_url

    @classmethod
    def from_settings(cls, settings: Settings, client=None) -> "S3BlobStore":
        return cls(
            client or build_s3_client(settings),
            bucket=settings.aws_s3_bucket_name,
            region=settings.aws_region,
            key_prefix=settings.s3_key_prefix,
            endpoint_url=settings.aws_endpoint_url,
        )

    def make_key(self, user_id: int, filename: str) -> str:
        # Unique key, grouped per user
        key = f"{user_id}/{uuid.uuid4().hex}_{filename}"
        if self.key_prefix:
            key = f"{self.key_prefix}/{key}"
        return key

    def url_for(self, key: str) -> str:
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{quote(key)}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{quote(key)}"

    def put(self, user_id: int, filename: str, content: bytes, content_type: str) -> StoredBlob:
        """Upload content and return its location and the size S3 reports."""
        key = self.make_key(user_id, filename)
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=content,
                ContentType=content_type or "application/octet-stream",
            )
            head = self.client.head_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as exc:
            raise UploadError() from exc

        return StoredBlob(url=self.url_for(key), key=key, size=int(head["ContentLength"]))

    def delete(self, key: str) -> None:
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as exc:
            raise DependencyError("Could not delete stored object") from exc
