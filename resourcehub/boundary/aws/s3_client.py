"""
S3 client for the marketplace storage bucket.

Issues presigned URLs for direct browser uploads and private downloads,
and manages objects (existence checks, deletion, public URLs).

Dependencies: boto3
System role: API-level object storage operations
"""

import logging
from datetime import datetime, timedelta, timezone

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from resourcehub.core.exceptions import StorageError

logger = logging.getLogger(__name__)


class S3StorageClient:
    """S3 client for resource files, thumbnails and avatars."""

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        public_base_url: str | None = None,
        client=None,
    ) -> None:
        """
        Initialize S3 client for the storage bucket.

        Args:
            bucket: S3 bucket name
            region: AWS region for S3 bucket
            public_base_url: CDN/base URL for public objects; defaults to
                the bucket's virtual-hosted URL
            client: Preconfigured boto3 S3 client (tests)
        """
        self._bucket = bucket
        self._region = region
        self._public_base_url = (
            public_base_url or f"https://{bucket}.s3.{region}.amazonaws.com"
        ).rstrip("/")
        self._s3_client = client or boto3.client("s3", region_name=region)

    @property
    def bucket(self) -> str:
        return self._bucket

    def generate_presigned_upload_url(
        self,
        key: str,
        content_type: str = "application/octet-stream",
        expires_in: int = 3600,
    ) -> tuple[str, datetime]:
        """
        Generate presigned URL for uploading an object.

        Args:
            key: Object key (path in bucket)
            content_type: MIME type of the file
            expires_in: URL expiry in seconds (default 1 hour)

        Returns:
            tuple[str, datetime]: (presigned_url, expires_at)

        Raises:
            StorageError: If presigned URL generation fails
        """
        try:
            presigned_url = self._s3_client.generate_presigned_url(
                ClientMethod="put_object",
                Params={
                    "Bucket": self._bucket,
                    "Key": key,
                    "ContentType": content_type,
                },
                ExpiresIn=expires_in,
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to generate upload URL: {e}", key=key) from e
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
        return presigned_url, expires_at

    def generate_presigned_download_url(
        self,
        key: str,
        expires_in: int = 3600,
        filename: str | None = None,
    ) -> tuple[str, datetime]:
        """
        Generate presigned URL for downloading an object.

        Args:
            key: Object key (path in bucket)
            expires_in: URL expiry in seconds (default 1 hour)
            filename: Suggested download name (Content-Disposition)

        Returns:
            tuple[str, datetime]: (presigned_url, expires_at)

        Raises:
            StorageError: If presigned URL generation fails
        """
        params = {"Bucket": self._bucket, "Key": key}
        if filename:
            safe_name = filename.replace('"', "")
            params["ResponseContentDisposition"] = f'attachment; filename="{safe_name}"'
        try:
            presigned_url = self._s3_client.generate_presigned_url(
                ClientMethod="get_object",
                Params=params,
                ExpiresIn=expires_in,
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to generate download URL: {e}", key=key) from e
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
        return presigned_url, expires_at

    def file_exists(self, key: str) -> bool:
        """
        Check if an object exists.

        Returns:
            bool: True if the object exists, False on 404

        Raises:
            StorageError: For errors other than a missing object
        """
        try:
            self._s3_client.head_object(Bucket=self._bucket, Key=key)
            return True
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("404", "NoSuchKey", "NotFound"):
                return False
            raise StorageError(f"Failed to check object: {e}", key=key) from e
        except BotoCoreError as e:
            raise StorageError(f"Failed to check object: {e}", key=key) from e

    def delete_object(self, key: str) -> None:
        """
        Delete an object. Deleting a missing key is not an error in S3.

        Raises:
            StorageError: If the delete request fails
        """
        try:
            self._s3_client.delete_object(Bucket=self._bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to delete object: {e}", key=key) from e
        logger.info("Deleted object", extra={"key": key})

    def public_url(self, key: str) -> str:
        """Public URL of an object served from the public base URL."""
        return f"{self._public_base_url}/{key}"

    def check_bucket(self) -> None:
        """
        Verify the bucket is reachable with the current credentials.

        Raises:
            StorageError: If head_bucket fails
        """
        try:
            self._s3_client.head_bucket(Bucket=self._bucket)
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Bucket {self._bucket} is not reachable: {e}") from e
