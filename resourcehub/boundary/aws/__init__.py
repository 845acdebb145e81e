"""
AWS boundary layer.

Exports:
  - S3StorageClient: Presigned URLs and object management for the storage bucket
"""

from resourcehub.boundary.aws.s3_client import S3StorageClient

__all__ = ["S3StorageClient"]
