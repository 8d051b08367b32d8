# helpers/s3_helper.py
"""Object storage for activity evidence (AWS S3)."""

import logging
import re
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from config.settings import settings

logger = logging.getLogger(__name__)

IMAGE_TYPES = {"image/jpeg", "image/png", "image/webp", "image/gif"}
VIDEO_TYPES = {"video/mp4"}


@dataclass
class StoredFile:
    file_key: str
    file_type: str   # image | video | other
    file_name: str
    file_size: int
    format: str


def generate_unique_key(original_name: str, prefix: str) -> str:
    ext = Path(original_name or "").suffix.lower()
    return f"{prefix}{uuid.uuid4().hex}{ext}"


def determine_file_type(content_type: Optional[str]) -> str:
    if content_type in IMAGE_TYPES:
        return "image"
    if content_type in VIDEO_TYPES:
        return "video"
    return "other"


def validate_file(file_name: str, content_type: Optional[str], size: int) -> Optional[str]:
    """
    Return an error message if the file is not acceptable evidence,
    otherwise None.
    """
    if (content_type or "").lower() not in settings.allowed_file_types_list:
        return f"{file_name}: file type not allowed ({content_type})"
    if size > settings.MAX_FILE_SIZE:
        max_mb = settings.MAX_FILE_SIZE / (1024 * 1024)
        return f"{file_name}: file exceeds the maximum size of {max_mb:g}MB"
    if size == 0:
        return f"{file_name}: file is empty"
    return None


class S3Service:
    """Handles S3 interactions."""

    _instance = None
    _s3_client = None

    def __new__(cls):
        """Singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            try:
                cls._instance._s3_client = boto3.client(
                    "s3",
                    aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
                    aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
                    region_name=settings.AWS_REGION,
                    config=Config(s3={"addressing_style": "path"})
                )
            except (BotoCoreError, ValueError) as e:
                logger.error(f"Failed to initialize S3 client: {e}")
                cls._instance._s3_client = None
        return cls._instance

    @property
    def client(self):
        return self._s3_client

    @staticmethod
    def _validated_bucket_name() -> str:
        bucket = (settings.AWS_S3_BUCKET or "").strip()
        if not bucket:
            raise ValueError("AWS_S3_BUCKET is not configured.")
        # https://docs.aws.amazon.com/AmazonS3/latest/userguide/bucketnamingrules.html
        if not re.fullmatch(r"[a-z0-9][a-z0-9.-]{1,61}[a-z0-9]", bucket):
            raise ValueError(f"Invalid AWS_S3_BUCKET value '{bucket}'.")
        return bucket

    def upload_evidence(self, data: bytes, file_name: str, content_type: Optional[str]) -> StoredFile:
        """Upload one evidence file and return its stored metadata."""
        if not self.client:
            raise ValueError("AWS S3 credentials not configured.")

        key = generate_unique_key(file_name, settings.EVIDENCE_PREFIX)
        try:
            self.client.put_object(
                Bucket=self._validated_bucket_name(),
                Key=key,
                Body=data,
                ContentType=content_type or "application/octet-stream",
                ACL="public-read",
            )
        except ClientError as e:
            logger.error(f"Error uploading evidence to S3: {e}")
            raise

        logger.info("Evidence uploaded to S3. Key: %s", key)
        return StoredFile(
            file_key=key,
            file_type=determine_file_type(content_type),
            file_name=file_name,
            file_size=len(data),
            format=Path(file_name or "").suffix.lstrip(".").lower(),
        )

    def delete_file(self, file_key: str) -> bool:
        """
        Best-effort delete. Failures are logged and reported through the
        return value, never raised.
        """
        if not self.client:
            logger.error("Cannot delete %s: AWS S3 credentials not configured.", file_key)
            return False
        try:
            self.client.delete_object(Bucket=self._validated_bucket_name(), Key=file_key)
        except (ClientError, BotoCoreError, ValueError) as e:
            logger.error(f"Error deleting file {file_key} from S3: {e}")
            return False
        logger.info("File deleted from S3. Key: %s", file_key)
        return True

    def get_public_url(self, file_key: Optional[str]) -> Optional[str]:
        bucket = (settings.AWS_S3_BUCKET or "").strip()
        if not bucket or not file_key:
            return None
        return f"https://{bucket}.s3.{settings.AWS_REGION}.amazonaws.com/{file_key}"


def get_storage() -> S3Service:
    """FastAPI dependency for the evidence storage backend."""
    return S3Service()
