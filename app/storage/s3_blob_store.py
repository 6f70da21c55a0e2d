import json
from datetime import datetime, timezone
from typing import List, Optional
from urllib.parse import urlencode

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.config import settings
from app.core.exceptions import StorageConfigurationError
from app.storage.blob_store import BlobNotFoundError, BlobStore, DelegationScope
import logging

logger = logging.getLogger(__name__)

# STS federation tokens must live between 15 minutes and 36 hours
_MIN_TOKEN_SECONDS = 900
_MAX_TOKEN_SECONDS = 129600

_OBJECT_ACTIONS = {
    DelegationScope.READ: ["s3:GetObject"],
    DelegationScope.READ_WRITE: ["s3:GetObject", "s3:PutObject"],
}


class S3Storage(BlobStore):
    def __init__(self, s3_client=None, sts_client=None, bucket_name: Optional[str] = None):
        self.bucket_name = bucket_name or settings.s3_bucket_name
        if not self.bucket_name:
            raise StorageConfigurationError("S3 bucket name must be configured")

        if s3_client is None or sts_client is None:
            if not all([settings.aws_access_key_id, settings.aws_secret_access_key]):
                raise StorageConfigurationError("AWS S3 credentials and bucket name must be configured")
            session = boto3.session.Session(
                aws_access_key_id=settings.aws_access_key_id,
                aws_secret_access_key=settings.aws_secret_access_key,
                region_name=settings.aws_region
            )
            s3_client = s3_client or session.client('s3', endpoint_url=settings.s3_endpoint_url)
            sts_client = sts_client or session.client('sts')

        self.s3_client = s3_client
        self.sts_client = sts_client

    @property
    def bucket_url(self) -> str:
        if settings.s3_endpoint_url:
            return f"{settings.s3_endpoint_url.rstrip('/')}/{self.bucket_name}"
        return f"https://{self.bucket_name}.s3.{settings.aws_region}.amazonaws.com"

    def list(self, prefix: str = "") -> List[str]:
        keys = []
        paginator = self.s3_client.get_paginator('list_objects_v2')
        for page in paginator.paginate(Bucket=self.bucket_name, Prefix=prefix):
            for item in page.get('Contents', []):
                keys.append(item['Key'])
        return keys

    def get(self, key: str) -> bytes:
        try:
            response = self.s3_client.get_object(Bucket=self.bucket_name, Key=key)
        except ClientError as e:
            code = e.response.get('Error', {}).get('Code')
            if code in ('NoSuchKey', '404', 'NotFound'):
                raise BlobNotFoundError(key) from None
            logger.error(f"Failed to read {key} from S3: {str(e)}")
            raise
        return response['Body'].read()

    def put(self, key: str, data: bytes, content_type: str = "application/json") -> None:
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=data,
                ContentType=content_type
            )
        except ClientError as e:
            logger.error(f"Failed to upload {key} to S3: {str(e)}")
            raise

    def _policy(self, scope: DelegationScope) -> str:
        return json.dumps({
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Effect": "Allow",
                    "Action": ["s3:ListBucket"],
                    "Resource": f"arn:aws:s3:::{self.bucket_name}",
                },
                {
                    "Effect": "Allow",
                    "Action": _OBJECT_ACTIONS[scope],
                    "Resource": f"arn:aws:s3:::{self.bucket_name}/*",
                },
            ],
        })

    def issue_delegation_token(self, scope: DelegationScope, expires_at: datetime) -> str:
        """Mint bucket-scoped temporary credentials and return them as a bucket URL."""
        seconds = int((expires_at - datetime.now(timezone.utc)).total_seconds())
        seconds = max(_MIN_TOKEN_SECONDS, min(_MAX_TOKEN_SECONDS, seconds))
        try:
            response = self.sts_client.get_federation_token(
                Name=f"scoreboard-{scope.value}",
                Policy=self._policy(scope),
                DurationSeconds=seconds
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageConfigurationError(
                f"Cannot generate delegation tokens with the configured AWS credentials: {e}"
            ) from e

        credentials = response['Credentials']
        query = urlencode({
            "sp": scope.value,
            "accessKeyId": credentials['AccessKeyId'],
            "secretAccessKey": credentials['SecretAccessKey'],
            "sessionToken": credentials['SessionToken'],
            "se": credentials.get('Expiration', expires_at).isoformat(),
        })
        return f"{self.bucket_url}?{query}"
