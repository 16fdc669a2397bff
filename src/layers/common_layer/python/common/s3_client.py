from functools import lru_cache
from typing import Any, Dict

import boto3
from botocore.exceptions import ClientError
from loguru import logger

from common.settings import get_settings


@lru_cache(maxsize=1)
def get_s3_client():
    return boto3.client("s3", region_name=get_settings().aws_region)


def open_object(bucket: str, key: str, client=None) -> Dict[str, Any]:
    """
    Starts a streaming GetObject.

    Returns a dict with the declared ``content_type`` and the unread
    botocore ``StreamingBody`` under ``body``.
    """
    client = client or get_s3_client()
    try:
        response = client.get_object(Bucket=bucket, Key=key)
    except ClientError as e:
        logger.error(
            f"Error opening s3://{bucket}/{key}: {e.response['Error']['Message']}"
        )
        raise

    return {
        "content_type": response.get("ContentType"),
        "body": response["Body"],
    }
