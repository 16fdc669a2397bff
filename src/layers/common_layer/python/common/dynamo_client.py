from functools import lru_cache
from typing import Any, Dict, List, Optional
from decimal import Decimal

import boto3
from botocore.exceptions import ClientError
from loguru import logger

from common.settings import get_settings


class DynamoClient:
    """Thin gateway over a single DynamoDB table keyed by one attribute."""

    def __init__(self, table_name: Optional[str] = None, key_name="reviewId", table=None):
        settings = get_settings()
        self.table_name = table_name or settings.table_name
        self.key_name = key_name

        if table is None:
            resource = boto3.resource("dynamodb", region_name=settings.aws_region)
            table = resource.Table(self.table_name)
        self.table = table

    def _replace_decimals(self, obj):
        """Recursively converts Decimal to int/float for JSON serialization."""
        if isinstance(obj, list):
            return [self._replace_decimals(i) for i in obj]
        elif isinstance(obj, dict):
            return {k: self._replace_decimals(v) for k, v in obj.items()}
        elif isinstance(obj, Decimal):
            return int(obj) if obj % 1 == 0 else float(obj)
        return obj

    def _sanitize_float(self, obj):
        """Recursively converts float to Decimal for DynamoDB storage."""
        if isinstance(obj, float):
            return Decimal(str(obj))
        elif isinstance(obj, dict):
            return {k: self._sanitize_float(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [self._sanitize_float(i) for i in obj]
        return obj

    def _key(self, item_id: str) -> Dict[str, str]:
        return {self.key_name: item_id}

    def put_item(self, item: Dict[str, Any]) -> bool:
        try:
            self.table.put_item(Item=self._sanitize_float(item))
            return True
        except ClientError as e:
            logger.error(f"Error putting item: {e.response['Error']['Message']}")
            raise

    def get_item(self, item_id: str) -> Optional[Dict[str, Any]]:
        try:
            response = self.table.get_item(Key=self._key(item_id), ConsistentRead=True)
        except ClientError as e:
            logger.error(f"Error getting item: {e.response['Error']['Message']}")
            raise

        item = response.get("Item")
        return self._replace_decimals(item) if item else None

    def delete_item(self, item_id: str) -> bool:
        try:
            self.table.delete_item(Key=self._key(item_id))
            return True
        except ClientError as e:
            logger.error(f"Error deleting item: {e.response['Error']['Message']}")
            raise

    def scan_items(self) -> List[Dict[str, Any]]:
        """Returns every item in the table, following LastEvaluatedKey."""
        items: List[Dict[str, Any]] = []
        scan_kwargs: Dict[str, Any] = {}
        try:
            while True:
                response = self.table.scan(**scan_kwargs)
                items.extend(response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                scan_kwargs["ExclusiveStartKey"] = last_key
        except ClientError as e:
            logger.error(f"Error scanning table: {e.response['Error']['Message']}")
            raise

        return self._replace_decimals(items)


@lru_cache(maxsize=1)
def get_db_client() -> DynamoClient:
    return DynamoClient()
