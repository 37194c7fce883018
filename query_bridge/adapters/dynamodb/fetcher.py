"""
DynamoDB record fetcher.

Implements IRecordFetcher with paginated scans, returning plain
JSON-native records.
"""

import asyncio
import base64
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

import boto3
from boto3.dynamodb.types import Binary, TypeDeserializer

logger = logging.getLogger(__name__)


class DynamoRecordFetcher:
    """
    Reads DynamoDB tables page by page.

    The continuation token is DynamoDB's ``LastEvaluatedKey``. Credentials
    come from the boto3 default chain unless a client is supplied.
    """

    def __init__(self, region: Optional[str] = None, client: Any = None):
        """
        Initialize DynamoDB fetcher.

        Args:
            region: AWS region name
            client: Optional pre-built boto3 DynamoDB client
        """
        self.region = region
        self.client = client or boto3.client("dynamodb", region_name=region)
        self._deserializer = TypeDeserializer()

    async def fetch_page(
        self, table_name: str, continuation_token: Optional[Dict[str, Any]] = None
    ) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """
        Scan one page of a table.

        Args:
            table_name: DynamoDB table name
            continuation_token: ``LastEvaluatedKey`` of the previous page

        Returns:
            Tuple of (records, next continuation token or None)
        """
        scan_kwargs: Dict[str, Any] = {"TableName": table_name}
        if continuation_token:
            scan_kwargs["ExclusiveStartKey"] = continuation_token

        response = await asyncio.to_thread(self.client.scan, **scan_kwargs)

        items = [self.unmarshall(item) for item in response.get("Items", [])]
        next_token = response.get("LastEvaluatedKey")
        logger.debug("Scanned %d items from '%s' (more: %s)", len(items), table_name, bool(next_token))
        return items, next_token

    def unmarshall(self, item: Dict[str, Any]) -> Dict[str, Any]:
        """Convert a DynamoDB-typed item into a plain record."""
        return {
            key: _to_native(self._deserializer.deserialize(value))
            for key, value in item.items()
        }


def _to_native(value: Any) -> Any:
    """Normalize deserialized DynamoDB values to JSON-native Python values."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, Binary):
        return base64.b64encode(value.value).decode("ascii")
    if isinstance(value, dict):
        return {k: _to_native(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_native(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return [_to_native(v) for v in sorted(value, key=str)]
    return value
