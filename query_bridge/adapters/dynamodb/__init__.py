"""DynamoDB adapter for the query bridge."""

from query_bridge.adapters.dynamodb.fetcher import DynamoRecordFetcher

__all__ = ["DynamoRecordFetcher"]
