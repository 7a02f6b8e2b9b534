"""
DynamoDB utility functions for data access.
"""
import os
from typing import Dict, List, Optional, Any
import boto3
from boto3.dynamodb.conditions import Key

# Singleton instance
_dynamo_instance = None

def get_dynamo() -> 'DynamoDBClient':
    """
    Get or create singleton DynamoDB client instance.

    Always go through this function rather than instantiating DynamoDBClient
    directly, so every store shares one table handle.

    Returns:
        DynamoDBClient: Singleton instance of DynamoDB client

    Raises:
        EnvironmentError: If TRACKER_TABLE_NAME environment variable is not set
    """
    global _dynamo_instance
    if _dynamo_instance is None:
        try:
            table_name = os.environ['TRACKER_TABLE_NAME']
        except KeyError:
            raise EnvironmentError(
                "TRACKER_TABLE_NAME environment variable not set. "
                "This variable must be set to the DynamoDB table name."
            )
        _dynamo_instance = DynamoDBClient(table_name)
    return _dynamo_instance

class DynamoDBClient:
    """Client for interacting with DynamoDB table."""

    def __init__(self, table_name: str):
        self.dynamodb = boto3.resource('dynamodb')
        self.table = self.dynamodb.Table(table_name)

    def put_item(self, item: Dict[str, Any]) -> Dict[str, Any]:
        """
        Put a single item into the table.

        Args:
            item: Dictionary containing item attributes

        Returns:
            Response from DynamoDB
        """
        return self.table.put_item(Item=item)

    def get_item(self, key: Dict[str, str]) -> Optional[Dict[str, Any]]:
        """
        Get a single item from the table.

        Args:
            key: Dictionary containing partition key and sort key

        Returns:
            Item if found, None otherwise
        """
        response = self.table.get_item(Key=key)
        return response.get('Item')

    def query_items(
        self,
        partition_key: str,
        partition_value: str,
        sort_key_prefix: Optional[str] = None,
        newest_first: bool = False,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """
        Query items by partition key, optionally narrowed by sort key prefix.

        Args:
            partition_key: Name of partition key
            partition_value: Value of partition key
            sort_key_prefix: Optional prefix the SK must begin with
            newest_first: Return items in descending sort key order
            limit: Optional maximum number of items

        Returns:
            List of matching items
        """
        key_condition = Key(partition_key).eq(partition_value)
        if sort_key_prefix:
            key_condition = key_condition & Key("SK").begins_with(sort_key_prefix)

        params: Dict[str, Any] = {
            "KeyConditionExpression": key_condition,
            "ScanIndexForward": not newest_first
        }
        if limit:
            params["Limit"] = limit

        response = self.table.query(**params)
        return response.get('Items', [])

def create_pk(user_id: str) -> str:
    """Create partition key from user ID."""
    return f"USER#{user_id}"

def create_onboarding_sk() -> str:
    """Create sort key for the onboarding profile."""
    return "ONBOARDING"

def create_chat_sk(timestamp: str) -> str:
    """
    Create sort key for a chat turn.

    Args:
        timestamp: ISO format timestamp of the exchange

    Returns:
        Sort key in format "CHAT#{timestamp}"
    """
    return f"CHAT#{timestamp}"
