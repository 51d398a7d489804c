"""DynamoDB service wrapper for type-safe table operations."""

import os
import threading
import time
from typing import Any

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

# Module-level singleton for connection reuse
_dynamodb_service_instance: "DynamoDBService | None" = None

# BatchGetItem limits
BATCH_GET_SIZE = 100
BATCH_GET_MAX_ATTEMPTS = 5
BATCH_GET_BACKOFF_SECONDS = 0.05


class UnprocessedKeysError(Exception):
    """BatchGetItem kept returning unprocessed keys after every retry."""

    def __init__(self, table: str, keys: list[dict[str, Any]]) -> None:
        self.table = table
        self.keys = keys
        super().__init__(f"{len(keys)} keys left unprocessed in {table}")


def get_dynamodb_service(environment: str | None = None) -> "DynamoDBService":
    """Get or create the singleton DynamoDB service instance.

    This avoids creating new boto3 resources on every request.

    Args:
        environment: Environment name. Only used on first call.

    Returns:
        Shared DynamoDBService instance
    """
    global _dynamodb_service_instance
    if _dynamodb_service_instance is None:
        _dynamodb_service_instance = DynamoDBService(environment)
    return _dynamodb_service_instance


def reset_dynamodb_service() -> None:
    """Reset the singleton instance (for testing only).

    This allows tests to create a fresh DynamoDBService inside
    a mock_aws context.
    """
    global _dynamodb_service_instance
    _dynamodb_service_instance = None


class DynamoDBService:
    """Service for DynamoDB operations with environment-aware table names."""

    def __init__(self, environment: str | None = None) -> None:
        """Initialize DynamoDB service.

        Args:
            environment: Environment name (dev/prod). Defaults to ENVIRONMENT env var.
        """
        self.environment = environment or os.getenv("ENVIRONMENT", "dev")
        # Allow override via DYNAMODB_TABLE_PREFIX for testing
        self.name_prefix = os.getenv(
            "DYNAMODB_TABLE_PREFIX", f"hotel-{self.environment}"
        )
        # boto3 resources are not thread-safe: one per thread
        self._local = threading.local()

    @property
    def resource(self) -> Any:
        """DynamoDB service resource owned by the calling thread."""
        resource = getattr(self._local, "resource", None)
        if resource is None:
            resource = boto3.resource("dynamodb")
            self._local.resource = resource
        return resource

    def _table_name(self, table: str) -> str:
        """Get full table name with prefix."""
        return f"{self.name_prefix}-{table}"

    def _get_table(self, table: str) -> Any:
        """Get DynamoDB table resource."""
        return self.resource.Table(self._table_name(table))

    # Generic CRUD operations

    def get_item(
        self,
        table: str,
        key: dict[str, Any],
    ) -> dict[str, Any] | None:
        """Get a single item by key.

        Args:
            table: Table name without prefix
            key: Primary key dict

        Returns:
            Item dict or None if not found
        """
        response = self._get_table(table).get_item(Key=key)
        item: dict[str, Any] | None = response.get("Item")
        return item

    def put_item(
        self,
        table: str,
        item: dict[str, Any],
        condition_expression: str | None = None,
    ) -> bool:
        """Put an item into the table.

        Args:
            table: Table name without prefix
            item: Item to store
            condition_expression: Optional condition for write

        Returns:
            True if successful, False if condition failed
        """
        try:
            kwargs: dict[str, Any] = {"Item": item}
            if condition_expression:
                kwargs["ConditionExpression"] = condition_expression

            self._get_table(table).put_item(**kwargs)
            return True
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                return False
            raise

    def update_item(
        self,
        table: str,
        key: dict[str, Any],
        update_expression: str,
        expression_attribute_values: dict[str, Any],
        expression_attribute_names: dict[str, str] | None = None,
        condition_expression: str | None = None,
    ) -> dict[str, Any] | None:
        """Update an item with expressions.

        Args:
            table: Table name without prefix
            key: Primary key dict
            update_expression: DynamoDB update expression
            expression_attribute_values: Values for expression
            expression_attribute_names: Names for expression (for reserved words)
            condition_expression: Optional condition for update

        Returns:
            Updated attributes or None if condition failed
        """
        try:
            kwargs: dict[str, Any] = {
                "Key": key,
                "UpdateExpression": update_expression,
                "ExpressionAttributeValues": expression_attribute_values,
                "ReturnValues": "ALL_NEW",
            }
            if expression_attribute_names:
                kwargs["ExpressionAttributeNames"] = expression_attribute_names
            if condition_expression:
                kwargs["ConditionExpression"] = condition_expression

            response = self._get_table(table).update_item(**kwargs)
            attrs: dict[str, Any] | None = response.get("Attributes")
            return attrs
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                return None
            raise

    def query(
        self,
        table: str,
        key_condition: Any,
        index_name: str | None = None,
        filter_expression: Any | None = None,
        scan_index_forward: bool = True,
        max_items: int | None = None,
    ) -> list[dict[str, Any]]:
        """Query table or GSI, following pagination.

        Args:
            table: Table name without prefix
            key_condition: Boto3 Key condition
            index_name: GSI name (optional)
            filter_expression: Additional filter (optional)
            scan_index_forward: Sort order (True=ascending)
            max_items: Stop once this many items are read (default: all)

        Returns:
            List of items
        """
        kwargs: dict[str, Any] = {
            "KeyConditionExpression": key_condition,
            "ScanIndexForward": scan_index_forward,
        }
        if index_name:
            kwargs["IndexName"] = index_name
        if filter_expression:
            kwargs["FilterExpression"] = filter_expression
        if max_items is not None:
            kwargs["Limit"] = max_items

        return self._collect(self._get_table(table).query, kwargs, max_items)

    def scan(
        self,
        table: str,
        filter_expression: Any | None = None,
    ) -> list[dict[str, Any]]:
        """Scan a whole table.

        Args:
            table: Table name without prefix
            filter_expression: Optional filter

        Returns:
            List of items in no particular order
        """
        kwargs: dict[str, Any] = {}
        if filter_expression:
            kwargs["FilterExpression"] = filter_expression

        return self._collect(self._get_table(table).scan, kwargs)

    def count(
        self,
        table: str,
        key_condition: Any | None = None,
        index_name: str | None = None,
    ) -> int:
        """Count matching items without transferring them.

        Queries when a key condition is given, otherwise scans.

        Args:
            table: Table name without prefix
            key_condition: Optional Boto3 Key condition
            index_name: GSI name (optional)

        Returns:
            Number of matching items
        """
        table_resource = self._get_table(table)
        kwargs: dict[str, Any] = {"Select": "COUNT"}
        if index_name:
            kwargs["IndexName"] = index_name

        if key_condition is not None:
            kwargs["KeyConditionExpression"] = key_condition
            operation = table_resource.query
        else:
            operation = table_resource.scan

        total = 0
        while True:
            response = operation(**kwargs)
            total += int(response.get("Count", 0))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return total
            kwargs["ExclusiveStartKey"] = last_key

    def batch_get(
        self,
        table: str,
        keys: list[dict[str, Any]],
    ) -> list[dict[str, Any]]:
        """Batch get items by keys.

        Keys DynamoDB returns as unprocessed are re-requested with
        exponential backoff.

        Args:
            table: Table name without prefix
            keys: List of primary key dicts

        Returns:
            List of found items

        Raises:
            UnprocessedKeysError: If keys remain unprocessed after every retry
        """
        if not keys:
            return []

        table_name = self._table_name(table)
        items: list[dict[str, Any]] = []
        for start in range(0, len(keys), BATCH_GET_SIZE):
            pending = keys[start : start + BATCH_GET_SIZE]
            for attempt in range(BATCH_GET_MAX_ATTEMPTS):
                if attempt:
                    time.sleep(BATCH_GET_BACKOFF_SECONDS * 2**attempt)
                response = self.resource.batch_get_item(
                    RequestItems={table_name: {"Keys": pending}}
                )
                items.extend(response.get("Responses", {}).get(table_name, []))
                unprocessed = response.get("UnprocessedKeys", {}).get(table_name)
                pending = unprocessed.get("Keys", []) if unprocessed else []
                if not pending:
                    break
            if pending:
                raise UnprocessedKeysError(table_name, pending)
        return items

    # Convenience methods for common patterns

    def query_by_gsi(
        self,
        table: str,
        index_name: str,
        partition_key_name: str,
        partition_key_value: str,
        sort_key_condition: Any | None = None,
        scan_index_forward: bool = True,
        max_items: int | None = None,
    ) -> list[dict[str, Any]]:
        """Query a GSI by partition key.

        Args:
            table: Table name without prefix
            index_name: GSI name
            partition_key_name: Name of partition key attribute
            partition_key_value: Value to query
            sort_key_condition: Optional sort key condition
            scan_index_forward: Sort order (True=ascending)
            max_items: Stop once this many items are read (default: all)

        Returns:
            List of items
        """
        key_condition = Key(partition_key_name).eq(partition_key_value)
        if sort_key_condition:
            key_condition = key_condition & sort_key_condition

        return self.query(
            table,
            key_condition,
            index_name=index_name,
            scan_index_forward=scan_index_forward,
            max_items=max_items,
        )

    def count_by_gsi(
        self,
        table: str,
        index_name: str,
        partition_key_name: str,
        partition_key_value: str,
    ) -> int:
        """Count items sharing a GSI partition key."""
        return self.count(
            table,
            key_condition=Key(partition_key_name).eq(partition_key_value),
            index_name=index_name,
        )

    @staticmethod
    def _collect(
        operation: Any,
        kwargs: dict[str, Any],
        max_items: int | None = None,
    ) -> list[dict[str, Any]]:
        """Run a query/scan until LastEvaluatedKey is exhausted or max_items are read."""
        items: list[dict[str, Any]] = []
        while True:
            response = operation(**kwargs)
            items.extend(response.get("Items", []))
            if max_items is not None and len(items) >= max_items:
                return items[:max_items]
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return items
            kwargs = {**kwargs, "ExclusiveStartKey": last_key}
