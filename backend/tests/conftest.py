"""Pytest configuration and fixtures for hotel directory backend tests.

This module provides reusable fixtures for testing:
- DynamoDB mocking with moto (hotels, rooms, users tables)
- Factories for stored hotels, rooms and users
- A HotelService wired to the mocked tables
"""

import os
import uuid
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from typing import Any, Generator

import boto3
import pytest
from moto import mock_aws

# === Environment Setup ===

# Set environment variables for testing before imports
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-1")
os.environ.setdefault("DYNAMODB_TABLE_PREFIX", "test-hotel")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

TABLE_PREFIX = os.environ["DYNAMODB_TABLE_PREFIX"]

OWNER_ID = "7c1f2e4a-9b3d-4c5e-8f6a-1b2c3d4e5f60"
OTHER_OWNER_ID = "0a9b8c7d-6e5f-4a3b-9c2d-1e0f9a8b7c6d"
ADMIN_ID = "ad000000-0000-4000-8000-000000000001"

BASE_TIME = datetime(2025, 3, 1, 9, 0, tzinfo=UTC)


# === Singleton Reset ===


@pytest.fixture(autouse=True)
def reset_service_singletons() -> Generator[None, None, None]:
    """Reset cached services and the DynamoDB singleton around each test.

    Tests using mock_aws get a fresh service instance inside the mock
    context rather than one built in a previous test.
    """
    from hotel_api.dependencies import reset_services

    reset_services()
    yield
    reset_services()


# === DynamoDB Fixtures ===


@pytest.fixture
def aws_credentials() -> None:
    """Mocked AWS Credentials for moto."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "eu-west-1"


@pytest.fixture
def dynamodb_client(aws_credentials: None) -> Generator[Any, None, None]:
    """Create a mocked DynamoDB client."""
    with mock_aws():
        client = boto3.client("dynamodb", region_name="eu-west-1")
        yield client


@pytest.fixture
def create_tables(dynamodb_client: Any) -> None:
    """Create the hotels, rooms and users tables for testing."""
    tables = [
        {
            "TableName": f"{TABLE_PREFIX}-hotels",
            "KeySchema": [{"AttributeName": "hotel_id", "KeyType": "HASH"}],
            "AttributeDefinitions": [
                {"AttributeName": "hotel_id", "AttributeType": "S"},
                {"AttributeName": "owner_id", "AttributeType": "S"},
                {"AttributeName": "status", "AttributeType": "S"},
                {"AttributeName": "created_at", "AttributeType": "S"},
            ],
            "GlobalSecondaryIndexes": [
                {
                    "IndexName": "owner_id-index",
                    "KeySchema": [
                        {"AttributeName": "owner_id", "KeyType": "HASH"},
                        {"AttributeName": "created_at", "KeyType": "RANGE"},
                    ],
                    "Projection": {"ProjectionType": "ALL"},
                },
                {
                    "IndexName": "status-index",
                    "KeySchema": [
                        {"AttributeName": "status", "KeyType": "HASH"},
                        {"AttributeName": "created_at", "KeyType": "RANGE"},
                    ],
                    "Projection": {"ProjectionType": "ALL"},
                },
            ],
            "BillingMode": "PAY_PER_REQUEST",
        },
        {
            "TableName": f"{TABLE_PREFIX}-rooms",
            "KeySchema": [{"AttributeName": "room_id", "KeyType": "HASH"}],
            "AttributeDefinitions": [
                {"AttributeName": "room_id", "AttributeType": "S"},
                {"AttributeName": "hotel_id", "AttributeType": "S"},
            ],
            "GlobalSecondaryIndexes": [
                {
                    "IndexName": "hotel_id-index",
                    "KeySchema": [{"AttributeName": "hotel_id", "KeyType": "HASH"}],
                    "Projection": {"ProjectionType": "ALL"},
                },
            ],
            "BillingMode": "PAY_PER_REQUEST",
        },
        {
            "TableName": f"{TABLE_PREFIX}-users",
            "KeySchema": [{"AttributeName": "user_id", "KeyType": "HASH"}],
            "AttributeDefinitions": [
                {"AttributeName": "user_id", "AttributeType": "S"},
            ],
            "BillingMode": "PAY_PER_REQUEST",
        },
    ]

    for table_config in tables:
        dynamodb_client.create_table(**table_config)


@pytest.fixture
def db(create_tables: None) -> Any:
    """DynamoDBService bound to the mocked tables."""
    from hotel_shared.services.dynamodb import get_dynamodb_service

    return get_dynamodb_service()


@pytest.fixture
def hotel_service(db: Any) -> Any:
    """HotelService reading room prices from the mocked rooms table."""
    from hotel_shared.services.hotels import HotelService

    return HotelService(db=db)


# === Data Factories ===


@pytest.fixture
def add_hotel(db: Any) -> Callable[..., dict[str, Any]]:
    """Store a hotel item directly, bypassing the service.

    Each call is stamped one minute after the previous one so listing order
    is deterministic. Pass created_at to override.
    """
    counter = {"n": 0}

    def _add(**fields: Any) -> dict[str, Any]:
        counter["n"] += 1
        created_at = (BASE_TIME + timedelta(minutes=counter["n"])).isoformat(
            timespec="microseconds"
        )
        item: dict[str, Any] = {
            "hotel_id": str(uuid.uuid4()),
            "name": f"Hotel {counter['n']}",
            "city": "Busan",
            "images": [],
            "rating": Decimal("4"),
            "freebies": [],
            "amenities": [],
            "status": "pending",
            "owner_id": OWNER_ID,
            "created_at": created_at,
            "updated_at": created_at,
        }
        item.update(fields)
        db.put_item("hotels", item)
        return item

    return _add


@pytest.fixture
def add_room(db: Any) -> Callable[..., dict[str, Any]]:
    """Store a room for a hotel."""

    def _add(hotel_id: str, price: Any) -> dict[str, Any]:
        item = {
            "room_id": str(uuid.uuid4()),
            "hotel_id": hotel_id,
            "price": Decimal(str(price)),
        }
        db.put_item("rooms", item)
        return item

    return _add


@pytest.fixture
def add_user(db: Any) -> Callable[..., dict[str, Any]]:
    """Store a user record used for owner projections."""

    def _add(user_id: str, **fields: Any) -> dict[str, Any]:
        item = {
            "user_id": user_id,
            "name": "Kim Minji",
            "email": "minji@example.com",
            "business_number": "123-45-67890",
            "role": "owner",
        }
        item.update(fields)
        db.put_item("users", item)
        return item

    return _add
