#!/usr/bin/env python3
"""Seed development database with hotel directory demo data.

This script creates (optionally) and populates the DynamoDB tables used by
the hotel API with realistic demo data for local development:
- Owner and admin user records
- Hotels in every workflow status (pending, approved, rejected)
- Rooms with prices so public listings show a minimum price

Usage:
    python scripts/seed_data.py --env dev
    python scripts/seed_data.py --env dev --create-tables
    python scripts/seed_data.py --env dev --clear-first
    python scripts/seed_data.py --env dev --endpoint-url http://localhost:8000
"""

import argparse
import os
import sys
import uuid
from datetime import UTC, datetime, timedelta
from decimal import Decimal

import boto3
from botocore.exceptions import ClientError

# Global connection settings (set by main() from args)
_AWS_REGION: str | None = None
_ENDPOINT_URL: str | None = None

TABLES = ["hotels", "rooms", "users"]


def get_dynamodb_resource():
    """Get DynamoDB resource with configured region and endpoint."""
    kwargs = {}
    if _AWS_REGION:
        kwargs["region_name"] = _AWS_REGION
    if _ENDPOINT_URL:
        kwargs["endpoint_url"] = _ENDPOINT_URL
    return boto3.resource("dynamodb", **kwargs)


def get_table_name(env: str, table: str) -> str:
    """Get full table name with prefix (DYNAMODB_TABLE_PREFIX overrides)."""
    prefix = os.environ.get("DYNAMODB_TABLE_PREFIX", f"hotel-{env}")
    return f"{prefix}-{table}"


def table_definitions(env: str) -> list[dict]:
    """Key schemas and GSIs expected by the hotel services."""
    return [
        {
            "TableName": get_table_name(env, "hotels"),
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
            "TableName": get_table_name(env, "rooms"),
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
            "TableName": get_table_name(env, "users"),
            "KeySchema": [{"AttributeName": "user_id", "KeyType": "HASH"}],
            "AttributeDefinitions": [
                {"AttributeName": "user_id", "AttributeType": "S"},
            ],
            "BillingMode": "PAY_PER_REQUEST",
        },
    ]


def create_tables(env: str) -> None:
    """Create missing tables and wait until they are active."""
    dynamodb = get_dynamodb_resource()
    client = dynamodb.meta.client

    print("Creating tables...")
    for definition in table_definitions(env):
        name = definition["TableName"]
        try:
            client.create_table(**definition)
        except ClientError as e:
            if e.response["Error"]["Code"] == "ResourceInUseException":
                print(f"  ○ {name} already exists")
                continue
            raise
        client.get_waiter("table_exists").wait(TableName=name)
        print(f"  ✓ {name}")


def create_users(env: str) -> dict[str, dict]:
    """Create owner and admin user records.

    Returns:
        Users keyed by role label
    """
    users = {
        "owner": {
            "user_id": str(uuid.uuid4()),
            "name": "Kim Minji",
            "email": "minji.owner@example.com",
            "business_number": "123-45-67890",
            "role": "owner",
        },
        "second_owner": {
            "user_id": str(uuid.uuid4()),
            "name": "Park Jisoo",
            "email": "jisoo.owner@example.com",
            "business_number": "987-65-43210",
            "role": "owner",
        },
        "admin": {
            "user_id": str(uuid.uuid4()),
            "name": "Directory Admin",
            "email": "admin@example.com",
            "role": "admin",
        },
    }

    table = get_dynamodb_resource().Table(get_table_name(env, "users"))
    print(f"Seeding users table: {table.name}")

    for user in users.values():
        table.put_item(Item=user)
        print(f"  ✓ {user['name']} ({user['role']}) x-user-sub={user['user_id']}")

    return users


def create_hotels(env: str, users: dict[str, dict]) -> list[dict]:
    """Create hotels across every workflow status."""
    base = datetime.now(UTC) - timedelta(days=30)
    owner_id = users["owner"]["user_id"]
    second_owner_id = users["second_owner"]["user_id"]

    specs = [
        ("Sea View", "Busan", "Haeundae-gu 12", "approved", owner_id, Decimal("4.6")),
        ("Hanok Stay", "Seoul", "Jongno-gu 3", "approved", owner_id, Decimal("4.8")),
        ("Jeju Breeze", "Jeju", None, "approved", second_owner_id, Decimal("4.1")),
        ("Mountain Lodge", "Gangneung", "Sacheon-myeon 44", "pending", owner_id, Decimal("0")),
        ("Harbor Inn", "Incheon", None, "pending", second_owner_id, Decimal("3.5")),
        ("Old Motel", "Daegu", None, "rejected", second_owner_id, Decimal("2.0")),
    ]

    hotels = []
    for index, (name, city, address, status, owner, rating) in enumerate(specs):
        created_at = (base + timedelta(days=index)).isoformat(timespec="microseconds")
        hotel = {
            "hotel_id": str(uuid.uuid4()),
            "name": name,
            "city": city,
            "images": [f"https://cdn.example.com/hotels/{name.lower().replace(' ', '-')}.jpg"],
            "rating": rating,
            "freebies": ["breakfast", "parking"],
            "amenities": ["wifi", "air conditioning"],
            "status": status,
            "owner_id": owner,
            "created_at": created_at,
            "updated_at": created_at,
        }
        if address:
            hotel["address"] = address
        hotels.append(hotel)

    table = get_dynamodb_resource().Table(get_table_name(env, "hotels"))
    print(f"Seeding hotels table: {table.name}")

    with table.batch_writer() as batch:
        for hotel in hotels:
            batch.put_item(Item=hotel)
            print(f"  ✓ {hotel['name']} ({hotel['city']}) [{hotel['status']}]")

    return hotels


def create_rooms(env: str, hotels: list[dict]) -> int:
    """Create rooms for every hotel except the last pending one.

    The hotel without rooms shows a minimum price of 0 in listings.

    Returns:
        Number of rooms created
    """
    room_types = [("Standard", 80000), ("Deluxe", 120000), ("Suite", 210000)]
    table = get_dynamodb_resource().Table(get_table_name(env, "rooms"))
    print(f"Seeding rooms table: {table.name}")

    count = 0
    with table.batch_writer() as batch:
        for index, hotel in enumerate(hotels):
            if hotel["name"] == "Harbor Inn":
                continue
            for room_name, price in room_types:
                batch.put_item(
                    Item={
                        "room_id": str(uuid.uuid4()),
                        "hotel_id": hotel["hotel_id"],
                        "name": room_name,
                        "price": Decimal(price + index * 5000),
                    }
                )
                count += 1

    print(f"  ✓ Created {count} rooms")
    return count


def clear_table(env: str, table_name: str) -> int:
    """Clear all items from a table.

    Returns:
        Number of items deleted
    """
    table = get_dynamodb_resource().Table(get_table_name(env, table_name))
    key_attrs = [k["AttributeName"] for k in table.key_schema]

    deleted = 0
    kwargs: dict = {}
    with table.batch_writer() as batch:
        while True:
            response = table.scan(**kwargs)
            for item in response.get("Items", []):
                batch.delete_item(Key={k: item[k] for k in key_attrs})
                deleted += 1
            if not response.get("LastEvaluatedKey"):
                break
            kwargs["ExclusiveStartKey"] = response["LastEvaluatedKey"]

    return deleted


def main() -> int:
    """Run the seed script."""
    global _AWS_REGION, _ENDPOINT_URL

    parser = argparse.ArgumentParser(description="Seed hotel directory tables with demo data")
    parser.add_argument(
        "--env",
        choices=["dev", "staging", "prod"],
        default="dev",
        help="Target environment (default: dev)",
    )
    parser.add_argument(
        "--region",
        default=os.environ.get("AWS_DEFAULT_REGION", "eu-west-1"),
        help="AWS region (default: eu-west-1 or AWS_DEFAULT_REGION env var)",
    )
    parser.add_argument(
        "--endpoint-url",
        default=os.environ.get("DYNAMODB_ENDPOINT_URL"),
        help="DynamoDB endpoint, e.g. http://localhost:8000 for DynamoDB Local",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create tables before seeding",
    )
    parser.add_argument(
        "--clear-first",
        action="store_true",
        help="Clear existing data before seeding",
    )

    args = parser.parse_args()

    _AWS_REGION = args.region
    _ENDPOINT_URL = args.endpoint_url

    # Safety check for production
    if args.env == "prod":
        confirm = input("⚠️  WARNING: You are about to modify PRODUCTION data. Type 'yes' to continue: ")
        if confirm.lower() != "yes":
            print("Aborted.")
            return 1

    print(f"\n🌱 Seeding {args.env} environment (region: {args.region})\n")

    try:
        if args.create_tables:
            create_tables(args.env)
            print()

        if args.clear_first:
            print("Clearing existing data...")
            for table in TABLES:
                count = clear_table(args.env, table)
                print(f"  Cleared {count} items from {table}")
            print()

        users = create_users(args.env)
        print()
        hotels = create_hotels(args.env, users)
        print()
        create_rooms(args.env, hotels)
    except ClientError as e:
        print(f"  ❌ Seeding failed: {e}")
        return 1

    print("\n✅ Seed completed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
