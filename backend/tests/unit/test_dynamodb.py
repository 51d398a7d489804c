"""Unit tests for the DynamoDB service wrapper.

Tests cover:
- batch_get re-requests unprocessed keys and fails loudly when they persist
- query stops paginating once max_items are read
- each thread gets its own boto3 resource
"""

import threading
from typing import Any, Callable
from unittest.mock import MagicMock, PropertyMock, patch

import pytest

from hotel_shared.services.dynamodb import (
    BATCH_GET_MAX_ATTEMPTS,
    DynamoDBService,
    UnprocessedKeysError,
)

from conftest import TABLE_PREFIX

USERS_TABLE = f"{TABLE_PREFIX}-users"

Factory = Callable[..., dict[str, Any]]


def _batch_response(
    found: list[dict[str, Any]], unprocessed: list[dict[str, Any]] | None = None
) -> dict[str, Any]:
    response: dict[str, Any] = {"Responses": {USERS_TABLE: found}}
    if unprocessed:
        response["UnprocessedKeys"] = {USERS_TABLE: {"Keys": unprocessed}}
    return response


@pytest.fixture
def fake_resource() -> MagicMock:
    return MagicMock()


@pytest.fixture
def service(fake_resource: MagicMock) -> Any:
    """DynamoDBService whose resource is a MagicMock."""
    with patch.object(
        DynamoDBService, "resource", new_callable=PropertyMock, return_value=fake_resource
    ):
        yield DynamoDBService()


@pytest.fixture
def no_sleep() -> Any:
    with patch("hotel_shared.services.dynamodb.time.sleep") as sleep:
        yield sleep


class TestBatchGet:
    """Tests for DynamoDBService.batch_get."""

    def test_unprocessed_keys_are_requested_again(
        self, service: DynamoDBService, fake_resource: MagicMock, no_sleep: MagicMock
    ) -> None:
        # Given: the first call leaves one key unprocessed
        fake_resource.batch_get_item.side_effect = [
            _batch_response([{"user_id": "u-1"}], unprocessed=[{"user_id": "u-2"}]),
            _batch_response([{"user_id": "u-2"}]),
        ]

        # When
        items = service.batch_get("users", [{"user_id": "u-1"}, {"user_id": "u-2"}])

        # Then: the leftover key is fetched by a second call
        assert items == [{"user_id": "u-1"}, {"user_id": "u-2"}]
        second_call = fake_resource.batch_get_item.call_args_list[1]
        assert second_call.kwargs["RequestItems"] == {
            USERS_TABLE: {"Keys": [{"user_id": "u-2"}]}
        }
        no_sleep.assert_called_once()

    def test_persistent_unprocessed_keys_raise(
        self, service: DynamoDBService, fake_resource: MagicMock, no_sleep: MagicMock
    ) -> None:
        fake_resource.batch_get_item.return_value = _batch_response(
            [], unprocessed=[{"user_id": "u-1"}]
        )

        with pytest.raises(UnprocessedKeysError) as exc_info:
            service.batch_get("users", [{"user_id": "u-1"}])

        assert exc_info.value.keys == [{"user_id": "u-1"}]
        assert exc_info.value.table == USERS_TABLE
        assert fake_resource.batch_get_item.call_count == BATCH_GET_MAX_ATTEMPTS

    def test_no_keys_makes_no_call(
        self, service: DynamoDBService, fake_resource: MagicMock
    ) -> None:
        assert service.batch_get("users", []) == []
        fake_resource.batch_get_item.assert_not_called()

    def test_more_than_one_hundred_keys(self, db: Any, add_user: Factory) -> None:
        user_ids = [f"user-{n:03d}" for n in range(150)]
        for user_id in user_ids:
            add_user(user_id)

        items = db.batch_get("users", [{"user_id": u} for u in user_ids])

        assert sorted(item["user_id"] for item in items) == user_ids


class TestQueryLimit:
    """Tests for the max_items cap on queries."""

    def test_stops_paginating_once_enough_items_are_read(
        self, service: DynamoDBService, fake_resource: MagicMock
    ) -> None:
        table = fake_resource.Table.return_value
        table.query.side_effect = [
            {"Items": [{"n": 1}, {"n": 2}], "LastEvaluatedKey": {"n": 2}},
            {"Items": [{"n": 3}, {"n": 4}], "LastEvaluatedKey": {"n": 4}},
            {"Items": [{"n": 5}]},
        ]

        items = service.query_by_gsi(
            "hotels", "status-index", "status", "pending", max_items=3
        )

        assert items == [{"n": 1}, {"n": 2}, {"n": 3}]
        assert table.query.call_count == 2
        assert table.query.call_args_list[0].kwargs["Limit"] == 3

    def test_without_cap_reads_every_page(
        self, service: DynamoDBService, fake_resource: MagicMock
    ) -> None:
        table = fake_resource.Table.return_value
        table.query.side_effect = [
            {"Items": [{"n": 1}], "LastEvaluatedKey": {"n": 1}},
            {"Items": [{"n": 2}]},
        ]

        items = service.query_by_gsi("hotels", "status-index", "status", "pending")

        assert items == [{"n": 1}, {"n": 2}]
        assert "Limit" not in table.query.call_args_list[0].kwargs

    def test_newest_items_against_mocked_table(
        self, db: Any, add_hotel: Factory
    ) -> None:
        stored = [add_hotel(status="approved") for _ in range(4)]

        items = db.query_by_gsi(
            "hotels",
            "status-index",
            "status",
            "approved",
            scan_index_forward=False,
            max_items=2,
        )

        assert [i["hotel_id"] for i in items] == [
            stored[3]["hotel_id"],
            stored[2]["hotel_id"],
        ]


class TestResource:
    """Tests for the per-thread boto3 resource."""

    def test_same_thread_reuses_resource(self) -> None:
        service = DynamoDBService()
        assert service.resource is service.resource

    def test_each_thread_gets_its_own_resource(self) -> None:
        service = DynamoDBService()
        seen: list[Any] = []

        def grab() -> None:
            seen.append(service.resource)

        workers = [threading.Thread(target=grab) for _ in range(2)]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join()

        assert len(seen) == 2
        assert seen[0] is not seen[1]
        assert all(resource is not service.resource for resource in seen)
