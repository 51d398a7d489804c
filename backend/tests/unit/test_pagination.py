"""Unit tests for page/limit resolution and pagination metadata."""

import pytest

from hotel_shared.models import PageRequest, Pagination


class TestPageRequestResolve:
    """Tests for PageRequest.resolve coercion rules."""

    def test_defaults_when_absent(self) -> None:
        request = PageRequest.resolve(None, None, default_limit=20)
        assert request.page == 1
        assert request.limit == 20

    def test_parses_numeric_strings(self) -> None:
        request = PageRequest.resolve("3", "15", default_limit=10)
        assert request.page == 3
        assert request.limit == 15

    def test_truncates_fractional_values(self) -> None:
        request = PageRequest.resolve("2.9", 7.5, default_limit=10)
        assert request.page == 2
        assert request.limit == 7

    @pytest.mark.parametrize("raw", ["abc", "", "0", "-4", 0, -1, True, [], "nan"])
    def test_unusable_values_fall_back_to_defaults(self, raw: object) -> None:
        """Non-numeric, non-positive and boolean values use the defaults."""
        request = PageRequest.resolve(raw, raw, default_limit=10)
        assert request.page == 1
        assert request.limit == 10

    def test_skip_counts_preceding_records(self) -> None:
        assert PageRequest.resolve(1, 10, default_limit=10).skip == 0
        assert PageRequest.resolve(3, 20, default_limit=10).skip == 40


class TestPaginationBuild:
    """Tests for Pagination.build."""

    def test_total_pages_rounds_up(self) -> None:
        pagination = Pagination.build(PageRequest.resolve(1, 10, default_limit=10), 21)
        assert pagination.total == 21
        assert pagination.total_pages == 3

    def test_exact_multiple(self) -> None:
        pagination = Pagination.build(PageRequest.resolve(2, 5, default_limit=10), 10)
        assert pagination.total_pages == 2
        assert pagination.page == 2
        assert pagination.limit == 5

    def test_no_records_means_no_pages(self) -> None:
        pagination = Pagination.build(PageRequest.resolve(4, 10, default_limit=10), 0)
        assert pagination.total == 0
        assert pagination.total_pages == 0
        assert pagination.page == 4
