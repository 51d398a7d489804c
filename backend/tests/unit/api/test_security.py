"""Unit tests for gateway header based caller identity."""

import pytest
from fastapi import HTTPException
from starlette.requests import Request

from hotel_api.security import get_principal, require_admin, require_owner
from hotel_shared.models import EntityId, UserRole


def _request(headers: dict[str, str]) -> Request:
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": "/api/hotel/owner",
            "query_string": b"",
            "scheme": "http",
            "server": ("testserver", 80),
            "headers": [(k.encode(), v.encode()) for k, v in headers.items()],
        }
    )


class TestGetPrincipal:
    """Tests for get_principal."""

    def test_reads_sub_and_role(self) -> None:
        principal = get_principal(_request({"x-user-sub": "owner-1", "x-user-role": "Owner"}))
        assert principal.user_id == EntityId("owner-1")
        assert principal.role == UserRole.OWNER

    def test_sub_is_canonicalized(self) -> None:
        principal = get_principal(
            _request({"x-user-sub": " 7C1F2E4A-9B3D-4C5E-8F6A-1B2C3D4E5F60 "})
        )
        assert str(principal.user_id) == "7c1f2e4a-9b3d-4c5e-8f6a-1b2c3d4e5f60"

    @pytest.mark.parametrize("headers", [{}, {"x-user-sub": "   "}])
    def test_missing_sub(self, headers: dict[str, str]) -> None:
        with pytest.raises(HTTPException) as exc_info:
            get_principal(_request(headers))
        assert exc_info.value.status_code == 401

    @pytest.mark.parametrize("role", ["", "superuser"])
    def test_missing_or_unknown_role_is_user(self, role: str) -> None:
        principal = get_principal(_request({"x-user-sub": "u-1", "x-user-role": role}))
        assert principal.role == UserRole.USER


class TestRequireRole:
    """Tests for role gated dependencies."""

    def test_owner_admitted(self) -> None:
        principal = require_owner(_request({"x-user-sub": "o-1", "x-user-role": "owner"}))
        assert principal.role == UserRole.OWNER

    @pytest.mark.parametrize("role", ["user", "admin"])
    def test_owner_endpoint_rejects_other_roles(self, role: str) -> None:
        with pytest.raises(HTTPException) as exc_info:
            require_owner(_request({"x-user-sub": "u-1", "x-user-role": role}))
        assert exc_info.value.status_code == 403

    def test_admin_endpoint_rejects_owner(self) -> None:
        with pytest.raises(HTTPException) as exc_info:
            require_admin(_request({"x-user-sub": "o-1", "x-user-role": "owner"}))
        assert exc_info.value.status_code == 403
