"""Tests for the admin authorization gate."""

import logging

import pytest
from sqlalchemy.exc import SQLAlchemyError

import utils.auth_utils as auth_utils
from utils.auth_utils import AdminPrincipal, RequestContext, assert_admin, get_admin_user, is_admin
from utils.errors import Unauthenticated, Unauthorized


class TestAssertAdmin:
    def test_active_admin_passes(self, admin_ctx) -> None:
        principal = assert_admin(admin_ctx)
        assert isinstance(principal, AdminPrincipal)
        assert principal.user_id == admin_ctx.user_id
        assert principal.email == "admin@example.com"

    def test_anonymous_is_unauthenticated(self, app, anon_ctx) -> None:
        with pytest.raises(Unauthenticated):
            assert_admin(anon_ctx)

    def test_none_context_is_unauthenticated(self, app) -> None:
        with pytest.raises(Unauthenticated):
            assert_admin(None)

    def test_non_admin_is_unauthorized(self, user_ctx) -> None:
        with pytest.raises(Unauthorized, match="Admin access required"):
            assert_admin(user_ctx)

    def test_inactive_admin_is_unauthorized(self, inactive_admin_ctx) -> None:
        with pytest.raises(Unauthorized):
            assert_admin(inactive_admin_ctx)

    def test_unknown_user_id_is_unauthorized(self, app) -> None:
        with pytest.raises(Unauthorized):
            assert_admin(RequestContext(user_id="no-such-user"))

    def test_denial_is_logged_with_identity(self, user_ctx, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="utils.auth_utils"):
            with pytest.raises(Unauthorized):
                assert_admin(user_ctx)
        assert user_ctx.user_id in caplog.text
        assert "no active admin record" in caplog.text

    def test_lookup_error_fails_closed(self, admin_ctx, monkeypatch, caplog) -> None:
        class BrokenQuery:
            def filter_by(self, **kwargs):
                raise SQLAlchemyError("connection reset")

        class BrokenAdminUser:
            query = BrokenQuery()

        monkeypatch.setattr(auth_utils, "AdminUser", BrokenAdminUser)
        with caplog.at_level(logging.WARNING, logger="utils.auth_utils"):
            with pytest.raises(Unauthorized) as excinfo:
                assert_admin(admin_ctx)
        assert "connection reset" not in str(excinfo.value)
        assert "connection reset" in caplog.text

    def test_repeated_calls_are_idempotent(self, admin_ctx) -> None:
        assert assert_admin(admin_ctx) == assert_admin(admin_ctx)


class TestConvenienceVariants:
    def test_is_admin(self, admin_ctx, user_ctx, anon_ctx) -> None:
        assert is_admin(admin_ctx) is True
        assert is_admin(user_ctx) is False
        assert is_admin(anon_ctx) is False

    def test_get_admin_user(self, admin_ctx, inactive_admin_ctx) -> None:
        assert get_admin_user(admin_ctx).user_id == admin_ctx.user_id
        assert get_admin_user(inactive_admin_ctx) is None
