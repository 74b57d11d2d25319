"""
Authorization utilities

Single source of truth for admin authorization. Every CMS mutation calls
assert_admin() with an explicit RequestContext before touching the database.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from flask_login import current_user
from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.admin import AdminUser
from utils.errors import Unauthenticated, Unauthorized

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestContext:
    """Caller identity for one request; user_id is None when nobody is logged in"""
    user_id: str = None
    email: str = None

    @classmethod
    def anonymous(cls):
        return cls()

    @classmethod
    def from_current_user(cls):
        """Build the context from the Flask-Login session (request context only)"""
        if current_user and current_user.is_authenticated:
            return cls(user_id=current_user.id, email=current_user.email)
        return cls()


@dataclass(frozen=True)
class AdminPrincipal:
    """A caller that passed the admin gate"""
    user_id: str
    admin_id: str
    email: str
    name: str = None


def _log_denied(ctx, reason):
    """Record a refused admin access for security monitoring"""
    logger.warning(
        "Unauthorized admin access attempt: user_id=%s email=%s at=%s reason=%s",
        ctx.user_id,
        ctx.email,
        datetime.now(timezone.utc).isoformat(),
        reason,
    )


def assert_admin(ctx):
    """
    Assert that the caller is an authenticated, active admin.

    Raises Unauthenticated when the context carries no user, and Unauthorized
    when the admin_users lookup fails or finds no active row. The caller only
    ever sees the generic Unauthorized message.
    """
    if ctx is None or not ctx.user_id:
        raise Unauthenticated()

    try:
        admin = AdminUser.query.filter_by(user_id=ctx.user_id, is_active=True).first()
    except SQLAlchemyError as e:
        db.session.rollback()
        _log_denied(ctx, f'admin lookup failed: {e}')
        raise Unauthorized()

    if not admin:
        _log_denied(ctx, 'no active admin record')
        raise Unauthorized()

    return AdminPrincipal(user_id=ctx.user_id, admin_id=admin.id, email=admin.email, name=admin.name)


def is_admin(ctx):
    """Non-raising variant of assert_admin()"""
    try:
        assert_admin(ctx)
        return True
    except (Unauthenticated, Unauthorized):
        return False


def get_admin_user(ctx):
    """The AdminPrincipal for ctx, or None; for conditional rendering"""
    try:
        return assert_admin(ctx)
    except (Unauthenticated, Unauthorized):
        return None
