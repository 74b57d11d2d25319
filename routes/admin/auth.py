"""
Admin route guard
"""
from functools import wraps

from flask import g

from utils.auth_utils import RequestContext, assert_admin


def admin_required(f):
    """
    Run the admin gate before the view. The request context and the admin
    principal are left on flask.g for the view to pass into CMS operations;
    gate failures propagate to the CMSError handler (redirect or JSON error).
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        g.request_context = RequestContext.from_current_user()
        g.admin = assert_admin(g.request_context)
        return f(*args, **kwargs)
    return decorated_function


def get_request_context():
    """RequestContext for the current admin request"""
    return g.request_context


def get_current_admin():
    """AdminPrincipal set by admin_required"""
    return g.get('admin')
