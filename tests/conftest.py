"""Pytest fixtures: app on in-memory SQLite, principals, a recording page cache."""

import pytest
from sqlalchemy import event

from app import create_app
from config import TestConfig
from models import db
from models.admin import AdminUser
from models.page import Page
from models.user import User
from utils.auth_utils import RequestContext
from utils.page_cache import SimplePageCache

PASSWORD = "correct-horse-battery"


class RecordingPageCache(SimplePageCache):
    """SimplePageCache that remembers every invalidated path."""

    def __init__(self):
        super().__init__(ttl=300)
        self.invalidated = []

    def invalidate(self, path):
        self.invalidated.append(path)
        super().invalidate(path)


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def cache(app):
    cache = RecordingPageCache()
    app.extensions["page_cache"] = cache
    return cache


@pytest.fixture
def client(app, cache):
    return app.test_client()


def make_user(email, admin=False, admin_active=True):
    user = User(email=email, is_active=True)
    user.set_password(PASSWORD)
    db.session.add(user)
    db.session.flush()
    if admin:
        db.session.add(AdminUser(user_id=user.id, email=email, name="Admin", is_active=admin_active))
    db.session.commit()
    return user


@pytest.fixture
def admin_user(app):
    return make_user("admin@example.com", admin=True)


@pytest.fixture
def admin_ctx(admin_user):
    return RequestContext(user_id=admin_user.id, email=admin_user.email)


@pytest.fixture
def user_ctx(app):
    user = make_user("reader@example.com")
    return RequestContext(user_id=user.id, email=user.email)


@pytest.fixture
def inactive_admin_ctx(app):
    user = make_user("former@example.com", admin=True, admin_active=False)
    return RequestContext(user_id=user.id, email=user.email)


@pytest.fixture
def anon_ctx():
    return RequestContext.anonymous()


@pytest.fixture
def page(app):
    page = Page(slug="about", title="About", published=True)
    db.session.add(page)
    db.session.commit()
    return page


@pytest.fixture
def home_page(app):
    page = Page(slug="home", title="Home", published=True)
    db.session.add(page)
    db.session.commit()
    return page


@pytest.fixture
def sql_writes(app):
    """INSERT/UPDATE/DELETE statements executed from the moment the fixture is requested."""
    statements = []

    def record(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith(("INSERT", "UPDATE", "DELETE")):
            statements.append(statement)

    event.listen(db.engine, "before_cursor_execute", record)
    yield statements
    event.remove(db.engine, "before_cursor_execute", record)


@pytest.fixture
def login(client):
    def do_login(email="admin@example.com"):
        response = client.post("/login", json={"email": email, "password": PASSWORD})
        assert response.status_code == 200, response.get_json()
        return response
    return do_login
