"""HTTP tests for the admin API, admin views and public pages."""

from datetime import datetime

import pytest

from models import db
from models.blog import BlogCategory
from models.faq import FaqCategory
from models.feature import FeatureCategory
from models.waitlist import WaitlistSignup

API = "/add-content/api"


@pytest.fixture
def admin_client(client, admin_user, login):
    login("admin@example.com")
    return client


def _create_section(client, page_id, title="Welcome", **extra):
    body = {"page_id": page_id, "type": "hero", "data": {"title": title}, "published": True}
    body.update(extra)
    response = client.post(f"{API}/sections", json=body)
    assert response.status_code == 201, response.get_json()
    return response.get_json()["id"]


class TestGate:
    def test_anonymous_api_call_is_401(self, client) -> None:
        response = client.post(f"{API}/pages", json={"slug": "x", "title": "X"})
        assert response.status_code == 401
        assert response.get_json()["error"] == "Unauthenticated"

    def test_anonymous_dashboard_redirects_to_login(self, client) -> None:
        response = client.get("/add-content/pages")
        assert response.status_code == 302
        assert "/login?redirect=" in response.headers["Location"]

    def test_non_admin_is_403(self, client, login, user_ctx) -> None:
        login("reader@example.com")
        response = client.get(f"{API}/pages")
        assert response.status_code == 403
        assert response.get_json() == {
            "success": False,
            "error": "Unauthorized",
            "message": "Unauthorized: Admin access required",
        }

    def test_login_reports_admin_flag(self, client, admin_user) -> None:
        response = client.post("/login", json={"email": "ADMIN@example.com", "password": "correct-horse-battery"})
        assert response.get_json()["is_admin"] is True

    def test_bad_password(self, client, admin_user) -> None:
        response = client.post("/login", json={"email": "admin@example.com", "password": "nope"})
        assert response.status_code == 401

    def test_logout(self, admin_client) -> None:
        assert admin_client.post("/logout").status_code == 200
        assert admin_client.get(f"{API}/pages").status_code == 401


class TestContentApi:
    def test_create_and_fetch_page(self, admin_client) -> None:
        response = admin_client.post(f"{API}/pages", json={"slug": "team", "title": "Team", "published": True})
        assert response.status_code == 201

        item = admin_client.get(f"{API}/pages/team").get_json()["item"]
        assert item["title"] == "Team"
        assert item["metadata"] == {}

    def test_patch_is_partial(self, admin_client, page) -> None:
        section_id = _create_section(admin_client, page.id, order_index=4)
        response = admin_client.patch(f"{API}/sections/{section_id}", json={"published": False})
        item = response.get_json()["item"]
        assert item["published"] is False
        assert item["order_index"] == 4
        assert item["data"] == {"title": "Welcome"}

    def test_validation_error_is_400(self, admin_client, page) -> None:
        response = admin_client.post(f"{API}/sections", json={"page_id": page.id, "type": "hero", "data": {}})
        assert response.status_code == 400
        body = response.get_json()
        assert body["error"] == "ValidationFailed"
        assert body["message"].startswith("Validation failed: data.title")

    def test_non_json_body_is_400(self, admin_client) -> None:
        response = admin_client.post(f"{API}/faqs", data="question=hi", content_type="application/json")
        assert response.status_code == 400

    def test_unknown_content_type_is_404(self, admin_client) -> None:
        assert admin_client.get(f"{API}/widgets").status_code == 404

    def test_update_missing_row_is_404(self, admin_client) -> None:
        response = admin_client.patch(f"{API}/faqs/missing", json={"answer": "x"})
        assert response.status_code == 404

    def test_delete_is_idempotent(self, admin_client, page) -> None:
        section_id = _create_section(admin_client, page.id)
        assert admin_client.delete(f"{API}/sections/{section_id}").status_code == 200
        assert admin_client.delete(f"{API}/sections/{section_id}").status_code == 200
        assert admin_client.get(f"{API}/sections/{section_id}").status_code == 404

    def test_list_filters_by_parent(self, admin_client, page) -> None:
        _create_section(admin_client, page.id, title="One")
        items = admin_client.get(f"{API}/sections?page_id={page.id}").get_json()["items"]
        assert [i["data"]["title"] for i in items] == ["One"]
        assert admin_client.get(f"{API}/sections?page_id=other").get_json()["items"] == []

    def test_filter_not_on_table_is_400(self, admin_client) -> None:
        assert admin_client.get(f"{API}/pricing?category_id=x").status_code == 400

    def test_reorder_sections(self, admin_client, page) -> None:
        first = _create_section(admin_client, page.id, title="First")
        second = _create_section(admin_client, page.id, title="Second")

        response = admin_client.post(
            f"{API}/pages/{page.id}/sections/reorder", json={"section_ids": [second, first]}
        )

        assert response.get_json()["positions"] == {second: 0, first: 1}
        items = admin_client.get(f"{API}/sections?page_id={page.id}").get_json()["items"]
        assert [i["id"] for i in items] == [second, first]

    def test_reorder_rejects_non_string_ids(self, admin_client, page) -> None:
        response = admin_client.post(
            f"{API}/pages/{page.id}/sections/reorder", json={"section_ids": [{"a": 1}, ["b"]]}
        )
        assert response.status_code == 400
        assert response.get_json()["message"] == "Validation failed: ids must be strings"

    def test_generic_reorder_requires_parent(self, admin_client) -> None:
        response = admin_client.post(f"{API}/faqs/reorder", json={"ids": []})
        assert response.status_code == 400

    def test_history(self, admin_client) -> None:
        admin_client.post(f"{API}/pages", json={"slug": "team", "title": "Team"})
        entries = admin_client.get("/add-content/history?entity_type=page").get_json()["history"]
        assert [e["action"] for e in entries] == ["create"]
        assert entries[0]["snapshot"]["slug"] == "team"


class TestCachedPages:
    def test_public_page_refreshed_after_section_update(self, admin_client, page, cache) -> None:
        section_id = _create_section(admin_client, page.id)
        first = admin_client.get("/about").get_json()
        assert [s["data"]["title"] for s in first["sections"]] == ["Welcome"]
        assert cache.get("/about") is not None

        admin_client.patch(f"{API}/sections/{section_id}", json={"data": {"title": "Hello again"}})

        assert cache.get("/about") is None
        second = admin_client.get("/about").get_json()
        assert [s["data"]["title"] for s in second["sections"]] == ["Hello again"]

    def test_unpublished_sections_hidden(self, admin_client, page) -> None:
        _create_section(admin_client, page.id, title="Draft", published=False)
        assert admin_client.get("/about").get_json()["sections"] == []

    def test_admin_editor_view_refreshed(self, admin_client, page) -> None:
        assert admin_client.get(f"/add-content/pages/{page.id}").get_json()["sections"] == []
        _create_section(admin_client, page.id, title="Draft", published=False)
        sections = admin_client.get(f"/add-content/pages/{page.id}").get_json()["sections"]
        assert [s["data"]["title"] for s in sections] == ["Draft"]

    def test_admin_editor_view_refreshed_after_page_update(self, admin_client, page) -> None:
        editor = f"/add-content/pages/{page.id}"
        assert admin_client.get(editor).get_json()["page"]["title"] == "About"

        admin_client.patch(f"{API}/pages/about", json={"title": "About us"})

        assert admin_client.get(editor).get_json()["page"]["title"] == "About us"

    def test_admin_editor_view_gone_after_page_delete(self, admin_client, page) -> None:
        editor = f"/add-content/pages/{page.id}"
        assert admin_client.get(editor).status_code == 200

        assert admin_client.delete(f"{API}/pages/about").status_code == 200

        assert admin_client.get(editor).status_code == 404

    def test_global_content_shown_on_home(self, admin_client, home_page) -> None:
        assert admin_client.get("/").get_json()["global"]["navbar"] is None

        response = admin_client.put(f"{API}/global/navbar", json={"content": {"links": [{"href": "/about"}]}})
        assert response.status_code == 200

        assert admin_client.get("/").get_json()["global"]["navbar"] == {"links": [{"href": "/about"}]}

    def test_home_slug_only_served_at_root(self, client, home_page) -> None:
        assert client.get("/").status_code == 200
        assert client.get("/home").status_code == 404

    def test_blog_lists_published_posts(self, admin_client) -> None:
        admin_client.post(f"{API}/blog", json={"title": "Live", "slug": "live", "content": "Body", "published": True})
        admin_client.post(f"{API}/blog", json={"title": "Draft", "slug": "draft"})

        posts = admin_client.get("/blog").get_json()["posts"]
        assert [p["slug"] for p in posts] == ["live"]
        assert "content" not in posts[0]
        assert admin_client.get("/blog/live").get_json()["post"]["content"] == "Body"
        assert admin_client.get("/blog/draft").status_code == 404


class TestReadOnlyViews:
    def test_category_pickers(self, admin_client) -> None:
        db.session.add_all([
            FaqCategory(name="Billing", slug="billing", order_index=1),
            FaqCategory(name="General", slug="general", order_index=0),
            BlogCategory(name="News", slug="news"),
            FeatureCategory(name="Chat", slug="chat"),
        ])
        db.session.commit()

        faq = admin_client.get("/add-content/faqs/categories").get_json()["categories"]
        assert [c["slug"] for c in faq] == ["general", "billing"]
        blog = admin_client.get("/add-content/blog/categories").get_json()["categories"]
        assert [c["name"] for c in blog] == ["News"]
        features = admin_client.get("/add-content/features/categories").get_json()["categories"]
        assert [c["slug"] for c in features] == ["chat"]

    def test_waitlist_newest_first(self, admin_client) -> None:
        db.session.add_all([
            WaitlistSignup(name="Asha", email="asha@example.com", phone="111", signup_date=datetime(2024, 1, 1)),
            WaitlistSignup(name="Ravi", email="ravi@example.com", phone="222", signup_date=datetime(2024, 2, 1)),
        ])
        db.session.commit()

        body = admin_client.get("/add-content/waitlist").get_json()
        assert body["total"] == 2
        assert [s["name"] for s in body["signups"]] == ["Ravi", "Asha"]

    @pytest.mark.parametrize(
        "path", ["/add-content/waitlist", "/add-content/faqs/categories", "/add-content/blog/categories"]
    )
    def test_non_admin_is_refused(self, client, login, user_ctx, path) -> None:
        login("reader@example.com")
        assert client.get(path).status_code == 403
