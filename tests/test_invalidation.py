"""Tests for route invalidation after content changes."""

import pytest
from sqlalchemy.exc import OperationalError

from models import db
from models.page import Section
from utils import content_types, invalidation
from utils.invalidation import CREATE, UPDATE, invalidate, resolve_targets


def _hero(page, **overrides):
    data = {"page_id": page.id, "type": "hero", "data": {"title": "Hi"}}
    data.update(overrides)
    return data


class TestSectionTargets:
    def test_update_invalidates_management_and_public_page(self, page, admin_ctx, cache) -> None:
        section_id = content_types.create_section(admin_ctx, _hero(page))
        cache.invalidated.clear()

        content_types.update_section(admin_ctx, section_id, {"published": True})

        assert set(cache.invalidated) == {
            "/add-content",
            f"/add-content/pages/{page.id}",
            "/about",
        }

    def test_home_page_maps_to_root(self, home_page, admin_ctx, cache) -> None:
        content_types.create_section(admin_ctx, _hero(home_page))
        assert "/" in cache.invalidated
        assert "/home" not in cache.invalidated

    def test_reorder_invalidates_parent_page(self, page, admin_ctx, cache) -> None:
        ids = [content_types.create_section(admin_ctx, _hero(page)) for _ in range(2)]
        cache.invalidated.clear()

        content_types.reorder_sections(admin_ctx, page.id, list(reversed(ids)))

        assert set(cache.invalidated) == {
            "/add-content",
            f"/add-content/pages/{page.id}",
            "/about",
        }

    def test_missing_parent_page_keeps_management_routes(self, app) -> None:
        targets = resolve_targets("section", {"id": "s1", "page_id": "gone"}, UPDATE)
        assert targets == {"/add-content", "/add-content/pages/gone"}

    def test_parent_lookup_error_is_skipped(self, page, monkeypatch) -> None:
        def broken_lookup(page_id):
            raise OperationalError("SELECT", {}, Exception("connection reset"))

        monkeypatch.setattr(invalidation, "_get_page", broken_lookup)
        targets = resolve_targets("section", {"id": "s1", "page_id": page.id}, UPDATE)
        assert targets == {"/add-content", f"/add-content/pages/{page.id}"}


class TestDeleteWithoutRead:
    def test_failed_read_still_deletes_and_invalidates(self, page, admin_ctx, cache, monkeypatch) -> None:
        section_id = content_types.create_section(admin_ctx, _hero(page))
        cache.invalidated.clear()

        def broken_find(key):
            raise OperationalError("SELECT", {}, Exception("read timeout"))

        monkeypatch.setattr(content_types.sections, "_find", broken_find)
        content_types.delete_section(admin_ctx, section_id)

        assert Section.query.filter_by(id=section_id).count() == 0
        assert cache.invalidated == ["/add-content"]

    def test_delete_with_read_invalidates_page(self, page, admin_ctx, cache) -> None:
        section_id = content_types.create_section(admin_ctx, _hero(page))
        cache.invalidated.clear()

        content_types.delete_section(admin_ctx, section_id)

        assert "/about" in cache.invalidated
        assert f"/add-content/pages/{page.id}" in cache.invalidated


class TestOtherContentTypes:
    def test_page_create_invalidates_its_public_route(self, admin_ctx, cache) -> None:
        page_id = content_types.create_page(admin_ctx, {"slug": "pricing-help", "title": "Help"})
        assert set(cache.invalidated) == {
            "/add-content",
            "/add-content/pages",
            f"/add-content/pages/{page_id}",
            "/pricing-help",
        }

    def test_page_update_and_delete_drop_the_editor_route(self, page, admin_ctx, cache) -> None:
        content_types.update_page(admin_ctx, "about", {"title": "About us"})
        assert f"/add-content/pages/{page.id}" in cache.invalidated
        page_id = page.id
        cache.invalidated.clear()

        content_types.delete_page(admin_ctx, "about")
        assert set(cache.invalidated) == {
            "/add-content",
            "/add-content/pages",
            f"/add-content/pages/{page_id}",
            "/about",
        }

    def test_blog_slug_rename_drops_both_routes(self, admin_ctx, cache) -> None:
        post_id = content_types.create_blog_post(admin_ctx, {"title": "Post", "slug": "old-post"})
        cache.invalidated.clear()

        content_types.update_blog_post(admin_ctx, post_id, {"slug": "new-post"})

        assert set(cache.invalidated) == {
            "/add-content/blog",
            "/blog",
            "/blog/old-post",
            "/blog/new-post",
        }

    def test_global_content_invalidates_home(self, admin_ctx, cache) -> None:
        content_types.update_global_content(admin_ctx, "footer", {"copyright": "2024"})
        assert set(cache.invalidated) == {"/add-content/global", "/"}

    @pytest.mark.parametrize(
        "content_type,expected",
        [
            ("faq", {"/add-content/faqs"}),
            ("feature", {"/add-content/features"}),
            ("pricing_plan", {"/add-content/pricing"}),
        ],
    )
    def test_listing_only_types(self, app, content_type, expected) -> None:
        assert resolve_targets(content_type, {"id": "x"}, CREATE) == expected

    def test_route_prefix_is_configurable(self, app) -> None:
        app.config["CMS_ROUTE_PREFIX"] = "/cms"
        assert resolve_targets("faq", {"id": "x"}, UPDATE) == {"/cms/faqs"}


class TestCacheFailures:
    def test_cache_error_does_not_fail_the_write(self, page, admin_ctx, cache, monkeypatch) -> None:
        section_id = content_types.create_section(admin_ctx, _hero(page))
        original = cache.invalidate

        def flaky_invalidate(path):
            if path == "/about":
                raise ConnectionError("cache unavailable")
            original(path)

        monkeypatch.setattr(cache, "invalidate", flaky_invalidate)
        item = content_types.update_section(admin_ctx, section_id, {"order_index": 5})

        assert item["order_index"] == 5
        db.session.expire_all()
        assert db.session.get(Section, section_id).order_index == 5

    def test_invalidate_reports_what_was_dropped(self, page, cache, monkeypatch) -> None:
        def unavailable(path):
            raise ConnectionError("cache unavailable")

        monkeypatch.setattr(cache, "invalidate", unavailable)
        assert invalidate("section", {"id": "s1", "page_id": page.id}, UPDATE) == set()

    def test_resolution_failure_falls_back_to_management_routes(self, app, cache, monkeypatch) -> None:
        def broken_resolve(*args, **kwargs):
            raise RuntimeError("resolver bug")

        monkeypatch.setattr(invalidation, "resolve_targets", broken_resolve)
        assert invalidate("section", {"id": "s1", "page_id": "p1"}, UPDATE) == {"/add-content"}
        assert cache.invalidated == ["/add-content"]
