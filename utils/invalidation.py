"""
Route invalidation after content changes.

Each content type has an InvalidationRule: the CMS management routes that list
it, fixed public routes that render it, the public route the row itself owns
(page and blog post slugs), and a parent resolver for rows that are rendered
inside another row's route (a section renders inside its page). Parent lookups
are best-effort: if they fail, the remaining targets are still invalidated.
"""
import logging
from dataclasses import dataclass, field

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.page import Page
from utils.errors import NotFound
from utils.page_cache import get_page_cache

logger = logging.getLogger(__name__)

CREATE = 'create'
UPDATE = 'update'
DELETE = 'delete'
REORDER = 'reorder'


def public_page_path(slug):
    """Public route for a page slug; the home slug is served at "/"."""
    if slug == current_app.config.get('HOME_SLUG', 'home'):
        return '/'
    return f'/{slug}'


def _page_route(row):
    return public_page_path(row['slug']) if row.get('slug') else None


def _blog_post_route(row):
    return f"/blog/{row['slug']}" if row.get('slug') else None


def _parent_page_route(row):
    """Resolve section -> page -> slug. Raises NotFound when the page is gone."""
    page_id = row.get('page_id')
    if not page_id:
        raise NotFound('Section has no page_id')
    page = _get_page(page_id)
    if page is None:
        raise NotFound(f'Page {page_id} not found')
    return public_page_path(page.slug)


def _get_page(page_id):
    return Page.query.filter_by(id=page_id).first()


@dataclass(frozen=True)
class InvalidationRule:
    # Paths under CMS_ROUTE_PREFIX; "{field}" placeholders are filled from the row
    management_routes: tuple = ('',)
    public_routes: tuple = ()
    own_route: object = None
    parent_route: object = None
    own_route_on: frozenset = field(default_factory=lambda: frozenset({CREATE, UPDATE, DELETE}))


INVALIDATION_RULES = {
    'page': InvalidationRule(
        management_routes=('', '/pages', '/pages/{id}'),
        own_route=_page_route,
    ),
    'section': InvalidationRule(
        management_routes=('', '/pages/{page_id}'),
        parent_route=_parent_page_route,
    ),
    'blog_post': InvalidationRule(
        management_routes=('/blog',),
        public_routes=('/blog',),
        own_route=_blog_post_route,
    ),
    'faq': InvalidationRule(management_routes=('/faqs',)),
    'feature': InvalidationRule(management_routes=('/features',)),
    'pricing_plan': InvalidationRule(management_routes=('/pricing',)),
    'global_content': InvalidationRule(
        management_routes=('/global',),
        public_routes=('/',),
    ),
}


def _management_paths(rule, row):
    prefix = current_app.config.get('CMS_ROUTE_PREFIX', '/add-content')
    paths = set()
    for template in rule.management_routes:
        try:
            suffix = template.format(**row)
        except KeyError:
            # Row is missing the field (e.g. page_id unknown after a failed read)
            continue
        paths.add(f'{prefix}{suffix}' or '/')
    return paths


def resolve_targets(content_type, row, change_kind, previous=None):
    """
    Compute the set of route paths whose output depends on this change.

    row is the changed row as a dict (after the change, or before it for
    deletes); previous is the row before an update, so a renamed slug also
    drops its old route. Parent lookup failures are logged and skipped.
    """
    rule = INVALIDATION_RULES[content_type]
    row = row or {}
    targets = _management_paths(rule, row)
    targets.update(rule.public_routes)

    if rule.own_route and change_kind in rule.own_route_on:
        for candidate in (row, previous):
            if candidate:
                path = rule.own_route(candidate)
                if path:
                    targets.add(path)

    if rule.parent_route:
        try:
            targets.add(rule.parent_route(row))
        except (NotFound, SQLAlchemyError) as e:
            if isinstance(e, SQLAlchemyError):
                db.session.rollback()
            logger.warning("Skipping parent route for %s %s: %s", content_type, row.get('id'), e)

    return targets


def invalidate(content_type, row, change_kind, previous=None):
    """
    Invalidate every route affected by a committed change.

    Never raises: a write is successful once it is persisted, so resolution
    and cache failures only narrow what gets invalidated.
    """
    try:
        targets = resolve_targets(content_type, row, change_kind, previous=previous)
    except Exception as e:
        logger.warning("Invalidation resolution failed for %s: %s", content_type, e, exc_info=True)
        rule = INVALIDATION_RULES.get(content_type)
        targets = _management_paths(rule, {}) if rule else set()

    cache = get_page_cache()
    invalidated = set()
    for path in sorted(targets):
        try:
            cache.invalidate(path)
            invalidated.add(path)
        except Exception as e:
            logger.warning("Failed to invalidate %s: %s", path, e)
    logger.debug("Invalidated %s after %s %s: %s", len(invalidated), change_kind, content_type, sorted(invalidated))
    return invalidated
