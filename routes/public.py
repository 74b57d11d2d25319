"""
Public routes: published pages, blog. Output is page-cached per route path.
"""
import logging

from flask import Blueprint, current_app
from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.blog import BlogPost
from models.global_content import GlobalContent
from models.page import Page, Section
from utils.page_cache import cached_page

logger = logging.getLogger(__name__)

public_bp = Blueprint('public', __name__)

# Global content blocks rendered around the home page
HOME_GLOBAL_KEYS = ('navbar', 'footer', 'social_links', 'contact_info', 'site_config')


def get_global_content(key):
    """Content of a global block, or None when missing or unreadable"""
    try:
        row = GlobalContent.query.filter_by(key=key).first()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.warning("Global content %r could not be read: %s", key, e)
        return None
    return row.content if row and row.content else None


def get_page_sections(slug):
    """Published sections of a published page in display order; None if the page is not public"""
    page = Page.query.filter_by(slug=slug, published=True).first()
    if page is None:
        return None, []
    rows = (
        Section.query.filter_by(page_id=page.id, published=True)
        .order_by(Section.order_index.asc())
        .all()
    )
    return page, rows


def _render_page(slug):
    page, rows = get_page_sections(slug)
    if page is None:
        return {'success': False, 'message': 'Page not found'}, 404
    return {
        'success': True,
        'page': page.to_dict(),
        'sections': [
            {'id': s.id, 'type': s.component_type, 'order_index': s.order_index, 'data': s.content}
            for s in rows
        ],
    }


@public_bp.route('/')
@cached_page
def home():
    """Home page: the HOME_SLUG page plus site-wide global content"""
    result = _render_page(current_app.config.get('HOME_SLUG', 'home'))
    if isinstance(result, tuple):
        return result
    result['global'] = {key: get_global_content(key) for key in HOME_GLOBAL_KEYS}
    return result


@public_bp.route('/blog')
@cached_page
def blog():
    posts = (
        BlogPost.query.filter_by(published=True)
        .order_by(BlogPost.publish_date.desc(), BlogPost.created_at.desc())
        .all()
    )
    return {
        'success': True,
        'posts': [
            {k: v for k, v in p.to_dict().items() if k != 'content'}
            for p in posts
        ],
    }


@public_bp.route('/blog/<slug>')
@cached_page
def blog_post(slug):
    post = BlogPost.query.filter_by(slug=slug, published=True).first()
    if post is None:
        return {'success': False, 'message': 'Post not found'}, 404
    return {'success': True, 'post': post.to_dict()}


@public_bp.route('/<slug>')
@cached_page
def page(slug):
    """Any other published page; the home page is only served at /"""
    if slug == current_app.config.get('HOME_SLUG', 'home'):
        return {'success': False, 'message': 'Page not found'}, 404
    return _render_page(slug)
