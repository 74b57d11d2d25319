"""
Admin CMS read views. Content listings are page-cached under their route path
and dropped by the invalidation that follows each content change. Category
pickers and the waitlist are read straight from the database.
"""
from flask import Blueprint, current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.blog import BlogCategory
from models.faq import FaqCategory
from models.feature import FeatureCategory
from models.page import Page
from models.waitlist import WaitlistSignup
from routes.admin.auth import admin_required, get_request_context
from utils.content_types import blog_posts, faqs, features, global_content, pages, pricing_plans, sections
from utils.errors import NotFound, StorageFailure
from utils.page_cache import cached_page

admin_views_bp = Blueprint('admin_views', __name__)


@admin_views_bp.route('/pages')
@admin_required
@cached_page
def pages_index():
    return {'success': True, 'pages': pages.list(get_request_context())}


@admin_views_bp.route('/pages/<page_id>')
@admin_required
@cached_page
def page_editor(page_id):
    """A page with all of its sections, published or not"""
    page = Page.query.filter_by(id=page_id).first()
    if page is None:
        raise NotFound(f'Page {page_id} not found')
    return {
        'success': True,
        'page': page.to_dict(),
        'sections': sections.list(get_request_context(), page_id=page_id),
    }


@admin_views_bp.route('/blog')
@admin_required
@cached_page
def blog_index():
    return {'success': True, 'posts': blog_posts.list(get_request_context())}


@admin_views_bp.route('/faqs')
@admin_required
@cached_page
def faqs_index():
    return {'success': True, 'faqs': faqs.list(get_request_context())}


@admin_views_bp.route('/features')
@admin_required
@cached_page
def features_index():
    return {'success': True, 'features': features.list(get_request_context())}


@admin_views_bp.route('/pricing')
@admin_required
@cached_page
def pricing_index():
    return {'success': True, 'plans': pricing_plans.list(get_request_context())}


@admin_views_bp.route('/global')
@admin_required
@cached_page
def global_index():
    return {'success': True, 'content': global_content.list(get_request_context())}


def _read_all(label, query):
    try:
        return [row.to_dict() for row in query.all()]
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error("Failed to load %s: %s", label, e, exc_info=True)
        raise StorageFailure(f'Failed to load {label}: {e}')


@admin_views_bp.route('/blog/categories')
@admin_required
def blog_categories():
    query = BlogCategory.query.order_by(BlogCategory.order_index.asc(), BlogCategory.name.asc())
    return jsonify({'success': True, 'categories': _read_all('blog categories', query)})


@admin_views_bp.route('/faqs/categories')
@admin_required
def faq_categories():
    query = FaqCategory.query.order_by(FaqCategory.order_index.asc(), FaqCategory.name.asc())
    return jsonify({'success': True, 'categories': _read_all('FAQ categories', query)})


@admin_views_bp.route('/features/categories')
@admin_required
def feature_categories():
    query = FeatureCategory.query.order_by(FeatureCategory.order_index.asc(), FeatureCategory.name.asc())
    return jsonify({'success': True, 'categories': _read_all('feature categories', query)})


@admin_views_bp.route('/waitlist')
@admin_required
def waitlist():
    """Waitlist signups, newest first"""
    signups = _read_all('waitlist signups', WaitlistSignup.query.order_by(WaitlistSignup.signup_date.desc()))
    return jsonify({'success': True, 'total': len(signups), 'signups': signups})
