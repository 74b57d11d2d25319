"""
Admin CMS dashboard and content history
"""
from flask import Blueprint, jsonify, request, current_app
from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.content_history import ContentHistory
from models.page import Page, Section
from models.blog import BlogPost
from models.faq import Faq
from models.feature import Feature
from models.pricing import PricingPlan
from routes.admin.auth import admin_required, get_current_admin
from utils.errors import StorageFailure

admin_dashboard_bp = Blueprint('admin_dashboard', __name__)

COUNTED_MODELS = {
    'pages': Page,
    'sections': Section,
    'blog_posts': BlogPost,
    'faqs': Faq,
    'features': Feature,
    'pricing_plans': PricingPlan,
}


@admin_dashboard_bp.route('')
@admin_required
def dashboard():
    """Content counts and the latest changes"""
    admin = get_current_admin()
    try:
        counts = {name: model.query.count() for name, model in COUNTED_MODELS.items()}
        recent = ContentHistory.query.order_by(ContentHistory.performed_at.desc()).limit(10).all()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error("Dashboard query failed: %s", e, exc_info=True)
        raise StorageFailure(f'Failed to load dashboard: {e}')

    return jsonify({
        'success': True,
        'admin': {'email': admin.email, 'name': admin.name},
        'counts': counts,
        'recent_changes': [h.to_dict() for h in recent],
    })


@admin_dashboard_bp.route('/history')
@admin_required
def history():
    """Content change history, newest first; filter with ?entity_type= and ?entity_id="""
    limit = min(request.args.get('limit', 50, type=int), 500)
    query = ContentHistory.query
    entity_type = request.args.get('entity_type')
    entity_id = request.args.get('entity_id')
    if entity_type:
        query = query.filter_by(entity_type=entity_type)
    if entity_id:
        query = query.filter_by(entity_id=entity_id)

    entries = query.order_by(ContentHistory.performed_at.desc()).limit(limit).all()
    return jsonify({'success': True, 'history': [h.to_dict() for h in entries]})
