"""
Routes package for the CMS admin panel
"""
# Export blueprints for registration in app.py
from routes.auth import auth_bp
from routes.public import public_bp
from routes.admin.dashboard import admin_dashboard_bp
from routes.admin.views import admin_views_bp
from routes.admin.content import admin_content_bp

__all__ = [
    'auth_bp',
    'public_bp',
    'admin_dashboard_bp',
    'admin_views_bp',
    'admin_content_bp',
]
