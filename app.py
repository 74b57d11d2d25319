"""
Main Flask application entry point for the CMS admin panel
"""
import logging
import os

from flask import Flask, current_app, jsonify, request, redirect, url_for
from flask_login import LoginManager

from config import Config
from models import db
from models.user import User
from utils.errors import CMSError, Unauthenticated
from utils.page_cache import init_page_cache

# Initialize login manager (no DB access at import time)
login_manager = LoginManager()
login_manager.login_view = "auth.login"


@login_manager.user_loader
def load_user(user_id):
    """Load user for Flask-Login (runs in request context)."""
    return db.session.get(User, user_id)


def configure_logging(app):
    """Root level from LOG_LEVEL; every record carries the [CMS] prefix."""
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(format="[CMS] %(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger().setLevel(level)
    app.logger.setLevel(level)


def _wants_json():
    """API callers get JSON errors; browser page loads get redirected to login."""
    prefix = current_app.config.get("CMS_ROUTE_PREFIX", "/add-content")
    return request.is_json or request.path.startswith(f"{prefix}/api") or request.path.startswith("/logout")


def create_app(config_class=Config):
    """Application factory pattern. DB init runs inside app_context; non-fatal on failure."""
    app = Flask(__name__)
    app.config.from_object(config_class)
    configure_logging(app)

    db.init_app(app)
    login_manager.init_app(app)
    init_page_cache(app)

    @app.errorhandler(CMSError)
    def handle_cms_error(e):
        if isinstance(e, Unauthenticated) and not _wants_json():
            return redirect(url_for("auth.login", redirect=request.path))
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(500)
    def handle_500_error(e):
        app.logger.error("Unhandled error on %s: %s", request.path, e)
        return jsonify({"success": False, "message": "Internal server error. Please try again later."}), 500

    # Create tables and seed only inside app context; do not crash if DB temporarily unavailable
    with app.app_context():
        try:
            db.create_all()
            seed_admin()
        except Exception as e:
            app.logger.warning("Database init/seed skipped (non-fatal): %s", e)

    from routes import auth_bp, public_bp, admin_dashboard_bp, admin_views_bp, admin_content_bp

    prefix = app.config["CMS_ROUTE_PREFIX"]
    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_dashboard_bp, url_prefix=prefix)
    app.register_blueprint(admin_views_bp, url_prefix=prefix)
    app.register_blueprint(admin_content_bp, url_prefix=f"{prefix}/api")
    # Registered last: its /<slug> rule must not shadow the others
    app.register_blueprint(public_bp)

    return app


def seed_admin():
    """Create or re-activate the admin given by SEED_ADMIN_EMAIL / SEED_ADMIN_PASSWORD, if set."""
    from models.admin import AdminUser

    seed_email = (os.environ.get("SEED_ADMIN_EMAIL") or "").strip().lower()
    seed_password = os.environ.get("SEED_ADMIN_PASSWORD")
    if not seed_email or not seed_password:
        return

    user = User.query.filter(User.email.ilike(seed_email)).first()
    if not user:
        user = User(email=seed_email, is_active=True)
        db.session.add(user)
    user.set_password(seed_password)
    db.session.flush()

    admin = AdminUser.query.filter_by(user_id=user.id).first()
    if not admin:
        admin = AdminUser(user_id=user.id, email=seed_email, name=os.environ.get("SEED_ADMIN_NAME"))
        db.session.add(admin)
    admin.is_active = True

    try:
        db.session.commit()
        logging.getLogger(__name__).info("Seed admin ready: %s", seed_email)
    except Exception as e:
        db.session.rollback()
        logging.getLogger(__name__).error("Error seeding admin: %s", e)
