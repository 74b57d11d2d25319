"""
Session routes: log a user in or out. Admin rights are checked per request by the gate.
"""
from flask import Blueprint, jsonify, request, current_app
from flask_login import login_user, logout_user, current_user
from sqlalchemy import func

from models.user import User
from utils.auth_utils import RequestContext, is_admin

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/login', methods=['GET'])
def login():
    """Login entry point the admin gate redirects to"""
    return jsonify({
        'success': current_user.is_authenticated,
        'message': 'Already logged in.' if current_user.is_authenticated else 'Please log in to access the CMS.',
        'redirect': request.args.get('redirect'),
    })


@auth_bp.route('/login', methods=['POST'])
def login_submit():
    """Email + password login"""
    payload = request.get_json(silent=True) or request.form
    email = (payload.get('email') or '').strip().lower()
    password = payload.get('password') or ''

    if not email or not password:
        return jsonify({'success': False, 'message': 'Please enter both email and password.'}), 400

    user = User.query.filter(func.lower(User.email) == email).first()
    if not user or not user.check_password(password):
        return jsonify({'success': False, 'message': 'Invalid email or password.'}), 401
    if not user.is_active:
        return jsonify({'success': False, 'message': 'Your account is inactive. Please contact support.'}), 403

    login_user(user)
    current_app.logger.info("User %s logged in", user.id)
    return jsonify({
        'success': True,
        'user': user.to_dict(),
        'is_admin': is_admin(RequestContext(user_id=user.id, email=user.email)),
        'redirect': payload.get('redirect') or request.args.get('redirect'),
    })


@auth_bp.route('/logout', methods=['POST'])
def logout():
    logout_user()
    return jsonify({'success': True, 'message': 'You have been logged out successfully.'})
