"""
Admin user model definition
"""
from models import db, generate_uuid, isoformat
from datetime import datetime

class AdminUser(db.Model):
    """Grants CMS access to a User; only active rows pass the admin gate"""
    __tablename__ = 'admin_users'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    user_id = db.Column(db.String(36), db.ForeignKey('users.id', ondelete='CASCADE'), unique=True, nullable=False)
    email = db.Column(db.String(120), nullable=False)
    name = db.Column(db.String(120), nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = db.relationship('User', backref=db.backref('admin_user', uselist=False), lazy=True)

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'email': self.email,
            'name': self.name,
            'is_active': self.is_active,
            'created_at': isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<AdminUser {self.email}>'
