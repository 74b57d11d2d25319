"""
Waitlist signup model definition
"""
from models import db, generate_uuid, isoformat
from datetime import datetime

class WaitlistSignup(db.Model):
    """Visitor who joined the app waitlist; written by the public signup form"""
    __tablename__ = 'waitlist_signups'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120), nullable=False)
    phone = db.Column(db.String(30), nullable=False)
    gender = db.Column(db.String(20), nullable=True)
    age = db.Column(db.Integer, nullable=True)
    looking_for = db.Column(db.String(50), nullable=True)
    verified = db.Column(db.Boolean, default=False, nullable=False)
    signup_date = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    ip_address = db.Column(db.String(45), nullable=True)
    user_agent = db.Column(db.Text, nullable=True)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'gender': self.gender,
            'age': self.age,
            'looking_for': self.looking_for,
            'verified': self.verified,
            'signup_date': isoformat(self.signup_date),
        }

    def __repr__(self):
        return f'<WaitlistSignup {self.email}>'
