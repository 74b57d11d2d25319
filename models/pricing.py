"""
Pricing plan model definition
"""
from models import db, generate_uuid, isoformat
from datetime import datetime

class PricingPlan(db.Model):
    """Pricing plan shown on the pricing page"""
    __tablename__ = 'pricing_plans'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    plan_type = db.Column(db.String(50), default='subscription', nullable=False)  # subscription, bundle
    name = db.Column(db.String(120), nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    currency = db.Column(db.String(10), default='INR', nullable=False)
    billing_period = db.Column(db.String(50), nullable=True)
    description = db.Column(db.Text, nullable=True)
    features = db.Column(db.JSON, nullable=False, default=list)
    is_popular = db.Column(db.Boolean, default=False, nullable=False)
    order_index = db.Column(db.Integer, default=0, nullable=False)
    published = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow)
    created_by = db.Column(db.String(36), nullable=True)
    updated_by = db.Column(db.String(36), nullable=True)

    def to_dict(self):
        return {
            'id': self.id,
            'plan_type': self.plan_type,
            'name': self.name,
            'price': float(self.price) if self.price is not None else None,
            'currency': self.currency,
            'billing_period': self.billing_period,
            'description': self.description,
            'features': self.features or [],
            'is_popular': self.is_popular,
            'order_index': self.order_index,
            'published': self.published,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }

    def __repr__(self):
        return f'<PricingPlan {self.name}>'
