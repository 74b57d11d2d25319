"""
FAQ model definitions
"""
from models import db, generate_uuid, isoformat
from datetime import datetime

class FaqCategory(db.Model):
    """FAQ category"""
    __tablename__ = 'faq_categories'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    name = db.Column(db.String(120), nullable=False)
    slug = db.Column(db.String(120), unique=True, nullable=False)
    order_index = db.Column(db.Integer, default=0, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    faqs = db.relationship('Faq', backref='category', lazy=True)

    def to_dict(self):
        return {'id': self.id, 'name': self.name, 'slug': self.slug, 'order_index': self.order_index}


class Faq(db.Model):
    """Question and answer pair"""
    __tablename__ = 'faqs'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    category_id = db.Column(db.String(36), db.ForeignKey('faq_categories.id'), nullable=False)
    question = db.Column(db.Text, nullable=False)
    answer = db.Column(db.Text, nullable=False)
    order_index = db.Column(db.Integer, default=0, nullable=False)
    published = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow)
    created_by = db.Column(db.String(36), nullable=True)
    updated_by = db.Column(db.String(36), nullable=True)

    def to_dict(self):
        return {
            'id': self.id,
            'category_id': self.category_id,
            'question': self.question,
            'answer': self.answer,
            'order_index': self.order_index,
            'published': self.published,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }
