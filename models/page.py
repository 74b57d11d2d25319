"""
Page and section model definitions
"""
from models import db, generate_uuid, isoformat
from datetime import datetime

class Page(db.Model):
    """A public page addressed by slug; its body is an ordered list of sections"""
    __tablename__ = 'pages'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    slug = db.Column(db.String(120), unique=True, nullable=False)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    # "metadata" is reserved on declarative models
    page_metadata = db.Column('metadata', db.JSON, nullable=False, default=dict)
    published = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow)
    created_by = db.Column(db.String(36), nullable=True)
    updated_by = db.Column(db.String(36), nullable=True)

    sections = db.relationship(
        'Section',
        backref='page',
        lazy=True,
        cascade='all, delete-orphan',
        order_by='Section.order_index',
    )

    def to_dict(self):
        return {
            'id': self.id,
            'slug': self.slug,
            'title': self.title,
            'description': self.description,
            'metadata': self.page_metadata or {},
            'published': self.published,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }

    def __repr__(self):
        return f'<Page {self.slug}>'


class Section(db.Model):
    """A typed block of page content; `content` shape depends on `component_type`"""
    __tablename__ = 'sections'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    page_id = db.Column(db.String(36), db.ForeignKey('pages.id', ondelete='CASCADE'), nullable=False, index=True)
    component_type = db.Column(db.String(50), nullable=False)
    order_index = db.Column(db.Integer, default=0, nullable=False)
    content = db.Column(db.JSON, nullable=False, default=dict)
    published = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow)
    created_by = db.Column(db.String(36), nullable=True)
    updated_by = db.Column(db.String(36), nullable=True)

    def to_dict(self):
        return {
            'id': self.id,
            'page_id': self.page_id,
            'component_type': self.component_type,
            'order_index': self.order_index,
            'content': self.content or {},
            'published': self.published,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }

    def __repr__(self):
        return f'<Section {self.component_type} #{self.order_index}>'
