"""
Global content model definition
"""
from models import db, generate_uuid, isoformat
from datetime import datetime

class GlobalContent(db.Model):
    """Site-wide blocks keyed by name: navbar, footer, social_links, contact_info, site_config"""
    __tablename__ = 'global_content'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    key = db.Column(db.String(100), unique=True, nullable=False)
    content = db.Column(db.JSON, nullable=False, default=dict)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_by = db.Column(db.String(36), nullable=True)

    def to_dict(self):
        return {
            'id': self.id,
            'key': self.key,
            'content': self.content,
            'updated_at': isoformat(self.updated_at),
        }

    def __repr__(self):
        return f'<GlobalContent {self.key}>'
