"""
Content history model and the ORM listeners that fill it
"""
from models import db, generate_uuid, isoformat
from datetime import datetime
from sqlalchemy import event

class ContentHistory(db.Model):
    """Audit trail row: one per insert/update/delete of a content row"""
    __tablename__ = 'content_history'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    entity_type = db.Column(db.String(50), nullable=False, index=True)
    entity_id = db.Column(db.String(36), nullable=False, index=True)
    action = db.Column(db.String(20), nullable=False)  # create, update, delete
    snapshot = db.Column(db.JSON, nullable=True)
    performed_by = db.Column(db.String(36), nullable=True)
    performed_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'entity_type': self.entity_type,
            'entity_id': self.entity_id,
            'action': self.action,
            'snapshot': self.snapshot,
            'performed_by': self.performed_by,
            'performed_at': isoformat(self.performed_at),
        }

    def __repr__(self):
        return f'<ContentHistory {self.action} {self.entity_type}:{self.entity_id}>'


def _history_writer(entity_type, action):
    def write(mapper, connection, target):
        connection.execute(
            ContentHistory.__table__.insert().values(
                id=generate_uuid(),
                entity_type=entity_type,
                entity_id=target.id,
                action=action,
                snapshot=target.to_dict(),
                performed_by=getattr(target, 'updated_by', None),
                performed_at=datetime.utcnow(),
            )
        )
    return write


def register_history_listeners():
    """Attach insert/update/delete listeners to every audited content model (once)"""
    from models.page import Page, Section
    from models.global_content import GlobalContent
    from models.blog import BlogPost
    from models.faq import Faq
    from models.feature import Feature
    from models.pricing import PricingPlan

    audited = {
        'page': Page,
        'section': Section,
        'global_content': GlobalContent,
        'blog_post': BlogPost,
        'faq': Faq,
        'feature': Feature,
        'pricing_plan': PricingPlan,
    }
    for entity_type, model in audited.items():
        if getattr(model, '_history_registered', False):
            continue
        event.listen(model, 'after_insert', _history_writer(entity_type, 'create'))
        event.listen(model, 'after_update', _history_writer(entity_type, 'update'))
        event.listen(model, 'after_delete', _history_writer(entity_type, 'delete'))
        model._history_registered = True
