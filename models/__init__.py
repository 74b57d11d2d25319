"""
Models package for the CMS admin panel
"""
import uuid

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def generate_uuid():
    """String UUID primary key default"""
    return str(uuid.uuid4())


def isoformat(value):
    return value.isoformat() if value else None


# Import all models here to ensure they're registered
from models.user import User
from models.admin import AdminUser
from models.page import Page, Section
from models.global_content import GlobalContent
from models.blog import BlogCategory, BlogPost
from models.faq import FaqCategory, Faq
from models.feature import FeatureCategory, Feature
from models.pricing import PricingPlan
from models.waitlist import WaitlistSignup
from models.content_history import ContentHistory, register_history_listeners

register_history_listeners()

__all__ = [
    'db',
    'generate_uuid',
    'User',
    'AdminUser',
    'Page',
    'Section',
    'GlobalContent',
    'BlogCategory',
    'BlogPost',
    'FaqCategory',
    'Faq',
    'FeatureCategory',
    'Feature',
    'PricingPlan',
    'WaitlistSignup',
    'ContentHistory',
]
