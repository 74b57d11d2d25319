"""
Blog model definitions
"""
from models import db, generate_uuid, isoformat
from datetime import datetime

class BlogCategory(db.Model):
    """Blog category"""
    __tablename__ = 'blog_categories'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    name = db.Column(db.String(120), nullable=False)
    slug = db.Column(db.String(120), unique=True, nullable=False)
    description = db.Column(db.Text, nullable=True)
    order_index = db.Column(db.Integer, default=0, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    posts = db.relationship('BlogPost', backref='category', lazy=True)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'slug': self.slug,
            'description': self.description,
            'order_index': self.order_index,
        }


class BlogPost(db.Model):
    """Blog post, publicly served at /blog/<slug>"""
    __tablename__ = 'blog_posts'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), unique=True, nullable=False)
    excerpt = db.Column(db.Text, nullable=True)
    content = db.Column(db.Text, nullable=True)
    category_id = db.Column(db.String(36), db.ForeignKey('blog_categories.id'), nullable=True)
    author = db.Column(db.String(120), nullable=True)
    publish_date = db.Column(db.Date, nullable=True)
    read_time = db.Column(db.Integer, nullable=True)
    featured_image = db.Column(db.String(500), nullable=True)
    published = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow)
    created_by = db.Column(db.String(36), nullable=True)
    updated_by = db.Column(db.String(36), nullable=True)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'slug': self.slug,
            'excerpt': self.excerpt,
            'content': self.content,
            'category_id': self.category_id,
            'author': self.author,
            'publish_date': isoformat(self.publish_date),
            'read_time': self.read_time,
            'featured_image': self.featured_image,
            'published': self.published,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }

    def __repr__(self):
        return f'<BlogPost {self.slug}>'
