"""
Content type registry: one TableDescriptor per CMS table, plus the named
operations the admin routes call.
"""
import re
from datetime import date

from models.blog import BlogPost
from models.faq import Faq
from models.feature import Feature
from models.global_content import GlobalContent
from models.page import Page, Section
from models.pricing import PricingPlan
from utils.content_crud import EntityCRUD, TableDescriptor
from utils.errors import ValidationFailed
from utils.section_schemas import validate_section_data

SLUG_RE = re.compile(r'^[a-z0-9]+(?:-[a-z0-9]+)*$')


def _slug(value):
    value = str(value).strip()
    if not SLUG_RE.match(value):
        raise ValueError('Slug must be lowercase letters, digits and hyphens')
    return value


def _date(value):
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _non_negative_int(value):
    if isinstance(value, bool):
        raise ValueError('Expected an integer')
    value = int(value)
    if value < 0:
        raise ValueError('Must be zero or greater')
    return value


def _positive_int(value):
    value = _non_negative_int(value)
    if value < 1:
        raise ValueError('Must be at least 1')
    return value


def _price(value):
    if isinstance(value, bool):
        raise ValueError('Expected a number')
    value = float(value)
    if value < 0:
        raise ValueError('Price must be non-negative')
    return value


def _bool(value):
    if not isinstance(value, bool):
        raise ValueError('Expected true or false')
    return value


def _string_list(value):
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError('Expected a list of strings')
    return value


def _object(value):
    if not isinstance(value, dict):
        raise ValueError('Expected an object')
    return value


def validate_section(values, existing):
    """Check the section payload against its type schema.

    On update the check runs whenever type or data changes, using the stored
    value for whichever of the two is not being changed.
    """
    if existing is not None and 'type' not in values and 'data' not in values:
        return
    section_type = values.get('type', existing.component_type if existing is not None else None)
    data = values.get('data', existing.content if existing is not None else None)
    result = validate_section_data(section_type, data)
    if not result.success:
        raise ValidationFailed(result.error)


PAGES = TableDescriptor(
    content_type='page',
    model=Page,
    fields=('slug', 'title', 'description', 'metadata', 'published'),
    required=('slug', 'title'),
    defaults={'metadata': {}, 'published': False},
    column_map={'metadata': 'page_metadata'},
    coercers={'slug': _slug, 'metadata': _object, 'published': _bool},
    lookup_field='slug',
    immutable=('slug',),
)

SECTIONS = TableDescriptor(
    content_type='section',
    model=Section,
    fields=('page_id', 'type', 'order_index', 'data', 'published'),
    required=('page_id', 'type'),
    defaults={'order_index': 0, 'data': {}, 'published': False},
    column_map={'type': 'component_type', 'data': 'content'},
    coercers={'order_index': _non_negative_int, 'published': _bool},
    validator=validate_section,
    immutable=('page_id',),
    parent_field='page_id',
    order_field='order_index',
)

BLOG_POSTS = TableDescriptor(
    content_type='blog_post',
    model=BlogPost,
    label='blog post',
    fields=(
        'title', 'slug', 'excerpt', 'content', 'category_id', 'author',
        'publish_date', 'read_time', 'featured_image', 'published',
    ),
    required=('title', 'slug'),
    defaults={'published': False},
    coercers={'slug': _slug, 'publish_date': _date, 'read_time': _positive_int, 'published': _bool},
)

FAQS = TableDescriptor(
    content_type='faq',
    model=Faq,
    label='FAQ',
    fields=('question', 'answer', 'category_id', 'order_index', 'published'),
    required=('question', 'answer', 'category_id'),
    defaults={'order_index': 0, 'published': False},
    coercers={'order_index': _non_negative_int, 'published': _bool},
    parent_field='category_id',
    order_field='order_index',
)

FEATURES = TableDescriptor(
    content_type='feature',
    model=Feature,
    fields=('title', 'description', 'icon', 'category_id', 'order_index', 'published'),
    required=('title', 'description', 'category_id'),
    defaults={'order_index': 0, 'published': False},
    coercers={'order_index': _non_negative_int, 'published': _bool},
    parent_field='category_id',
    order_field='order_index',
)

PRICING_PLANS = TableDescriptor(
    content_type='pricing_plan',
    model=PricingPlan,
    label='pricing plan',
    fields=(
        'plan_type', 'name', 'price', 'currency', 'billing_period', 'description',
        'features', 'is_popular', 'order_index', 'published',
    ),
    required=('name', 'price'),
    defaults={
        'plan_type': 'subscription',
        'currency': 'INR',
        'features': [],
        'is_popular': False,
        'order_index': 0,
        'published': False,
    },
    coercers={
        'price': _price,
        'features': _string_list,
        'is_popular': _bool,
        'order_index': _non_negative_int,
        'published': _bool,
    },
)

GLOBAL_CONTENT = TableDescriptor(
    content_type='global_content',
    model=GlobalContent,
    label='global content',
    fields=('key', 'content'),
    required=('key', 'content'),
    lookup_field='key',
    immutable=('key',),
)

# URL segment -> CRUD handler
CONTENT_TYPES = {
    'pages': EntityCRUD(PAGES),
    'sections': EntityCRUD(SECTIONS),
    'blog': EntityCRUD(BLOG_POSTS),
    'faqs': EntityCRUD(FAQS),
    'features': EntityCRUD(FEATURES),
    'pricing': EntityCRUD(PRICING_PLANS),
    'global': EntityCRUD(GLOBAL_CONTENT),
}

pages = CONTENT_TYPES['pages']
sections = CONTENT_TYPES['sections']
blog_posts = CONTENT_TYPES['blog']
faqs = CONTENT_TYPES['faqs']
features = CONTENT_TYPES['features']
pricing_plans = CONTENT_TYPES['pricing']
global_content = CONTENT_TYPES['global']


def create_page(ctx, data):
    return pages.create(ctx, data)


def update_page(ctx, slug, data):
    return pages.update(ctx, slug, data)


def delete_page(ctx, slug):
    pages.delete(ctx, slug)


def create_section(ctx, data):
    return sections.create(ctx, data)


def update_section(ctx, section_id, data):
    return sections.update(ctx, section_id, data)


def delete_section(ctx, section_id):
    sections.delete(ctx, section_id)


def reorder_sections(ctx, page_id, section_ids):
    return sections.reorder(ctx, page_id, section_ids)


def create_blog_post(ctx, data):
    return blog_posts.create(ctx, data)


def update_blog_post(ctx, post_id, data):
    return blog_posts.update(ctx, post_id, data)


def delete_blog_post(ctx, post_id):
    blog_posts.delete(ctx, post_id)


def create_faq(ctx, data):
    return faqs.create(ctx, data)


def update_faq(ctx, faq_id, data):
    return faqs.update(ctx, faq_id, data)


def delete_faq(ctx, faq_id):
    faqs.delete(ctx, faq_id)


def create_feature(ctx, data):
    return features.create(ctx, data)


def update_feature(ctx, feature_id, data):
    return features.update(ctx, feature_id, data)


def delete_feature(ctx, feature_id):
    features.delete(ctx, feature_id)


def create_pricing_plan(ctx, data):
    return pricing_plans.create(ctx, data)


def update_pricing_plan(ctx, plan_id, data):
    return pricing_plans.update(ctx, plan_id, data)


def delete_pricing_plan(ctx, plan_id):
    pricing_plans.delete(ctx, plan_id)


def update_global_content(ctx, key, content):
    return global_content.upsert(ctx, key, {'content': content})
