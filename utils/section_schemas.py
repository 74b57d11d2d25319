"""
Section payload schemas

One pydantic model per section component type. validate_section_data() is the
check every section create/update runs before writing; unknown types accept
any object payload.
"""
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, ValidationError


class Badge(BaseModel):
    icon: str | None = None
    text: str | None = None


class Platform(BaseModel):
    name: str
    icon: str | None = None
    coming: bool = True


class HeroCta(BaseModel):
    text: str | None = None
    buttonText: str | None = None
    subtext: str | None = None
    badge: str | None = None


class HeroImages(BaseModel):
    women: list[str] | None = None
    men: list[str] | None = None


class HeroSection(BaseModel):
    title: str = Field(min_length=1)
    tagline: str | None = None
    subtitle: str | None = None
    cta: HeroCta | None = None
    images: HeroImages | None = None


class BlogPostSection(BaseModel):
    title: str = Field(min_length=5)
    slug: str = Field(min_length=3, pattern=r'^[a-z0-9-]+$')
    excerpt: str = Field(min_length=20)
    content: str = Field(min_length=50)
    category_id: UUID | None = None
    author: str | None = None
    publish_date: str | None = None
    read_time: int | None = Field(default=None, ge=1)
    featured_image: str | None = None


class FaqItem(BaseModel):
    question: str = Field(min_length=1)
    answer: str = Field(min_length=1)
    order_index: int | None = Field(default=None, ge=0)


class FaqCategorySection(BaseModel):
    category_id: UUID
    faqs: list[FaqItem]


class FeatureItem(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    icon: str | None = None
    order_index: int | None = Field(default=None, ge=0)


class FeatureCategorySection(BaseModel):
    category_id: UUID
    features: list[FeatureItem]


class PlanItem(BaseModel):
    name: str = Field(min_length=1)
    price: float = Field(ge=0)
    currency: str = 'INR'
    billing_period: str | None = None
    features: list[str]
    is_popular: bool = False
    order_index: int | None = Field(default=None, ge=0)


class PricingPlansSection(BaseModel):
    plans: list[PlanItem]


class PricingHeroSection(BaseModel):
    title: str | None = None
    subtitle: str | None = None
    badge: Badge | None = None


class FreeMessagesSection(BaseModel):
    count: int = Field(default=3, ge=0)
    title: str | None = None
    description: str | None = None


class Bundle(BaseModel):
    messages: int = Field(ge=1)
    popular: bool = False


class MessageBundlesSection(BaseModel):
    price_per_message: float = Field(default=10, ge=0)
    gst_rate: float = Field(default=18, ge=0, le=100)
    bundles: list[Bundle]
    min_messages: int = Field(default=5, ge=1)
    max_messages: int = Field(default=100, ge=1)
    title: str | None = None
    subtitle: str | None = None


class PricingInfoSection(BaseModel):
    title: str | None = None
    items: list[str]


class QuestionAnswer(BaseModel):
    question: str = Field(min_length=1)
    answer: str = Field(min_length=1)


class LinkCta(BaseModel):
    text: str | None = None
    link: str | None = None


class PricingFaqSection(BaseModel):
    title: str | None = None
    faqs: list[QuestionAnswer]
    cta: LinkCta | None = None


class Step(BaseModel):
    step: str
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    image: str | None = None


class HowItWorksSection(BaseModel):
    title: str | None = None
    steps: list[Step]


class GalleryImage(BaseModel):
    image: str
    alt: str | None = None
    title: str | None = None
    story: str | None = None


class GalleryCta(BaseModel):
    text: str | None = None
    highlight: str | None = None


class GallerySection(BaseModel):
    title: str | None = None
    subtitle: str | None = None
    badge: Badge | None = None
    images: list[GalleryImage]
    cta: GalleryCta | None = None


class Testimonial(BaseModel):
    name: str = Field(min_length=1)
    image: str | None = None
    text: str = Field(min_length=1)
    location: str | None = None
    rating: int | None = Field(default=None, ge=1, le=5)
    date: str | None = None


class TextIcon(BaseModel):
    text: str | None = None
    icon: str | None = None


class TestimonialsSection(BaseModel):
    title: str | None = None
    subtitle: str | None = None
    badge: Badge | None = None
    testimonials: list[Testimonial]
    stats: TextIcon | None = None


class TextSubtext(BaseModel):
    text: str | None = None
    subtext: str | None = None


class DownloadStats(BaseModel):
    text: str | None = None
    count: str | None = None
    suffix: str | None = None


class DecorativeImages(BaseModel):
    decorative: list[str] | None = None


class AppDownloadSection(BaseModel):
    title: str | None = None
    subtitle: str | None = None
    badge: Badge | None = None
    benefits: list[str] | None = None
    cta: TextSubtext | None = None
    platforms: list[Platform] | None = None
    stats: DownloadStats | None = None
    images: DecorativeImages | None = None


class TextOnly(BaseModel):
    text: str | None = None


class ComingSoonSection(BaseModel):
    title: str | None = None
    subtitle: str | None = None
    badge: Badge | None = None
    cta: TextOnly | None = None
    platforms: list[Platform] | None = None
    stats: DownloadStats | None = None
    screenshots: list[str] | None = None


class ContactHeroSection(BaseModel):
    title: str | None = None
    subtitle: str | None = None
    badge: Badge | None = None


class ContactInfoItem(BaseModel):
    icon: str | None = None
    title: str | None = None
    details: str | None = None
    link: str | None = None


class ContactInfoSection(BaseModel):
    title: str | None = None
    items: list[ContactInfoItem] | None = None


class ContactDetailItem(BaseModel):
    icon: str | None = None
    title: str | None = None
    description: str | None = None


class FaqLink(BaseModel):
    text: str | None = None
    url: str | None = None


class ContactInfoDetailsSection(BaseModel):
    title: str | None = None
    description: str | None = None
    items: list[ContactDetailItem] | None = None
    faq_link: FaqLink | None = None


class AnySection(BaseModel):
    """Fallback for unregistered types: any JSON object"""
    model_config = {'extra': 'allow'}


SECTION_SCHEMAS = {
    'hero': HeroSection,
    'blog-post': BlogPostSection,
    'faq-category': FaqCategorySection,
    'feature-category': FeatureCategorySection,
    'pricing-plans': PricingPlansSection,
    'pricing-hero': PricingHeroSection,
    'free-messages': FreeMessagesSection,
    'message-bundles': MessageBundlesSection,
    'pricing-info': PricingInfoSection,
    'pricing-faq': PricingFaqSection,
    'contact-hero': ContactHeroSection,
    'contact-info': ContactInfoSection,
    'contact-info-details': ContactInfoDetailsSection,
    'how-it-works': HowItWorksSection,
    'gallery': GallerySection,
    'testimonials': TestimonialsSection,
    'app-download': AppDownloadSection,
    'coming-soon': ComingSoonSection,
}


@dataclass
class ValidationResult:
    success: bool
    error: str = None


def get_section_schema(section_type):
    return SECTION_SCHEMAS.get(section_type, AnySection)


def _format_errors(exc):
    parts = []
    for err in exc.errors():
        path = '.'.join(str(p) for p in ('data',) + tuple(err['loc']))
        parts.append(f"{path}: {err['msg']}")
    return ', '.join(parts)


def validate_section_data(section_type: str, data: Any) -> ValidationResult:
    """Check a section payload against the schema registered for its type."""
    if not section_type:
        return ValidationResult(False, 'type: Type is required')
    if not isinstance(data, dict):
        return ValidationResult(False, 'data: Expected an object')
    try:
        get_section_schema(section_type).model_validate(data)
    except ValidationError as e:
        return ValidationResult(False, _format_errors(e))
    return ValidationResult(True)
