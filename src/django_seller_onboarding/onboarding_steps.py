"""Onboarding steps: what each step asks for and how its answers are validated."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from .exceptions import StepNotFound
from .interfaces import Definition
from .registry import Registry
from .seller_types import SellerTypeRegistry, get_config
from .types import ValidationResult
from .utils import is_blank
from .validators import validate_field_value

logger = logging.getLogger(__name__)

FIELD_TYPES = (
    "text",
    "textarea",
    "email",
    "phone",
    "url",
    "number",
    "select",
    "multiselect",
    "checkbox",
    "file",
    "date",
    "time",
)


class StepRegistry(Registry["Step"]):
    """Catalog of onboarding steps, keyed by step id."""

    implementations_module = "onboarding_steps"
    label_attribute = "title"
    not_found_exception = StepNotFound


@dataclass(frozen=True)
class StepField:
    """One input of a step form.

    ``min``/``max`` bound the length of text values and the value of numbers.
    """

    id: str
    label: str
    type: str = "text"
    required: bool = False
    placeholder: str = ""
    options: tuple[tuple[str, str], ...] = ()
    min: int | None = None
    max: int | None = None
    pattern: str | None = None
    message: str | None = None
    help_text: str = ""

    def __post_init__(self):
        if self.type not in FIELD_TYPES:
            raise ValueError(f"Unknown field type '{self.type}' for field '{self.id}'")


class Step(Definition):
    """Base class for onboarding steps.

    Subclasses that need more than "required fields are filled in and within
    their limits" override ``validate``.
    """

    registry = StepRegistry

    title: str = ""
    component: str = ""
    fields: ClassVar[tuple[StepField, ...]] = ()
    order: int = 0
    can_skip: bool = False

    @classmethod
    def get_field(cls, field_id: str) -> StepField | None:
        return next((f for f in cls.fields if f.id == field_id), None)

    @classmethod
    def has_custom_validation(cls) -> bool:
        return cls.validate.__func__ is not Step.validate.__func__

    @classmethod
    def validate(cls, answers: Mapping[str, Any]) -> ValidationResult:
        errors = []
        for step_field in cls.fields:
            value = answers.get(step_field.id)
            if is_blank(value):
                if step_field.required:
                    errors.append(f"{step_field.label} is required")
                continue
            errors.extend(validate_field_value(step_field, value))
        return ValidationResult(valid=not errors, errors=errors)


StepRegistry.definition_class = Step


class CategoryStep(Step):
    slug = "category"
    title = "Tell Us About Your Business"
    description = "Select your business type to customize your onboarding. You can sell any product category later."
    component = "CategorySelection"
    fields = (StepField("seller_type", "Seller Type", type="select", required=True),)
    order = 1

    @classmethod
    def validate(cls, answers: Mapping[str, Any]) -> ValidationResult:
        seller_type = answers.get("seller_type")
        if is_blank(seller_type):
            return ValidationResult(valid=False, errors=["Please select a seller type"])
        if not SellerTypeRegistry.is_valid(seller_type):
            return ValidationResult(valid=False, errors=[f"Unknown seller type '{seller_type}'"])
        return ValidationResult(valid=True)


class ProfileStep(Step):
    slug = "profile"
    title = "Basic Information"
    description = "Tell us about yourself"
    component = "ProfileStep"
    fields = (
        StepField(
            "business_name",
            "Name / Business Name",
            required=True,
            placeholder="Enter your name or business name",
            min=2,
            max=100,
        ),
        StepField(
            "business_description",
            "Description",
            type="textarea",
            required=True,
            placeholder="Describe what you do or sell",
            min=10,
            max=500,
        ),
        StepField("phone_number", "Phone Number", type="phone", required=True, placeholder="+255 XXX XXX XXX"),
    )
    order = 2


class BusinessInfoStep(Step):
    slug = "business_info"
    title = "Business Information"
    description = "Provide your business details"
    component = "BusinessInfoStep"
    fields = (
        StepField("business_name", "Business Name", required=True, placeholder="Enter your business name"),
        StepField(
            "business_description",
            "Business Description",
            type="textarea",
            required=True,
            placeholder="Describe your business",
        ),
        StepField("business_address", "Business Address", required=True, placeholder="Enter your business address"),
        StepField("phone_number", "Phone Number", type="phone", required=True, placeholder="+255 XXX XXX XXX"),
        StepField("registration_number", "Registration Number", placeholder="Business registration number (optional)"),
        StepField("tax_id", "Tax ID", placeholder="Tax identification number (optional)"),
        StepField(
            "business_type",
            "Business Type",
            type="select",
            options=(
                ("sole_proprietorship", "Sole Proprietorship"),
                ("partnership", "Partnership"),
                ("corporation", "Corporation"),
                ("llc", "LLC"),
                ("other", "Other"),
            ),
        ),
    )
    order = 2


class VerificationStep(Step):
    slug = "verification"
    title = "Verification"
    description = "Verify your business identity"
    component = "VerificationStep"
    fields = (
        StepField(
            "verification_document",
            "Verification Document",
            type="file",
            required=True,
            help_text="Upload business license, registration certificate, or ID",
        ),
    )
    order = 3


class PortfolioStep(Step):
    slug = "portfolio"
    title = "Portfolio"
    description = "Showcase your work"
    component = "PortfolioStep"
    fields = (
        StepField("portfolio_url", "Portfolio URL", type="url", placeholder="https://yourportfolio.com"),
        StepField(
            "portfolio_files",
            "Portfolio Files",
            type="file",
            help_text="Upload images or files showcasing your work",
        ),
    )
    order = 3


class ContentInfoStep(Step):
    slug = "content_info"
    title = "Content Information"
    description = "Tell us about your content"
    component = "ContentInfoStep"
    fields = (
        StepField(
            "content_types",
            "Content Types",
            type="multiselect",
            required=True,
            options=(
                ("video", "Video"),
                ("audio", "Audio"),
                ("courses", "Courses"),
                ("ebooks", "E-books"),
                ("subscriptions", "Subscriptions"),
                ("other", "Other"),
            ),
        ),
        StepField(
            "platforms",
            "Platforms",
            type="multiselect",
            options=(
                ("youtube", "YouTube"),
                ("instagram", "Instagram"),
                ("tiktok", "TikTok"),
                ("twitter", "Twitter"),
                ("facebook", "Facebook"),
                ("other", "Other"),
            ),
        ),
        StepField(
            "audience_size",
            "Audience Size",
            type="select",
            options=(
                ("0-1k", "0 - 1,000"),
                ("1k-10k", "1,000 - 10,000"),
                ("10k-100k", "10,000 - 100,000"),
                ("100k-1m", "100,000 - 1,000,000"),
                ("1m+", "1,000,000+"),
            ),
        ),
    )
    order = 3


class CredentialsStep(Step):
    slug = "credentials"
    title = "Credentials"
    description = "Your qualifications and experience"
    component = "CredentialsStep"
    fields = (
        StepField(
            "qualifications",
            "Qualifications",
            type="textarea",
            required=True,
            placeholder="List your educational qualifications and certifications",
        ),
        StepField(
            "teaching_experience",
            "Teaching Experience",
            type="textarea",
            required=True,
            placeholder="Describe your teaching experience",
        ),
    )
    order = 2


class TeachingInfoStep(Step):
    slug = "teaching_info"
    title = "Teaching Information"
    description = "Tell us about what you teach"
    component = "TeachingInfoStep"
    fields = (
        StepField(
            "subjects",
            "Subjects You Teach",
            type="multiselect",
            required=True,
            options=(
                ("technology", "Technology"),
                ("business", "Business"),
                ("design", "Design"),
                ("marketing", "Marketing"),
                ("languages", "Languages"),
                ("personal_development", "Personal Development"),
                ("other", "Other"),
            ),
        ),
        StepField(
            "certifications",
            "Certifications",
            type="multiselect",
            options=(
                ("certified_instructor", "Certified Instructor"),
                ("industry_certification", "Industry Certification"),
                ("university_degree", "University Degree"),
                ("other", "Other"),
            ),
        ),
    )
    order = 3


class MusicInfoStep(Step):
    slug = "music_info"
    title = "Music Information"
    description = "Tell us about your music"
    component = "MusicInfoStep"
    fields = (
        StepField(
            "genres",
            "Music Genres",
            type="multiselect",
            required=True,
            options=(
                ("pop", "Pop"),
                ("rock", "Rock"),
                ("hip_hop", "Hip Hop"),
                ("jazz", "Jazz"),
                ("classical", "Classical"),
                ("electronic", "Electronic"),
                ("african", "African"),
                ("other", "Other"),
            ),
        ),
        StepField("record_label", "Record Label", placeholder="Record label (if applicable)"),
    )
    order = 3


class WritingInfoStep(Step):
    slug = "writing_info"
    title = "Writing Information"
    description = "Tell us about your writing"
    component = "WritingInfoStep"
    fields = (
        StepField(
            "genres",
            "Writing Genres",
            type="multiselect",
            required=True,
            options=(
                ("fiction", "Fiction"),
                ("non_fiction", "Non-Fiction"),
                ("poetry", "Poetry"),
                ("technical", "Technical"),
                ("academic", "Academic"),
                ("other", "Other"),
            ),
        ),
    )
    order = 3


class MenuInfoStep(Step):
    slug = "menu_info"
    title = "Menu Information"
    description = "Tell us about your menu"
    component = "MenuInfoStep"
    fields = (
        StepField(
            "cuisine_type",
            "Cuisine Type",
            type="select",
            required=True,
            options=(
                ("local", "Local/Traditional"),
                ("international", "International"),
                ("fusion", "Fusion"),
                ("fast_food", "Fast Food"),
                ("fine_dining", "Fine Dining"),
                ("cafe", "Cafe"),
                ("other", "Other"),
            ),
        ),
        StepField(
            "specialties",
            "Specialties",
            type="textarea",
            placeholder="List your signature dishes or specialties",
        ),
    )
    order = 3


class EventInfoStep(Step):
    slug = "event_info"
    title = "Event Information"
    description = "Tell us about the events you organize"
    component = "EventInfoStep"
    fields = (
        StepField(
            "event_types",
            "Event Types",
            type="multiselect",
            required=True,
            options=(
                ("concerts", "Concerts"),
                ("conferences", "Conferences"),
                ("workshops", "Workshops"),
                ("sports", "Sports Events"),
                ("festivals", "Festivals"),
                ("webinars", "Webinars"),
                ("other", "Other"),
            ),
        ),
    )
    order = 3


class ServiceInfoStep(Step):
    slug = "service_info"
    title = "Service Information"
    description = "Tell us about your services"
    component = "ServiceInfoStep"
    fields = (
        StepField(
            "service_types",
            "Service Types",
            type="multiselect",
            required=True,
            options=(
                ("consulting", "Consulting"),
                ("design", "Design"),
                ("development", "Development"),
                ("marketing", "Marketing"),
                ("legal", "Legal"),
                ("accounting", "Accounting"),
                ("other", "Other"),
            ),
        ),
    )
    order = 3


class LocationStep(Step):
    slug = "location"
    title = "Location"
    description = "Where are you located?"
    component = "LocationStep"
    fields = (
        StepField("business_address", "Address", required=True, placeholder="Enter your address"),
        StepField("city", "City", required=True, placeholder="Enter your city"),
        StepField("region", "Region", placeholder="Enter your region"),
        StepField("country", "Country", required=True, placeholder="Enter your country"),
    )
    order = 4


class PricingStep(Step):
    slug = "pricing"
    title = "Choose Your Plan"
    description = "Select a pricing model and plan"
    component = "PricingStep"
    order = 5


class PaymentStep(Step):
    slug = "payment"
    title = "Payment Setup"
    description = "Set up your payment method"
    component = "PaymentStep"
    order = 6


class SocialMediaStep(Step):
    slug = "social_media"
    title = "Social Media"
    description = "Connect your social media accounts"
    component = "SocialMediaStep"
    fields = (
        StepField("facebook_url", "Facebook", type="url", placeholder="https://facebook.com/yourpage"),
        StepField("instagram_url", "Instagram", type="url", placeholder="https://instagram.com/yourpage"),
        StepField("twitter_url", "Twitter", type="url", placeholder="https://twitter.com/yourpage"),
    )
    order = 7
    can_skip = True


class ExhibitionsStep(Step):
    slug = "exhibitions"
    title = "Exhibitions"
    description = "List your past and upcoming exhibitions"
    component = "ExhibitionsStep"
    fields = (StepField("exhibitions", "Exhibitions", type="textarea", placeholder="List your exhibitions"),)
    order = 8
    can_skip = True


class MonetizationStep(Step):
    slug = "monetization"
    title = "Monetization"
    description = "How do you monetize your content?"
    component = "MonetizationStep"
    fields = (
        StepField(
            "monetization_methods",
            "Monetization Methods",
            type="multiselect",
            options=(
                ("ads", "Ads"),
                ("sponsorships", "Sponsorships"),
                ("merchandise", "Merchandise"),
                ("subscriptions", "Subscriptions"),
                ("donations", "Donations"),
            ),
        ),
    )
    order = 8
    can_skip = True


class CertificationsStep(Step):
    slug = "certifications"
    title = "Certifications"
    description = "List your professional certifications"
    component = "CertificationsStep"
    fields = (
        StepField(
            "certifications",
            "Certifications",
            type="multiselect",
            options=(
                ("professional", "Professional Certification"),
                ("industry", "Industry Certification"),
                ("academic", "Academic Certification"),
                ("other", "Other"),
            ),
        ),
    )
    order = 8
    can_skip = True


class SpecializationsStep(Step):
    slug = "specializations"
    title = "Specializations"
    description = "What are your specializations?"
    component = "SpecializationsStep"
    fields = (
        StepField(
            "specializations",
            "Specializations",
            type="multiselect",
            options=(
                ("portrait", "Portrait"),
                ("landscape", "Landscape"),
                ("wedding", "Wedding"),
                ("commercial", "Commercial"),
                ("fashion", "Fashion"),
                ("other", "Other"),
            ),
        ),
    )
    order = 8
    can_skip = True


class EquipmentStep(Step):
    slug = "equipment"
    title = "Equipment"
    description = "List your professional equipment"
    component = "EquipmentStep"
    fields = (StepField("equipment", "Equipment", type="textarea", placeholder="List your equipment"),)
    order = 8
    can_skip = True


class PublicationsStep(Step):
    slug = "publications"
    title = "Publications"
    description = "List your published works"
    component = "PublicationsStep"
    fields = (StepField("publications", "Publications", type="textarea", placeholder="List your publications"),)
    order = 8
    can_skip = True


class AwardsStep(Step):
    slug = "awards"
    title = "Awards"
    description = "List any awards or recognition"
    component = "AwardsStep"
    fields = (StepField("awards", "Awards", type="textarea", placeholder="List your awards"),)
    order = 8
    can_skip = True


class UpcomingShowsStep(Step):
    slug = "upcoming_shows"
    title = "Upcoming Shows"
    description = "List your upcoming shows and performances"
    component = "UpcomingShowsStep"
    fields = (StepField("upcoming_shows", "Upcoming Shows", type="textarea", placeholder="List your upcoming shows"),)
    order = 8
    can_skip = True


class HoursStep(Step):
    slug = "hours"
    title = "Operating Hours"
    description = "When are you open?"
    component = "HoursStep"
    fields = (StepField("operating_hours", "Operating Hours", placeholder="e.g., Mon-Fri 9AM-5PM"),)
    order = 4
    can_skip = True


class CuisineTypeStep(Step):
    slug = "cuisine_type"
    title = "Cuisine Type"
    description = "What type of cuisine do you serve?"
    component = "CuisineTypeStep"
    fields = (
        StepField(
            "cuisine_type",
            "Cuisine Type",
            type="select",
            options=(
                ("local", "Local/Traditional"),
                ("international", "International"),
                ("fusion", "Fusion"),
                ("other", "Other"),
            ),
        ),
    )
    order = 4
    can_skip = True


class DeliveryOptionsStep(Step):
    slug = "delivery_options"
    title = "Delivery Options"
    description = "Do you offer delivery?"
    component = "DeliveryOptionsStep"
    fields = (
        StepField("delivery_available", "Delivery Available", type="checkbox"),
        StepField("delivery_radius", "Delivery Radius (km)", type="number", placeholder="0", min=0),
    )
    order = 5
    can_skip = True


class PastEventsStep(Step):
    slug = "past_events"
    title = "Past Events"
    description = "List your past events"
    component = "PastEventsStep"
    fields = (StepField("past_events", "Past Events", type="textarea", placeholder="List your past events"),)
    order = 4
    can_skip = True


class VenueInfoStep(Step):
    slug = "venue_info"
    title = "Venue Information"
    description = "Tell us about your venue"
    component = "VenueInfoStep"
    fields = (
        StepField("venue_capacity", "Venue Capacity", type="number", placeholder="0", min=0),
        StepField(
            "venue_amenities",
            "Venue Amenities",
            type="multiselect",
            options=(
                ("parking", "Parking"),
                ("wifi", "WiFi"),
                ("catering", "Catering"),
                ("av_equipment", "AV Equipment"),
                ("other", "Other"),
            ),
        ),
    )
    order = 5
    can_skip = True


class AvailabilityStep(Step):
    slug = "availability"
    title = "Availability"
    description = "When are you available?"
    component = "AvailabilityStep"
    fields = (
        StepField("availability", "Availability", type="textarea", placeholder="Describe your availability"),
    )
    order = 4
    can_skip = True


class CustomFieldsStep(Step):
    slug = "custom_fields"
    title = "Additional Information"
    description = "Any additional information"
    component = "CustomFieldsStep"
    fields = (
        StepField("custom_type", "Custom Type", placeholder="Describe your seller type"),
        StepField(
            "additional_info",
            "Additional Information",
            type="textarea",
            placeholder="Any additional information",
        ),
    )
    order = 3
    can_skip = True


def get_step_config(step_id: str) -> type[Step]:
    """Return the step registered as ``step_id``; raises ``StepNotFound`` otherwise."""
    return StepRegistry.get(step_id)


def get_ordered_steps(seller_type: str | None, include_optional: bool = False) -> list[type[Step]]:
    """Resolve a seller type's steps, sorted by ``order``.

    ``sorted`` is stable, so steps sharing an ``order`` keep the seller type's
    listing order.
    """
    config = get_config(seller_type)
    step_ids = [*config.required_steps, *config.optional_steps] if include_optional else list(config.required_steps)
    return sorted((get_step_config(step_id) for step_id in step_ids), key=lambda step: step.order)


def get_ordered_step_ids(seller_type: str | None, include_optional: bool = False) -> list[str]:
    return [step.slug for step in get_ordered_steps(seller_type, include_optional)]


def validate_step(step_id: str, answers: Mapping[str, Any] | None) -> ValidationResult:
    """Validate the answers submitted for a step."""
    step = get_step_config(step_id)
    result = step.validate(answers or {})
    if not result.valid:
        logger.debug("Step '%s' failed validation: %s", step_id, result.errors)
    return result
