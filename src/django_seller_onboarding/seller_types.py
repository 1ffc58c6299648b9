"""Seller types and the onboarding steps each of them has to go through."""

from __future__ import annotations

import copy
import logging
from typing import Any, ClassVar

from .exceptions import SellerTypeNotFound
from .interfaces import Definition
from .registry import Registry

logger = logging.getLogger(__name__)

FALLBACK_SELLER_TYPE = "other"


class SellerTypeRegistry(Registry["SellerType"]):
    """Catalog of seller types."""

    implementations_module = "seller_types"
    label_attribute = "name"
    not_found_exception = SellerTypeNotFound


class SellerType(Definition):
    """A kind of seller, and the onboarding it requires.

    ``required_steps`` is ordered and always starts with ``"category"``;
    ``optional_steps`` never overlaps it. ``default_fields`` pre-populates a new
    seller profile.
    """

    registry = SellerTypeRegistry

    name: str = ""
    color: str = ""
    category: str = "hybrid"  # product, service, digital or hybrid
    required_steps: ClassVar[tuple[str, ...]] = ()
    optional_steps: ClassVar[tuple[str, ...]] = ()
    default_fields: ClassVar[dict[str, Any]] = {}


SellerTypeRegistry.definition_class = SellerType


class Individual(SellerType):
    slug = "individual"
    name = "Individual Seller"
    description = "Sell products as an individual"
    icon = "user"
    color = "text-blue-600"
    category = "product"
    required_steps = ("category", "profile", "pricing", "payment")
    optional_steps = ("verification",)
    default_fields = {
        "business_name": "",
        "business_description": "",
        "business_address": "",
        "phone_number": "",
    }


class Business(SellerType):
    slug = "business"
    name = "Business/Store/Shop"
    description = "Sell products as a registered business"
    icon = "store"
    color = "text-green-600"
    category = "product"
    required_steps = ("category", "business_info", "verification", "pricing", "payment")
    optional_steps = ("social_media", "location")
    default_fields = {
        "business_name": "",
        "business_description": "",
        "business_address": "",
        "phone_number": "",
        "registration_number": "",
        "tax_id": "",
        "business_type": "",
    }


class Artist(SellerType):
    slug = "artist"
    name = "Artist"
    description = "Sell artwork, prints, and creative products"
    icon = "palette"
    color = "text-purple-600"
    category = "hybrid"
    required_steps = ("category", "portfolio", "profile", "pricing", "payment")
    optional_steps = ("social_media", "exhibitions")
    default_fields = {
        "business_name": "",
        "business_description": "",
        "phone_number": "",
        "portfolio_url": "",
        "art_style": "",
        "mediums": [],
    }


class ContentCreator(SellerType):
    slug = "content_creator"
    name = "Content Creator"
    description = "Sell digital content, courses, and subscriptions"
    icon = "video"
    color = "text-pink-600"
    category = "digital"
    required_steps = ("category", "content_info", "portfolio", "pricing", "payment")
    optional_steps = ("social_media", "monetization")
    default_fields = {
        "business_name": "",
        "business_description": "",
        "phone_number": "",
        "portfolio_url": "",
        "content_types": [],
        "platforms": [],
        "audience_size": "",
    }


class OnlineTeacher(SellerType):
    slug = "online_teacher"
    name = "Online Teacher"
    description = "Create and sell online courses"
    icon = "graduation-cap"
    color = "text-amber-600"
    category = "digital"
    required_steps = ("category", "credentials", "teaching_info", "pricing", "payment")
    optional_steps = ("portfolio", "certifications")
    default_fields = {
        "business_name": "",
        "business_description": "",
        "phone_number": "",
        "qualifications": "",
        "subjects": [],
        "teaching_experience": "",
        "certifications": [],
    }


class Musician(SellerType):
    slug = "musician"
    name = "Musician"
    description = "Sell music, albums, and merchandise"
    icon = "music"
    color = "text-indigo-600"
    category = "hybrid"
    required_steps = ("category", "music_info", "portfolio", "pricing", "payment")
    optional_steps = ("social_media", "upcoming_shows")
    default_fields = {
        "business_name": "",
        "business_description": "",
        "phone_number": "",
        "portfolio_url": "",
        "genres": [],
        "record_label": "",
    }


class Photographer(SellerType):
    slug = "photographer"
    name = "Photographer"
    description = "Sell photography services and prints"
    icon = "camera"
    color = "text-cyan-600"
    category = "hybrid"
    required_steps = ("category", "portfolio", "profile", "pricing", "payment")
    optional_steps = ("specializations", "equipment")
    default_fields = {
        "business_name": "",
        "business_description": "",
        "phone_number": "",
        "portfolio_url": "",
        "specializations": [],
        "equipment": [],
    }


class Writer(SellerType):
    slug = "writer"
    name = "Writer"
    description = "Sell books, e-books, and writing services"
    icon = "book-open"
    color = "text-violet-600"
    category = "digital"
    required_steps = ("category", "writing_info", "portfolio", "pricing", "payment")
    optional_steps = ("publications", "awards")
    default_fields = {
        "business_name": "",
        "business_description": "",
        "phone_number": "",
        "portfolio_url": "",
        "genres": [],
        "publications": [],
    }


class Restaurant(SellerType):
    slug = "restaurant"
    name = "Restaurant"
    description = "Sell food, manage reservations, and events"
    icon = "utensils"
    color = "text-red-600"
    category = "service"
    required_steps = ("category", "business_info", "menu_info", "location", "pricing", "payment")
    optional_steps = ("hours", "cuisine_type", "delivery_options")
    default_fields = {
        "business_name": "",
        "business_description": "",
        "business_address": "",
        "phone_number": "",
        "cuisine_type": "",
        "operating_hours": {},
        "delivery_available": False,
    }


class EventOrganizer(SellerType):
    slug = "event_organizer"
    name = "Event Organizer"
    description = "Organize and sell tickets for events"
    icon = "calendar"
    color = "text-emerald-600"
    category = "service"
    required_steps = ("category", "business_info", "event_info", "pricing", "payment")
    optional_steps = ("past_events", "venue_info")
    default_fields = {
        "business_name": "",
        "business_description": "",
        "business_address": "",
        "phone_number": "",
        "event_types": [],
        "past_events": [],
    }


class ServiceProvider(SellerType):
    slug = "service_provider"
    name = "Service Provider"
    description = "Offer professional services"
    icon = "briefcase"
    color = "text-slate-600"
    category = "service"
    required_steps = ("category", "service_info", "profile", "pricing", "payment")
    optional_steps = ("certifications", "availability")
    default_fields = {
        "business_name": "",
        "business_description": "",
        "business_address": "",
        "phone_number": "",
        "service_types": [],
        "certifications": [],
    }


class Other(SellerType):
    slug = FALLBACK_SELLER_TYPE
    name = "Other"
    description = "Custom seller type"
    icon = "store"
    color = "text-gray-600"
    category = "hybrid"
    required_steps = ("category", "profile", "pricing", "payment")
    optional_steps = ("custom_fields",)
    default_fields = {
        "business_name": "",
        "business_description": "",
        "business_address": "",
        "phone_number": "",
        "custom_type": "",
    }


def get_config(seller_type: str | None) -> type[SellerType]:
    """Return the definition for ``seller_type``, or the ``other`` definition if it is unknown."""
    definition = SellerTypeRegistry.get_or_default(seller_type, default=FALLBACK_SELLER_TYPE)
    if definition is None:
        # Only reachable if a project unregistered the fallback type.
        raise SellerTypeNotFound(FALLBACK_SELLER_TYPE)
    if definition.slug != seller_type:
        logger.debug("Unknown seller type %r, falling back to '%s'", seller_type, FALLBACK_SELLER_TYPE)
    return definition


def get_required_steps(seller_type: str | None) -> list[str]:
    return list(get_config(seller_type).required_steps)


def get_optional_steps(seller_type: str | None) -> list[str]:
    return list(get_config(seller_type).optional_steps)


def get_all_steps(seller_type: str | None) -> list[str]:
    """Return required steps followed by optional steps."""
    config = get_config(seller_type)
    return [*config.required_steps, *config.optional_steps]


def is_step_required(seller_type: str | None, step_id: str) -> bool:
    return step_id in get_config(seller_type).required_steps


def get_default_fields(seller_type: str | None) -> dict[str, Any]:
    """Return a fresh copy of the profile defaults, safe to mutate."""
    return copy.deepcopy(get_config(seller_type).default_fields)
