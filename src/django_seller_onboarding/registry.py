from __future__ import annotations

import logging
from collections.abc import Callable
from functools import wraps
from typing import TYPE_CHECKING, Any, Generic, TypedDict, TypeVar, cast

from django.core.cache import cache
from django.db.models import Model
from django.utils.module_loading import autodiscover_modules

from .app_settings import get_cache_timeout
from .signals import definition_registered, definition_unregistered, registry_reloaded
from .utils import get_display_string, is_running_migrations

if TYPE_CHECKING:
    from .interfaces import Definition

logger = logging.getLogger(__name__)

# Global registry index
onboarding_registries: list[type[Registry]] = []

TDefinition = TypeVar("TDefinition", bound="Definition")


def skip_during_migrations(func):
    """Decorator to skip method execution during migrations."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        if is_running_migrations():
            method_name = func.__name__
            if method_name in ("get_choices", "get_items"):
                return []
            return None
        return func(*args, **kwargs)

    return wrapper


class DefinitionMeta(TypedDict):
    """Type definition for registered definition metadata."""

    klass: type[Any]
    description: str
    icon: str
    priority: int


@skip_during_migrations
def discover_registries() -> None:
    """Autodiscover definition modules of every installed app and send reload signals."""
    for registry_cls in onboarding_registries:
        registry_cls.clear_cache()
        registry_cls.discover_definitions()
        registry_reloaded.send(sender=registry_cls, registry=registry_cls)
        logger.info(
            "Registry '%s' reloaded with %d definitions",
            registry_cls.__name__,
            len(registry_cls.definitions),
        )


@skip_during_migrations
def update_choices_fields() -> None:
    """Set model fields' choices from each registry."""
    from django.apps import apps as django_apps

    for registry_cls in onboarding_registries:
        for field_name, model_cls in registry_cls.choices_fields:
            try:
                model = django_apps.get_model(
                    model_cls._meta.app_label,  # noqa  # pyright: ignore[reportAttributeAccessIssue]
                    model_cls._meta.model_name,  # noqa  # pyright: ignore[reportAttributeAccessIssue]
                )
                field = model._meta.get_field(field_name)  # noqa
                field.choices = registry_cls.get_choices()
            except (LookupError, AttributeError) as exc:
                logger.error("Failed to update choices for %s.%s: %s", model_cls, field_name, exc)


class RegistryMeta(type):
    """Metaclass that lets Registry classes support `in`, `iter`, and `len`."""

    def __contains__(cls, item):
        return cast(type[Registry], cls).is_valid(item)

    def __iter__(cls):
        for meta in getattr(cls, "definitions", {}).values():
            yield meta["klass"]

    def __len__(cls):
        return len(getattr(cls, "definitions", {}))

    def __bool__(cls):
        return True  # Registry classes are always truthy, even when empty


class Registry(Generic[TDefinition], metaclass=RegistryMeta):
    """Base class for the static catalogs the onboarding engine reads from.

    Concrete registries set ``implementations_module``; every installed app's
    module of that name is imported by ``discover_registries()`` so projects can
    contribute their own definitions next to the built-in ones.
    """

    choices_fields: list[tuple[str, type[Model]]] = []
    label_attribute: str | None = None
    implementations_module: str
    definitions: dict[str, DefinitionMeta]
    definition_class: type[TDefinition] | None = None
    not_found_exception: type[KeyError] = KeyError

    def __init_subclass__(cls) -> None:
        super().__init_subclass__()
        if not getattr(cls, "implementations_module", None):
            logger.debug("Skipping registration of abstract registry class: %s", cls.__name__)
            return
        cls.definitions = {}
        cls.choices_fields = []
        onboarding_registries.append(cls)
        logger.debug("Registered new registry class: %s", cls.__name__)

    @classmethod
    def get_cache_key(cls, suffix: str) -> str:
        """Construct cache key for this registry."""
        return f"django_seller_onboarding:{cls.__name__}:{suffix}"

    @classmethod
    def validate_definition(cls, definition: type[TDefinition]) -> None:
        """Validate a definition before registration.

        The default checks that the definition has a non-empty ``slug`` and, if
        ``definition_class`` is set, that it is a subclass of it. Override to add
        registry-specific rules; raise to reject registration.
        """
        slug = getattr(definition, "slug", None)
        if not slug:
            logger.error("Cannot register definition without slug: %s", definition)
            raise ValueError("Definition must define a non-empty 'slug'")

        if cls.definition_class and not issubclass(definition, cls.definition_class):
            raise TypeError(f"Definition {definition} must inherit from {cls.definition_class}")

    @classmethod
    def build_definition_meta(cls, definition: type[TDefinition]) -> DefinitionMeta:
        """Build the metadata dict stored for a definition."""
        return {
            "klass": definition,
            "description": getattr(definition, "description", ""),
            "icon": getattr(definition, "icon", ""),
            "priority": getattr(definition, "priority", 0),
        }

    @classmethod
    def register(cls, definition: type[TDefinition]) -> None:
        """Register a definition and emit signal."""
        cls.validate_definition(definition)
        slug = getattr(definition, "slug", None)
        if not isinstance(slug, str):
            raise TypeError(f"Expected slug to be a string, got {type(slug).__name__}")
        meta = cls.build_definition_meta(definition)
        if slug in cls.definitions:
            existing = cls.definitions[slug].get("klass")
            if existing is not definition:
                logger.warning(
                    "Overwriting slug '%s' in registry '%s': %s -> %s",
                    slug,
                    cls.__name__,
                    existing,
                    definition,
                )
        cls.definitions[slug] = meta
        cls.clear_cache()
        definition_registered.send(sender=cls, registry=cls, definition=definition)
        logger.debug("Definition '%s' registered in registry '%s'", slug, cls.__name__)

    @classmethod
    def unregister(cls, slug: str) -> None:
        """Unregister a definition by its slug and emit signal."""
        if slug not in cls.definitions:
            logger.warning("Attempted to unregister missing slug '%s' from registry '%s'", slug, cls.__name__)
            raise cls.not_found_exception(slug)

        cls.definitions.pop(slug)
        cls.clear_cache()
        definition_unregistered.send(sender=cls, registry=cls, slug=slug)
        logger.info("Definition '%s' unregistered from registry '%s'", slug, cls.__name__)

    @classmethod
    def discover_definitions(cls) -> None:
        """Autodiscover modules to load definitions, if configured."""
        module_name = getattr(cls, "implementations_module", None)
        if module_name:
            autodiscover_modules(module_name)
        else:
            logger.debug("No implementations_module defined for %s; skipping autodiscover.", cls.__name__)

    @classmethod
    @skip_during_migrations
    def get_choices(cls) -> list[tuple[str, str]]:
        """Return a list of (slug, label) tuples, using cache if available."""
        key = cls.get_cache_key("choices")
        choices = cache.get(key)
        if choices is None:
            choices = []
            for slug, meta in sorted(
                cls.definitions.items(),
                key=lambda item: item[1].get("priority", 0),
            ):
                choices.append((slug, cls.get_display_name(meta["klass"])))
            cache.set(key, choices, get_cache_timeout())
            logger.debug("Choices cache populated for %s", cls.__name__)
        return choices

    @classmethod
    def get_display_name(cls, definition: type[TDefinition]) -> str:
        """Return a human-readable label for the definition."""
        return get_display_string(definition, cls.label_attribute)

    @classmethod
    def get(cls, slug: str) -> type[TDefinition]:
        """Return the definition registered under ``slug``.

        Raises ``not_found_exception`` if the slug is not registered.
        """
        meta = cls.definitions.get(slug)
        if not meta:
            logger.error("Requested slug '%s' not found in registry '%s'", slug, cls.__name__)
            raise cls.not_found_exception(slug)
        return cast("type[TDefinition]", meta["klass"])

    @classmethod
    def get_or_default(cls, slug: str | None, default: str | None = None) -> type[TDefinition] | None:
        """Get a definition by slug, falling back to ``default``.

        Unlike `get()`, this method does not raise. Returns None if neither the
        requested definition nor the default is registered.
        """
        if slug and slug in cls.definitions:
            return cast("type[TDefinition]", cls.definitions[slug]["klass"])
        if default is not None and default in cls.definitions:
            return cast("type[TDefinition]", cls.definitions[default]["klass"])
        return None

    @classmethod
    @skip_during_migrations
    def get_items(cls) -> list[tuple[str, type[TDefinition]]]:
        """Return (slug, class) pairs in registration order.

        Classes are read from the in-process definitions, never from the cache.
        """
        return [(slug, cast("type[TDefinition]", meta["klass"])) for slug, meta in cls.definitions.items()]

    @classmethod
    def is_valid(cls, value: object) -> bool:
        """Validate if value is a registered slug or a registered definition class."""
        if isinstance(value, str):
            return value in cls.definitions
        if isinstance(value, type):
            return any(value is meta["klass"] for meta in cls.definitions.values())
        return False

    @classmethod
    def clear_cache(cls) -> None:
        """Evict this registry's cache entries."""
        cache.delete(cls.get_cache_key("choices"))
        logger.debug("Cache cleared for %s", cls.__name__)

    @staticmethod
    def clear_all_cache() -> None:
        """Evict cache for all registries."""
        for reg in onboarding_registries:
            reg.clear_cache()

    @classmethod
    def slugs(cls) -> list[str]:
        """Return registered slugs in registration order."""
        return list(cls.definitions)


def register(registry_cls: type[Registry]) -> Callable[[type[Any]], type[Any]]:
    """Decorator to explicitly register a Definition subclass to a Registry."""

    def decorator(definition_cls: type[Definition]) -> type[Definition]:
        registry_cls.register(definition_cls)
        return definition_cls

    return decorator
