import logging

from .registry import Registry

logger = logging.getLogger(__name__)


class Definition:
    """Base class for declarative catalog entries that auto-register on subclassing.

    A subclass that sets both ``registry`` and ``slug`` is registered with that
    registry as soon as the class body is executed. Intermediate base classes
    leave ``slug`` unset and are skipped.
    """

    slug: str
    registry: "type[Registry[Definition]] | None" = None
    description: str = ""
    icon: str = ""
    priority: int = 0

    def __init_subclass__(cls) -> None:
        super().__init_subclass__()
        registry_cls = getattr(cls, "registry", None)
        slug = cls.__dict__.get("slug")
        if not registry_cls or not slug:
            logger.debug("Skipping registration of %s: missing registry or slug.", cls.__name__)
            return

        if not isinstance(registry_cls, type) or not hasattr(registry_cls, "register"):
            logger.error("Invalid registry '%s' for definition %s", registry_cls, cls)
            return

        logger.debug("Registering definition %s in %s", cls.__name__, registry_cls.__name__)
        registry_cls.register(cls)
