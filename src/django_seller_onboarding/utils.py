from __future__ import annotations

import logging
import re
import sys

logger = logging.getLogger(__name__)

_migrations_running: bool | None = None


def is_running_migrations() -> bool:
    """Check if Django is currently running migrations."""
    global _migrations_running
    if _migrations_running is None:
        _migrations_running = "migrate" in sys.argv or "makemigrations" in sys.argv
    return _migrations_running


def camel_to_title(text):
    """Convert camel case string to title case.

    Handles consecutive capitals correctly: 'HTTPServer' → 'HTTP Server'.
    """
    text = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1 \2", text)
    text = re.sub(r"([a-z\d])([A-Z])", r"\1 \2", text)
    return " ".join(word[0].upper() + word[1:] if word else "" for word in text.split(" ")).strip()


def get_display_string(klass: type, display_attribute: str | None = None) -> str:
    """Get display string for a class, using a specific attribute if provided."""
    if display_attribute and hasattr(klass, display_attribute):
        attr = getattr(klass, display_attribute)
        if attr:
            if callable(attr):
                return str(attr())
            return str(attr)

    return camel_to_title(klass.__name__)


def is_blank(value: object) -> bool:
    """Return True for values a form would treat as "not provided".

    Zero is a real answer for numeric fields, so only ``None``, ``False``,
    whitespace-only strings and empty collections count as blank.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


def unique(items) -> list:
    """Return the items in first-seen order with duplicates dropped."""
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result
