"""
Shared Utility Functions

Common helper functions used across multiple modules.
"""

import logging
import uuid
from datetime import date, datetime
from typing import Any, List, Optional

from cs_genius.config import get_settings

logger = logging.getLogger(__name__)


def generate_item_id() -> str:
    """
    Generate a fresh opaque identifier for a knowledge item.

    Returns:
        Short random hex identifier
    """
    return uuid.uuid4().hex[:12]


def today_iso(today: Optional[date] = None) -> str:
    """
    Format a calendar date as YYYY-MM-DD.

    Args:
        today: Date to format, defaults to the current local date

    Returns:
        ISO date string without a time component
    """
    return (today or date.today()).isoformat()


def parse_item_date(value: Any) -> Optional[date]:
    """
    Parse a lastUpdated value into a calendar date.

    Accepts date objects, datetimes and ISO strings (date or datetime form).
    Anything else, including empty values, yields None.

    Args:
        value: Raw lastUpdated value

    Returns:
        Parsed date, or None if missing or invalid
    """
    if not value:
        return None

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if not isinstance(value, str):
        return None

    text = value.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        logger.debug(f"Unparseable lastUpdated value: {value!r}")
        return None


def coerce_app(value: Any, app_options: Optional[List[str]] = None) -> str:
    """
    Constrain an app tag to the closed product list.

    Unknown, empty or non-string values fall back to the catch-all tag.

    Args:
        value: Raw app value (possibly from an LLM response or a backup file)
        app_options: Allowed values, defaults to the configured list

    Returns:
        A value from the app list
    """
    settings = get_settings()
    options = app_options or settings.app_options

    if isinstance(value, str) and value.strip() in options:
        return value.strip()

    if value:
        logger.debug(f"Coercing unrecognized app {value!r} to {settings.default_app}")
    return settings.default_app


def clean_string_list(items: Any) -> List[str]:
    """
    Normalize a loosely typed list of strings.

    Handles a single string, None, nested lists and non-string members;
    blank entries are dropped.

    Args:
        items: Any value that could be a list or a string

    Returns:
        Flat list of non-empty strings
    """
    if not items:
        return []

    if isinstance(items, str):
        items = [items]

    if not isinstance(items, list):
        return [str(items)]

    result = []
    for item in items:
        if isinstance(item, list):
            result.extend(clean_string_list(item))
        elif item is not None and str(item).strip():
            result.append(str(item).strip())

    return result
