"""
URL slugs for shared event links.
"""

import re
from datetime import date

import pendulum

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_VALID_SLUG = re.compile(r"[a-z0-9-]+\Z")

MAX_TITLE_LENGTH = 30
MIN_SLUG_LENGTH = 3
MAX_SLUG_LENGTH = 100


def generate_slug(title: str, when: date) -> str:
    """
    Build a URL-safe slug from an event title and date.

    "Weekly Sync!" on 12 March becomes ``weekly-sync-mar-12``. The slug is
    deterministic and lossy; two events with the same title on the same day
    get the same slug, so callers must handle collisions themselves.

    Args:
        title: Event title as typed by the user
        when: Event date; datetimes are read in their own timezone

    Returns:
        Lower-case slug
    """
    title_slug = _DISALLOWED.sub("", title.lower())
    title_slug = _WHITESPACE.sub("-", title_slug)[:MAX_TITLE_LENGTH]

    date_slug = pendulum.instance(when).format("MMM-D", locale="en").lower()

    return f"{title_slug}-{date_slug}"


def is_valid_slug(slug: str) -> bool:
    """Check a slug is 3 to 100 characters of a-z, 0-9 and hyphens."""
    return bool(_VALID_SLUG.match(slug)) and MIN_SLUG_LENGTH <= len(slug) <= MAX_SLUG_LENGTH
