"""URL slugs for product pages."""

import re

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def slugify(text):
    """Lowercase ``text`` and collapse every non-alphanumeric run into a hyphen."""
    slug = _NON_ALPHANUMERIC.sub("-", (text or "").lower()).strip("-")
    return slug or "product"


def unique_slug(base, taken):
    """Return ``base`` or the first ``base-N`` (N >= 2) not present in ``taken``."""
    slug = slugify(base)
    if slug not in taken:
        return slug

    suffix = 2
    while f"{slug}-{suffix}" in taken:
        suffix += 1
    return f"{slug}-{suffix}"
