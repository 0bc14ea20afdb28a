"""Slug <-> display text transforms and storefront path helpers."""

import re
from typing import Optional, Tuple

_WORD_SPLIT = re.compile(r"[\s-]+")


def humanize(slug: str) -> str:
    """``mini-excavator`` -> ``Mini Excavator``."""
    return " ".join(word.capitalize() for word in _WORD_SPLIT.split(slug or "") if word)


def slugify(text: str) -> str:
    """``Mini Excavator`` -> ``mini-excavator``."""
    return "-".join(word.lower() for word in _WORD_SPLIT.split(text or "") if word)


def unslug(slug: str) -> str:
    """Hyphens to spaces, case untouched (index values are matched verbatim)."""
    return (slug or "").replace("-", " ").strip()


def parse_city_slug(city_slug: str) -> Tuple[str, Optional[str]]:
    """
    Split ``baton-rouge-la`` into (``Baton Rouge``, ``LA``).

    The state is None when the slug carries no two-letter suffix.
    """
    parts = [p for p in (city_slug or "").lower().split("-") if p]
    if len(parts) >= 2 and len(parts[-1]) == 2:
        return humanize("-".join(parts[:-1])), parts[-1].upper()
    return humanize("-".join(parts)), None


def city_slug(city: str, state: str) -> str:
    return slugify(f"{city} {state}")


def listing_path(locale: str, *segments: str) -> str:
    path = f"/{locale}/equipment-rental"
    for segment in segments:
        if segment:
            path += f"/{segment}"
    return path
