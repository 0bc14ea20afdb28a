"""Page metadata (titles, descriptions, canonical and alternate URLs) per intent."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from inventory.geo import DEFAULT_SERVICE_AREA, ServiceArea
from seo.resolver import IntentDescriptor
from seo.slugs import humanize, parse_city_slug
from seo.vocabulary import INDUSTRIES, PROJECT_TYPES, brand_names, longest_prefix

DEFAULT_BASE_URL = "https://www.lafayetteequipmentrental.com"
DEFAULT_LOCALES = ("en", "es")
CANONICAL_LOCALE = "en"

OPEN_GRAPH_LOCALES = {"en": "en_US", "es": "es_ES"}


class PageMetadata(BaseModel):
    title: str
    description: str
    keywords: List[str] = Field(default_factory=list)
    canonical_url: str
    alternate_urls: Dict[str, str] = Field(default_factory=dict)
    open_graph_locale: str = "en_US"
    robots_index: bool = True


def _strip(slug: str, suffix: str) -> str:
    return slug[: -len(suffix)] if slug.endswith(suffix) else slug


def topic_token(descriptor: IntentDescriptor) -> str:
    """
    The humanized subject of a page.

    Brands and industries resolve to the longest known vocabulary entry so
    ``john-deere-310sl-backhoe-rental`` titles as "John Deere".
    """
    category = descriptor.category or ""
    kind = descriptor.kind

    if kind == "brand":
        return humanize(longest_prefix(category, brand_names()) or category.split("-")[0])
    if kind == "industry":
        return humanize(longest_prefix(category, INDUSTRIES) or category.split("-equipment")[0])
    if kind == "project":
        return humanize(longest_prefix(category, PROJECT_TYPES) or _strip(category, "-equipment-rental"))
    if kind in ("makeModel", "makeModelCity"):
        return humanize(f"{descriptor.make or ''} {descriptor.model or ''}")
    if kind == "typeCity":
        return humanize(descriptor.primary_type or category)
    return humanize(_strip(category, "-rental"))


def _location_string(descriptor: IntentDescriptor, area: ServiceArea) -> str:
    if descriptor.kind in ("typeCity", "makeModelCity") and descriptor.city:
        city, state = parse_city_slug(descriptor.city)
        return f"{city}, {state or area.state}"
    return area.display_location


def _templates(kind: str, token: str, location: str, business: str) -> Dict[str, str]:
    if kind == "equipment":
        return {
            "title": f"{token} Rental {location} | {business}",
            "description": (
                f"Rent {token.lower()} equipment in {location}. Daily, weekly, and monthly rates "
                f"available. Fast delivery and pickup. Call for availability and pricing."
            ),
        }
    if kind == "service":
        return {
            "title": f"{token} Equipment Rental {location} | {business}",
            "description": (
                f"{token} equipment rental services in {location}. Emergency rentals, same-day "
                f"delivery, flexible terms. Professional equipment for any project."
            ),
        }
    if kind == "brand":
        return {
            "title": f"{token} Equipment Rental {location} | {business}",
            "description": (
                f"Rent {token} construction equipment in {location}. Authorized dealer with full "
                f"fleet of {token} machines. Competitive rates and expert service."
            ),
        }
    if kind == "industry":
        return {
            "title": f"{token} Equipment Rental {location} | {business}",
            "description": (
                f"Specialized {token.lower()} equipment rental in {location}. Complete solutions for "
                f"{token.lower()} projects. Professional grade equipment and support."
            ),
        }
    if kind == "project":
        return {
            "title": f"{token} Equipment {location} | {business}",
            "description": (
                f"Equipment rental for {token.lower()} projects in {location}. Complete equipment "
                f"packages, expert advice, and competitive pricing."
            ),
        }
    if kind in ("typeCity", "makeModel", "makeModelCity"):
        return {
            "title": f"{token} Rental in {location} | {business}",
            "description": (
                f"Find {token} equipment for rent in {location}. Browse available machines with "
                f"daily, weekly, and monthly rental rates."
            ),
        }
    if kind in ("specification", "attachment", "seasonal", "compare", "pricing", "guide"):
        return {
            "title": f"{token} {location} | {business}",
            "description": (
                f"{token} for equipment rental in {location}. Talk to our team about availability, "
                f"rates, and delivery."
            ),
        }
    return {
        "title": f"Equipment Rental {location} | {business}",
        "description": (
            f"Construction and industrial equipment rental in {location}. Daily, weekly, and "
            f"monthly rates with fast delivery."
        ),
    }


def page_path(descriptor: IntentDescriptor, locale: str) -> str:
    if descriptor.is_redirect and descriptor.redirect_path:
        # Point at the destination with the locale swapped in
        rest = descriptor.redirect_path.split("/", 2)[2]
        return f"/{locale}/{rest}"
    path = f"/{locale}/equipment-rental"
    if descriptor.slug_path:
        path += f"/{descriptor.slug_path}"
    return path


def build_metadata(
    descriptor: IntentDescriptor,
    locale: str,
    *,
    area: ServiceArea = DEFAULT_SERVICE_AREA,
    base_url: str = DEFAULT_BASE_URL,
    locales: Sequence[str] = DEFAULT_LOCALES,
) -> PageMetadata:
    """Metadata for ``descriptor`` as rendered in ``locale``; canonical is always English."""
    base_url = base_url.rstrip("/")
    token = topic_token(descriptor)
    location = _location_string(descriptor, area)
    texts = _templates(descriptor.kind, token, location, area.business_name)

    keywords: List[str] = []
    if token:
        keywords.append(token.lower())
    keywords.extend(["rental", area.city, area.state_full_name or area.state, "construction equipment"])

    canonical = f"{base_url}{page_path(descriptor, CANONICAL_LOCALE)}"
    alternates = {loc: f"{base_url}{page_path(descriptor, loc)}" for loc in locales}
    alternates["x-default"] = canonical

    return PageMetadata(
        title=texts["title"],
        description=texts["description"],
        keywords=keywords,
        canonical_url=canonical,
        alternate_urls=alternates,
        open_graph_locale=OPEN_GRAPH_LOCALES.get(locale, "en_US"),
        robots_index=not (descriptor.is_redirect or descriptor.is_unknown),
    )


def structured_page_descriptor(
    kind: str,
    locale: str,
    *,
    primary_type: Optional[str] = None,
    make: Optional[str] = None,
    model: Optional[str] = None,
    city: Optional[str] = None,
    category: Optional[str] = None,
) -> IntentDescriptor:
    """Descriptor for the structured listing routes, which bypass slug resolution."""
    if kind == "typeCity":
        slug_path = f"type/{primary_type}/{city}" if city else f"type/{primary_type}"
    elif kind == "makeModelCity":
        slug_path = f"make/{make}/{model}/{city}"
    elif kind == "makeModel":
        slug_path = f"make/{make}/{model}"
    else:
        slug_path = category or ""
    return IntentDescriptor(
        kind=kind,
        locale=locale,
        slug_path=slug_path,
        category=category or primary_type,
        primary_type=primary_type,
        make=make,
        model=model,
        city=city,
    )
