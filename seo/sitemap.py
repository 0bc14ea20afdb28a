"""
Sitemap generation.

``generate_all`` enumerates the long-tail SEO paths for one locale. It is a
pure, deterministic function of the vocabularies and the service area.
``build_sitemap_entries`` adds static and inventory-derived pages and expands
each path to every locale. ``render_sitemap`` serializes the entries to the
sitemaps.org XML format with hreflang alternates.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from xml.etree import ElementTree as ET

from pydantic import BaseModel, Field

from inventory.geo import DEFAULT_SERVICE_AREA, ServiceArea, is_within_service_radius
from inventory.models import EquipmentItem
from observability.metrics import sitemap_urls_total
from seo.slugs import city_slug, slugify
from seo.vocabulary import (
    ATTACHMENTS,
    BRAND_MODELS,
    COMPARISONS,
    EQUIPMENT_SPECS,
    EQUIPMENT_TYPE_VARIATIONS,
    GUIDE_EQUIPMENT,
    GUIDE_TOPICS,
    HEADLINE_EQUIPMENT,
    INDUSTRIES,
    MAJOR_CITIES,
    PRICING_EQUIPMENT,
    PRICING_TERMS,
    PROJECT_TYPES,
    SEASONAL_EVENTS,
    SERVICE_TYPES,
)

logger = logging.getLogger(__name__)

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
XHTML_NS = "http://www.w3.org/1999/xhtml"

ET.register_namespace("", SITEMAP_NS)
ET.register_namespace("xhtml", XHTML_NS)

# (path below the locale, changefreq, priority)
STATIC_PAGES: List[Tuple[str, str, float]] = [
    ("", "daily", 1.0),
    ("/about", "monthly", 0.8),
    ("/contact", "monthly", 0.8),
    ("/equipment-rental", "daily", 0.9),
    ("/support/faq", "monthly", 0.7),
    ("/industries", "monthly", 0.8),
]


class SitemapEntry(BaseModel):
    loc: str
    changefreq: str
    priority: float
    alternates: Dict[str, str] = Field(default_factory=dict)


def generate_all(locale: str, area: ServiceArea = DEFAULT_SERVICE_AREA) -> List[str]:
    """
    Every long-tail SEO path for ``locale``, deduplicated.

    Sorted by priority (descending), then path (ascending).
    """
    base = f"/{locale}/equipment-rental"
    suffix = area.seo_suffix
    paths: List[str] = []

    for variations in EQUIPMENT_TYPE_VARIATIONS.values():
        for variation in variations:
            paths.append(f"{base}/{variation}-rental{suffix}")

    for brand, model, equipment_type in BRAND_MODELS:
        paths.append(f"{base}/brand/{brand}-{model}-{equipment_type}-rental{suffix}")
        paths.append(f"{base}/brand/{brand}-rental{suffix}")

    for service in SERVICE_TYPES:
        for equipment in EQUIPMENT_TYPE_VARIATIONS:
            paths.append(f"{base}/service/{service}-{equipment}-rental{suffix}")

    for industry in INDUSTRIES:
        for equipment in EQUIPMENT_TYPE_VARIATIONS:
            paths.append(f"{base}/industry/{industry}-{equipment}-rental{suffix}")

    for project in PROJECT_TYPES:
        paths.append(f"{base}/project/{project}-equipment-rental{suffix}")

    for equipment_type, specs in EQUIPMENT_SPECS.items():
        for spec in specs:
            paths.append(f"{base}/specification/{spec}-{equipment_type}-rental{suffix}")

    for attachment in ATTACHMENTS:
        paths.append(f"{base}/attachment/{attachment}-rental{suffix}")
        paths.append(f"{base}/attachment/excavator-{attachment}-rental{suffix}")

    for event in SEASONAL_EVENTS:
        paths.append(f"{base}/seasonal/{event}-equipment-rental{suffix}")

    for first, second in COMPARISONS:
        paths.append(f"{base}/compare/{first}-vs-{second}-rental{suffix}")

    for topic in PRICING_TERMS:
        paths.append(f"{base}/pricing/{topic}{suffix}")
        for equipment in PRICING_EQUIPMENT:
            paths.append(f"{base}/pricing/{equipment}-{topic}{suffix}")

    for topic in GUIDE_TOPICS:
        paths.append(f"{base}/guide/{topic}{suffix}")
        for equipment in GUIDE_EQUIPMENT:
            paths.append(f"{base}/guide/{equipment}-{topic}{suffix}")

    unique = list(dict.fromkeys(paths))
    return sorted(unique, key=lambda p: (-url_metadata(p, area)[1], p))


def url_metadata(path: str, area: ServiceArea = DEFAULT_SERVICE_AREA) -> Tuple[str, float]:
    """(changefreq, priority) for a long-tail SEO path, from the path's keywords."""
    suffix = area.seo_suffix
    for equipment in HEADLINE_EQUIPMENT:
        if f"/equipment-rental/{equipment}-rental{suffix}" in path:
            return "daily", 0.9
    if "/brand/" in path:
        return "weekly", 0.8
    if "/service/" in path or "/industry/" in path:
        return "weekly", 0.7
    if "/project/" in path or "/specification/" in path:
        return "weekly", 0.6
    if "/guide/" in path or "/compare/" in path:
        return "monthly", 0.4
    below_base = path.split("/equipment-rental/", 1)[-1]
    if "/" not in below_base:
        return "weekly", 0.8
    return "monthly", 0.5


def _locale_path(path: str, locale: str, new_locale: str) -> str:
    prefix = f"/{locale}"
    if path == prefix or path.startswith(prefix + "/"):
        return f"/{new_locale}{path[len(prefix):]}"
    return path


def _expand_locales(
    suffix_path: str,
    changefreq: str,
    priority: float,
    base_url: str,
    locales: Sequence[str],
) -> List[SitemapEntry]:
    """One entry per locale for a path given below the locale segment."""
    alternates = {loc: f"{base_url}/{loc}{suffix_path}" for loc in locales}
    return [
        SitemapEntry(loc=alternates[loc], changefreq=changefreq, priority=priority, alternates=alternates)
        for loc in locales
    ]


def machine_city_slug(item: EquipmentItem, area: ServiceArea = DEFAULT_SERVICE_AREA) -> str:
    """City segment for a machine's location URL; masked or out-of-area stock uses the service area."""
    if item.buy_it_now_only or item.coordinates is None:
        return area.city_slug
    if not is_within_service_radius(item.coordinates[0], item.coordinates[1], area):
        return area.city_slug
    city = item.location.city or area.city
    state = item.location.state or area.state
    return city_slug(city, state)


def inventory_paths(items: Iterable[EquipmentItem], area: ServiceArea = DEFAULT_SERVICE_AREA) -> List[Tuple[str, str, float]]:
    """Inventory-derived pages (below the locale segment) as (path, changefreq, priority)."""
    pages: List[Tuple[str, str, float]] = []
    types: List[str] = []
    make_models: List[Tuple[str, str]] = []

    for item in items:
        pages.append((f"/equipment-rental/machines/{item.id}", "weekly", 0.7))
        pages.append(
            (f"/equipment-rental/location/{machine_city_slug(item, area)}/machines/{item.id}", "weekly", 0.6)
        )
        type_slug = slugify(item.primary_type)
        if type_slug and type_slug not in types:
            types.append(type_slug)
        if item.make and item.model:
            pair = (slugify(item.make), slugify(item.model))
            if pair not in make_models:
                make_models.append(pair)

    for type_slug in types:
        pages.append((f"/equipment-rental/type/{type_slug}", "daily", 0.8))
        for city in MAJOR_CITIES:
            pages.append((f"/equipment-rental/type/{type_slug}/{city}", "weekly", 0.7))

    for make, model in make_models:
        pages.append((f"/equipment-rental/make/{make}/{model}", "weekly", 0.7))
        for city in MAJOR_CITIES[:3]:
            pages.append((f"/equipment-rental/make/{make}/{model}/{city}", "weekly", 0.6))

    return pages


def build_sitemap_entries(
    base_url: str,
    locales: Sequence[str],
    *,
    items: Optional[Iterable[EquipmentItem]] = None,
    area: ServiceArea = DEFAULT_SERVICE_AREA,
) -> List[SitemapEntry]:
    """All sitemap entries, deduplicated by loc and sorted by priority then loc."""
    base_url = base_url.rstrip("/")
    default_locale = locales[0]
    entries: List[SitemapEntry] = []

    for path, changefreq, priority in STATIC_PAGES:
        entries.extend(_expand_locales(path, changefreq, priority, base_url, locales))

    if items is not None:
        for path, changefreq, priority in inventory_paths(items, area):
            entries.extend(_expand_locales(path, changefreq, priority, base_url, locales))

    for path in generate_all(default_locale, area):
        changefreq, priority = url_metadata(path, area)
        below_locale = _locale_path(path, default_locale, "")[1:]
        entries.extend(_expand_locales(below_locale, changefreq, priority, base_url, locales))

    unique: Dict[str, SitemapEntry] = {}
    for entry in entries:
        unique.setdefault(entry.loc, entry)

    sitemap_urls_total.set(len(unique))
    logger.info(f"[Sitemap] Generated {len(unique)} URLs across {len(locales)} locales")
    return sorted(unique.values(), key=lambda e: (-e.priority, e.loc))


def _format_lastmod(lastmod: Optional[datetime]) -> str:
    moment = lastmod or datetime.now(timezone.utc)
    return moment.isoformat(timespec="seconds")


def render_sitemap(entries: Iterable[SitemapEntry], lastmod: Optional[datetime] = None) -> bytes:
    """Serialize entries as a sitemaps.org urlset with xhtml:link alternates."""
    stamp = _format_lastmod(lastmod)
    urlset = ET.Element(f"{{{SITEMAP_NS}}}urlset")

    for entry in entries:
        url = ET.SubElement(urlset, f"{{{SITEMAP_NS}}}url")
        ET.SubElement(url, f"{{{SITEMAP_NS}}}loc").text = entry.loc
        for hreflang, href in entry.alternates.items():
            ET.SubElement(
                url,
                f"{{{XHTML_NS}}}link",
                {"rel": "alternate", "hreflang": hreflang, "href": href},
            )
        ET.SubElement(url, f"{{{SITEMAP_NS}}}lastmod").text = stamp
        ET.SubElement(url, f"{{{SITEMAP_NS}}}changefreq").text = entry.changefreq
        ET.SubElement(url, f"{{{SITEMAP_NS}}}priority").text = f"{entry.priority:.1f}"

    return ET.tostring(urlset, encoding="utf-8", xml_declaration=True)


def fallback_sitemap(base_url: str, lastmod: Optional[datetime] = None) -> bytes:
    """Single-entry document served when full generation fails."""
    entry = SitemapEntry(loc=base_url.rstrip("/"), changefreq="daily", priority=1.0)
    return render_sitemap([entry], lastmod)
