"""Sitemap endpoint."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from config import Settings
from dependencies import get_aggregator, get_settings
from exceptions import StorefrontError
from inventory.aggregator import InventoryAggregator
from seo.sitemap import build_sitemap_entries, fallback_sitemap, render_sitemap

logger = logging.getLogger(__name__)
router = APIRouter(tags=["seo"])

SITEMAP_MEDIA_TYPE = "application/xml; charset=utf-8"


@router.get("/sitemap.xml")
async def sitemap(
    aggregator: InventoryAggregator = Depends(get_aggregator),
    settings: Settings = Depends(get_settings),
):
    """
    Full sitemap: static pages, inventory pages and long-tail SEO pages.

    Inventory pages are best effort; the SEO pages never depend on the index.
    """
    try:
        items = None
        try:
            listing = await aggregator.home_listing()
            if listing.error:
                logger.warning(f"[Sitemap] Inventory unavailable: {listing.error}")
            else:
                items = listing.items
        except StorefrontError as e:
            logger.warning(f"[Sitemap] Skipping inventory pages: {e.message}")

        entries = build_sitemap_entries(
            settings.site_base_url,
            settings.locales,
            items=items,
            area=settings.service_area,
        )
        body = render_sitemap(entries)
    except Exception as e:
        logger.error(f"[Sitemap] Generation failed, serving fallback: {e}", exc_info=True)
        return Response(
            content=fallback_sitemap(settings.site_base_url),
            media_type=SITEMAP_MEDIA_TYPE,
            headers={"Cache-Control": "public, max-age=3600"},
        )

    return Response(
        content=body,
        media_type=SITEMAP_MEDIA_TYPE,
        headers={"Cache-Control": "public, max-age=86400"},
    )
