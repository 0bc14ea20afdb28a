"""Tests for sitemap path generation and XML rendering."""
from datetime import datetime, timezone
from xml.etree import ElementTree as ET

from conftest import FAR, NEAR, make_item
from seo.resolver import UrlPatternResolver
from seo.sitemap import (
    SITEMAP_NS,
    XHTML_NS,
    build_sitemap_entries,
    fallback_sitemap,
    generate_all,
    inventory_paths,
    machine_city_slug,
    render_sitemap,
    url_metadata,
)

BASE = "https://www.example.com"
LASTMOD = datetime(2024, 1, 15, tzinfo=timezone.utc)


class TestGenerateAll:
    """Long-tail SEO path enumeration."""

    def test_no_duplicates(self):
        paths = generate_all("en")
        assert len(paths) == len(set(paths))

    def test_every_path_resolves_to_a_seo_intent(self):
        resolver = UrlPatternResolver()
        for path in generate_all("en"):
            intent = resolver.resolve_path(path)
            assert not intent.is_unknown, path
            assert not intent.is_redirect, path
            assert intent.is_canonical_seo_form

    def test_kind_matches_path_prefix(self):
        resolver = UrlPatternResolver()
        for path in generate_all("en"):
            below_base = path.split("/equipment-rental/", 1)[1]
            kind = resolver.resolve_path(path).kind
            if "/" in below_base:
                assert kind == below_base.split("/")[0], path
            else:
                assert kind == "equipment", path

    def test_deterministic(self):
        assert generate_all("en") == generate_all("en")

    def test_locale_prefix(self):
        assert all(p.startswith("/es/equipment-rental/") for p in generate_all("es"))

    def test_sorted_by_priority_then_path(self):
        paths = generate_all("en")
        keys = [(-url_metadata(p)[1], p) for p in paths]
        assert keys == sorted(keys)
        assert paths[0] == "/en/equipment-rental/excavator-rental-lafayette-la"

    def test_known_samples(self):
        paths = set(generate_all("en"))
        assert "/en/equipment-rental/brand/caterpillar-320-excavator-rental-lafayette-la" in paths
        assert "/en/equipment-rental/brand/caterpillar-rental-lafayette-la" in paths
        assert "/en/equipment-rental/compare/excavator-vs-backhoe-rental-lafayette-la" in paths
        assert "/en/equipment-rental/pricing/excavator-rental-cost-lafayette-la" in paths


class TestUrlMetadata:
    def test_priority_table(self):
        assert url_metadata("/en/equipment-rental/skid-steer-rental-lafayette-la") == ("daily", 0.9)
        assert url_metadata("/en/equipment-rental/crane-rental-lafayette-la") == ("weekly", 0.8)
        assert url_metadata("/en/equipment-rental/brand/bobcat-rental-lafayette-la") == ("weekly", 0.8)
        assert url_metadata("/en/equipment-rental/industry/marine-crane-rental-lafayette-la") == ("weekly", 0.7)
        assert url_metadata("/en/equipment-rental/project/demolition-equipment-rental-lafayette-la") == ("weekly", 0.6)
        assert url_metadata("/en/equipment-rental/seasonal/mardi-gras-equipment-rental-lafayette-la") == ("monthly", 0.5)
        assert url_metadata("/en/equipment-rental/guide/rental-tips-lafayette-la") == ("monthly", 0.4)

    def test_mini_excavator_is_not_headline(self):
        assert url_metadata("/en/equipment-rental/mini-excavator-rental-lafayette-la") == ("weekly", 0.8)


class TestInventoryPaths:
    def test_city_slug_for_local_and_masked_items(self):
        assert machine_city_slug(make_item("A", NEAR, city="Scott")) == "scott-la"
        assert machine_city_slug(make_item("C", FAR, city="Houston", state="TX")) == "lafayette-la"
        masked = make_item("B", NEAR, city="Scott").with_masked_location("Lafayette", "LA")
        assert machine_city_slug(masked) == "lafayette-la"

    def test_type_and_make_model_pages(self):
        pages = [path for path, _, _ in inventory_paths([make_item("A", NEAR)])]
        assert "/equipment-rental/machines/A" in pages
        assert "/equipment-rental/location/scott-la/machines/A" in pages
        assert "/equipment-rental/type/excavator" in pages
        assert "/equipment-rental/type/excavator/new-orleans-la" in pages
        assert "/equipment-rental/make/caterpillar/320/baton-rouge-la" in pages
        assert "/equipment-rental/make/caterpillar/320/lake-charles-la" not in pages


class TestSitemapDocument:
    """Entry expansion and XML output."""

    def test_entries_per_locale_with_alternates(self):
        entries = build_sitemap_entries(BASE, ("en", "es"))
        locs = [e.loc for e in entries]
        assert len(locs) == len(set(locs))
        assert f"{BASE}/en" in locs
        assert f"{BASE}/es/equipment-rental/excavator-rental-lafayette-la" in locs

        home = next(e for e in entries if e.loc == f"{BASE}/es")
        assert home.alternates == {"en": f"{BASE}/en", "es": f"{BASE}/es"}

    def test_entries_sorted_by_priority(self):
        entries = build_sitemap_entries(BASE, ("en",), items=[make_item("A", NEAR)])
        priorities = [e.priority for e in entries]
        assert priorities == sorted(priorities, reverse=True)
        assert entries[0].loc == f"{BASE}/en"

    def test_render_parses_as_sitemap(self):
        entries = build_sitemap_entries(BASE, ("en", "es"))
        root = ET.fromstring(render_sitemap(entries, LASTMOD))

        assert root.tag == f"{{{SITEMAP_NS}}}urlset"
        urls = root.findall(f"{{{SITEMAP_NS}}}url")
        assert len(urls) == len(entries)

        first = urls[0]
        assert first.find(f"{{{SITEMAP_NS}}}priority").text == "1.0"
        assert first.find(f"{{{SITEMAP_NS}}}lastmod").text == "2024-01-15T00:00:00+00:00"
        links = first.findall(f"{{{XHTML_NS}}}link")
        assert {link.get("hreflang") for link in links} == {"en", "es"}

    def test_fallback_document(self):
        root = ET.fromstring(fallback_sitemap(BASE + "/", LASTMOD))
        urls = root.findall(f"{{{SITEMAP_NS}}}url")
        assert len(urls) == 1
        assert urls[0].find(f"{{{SITEMAP_NS}}}loc").text == BASE
        assert urls[0].find(f"{{{SITEMAP_NS}}}changefreq").text == "daily"
