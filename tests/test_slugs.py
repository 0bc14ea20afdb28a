"""Tests for slug transforms."""
import pytest

from seo.slugs import city_slug, humanize, listing_path, parse_city_slug, slugify, unslug


@pytest.mark.parametrize(
    "text",
    ["mini excavator", "Skid Steer Loader", "cat 320", "JLG 600S boom lift", "a"],
)
def test_humanize_slugify_round_trip(text):
    assert humanize(slugify(text)) == humanize(text)


def test_humanize():
    assert humanize("mini-excavator") == "Mini Excavator"


def test_slugify_collapses_whitespace():
    assert slugify("  Boom   Lift ") == "boom-lift"


def test_unslug_keeps_case():
    assert unslug("Skid-Steer") == "Skid Steer"


@pytest.mark.parametrize(
    "slug,expected",
    [
        ("baton-rouge-la", ("Baton Rouge", "LA")),
        ("lafayette-la", ("Lafayette", "LA")),
        ("houma", ("Houma", None)),
    ],
)
def test_parse_city_slug(slug, expected):
    assert parse_city_slug(slug) == expected


def test_city_slug():
    assert city_slug("Baton Rouge", "LA") == "baton-rouge-la"


def test_listing_path_skips_empty_segments():
    assert listing_path("en", "type", "excavator", None) == "/en/equipment-rental/type/excavator"
