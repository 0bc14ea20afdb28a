"""Tests for URL pattern resolution."""
import pytest

from seo.resolver import UrlPatternResolver


@pytest.fixture
def resolver():
    return UrlPatternResolver()


class TestSeoRules:
    """Suffixed long-tail paths."""

    def test_equipment_page(self, resolver):
        intent = resolver.resolve(["excavator-rental-lafayette-la"])
        assert intent.kind == "equipment"
        assert intent.category == "excavator"
        assert intent.is_canonical_seo_form is True

    def test_service_page(self, resolver):
        intent = resolver.resolve(["service", "daily-excavator-rental-lafayette-la"])
        assert intent.kind == "service"
        assert intent.category == "daily-excavator-rental"

    @pytest.mark.parametrize(
        "prefix",
        ["brand", "industry", "project", "specification", "attachment", "seasonal", "compare", "pricing", "guide"],
    )
    def test_prefixed_pages(self, resolver, prefix):
        intent = resolver.resolve([prefix, "something-lafayette-la"])
        assert intent.kind == prefix
        assert intent.category == "something"

    def test_slug_path_keeps_original_segments(self, resolver):
        intent = resolver.resolve(["brand", "bobcat-rental-lafayette-la"], "es")
        assert intent.slug_path == "brand/bobcat-rental-lafayette-la"
        assert intent.locale == "es"

    def test_suffix_only_stripped_from_final_segment(self, resolver):
        intent = resolver.resolve(["guide", "excavator-rental-guide-lafayette-la"])
        assert intent.category == "excavator-rental-guide"

    def test_suffixed_path_never_falls_back_to_legacy(self, resolver):
        assert resolver.resolve(["unknown-prefix", "thing-lafayette-la"]).is_unknown

    def test_custom_suffix(self):
        resolver = UrlPatternResolver(seo_suffix="-houston-tx")
        assert resolver.resolve(["crane-rental-houston-tx"]).category == "crane"


class TestLegacyRules:
    """Suffix-less shapes become redirects to structured routes."""

    def test_make_model(self, resolver):
        intent = resolver.resolve(["caterpillar-320-rental"])
        assert intent.kind == "redirectLegacy"
        assert intent.redirect_target == "makeModel"
        assert intent.make == "caterpillar"
        assert intent.model == "320"
        assert intent.redirect_path == "/en/equipment-rental/make/caterpillar/320"

    def test_make_with_multi_part_model(self, resolver):
        intent = resolver.resolve(["john-deere-310sl-rental"])
        assert intent.make == "john"
        assert intent.model == "deere-310sl"

    def test_type_with_location(self, resolver):
        intent = resolver.resolve(["excavator-rental-baton-rouge-la"])
        assert intent.redirect_target == "type"
        assert intent.primary_type == "excavator"
        assert intent.redirect_path == "/en/equipment-rental/type/excavator"

    def test_make_model_city(self, resolver):
        intent = resolver.resolve(["bobcat", "t770", "rental-lafayette"], "es")
        assert intent.redirect_target == "makeModelCity"
        assert intent.redirect_path == "/es/equipment-rental/make/bobcat/t770/lafayette-la"

    def test_type_city_state(self, resolver):
        intent = resolver.resolve(["excavator", "new-orleans", "la"])
        assert intent.redirect_target == "typeCity"
        assert intent.redirect_path == "/en/equipment-rental/type/excavator/new-orleans-la"

    def test_type_equipment_city(self, resolver):
        intent = resolver.resolve(["heavy-equipment-lafayette"])
        assert intent.redirect_target == "typeCity"
        assert intent.primary_type == "heavy"
        assert intent.city == "lafayette-la"

    @pytest.mark.parametrize(
        "segments",
        [[], ["excavator-rental"], ["about"], ["a", "b"], ["a", "b", "c", "d"]],
    )
    def test_unknown_shapes(self, resolver, segments):
        assert resolver.resolve(segments).is_unknown


class TestResolvePath:
    def test_strips_locale_and_base(self, resolver):
        intent = resolver.resolve_path("/es/equipment-rental/service/daily-excavator-rental-lafayette-la")
        assert intent.locale == "es"
        assert intent.kind == "service"
