"""Tests for request metric labelling."""
from observability.middleware import endpoint_label


class TestEndpointLabel:
    def test_fixed_endpoints_keep_their_path(self):
        assert endpoint_label("/api/machine/nearby") == "/api/machine/nearby"
        assert endpoint_label("/sitemap.xml") == "/sitemap.xml"

    def test_listing_page(self):
        assert endpoint_label("/api/pages/es/equipment-rental") == "/api/pages/{locale}/equipment-rental"

    def test_structured_pages_fold_their_params(self):
        base = "/api/pages/{locale}/equipment-rental"
        assert endpoint_label("/api/pages/en/equipment-rental/type/excavator/scott-la") == f"{base}/type/{{params}}"
        assert endpoint_label("/api/pages/en/equipment-rental/make/bobcat/t770") == f"{base}/make/{{params}}"

    def test_seo_slugs_share_one_label(self):
        first = endpoint_label("/api/pages/en/equipment-rental/excavator-rental-lafayette-la")
        second = endpoint_label("/api/pages/es/equipment-rental/guide/rental-tips-lafayette-la")
        assert first == second == "/api/pages/{locale}/equipment-rental/{slug}"

    def test_unknown_paths_share_one_label(self):
        assert endpoint_label("/wp-login.php") == "/{unmatched}"
        assert endpoint_label("/api/machine/12345") == "/{unmatched}"
