"""
Unit tests for the initial viewport planner and the locale fallback table.
"""

import pytest

from conftest import LYON, MARSEILLE, PARIS, PARIS_NEARBY, make_entry
from journal_map.model.models import GeoPoint
from journal_map.viewport.locale import LocaleTag, region_for_locale
from journal_map.viewport.planner import (
    PlannerConfig,
    default_viewport_for_locale,
    plan_initial_viewport,
    zoom_for_span,
)


class TestDecisionOrder:
    """Device location > single entry > bounding box > locale."""

    def test_device_location_wins(self):
        device = GeoPoint(35.0, 139.0)
        vp = plan_initial_viewport([make_entry("1", PARIS)], device, "fr-FR")
        assert vp.center == device
        assert vp.zoom == 8.0
        assert vp.source == "device"

    def test_single_entry(self):
        entries = [make_entry("1", PARIS), make_entry("2")]
        vp = plan_initial_viewport(entries, None, "en-US")
        assert vp.center == PARIS
        assert vp.zoom == 14.0
        assert vp.source == "entry"

    def test_bounding_box_of_french_cities(self):
        entries = [make_entry("p", PARIS), make_entry("m", MARSEILLE), make_entry("l", LYON)]
        vp = plan_initial_viewport(entries)
        assert vp.center.latitude == pytest.approx((48.8566 + 43.2965) / 2)
        assert vp.center.longitude == pytest.approx((2.3522 + 5.3698) / 2)
        # 5.56° * 1.3 ≈ 7.2°
        assert vp.zoom == 6.0
        assert vp.source == "entries"

    def test_co_located_entries_clamped(self):
        entries = [make_entry("1", PARIS), make_entry("2", PARIS)]
        vp = plan_initial_viewport(entries)
        assert vp.center == PARIS
        assert vp.zoom == 14.0

    def test_very_close_entries(self):
        vp = plan_initial_viewport([make_entry("1", PARIS), make_entry("2", PARIS_NEARBY)])
        assert vp.zoom == 14.0

    def test_locale_fallback_france(self):
        vp = plan_initial_viewport([make_entry("1")], None, "fr-FR")
        assert vp.center == GeoPoint(46.2276, 2.2137)
        assert vp.zoom == 6.8
        assert vp.source == "locale:fr"

    def test_no_locale_is_world(self):
        vp = plan_initial_viewport([], None, None)
        assert vp.center == GeoPoint(20.0, 0.0)
        assert vp.zoom == 2.5

    def test_custom_config(self):
        cfg = PlannerConfig(device_zoom=5.0, single_entry_zoom=16.0)
        assert plan_initial_viewport([], GeoPoint(0, 0), config=cfg).zoom == 5.0
        assert plan_initial_viewport([make_entry("1", PARIS)], config=cfg).zoom == 16.0


class TestSpanTable:

    @pytest.mark.parametrize("span,zoom", [
        (90.0, 3.0), (40.1, 3.0), (40.0, 4.0), (20.5, 4.0), (15.0, 5.0),
        (7.2, 6.0), (3.0, 7.0), (1.5, 8.0), (0.75, 10.0), (0.3, 12.0),
        (0.2, 14.0), (0.01, 14.0),
    ])
    def test_span_to_zoom(self, span, zoom):
        assert zoom_for_span(span) == zoom


class TestLocaleTag:

    @pytest.mark.parametrize("text,language,country", [
        ("fr-FR", "fr", "FR"),
        ("en_US", "en", "US"),
        ("en_US.UTF-8", "en", "US"),
        ("de_DE@euro", "de", "DE"),
        ("zh-Hans-CN", "zh", "CN"),
        ("es-419", "es", "419"),
        ("FR", "fr", None),
        ("pt-br", "pt", "BR"),
    ])
    def test_parse(self, text, language, country):
        tag = LocaleTag.parse(text)
        assert tag.language == language
        assert tag.country == country

    @pytest.mark.parametrize("text", [None, "", "  ", "123", "-"])
    def test_parse_invalid(self, text):
        assert LocaleTag.parse(text) is None

    def test_str(self):
        assert str(LocaleTag("fr", "CA")) == "fr-CA"
        assert str(LocaleTag("fr")) == "fr"


class TestRegionTable:

    @pytest.mark.parametrize("text,name", [
        ("en-US", "us"),
        ("en-CA", "ca"),
        ("fr-CA", "ca"),
        ("en-GB", "gb"),
        ("en-AU", "au"),
        ("fr-FR", "fr"),
        ("fr-BE", "fr"),
        ("fr", "fr"),
        ("es-ES", "es"),
        ("de-DE", "de"),
        ("it-IT", "it"),
        ("ja-JP", "jp"),
        ("pt-BR", "br"),
        ("pt-PT", "europe"),
        ("nl-NL", "europe"),
        ("de-AT", "europe"),
        ("sv-SE", "europe"),
        ("es-MX", "world"),
        ("en-IN", "world"),
        ("de", "world"),
    ])
    def test_first_matching_rule(self, text, name):
        assert region_for_locale(LocaleTag.parse(text)).name == name

    def test_default_viewport_accepts_tag(self):
        vp = default_viewport_for_locale(LocaleTag("ja", "JP"))
        assert vp.center == GeoPoint(36.2048, 138.2529)
        assert vp.zoom == 5.8
        assert vp.source == "locale:jp"

    def test_unparseable_locale_is_world(self):
        assert default_viewport_for_locale("???").source == "locale:world"
