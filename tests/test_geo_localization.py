# tests/test_geo_localization.py
"""
Tests for localization (country names, native city names) and label formatting.
"""
from __future__ import annotations

import pytest

from geolabel.core.geo.countries import COUNTRY_NAMES, country_display_name
from geolabel.core.geo.formatter import format_label
from geolabel.core.geo.localization import LocalizationResolver, LocalizedPlace
from geolabel.core.geo.matcher import MatchSource, PlaceMatch

TRANSLATIONS = {
    "moscow": "Москва",
    "yekaterinburg": "Екатеринбург",
}


def _match(name: str, country_code: str, source: MatchSource = MatchSource.GLOBAL) -> PlaceMatch:
    return PlaceMatch(name=name, country_code=country_code, distance_km=1.0, source=source)


# ============================================================================
# Country table
# ============================================================================

class TestCountryDisplayName:
    @pytest.mark.parametrize("code,name", [
        ("RU", "Россия"),
        ("FR", "Франция"),
        ("US", "США"),
        ("BY", "Беларусь"),
        ("CD", "Конго (ДРК)"),
    ])
    def test_known_codes(self, code, name):
        assert country_display_name(code) == name

    def test_lowercase_code(self):
        assert country_display_name("fr") == "Франция"

    def test_unmapped_code_returned_raw(self):
        assert country_display_name("IS") == "IS"

    def test_all_codes_are_alpha2_uppercase(self):
        for code in COUNTRY_NAMES:
            assert len(code) == 2 and code.isupper(), code


# ============================================================================
# LocalizationResolver
# ============================================================================

class TestLocalizationResolver:
    @pytest.fixture
    def resolver(self):
        return LocalizationResolver(TRANSLATIONS, priority_country_code="RU")

    def test_priority_country_translated(self, resolver):
        place = resolver.resolve(_match("Yekaterinburg", "RU"))
        assert place == LocalizedPlace(city="Екатеринбург", country="Россия")

    def test_lookup_is_case_insensitive(self, resolver):
        assert resolver.resolve(_match("YEKATERINBURG", "RU")).city == "Екатеринбург"

    def test_untranslated_keeps_original_spelling(self, resolver):
        assert resolver.resolve(_match("Chelyabinsk", "RU")).city == "Chelyabinsk"

    def test_other_countries_not_translated(self, resolver):
        # Same romanized name, different country
        place = resolver.resolve(_match("Moscow", "US"))
        assert place == LocalizedPlace(city="Moscow", country="США")

    def test_regional_match_used_as_is(self, resolver):
        place = resolver.resolve(_match("Москва", "RU", MatchSource.PRIORITY_REGION))
        assert place == LocalizedPlace(city="Москва", country="Россия")

    def test_unmapped_country_code(self, resolver):
        place = resolver.resolve(_match("Reykjavik", "IS"))
        assert place == LocalizedPlace(city="Reykjavik", country="IS")

    def test_blank_values_become_none(self, resolver):
        place = resolver.resolve(_match("  ", ""))
        assert place == LocalizedPlace(city=None, country=None)


# ============================================================================
# format_label()
# ============================================================================

class TestFormatLabel:
    def test_city_and_country(self):
        assert format_label("Москва", "Россия") == "г. Москва, Россия"

    def test_city_only(self):
        assert format_label("Москва", None) == "г. Москва"

    def test_country_only(self):
        assert format_label(None, "Франция") == "Франция"

    def test_neither(self):
        assert format_label(None, None) is None

    def test_blank_strings_are_unknown(self):
        assert format_label("  ", "") is None
        assert format_label("", "Франция") == "Франция"

    def test_custom_prefix(self):
        assert format_label("Paris", "Франция", city_prefix="city") == "city Paris, Франция"

    def test_empty_prefix(self):
        assert format_label("Paris", "Франция", city_prefix="") == "Paris, Франция"
