# geolabel/core/geo/localization.py
"""
Localization of a nearest-neighbour match.

- City: global matches in the priority country get their native-language
  spelling from the translation map (case-insensitive); everything else
  keeps the dataset spelling.
- Country: alpha-2 code → display name, raw code when unmapped.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from geolabel.core.geo.countries import country_display_name
from geolabel.core.geo.matcher import MatchSource, PlaceMatch


@dataclass(frozen=True)
class LocalizedPlace:
    city: str | None
    country: str | None


class LocalizationResolver:
    def __init__(self, translations: Mapping[str, str], priority_country_code: str):
        self.translations = translations
        self.priority_country_code = priority_country_code.upper()

    def city_name(self, match: PlaceMatch) -> str:
        if (
            match.source is MatchSource.GLOBAL
            and match.country_code == self.priority_country_code
        ):
            return self.translations.get(match.name.lower(), match.name)
        return match.name

    def resolve(self, match: PlaceMatch) -> LocalizedPlace:
        city = self.city_name(match).strip()
        country = country_display_name(match.country_code).strip()
        return LocalizedPlace(city=city or None, country=country or None)
