# geolabel/core/geo/formatter.py
from __future__ import annotations

DEFAULT_CITY_PREFIX = "г."


def format_label(
    city: str | None,
    country: str | None,
    city_prefix: str = DEFAULT_CITY_PREFIX,
) -> str | None:
    """Build the display label for a resolved place.

    ``"г. Город, Страна"`` → ``"г. Город"`` → ``"Страна"`` → ``None``.
    ``None`` means the location was not recognized; callers ask the user
    to type it instead.
    """
    city = (city or "").strip()
    country = (country or "").strip()
    prefix = f"{city_prefix} " if city_prefix else ""

    if city and country:
        return f"{prefix}{city}, {country}"
    if city:
        return f"{prefix}{city}"
    if country:
        return country
    return None
