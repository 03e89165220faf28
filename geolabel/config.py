# geolabel/config.py
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application
    app_env: Literal["dev", "staging", "prod"] = "dev"
    log_level: str = "INFO"

    # Datasets
    geo_data_dir: Path = Path("data")
    geo_priority_dataset_file: str = "russian-cities_with_english.json"
    geo_gazetteer_file: str = "data_geo/cities5000.txt"

    # Geocoder mode
    # "all"          - every gazetteer record is indexed (detailed fallback)
    # "large_cities" - only records above the population threshold or with a major feature code
    geocoder_mode: Literal["all", "large_cities"] = "all"
    geo_large_city_population: int = 100_000
    geo_major_feature_codes: str = "PPLC,PPLA"  # Comma-separated gazetteer feature codes

    # Priority region (native-language dataset, checked before the global gazetteer)
    geo_priority_country_code: str = "RU"
    geo_priority_lat_min: float = 41.0
    geo_priority_lat_max: float = 82.0
    geo_priority_lon_min: float = 19.0
    geo_priority_lon_max: float = 180.0
    geo_priority_match_radius_km: float = 80.0
    geo_translation_excluded: str = "Донецк"  # Names never used as translation targets

    # Display
    geo_city_prefix: str = "г."

    @property
    def is_production(self) -> bool:
        return self.app_env == "prod"

    @property
    def priority_dataset_path(self) -> Path:
        return self.geo_data_dir / self.geo_priority_dataset_file

    @property
    def gazetteer_path(self) -> Path:
        return self.geo_data_dir / self.geo_gazetteer_file

    @property
    def major_feature_codes(self) -> frozenset[str]:
        """Parsed ``geo_major_feature_codes`` (uppercased, blanks dropped)"""
        return frozenset(
            code.strip().upper()
            for code in self.geo_major_feature_codes.split(",")
            if code.strip()
        )

    @property
    def translation_excluded_names(self) -> frozenset[str]:
        return frozenset(
            name.strip()
            for name in self.geo_translation_excluded.split(",")
            if name.strip()
        )

    def validate_required_for_production(self) -> list[str]:
        """Validate settings that would make every lookup wrong in production"""
        if not self.is_production:
            return []

        problems = []

        if len(self.geo_priority_country_code.strip()) != 2:
            problems.append("geo_priority_country_code (must be ISO alpha-2)")
        if self.geo_priority_lat_min > self.geo_priority_lat_max:
            problems.append("geo_priority_lat_min/geo_priority_lat_max (inverted)")
        if self.geo_priority_lon_min > self.geo_priority_lon_max:
            problems.append("geo_priority_lon_min/geo_priority_lon_max (inverted)")
        if self.geo_priority_match_radius_km <= 0:
            problems.append("geo_priority_match_radius_km (must be positive)")

        return problems


def warn_on_risky_config(s: "Settings") -> list[str]:
    warnings: list[str] = []

    # --- Datasets ---
    if not s.priority_dataset_path.exists():
        warnings.append(
            f"priority dataset not found at {s.priority_dataset_path} (first geocode query will fail)."
        )
    if not s.gazetteer_path.exists():
        warnings.append(
            f"gazetteer not found at {s.gazetteer_path} (first geocode query will fail)."
        )

    # --- Large-city filter ---
    if s.geocoder_mode == "large_cities" and not s.major_feature_codes:
        warnings.append(
            "geocoder_mode=large_cities with empty geo_major_feature_codes: "
            "only the population threshold selects cities."
        )
    if s.geo_large_city_population < 0:
        warnings.append("geo_large_city_population is negative (large_cities mode keeps every city).")

    # --- Priority region ---
    if s.geo_priority_match_radius_km > 500:
        warnings.append(
            f"geo_priority_match_radius_km={s.geo_priority_match_radius_km} is very large "
            "(distant regional cities will shadow the global gazetteer)."
        )

    return warnings


def validate_or_warn(s: "Settings") -> None:
    """
    In prod: enforce sane geocoder settings (hard fail).
    In all envs: warn about risky ones.
    """
    problems = s.validate_required_for_production()

    if problems:
        raise RuntimeError(f"Invalid settings for production: {', '.join(problems)}")

    for msg in warn_on_risky_config(s):
        print(f"[WARN][config] {msg}")


settings = Settings()
validate_or_warn(settings)
