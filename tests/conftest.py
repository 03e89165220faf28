# tests/conftest.py
"""Pytest configuration and fixtures"""
import json
import pytest
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from geolabel.core.geo.engine_config import GeocoderConfig  # noqa: E402
from geolabel.infra.geocoding import set_geocoder  # noqa: E402
from geolabel.infra.metrics import get_metrics_collector  # noqa: E402


def make_gazetteer_line(
    name: str,
    lat,
    lon,
    country_code: str,
    population="",
    feature_code: str = "PPL",
    geoname_id: int = 1,
) -> str:
    """One GeoNames-style line (19 tab-separated fields)."""
    fields = [
        str(geoname_id), name, name, "", str(lat), str(lon), "P", feature_code,
        country_code, "", "", "", "", "", str(population), "", "0", "UTC", "2024-01-01",
    ]
    return "\t".join(fields)


PRIORITY_ENTRIES = [
    {"name": "Москва", "english_name": "Moscow", "population": 12655050,
     "coords": {"lat": "55.75", "lon": "37.62"}},
    {"name": "Санкт-Петербург", "english_name": "Saint Petersburg",
     "coords": {"lat": "59.9386", "lon": "30.3141"}},
    {"name": "Новосибирск", "english_name": "Novosibirsk",
     "coords": {"lat": "55.0411", "lon": "82.9344"}},
    # Disputed-territory placeholder: indexed as a point, never a translation
    {"name": "Донецк", "english_name": "Donetsk",
     "coords": {"lat": "48.0159", "lon": "37.8029"}},
    # Translation only (no coordinates)
    {"name": "Екатеринбург", "english_name": "Yekaterinburg"},
    # Malformed entries
    {"name": "", "english_name": "Nowhere", "coords": {"lat": "50.0", "lon": "50.0"}},
    {"name": "Тверь", "english_name": "Tver", "coords": {"lat": "abc", "lon": "35.9"}},
    "not an object",
]

GAZETTEER_LINES = [
    make_gazetteer_line("Paris", 48.85341, 2.3488, "FR", 2138551, "PPLC", 2988507),
    make_gazetteer_line("Moscow", 55.75222, 37.61556, "RU", 10381222, "PPLC", 524901),
    make_gazetteer_line("Yekaterinburg", 56.8519, 60.6122, "RU", 1349772, "PPLA", 1486209),
    make_gazetteer_line("Honolulu", 21.30694, -157.85834, "US", 371657, "PPLA", 5856195),
    make_gazetteer_line("Reykjavik", 64.13548, -21.89541, "IS", 118918, "PPLC", 3413829),
    make_gazetteer_line("Smallville", 39.05, -95.68, "US", 1200, "PPL", 9000001),
    make_gazetteer_line("Capitol Hamlet", 39.0, -70.0, "US", 500, "PPLC", 9000002),
    # Malformed lines
    "123\tBroken\tBroken\t\t10.0\t10.0\tP\tPPL",               # too few fields
    make_gazetteer_line("Nowhere", "north", 10.0, "XX", 10),   # non-numeric latitude
    make_gazetteer_line("NaNville", "nan", 10.0, "XX", 10),    # non-finite latitude
    make_gazetteer_line("Faraway", 95.0, 10.0, "XX", 10),      # out of range
    "",
]


@pytest.fixture
def gazetteer_line():
    """Factory for GeoNames-style gazetteer lines"""
    return make_gazetteer_line


@pytest.fixture
def priority_entries():
    return [dict(e) if isinstance(e, dict) else e for e in PRIORITY_ENTRIES]


@pytest.fixture
def priority_file(tmp_path, priority_entries):
    path = tmp_path / "russian-cities_with_english.json"
    path.write_text(json.dumps(priority_entries, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def gazetteer_file(tmp_path):
    path = tmp_path / "data_geo" / "cities5000.txt"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(GAZETTEER_LINES) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def geocoder_config(priority_file, gazetteer_file):
    """Engine config pointing at the synthetic datasets"""
    return GeocoderConfig(
        priority_dataset_path=priority_file,
        gazetteer_path=gazetteer_file,
    )


@pytest.fixture(autouse=True)
def _isolated_state():
    """Fresh metrics and no shared geocoder for every test"""
    get_metrics_collector().reset()
    set_geocoder(None)
    yield
    set_geocoder(None)
