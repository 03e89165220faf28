#!/usr/bin/env python3
"""
Reverse-geocode one coordinate pair with the offline datasets.

Useful to check a dataset drop or a priority-region setting without
going through the bot.

Usage:
    python scripts/geocode_point.py 55.75 37.62
    python scripts/geocode_point.py 48.8566 2.3522 --mode large_cities
    python scripts/geocode_point.py 0 -160 --data-dir /srv/geodata --verbose

Environment:
    GEO_DATA_DIR, GEOCODER_MODE, ... (see geolabel/config.py)

Output:
    г. Москва, Россия

Exit codes: 0 resolved, 1 not recognized, 2 datasets could not be loaded.
"""
import argparse
import asyncio
import sys
from pathlib import Path

# Allow running from a checkout without installing the package
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from geolabel.config import settings  # noqa: E402
from geolabel.core.geo import GeocoderConfig, GeodataLoadError, ReverseGeocoder  # noqa: E402
from geolabel.infra.health_checks import GeocoderHealthCheck  # noqa: E402
from geolabel.infra.logging_config import setup_logging  # noqa: E402


async def run(geocoder: ReverseGeocoder, lat: float, lon: float, verbose: bool) -> int:
    try:
        label = await geocoder.reverse_geocode(lat, lon)
    except GeodataLoadError as exc:
        print(f"Error: {exc.detail}", file=sys.stderr)
        return 2

    if verbose:
        match = await geocoder.match(lat, lon)
        if match is not None:
            print(f"# source={match.source.value} name={match.name} "
                  f"country={match.country_code} distance={match.distance_km:.1f} km")
        health = GeocoderHealthCheck(geocoder).check()
        counts = " ".join(f"{k}={v}" for k, v in health.items() if k not in ("status", "details"))
        print(f"# health={health['status'].value} {counts}".rstrip())

    if label is None:
        print("Location not recognized")
        return 1

    print(label)
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Offline reverse geocoding of a single point",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument("lat", type=float, help="Latitude, -90..90")
    parser.add_argument("lon", type=float, help="Longitude, -180..180")
    parser.add_argument("--mode", "-m", choices=["all", "large_cities"], help="Gazetteer size filter")
    parser.add_argument("--data-dir", "-d", type=Path, help="Directory with the bundled datasets")
    parser.add_argument("--verbose", "-v", action="store_true", help="Print match source and distance")

    args = parser.parse_args()

    if not (-90.0 <= args.lat <= 90.0 and -180.0 <= args.lon <= 180.0):
        print("Error: coordinates out of range", file=sys.stderr)
        sys.exit(2)

    setup_logging("DEBUG" if args.verbose else "WARNING")

    overrides = {}
    if args.mode:
        overrides["geocoder_mode"] = args.mode
    if args.data_dir:
        overrides["geo_data_dir"] = args.data_dir
    effective = settings.model_copy(update=overrides)

    geocoder = ReverseGeocoder(GeocoderConfig.from_settings(effective))
    sys.exit(asyncio.run(run(geocoder, args.lat, args.lon, args.verbose)))


if __name__ == "__main__":
    main()
