"""Download a coordinate's daily precipitation series to CSV."""

import argparse
import sys
from datetime import date
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pandas as pd

from dryspell.core.exceptions import DataSourceError
from dryspell.data_sources import OpenMeteoClient
from dryspell.utils.config import settings

# Data directories
DATA_DIR = project_root / "data"
PRECIP_DIR = DATA_DIR / "precipitation"


def download_precipitation(lat: float, lon: float, start: date, end: date) -> dict:
    """Fetch the series from Open-Meteo and save it as CSV."""
    print(f"Downloading daily precipitation at ({lat}, {lon}) {start} -> {end}...")

    records = OpenMeteoClient().get_daily_series(lat, lon, start=start, end=end)

    PRECIP_DIR.mkdir(parents=True, exist_ok=True)
    csv_file = PRECIP_DIR / f"precip_{lat}_{lon}_{start:%Y%m%d}_{end:%Y%m%d}_daily.csv"
    pd.DataFrame([r.to_dict() for r in records]).to_csv(csv_file, index=False)
    print(f"  Saved: {csv_file}")

    missing = sum(1 for r in records if r.precipitation_mm is None)
    total = sum(r.precipitation_mm for r in records if r.precipitation_mm is not None)
    print(f"  Days: {len(records)}, missing: {missing}, total: {total:.1f} mm")

    return {"file": str(csv_file), "days": len(records), "missing_days": missing}


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--lat", type=float, default=settings.analysis.latitude)
    parser.add_argument("--lon", type=float, default=settings.analysis.longitude)
    parser.add_argument("--start", type=date.fromisoformat, default=date.fromisoformat(settings.open_meteo.start_date))
    parser.add_argument("--end", type=date.fromisoformat, default=date.fromisoformat(settings.open_meteo.end_date))
    args = parser.parse_args()

    try:
        download_precipitation(args.lat, args.lon, args.start, args.end)
    except DataSourceError as e:
        print(f"Download failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
