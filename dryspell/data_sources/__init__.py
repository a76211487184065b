"""Data sources module."""

from dryspell.data_sources.csv_loader import load_daily_csv, series_from_frame
from dryspell.data_sources.open_meteo_client import OpenMeteoClient, open_meteo_client
from dryspell.data_sources.synthetic import generate_daily_series

__all__ = [
    "OpenMeteoClient",
    "open_meteo_client",
    "load_daily_csv",
    "series_from_frame",
    "generate_daily_series",
]
