"""FastAPI application."""

from datetime import date, datetime, timezone
from typing import Optional, Union

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from pydantic import BaseModel, Field, model_validator

from dryspell.core import ConfigurationError, DataSourceError, DroughtPricer, format_output, input_parser
from dryspell.core.actuarial import loss_cost_pct
from dryspell.core.models import DailyRecord, PricingResult, ThresholdConfig
from dryspell.data_sources import open_meteo_client
from dryspell.utils.config import settings
from dryspell.utils.constants import LATITUDE_RANGE, LONGITUDE_RANGE
import dryspell.utils.logger  # noqa: F401

app = FastAPI(
    title="Dry Spell Pricer API",
    description="Parametric consecutive-dry-days insurance pricing",
    version=settings.app.version,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.api.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class AnalysisParams(BaseModel):
    dry_day_threshold_mm: float = settings.analysis.dry_day_threshold_mm
    consecutive_days: Union[str, list[int]] = settings.analysis.consecutive_day_thresholds
    sum_insured: float = settings.analysis.sum_insured
    months: list[int] = settings.analysis.season_months
    style: str = "text"

    def to_config(self) -> ThresholdConfig:
        return ThresholdConfig(
            dry_day_threshold_mm=self.dry_day_threshold_mm,
            consecutive_day_thresholds=tuple(input_parser.parse_thresholds(self.consecutive_days)),
            sum_insured=self.sum_insured,
            season_months=frozenset(input_parser.parse_months(self.months)),
        )


class LocationRequest(AnalysisParams):
    latitude: float = Field(settings.analysis.latitude, ge=LATITUDE_RANGE[0], le=LATITUDE_RANGE[1])
    longitude: float = Field(settings.analysis.longitude, ge=LONGITUDE_RANGE[0], le=LONGITUDE_RANGE[1])
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @model_validator(mode="after")
    def check_period(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError(f"start_date {self.start_date} is after end_date {self.end_date}")
        return self


class DailyValue(BaseModel):
    date: date
    precipitation_mm: Optional[float] = None


class SeriesRequest(AnalysisParams):
    series: list[DailyValue]


class ThresholdSummary(BaseModel):
    threshold: int
    probability: float
    return_period_years: Optional[float]
    loss_cost_pct: Optional[float]
    triggered_years: list[int]
    indemnities: dict[int, float]


class AnalysisResponse(BaseModel):
    timestamp: str
    record_count: int
    year_count: int
    has_data: bool
    all_skipped: bool
    skipped_thresholds: list[int]
    results: list[ThresholdSummary]
    report: str
    duration_seconds: float


def _to_response(result: PricingResult, style: str) -> AnalysisResponse:
    return AnalysisResponse(
        timestamp=result.timestamp.isoformat(),
        record_count=result.record_count,
        year_count=len(result.years),
        has_data=result.has_data,
        all_skipped=result.all_skipped,
        skipped_thresholds=result.skipped_thresholds,
        results=[
            ThresholdSummary(
                threshold=r.threshold,
                probability=r.probability,
                return_period_years=r.return_period_years,
                loss_cost_pct=loss_cost_pct(r),
                triggered_years=r.triggered_years,
                indemnities={o.year: o.indemnity for o in r.year_outcomes},
            )
            for r in result.results
        ],
        report=format_output(result, style),
        duration_seconds=result.duration_seconds,
    )


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.app.version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/api/v1/defaults")
async def get_defaults():
    """Default form values."""
    return settings.analysis.model_dump()


@app.post("/api/v1/analyze", response_model=AnalysisResponse)
def analyze_location(request: LocationRequest):
    """Fetch the daily series at a coordinate and price it."""
    try:
        config = request.to_config()
        pricer = DroughtPricer(data_source=open_meteo_client)
        result = pricer.price_location(
            request.latitude,
            request.longitude,
            config,
            start=request.start_date,
            end=request.end_date,
        )
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except DataSourceError as e:
        logger.error(f"Data source failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    return _to_response(result, request.style)


@app.post("/api/v1/analyze/series", response_model=AnalysisResponse)
def analyze_series(request: SeriesRequest):
    """Price an explicit daily series."""
    try:
        config = request.to_config()
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    dates = [d.date for d in request.series]
    if len(set(dates)) != len(dates):
        raise HTTPException(status_code=422, detail="series has duplicate dates")

    series = sorted(
        (DailyRecord(date=d.date, precipitation_mm=d.precipitation_mm) for d in request.series),
        key=lambda r: r.date,
    )
    result = DroughtPricer().price(series, config)
    return _to_response(result, request.style)
