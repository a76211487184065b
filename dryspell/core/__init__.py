"""Core module."""
from dryspell.core.exceptions import ConfigurationError, DataSourceError
from dryspell.core.models import DailyRecord, PricingResult, ThresholdConfig, ThresholdResult
from dryspell.core.pricer import DroughtPricer
from dryspell.core.parser import InputParser, input_parser
from dryspell.core.formatter import ReportFormatter, format_output
