"""Error types raised by the pricing pipeline and its data sources."""


class ConfigurationError(ValueError):
    """Invalid analysis configuration; raised before any computation."""


class DataSourceError(RuntimeError):
    """A daily series could not be produced by a data source."""
