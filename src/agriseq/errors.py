"""Exceptions raised by the pipeline."""


class AgriseqError(Exception):
    """Base class for pipeline errors."""


class NoDataAvailable(AgriseqError):
    """Neither sequence records nor agricultural records could be loaded."""


class ExtractionError(AgriseqError):
    """Every archive extraction method failed."""
