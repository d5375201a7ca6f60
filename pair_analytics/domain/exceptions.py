from __future__ import annotations


class DomainError(Exception):
    """Base for domain errors."""


class PairDataInputError(DomainError):
    """Invalid parameters for a pair data query."""


class DataSourceError(DomainError):
    """The indexing service failed or returned an unusable payload."""


# Failures a dashboard query degrades on instead of propagating.
FETCH_ERRORS = (DataSourceError, KeyError, TypeError, ValueError, ArithmeticError)
