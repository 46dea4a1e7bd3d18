"""Error aggregation utilities."""

from .multi_error import ErrorAggregator, MultiError

__all__ = ["ErrorAggregator", "MultiError"]
