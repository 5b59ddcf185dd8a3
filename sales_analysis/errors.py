class SalesAnalysisError(ValueError):
    """Base class for errors raised before an analysis starts."""


class InvalidInputError(SalesAnalysisError):
    """The dataset is missing, empty or malformed."""


class InvalidOptionsError(SalesAnalysisError):
    """The policy bundle is missing or lacks a callable policy."""
