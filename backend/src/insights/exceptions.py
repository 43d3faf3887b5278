"""Domain exceptions for the insights service."""


class InsightsError(Exception):
    """Base class for errors raised by the insights service."""


class FetchFailure(InsightsError):
    """
    A metrics fetch did not produce data.

    Absorbed by the polling controller and surfaced as the snapshot's
    ``error`` field; never raised past a poll cycle.
    """

    default_message = "Failed to fetch metrics"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ExportError(InsightsError):
    """Raised when a table export cannot be rendered."""

    def __init__(self, message: str = "Export failed"):
        self.message = message
        super().__init__(message)


class NoDataToExport(ExportError):
    """Raised when an export is requested for an empty table."""

    def __init__(self, message: str = "No data to export"):
        super().__init__(message)


class ControllerDisposed(InsightsError):
    """Raised when a lifecycle call reaches a polling controller after dispose()."""

    def __init__(self, message: str = "Polling controller has been disposed"):
        self.message = message
        super().__init__(message)
