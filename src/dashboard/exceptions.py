"""Dashboard exceptions.

API services raise NetworkError for every failed request; controllers catch
it and turn it into a user notification. The fake backend raises
NotFoundError and its exception handlers translate it into the
{"code": "...", "message": "..."} error body.
"""

from collections.abc import Mapping

NOT_MODIFIED = 304


class DashboardError(Exception):
    """Base class for all dashboard exceptions."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NetworkError(DashboardError):
    """Raised when an API request fails or the response is a 304.

    ``status`` is None when no response was received at all.
    ``server_message`` is the ``message`` field of the error body, if any.
    """

    def __init__(self, status: int | None, server_message: str | None = None) -> None:
        self.status = status
        self.server_message = server_message
        super().__init__(server_message or f"Request failed with status {status}")

    @property
    def not_modified(self) -> bool:
        """True when the server answered that the cached view is still valid."""
        return self.status == NOT_MODIFIED


class NotFoundError(DashboardError):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} with id {identifier} not found")


class EmptySelectionError(DashboardError):
    """Raised when a bulk action is requested with nothing selected."""


class ConfirmationDeclined(DashboardError):
    """Raised by a confirm dialog that was closed without confirming."""

    def __init__(self, message: str = "Confirmation declined") -> None:
        super().__init__(message)


class PartialDeleteFailure(DashboardError):
    """Aggregate outcome of a bulk delete where at least one delete failed."""

    def __init__(self, failed: Mapping[str, BaseException]) -> None:
        self.failed = dict(failed)
        super().__init__(f"Failed to delete {len(self.failed)} item(s): {', '.join(self.failed)}")
