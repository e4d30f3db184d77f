"""Protocols for the user-facing collaborators of controllers.

The host application decides how errors, infos and confirmations reach the
user. LoggingNotifier is the stand-in used when nothing is plugged in.
"""

from typing import Protocol

from dashboard.logging import get_logger

logger = get_logger(__name__)


class Notifier(Protocol):
    def show_error(self, message: str) -> None: ...

    def show_info(self, message: str) -> None: ...


class ConfirmDialog(Protocol):
    async def show_confirm_dialog(self, title: str, content: str, button_title: str) -> bool:
        """Ask the user to confirm.

        Returns False, or raises ConfirmationDeclined, when the user declines
        or closes the dialog.
        """
        ...


class LoggingNotifier:
    """Notifier that writes notifications to the log."""

    def show_error(self, message: str) -> None:
        logger.error("notification", kind="error", message=message)

    def show_info(self, message: str) -> None:
        logger.info("notification", kind="info", message=message)
