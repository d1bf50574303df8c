"""Desktop integration helpers for opening conversion results."""

import logging

from PySide6.QtCore import QUrl
from PySide6.QtGui import QDesktopServices
from PySide6.QtWidgets import QMessageBox, QWidget

logger = logging.getLogger(__name__)


def open_download_url(url: str, parent: QWidget | None = None) -> bool:
    """Open a result download URL in the user's default browser.

    Args:
        url: Download reference returned by the convert call.
        parent: Optional parent widget for error dialogs.

    Returns:
        True if the URL was handed to the desktop, False otherwise.
    """
    qurl = QUrl(url)
    if not qurl.isValid() or qurl.scheme() not in ("http", "https"):
        logger.warning(f"Refusing to open invalid download URL: {url}")
        _show_error(parent, f"The download link is not valid:\n{url}")
        return False

    if QDesktopServices.openUrl(qurl):
        logger.debug(f"Opened download URL {url}")
        return True

    logger.warning(f"QDesktopServices.openUrl returned False for {url}")
    _show_error(parent, f"Could not open the download link:\n{url}")
    return False


def _show_error(parent: QWidget | None, message: str) -> None:
    if parent is not None:
        QMessageBox.warning(parent, "Download", message)
