"""Connection-error display for failed poll fetches."""

import logging

from contactdash.application.ports import Element

logger = logging.getLogger(__name__)

CONNECTION_ERROR = "Could not get data from server"


def show_connection_error(region: Element | None, msg: str = CONNECTION_ERROR) -> None:
    """Replace everything in the region with msg. Stale rows are discarded."""
    if region is None:
        logger.warning("Connection error with no region to show it in")
        return
    region.clear()
    region.text = msg
