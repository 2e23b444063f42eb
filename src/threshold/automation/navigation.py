import logging
from typing import Optional, Sequence

from .engine import BrowserPage
from .errors import NavigationError
from .options import Field

logger = logging.getLogger(__name__)

OK_STATUS = 200


async def navigate_to(page: Optional[BrowserPage], url: str) -> None:
    if page is None:
        # Browser not started yet; this is a lifecycle issue, not a navigation failure
        logger.debug("No page available, skipping navigation to %s", url)
        return

    response = await page.goto(url)

    # goto resolves to None when only the hash part of the url changed
    if response is None:
        return
    status = getattr(response, "status", None)
    if status != OK_STATUS:
        raise NavigationError(url, status)


async def fill_inputs(page: BrowserPage, fields: Sequence[Field]) -> None:
    """Fill ``fields`` one after the other.

    Some forms only reveal a field once the previous one holds a value, so
    each fill completes before the next one starts.
    """
    for field in fields:
        logger.debug("Filling %s", field.selector)
        await page.type(field.selector, field.value)
