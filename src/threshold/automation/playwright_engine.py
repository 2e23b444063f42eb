import asyncio
import logging
import os
from typing import Optional, Dict, Any, Tuple

from playwright.async_api import async_playwright, Page, Browser, BrowserContext, Frame, Response

logger = logging.getLogger(__name__)

VIEWPORT = (1024, 768)
DEFAULT_TIMEOUT_MS = 30000


class PlaywrightPage:
    """Adapts a Playwright page to the BrowserPage protocol."""

    def __init__(self, page: Page, default_timeout_ms: Optional[int] = None):
        self._page = page
        self._default_timeout_ms = default_timeout_ms or DEFAULT_TIMEOUT_MS
        self._navigated = asyncio.Event()
        self._page.on("framenavigated", self._on_frame_navigated)

    @property
    def raw(self) -> Page:
        return self._page

    def _on_frame_navigated(self, frame: Frame) -> None:
        if frame == self._page.main_frame:
            self._navigated.set()

    async def goto(self, url: str) -> Optional[Response]:
        return await self._page.goto(url)

    async def wait_for(self, selector: str, timeout_ms: Optional[int] = None) -> None:
        await self._page.wait_for_selector(selector, timeout=timeout_ms)

    async def click(self, selector: str) -> None:
        # wait_for_navigation follows navigations started from here on
        self._navigated.clear()
        await self._page.click(selector)

    async def type(self, selector: str, value: str) -> None:
        await self._page.wait_for_selector(selector)
        locator = self._page.locator(selector)
        await locator.fill("")
        await locator.type(value)

    async def wait_for_navigation(self, timeout_ms: Optional[int] = None) -> None:
        timeout_ms = timeout_ms or self._default_timeout_ms
        await asyncio.wait_for(self._navigated.wait(), timeout_ms / 1000.0)
        await self._page.wait_for_load_state("load", timeout=timeout_ms)

    async def current_url(self) -> str:
        # location.href reflects client side routing, page.url may lag behind it
        href = await self._page.evaluate("() => window.location.href")
        return str(href).strip()

    async def evaluate(self, script: str, arg: Optional[Dict[str, Any]] = None) -> Any:
        return await self._page.evaluate(script, arg)

    def is_live(self) -> bool:
        return not self._page.is_closed()


class PlaywrightEngine:
    def __init__(
        self,
        browser: Optional[Browser] = None,
        viewport: Tuple[int, int] = VIEWPORT,
        default_timeout_ms: Optional[int] = None,
    ):
        self._pw = None
        self._external_browser = browser
        self._browser: Optional[Browser] = browser
        self._context: Optional[BrowserContext] = None
        self._owns_context = False
        self._viewport = viewport
        self._default_timeout_ms = default_timeout_ms
        self.page: Optional[PlaywrightPage] = None

    async def start(
        self,
        headless: bool = True,
        executable_path: Optional[str] = None,
        verbose: bool = False,
    ) -> None:
        if self._browser is None:
            env = None
            if verbose:
                env = {**os.environ, "DEBUG": "pw:api"}
            self._pw = await async_playwright().start()
            self._browser = await self._pw.chromium.launch(
                headless=headless,
                executable_path=executable_path or None,
                env=env,
            )
            logger.debug("Launched chromium (headless=%s)", headless)

        pages = [p for ctx in self._browser.contexts for p in ctx.pages]
        if pages:
            page = pages[0]
            self._context = page.context
            self._owns_context = False
        else:
            self._context = await self._browser.new_context()
            self._owns_context = True
            page = await self._context.new_page()

        width, height = self._viewport
        await page.set_viewport_size({"width": width, "height": height})
        if self._default_timeout_ms is not None:
            page.set_default_timeout(self._default_timeout_ms)
        self.page = PlaywrightPage(page, self._default_timeout_ms)

    async def stop(self) -> None:
        try:
            if self._context and self._owns_context:
                await self._context.close()
        finally:
            try:
                # A browser handed in by the caller is theirs to close
                if self._browser and self._browser is not self._external_browser:
                    await self._browser.close()
            finally:
                if self._pw:
                    await self._pw.stop()
                self.page = None
                self._context = None
                self._owns_context = False
                self._browser = self._external_browser
                self._pw = None
