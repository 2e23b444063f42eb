import asyncio
import time
from typing import Optional, Dict, Any

try:
    from selenium import webdriver
    from selenium.webdriver.common.by import By
    from selenium.webdriver.chrome.options import Options as ChromeOptions
    SELENIUM_AVAILABLE = True
except Exception:  # pragma: no cover - optional dependency
    SELENIUM_AVAILABLE = False

from .playwright_engine import VIEWPORT

DEFAULT_TIMEOUT_MS = 15000


class SeleniumPage:
    """BrowserPage over a blocking webdriver; calls run in a worker thread.

    WebDriver exposes no HTTP status, so ``goto`` always returns None.
    """

    def __init__(self, driver: "webdriver.Chrome", default_timeout_ms: int = DEFAULT_TIMEOUT_MS):
        self._driver = driver
        self._default_timeout_ms = default_timeout_ms

    async def goto(self, url: str) -> None:
        await asyncio.to_thread(self._driver.get, url)
        return None

    def _wait_for(self, selector: str, timeout_ms: int) -> None:
        end = time.time() + timeout_ms / 1000.0
        while time.time() < end:
            if self._driver.find_elements(By.CSS_SELECTOR, selector):
                return
            time.sleep(0.1)
        raise TimeoutError(f"Timeout waiting for selector: {selector}")

    async def wait_for(self, selector: str, timeout_ms: Optional[int] = None) -> None:
        await asyncio.to_thread(self._wait_for, selector, timeout_ms or self._default_timeout_ms)

    def _click(self, selector: str) -> None:
        self._driver.find_element(By.CSS_SELECTOR, selector).click()

    async def click(self, selector: str) -> None:
        await asyncio.to_thread(self._click, selector)

    def _type(self, selector: str, value: str) -> None:
        self._wait_for(selector, self._default_timeout_ms)
        elem = self._driver.find_element(By.CSS_SELECTOR, selector)
        elem.clear()
        elem.send_keys(value)

    async def type(self, selector: str, value: str) -> None:
        await asyncio.to_thread(self._type, selector, value)

    def _wait_for_ready_state(self, timeout_ms: int) -> None:
        end = time.time() + timeout_ms / 1000.0
        while time.time() < end:
            if self._driver.execute_script("return document.readyState") == "complete":
                return
            time.sleep(0.1)
        raise TimeoutError("Timeout waiting for navigation")

    async def wait_for_navigation(self, timeout_ms: Optional[int] = None) -> None:
        await asyncio.to_thread(self._wait_for_ready_state, timeout_ms or self._default_timeout_ms)

    async def current_url(self) -> str:
        href = await asyncio.to_thread(self._driver.execute_script, "return window.location.href")
        return str(href).strip()

    async def evaluate(self, script: str, arg: Optional[Dict[str, Any]] = None) -> Any:
        return await asyncio.to_thread(self._driver.execute_script, script, arg)

    def is_live(self) -> bool:
        return self._driver.session_id is not None


class SeleniumEngine:
    def __init__(self, default_timeout_ms: int = DEFAULT_TIMEOUT_MS):
        if not SELENIUM_AVAILABLE:
            raise RuntimeError("Selenium is not installed. Install with: pip install threshold[selenium]")
        self._driver: Optional[webdriver.Chrome] = None
        self._default_timeout_ms = default_timeout_ms
        self.page: Optional[SeleniumPage] = None

    def _launch(self, headless: bool, executable_path: Optional[str], verbose: bool) -> "webdriver.Chrome":
        options = ChromeOptions()
        if headless:
            options.add_argument("--headless=new")
        if executable_path:
            options.binary_location = executable_path
        if verbose:
            options.add_argument("--enable-logging")
        width, height = VIEWPORT
        options.add_argument(f"--window-size={width},{height}")
        return webdriver.Chrome(options=options)

    async def start(
        self,
        headless: bool = True,
        executable_path: Optional[str] = None,
        verbose: bool = False,
    ) -> None:
        self._driver = await asyncio.to_thread(self._launch, headless, executable_path, verbose)
        self.page = SeleniumPage(self._driver, self._default_timeout_ms)

    async def stop(self) -> None:
        if self._driver:
            await asyncio.to_thread(self._driver.quit)
            self._driver = None
        self.page = None
