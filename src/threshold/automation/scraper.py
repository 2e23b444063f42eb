"""
Browser backed scraper base: lifecycle plus the generic login workflow.

The login workflow is the same for every site. A ``LoginFlow`` supplies the
site specific ``LoginOptions`` and the scraper drives the page through them:

    navigate -> readiness -> pre-action -> fill -> submit
             -> post-action / wait for navigation -> classify

Classification outcomes come back as a ``LoginOutcome``. Navigation errors,
missing elements and broken integrations are raised.
"""
from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

from ..config import ScraperOptions
from .conditions import classify
from .engine import AutomationEngine, BrowserPage
from .errors import MissingLoginOptionsError, UnexpectedLoginResultError
from .navigation import fill_inputs, navigate_to
from .options import Field, LoginOptions
from .progress import ProgressEmitter
from .sites.base_site import LoginFlow
from .types import ErrorType, LoginOutcome, LoginResult, ProgressType

logger = logging.getLogger(__name__)


class BrowserScraper:
    def __init__(
        self,
        flow: LoginFlow,
        options: Optional[ScraperOptions] = None,
        engine: Optional[AutomationEngine] = None,
    ):
        self.flow = flow
        self.options = options or ScraperOptions(company_id=flow.company_id)
        self.engine = engine
        self.page: Optional[BrowserPage] = engine.page if engine is not None else None
        self.progress = ProgressEmitter(self.options.company_id)

    def emit_progress(self, progress: ProgressType) -> None:
        self.progress.emit(progress)

    async def initialize(self) -> None:
        self.emit_progress(ProgressType.INITIALIZING)

        if self.engine is None:
            from .playwright_engine import PlaywrightEngine

            self.engine = PlaywrightEngine(
                browser=self.options.browser,
                viewport=self.options.viewport,
                default_timeout_ms=self.options.default_timeout_ms,
            )
        await self.engine.start(
            headless=not self.options.show_browser,
            executable_path=self.options.executable_path,
            verbose=self.options.verbose,
        )
        self.page = self.engine.page

    async def navigate_to(self, url: str, page: Optional[BrowserPage] = None) -> None:
        await navigate_to(page or self.page, url)

    async def fill_inputs(self, fields: Sequence[Field]) -> None:
        await fill_inputs(self.page, fields)

    def get_login_options(self, credentials: Mapping[str, str]) -> LoginOptions:
        login_options = self.flow.get_login_options(credentials, self.page)
        if login_options is None:
            raise MissingLoginOptionsError(
                f"get_login_options() is not implemented for {self.options.company_id}"
            )
        return login_options

    async def login(self, credentials: Optional[Mapping[str, str]]) -> LoginOutcome:
        if not credentials or self.page is None or not self.page.is_live():
            return LoginOutcome.general_error()

        login_options = self.get_login_options(credentials)
        page = self.page

        logger.info("[%s] opening login page %s", self.options.company_id, login_options.login_url)
        await self.navigate_to(login_options.login_url)
        await login_options.readiness_strategy()(page, login_options)

        if login_options.pre_action is not None:
            await login_options.pre_action()
        await self.fill_inputs(login_options.fields)
        await page.click(login_options.submit_button_selector)
        self.emit_progress(ProgressType.LOGGING_IN)

        await login_options.completion_strategy()(page, login_options)

        current = await page.current_url()
        login_result = await classify(login_options.possible_results, current)
        logger.info("[%s] login result: %s", self.options.company_id, login_result.value)
        return self.handle_login_result(login_result)

    def handle_login_result(self, login_result: LoginResult) -> LoginOutcome:
        if login_result == LoginResult.SUCCESS:
            self.emit_progress(ProgressType.LOGIN_SUCCESS)
            return LoginOutcome(success=True)
        if login_result in (LoginResult.INVALID_PASSWORD, LoginResult.UNKNOWN_ERROR):
            self.emit_progress(ProgressType.LOGIN_FAILED)
            error_type = (
                ErrorType.INVALID_PASSWORD
                if login_result == LoginResult.INVALID_PASSWORD
                else ErrorType.GENERAL
            )
            return LoginOutcome(
                success=False,
                error_type=error_type,
                error_message=f"Login failed with {login_result.value} error",
            )
        if login_result == LoginResult.CHANGE_PASSWORD:
            self.emit_progress(ProgressType.CHANGE_PASSWORD)
            return LoginOutcome(success=False, error_type=ErrorType.CHANGE_PASSWORD)
        raise UnexpectedLoginResultError(f'unexpected login result "{login_result}"')

    async def terminate(self) -> None:
        self.emit_progress(ProgressType.TERMINATING)

        if self.engine is None:
            return
        await self.engine.stop()
        self.page = None

    async def scrape(self, credentials: Optional[Mapping[str, str]]) -> LoginOutcome:
        """Initialize, log in and always terminate."""
        await self.initialize()
        try:
            return await self.login(credentials)
        finally:
            await self.terminate()
