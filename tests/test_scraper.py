"""Tests for the browser scraper login workflow."""

import re
from unittest.mock import MagicMock

import pytest

from conftest import FakeEngine, FakePage, FakeResponse, StaticFlow
from threshold.automation.errors import (
    MissingLoginOptionsError,
    NavigationError,
    UnexpectedLoginResultError,
)
from threshold.automation.scraper import BrowserScraper
from threshold.automation.types import ErrorType, LoginOutcome, LoginResult, ProgressType


def make_scraper(flow, page, scraper_options, progress_log):
    scraper = BrowserScraper(flow, scraper_options, engine=FakeEngine(page))
    scraper.page = page
    scraper.progress.on_progress(lambda company_id, progress: progress_log.append(progress))
    return scraper


class TestLoginScenarios:
    """End-to-end login attempts against a fake page."""

    @pytest.mark.asyncio
    async def test_success(self, credentials, scraper_options, progress_log):
        page = FakePage(final_url="https://bank.example/home")
        flow = StaticFlow({LoginResult.SUCCESS: [re.compile(r"/home")]})
        scraper = make_scraper(flow, page, scraper_options, progress_log)

        outcome = await scraper.login(credentials)

        assert outcome == LoginOutcome(success=True)
        assert progress_log == [ProgressType.LOGGING_IN, ProgressType.LOGIN_SUCCESS]

    @pytest.mark.asyncio
    async def test_invalid_password(self, credentials, scraper_options, progress_log):
        page = FakePage(final_url="https://bank.example/login?error=1")
        flow = StaticFlow({LoginResult.INVALID_PASSWORD: [re.compile(r"error=1")]})
        scraper = make_scraper(flow, page, scraper_options, progress_log)

        outcome = await scraper.login(credentials)

        assert outcome.success is False
        assert outcome.error_type == ErrorType.INVALID_PASSWORD
        assert outcome.error_message == "Login failed with InvalidPassword error"
        assert progress_log[-1] == ProgressType.LOGIN_FAILED

    @pytest.mark.asyncio
    async def test_change_password_takes_priority(self, credentials, scraper_options, progress_log):
        page = FakePage(final_url="https://bank.example/force-change-password")
        flow = StaticFlow({
            LoginResult.CHANGE_PASSWORD: [re.compile(r"/force-change-password")],
            LoginResult.SUCCESS: [re.compile(r"^https://bank\.example/")],
        })
        scraper = make_scraper(flow, page, scraper_options, progress_log)

        outcome = await scraper.login(credentials)

        assert outcome == LoginOutcome(success=False, error_type=ErrorType.CHANGE_PASSWORD)
        assert outcome.error_message is None
        assert progress_log[-1] == ProgressType.CHANGE_PASSWORD

    @pytest.mark.asyncio
    async def test_unmatched_url_is_general_error(self, credentials, scraper_options, progress_log):
        page = FakePage(final_url="https://bank.example/maintenance")
        scraper = make_scraper(StaticFlow(), page, scraper_options, progress_log)

        outcome = await scraper.login(credentials)

        assert outcome.error_type == ErrorType.GENERAL
        assert outcome.error_message == "Login failed with UnknownError error"
        assert progress_log[-1] == ProgressType.LOGIN_FAILED

    @pytest.mark.asyncio
    @pytest.mark.parametrize("creds", [None, {}])
    async def test_missing_credentials(self, creds, scraper_options, progress_log):
        page = FakePage()
        flow = StaticFlow()
        scraper = make_scraper(flow, page, scraper_options, progress_log)

        outcome = await scraper.login(creds)

        assert outcome == LoginOutcome(success=False, error_type=ErrorType.GENERAL)
        assert progress_log == []
        assert page.calls == []
        assert flow.received == []

    @pytest.mark.asyncio
    async def test_missing_page(self, credentials, scraper_options, progress_log):
        scraper = BrowserScraper(StaticFlow(), scraper_options)
        scraper.progress.on_progress(lambda company_id, progress: progress_log.append(progress))

        outcome = await scraper.login(credentials)

        assert outcome == LoginOutcome.general_error()
        assert progress_log == []

    @pytest.mark.asyncio
    async def test_closed_page(self, credentials, scraper_options, progress_log):
        page = FakePage()
        page.live = False
        scraper = make_scraper(StaticFlow(), page, scraper_options, progress_log)

        assert await scraper.login(credentials) == LoginOutcome.general_error()
        assert page.calls == []


class TestLoginSteps:
    """Test the order and strategy selection of login steps."""

    @pytest.mark.asyncio
    async def test_default_step_order(self, credentials, scraper_options, progress_log):
        page = FakePage()
        scraper = make_scraper(StaticFlow(), page, scraper_options, progress_log)

        await scraper.login(credentials)

        assert page.calls == [
            ("goto", "https://bank.example/login"),
            ("wait_for", "button[type=submit]"),
            ("type", "#user"),
            ("type", "#pass"),
            ("click", "button[type=submit]"),
            ("wait_for_navigation",),
        ]
        assert page.values == {"#user": "alice", "#pass": "s3cret"}

    @pytest.mark.asyncio
    async def test_hooks_replace_defaults(self, credentials, scraper_options, progress_log):
        page = FakePage()
        order = []

        async def check_readiness():
            order.append(("check_readiness", len(page.calls)))

        async def pre_action():
            order.append(("pre_action", len(page.calls)))

        async def post_action():
            order.append(("post_action", len(page.calls)))

        flow = StaticFlow(check_readiness=check_readiness, pre_action=pre_action, post_action=post_action)
        scraper = make_scraper(flow, page, scraper_options, progress_log)

        outcome = await scraper.login(credentials)

        assert outcome.success is True
        assert ("wait_for", "button[type=submit]") not in page.calls
        assert ("wait_for_navigation",) not in page.calls
        # goto has run before readiness; fills and click have run before post_action
        assert order == [("check_readiness", 1), ("pre_action", 1), ("post_action", 4)]

    @pytest.mark.asyncio
    async def test_logging_in_emitted_after_submit(self, credentials, scraper_options, progress_log):
        page = FakePage()
        seen = []

        async def post_action():
            seen.append(list(progress_log))

        scraper = make_scraper(StaticFlow(post_action=post_action), page, scraper_options, progress_log)
        await scraper.login(credentials)

        assert seen == [[ProgressType.LOGGING_IN]]

    @pytest.mark.asyncio
    async def test_options_derived_from_credentials(self, credentials, scraper_options, progress_log):
        flow = StaticFlow()
        scraper = make_scraper(flow, FakePage(), scraper_options, progress_log)

        await scraper.login(credentials)

        assert flow.received == [credentials]


class TestLoginErrors:
    """Test errors that propagate out of login."""

    @pytest.mark.asyncio
    async def test_navigation_error_propagates(self, credentials, scraper_options, progress_log):
        page = FakePage(response=FakeResponse(500))
        scraper = make_scraper(StaticFlow(), page, scraper_options, progress_log)

        with pytest.raises(NavigationError):
            await scraper.login(credentials)
        assert progress_log == []

    @pytest.mark.asyncio
    async def test_missing_submit_button_propagates(self, credentials, scraper_options, progress_log):
        page = FakePage(missing=("button[type=submit]",))
        scraper = make_scraper(StaticFlow(), page, scraper_options, progress_log)

        with pytest.raises(TimeoutError):
            await scraper.login(credentials)

    @pytest.mark.asyncio
    async def test_missing_field_propagates(self, credentials, scraper_options, progress_log):
        page = FakePage(missing=("#pass",))
        scraper = make_scraper(StaticFlow(), page, scraper_options, progress_log)

        with pytest.raises(TimeoutError):
            await scraper.login(credentials)
        assert ("click", "button[type=submit]") not in page.calls

    @pytest.mark.asyncio
    async def test_flow_without_options_is_a_contract_violation(self, credentials, scraper_options, progress_log):
        class NoOptionsFlow(StaticFlow):
            def get_login_options(self, credentials, page):
                return None

        scraper = make_scraper(NoOptionsFlow(), FakePage(), scraper_options, progress_log)

        with pytest.raises(MissingLoginOptionsError):
            await scraper.login(credentials)

    def test_unexpected_result_raises(self, scraper_options):
        scraper = BrowserScraper(StaticFlow(), scraper_options)
        with pytest.raises(UnexpectedLoginResultError):
            scraper.handle_login_result("Bogus")


class TestLifecycle:
    """Test initialize, terminate and scrape."""

    @pytest.mark.asyncio
    async def test_initialize_and_terminate(self, scraper_options, progress_log):
        engine = FakeEngine()
        scraper = BrowserScraper(StaticFlow(), scraper_options, engine=engine)
        scraper.progress.on_progress(lambda company_id, progress: progress_log.append(progress))

        await scraper.initialize()
        assert engine.started and engine.headless is True
        assert scraper.page is engine.page

        await scraper.terminate()
        assert engine.stopped
        assert scraper.page is None
        assert progress_log == [ProgressType.INITIALIZING, ProgressType.TERMINATING]

    @pytest.mark.asyncio
    async def test_terminate_without_engine(self, scraper_options, progress_log):
        scraper = BrowserScraper(StaticFlow(), scraper_options)
        scraper.progress.on_progress(lambda company_id, progress: progress_log.append(progress))

        await scraper.terminate()

        assert progress_log == [ProgressType.TERMINATING]

    @pytest.mark.asyncio
    async def test_scrape_runs_full_cycle(self, credentials, scraper_options, progress_log):
        engine = FakeEngine()
        scraper = BrowserScraper(StaticFlow(), scraper_options, engine=engine)
        scraper.progress.on_progress(lambda company_id, progress: progress_log.append(progress))

        outcome = await scraper.scrape(credentials)

        assert outcome.success is True
        assert engine.stopped
        assert progress_log == [
            ProgressType.INITIALIZING,
            ProgressType.LOGGING_IN,
            ProgressType.LOGIN_SUCCESS,
            ProgressType.TERMINATING,
        ]

    @pytest.mark.asyncio
    async def test_scrape_terminates_on_error(self, credentials, scraper_options):
        engine = FakeEngine(FakePage(response=FakeResponse(404)))
        scraper = BrowserScraper(StaticFlow(), scraper_options, engine=engine)

        with pytest.raises(NavigationError):
            await scraper.scrape(credentials)
        assert engine.stopped

    @pytest.mark.asyncio
    async def test_listener_can_unsubscribe(self, credentials, scraper_options):
        listener = MagicMock()
        scraper = BrowserScraper(StaticFlow(), scraper_options, engine=FakeEngine())
        remove = scraper.progress.on_progress(listener)
        remove()

        await scraper.initialize()

        listener.assert_not_called()
