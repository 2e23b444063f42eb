"""Test fixtures for Threshold."""

import re
from typing import Any, Dict, List, Optional, Tuple

import pytest

from threshold.automation.options import Field, LoginOptions
from threshold.automation.types import LoginResult
from threshold.config import ScraperOptions


class FakeResponse:
    def __init__(self, status: Optional[int]):
        self.status = status


class FakePage:
    """In-memory BrowserPage that records every call in order."""

    def __init__(
        self,
        final_url: str = "https://bank.example/home",
        response: Any = "ok",
        missing: Tuple[str, ...] = (),
    ):
        self.calls: List[Tuple[str, ...]] = []
        self.final_url = final_url
        self.url = "about:blank"
        self.response = FakeResponse(200) if response == "ok" else response
        self.missing = set(missing)
        self.values: Dict[str, str] = {}
        self.live = True

    async def goto(self, url: str):
        self.calls.append(("goto", url))
        self.url = url
        return self.response

    async def wait_for(self, selector: str, timeout_ms: Optional[int] = None) -> None:
        self.calls.append(("wait_for", selector))
        if selector in self.missing:
            raise TimeoutError(f"Timeout waiting for selector: {selector}")

    async def click(self, selector: str) -> None:
        self.calls.append(("click", selector))
        self.url = self.final_url

    async def type(self, selector: str, value: str) -> None:
        if selector in self.missing:
            raise TimeoutError(f"Timeout waiting for selector: {selector}")
        self.calls.append(("type", selector))
        self.values[selector] = value

    async def wait_for_navigation(self, timeout_ms: Optional[int] = None) -> None:
        self.calls.append(("wait_for_navigation",))

    async def current_url(self) -> str:
        return self.url

    async def evaluate(self, script: str, arg: Optional[Dict[str, Any]] = None) -> Any:
        self.calls.append(("evaluate", script))
        return False

    def is_live(self) -> bool:
        return self.live


class FakeEngine:
    def __init__(self, page: Optional[FakePage] = None):
        self._page = page or FakePage()
        self.page: Optional[FakePage] = None
        self.started = False
        self.stopped = False

    async def start(self, headless: bool = True, executable_path: Optional[str] = None, verbose: bool = False) -> None:
        self.started = True
        self.headless = headless
        self.page = self._page

    async def stop(self) -> None:
        self.stopped = True
        self.page = None


class StaticFlow:
    """Login flow returning prepared options, keyed on the credentials given."""

    company_id = "bank"

    def __init__(self, possible_results=None, **overrides):
        self.possible_results = possible_results or {
            LoginResult.SUCCESS: [re.compile(r"/home")],
        }
        self.overrides = overrides
        self.received: List[Any] = []

    def match(self, url: str) -> bool:
        return "bank.example" in url

    def get_login_options(self, credentials, page):
        self.received.append(dict(credentials))
        return LoginOptions(
            login_url="https://bank.example/login",
            fields=[
                Field("#user", credentials["username"]),
                Field("#pass", credentials["password"]),
            ],
            submit_button_selector="button[type=submit]",
            possible_results=self.possible_results,
            **self.overrides,
        )


@pytest.fixture
def credentials() -> Dict[str, str]:
    return {"username": "alice", "password": "s3cret"}


@pytest.fixture
def page() -> FakePage:
    return FakePage()


@pytest.fixture
def scraper_options() -> ScraperOptions:
    return ScraperOptions(company_id="bank")


@pytest.fixture
def progress_log() -> List[Any]:
    return []
