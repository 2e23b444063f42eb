from typing import Protocol, Optional, Dict, Any


class PageResponse(Protocol):
    status: Optional[int]


class BrowserPage(Protocol):
    async def goto(self, url: str) -> Optional[PageResponse]:
        ...

    async def wait_for(self, selector: str, timeout_ms: Optional[int] = None) -> None:
        ...

    async def click(self, selector: str) -> None:
        ...

    async def type(self, selector: str, value: str) -> None:
        ...

    async def wait_for_navigation(self, timeout_ms: Optional[int] = None) -> None:
        ...

    async def current_url(self) -> str:
        ...

    async def evaluate(self, script: str, arg: Optional[Dict[str, Any]] = None) -> Any:
        ...

    def is_live(self) -> bool:
        ...


class AutomationEngine(Protocol):
    page: Optional[BrowserPage]

    async def start(
        self,
        headless: bool = True,
        executable_path: Optional[str] = None,
        verbose: bool = False,
    ) -> None:
        ...

    async def stop(self) -> None:
        ...
