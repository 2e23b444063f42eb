from dataclasses import dataclass, field as dc_field
from types import MappingProxyType
from typing import Awaitable, Callable, Optional, Tuple

from .conditions import PossibleLoginResults, normalize_results
from .engine import BrowserPage

Action = Callable[[], Awaitable[None]]
Step = Callable[[BrowserPage, "LoginOptions"], Awaitable[None]]


@dataclass(frozen=True)
class Field:
    selector: str
    value: str = dc_field(repr=False)


@dataclass(frozen=True)
class LoginOptions:
    """Everything a single login attempt needs to know about a site.

    Built from the credentials for one attempt and discarded afterwards.
    ``check_readiness`` replaces waiting for the submit button and
    ``post_action`` replaces waiting for navigation.
    """
    login_url: str
    fields: Tuple[Field, ...]
    submit_button_selector: str
    possible_results: PossibleLoginResults
    check_readiness: Optional[Action] = None
    pre_action: Optional[Action] = None
    post_action: Optional[Action] = None

    def __post_init__(self):
        object.__setattr__(self, "fields", tuple(self.fields))
        if not self.possible_results:
            raise ValueError("possible_results must define at least one login result")
        for label, conditions in self.possible_results.items():
            if not conditions:
                raise ValueError(f"No conditions given for login result {label}")
        # Rejects unknown labels and conditions before the attempt starts
        normalized = normalize_results(self.possible_results)
        object.__setattr__(
            self,
            "possible_results",
            MappingProxyType({label: tuple(conds) for label, conds in normalized.items()}),
        )

    def readiness_strategy(self) -> Step:
        if self.check_readiness is not None:
            return _run(self.check_readiness)
        return wait_for_submit_button

    def completion_strategy(self) -> Step:
        if self.post_action is not None:
            return _run(self.post_action)
        return wait_for_navigation


async def wait_for_submit_button(page: BrowserPage, options: LoginOptions) -> None:
    await page.wait_for(options.submit_button_selector)


async def wait_for_navigation(page: BrowserPage, options: LoginOptions) -> None:
    await page.wait_for_navigation()


def _run(action: Action) -> Step:
    async def step(page: BrowserPage, options: LoginOptions) -> None:
        await action()
    return step
