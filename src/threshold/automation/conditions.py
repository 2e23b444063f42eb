"""
Match conditions and the login result classifier.

A site integration describes the possible outcomes of a login attempt as an
ordered mapping from ``LoginResult`` to a list of conditions. Each condition is
one of:

* ``Exact``: case-insensitive equality with the current URL
* ``Pattern``: regular expression searched in the current URL
* ``Predicate``: zero-argument coroutine function returning a bool

Plain strings, compiled patterns and async callables are accepted anywhere a
condition is expected and converted with ``as_condition``.
"""
from __future__ import annotations

import inspect
import logging
import re
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Mapping, Sequence, Union

from .types import LoginResult

logger = logging.getLogger(__name__)

PredicateFn = Callable[[], Awaitable[bool]]


@dataclass(frozen=True)
class Exact:
    text: str

    async def matches(self, signal: str) -> bool:
        return signal.lower() == self.text.lower()


@dataclass(frozen=True)
class Pattern:
    regex: "re.Pattern[str]"

    async def matches(self, signal: str) -> bool:
        return self.regex.search(signal) is not None


@dataclass(frozen=True)
class Predicate:
    fn: PredicateFn

    async def matches(self, signal: str) -> bool:
        result = self.fn()
        if inspect.isawaitable(result):
            result = await result
        return bool(result)


MatchCondition = Union[Exact, Pattern, Predicate]
ConditionLike = Union[MatchCondition, str, "re.Pattern[str]", PredicateFn]
PossibleLoginResults = Mapping[LoginResult, Sequence[ConditionLike]]


def as_condition(value: ConditionLike) -> MatchCondition:
    if isinstance(value, (Exact, Pattern, Predicate)):
        return value
    if isinstance(value, str):
        return Exact(value)
    if isinstance(value, re.Pattern):
        return Pattern(value)
    if callable(value):
        return Predicate(value)
    raise TypeError(f"Unsupported login result condition: {value!r}")


def normalize_results(possible_results: PossibleLoginResults) -> Dict[LoginResult, List[MatchCondition]]:
    """Convert every condition to its variant, keeping label and list order."""
    normalized: Dict[LoginResult, List[MatchCondition]] = {}
    for label, conditions in possible_results.items():
        normalized[LoginResult(label)] = [as_condition(c) for c in conditions]
    return normalized


async def classify(possible_results: PossibleLoginResults, signal: str) -> LoginResult:
    """Return the first label whose conditions match ``signal``.

    Labels are tried in mapping order and conditions in list order; the first
    match anywhere wins. Falls back to ``LoginResult.UNKNOWN_ERROR``.
    """
    for label, conditions in possible_results.items():
        for condition in conditions:
            if await as_condition(condition).matches(signal):
                logger.debug("Login result %s matched %r", LoginResult(label).value, condition)
                return LoginResult(label)

    logger.debug("No login result matched %s", signal)
    return LoginResult.UNKNOWN_ERROR
