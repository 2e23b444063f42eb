"""Browser automation for site logins.

This package provides the generic login workflow, the result classifier and
the Playwright/Selenium engines that drive a page through it.
"""

from .types import ErrorType, LoginOutcome, LoginResult, ProgressType
from .conditions import Exact, Pattern, Predicate, classify
from .errors import (
    AutomationError,
    MissingLoginOptionsError,
    NavigationError,
    UnexpectedLoginResultError,
    UnknownSiteError,
)
from .options import Field, LoginOptions
from .scraper import BrowserScraper

__all__ = [
    'AutomationError',
    'BrowserScraper',
    'ErrorType',
    'Exact',
    'Field',
    'LoginOptions',
    'LoginOutcome',
    'LoginResult',
    'MissingLoginOptionsError',
    'NavigationError',
    'Pattern',
    'Predicate',
    'ProgressType',
    'UnexpectedLoginResultError',
    'UnknownSiteError',
    'classify',
]
