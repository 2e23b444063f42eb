"""Exceptions raised by the login automation layer.

Only classification outcomes are reported as a ``LoginOutcome``; everything
defined here is raised to the caller.
"""
from typing import Optional


class AutomationError(Exception):
    """Base exception for automation errors."""
    pass


class NavigationError(AutomationError):
    """Raised when a navigation returns a non-OK response."""

    def __init__(self, url: str, status: Optional[int] = None):
        self.url = url
        self.status = status
        super().__init__(f"Error while trying to navigate to url {url} (status: {status})")


class MissingLoginOptionsError(AutomationError):
    """Raised when a site integration cannot provide login options."""
    pass


class UnexpectedLoginResultError(AutomationError):
    """Raised when a classification value has no outcome mapping."""
    pass


class UnknownSiteError(AutomationError, KeyError):
    """Raised when no site integration is registered under a name."""

    def __str__(self) -> str:
        return Exception.__str__(self)
