import os
from dataclasses import dataclass
from typing import Any, Optional, Tuple

DEFAULT_TIMEOUT_MS = 30000
DEFAULT_VIEWPORT = (1024, 768)

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


@dataclass
class ScraperOptions:
    """Per-scraper settings for browser based logins."""
    company_id: str
    show_browser: bool = False
    executable_path: Optional[str] = None
    verbose: bool = False
    browser: Optional[Any] = None
    default_timeout_ms: int = DEFAULT_TIMEOUT_MS
    viewport: Tuple[int, int] = DEFAULT_VIEWPORT

    @classmethod
    def from_env(cls, company_id: str, **overrides: Any) -> "ScraperOptions":
        """Build options from THRESHOLD_* environment variables.

        Keyword arguments win over the environment.
        """
        values = {
            "show_browser": _env_flag("THRESHOLD_SHOW_BROWSER"),
            "executable_path": os.environ.get("THRESHOLD_EXECUTABLE_PATH") or None,
            "verbose": _env_flag("THRESHOLD_VERBOSE"),
            "default_timeout_ms": int(os.environ.get("THRESHOLD_TIMEOUT_MS", DEFAULT_TIMEOUT_MS)),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(company_id=company_id, **values)
