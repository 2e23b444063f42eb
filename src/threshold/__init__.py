"""Threshold - declarative browser login workflows."""

__version__ = "0.1.0"

# Avoid importing playwright at top-level to keep the package cheap to import
__all__ = ["BrowserScraper", "LoginOptions", "ScraperOptions"]


def __getattr__(name):
    if name == "BrowserScraper":
        from .automation.scraper import BrowserScraper
        return BrowserScraper
    if name == "LoginOptions":
        from .automation.options import LoginOptions
        return LoginOptions
    if name == "ScraperOptions":
        from .config import ScraperOptions
        return ScraperOptions
    raise AttributeError(name)
