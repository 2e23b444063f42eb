import re
from typing import Mapping, Optional

from ..engine import BrowserPage
from ..options import Field, LoginOptions
from ..types import LoginResult
from .base_site import LoginFlow

ACCEPT_COOKIES_SCRIPT = (
    "() => {"
    " const btn = document.querySelector(\"[data-cookiebanner='accept_button'],"
    " [data-testid='cookie-policy-manage-dialog-accept-button']\");"
    " if (btn) { btn.click(); return true; }"
    " return false;"
    "}"
)


class FacebookFlow(LoginFlow):
    company_id = "facebook"

    def match(self, url: str) -> bool:
        target = (url or "").lower()
        return "facebook.com" in target or "fb.com" in target

    def get_login_options(self, credentials: Mapping[str, str], page: Optional[BrowserPage]) -> LoginOptions:
        async def accept_cookies() -> None:
            # The consent dialog covers the form in some regions
            await page.evaluate(ACCEPT_COOKIES_SCRIPT)

        return LoginOptions(
            login_url="https://www.facebook.com/login/",
            fields=[
                Field("input[name=email]", credentials["username"]),
                Field("input[name=pass]", credentials["password"]),
            ],
            submit_button_selector="button[name=login]",
            pre_action=accept_cookies,
            possible_results={
                LoginResult.CHANGE_PASSWORD: [re.compile(r"facebook\.com/checkpoint/.*password", re.IGNORECASE)],
                LoginResult.SUCCESS: [
                    "https://www.facebook.com/",
                    re.compile(r"facebook\.com/\?sk="),
                ],
                LoginResult.INVALID_PASSWORD: [re.compile(r"facebook\.com/login/?\?.*(login_attempt|error)")],
            },
        )
