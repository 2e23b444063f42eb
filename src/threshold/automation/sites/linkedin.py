import re
from typing import Mapping, Optional

from ..engine import BrowserPage
from ..options import Field, LoginOptions
from ..types import LoginResult
from .base_site import LoginFlow


class LinkedInFlow(LoginFlow):
    company_id = "linkedin"

    def match(self, url: str) -> bool:
        return "linkedin.com" in (url or "").lower()

    def get_login_options(self, credentials: Mapping[str, str], page: Optional[BrowserPage]) -> LoginOptions:
        return LoginOptions(
            login_url="https://www.linkedin.com/login",
            fields=[
                Field("input#username", credentials["username"]),
                Field("input#password", credentials["password"]),
            ],
            submit_button_selector="button[type=submit]",
            possible_results={
                LoginResult.SUCCESS: [re.compile(r"linkedin\.com/feed")],
                LoginResult.CHANGE_PASSWORD: [
                    re.compile(r"linkedin\.com/checkpoint/challenge/.*password", re.IGNORECASE),
                    re.compile(r"linkedin\.com/psettings/change-password"),
                ],
                LoginResult.INVALID_PASSWORD: [
                    re.compile(r"linkedin\.com/checkpoint/lg/login-submit"),
                    re.compile(r"linkedin\.com/login"),
                ],
            },
        )
