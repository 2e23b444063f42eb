import re
from typing import Mapping, Optional

from ..engine import BrowserPage
from ..options import Field, LoginOptions
from ..types import LoginResult
from .base_site import LoginFlow

FLASH_ERROR_SCRIPT = "() => !!document.querySelector('#js-flash-container .flash-error')"


class GithubFlow(LoginFlow):
    company_id = "github"

    def match(self, url: str) -> bool:
        return "github.com" in (url or "").lower()

    def get_login_options(self, credentials: Mapping[str, str], page: Optional[BrowserPage]) -> LoginOptions:
        async def has_flash_error() -> bool:
            return bool(await page.evaluate(FLASH_ERROR_SCRIPT))

        return LoginOptions(
            login_url="https://github.com/login",
            fields=[
                Field("input#login_field", credentials["username"]),
                Field("input#password", credentials["password"]),
            ],
            submit_button_selector="input[type=submit][name=commit]",
            possible_results={
                # Checked before success: the reset page lives under github.com too
                LoginResult.CHANGE_PASSWORD: [re.compile(r"github\.com/password_reset")],
                LoginResult.SUCCESS: [re.compile(r"^https://github\.com/?(\?.*)?$")],
                LoginResult.INVALID_PASSWORD: ["https://github.com/session", has_flash_error],
            },
        )
