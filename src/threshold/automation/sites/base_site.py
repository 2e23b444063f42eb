from typing import Protocol, Mapping, Optional

from ..engine import BrowserPage
from ..options import LoginOptions


class LoginFlow(Protocol):
    company_id: str

    def match(self, url: str) -> bool:
        ...

    def get_login_options(self, credentials: Mapping[str, str], page: Optional[BrowserPage]) -> LoginOptions:
        ...
