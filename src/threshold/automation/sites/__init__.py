"""Site integrations providing login options for known sites."""
from typing import Dict, List, Optional, Type

from ..errors import UnknownSiteError
from .base_site import LoginFlow
from .facebook import FacebookFlow
from .github import GithubFlow
from .linkedin import LinkedInFlow

SITE_FLOWS: Dict[str, Type[LoginFlow]] = {
    GithubFlow.company_id: GithubFlow,
    LinkedInFlow.company_id: LinkedInFlow,
    FacebookFlow.company_id: FacebookFlow,
}


def get_flow(company_id: str) -> LoginFlow:
    try:
        return SITE_FLOWS[company_id.lower()]()
    except KeyError:
        raise UnknownSiteError(f"No login flow registered for '{company_id}'") from None


def flow_for_url(url: str) -> Optional[LoginFlow]:
    for flow_cls in SITE_FLOWS.values():
        flow = flow_cls()
        if flow.match(url):
            return flow
    return None


def list_flows() -> List[str]:
    return sorted(SITE_FLOWS)


__all__ = ["LoginFlow", "GithubFlow", "LinkedInFlow", "FacebookFlow", "get_flow", "flow_for_url", "list_flows"]
