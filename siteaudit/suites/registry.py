from __future__ import annotations

from siteaudit.errors import UnknownSuiteError
from siteaudit.models.scenario import SiteConfig
from siteaudit.suites.forbes import FORBES_AU, FORBES_CA, FORBES_CA_PAGES, FORBES_IT
from siteaudit.suites.usat import USAT

SUITES: dict[str, SiteConfig] = {
    site.name: site
    for site in (FORBES_AU, FORBES_CA, FORBES_IT, FORBES_CA_PAGES, USAT)
}


def get_suite(name: str) -> SiteConfig:
    try:
        return SUITES[name]
    except KeyError:
        raise UnknownSuiteError(name, sorted(SUITES)) from None
