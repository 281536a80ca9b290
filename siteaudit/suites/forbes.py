"""Forbes Advisor audits: regional home pages and the Canadian money pages."""

from __future__ import annotations

from siteaudit.models.scenario import (
    Check, CommonElements, ScenarioConfig, SiteConfig, css, role,
)

FORBES_COMMON = CommonElements(
    logo=role("link", "Forbes Logo"),
    subscribe=role("button", "Subscribe"),
    brand_link=role("link", "forbes", exact=True),
)


def _regional_audit(code: str, path: str, heading: str) -> SiteConfig:
    return SiteConfig(
        name=f"forbes-{code.lower()}",
        file=f"{code}.audit.py",
        domain="forbes.com",
        scenarios=[
            ScenarioConfig(
                title=f"Full audit for {code} site",
                url=f"https://www.forbes.com/advisor/{path}/",
                heading=Check(role("heading", heading)),
                verify_common=False,
            ),
        ],
        common=FORBES_COMMON,
        wait_until="load",
        top_n=10,
    )


FORBES_AU = _regional_audit("AU", "au", "Smart Financial Decisions Made Simple")
FORBES_CA = _regional_audit("CA", "ca", "Smart Financial Decisions Made Simple")
FORBES_IT = _regional_audit("IT", "it", "Scelte finanziarie intelligenti in tutta semplicità")


_CA = "https://www.forbes.com/advisor/ca"


def _ca_page(name: str, path: str, heading: str, checks: list[Check] | None = None) -> ScenarioConfig:
    return ScenarioConfig(
        title=f"{name} page verification",
        url=f"{_CA}/{path}",
        heading=Check(css("h1"), text=heading),
        checks=checks or [],
    )


FORBES_CA_PAGES = SiteConfig(
    name="forbes-ca-pages",
    file="CAfinal.audit.py",
    domain="forbes.com",
    common=FORBES_COMMON,
    wait_until="networkidle",
    challenge_guard=True,
    same_site_only=True,
    top_n=5,
    timeout_s=120,
    scenarios=[
        _ca_page("Home", "", "Smart Financial Decisions Made Simple",
                 checks=[Check(role("img", "Smart Financial Decisions"))]),
        _ca_page("Credit Cards", "credit-cards/best/best-credit-cards/",
                 "Compare Canada’s Best Credit Cards and Choose Your Perfect Match"),
        _ca_page("Business", "business/", "Transform Your Small Business"),
        _ca_page("Cash Back Credit Cards", "credit-cards/best/cash-back/",
                 "Best Cash Back Credit Cards In Canada For 2025"),
        _ca_page("Mortgage Lenders", "mortgages/best-mortgage-lenders/",
                 "Best Mortgage Lenders In Canada For 2025"),
        _ca_page("Mortgage Rates", "mortgages/best-mortgage-rates-in-canada/",
                 "Best Mortgage Rates In Canada For 2025"),
        _ca_page("Personal Loans", "personal-loans/best-personal-loans/",
                 "Best Personal Loans In Canada For 2025"),
        _ca_page("GIC Rates", "banking/gic/best-gic-rates/", "Best GIC Rates In Canada For 2025"),
        _ca_page("Savings Accounts", "banking/savings/best-savings-accounts/",
                 "Best Savings Accounts In Canada For 2025"),
        _ca_page("Chequing Accounts", "banking/chequing/best-chequing-accounts/",
                 "Best Chequing Accounts In Canada For 2025"),
        _ca_page("Travel Credit Cards", "credit-cards/best/travel/",
                 "Best Travel Credit Cards In Canada For 2025"),
    ],
)
