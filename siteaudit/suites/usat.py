"""USA TODAY Blueprint and Money section checks."""

from __future__ import annotations

from siteaudit.models.scenario import (
    Check, Interaction, ScenarioConfig, SiteConfig, css, in_frame, label, role,
)

_MONEY = "https://www.usatoday.com/money/"
_AD_FRAME = 'iframe[name="google_ads_iframe_7103\\/usatoday\\/poster_scroll_front\\/money\\/main_1"]'

USAT = SiteConfig(
    name="usat",
    file="USAT.audit.py",
    domain="usatoday.com",
    wait_until="load",
    scenarios=[
        ScenarioConfig(
            title="USAT Blueprint Page - Verify headline and gold price link",
            url="https://www.usatoday.com/money/blueprint/",
            heading=Check(role("main"), text="USA TODAY Blueprint"),
            checks=[Check(role("link", "Gold price today: Gold is"))],
            verify_common=False,
        ),
        ScenarioConfig(
            title="USAT Money Page - Verify headline, Powerball link, and iframe ad",
            url=_MONEY,
            heading=Check(css("h1"), text="Money"),
            checks=[
                Check(role("link", "Powerball winning numbers for")),
                Check(in_frame(_AD_FRAME, "link")),
            ],
            verify_common=False,
        ),
        ScenarioConfig(
            title="USAT Investing Section - Verify navigation and Warren article link",
            url=_MONEY,
            interactions=[
                Interaction("click", role("link", "Investing", exact=True)),
                Interaction(
                    "click",
                    role("navigation", "Investing section navigation"),
                    checks=[
                        Check(label("Money navigation"), text="Investing"),
                        Check(role("link", "How investment guru Warren")),
                    ],
                ),
            ],
            verify_common=False,
        ),
        ScenarioConfig(
            title="USAT Shopping Section - Verify navigation and shopping article link",
            url=_MONEY,
            interactions=[
                Interaction(
                    "click",
                    role("link", "Shopping"),
                    checks=[
                        Check(label("Shopping section navigation"), text="Shopping"),
                        Check(role("link", "Save on outdoor gear for life")),
                    ],
                ),
            ],
            verify_common=False,
        ),
    ],
)
