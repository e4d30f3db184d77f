"""Process-wide dashboard state shared between services.

Plays the part of a UI root scope: the branding loader publishes to it and
views read from it.
"""

from dataclasses import dataclass

from dashboard.schemas.branding import Branding


@dataclass
class DashboardState:
    branding: Branding | None = None
    product_version: str = ""
    show_ide: bool = False
