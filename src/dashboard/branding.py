"""Product branding.

BrandingLoader fetches product.json once, resolves it against the built-in
defaults and publishes the result on DashboardState.branding. Components
that depend on branding (the IDE prefetcher) register a callback; callbacks
run after every load attempt, successful or not, and receive the branding
or None.
"""

import asyncio
import inspect
from collections.abc import Callable
from typing import Any

import httpx
from pydantic import ValidationError

from dashboard.api.http import parse_json, send
from dashboard.config import settings
from dashboard.exceptions import DashboardError, NetworkError
from dashboard.logging import get_logger
from dashboard.schemas.branding import Branding, BrandingCli, BrandingDocs, ProductBranding
from dashboard.state import DashboardState

logger = get_logger(__name__)

BrandingCallback = Callable[[Branding | None], Any]


def resolve_branding(product: ProductBranding, asset_prefix: str) -> Branding:
    """Turn raw product.json content into the published Branding."""
    cli = product.cli or BrandingCli(config_name=product.name + "env file", name="PRODUCT_")
    return Branding(
        title=product.title,
        name=product.name,
        logo_url=asset_prefix + product.logo_file,
        logo_text=asset_prefix + product.logo_text_file,
        favicon=asset_prefix + product.favicon,
        loader_url=asset_prefix + product.loader,
        ide_resources_path=product.ide_resources,
        help_path=product.help_path,
        help_title=product.help_title,
        support_email=product.support_email,
        oauth_docs=product.oauth_docs,
        cli=cli,
        docs=product.docs or BrandingDocs(),
    )


class BrandingLoader:
    def __init__(
        self,
        client: httpx.AsyncClient,
        state: DashboardState,
        *,
        asset_prefix: str | None = None,
    ) -> None:
        self._client = client
        self._state = state
        self.asset_prefix = asset_prefix if asset_prefix is not None else settings.branding_asset_prefix
        self._callbacks: dict[str, BrandingCallback] = {}
        self._ready = asyncio.Event()

    @property
    def branding(self) -> Branding | None:
        return self._state.branding

    def register_callback(self, callback_id: str, callback: BrandingCallback) -> None:
        self._callbacks[callback_id] = callback

    def unregister_callback(self, callback_id: str) -> None:
        self._callbacks.pop(callback_id, None)

    async def wait_ready(self) -> Branding:
        """Wait until branding has been loaded successfully once."""
        await self._ready.wait()
        if self._state.branding is None:
            raise DashboardError("Branding was reset after it was loaded")
        return self._state.branding

    async def update_data(self) -> Branding | None:
        """Fetch product.json, publish it and run the registered callbacks."""
        try:
            response = await send(self._client, "GET", f"{self.asset_prefix}product.json")
            product = ProductBranding.model_validate(parse_json(response) or {})
            self._state.branding = resolve_branding(product, self.asset_prefix)
            self._ready.set()
            logger.info("branding_loaded", name=self._state.branding.name)
        except NetworkError as error:
            logger.warning("branding_load_failed", status=error.status, error=error.message)
        except ValidationError as error:
            logger.warning("branding_invalid", errors=error.errors(include_url=False))
        finally:
            await self._run_callbacks()
        return self._state.branding

    async def fetch_version(self) -> str:
        """Publish the server implementation version on the shared state."""
        try:
            response = await send(self._client, "OPTIONS", "/api/")
            info = parse_json(response) if response.content else {}
        except NetworkError as error:
            logger.warning("services_info_unavailable", status=error.status)
            return self._state.product_version
        if not isinstance(info, dict):
            info = {}
        self._state.product_version = info.get("implementationVersion") or ""
        return self._state.product_version

    async def _run_callbacks(self) -> None:
        # Callbacks may unregister themselves while running
        for callback_id, callback in list(self._callbacks.items()):
            result = callback(self._state.branding)
            if inspect.isawaitable(result):
                await result
            logger.debug("branding_callback_done", callback_id=callback_id)

    def get_name(self) -> str | None:
        return self.branding.name if self.branding else None

    def get_product_name(self) -> str | None:
        return self.branding.title if self.branding else None

    def get_product_logo(self) -> str | None:
        return self.branding.logo_url if self.branding else None

    def get_product_favicon(self) -> str | None:
        return self.branding.favicon if self.branding else None

    def get_ide_resources_path(self) -> str | None:
        return self.branding.ide_resources_path if self.branding else None

    def get_product_help_path(self) -> str | None:
        return self.branding.help_path if self.branding else None

    def get_product_help_title(self) -> str | None:
        return self.branding.help_title if self.branding else None

    def get_product_support_email(self) -> str | None:
        return self.branding.support_email if self.branding else None

    def get_cli(self) -> BrandingCli | None:
        return self.branding.cli if self.branding else None

    def get_docs(self) -> BrandingDocs | None:
        return self.branding.docs if self.branding else None
