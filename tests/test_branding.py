import httpx
import pytest
from httpx import AsyncClient

from dashboard.branding import BrandingLoader, resolve_branding
from dashboard.exceptions import DashboardError
from dashboard.schemas.branding import Branding, BrandingCli, ProductBranding
from dashboard.state import DashboardState
from dashboard.testing.backend import FakeBackend


def test_resolve_defaults() -> None:
    branding = resolve_branding(ProductBranding(), "assets/branding/")
    assert branding.title == "Eclipse Che"
    assert branding.logo_url == "assets/branding/che-logo.svg"
    assert branding.logo_text == "assets/branding/che-logo-text.svg"
    assert branding.favicon == "assets/branding/favicon.ico"
    assert branding.loader_url == "assets/branding/loader.svg"
    assert branding.ide_resources_path == "/_app/"
    assert branding.cli == BrandingCli(config_name="Eclipse Cheenv file", name="PRODUCT_")


def test_resolve_keeps_explicit_cli_and_docs() -> None:
    product = ProductBranding.model_validate(
        {
            "name": "Acme",
            "cli": {"configName": "acme.env", "name": "ACME"},
            "docs": {"stack": "/acme/stacks", "workspace": "/acme/workspaces"},
        }
    )
    branding = resolve_branding(product, "/static/")
    assert branding.cli.config_name == "acme.env"
    assert branding.cli.name == "ACME"
    assert branding.docs.stack == "/acme/stacks"


@pytest.mark.asyncio
async def test_update_data_publishes_branding(client: AsyncClient, backend: FakeBackend) -> None:
    backend.set_branding({"title": "Acme Cloud", "name": "Acme", "logoFile": "acme.svg", "ideResources": "/ide/"})
    state = DashboardState()
    loader = BrandingLoader(client, state)

    branding = await loader.update_data()

    assert branding is not None
    assert state.branding == branding
    assert loader.get_product_name() == "Acme Cloud"
    assert loader.get_name() == "Acme"
    assert loader.get_product_logo() == "assets/branding/acme.svg"
    assert loader.get_ide_resources_path() == "/ide/"
    assert loader.get_product_help_title() == "Community"
    assert loader.get_cli() == BrandingCli(config_name="Acmeenv file", name="PRODUCT_")
    assert (await loader.wait_ready()) is branding


@pytest.mark.asyncio
async def test_callbacks_run_after_load(client: AsyncClient, backend: FakeBackend) -> None:
    backend.set_branding({"name": "Acme"})
    loader = BrandingLoader(client, DashboardState())
    received: list[Branding | None] = []

    async def on_loaded(branding: Branding | None) -> None:
        received.append(branding)

    loader.register_callback("sync", lambda branding: received.append(branding))
    loader.register_callback("async", on_loaded)
    await loader.update_data()

    assert len(received) == 2
    assert all(branding is not None and branding.name == "Acme" for branding in received)

    loader.unregister_callback("sync")
    loader.unregister_callback("async")
    loader.unregister_callback("never-registered")
    await loader.update_data()
    assert len(received) == 2


@pytest.mark.asyncio
async def test_failed_load_still_runs_callbacks() -> None:
    def unavailable(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"code": "internal_error", "message": "Internal server error"})

    state = DashboardState()
    received: list[Branding | None] = []
    async with AsyncClient(transport=httpx.MockTransport(unavailable), base_url="http://test") as client:
        loader = BrandingLoader(client, state)
        loader.register_callback("recorder", received.append)
        result = await loader.update_data()

    assert result is None
    assert state.branding is None
    assert received == [None]
    assert loader.get_name() is None
    assert loader.get_docs() is None


@pytest.mark.asyncio
async def test_fetch_version(client: AsyncClient, backend: FakeBackend) -> None:
    backend.set_services_info({"implementationVersion": "5.4.0"})
    state = DashboardState()
    loader = BrandingLoader(client, state)

    assert await loader.fetch_version() == "5.4.0"
    assert state.product_version == "5.4.0"


@pytest.mark.asyncio
async def test_fetch_version_without_version(client: AsyncClient) -> None:
    state = DashboardState()
    assert await BrandingLoader(client, state).fetch_version() == ""


@pytest.mark.asyncio
async def test_partial_cli_section_is_kept(client: AsyncClient, backend: FakeBackend) -> None:
    backend.set_branding({"name": "Acme", "cli": {"configName": "acme.env"}})
    loader = BrandingLoader(client, DashboardState())

    await loader.update_data()

    assert loader.get_cli() == BrandingCli(config_name="acme.env", name="")


@pytest.mark.asyncio
async def test_invalid_product_json_is_treated_as_a_failed_load(client: AsyncClient, backend: FakeBackend) -> None:
    backend.set_branding({"title": ["not", "a", "title"]})
    state = DashboardState()
    loader = BrandingLoader(client, state)
    received: list[Branding | None] = []
    loader.register_callback("recorder", received.append)

    result = await loader.update_data()

    assert result is None
    assert state.branding is None
    assert received == [None]


@pytest.mark.asyncio
async def test_wait_ready_after_branding_was_cleared(client: AsyncClient) -> None:
    state = DashboardState()
    loader = BrandingLoader(client, state)
    await loader.update_data()
    state.branding = None

    with pytest.raises(DashboardError):
        await loader.wait_ready()
