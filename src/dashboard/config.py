from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Dashboard settings loaded from environment variables.

    Pydantic Settings automatically reads env vars matching field names (case-insensitive).
    In development, it also reads from .env file if present.
    """

    # Root of the workspace platform REST API, without the /api suffix
    api_base_url: str = "http://localhost:8080"
    api_request_timeout: float = 30.0  # Seconds before an API call is abandoned

    # Page size used by the factories list
    factories_page_size: int = 15

    # Where product.json and the logo files live, relative to api_base_url
    branding_asset_prefix: str = "assets/branding/"

    ide_fetcher_callback_id: str = "cheIdeFetcherCallback"

    model_config = SettingsConfigDict(
        env_file=".env",  # Load from .env in development
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


settings = Settings()
