"""Branding schemas.

ProductBranding mirrors product.json as shipped with the dashboard assets;
Branding is the resolved form published to shared state, with asset file
names turned into URLs and missing sections filled in.
"""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class BrandingDocs(BaseModel):
    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    stack: str = "/docs/getting-started/runtime-stacks/index.html"
    workspace: str = "/docs/getting-started/intro/index.html"


class BrandingCli(BaseModel):
    """CLI section of product.json; a partial section is kept as given."""

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    config_name: str = ""
    name: str = ""


class ProductBranding(BaseModel):
    """Raw product.json content; every key is optional."""

    model_config = {"alias_generator": to_camel, "populate_by_name": True, "extra": "ignore"}

    title: str = "Eclipse Che"
    name: str = "Eclipse Che"
    logo_file: str = "che-logo.svg"
    logo_text_file: str = "che-logo-text.svg"
    favicon: str = "favicon.ico"
    loader: str = "loader.svg"
    ide_resources: str = "/_app/"
    help_path: str = "https://www.eclipse.org/che/"
    help_title: str = "Community"
    support_email: str = "wish@codenvy.com"
    oauth_docs: str = "Configure OAuth in the che.properties file."
    cli: BrandingCli | None = None
    docs: BrandingDocs | None = None


class Branding(BaseModel):
    title: str
    name: str
    logo_url: str
    logo_text: str
    favicon: str
    loader_url: str
    ide_resources_path: str
    help_path: str
    help_title: str
    support_email: str
    oauth_docs: str
    cli: BrandingCli
    docs: BrandingDocs = Field(default_factory=BrandingDocs)
