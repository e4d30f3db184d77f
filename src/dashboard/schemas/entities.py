"""Entity schemas shared by the API services and the fake backend.

The platform backend owns these records and their schema; the dashboard only
reads them. Field names travel as camelCase on the wire, so every model
uses a camelCase alias generator and keeps unknown fields (extra="allow")
instead of dropping what it does not model.
"""

from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class Entity(BaseModel):
    """Base for every backend-owned record identified by ``id``."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "allow",
    }

    id: str

    def to_wire(self) -> dict[str, Any]:
        """Serialize with camelCase keys, the way the REST API sends it."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Link(BaseModel):
    """Hypermedia link attached to a runtime."""

    model_config = {"extra": "allow"}

    rel: str
    href: str


class Creator(BaseModel):
    model_config = {"alias_generator": to_camel, "populate_by_name": True, "extra": "allow"}

    user_id: str
    created: int | None = None


class Factory(Entity):
    """Shareable workspace template."""

    name: str = ""
    v: str = "4.0"
    creator: Creator | None = None
    workspace: dict[str, Any] | None = None


class ProjectConfig(BaseModel):
    model_config = {"alias_generator": to_camel, "populate_by_name": True, "extra": "allow"}

    name: str
    path: str = ""
    type: str = "blank"
    description: str = ""


class WorkspaceConfig(BaseModel):
    model_config = {"alias_generator": to_camel, "populate_by_name": True, "extra": "allow"}

    name: str = ""
    default_env: str | None = None
    environments: dict[str, Any] = Field(default_factory=dict)
    projects: list[ProjectConfig] = Field(default_factory=list)


class WorkspaceRuntime(BaseModel):
    model_config = {"alias_generator": to_camel, "populate_by_name": True, "extra": "allow"}

    links: list[Link] = Field(default_factory=list)


class Workspace(Entity):
    namespace: str = ""
    status: str = "STOPPED"
    config: WorkspaceConfig = Field(default_factory=WorkspaceConfig)
    attributes: dict[str, Any] = Field(default_factory=dict)
    runtime: WorkspaceRuntime | None = None

    @property
    def name(self) -> str:
        return self.config.name

    def agent_url(self) -> str | None:
        """Return the workspace agent URL advertised by the runtime, if running."""
        if self.runtime is None:
            return None
        for link in self.runtime.links:
            if link.rel == "wsagent":
                return link.href
        return None


class User(Entity):
    name: str = ""
    email: str = ""
    aliases: list[str] = Field(default_factory=list)


class Profile(Entity):
    email: str = ""
    user_id: str | None = None
    attributes: dict[str, str] = Field(default_factory=dict)


class ProjectDetails(BaseModel):
    """Project as reported by a workspace agent."""

    model_config = {"alias_generator": to_camel, "populate_by_name": True, "extra": "allow"}

    name: str
    workspace_id: str
    path: str = ""
    type: str = "blank"
    description: str = ""

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class Stack(Entity):
    name: str = ""
    description: str = ""
    tags: list[str] = Field(default_factory=list)


class DeleteResult(BaseModel):
    """Body returned by entity DELETE endpoints."""

    success: bool = True
    errors: list[str] = Field(default_factory=list)
