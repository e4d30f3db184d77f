"""Current user lookup."""

import httpx
from pydantic import ValidationError

from dashboard.api.http import parse_json, send
from dashboard.exceptions import NetworkError
from dashboard.schemas.entities import User


class UserService:
    """Fetches and caches the user the dashboard runs as."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client
        self._user: User | None = None

    async def fetch_user(self, *, refresh: bool = False) -> User:
        if self._user is None or refresh:
            response = await send(self._client, "GET", "/api/user")
            try:
                self._user = User.model_validate(parse_json(response))
            except ValidationError as exc:
                raise NetworkError(response.status_code) from exc
        return self._user

    def get_user(self) -> User | None:
        return self._user
