"""Warm the IDE script cache before the IDE is opened.

The IDE is compiled into one script per browser family. Once branding tells
us where the IDE resources live, the compilation mapping file is read and
the script for the current browser is fetched into the cache.
"""

import random
import re

import httpx

from dashboard.api.http import send
from dashboard.branding import BrandingLoader
from dashboard.config import settings
from dashboard.exceptions import NetworkError
from dashboard.logging import get_logger
from dashboard.schemas.branding import Branding

logger = get_logger(__name__)

_BLOCK_SEPARATOR = re.compile(r"^\n", re.MULTILINE)


def detect_user_agent(user_agent: str, document_mode: int | None = None) -> str:
    """Map a browser user agent to the permutation name used in the mapping file."""
    user_agent = user_agent.lower()
    if "webkit" in user_agent:
        return "safari"
    if "msie" in user_agent:
        if document_mode is not None:
            if 10 <= document_mode < 11:
                return "ie10"
            if 9 <= document_mode < 11:
                return "ie9"
            if 8 <= document_mode < 11:
                return "ie8"
    elif "gecko" in user_agent:
        return "gecko1_8"
    return "unknown"


class IdeFetcher:
    def __init__(
        self,
        client: httpx.AsyncClient,
        branding: BrandingLoader,
        user_agent: str,
        document_mode: int | None = None,
    ) -> None:
        self._client = client
        self._branding = branding
        self.user_agent = detect_user_agent(user_agent, document_mode)
        self.cache: dict[str, bytes] = {}
        self._callback_id = settings.ide_fetcher_callback_id
        branding.register_callback(self._callback_id, self._on_branding_loaded)

    async def _on_branding_loaded(self, _branding: Branding | None) -> None:
        self._branding.unregister_callback(self._callback_id)
        await self.find_mapping_file()

    async def find_mapping_file(self) -> str | None:
        """Read the mapping file and prefetch the matching script.

        Returns the URL of the prefetched script, or None when nothing was
        prefetched.
        """
        resources_path = self._branding.get_ide_resources_path()
        if not resources_path:
            logger.warning("ide_resources_path_missing")
            return None

        mapping_url = f"{resources_path}compilation-mappings.txt"
        try:
            response = await send(
                self._client,
                "GET",
                mapping_url,
                params={"uid": random.randint(1, 1_000_000)},  # bypass caches
            )
        except NetworkError as error:
            logger.warning("ide_mapping_file_unavailable", url=mapping_url, status=error.status)
            return None

        url_to_load = self.get_ide_url_mapping_file(response.text)
        if url_to_load is None:
            logger.error("ide_script_not_found", user_agent=self.user_agent)
            return None

        logger.info("ide_script_preloading", url=url_to_load)
        await self.prefetch(url_to_load)
        return url_to_load

    def get_ide_url_mapping_file(self, data: str) -> str | None:
        """Find the script for our user agent in the mapping file content.

        The file is a list of blank-line separated blocks, each naming one
        ``*.cache.js`` script and the ``user.agent`` it was compiled for.
        """
        for block in _BLOCK_SEPARATOR.split(data):
            lines = block.split("\n")
            agent_line = next((line for line in lines if line.startswith("user.agent ")), None)
            script = next((line for line in lines if line.endswith(".cache.js")), None)
            if agent_line is None or not script:
                continue
            if agent_line.split(" ")[1] == self.user_agent:
                return f"{self._branding.get_ide_resources_path()}{script}"
        return None

    async def prefetch(self, url: str) -> bytes | None:
        if url in self.cache:
            return self.cache[url]
        try:
            response = await send(self._client, "GET", url)
        except NetworkError as error:
            logger.warning("ide_script_prefetch_failed", url=url, status=error.status)
            return None
        self.cache[url] = response.content
        return response.content
