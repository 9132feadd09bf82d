"""
Async Wikipedia API client.

Two requests make up one fetch:
1. The REST ``page/random/title`` endpoint picks a random article title
2. The MediaWiki ``action=parse`` endpoint returns that article's rendered HTML

The client does not retry; retries belong to the acquisition loop.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from ..config import FetchConfig
from .errors import FetchTimeout, NetworkError, ResponseParseError, StatusError

# Characters JavaScript's encodeURIComponent leaves untouched
_URI_COMPONENT_SAFE = "-_.!~*'()"


class WikipediaClient:
    """Fetches random titles and rendered article markup.

    Use as an async context manager so the underlying connection pool is
    closed when the run finishes.

    Attributes:
        cfg: Endpoint and HTTP settings
    """

    def __init__(self, cfg: FetchConfig, transport: httpx.AsyncBaseTransport | None = None):
        self.cfg = cfg
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(cfg.timeout_seconds),
            headers={"User-Agent": cfg.user_agent, "Accept": "application/json"},
            follow_redirects=True,
            trust_env=cfg.trust_env,
            transport=transport,
        )

    async def __aenter__(self) -> WikipediaClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_random_title(self) -> str:
        """Return the title of a random article.

        Raises:
            TransientFetchError: On network failure, bad status or an unexpected body
        """
        data = await self._get_json(self.cfg.random_title_url)
        try:
            title = data["items"][0]["title"]
        except (KeyError, IndexError, TypeError) as exc:
            raise ResponseParseError(
                f"Random title response missing items[0].title: {exc!r}",
                url=self.cfg.random_title_url,
            ) from exc
        if not isinstance(title, str):
            raise ResponseParseError(
                f"Random title is not a string: {title!r}", url=self.cfg.random_title_url
            )
        return title

    async def get_rendered_markup(self, title: str) -> str:
        """Return the rendered HTML body of an article.

        A response without ``parse.text`` yields an empty string rather than
        an error; the article then simply has no headings.

        Raises:
            TransientFetchError: On network failure, bad status or a non-JSON body
        """
        params = {
            "action": "parse",
            "page": title,
            "prop": "text",
            "format": "json",
            "formatversion": "2",
            "origin": "*",
        }
        data = await self._get_json(self.cfg.parse_api_url, params=params)
        parsed = data.get("parse") if isinstance(data, dict) else None
        text = parsed.get("text") if isinstance(parsed, dict) else None
        return text if isinstance(text, str) else ""

    def article_link(self, title: str) -> str:
        """Return the canonical article URL for ``title``.

        Examples:
            >>> WikipediaClient(FetchConfig()).article_link("Foo bar/Baz")
            'https://en.wikipedia.org/wiki/Foo%20bar%2FBaz'
        """
        return f"{self.cfg.article_base_url}{quote(title, safe=_URI_COMPONENT_SAFE)}"

    async def _get_json(self, url: str, params: dict[str, str] | None = None) -> Any:
        try:
            resp = await self._client.get(url, params=params)
        except httpx.TimeoutException as exc:
            raise FetchTimeout(f"TimeoutError: {exc}", url=url) from exc
        except httpx.HTTPError as exc:
            raise NetworkError(f"{type(exc).__name__}: {exc}", url=url) from exc

        if not resp.is_success:
            raise StatusError(
                f"HTTP Error: {resp.status_code}", url=url, status_code=resp.status_code
            )

        try:
            return resp.json()
        except ValueError as exc:
            raise ResponseParseError(
                f"{type(exc).__name__}: {exc} - Response: {resp.text[:200]}", url=url
            ) from exc
