"""HTTP client for the published customer feed."""

from __future__ import annotations

import logging
import time

import httpx

from ..config import settings

logger = logging.getLogger(__name__)


class FeedUnavailableError(ConnectionError):
    """Raised when the feed cannot be retrieved; the refresh cycle is abandoned."""


class FeedClient:
    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.url = url or settings.feed_url
        if not self.url:
            raise ValueError("Customer feed URL is not configured.")
        self.timeout = timeout if timeout is not None else settings.feed_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.feed_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.feed_backoff_seconds
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            follow_redirects=True,
            transport=self._transport,
        )

    def fetch_text(self) -> str:
        """Download the feed as UTF-8 text, retrying transient failures."""

        with self._get_client() as client:
            attempt = 0
            while True:
                try:
                    response = client.get(self.url)
                    response.raise_for_status()
                    return response.content.decode("utf-8-sig")
                except httpx.HTTPStatusError as exc:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise FeedUnavailableError(
                            f"Customer feed returned HTTP {exc.response.status_code}"
                        ) from exc
                    logger.debug(
                        "Feed returned HTTP %s, retrying (attempt %d/%d)",
                        exc.response.status_code,
                        attempt,
                        self.max_retries,
                    )
                except httpx.TransportError as exc:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise FeedUnavailableError(f"Failed to reach customer feed: {exc}") from exc
                    logger.debug("Feed transport error, retrying (attempt %d/%d): %s", attempt, self.max_retries, exc)
                except UnicodeDecodeError as exc:
                    raise FeedUnavailableError("Customer feed is not valid UTF-8") from exc
                time.sleep(self.backoff_seconds * (2 ** (attempt - 1)))
