"""Bounded-concurrency validation of external web links."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Mapping
from types import TracebackType
from urllib.parse import urlsplit

import httpx

from booklinkcheck.cache.store import Cache
from booklinkcheck.contracts.config import LinkcheckConfig
from booklinkcheck.contracts.diagnostic import LinkOutcome
from booklinkcheck.validate.headers import headers_for, resolve_header_rules
from booklinkcheck.validate.urls import normalize_url

_LOG = logging.getLogger(__name__)


def default_concurrency() -> int:
    return max(1, os.cpu_count() or 1)


class WebValidator:
    """Check external URLs over HTTP, consulting and filling a :class:`Cache`.

    Use as an async context manager so the underlying client is closed::

        async with WebValidator(config, cache) as validator:
            outcome = await validator.check("https://example.com/")

    Every normalized URL is fetched by at most one task per run; concurrent
    callers for the same URL await that task. A check sends ``HEAD`` first and
    falls back to ``GET`` when the server answers ``HEAD`` with an error status.
    """

    def __init__(
        self,
        config: LinkcheckConfig,
        cache: Cache,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        max_concurrency: int | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._config = config
        self._cache = cache
        self._transport = transport
        self._semaphore = asyncio.Semaphore(max_concurrency or config.max_concurrency or default_concurrency())
        self._inflight: dict[str, asyncio.Task[LinkOutcome]] = {}
        self._client: httpx.AsyncClient | None = None
        self._rules, self.diagnostics = resolve_header_rules(config, environ)

    async def __aenter__(self) -> WebValidator:
        self._client = httpx.AsyncClient(
            transport=self._transport,
            follow_redirects=True,
            timeout=self._config.request_timeout,
            headers={"User-Agent": self._config.user_agent},
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        for task in self._inflight.values():
            if not task.done():
                task.cancel()
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def check(self, url: str) -> LinkOutcome:
        key = normalize_url(url)
        task = self._inflight.get(key)
        if task is None:
            cached = self._cache.lookup(key)
            if cached is not None:
                _LOG.debug("cache hit for %s (ok=%s)", key, cached.outcome.ok)
                return cached.outcome
            task = asyncio.create_task(self._fetch(key), name=f"check {key}")
            self._inflight[key] = task
        return await task

    async def _fetch(self, key: str) -> LinkOutcome:
        async with self._semaphore:
            outcome = await self._request(key)
        self._cache.insert(key, outcome)
        return outcome

    async def _request(self, url: str) -> LinkOutcome:
        if self._client is None:
            raise RuntimeError("WebValidator must be used as an async context manager")
        try:
            urlsplit(url).port
        except ValueError as exc:
            _LOG.debug("not requesting %s: %s", url, exc)
            return LinkOutcome.network_failure(f"invalid URL: {exc}")
        headers = headers_for(url, self._rules)
        try:
            response = await self._client.head(url, headers=headers)
            if response.status_code >= 400:
                _LOG.debug("HEAD %s returned %d, retrying with GET", url, response.status_code)
                async with self._client.stream("GET", url, headers=headers) as streamed:
                    response = streamed
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            reason = str(exc) or type(exc).__name__
            _LOG.debug("request to %s failed: %s", url, reason)
            return LinkOutcome.network_failure(reason)

        if response.status_code >= 400:
            reason = f"{response.status_code} {response.reason_phrase}".strip()
            _LOG.debug("%s is broken: %s", url, reason)
            return LinkOutcome.http_error(response.status_code, reason)
        _LOG.debug("%s is ok (%d)", url, response.status_code)
        return LinkOutcome.success()
