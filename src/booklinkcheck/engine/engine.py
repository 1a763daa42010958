"""Core link-check pipeline engine."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping

import httpx

from booklinkcheck.cache.store import Cache
from booklinkcheck.contracts.config import LinkcheckConfig
from booklinkcheck.contracts.diagnostic import Diagnostic, ErrorKind, LinkcheckReport
from booklinkcheck.contracts.document import Book
from booklinkcheck.contracts.link import ExternalTarget, InternalTarget, Link
from booklinkcheck.diagnostics.aggregator import DiagnosticAggregator
from booklinkcheck.engine.progress import CheckProgress
from booklinkcheck.extract.extractor import extract_links
from booklinkcheck.resolve.resolver import Resolver
from booklinkcheck.validate.urls import is_web_url, normalize_url
from booklinkcheck.validate.validator import WebValidator

_LOG = logging.getLogger(__name__)


class LinkChecker:
    """Run extraction, resolution and validation for one book.

    The cache is filled in memory only; persisting it is left to the caller,
    after :meth:`check` has returned, so an aborted run never writes it.
    """

    def __init__(
        self,
        config: LinkcheckConfig,
        *,
        cache: Cache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        progress: CheckProgress | None = None,
        max_concurrency: int | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._config = config
        self._cache = cache if cache is not None else Cache(config.cache_timeout)
        self._transport = transport
        self._progress = progress or CheckProgress()
        self._max_concurrency = max_concurrency
        self._environ = environ

    @property
    def cache(self) -> Cache:
        return self._cache

    async def check(self, book: Book) -> LinkcheckReport:
        aggregator = DiagnosticAggregator(self._config.warning_policy)
        links = self._extract(book, aggregator)
        external = self._resolve(book, links, aggregator)
        if external:
            await self._validate(external, aggregator)
        return aggregator.finish(links_checked=len(links))

    def _extract(self, book: Book, aggregator: DiagnosticAggregator) -> list[Link]:
        links: list[Link] = []
        self._progress.phase_start("Extract", total=len(book.files))
        try:
            for source_file in book.files:
                result = extract_links(source_file)
                links.extend(result.links)
                aggregator.extend(result.diagnostics)
                self._progress.item_done("Extract", broken=bool(result.diagnostics))
        except Exception as exc:
            self._progress.phase_error("Extract", exc)
            raise
        self._progress.phase_done("Extract")
        _LOG.debug("extracted %d link(s) from %d file(s)", len(links), len(book.files))
        return links

    def _resolve(self, book: Book, links: list[Link], aggregator: DiagnosticAggregator) -> dict[str, list[Link]]:
        """Check internal links and group web links by normalized URL."""
        resolver = Resolver(book, self._config)
        external: dict[str, list[Link]] = {}

        self._progress.phase_start("Resolve", total=len(links))
        for link in links:
            target = resolver.classify(link)
            diagnostic: Diagnostic | None = None
            if isinstance(target, InternalTarget):
                diagnostic = resolver.check(link, target)
                if diagnostic is not None:
                    aggregator.add(diagnostic)
            elif isinstance(target, ExternalTarget):
                if not is_web_url(target.url):
                    _LOG.debug("not checking %s: unsupported scheme", target.url)
                elif not self._config.follow_web_links:
                    _LOG.debug("not checking %s: follow-web-links is disabled", target.url)
                else:
                    external.setdefault(normalize_url(target.url), []).append(link)
            self._progress.item_done("Resolve", broken=diagnostic is not None)
        self._progress.phase_done("Resolve")
        return external

    async def _validate(self, external: dict[str, list[Link]], aggregator: DiagnosticAggregator) -> None:
        async with WebValidator(
            self._config,
            self._cache,
            transport=self._transport,
            max_concurrency=self._max_concurrency,
            environ=self._environ,
        ) as validator:
            aggregator.extend(validator.diagnostics)
            self._progress.phase_start("Web", total=len(external))
            try:
                async with asyncio.TaskGroup() as tg:
                    for url, url_links in external.items():
                        tg.create_task(self._validate_url(validator, url, url_links, aggregator))
            except BaseException as exc:
                self._progress.phase_error("Web", exc)
                raise
            self._progress.phase_done("Web")

    async def _validate_url(
        self,
        validator: WebValidator,
        url: str,
        links: list[Link],
        aggregator: DiagnosticAggregator,
    ) -> None:
        outcome = await validator.check(url)
        if not outcome.ok:
            for link in links:
                aggregator.add(
                    Diagnostic.for_link(
                        link,
                        outcome.kind or ErrorKind.NETWORK_FAILURE,
                        f"`{link.raw_target}` is broken: {outcome.reason}",
                    )
                )
        self._progress.item_done("Web", broken=not outcome.ok)


def check_book(
    book: Book,
    config: LinkcheckConfig,
    *,
    cache: Cache | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> LinkcheckReport:
    """Synchronous wrapper around :meth:`LinkChecker.check`."""
    return asyncio.run(LinkChecker(config, cache=cache, transport=transport).check(book))
