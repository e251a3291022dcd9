"""Chart client tying period resolution, URL composition and extraction together."""
from __future__ import annotations

from datetime import date
from typing import Any, Awaitable, Callable, Mapping, Optional, Tuple, Union

from .compose import compose_url
from .config import ProviderConfig, load_config
from .fetch import extract_chart, fetch_chart_html, fetch_chart_html_async
from .logging_utils import get_logger
from .models import ChartResult
from .periods import Clock, DateWindow, PeriodKind, parse_reference_date, resolve_window

LOG = get_logger(__name__)

Fetcher = Callable[[str], str]
AsyncFetcher = Callable[[str], Awaitable[str]]


class MelonChart:
    """Fetch the Melon chart around one reference date.

    ``fetcher``/``async_fetcher`` and ``today`` default to the live transports
    and the system clock; pass replacements to run without network access or
    at a fixed date. ``daily``/``weekly``/``monthly`` block on the fetch, while
    ``adaily``/``aweekly``/``amonthly`` await it.
    """

    def __init__(
        self,
        reference_date: Union[str, date],
        options: Optional[Mapping[str, Any]] = None,
        *,
        fetcher: Fetcher = fetch_chart_html,
        async_fetcher: AsyncFetcher = fetch_chart_html_async,
        today: Clock = date.today,
    ) -> None:
        self.reference_date = parse_reference_date(reference_date)
        self.config: ProviderConfig = load_config(options)
        self._fetch = fetcher
        self._afetch = async_fetcher
        self._today = today

    def daily(self) -> ChartResult:
        """Chart for the reference day, or today's when the date is in the future."""
        return self.chart(PeriodKind.DAILY)

    def weekly(self) -> ChartResult:
        """Chart for the Monday-Sunday week of the reference date.

        A date in the current week falls back to the previous week.
        """
        return self.chart(PeriodKind.WEEKLY)

    def monthly(self) -> ChartResult:
        """Chart for the reference month, or last month's for current/future dates."""
        return self.chart(PeriodKind.MONTHLY)

    async def adaily(self) -> ChartResult:
        return await self.achart(PeriodKind.DAILY)

    async def aweekly(self) -> ChartResult:
        return await self.achart(PeriodKind.WEEKLY)

    async def amonthly(self) -> ChartResult:
        return await self.achart(PeriodKind.MONTHLY)

    def chart(self, kind: Union[PeriodKind, str]) -> ChartResult:
        window, url = self._request(kind)
        return self._package(window, self._fetch(url))

    async def achart(self, kind: Union[PeriodKind, str]) -> ChartResult:
        window, url = self._request(kind)
        return self._package(window, await self._afetch(url))

    def _request(self, kind: Union[PeriodKind, str]) -> Tuple[DateWindow, str]:
        kind = PeriodKind.parse(kind)
        window = resolve_window(self.reference_date, kind, today=self._today)
        url = compose_url(kind, window, self.config)
        LOG.info("Requesting %s chart %s..%s", kind.name.lower(), window.start, window.end)
        return window, url

    def _package(self, window: DateWindow, html: str) -> ChartResult:
        entries = extract_chart(html, self.config.selectors, self.config.cut_line)
        return ChartResult(window=window, entries=entries)
