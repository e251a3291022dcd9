"""HTTP fetching and HTML extraction for Melon chart pages."""
from __future__ import annotations

from typing import List, Optional

import httpx
import requests
from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from soupsieve import SelectorSyntaxError

from .config import FieldSelectors
from .errors import InvalidConfig, TransportError, UnparseableResponse
from .logging_utils import get_logger
from .models import ChartEntry

LOG = get_logger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)
DEFAULT_TIMEOUT = 15
BYTE_ORDER_MARK = "\ufeff"

HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;"
        "q=0.9,image/avif,image/webp,*/*;q=0.8"
    ),
    "Accept-Language": "ko-KR,ko;q=0.9,en-US;q=0.8,en;q=0.7",
    "Connection": "close",
}


def fetch_chart_html(url: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Fetch a chart page with browser-like headers.

    Any ``requests`` failure, including a non-2xx status, is raised as
    ``TransportError`` with the original exception as its cause.
    """
    LOG.info("Fetching chart page %s", url)
    try:
        resp = requests.get(url, headers=dict(HEADERS), timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        response = getattr(exc, "response", None)
        status = response.status_code if response is not None else None
        LOG.error("Fetch failed for %s (status=%s): %s", url, status, exc)
        raise TransportError(f"Failed to fetch {url}: {exc}", url=url, status=status) from exc

    LOG.info("Fetched %s (%d bytes)", url, len(resp.content))
    return resp.text


async def fetch_chart_html_async(
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """Awaitable counterpart of ``fetch_chart_html`` built on ``httpx``.

    Pass ``client`` to reuse a connection pool; otherwise a client is opened
    for this request only. ``httpx`` failures become ``TransportError``.
    """
    LOG.info("Fetching chart page %s", url)
    try:
        if client is None:
            async with httpx.AsyncClient(headers=HEADERS, timeout=timeout, follow_redirects=True) as own:
                resp = await own.get(url)
        else:
            resp = await client.get(url, headers=HEADERS, timeout=timeout)
        resp.raise_for_status()
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        LOG.error("Fetch failed for %s (status=%s): %s", url, status, exc)
        raise TransportError(f"Failed to fetch {url}: {exc}", url=url, status=status) from exc
    except httpx.HTTPError as exc:
        LOG.error("Fetch failed for %s (status=None): %s", url, exc)
        raise TransportError(f"Failed to fetch {url}: {exc}", url=url) from exc

    LOG.info("Fetched %s (%d bytes)", url, len(resp.content))
    return resp.text


def parse_html(html: str) -> BeautifulSoup:
    """Parse page content, rejecting anything that is not markup.

    A leading byte-order mark is ignored.
    """

    if not isinstance(html, str) or not html.lstrip().lstrip(BYTE_ORDER_MARK).lstrip().startswith("<"):
        raise UnparseableResponse("Response body is not HTML markup")
    try:
        return BeautifulSoup(html, "lxml")
    except ParserRejectedMarkup as exc:
        raise UnparseableResponse(f"Response body could not be parsed: {exc}") from exc


def select_text(soup: BeautifulSoup, selector: str) -> List[str]:
    """Return the trimmed text of every match of ``selector``, in document order."""

    try:
        nodes = soup.select(selector)
    except SelectorSyntaxError as exc:
        raise InvalidConfig(f"Invalid selector {selector!r}: {exc}") from exc
    return [node.get_text().strip() for node in nodes]


def extract_chart(html: str, selectors: FieldSelectors, cut_line: int) -> List[ChartEntry]:
    """Parse a chart page into ranked entries, keeping the first ``cut_line``.

    Titles, artists and albums are selected independently and paired by
    position. When the lists disagree in length the extra items are dropped.
    An empty page section yields an empty list.
    """
    if isinstance(cut_line, bool) or not isinstance(cut_line, int) or cut_line < 0:
        raise InvalidConfig(f"cut_line must be a non-negative integer, got {cut_line!r}")
    soup = parse_html(html)

    titles = select_text(soup, selectors.song_titles)
    artists = select_text(soup, selectors.artist_names)
    albums = select_text(soup, selectors.album_names)

    if not (len(titles) == len(artists) == len(albums)):
        LOG.warning(
            "Selector results differ in length (titles=%d, artists=%d, albums=%d); truncating",
            len(titles),
            len(artists),
            len(albums),
        )

    entries = [
        ChartEntry(rank=str(i + 1), title=title, artist=artist, album=album)
        for i, (title, artist, album) in enumerate(zip(titles, artists, albums))
    ]
    LOG.info("Parsed %d chart entries (cut line %d)", len(entries), cut_line)
    return entries[:cut_line]
