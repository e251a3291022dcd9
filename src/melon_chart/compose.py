"""Build chart request URLs for each period kind."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple, Union
from urllib.parse import urlencode, urlsplit, urlunsplit

from .config import ProviderConfig
from .errors import InvalidConfig
from .logging_utils import get_logger
from .periods import DateWindow, PeriodKind

LOG = get_logger(__name__)

# Above this many rows the site expects the coarser index format.
INDEX_THRESHOLD = 50
MOVED_FLAG = "Y"

QueryPairs = List[Tuple[str, str]]


def index_flag(cut_line: int) -> int:
    return 0 if cut_line > INDEX_THRESHOLD else 1


@dataclass(frozen=True)
class DailyQuery:
    index: int
    moved: str = MOVED_FLAG

    def pairs(self, config: ProviderConfig) -> QueryPairs:
        return [(config.index_key, str(self.index)), (config.moved_key, self.moved)]


@dataclass(frozen=True)
class WeeklyQuery:
    index: int
    start_date: str
    end_date: str
    moved: str = MOVED_FLAG
    is_first_date: bool = False
    is_last_date: bool = False

    def pairs(self, config: ProviderConfig) -> QueryPairs:
        return [
            (config.index_key, str(self.index)),
            (config.moved_key, self.moved),
            (config.start_date_key, self.start_date),
            (config.end_date_key, self.end_date),
            (config.is_first_date_key, _flag(self.is_first_date)),
            (config.is_last_date_key, _flag(self.is_last_date)),
        ]


@dataclass(frozen=True)
class MonthlyQuery:
    index: int
    rank_month: str
    moved: str = MOVED_FLAG

    def pairs(self, config: ProviderConfig) -> QueryPairs:
        return [
            (config.index_key, str(self.index)),
            (config.moved_key, self.moved),
            (config.rank_month_key, self.rank_month),
        ]


ChartQuery = Union[DailyQuery, WeeklyQuery, MonthlyQuery]


def _flag(value: bool) -> str:
    return "true" if value else "false"


def build_query(kind: PeriodKind, window: DateWindow, config: ProviderConfig) -> ChartQuery:
    """Return the parameter set for ``kind``."""

    index = index_flag(config.cut_line)
    if kind is PeriodKind.WEEKLY:
        return WeeklyQuery(index=index, start_date=window.start, end_date=window.end)
    if kind is PeriodKind.MONTHLY:
        return MonthlyQuery(index=index, rank_month=window.start)
    return DailyQuery(index=index)


def period_path(path: str, kind: PeriodKind) -> str:
    """Swap the daily path segment for the one ``kind`` uses."""

    if kind is PeriodKind.DAILY:
        return path
    return path.replace(PeriodKind.DAILY.value, kind.value, 1)


def compose_url(kind: Union[PeriodKind, str], window: DateWindow, config: ProviderConfig) -> str:
    """Return the full request URL for a period and its resolved window.

    Any query string already on ``config.url`` is replaced.
    """

    kind = PeriodKind.parse(kind)
    parts = urlsplit(config.url)
    if not parts.scheme or not parts.netloc:
        raise InvalidConfig(f"Base URL must include scheme and host: {config.url!r}")

    query = urlencode(build_query(kind, window, config).pairs(config))
    url = urlunsplit((parts.scheme, parts.netloc, period_path(parts.path, kind), query, ""))
    LOG.debug("Composed %s chart URL %s", kind.name.lower(), url)
    return url
