"""Provider defaults and caller overrides for the Melon chart pages."""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlsplit

from .errors import InvalidConfig

DEFAULT_URL = "https://www.melon.com/chart/day/index.htm"
DEFAULT_CUT_LINE = 50

# Selectors for the chart table rows; rank is derived from row order.
DEFAULT_SONG_TITLES = ".wrap_song_info .rank01 span a"
DEFAULT_ARTIST_NAMES = ".wrap_song_info .rank02 span a"
DEFAULT_ALBUM_NAMES = ".wrap_song_info .rank03 a"


@dataclass(frozen=True)
class FieldSelectors:
    """CSS selectors for the per-row text fields."""

    song_titles: str = DEFAULT_SONG_TITLES
    artist_names: str = DEFAULT_ARTIST_NAMES
    album_names: str = DEFAULT_ALBUM_NAMES


@dataclass(frozen=True)
class ProviderConfig:
    """Read-only request and parsing configuration for one chart client."""

    url: str = DEFAULT_URL
    cut_line: int = DEFAULT_CUT_LINE
    selectors: FieldSelectors = FieldSelectors()
    index_key: str = "idx"
    moved_key: str = "moved"
    start_date_key: str = "startDay"
    end_date_key: str = "endDay"
    is_first_date_key: str = "isFirstDate"
    is_last_date_key: str = "isLastDate"
    rank_month_key: str = "rankMonth"


# Option names callers pass in, mapped to ProviderConfig fields.
OPTION_FIELDS: Dict[str, str] = {
    "url": "url",
    "cutLine": "cut_line",
    "indexKey": "index_key",
    "movedKey": "moved_key",
    "startDateKey": "start_date_key",
    "endDateKey": "end_date_key",
    "isFirstDateKey": "is_first_date_key",
    "isLastDateKey": "is_last_date_key",
    "rankMonthKey": "rank_month_key",
}

SELECTOR_FIELDS: Dict[str, str] = {
    "songTitles": "song_titles",
    "artistNames": "artist_names",
    "albumNames": "album_names",
}


def _merge_selectors(base: FieldSelectors, overrides: Any) -> FieldSelectors:
    if not isinstance(overrides, Mapping):
        raise InvalidConfig("xpath must be a mapping of selector expressions")
    unknown = set(overrides) - set(SELECTOR_FIELDS)
    if unknown:
        raise InvalidConfig(f"Unknown selector option(s): {', '.join(sorted(unknown))}")
    changes = {SELECTOR_FIELDS[k]: v for k, v in overrides.items()}
    return replace(base, **changes)


def validate_config(config: ProviderConfig) -> ProviderConfig:
    """Check the fields the composer and extractor rely on."""

    parts = urlsplit(config.url) if isinstance(config.url, str) else None
    if parts is None or not parts.scheme or not parts.netloc:
        raise InvalidConfig(f"Base URL must include scheme and host: {config.url!r}")

    if isinstance(config.cut_line, bool) or not isinstance(config.cut_line, int):
        raise InvalidConfig(f"cutLine must be an integer, got {config.cut_line!r}")
    if config.cut_line <= 0:
        raise InvalidConfig(f"cutLine must be positive, got {config.cut_line}")

    for f in fields(FieldSelectors):
        value = getattr(config.selectors, f.name)
        if not isinstance(value, str) or not value.strip():
            raise InvalidConfig(f"Selector {f.name} must be a non-empty string")

    for f in fields(ProviderConfig):
        if f.name.endswith("_key"):
            value = getattr(config, f.name)
            if not isinstance(value, str) or not value.strip():
                raise InvalidConfig(f"Query key {f.name} must be a non-empty string")

    return config


def load_config(options: Optional[Mapping[str, Any]] = None) -> ProviderConfig:
    """Return defaults with caller ``options`` shallowly merged over them.

    ``options`` uses the provider option names (``cutLine``, ``xpath`` ...).
    A partial ``xpath`` mapping only replaces the selectors it names.
    """

    config = ProviderConfig()
    if not options:
        return validate_config(config)

    unknown = set(options) - set(OPTION_FIELDS) - {"xpath"}
    if unknown:
        raise InvalidConfig(f"Unknown option(s): {', '.join(sorted(unknown))}")

    changes: Dict[str, Any] = {
        OPTION_FIELDS[k]: v for k, v in options.items() if k in OPTION_FIELDS
    }
    if "xpath" in options:
        changes["selectors"] = _merge_selectors(config.selectors, options["xpath"])

    return validate_config(replace(config, **changes))
