"""Chart records returned to callers."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .periods import DateWindow


@dataclass(frozen=True)
class ChartEntry:
    """One ranked row of a chart."""

    rank: str
    title: str
    artist: str
    album: str

    def to_dict(self) -> Dict[str, str]:
        return {"rank": self.rank, "title": self.title, "artist": self.artist, "album": self.album}


@dataclass(frozen=True)
class ChartResult:
    """Chart entries together with the window that was actually requested."""

    window: DateWindow
    entries: List[ChartEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Return the ``{"data": [...], "dates": {...}}`` JSON shape."""

        return {
            "data": [e.to_dict() for e in self.entries],
            "dates": self.window.to_dict(),
        }
