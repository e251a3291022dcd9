"""Shared fixtures: a fixed clock and a chart page shaped like Melon's table."""
from __future__ import annotations

from datetime import date
from typing import Callable, List, Tuple

import pytest

# Wednesday
FIXED_TODAY = date(2024, 1, 10)

ROW = """
<tr>
  <td><div class="wrap_song_info">
    <div class="ellipsis rank01"><span><a href="#">{title}</a></span></div>
  </div></td>
  <td><div class="wrap_song_info">
    <div class="ellipsis rank02"><span><a href="#">{artist}</a></span></div>
  </div></td>
  <td><div class="wrap_song_info">
    <div class="ellipsis rank03"><a href="#">  {album}  </a></div>
  </div></td>
</tr>
"""


def render_chart(rows: List[Tuple[str, str, str]]) -> str:
    body = "".join(ROW.format(title=t, artist=a, album=al) for t, a, al in rows)
    return f"<html><body><table><tbody>{body}</tbody></table></body></html>"


@pytest.fixture
def today() -> Callable[[], date]:
    return lambda: FIXED_TODAY


@pytest.fixture
def chart_rows() -> List[Tuple[str, str, str]]:
    return [(f"Song {i}", f"Artist {i}", f"Album {i}") for i in range(1, 101)]


@pytest.fixture
def chart_html(chart_rows) -> str:
    return render_chart(chart_rows)


@pytest.fixture
def render() -> Callable[[List[Tuple[str, str, str]]], str]:
    return render_chart
