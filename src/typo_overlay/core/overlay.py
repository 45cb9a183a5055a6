"""Directive sinks: where the host's display layer receives directives.

A sink only ever holds presentation state. Nothing here writes to the text;
``render()`` builds a new display string and leaves its input untouched.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from bisect import bisect_left, insort
from typing import Iterable

from typo_overlay.core.errors import OverlapError
from typo_overlay.core.models import Directive
from typo_overlay.core.text_utils import KNOWN_REPLACEMENTS

_log = logging.getLogger(__name__)


def render(text: str, directives: Iterable[Directive]) -> str:
    """Return *text* as displayed with *directives* applied.

    Raises:
        OverlapError: if two directives overlap.
        ValueError: if a directive falls outside the text.
    """
    parts: list[str] = []
    cursor = 0
    for d in sorted(directives, key=lambda d: d.start):
        if d.start < cursor:
            raise OverlapError(f"Directive {d.span} overlaps the previous one")
        if d.end > len(text) or d.start < 0 or d.end < d.start:
            raise ValueError(f"Directive {d.span} is outside text of length {len(text)}")
        parts.append(text[cursor:d.start])
        parts.append(d.replacement)
        cursor = d.end
    parts.append(text[cursor:])
    return "".join(parts)


class DirectiveSink(ABC):
    """Host display layer: accepts and reverts display directives."""

    @abstractmethod
    def apply(self, directives: Iterable[Directive]) -> None: ...

    @abstractmethod
    def clear(self, directives: Iterable[Directive] | None = None) -> list[tuple[int, int]]:
        """Remove *directives* (all held ones if None); return cleared spans."""


class NullSink(DirectiveSink):
    """No-op sink for use when no display is attached."""

    def apply(self, directives: Iterable[Directive]) -> None:
        pass

    def clear(self, directives: Iterable[Directive] | None = None) -> list[tuple[int, int]]:
        return []


class DisplayOverlay(DirectiveSink):
    """In-memory sink keyed by start offset.

    May also hold directives the host placed itself; ``clear_known()`` only
    drops the ones carrying a replacement this library emits.
    """

    def __init__(self) -> None:
        self._by_start: dict[int, Directive] = {}
        self._starts: list[int] = []  # sorted

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def apply(self, directives: Iterable[Directive]) -> None:
        """Hold all of *directives*, or none of them if one overlaps."""
        applied: list[Directive] = []
        try:
            for d in directives:
                self._check_free(d)
                self._by_start[d.start] = d
                insort(self._starts, d.start)
                applied.append(d)
        except OverlapError:
            for d in applied:
                self._remove(d.start)
            raise
        _log.debug("Applied %d directive(s); %d held", len(applied), len(self._starts))

    def clear(self, directives: Iterable[Directive] | None = None) -> list[tuple[int, int]]:
        if directives is None:
            cleared = [d.span for d in self.directives]
            self._by_start.clear()
            self._starts.clear()
            return cleared
        cleared = []
        for d in directives:
            if self._by_start.get(d.start) == d:
                self._remove(d.start)
                cleared.append(d.span)
        return cleared

    def clear_known(self) -> list[tuple[int, int]]:
        """Remove every held directive whose replacement this library emits."""
        return self.clear([d for d in self.directives if d.replacement in KNOWN_REPLACEMENTS])

    def _remove(self, start: int) -> None:
        del self._by_start[start]
        idx = bisect_left(self._starts, start)
        del self._starts[idx]

    def _check_free(self, d: Directive) -> None:
        if d.start in self._by_start:
            raise OverlapError(f"Directive {d.span} overlaps {self._by_start[d.start].span}")
        idx = bisect_left(self._starts, d.start)
        if idx < len(self._starts) and self._starts[idx] < d.end:
            raise OverlapError(f"Directive {d.span} overlaps {self._by_start[self._starts[idx]].span}")
        if idx > 0 and self._by_start[self._starts[idx - 1]].end > d.start:
            raise OverlapError(
                f"Directive {d.span} overlaps {self._by_start[self._starts[idx - 1]].span}"
            )

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    @property
    def directives(self) -> list[Directive]:
        """Held directives, sorted by start offset."""
        return [self._by_start[s] for s in self._starts]

    def __len__(self) -> int:
        return len(self._starts)

    def render(self, text: str) -> str:
        return render(text, self.directives)
