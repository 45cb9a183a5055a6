"""TypographyMode: the Disabled/Enabled lifecycle around a DirectiveSink.

Enabling scans the text and applies the directives to the sink. Disabling
removes exactly the directives this mode applied, leaving anything else the
host holds in the sink alone.
"""

from __future__ import annotations

import logging
from enum import Enum

from typo_overlay.core.engine import TypographyMapper
from typo_overlay.core.errors import ModeError
from typo_overlay.core.models import Category, Directive, MapperConfig
from typo_overlay.core.overlay import DirectiveSink, NullSink

_log = logging.getLogger(__name__)


class ModeState(str, Enum):
    DISABLED = "DISABLED"
    ENABLED = "ENABLED"


class TypographyMode:
    """Host-facing switch for the typographic overlay.

    Usage::

        overlay = DisplayOverlay()
        mode = TypographyMode(overlay)
        mode.activate(text, load_profile("default"))
        shown = overlay.render(text)
        mode.deactivate()
    """

    def __init__(
        self,
        sink: DirectiveSink | None = None,
        config: MapperConfig | None = None,
        mapper: TypographyMapper | None = None,
    ) -> None:
        self._sink = sink if sink is not None else NullSink()
        self._config = config or MapperConfig()
        self._mapper = mapper or TypographyMapper()
        self._state = ModeState.DISABLED
        self._text: str | None = None
        self._emitted: list[Directive] = []

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def activate(self, text: str, config: MapperConfig | None = None) -> list[Directive]:
        """Scan *text* and apply the full directive set to the sink.

        Activating an already enabled mode rescans from scratch. If the sink
        rejects the new set, the previous display state is put back and the
        mode is left as it was.
        """
        config = config if config is not None else self._config
        directives = list(self._mapper.scan(text, config))
        previous = self._emitted if self._state is ModeState.ENABLED else []
        self._withdraw(previous)
        try:
            self._sink.apply(directives)
        except Exception:
            self._sink.apply(previous)
            raise
        self._config = config
        self._text = text
        self._emitted = directives
        self._state = ModeState.ENABLED
        _log.debug("Mode enabled: %d directive(s)", len(directives))
        return list(directives)

    def deactivate(self) -> list[tuple[int, int]]:
        """Remove the directives applied by this mode; return the cleared spans."""
        if self._state is ModeState.DISABLED:
            return []
        cleared = self._withdraw(self._emitted)
        self._emitted = []
        self._state = ModeState.DISABLED
        _log.debug("Mode disabled: %d span(s) cleared", len(cleared))
        return cleared

    def toggle(self, text: str | None = None) -> ModeState:
        if self._state is ModeState.ENABLED:
            self.deactivate()
        else:
            text = text if text is not None else self._text
            if text is None:
                raise ModeError("No text to scan: pass text when enabling for the first time")
            self.activate(text)
        return self._state

    # ------------------------------------------------------------------
    # Configuration changes while running
    # ------------------------------------------------------------------

    def set_category(self, category: Category, enabled: bool) -> None:
        """Enable or disable one category.

        Only that category's directives are added or removed; the others stay
        applied as they are.
        """
        if not isinstance(category, Category):
            raise ModeError(f"Expected a Category, got {category!r}")
        if self._config.is_enabled(category) == enabled:
            return
        config = self._config.with_category(category, enabled)
        if self._state is ModeState.DISABLED:
            self._config = config
            return
        if enabled:
            only = MapperConfig(frozenset({category}), config.exceptions, False)
            added = list(self._mapper.scan(self._text or "", only))
            self._sink.apply(added)
            self._emitted = sorted(self._emitted + added, key=lambda d: d.start)
        else:
            dropped = [d for d in self._emitted if d.category is category]
            self._withdraw(dropped)
            self._emitted = [d for d in self._emitted if d.category is not category]
        self._config = config

    def reconfigure(self, config: MapperConfig) -> None:
        """Replace the configuration. Prior directives are invalid: full rescan."""
        if self._state is ModeState.ENABLED:
            self.activate(self._text or "", config)
        else:
            self._config = config

    def refresh(self, text: str) -> list[Directive]:
        """The text changed: rescan if enabled, otherwise just remember it."""
        if self._state is ModeState.DISABLED:
            self._text = text
            return []
        return self.activate(text)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    @property
    def state(self) -> ModeState:
        return self._state

    @property
    def enabled(self) -> bool:
        return self._state is ModeState.ENABLED

    @property
    def config(self) -> MapperConfig:
        return self._config

    @property
    def directives(self) -> list[Directive]:
        return list(self._emitted)

    def _withdraw(self, directives: list[Directive]) -> list[tuple[int, int]]:
        if not directives:
            return []
        self._sink.clear(directives)
        return [d.span for d in directives]
