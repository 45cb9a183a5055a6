"""TypographyMapper: runs punctuation rules over a text.

The mapper is stateless and never modifies the text. It returns a
DirectiveScan, a lazy iterable; callers feed the directives into a
DirectiveSink (see core/overlay.py).
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Iterator

_log = logging.getLogger(__name__)

# Import rules module to trigger all @registry.register decorators
import typo_overlay.core.rules  # noqa: F401
from typo_overlay.core.models import Category, Directive, MapperConfig
from typo_overlay.core.rule_base import PatternRule, RuleRegistry, registry
from typo_overlay.core.text_utils import DEFAULT_EXCEPTIONS


class DirectiveScan:
    """Lazy, restartable sequence of directives for one text and config.

    Every ``iter()`` performs a fresh left-to-right pass, so the scan can be
    consumed more than once and always yields the same directives.
    """

    def __init__(self, text: str, config: MapperConfig, rules: list[PatternRule]) -> None:
        self._text = text
        self._config = config
        self._by_trigger: dict[str, list[PatternRule]] = {}
        for rule in rules:
            for ch in rule.triggers:
                self._by_trigger.setdefault(ch, []).append(rule)
        if self._by_trigger:
            chars = "".join(re.escape(ch) for ch in sorted(self._by_trigger))
            self._trigger_re: re.Pattern[str] | None = re.compile(f"[{chars}]")
        else:
            self._trigger_re = None

    @property
    def text(self) -> str:
        return self._text

    @property
    def config(self) -> MapperConfig:
        return self._config

    def __iter__(self) -> Iterator[Directive]:
        if self._trigger_re is None:
            return
        text = self._text
        pos = 0
        count = 0
        while True:
            m = self._trigger_re.search(text, pos)
            if m is None:
                break
            i = m.start()
            pos = i + 1
            for rule in self._by_trigger[text[i]]:
                directive = self._try(rule, i)
                if directive is not None:
                    count += 1
                    pos = directive.end
                    yield directive
                    break
        _log.debug("Scanned %d chars: %d directive(s)", len(text), count)

    def _try(self, rule: PatternRule, pos: int) -> Directive | None:
        try:
            directive = rule.match(self._text, pos, self._config)
        except Exception as exc:
            # Never fail the whole pass because one rule fails
            _log.exception("Rule %s failed at offset %d: %s", rule.rule_id, pos, exc)
            return None
        if directive is not None and (directive.start != pos or directive.end <= pos):
            _log.error(
                "Rule %s returned span %r at offset %d; ignored",
                rule.rule_id,
                directive.span,
                pos,
            )
            return None
        return directive


class TypographyMapper:
    """Map ASCII punctuation to typographic display directives.

    Usage::

        mapper = TypographyMapper()
        directives = list(mapper.scan(text, MapperConfig()))
    """

    def __init__(self, rule_registry: RuleRegistry | None = None) -> None:
        self._registry = rule_registry or registry

    def rules_for(self, config: MapperConfig) -> list[PatternRule]:
        """Instantiate the enabled rules, in evaluation order."""
        return [cls() for cls in self._registry.for_config(config)]

    def scan(self, text: str, config: MapperConfig | None = None) -> DirectiveScan:
        """Return the directives for *text* under *config*.

        Args:
            text: Text to scan. Read only.
            config: Configuration snapshot. Defaults to ``MapperConfig()``,
                i.e. all four categories, default exceptions, no sentence
                spacing.

        Raises:
            TypeError: if *text* is not a str.
        """
        if not isinstance(text, str):
            raise TypeError(f"text must be str, not {type(text).__name__}")
        if config is None:
            config = MapperConfig()
        return DirectiveScan(text, config, self.rules_for(config))


_default_mapper = TypographyMapper()


def scan(
    text: str,
    enabled_categories: Iterable[Category | str] | None = None,
    exceptions: Iterable[str] | None = None,
    sentence_spacing: bool = False,
) -> DirectiveScan:
    """Convenience wrapper building the MapperConfig from plain arguments."""
    config = MapperConfig(
        enabled_categories=frozenset(Category)
        if enabled_categories is None
        else frozenset(Category.parse(c) for c in enabled_categories),
        exceptions=DEFAULT_EXCEPTIONS if exceptions is None else tuple(exceptions),
        sentence_spacing=sentence_spacing,
    )
    return _default_mapper.scan(text, config)
