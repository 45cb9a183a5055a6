"""PatternRule base class and the RuleRegistry rules register into."""

from __future__ import annotations

from abc import ABC, abstractmethod

from typo_overlay.core.models import Category, Directive, MapperConfig


class PatternRule(ABC):
    """Abstract base for all punctuation rules.

    A rule inspects one position of the text and either claims it (returning
    a Directive) or declines (returning None). Rules are evaluated in
    ascending ``priority`` and the first one to claim a position wins.
    """

    #: Stable unique identifier, e.g. "quotes.single.inner"
    rule_id: str

    #: Human-readable name
    name: str = ""

    #: Category gating this rule. None means the sentence-spacing extension.
    category: Category | None = None

    #: Lower runs first.
    priority: int = 100

    #: Characters that can start a match. The engine only asks the rule about
    #: positions holding one of these.
    triggers: str = ""

    @abstractmethod
    def match(self, text: str, pos: int, config: MapperConfig) -> Directive | None:
        """Return a Directive if this rule claims ``text[pos]``.

        Args:
            text: The full text being scanned. Never modified.
            pos: Offset of a trigger character.
            config: The scan's configuration snapshot.

        Returns:
            A Directive starting at ``pos``, or None.
        """

    def directive(self, start: int, end: int, replacement: str) -> Directive:
        return Directive(start, end, replacement, rule_id=self.rule_id, category=self.category)


class RuleRegistry:
    """Ordered collection of PatternRule classes.

    Registration rejects a reused ``rule_id`` and a rule without triggers, so
    a typo in a rule module fails at import time rather than silently
    shadowing another rule or never running.
    """

    def __init__(self) -> None:
        self._rules: dict[str, type[PatternRule]] = {}

    def register(self, cls: type[PatternRule]) -> type[PatternRule]:
        """Register a PatternRule class. Can be used as a decorator."""
        existing = self._rules.get(cls.rule_id)
        if existing is not None and existing is not cls:
            raise ValueError(
                f"Rule id {cls.rule_id!r} already registered by {existing.__qualname__}"
            )
        if not cls.triggers:
            raise ValueError(f"Rule {cls.rule_id!r} declares no trigger characters")
        self._rules[cls.rule_id] = cls
        return cls

    def get(self, rule_id: str) -> type[PatternRule] | None:
        return self._rules.get(rule_id)

    def all_ids(self) -> list[str]:
        return [cls.rule_id for cls in self.all_rules()]

    def all_rules(self) -> list[type[PatternRule]]:
        """Registered rules in evaluation order (priority, then rule_id)."""
        return sorted(self._rules.values(), key=lambda r: (r.priority, r.rule_id))

    def for_config(self, config: MapperConfig) -> list[type[PatternRule]]:
        """The rules *config* enables, in evaluation order."""
        return [cls for cls in self.all_rules() if config.is_enabled(cls.category)]


# Shared instance the rule modules register into
registry = RuleRegistry()
