"""Sentence-spacing extension.

Displays the single space after a sentence end as two spaces. A sentence end
is ``.``, ``?`` or ``!`` optionally followed by closing quotes or brackets.
Off unless ``sentence_spacing`` is set in the config.
"""

from __future__ import annotations

from typo_overlay.core.models import Directive, MapperConfig
from typo_overlay.core.rule_base import PatternRule, registry
from typo_overlay.core.text_utils import SENTENCE_CLOSERS, SENTENCE_END_CHARS, SENTENCE_SPACE


@registry.register
class SentenceSpacingRule(PatternRule):
    rule_id = "spacing.sentence"
    name = "Sentence spacing"
    category = None
    priority = 90
    triggers = " "

    def match(self, text: str, pos: int, config: MapperConfig) -> Directive | None:
        # Exactly one space, followed by more text.
        if pos + 1 >= len(text) or text[pos + 1].isspace():
            return None
        i = pos - 1
        while i >= 0 and text[i] in SENTENCE_CLOSERS:
            i -= 1
        if i >= 0 and text[i] in SENTENCE_END_CHARS:
            return self.directive(pos, pos + 1, SENTENCE_SPACE)
        return None
