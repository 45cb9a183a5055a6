"""Tests for the TypographyMode lifecycle."""

from __future__ import annotations

import pytest

from typo_overlay.core.engine import TypographyMapper
from typo_overlay.core.errors import ModeError, OverlapError
from typo_overlay.core.models import Category, Directive, MapperConfig
from typo_overlay.core.mode import ModeState, TypographyMode


@pytest.fixture
def mode(overlay) -> TypographyMode:
    return TypographyMode(overlay)


class TestTransitions:
    def test_starts_disabled(self, mode, overlay):
        assert mode.state is ModeState.DISABLED
        assert not mode.enabled
        assert len(overlay) == 0

    def test_activate_applies_full_set(self, mode, overlay, sample_text):
        directives = mode.activate(sample_text)
        assert mode.state is ModeState.ENABLED
        assert overlay.directives == directives
        assert len(directives) == 5

    def test_deactivate_returns_cleared_spans(self, mode, overlay, sample_text):
        directives = mode.activate(sample_text)
        cleared = mode.deactivate()
        assert cleared == [d.span for d in directives]
        assert len(overlay) == 0
        assert mode.state is ModeState.DISABLED

    def test_deactivate_when_disabled_is_noop(self, mode):
        assert mode.deactivate() == []

    def test_toggle_idempotence(self, mode, overlay, sample_text):
        first = mode.activate(sample_text)
        mode.deactivate()
        second = mode.activate(sample_text)
        assert first == second
        assert overlay.directives == second

    def test_deactivate_leaves_host_directives(self, mode, overlay, sample_text):
        host = Directive(0, 2, "[He]")
        overlay.apply([host])
        mode.activate(sample_text)
        mode.deactivate()
        assert overlay.directives == [host]

    def test_reactivate_rescans(self, mode, overlay):
        mode.activate("a--b")
        mode.activate("a---b")
        assert overlay.directives == [Directive(1, 4, "—")]

    def test_failed_activate_applies_nothing(self, mode, overlay):
        text = '"hi" there, a--b'
        host = Directive(14, 15, "X")
        overlay.apply([host])
        with pytest.raises(OverlapError):
            mode.activate(text)
        assert overlay.directives == [host]
        assert mode.state is ModeState.DISABLED
        assert mode.directives == []
        assert mode.deactivate() == []
        assert overlay.directives == [host]

    def test_failed_reactivate_restores_previous(self, mode, overlay):
        previous = mode.activate('"hi"')
        host = Directive(6, 7, "X")
        overlay.apply([host])
        with pytest.raises(OverlapError):
            mode.activate('"hi" a--b')
        assert mode.state is ModeState.ENABLED
        assert mode.directives == previous
        assert overlay.directives == previous + [host]

    def test_toggle(self, mode, overlay):
        assert mode.toggle("a--b") is ModeState.ENABLED
        assert mode.toggle() is ModeState.DISABLED
        assert mode.toggle() is ModeState.ENABLED
        assert overlay.directives == [Directive(1, 3, "–")]

    def test_toggle_without_text(self, mode):
        with pytest.raises(ModeError):
            mode.toggle()

    def test_works_without_sink(self, sample_text):
        mode = TypographyMode()
        assert len(mode.activate(sample_text)) == 5
        assert len(mode.deactivate()) == 5


class TestConfigurationChanges:
    def test_disable_category_removes_only_its_directives(self, mode, overlay, sample_text):
        mode.activate(sample_text)
        mode.set_category(Category.SINGLE_QUOTE, False)
        replacements = [d.replacement for d in overlay.directives]
        assert replacements == ["“", "”", "–"]
        assert mode.directives == overlay.directives

    def test_enable_category_adds_only_its_directives(self, mode, overlay, sample_text):
        config = MapperConfig().with_category(Category.EN_DASH, False)
        mode.activate(sample_text, config)
        assert "–" not in [d.replacement for d in overlay.directives]
        mode.set_category(Category.EN_DASH, True)
        assert overlay.directives == list(TypographyMapper().scan(sample_text))
        assert mode.directives == overlay.directives

    def test_set_category_while_disabled_only_updates_config(self, mode, overlay):
        mode.set_category(Category.EM_DASH, False)
        assert Category.EM_DASH not in mode.config.enabled_categories
        assert len(overlay) == 0
        mode.activate("a---b")
        assert len(overlay) == 0

    def test_set_category_rejects_tokens(self, mode):
        with pytest.raises(ModeError):
            mode.set_category("em_dash", False)

    def test_reconfigure_rescans(self, mode, overlay):
        mode.activate("One. Two")
        assert len(overlay) == 0
        mode.reconfigure(MapperConfig(sentence_spacing=True))
        assert overlay.directives == [Directive(4, 5, "  ")]

    def test_failed_reconfigure_keeps_config(self, overlay):
        dashes_only = MapperConfig(enabled_categories=frozenset({Category.EN_DASH}))
        mode = TypographyMode(overlay, dashes_only)
        mode.activate("'x' a--b")
        host = Directive(0, 1, "X")
        overlay.apply([host])
        with pytest.raises(OverlapError):
            mode.reconfigure(MapperConfig())
        assert mode.config == dashes_only
        assert overlay.directives == [host, Directive(5, 7, "–")]

    def test_failed_enable_category_keeps_config(self, overlay):
        dashes_only = MapperConfig(enabled_categories=frozenset({Category.EN_DASH}))
        mode = TypographyMode(overlay, dashes_only)
        emitted = mode.activate("'x' a--b")
        overlay.apply([Directive(0, 1, "X")])
        with pytest.raises(OverlapError):
            mode.set_category(Category.SINGLE_QUOTE, True)
        assert not mode.config.is_enabled(Category.SINGLE_QUOTE)
        assert mode.directives == emitted
        assert len(overlay) == 2

    def test_refresh_after_edit(self, mode, overlay):
        mode.activate("a--b")
        mode.refresh("'tis")
        assert overlay.directives == [Directive(0, 1, "’")]

    def test_refresh_while_disabled_remembers_text(self, mode, overlay):
        assert mode.refresh("a--b") == []
        assert len(overlay) == 0
        mode.toggle()
        assert overlay.directives == [Directive(1, 3, "–")]

