"""Exception types raised by typo_overlay."""

from __future__ import annotations


class TypoOverlayError(Exception):
    """Base class for all library errors."""


class ConfigError(TypoOverlayError, ValueError):
    """Malformed configuration, detected when it is loaded."""


class OverlapError(TypoOverlayError):
    """A sink was asked to hold two directives covering the same characters."""


class ModeError(TypoOverlayError):
    """Invalid use of the display mode lifecycle."""
