"""typo_overlay: display straight quotes and hyphen runs as typographic glyphs.

The text itself is never modified. The mapper produces directives, "show this
replacement over this span", which a host display layer applies and reverts.
"""

from typo_overlay.core.config import ConfigLoader, list_profiles, load_profile
from typo_overlay.core.engine import DirectiveScan, TypographyMapper, scan
from typo_overlay.core.errors import ConfigError, ModeError, OverlapError, TypoOverlayError
from typo_overlay.core.models import Category, Directive, MapperConfig
from typo_overlay.core.mode import ModeState, TypographyMode
from typo_overlay.core.overlay import DirectiveSink, DisplayOverlay, NullSink, render

__version__ = "0.1.0"

__all__ = [
    "Category",
    "ConfigError",
    "ConfigLoader",
    "Directive",
    "DirectiveScan",
    "DirectiveSink",
    "DisplayOverlay",
    "MapperConfig",
    "ModeError",
    "ModeState",
    "NullSink",
    "OverlapError",
    "TypoOverlayError",
    "TypographyMapper",
    "TypographyMode",
    "list_profiles",
    "load_profile",
    "render",
    "scan",
]
