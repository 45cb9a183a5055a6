"""Auto-import all rule modules so their @registry.register decorators fire."""

from typo_overlay.core.rules import (  # noqa: F401
    dashes,
    quotes,
    spacing,
)
