"""Pytest fixtures shared across all tests."""

from __future__ import annotations

import pandas as pd
import pytest

from typo_overlay.core.models import MapperConfig
from typo_overlay.core.overlay import DisplayOverlay

#: Exercises every category at least once.
SAMPLE_TEXT = "He said \"it's a '90s thing,\" she said--really."


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_TEXT


@pytest.fixture
def default_config() -> MapperConfig:
    return MapperConfig()


@pytest.fixture
def overlay() -> DisplayOverlay:
    return DisplayOverlay()


@pytest.fixture
def prose_df() -> pd.DataFrame:
    """A small DataFrame mixing prose, plain values and missing cells."""
    return pd.DataFrame(
        {
            "Titre": [
                '"Hello," she said',   # two double quotes
                "rock 'n' roll",       # opening + closing single quotes
                "plain",
                None,                  # missing cell
            ],
            "Pages": ["1--10", "12---", "7", "3----4"],
            "Count": [1, 2, 3, 4],
        }
    )
