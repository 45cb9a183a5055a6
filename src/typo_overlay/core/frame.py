"""Apply the mapper to the text columns of a DataFrame.

``scan_frame`` returns one row per directive; ``render_frame`` returns a
display copy of the frame. The input frame is never modified.
"""

from __future__ import annotations

import logging

import pandas as pd

from typo_overlay.core.engine import TypographyMapper
from typo_overlay.core.models import MapperConfig
from typo_overlay.core.overlay import render

_log = logging.getLogger(__name__)

DIRECTIVE_COLUMNS = [
    "row",
    "col",
    "start",
    "end",
    "original",
    "replacement",
    "rule_id",
    "category",
]

_default_mapper = TypographyMapper()


def _text_columns(df: pd.DataFrame, columns: list[str] | None) -> list[str]:
    if columns is not None:
        missing = [c for c in columns if c not in df.columns]
        if missing:
            raise KeyError(f"Column(s) not in frame: {', '.join(map(str, missing))}")
        return list(columns)
    return [
        c
        for c in df.columns
        if pd.api.types.is_object_dtype(df[c]) or pd.api.types.is_string_dtype(df[c])
    ]


def scan_frame(
    df: pd.DataFrame,
    config: MapperConfig | None = None,
    columns: list[str] | None = None,
    mapper: TypographyMapper | None = None,
) -> pd.DataFrame:
    """Scan every string cell and return the directives as a table.

    Args:
        df: Source data. Not modified.
        config: Mapper configuration; defaults to ``MapperConfig()``.
        columns: Columns to scan. Defaults to the object/string columns.
        mapper: Mapper to use; defaults to a shared TypographyMapper.

    Returns:
        DataFrame with columns ``DIRECTIVE_COLUMNS``. ``row`` is the frame
        index label of the cell.
    """
    mapper = mapper or _default_mapper
    config = config or MapperConfig()
    records: list[dict] = []
    for col in _text_columns(df, columns):
        for row_idx, val in df[col].items():
            if not isinstance(val, str) or pd.isna(val):
                continue
            for d in mapper.scan(val, config):
                records.append(
                    {
                        "row": row_idx,
                        "col": col,
                        "start": d.start,
                        "end": d.end,
                        "original": val[d.start:d.end],
                        "replacement": d.replacement,
                        "rule_id": d.rule_id,
                        "category": d.category.value if d.category else "sentence_spacing",
                    }
                )
    _log.debug("scan_frame: %d directive(s) over %d row(s)", len(records), len(df))
    return pd.DataFrame.from_records(records, columns=DIRECTIVE_COLUMNS)


def render_frame(
    df: pd.DataFrame,
    config: MapperConfig | None = None,
    columns: list[str] | None = None,
    mapper: TypographyMapper | None = None,
) -> pd.DataFrame:
    """Return a copy of *df* with string cells shown in typographic form."""
    mapper = mapper or _default_mapper
    config = config or MapperConfig()
    out = df.copy()
    for col in _text_columns(df, columns):
        out[col] = df[col].map(
            lambda v: render(v, mapper.scan(v, config)) if isinstance(v, str) else v
        )
    return out
