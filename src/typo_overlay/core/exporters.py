"""Exporters for directive tables: CSV (always ;) and a TXT summary report."""

from __future__ import annotations

import csv
import unicodedata
from collections import Counter
from datetime import datetime
from pathlib import Path

import pandas as pd

from typo_overlay.core.frame import DIRECTIVE_COLUMNS


def _glyph_label(s: str) -> str:
    if len(s) == 1:
        return f"U+{ord(s):04X} ({unicodedata.name(s, '?')})"
    return repr(s)


# ---------------------------------------------------------------------------
# Directives CSV export (ALWAYS ; delimiter)
# ---------------------------------------------------------------------------


class DirectivesCSVExporter:
    """Export a ``scan_frame`` table to CSV.

    - Delimiter: ;
    - Quote char: "
    - Quoting: QUOTE_MINIMAL (cells with ; or " or newline are quoted)
    - Encoding: UTF-8 or UTF-8-BOM
    """

    def export(self, table: pd.DataFrame, path: Path, bom: bool = False) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        encoding = "utf-8-sig" if bom else "utf-8"

        with path.open("w", encoding=encoding, newline="") as f:
            writer = csv.writer(f, delimiter=";", quotechar='"', quoting=csv.QUOTE_MINIMAL)
            writer.writerow(DIRECTIVE_COLUMNS)
            for row in table[DIRECTIVE_COLUMNS].itertuples(index=False, name=None):
                writer.writerow(["" if pd.isna(v) else str(v) for v in row])


# ---------------------------------------------------------------------------
# TXT report
# ---------------------------------------------------------------------------


class TXTReporter:
    """Generate a human-readable summary of a directive table."""

    #: Detail lines listed at most
    max_details = 200

    def export(self, table: pd.DataFrame, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(table), encoding="utf-8")

    def render(self, table: pd.DataFrame) -> str:
        lines: list[str] = []
        ts = datetime.now().strftime("%Y-%m-%d %H:%M")

        lines.append("=" * 72)
        lines.append("Typographic punctuation report")
        lines.append(f"Generated: {ts}")
        lines.append("=" * 72)
        lines.append("")

        # Summary counts
        cat_counts = Counter(table["category"])
        lines.append("Summary")
        lines.append("-" * 40)
        for cat, cnt in sorted(cat_counts.items()):
            lines.append(f"  {cat:<20} {cnt:>5}")
        lines.append(f"  {'TOTAL':<20} {len(table):>5}")
        lines.append("")

        col_counts = Counter(table["col"])
        if col_counts:
            lines.append("Columns")
            lines.append("-" * 40)
            for col, cnt in col_counts.most_common(10):
                lines.append(f"  {str(col):<35} {cnt:>5}")
            lines.append("")

        glyph_counts = Counter(table["replacement"])
        if glyph_counts:
            lines.append("Glyphs")
            lines.append("-" * 40)
            for glyph, cnt in glyph_counts.most_common():
                lines.append(f"  {_glyph_label(glyph):<45} {cnt:>5}")
            lines.append("")

        lines.append("Details")
        lines.append("=" * 72)
        for rec in table.head(self.max_details).itertuples(index=False):
            lines.append(
                f"  row {rec.row}, «{rec.col}» [{rec.start}:{rec.end}] "
                f"{rec.original!r} → {rec.replacement!r} ({rec.rule_id})"
            )
        if len(table) > self.max_details:
            lines.append(f"  ... {len(table) - self.max_details} more")

        return "\n".join(lines) + "\n"
