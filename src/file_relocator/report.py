"""
Run reporting: console lines and optional report files.

This module is responsible for:
- Formatting one console line per processed file and per traversal warning
- Formatting the final summary line
- Exporting a run report as CSV, or as XLSX via openpyxl
"""

import csv
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Union

import openpyxl

from .types import MoveResult, MoveStatus, RunReport, TraversalWarning

logger = logging.getLogger(__name__)

REPORT_COLUMNS = [
    "timestamp", "status", "error_kind", "source_path", "dest_path", "message"
]

# Console/report labels per status
STATUS_LABELS = {
    MoveStatus.MOVED: "MOVED",
    MoveStatus.DRY_RUN: "WOULD_MOVE",
    MoveStatus.SKIPPED_MISSING: "SKIPPED",
    MoveStatus.FAILED: "FAILED",
}
WARNING_LABEL = "WARNING"


def format_result(result: MoveResult) -> str:
    """Format a move result as a single console line."""
    line = f"{STATUS_LABELS[result.status]}: {result.source_path} -> {result.dest_path or '-'}"
    if result.failed:
        kind = result.error_kind.value if result.error_kind else "other"
        line += f" ({kind}: {result.message})"
    elif result.status == MoveStatus.SKIPPED_MISSING:
        line += f" ({result.message})"
    return line


def format_warning(warning: TraversalWarning) -> str:
    """Format a traversal warning as a single console line."""
    return f"{WARNING_LABEL}: {warning.path} ({warning.message})"


def format_summary(report: RunReport) -> str:
    """Format the final summary line of a run."""
    prefix = "[DRY RUN] " if report.dry_run else ""
    return (
        f"{prefix}Summary: moved={report.moved_count} skipped={report.skipped_count} "
        f"failed={report.failed_count} warnings={len(report.warnings)}"
    )


def build_rows(report: RunReport) -> List[List[str]]:
    """Build report rows (without header), results first, then warnings."""
    timestamp = datetime.now().isoformat(timespec="seconds")
    rows = []

    for result in report.results:
        rows.append([
            timestamp,
            STATUS_LABELS[result.status],
            result.error_kind.value if result.error_kind else "",
            result.source_path,
            result.dest_path or "",
            result.message,
        ])

    for warning in report.warnings:
        rows.append([timestamp, WARNING_LABEL, "", warning.path, "", warning.message])

    return rows


def write_report(report: RunReport, report_path: Union[str, Path]) -> Path:
    """
    Write the run report to a file.

    Paths ending in .xlsx are written as an Excel workbook; anything else
    is written as CSV.

    Args:
        report: The run report to export
        report_path: Destination file (parent directories are created)

    Returns:
        The path written

    Raises:
        OSError: If the file cannot be written
    """
    path = Path(report_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    rows = build_rows(report)

    if path.suffix.lower() == ".xlsx":
        workbook = openpyxl.Workbook()
        worksheet = workbook.active
        worksheet.title = "Relocation"
        worksheet.append(REPORT_COLUMNS)
        for row in rows:
            worksheet.append(row)
        workbook.save(path)
    else:
        with path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(REPORT_COLUMNS)
            writer.writerows(rows)

    logger.info(f"Wrote report with {len(rows)} rows: {path}")
    return path
