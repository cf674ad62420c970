"""Plain-text rendering of a replacement run."""

from __future__ import annotations

from typing import TYPE_CHECKING

from imgmatch.domain.matching import MatchStatus

if TYPE_CHECKING:
    from imgmatch.domain.matching import MatchResult, RunReport

_STATUS_WIDTH = 14

_FIXED_LABELS: dict[MatchStatus, str] = {
    MatchStatus.MATCHED_UNCHANGED: "already set",
    MatchStatus.NO_MATCH: "no match",
    MatchStatus.SKIPPED_UNSUPPORTED: "skipped (no img field)",
}


def status_label(result: MatchResult, *, dry_run: bool, import_first: bool) -> str:
    if result.status is MatchStatus.MATCHED_NEW:
        action = "import+update" if import_first else "update"
        return f"would {action}" if dry_run else action
    return _FIXED_LABELS[result.status]


def render_summary(report: RunReport) -> list[str]:
    lines = [
        f"Collection: {report.collection_id}",
        f"Folder: {report.folder}",
        f"Mode: {'Dry Run' if report.dry_run else 'Applied'}",
        f"Docs scanned: {report.scanned}",
        f"Matched: {report.matched}",
    ]
    if not report.dry_run:
        lines.append(f"Updated: {report.updated}")
        if report.failed:
            lines.append(f"Failed: {report.failed}")
    return lines


def render_result(result: MatchResult, *, dry_run: bool, import_first: bool) -> list[str]:
    label = status_label(result, dry_run=dry_run, import_first=import_first)
    line = f"{label.ljust(_STATUS_WIDTH)} | {result.record_name}"
    if result.path is not None:
        line = f"{line} -> {result.path}"
    lines = [line]
    if result.candidates:
        lines.append(f"{' ' * _STATUS_WIDTH}   candidates: {', '.join(result.candidates)}")
    return lines


def render_report(report: RunReport) -> str:
    lines = render_summary(report)
    lines.append("-" * 40)
    for result in report.results:
        lines.extend(
            render_result(result, dry_run=report.dry_run, import_first=report.import_first)
        )
    return "\n".join(lines)
