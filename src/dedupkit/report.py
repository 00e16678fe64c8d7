"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

report.py
Renders a DedupeReport as JSON or as line-oriented plain text.
"""
import json
from typing import Any, Dict, List

from dedupkit.core.models import DedupeReport, Action


class ReportRenderer:

    @staticmethod
    def to_dict(report: DedupeReport) -> Dict[str, Any]:
        """Structured form of the report (field names are part of the output contract)."""
        data = {
            "root_path": report.root_path,
            "method": report.key_strategy.value,
            "duplicates": [
                {
                    "key": group.key,
                    "keep": group.keep,
                    "duplicates": group.duplicates,
                    "count": group.count,
                }
                for group in report.groups
            ],
            "count": report.count,
            "to_delete": report.to_delete,
            "dry_run": report.dry_run,
            "skipped": len(report.skipped),
            "interrupted": report.interrupted,
        }
        if not report.preview_mode:
            data["removals"] = [
                {"path": o.path, "removed": o.removed, "error": o.error}
                for o in report.removal_outcomes
            ]
        return data

    @staticmethod
    def render_json(report: DedupeReport) -> str:
        return json.dumps({"success": True, "data": ReportRenderer.to_dict(report)}, indent=2)

    @staticmethod
    def render_error_json(message: str) -> str:
        return json.dumps({"success": False, "error": message}, indent=2)

    @staticmethod
    def render_plain(report: DedupeReport, include_groups: bool = True) -> str:
        """include_groups=False leaves out the group listing (already shown to the user)."""
        lines: List[str] = []

        for group in (report.groups if include_groups else ()):
            lines.append("")
            lines.append(f"Duplicate group (key: {group.key}):")
            lines.append(f"  Keep: {group.keep}")
            for path in group.duplicates:
                lines.append(f"  Duplicate: {path}")

        if report.action == Action.DELETE and report.to_delete > 0:
            lines.append("")
            if report.preview_mode:
                lines.append("DRY RUN - Would delete:")
                for group in report.groups:
                    for path in group.duplicates:
                        lines.append(f"  Would delete: {path}")
            else:
                lines.append("Deleting duplicates:")
                for outcome in report.removal_outcomes:
                    if outcome.removed:
                        lines.append(f"  Deleted: {outcome.path}")
                    else:
                        lines.append(f"  Failed to delete {outcome.path}: {outcome.error}")
                if report.interrupted:
                    lines.append("  Stopped before all duplicates were processed.")

        lines.append("")
        lines.append(f"Found {report.count} duplicate groups")
        if report.skipped:
            lines.append(f"Skipped {len(report.skipped)} unreadable entries")

        return "\n".join(lines)
