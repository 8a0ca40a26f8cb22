from __future__ import annotations

from .resolution import ResolveReport

"""SUMMARY line rendering for the resolve command."""


def render_summary_line(report: ResolveReport) -> str:
    """Render the SUMMARY line for a ResolveReport.

    Format:
    SUMMARY targets={total} resolved={resolved} failed={failed} sheets={matched}

    Examples:
        >>> from src.services.resolution import ResolveReport, TargetOutcome
        >>> report = ResolveReport([TargetOutcome("Orders", ("Data1", "Data2"))])
        >>> render_summary_line(report)
        'SUMMARY targets=1 resolved=1 failed=0 sheets=2'
    """
    return (
        f"SUMMARY targets={len(report.outcomes)} "
        f"resolved={report.resolved} "
        f"failed={report.failed} "
        f"sheets={report.matched_sheets}"
    )
