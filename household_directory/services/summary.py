from __future__ import annotations

from ..models.ingest_result import IngestResult

"""SUMMARY line rendering for an ingestion event."""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # Avoid scientific notation for very small numbers
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_body(result: IngestResult) -> str:
    """The key=value part of the SUMMARY line, without the label.

    The CLI logs this through log_summary(), whose formatter adds the label.
    """
    return (
        f"source={result.source} "
        f"rows={result.total_rows} "
        f"households={result.households} "
        f"today={result.events_today} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )


def render_summary_line(result: IngestResult) -> str:
    """Render a SUMMARY line from an IngestResult.

    Format:
    SUMMARY source={source} rows={rows} households={households} today={events} elapsed_sec={elapsed}

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> r = IngestResult(source="dir.xlsx", records=[], start_time=t, end_time=t, elapsed_seconds=0.0)
        >>> render_summary_line(r)
        'SUMMARY source=dir.xlsx rows=0 households=0 today=0 elapsed_sec=0'
    """
    return f"SUMMARY {render_summary_body(result)}"
