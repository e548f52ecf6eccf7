"""Plain-text rendering of outcomes, statuses and dispatch reports."""

from sshsession_mcp.models import (
    DispatchReport,
    OutcomeStatus,
    SessionOutcome,
    SessionStatus,
)

_OUTCOME_ICONS = {
    OutcomeStatus.CONNECTED: "+",
    OutcomeStatus.ALREADY_CONNECTED: "=",
    OutcomeStatus.FAILED: "!",
    OutcomeStatus.REMOVED: "-",
    OutcomeStatus.NOT_FOUND: "?",
}


def format_outcomes(outcomes: list[SessionOutcome]) -> str:
    """Render connect/remove outcomes, one line per host plus a summary."""
    if not outcomes:
        return "No hosts processed."
    lines = [f"[{_OUTCOME_ICONS[o.status]}] {o.host}: {o.message}" for o in outcomes]
    ok = sum(1 for o in outcomes if o.ok)
    lines.append(f"─── {ok}/{len(outcomes)} hosts ok ───")
    return "\n".join(lines)


def format_statuses(statuses: list[SessionStatus]) -> str:
    """Render inspector output."""
    if not statuses:
        return "No SSH sessions."
    lines = ["SSH Sessions", "=" * 40]
    for s in statuses:
        if not s.exists:
            lines.append(f"[ ] {s.host} (no session)")
            continue
        icon = "✓" if s.connected else "✗"
        state = "connected" if s.connected else "disconnected"
        lines.append(f"[{icon}] {s.host} ({state}) -> {s.username}@{s.host}:{s.port}")
    return "\n".join(lines)


def format_report(report: DispatchReport) -> str:
    """Render per-host command output with headers and a summary."""
    lines = []
    for r in report.results:
        header = f"═══ {r.host} "
        if r.error:
            header += "[FAILED] "
        lines.append(header + "═" * max(0, 60 - len(header)))

        if r.output:
            lines.append(r.output)
        if r.error:
            status = r.kind.value if r.exit_status is None else f"exit {r.exit_status}"
            lines.append(f"Error ({status}): {r.error_text}" if r.error_text else f"Error ({status})")
        lines.append("")

    for host in report.skipped:
        lines.append(f"[skipped] {host}: no connected session")
    if report.skipped:
        lines.append("")

    lines.append(
        f"─── {report.succeeded}/{len(report.results)} hosts succeeded, "
        f"{len(report.skipped)} skipped ───"
    )
    return "\n".join(lines)
