"""StaffOS command line — read-only views over the people-operations API.

Usage:
    staffos health
    staffos candidates --stage pre_colleague
    staffos cases --tab active --type pip
    staffos insights --tab pending --pattern frequency --json
    staffos org-chart --search "smith"
    staffos audit --page 2 --action update
    staffos export-report gender-pay-gap --out reports/

Exit codes:
    0 = success
    1 = the API refused the request or could not be reached
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, Sequence

from dotenv import load_dotenv

from staffos.absence.service import InsightsService
from staffos.absence.views import INSIGHT_TABS, empty_state, pattern_icon, pattern_label
from staffos.client import ApiClient
from staffos.common.exceptions import AppException
from staffos.common.formatting import format_date, humanize
from staffos.common.pagination import offset_for_page
from staffos.compensation.service import CompensationService
from staffos.compensation.views import REPORTS, audit_cell, audit_paging
from staffos.config import Settings
from staffos.hr_cases.service import HRCaseService
from staffos.hr_cases.views import CASE_TABS, case_type_label, status_label
from staffos.notifications.service import NotificationService
from staffos.notifications.views import FILTERS, Inbox, badge_text, icon, relative_time
from staffos.offboarding.service import OffboardingService
from staffos.offboarding.views import WORKFLOW_TABS, days_badge, termination_label
from staffos.onboarding.service import OnboardingService
from staffos.onboarding.views import STAGE_LABELS, status_indicator
from staffos.org.chart import find_node, render_tree
from staffos.org.service import UserService
from staffos.recruitment.service import PipelineService
from staffos.recruitment.stages import STAGE_ORDER, stage_display

logger = logging.getLogger("staffos")

# A handler returns (json payload, text lines)
Result = tuple[Any, list[str]]
Handler = Callable[[ApiClient, argparse.Namespace], Awaitable[Result]]


# ══════════════════════════════════════════════════════════════════════
# Commands
# ══════════════════════════════════════════════════════════════════════


async def cmd_health(api: ApiClient, args: argparse.Namespace) -> Result:
    body = await api.health()
    status = body.get("status", "ok")
    return body, [f"✅ {api.base_url}: {status}"]


async def cmd_candidates(api: ApiClient, args: argparse.Namespace) -> Result:
    result = await OnboardingService.list_candidates(api, stage=args.stage)
    counts = result.counts
    lines = [
        f"Candidates: {counts.candidate}  Pre-Colleagues: {counts.pre_colleague}  "
        f"Recent Starters: {counts.active}",
        "",
    ]
    for c in result.candidates:
        indicator = status_indicator(c)
        lines.append(
            f"{c.id:>5}  {c.full_name:<28} {STAGE_LABELS.get(c.stage, c.stage):<16} "
            f"{c.proposed_role_name or '-':<24} {format_date(c.proposed_start_date):<12} {indicator.text}"
        )
    if not result.candidates:
        lines.append("No candidates found")
    return result.model_dump(mode="json"), lines


async def cmd_pipeline(api: ApiClient, args: argparse.Namespace) -> Result:
    overview = await PipelineService.overview(api)
    lines: list[str] = []
    for stage in overview.stages or STAGE_ORDER:
        people = overview.pipeline.get(stage, [])
        lines.append(f"{stage_display(stage)} ({overview.counts.get(stage, len(people))})")
        for person in people:
            role = f" — {person.role_title}" if person.role_title else ""
            lines.append(f"    {person.full_name}{role}")
    return overview.model_dump(mode="json"), lines


async def cmd_cases(api: ApiClient, args: argparse.Namespace) -> Result:
    cases = await HRCaseService.list_cases(api, tab=args.tab, case_type=args.type)
    lines = [
        f"{c.case_reference or c.id:<14} {case_type_label(c.case_type, short=True):<13} "
        f"{status_label(c.status):<18} {c.employee_name or '-'}"
        for c in cases
    ]
    if not cases:
        lines.append(f"No {args.tab} cases")
    return [c.model_dump(mode="json") for c in cases], lines


async def cmd_offboarding(api: ApiClient, args: argparse.Namespace) -> Result:
    workflows = await OffboardingService.list_workflows(api, tab=args.tab)
    today = api.config.today()
    lines = []
    for w in workflows:
        badge = days_badge(w.last_working_day, today)
        countdown = badge.text if badge else "-"
        flag = " ⚠" if badge and badge.urgent else ""
        lines.append(
            f"{w.employee_name or w.employee_id or '-':<28} {termination_label(w.termination_type):<16} "
            f"{format_date(w.last_working_day):<12} {countdown}{flag}  "
            f"[{w.completed_items}/{w.total_items}]"
        )
    if not workflows:
        lines.append(f"No {args.tab} offboarding workflows")
    return [w.model_dump(mode="json") for w in workflows], lines


async def cmd_insights(api: ApiClient, args: argparse.Namespace) -> Result:
    result = await InsightsService.list_insights(api, tab=args.tab, pattern_type=args.pattern)
    lines = [
        f"{pattern_icon(i.pattern_type)} {pattern_label(i.pattern_type):<22} "
        f"{i.employee_name or i.employee_id or '-':<26} {i.priority:<7} {i.summary or ''}"
        for i in result.insights
    ]
    if not result.insights:
        title, message = empty_state(args.tab)
        lines = [title, message]
    return result.model_dump(mode="json"), lines


async def cmd_notifications(api: ApiClient, args: argparse.Namespace) -> Result:
    listing = await NotificationService.list_notifications(api)
    inbox = Inbox(listing.notifications, listing.unread_count)
    now = api.config.now()
    shown = inbox.filtered(args.filter)
    lines = [f"🔔 {badge_text(inbox.unread_count) or 'No'} unread"]
    for n in shown:
        marker = "●" if not n.is_read else " "
        lines.append(
            f"{marker} {icon(n.type)} {n.title:<40} {relative_time(n.created_at, now, short=False)}"
        )
    if not shown:
        lines.append("No notifications to display")
    return [n.model_dump(mode="json") for n in shown], lines


async def cmd_org_chart(api: ApiClient, args: argparse.Namespace) -> Result:
    chart = await UserService.org_chart(api)
    highlight = find_node(chart.tree, args.search) if args.search else None
    if args.search and highlight is None:
        logger.warning("No employee matches '%s'", args.search)
    lines = [f"{chart.total_employees} employees", ""]
    lines.extend(render_tree(chart.tree, highlight=highlight))
    return chart.model_dump(mode="json"), lines


async def cmd_audit(api: ApiClient, args: argparse.Namespace) -> Result:
    page = await CompensationService.audit(
        api, employee_id=args.employee, action=args.action, limit=args.limit,
        offset=offset_for_page(args.page, args.limit),
    )
    meta = audit_paging(page)
    lines = []
    for e in page.data:
        when = e.created_at.strftime("%Y-%m-%d %H:%M") if e.created_at else "—"
        lines.append(
            f"{when:<17} {audit_cell(e.accessed_by_name):<20} {humanize(e.action):<9} "
            f"{audit_cell(e.table_name):<20} {audit_cell(e.employee_name):<20} "
            f"{audit_cell(e.field_changed)}: {audit_cell(e.old_value)} → {audit_cell(e.new_value)}"
        )
    lines.append(f"Page {meta.page} of {max(meta.total_pages, 1)} ({meta.total} entries)")
    return page.model_dump(mode="json"), lines


async def cmd_export_report(api: ApiClient, args: argparse.Namespace) -> Result:
    exported = await CompensationService.export_report(api, args.name)
    if exported is None:
        return {"report": args.name, "path": None}, [f"No data to export for {args.name}"]
    filename, content = exported
    target = Path(args.out) if args.out else Path(filename)
    if target.is_dir() or (args.out and args.out.endswith(("/", "\\"))):
        target = target / filename
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    logger.info("Exported %s to %s", args.name, target)
    return {"report": args.name, "path": str(target)}, [f"Saved {target}"]


COMMANDS: dict[str, Handler] = {
    "health": cmd_health,
    "candidates": cmd_candidates,
    "pipeline": cmd_pipeline,
    "cases": cmd_cases,
    "offboarding": cmd_offboarding,
    "insights": cmd_insights,
    "notifications": cmd_notifications,
    "org-chart": cmd_org_chart,
    "audit": cmd_audit,
    "export-report": cmd_export_report,
}


# ══════════════════════════════════════════════════════════════════════
# Entry point
# ══════════════════════════════════════════════════════════════════════


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="staffos",
        description="StaffOS people-operations API client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--url", type=str, default=None,
                        help="API root, e.g. http://localhost:3001/api (default: from settings)")
    parser.add_argument("--env-file", type=str, default=None,
                        help="Load settings from this .env file first")
    parser.add_argument("--json", dest="output_json", action="store_true",
                        help="Output results as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("health", help="Check the API responds")

    p = sub.add_parser("candidates", help="Onboarding candidates")
    p.add_argument("--stage", choices=sorted(STAGE_LABELS), default=None)

    sub.add_parser("pipeline", help="Recruitment pipeline by stage")

    p = sub.add_parser("cases", help="HR cases")
    p.add_argument("--tab", choices=list(CASE_TABS), default="active")
    p.add_argument("--type", choices=["all", "pip", "disciplinary", "grievance"], default=None)

    p = sub.add_parser("offboarding", help="Offboarding workflows")
    p.add_argument("--tab", choices=list(WORKFLOW_TABS), default="active")

    p = sub.add_parser("insights", help="Absence pattern insights")
    p.add_argument("--tab", choices=list(INSIGHT_TABS), default="pending")
    p.add_argument("--pattern", default=None, help="Only this pattern type")

    p = sub.add_parser("notifications", help="Your notifications")
    p.add_argument("--filter", choices=FILTERS, default="all")

    p = sub.add_parser("org-chart", help="Organisation chart")
    p.add_argument("--search", default=None, help="Highlight the first match")

    p = sub.add_parser("audit", help="Compensation audit log")
    p.add_argument("--limit", type=int, default=50)
    p.add_argument("--page", type=int, default=1)
    p.add_argument("--employee", type=int, default=None)
    p.add_argument("--action", default=None)

    p = sub.add_parser("export-report", help="Export a compensation report as CSV")
    p.add_argument("name", choices=list(REPORTS))
    p.add_argument("--out", default=None, help="File or directory to write to")

    return parser


def emit(args: argparse.Namespace, result: Result) -> None:
    payload, lines = result
    if args.output_json:
        print(json.dumps(payload, indent=2, default=str))
    else:
        for line in lines:
            print(line)


async def run(args: argparse.Namespace, api: ApiClient) -> int:
    """Execute one parsed command against ``api``; returns the exit code."""
    try:
        result = await COMMANDS[args.command](api, args)
    except AppException as exc:
        logger.debug("%s failed: %s", args.command, exc.to_problem())
        print(f"❌ {exc.detail}", file=sys.stderr)
        return 1
    emit(args, result)
    return 0


async def _main(args: argparse.Namespace, config: Settings) -> int:
    async with ApiClient(args.url, config=config) as api:
        logger.debug("Using %s (%s)", api.base_url, config.ENVIRONMENT)
        return await run(args, api)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.env_file:
        load_dotenv(args.env_file, override=True)
    config = Settings()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.LOG_LEVEL.upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    return asyncio.run(_main(args, config))


if __name__ == "__main__":
    sys.exit(main())
