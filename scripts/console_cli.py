"""Drive the employee access console from a terminal."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from adapters.demo_adapter import DemoDirectory, DemoEmployeeApi  # noqa: E402
from adapters.http_adapter import HttpEmployeeApi  # noqa: E402
from config import ConsoleSettings, build_audit_store  # noqa: E402
from console.audit_log import AuditLogRecorder  # noqa: E402
from console.directory import DEPARTMENTS, ROLES  # noqa: E402
from console.filters import ALL, STATUS_OPTIONS  # noqa: E402
from console.notifications import RecordingNotifier  # noqa: E402
from console.pagination import ELLIPSIS  # noqa: E402
from console.table import SYSTEMS, EmployeeTableController, TableView  # noqa: E402


def build_controller(settings: ConsoleSettings, use_demo: bool, notifier: RecordingNotifier) -> EmployeeTableController:
    if use_demo:
        api = DemoEmployeeApi(
            DemoDirectory(
                settings.demo_roster_size,
                failure_probability=settings.failure_probability,
                seed=settings.demo_seed,
            ),
            fetch_latency=0,
            toggle_latency=0,
        )
    else:
        api = HttpEmployeeApi(settings.api_base_url)
    return EmployeeTableController(
        api,
        recorder=AuditLogRecorder(build_audit_store(settings)),
        notifier=notifier,
        page_size=settings.page_size,
        user_login=settings.current_user_login,
        toggle_timeout=settings.toggle_timeout,
        reload_delay=settings.reload_delay,
    )


def render_table(view: TableView) -> None:
    print(f"Employees ({view.total}), {view.filtered} matching")
    if view.empty:
        print("  No employees found.")
    for row in view.rows:
        cells = ", ".join(
            f"{cell.system}={'on' if cell.status else 'off'}{'*' if cell.updating else ''}"
            for cell in row.cells
        )
        print(f"  {row.id:<8} {row.name:<24} {row.login:<28} {row.role:<12} {row.department:<11} {cells}")
    links = " ".join("..." if link == ELLIPSIS else str(link) for link in view.links)
    print(f"Page {view.page} of {view.total_pages}  [{links}]")


def flush_messages(notifier: RecordingNotifier) -> None:
    for level, message in notifier.messages:
        print(f"[{level}] {message}")
    notifier.messages.clear()


async def run(args: argparse.Namespace) -> int:
    settings = ConsoleSettings.from_env()
    notifier = RecordingNotifier()
    controller = build_controller(settings, args.demo, notifier)

    if args.command == "history":
        for entry in controller.history():
            before = "Active" if entry.old_status else "Inactive"
            after = "Active" if entry.new_status else "Inactive"
            print(f"{entry.timestamp}  {entry.user_login:<10} {entry.employee_name:<24} {entry.system:<14} {before} -> {after}")
        return 0

    loaded = await controller.load()
    flush_messages(notifier)
    if not loaded:
        return 1

    if args.command == "list":
        controller.set_query(
            text=args.search,
            system=args.system,
            status=args.status,
            department=args.department,
            role=args.role,
        )
        controller.go_to_page(args.page)
        render_table(controller.view())
        return 0

    try:
        pending = controller.badge_click(args.employee_id, args.system_name)
    except ValueError as exc:
        print(exc)
        return 1
    if pending is None:
        print(f"{args.employee_id} has no {args.system_name} access to toggle.")
        return 1
    state = "Active" if pending.new_status else "Inactive"
    print(f"Set {pending.system.system.value} for {pending.employee.name} to {state}?")
    if not args.yes:
        controller.cancel()
        print("Cancelled (pass --yes to confirm).")
        return 0
    outcome = await controller.confirm()
    flush_messages(notifier)
    print(f"Outcome: {outcome.value if outcome else 'none'}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Employee access console.")
    parser.add_argument("--demo", action="store_true", help="Use the in-process demo directory instead of the HTTP API.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List employees with filters.")
    list_parser.add_argument("--search", default="")
    list_parser.add_argument("--system", default=ALL, choices=[ALL, *SYSTEMS])
    list_parser.add_argument("--status", default=ALL, choices=[option["value"] for option in STATUS_OPTIONS])
    list_parser.add_argument("--department", default=ALL, choices=[ALL, *DEPARTMENTS])
    list_parser.add_argument("--role", default=ALL, choices=[ALL, *ROLES])
    list_parser.add_argument("--page", type=int, default=1)

    toggle_parser = subparsers.add_parser("toggle", help="Flip one employee's access to a system.")
    toggle_parser.add_argument("employee_id")
    toggle_parser.add_argument("system_name")
    toggle_parser.add_argument("--yes", action="store_true", help="Confirm the staged change.")

    subparsers.add_parser("history", help="Show the audit log, newest first.")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.WARNING)
    return asyncio.run(run(args))


if __name__ == "__main__":
    raise SystemExit(main())
