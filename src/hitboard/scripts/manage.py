"""Command-line access to the counter store for operators.

Examples:
    python -m hitboard.scripts.manage init-db
    python -m hitboard.scripts.manage drop-db --token "$ADMIN_TOKEN"
    python -m hitboard.scripts.manage counts --type both track-1 track-2
    python -m hitboard.scripts.manage top --type play --limit 20
    python -m hitboard.scripts.manage reset --token "$ADMIN_TOKEN" --all
"""
from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence

from sqlalchemy.orm import Session

from hitboard.core.errors import HitboardError
from hitboard.core.settings import settings
from hitboard.db.session import SessionLocal, create_tables, drop_tables
from hitboard.services.admin_guard import AdminGuard
from hitboard.services.counter_service import CounterService


def cmd_init_db(db: Session, args: argparse.Namespace) -> dict[str, object]:
    create_tables()
    return {"ok": True, "tables": "created"}


def cmd_drop_db(db: Session, args: argparse.Namespace) -> dict[str, object]:
    AdminGuard(settings.admin_token).require(args.token)
    db.close()
    drop_tables()
    return {"ok": True, "tables": "dropped"}


def cmd_counts(db: Session, args: argparse.Namespace) -> dict[str, object]:
    service = CounterService(db)
    return {"ok": True, "type": args.type, "counts": service.bulk_counts(args.type, args.ids)}


def cmd_top(db: Session, args: argparse.Namespace) -> dict[str, object]:
    page = CounterService(db).top_page(args.type, args.limit, args.cursor)
    return {
        "ok": True,
        "type": page.metric,
        "limit": page.limit,
        "cursor": page.next_cursor,
        "rows": page.rows,
    }


def cmd_reset(db: Session, args: argparse.Namespace) -> dict[str, object]:
    service = CounterService(db)
    if args.all:
        return {"ok": True, **service.reset(args.token, "all")}
    return {"ok": True, **service.reset(args.token, "id", args.id)}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect and maintain Hitboard counters")
    sub = parser.add_subparsers(dest="command", required=True)

    init_db = sub.add_parser("init-db", help="Create tables if they do not exist")
    init_db.set_defaults(handler=cmd_init_db)

    drop_db = sub.add_parser("drop-db", help="Drop every table")
    drop_db.add_argument("--token", required=True, help="Admin token")
    drop_db.set_defaults(handler=cmd_drop_db)

    counts = sub.add_parser("counts", help="Print counts for the given ids")
    counts.add_argument("--type", default="both", help="play, download or both")
    counts.add_argument("ids", nargs="+")
    counts.set_defaults(handler=cmd_counts)

    top = sub.add_parser("top", help="Print one leaderboard page")
    top.add_argument("--type", default="download", help="play or download")
    top.add_argument("--limit", default=None)
    top.add_argument("--cursor", default=None)
    top.set_defaults(handler=cmd_top)

    reset = sub.add_parser("reset", help="Delete one counter or all counters")
    reset.add_argument("--token", required=True, help="Admin token")
    target = reset.add_mutually_exclusive_group(required=True)
    target.add_argument("--all", action="store_true", help="Delete every counter")
    target.add_argument("--id", help="Delete a single counter")
    reset.set_defaults(handler=cmd_reset)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    db = SessionLocal()
    try:
        result = args.handler(db, args)
    except HitboardError as exc:
        print(f"[hitboard] ERROR: {exc}", file=sys.stderr)
        return 1
    finally:
        db.close()
    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
