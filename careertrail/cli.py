#!/usr/bin/env python3
"""CareerTrail command line.

Usage:
    careertrail init-db
    careertrail create-user you@example.com --name "You"
    careertrail token you@example.com
    careertrail serve --port 8000
    careertrail board
    careertrail move <job-id> interviewing
    careertrail metrics
"""
import argparse
import asyncio
import logging
import os
import sys

from careertrail.board import COLUMNS, StatusBoard, ToastQueue
from careertrail.config import get_config


def cmd_init_db(args):
    from careertrail.db import get_engine, init_db

    init_db(get_engine(args.database))
    print("✅ Database ready")


def cmd_create_user(args):
    from sqlalchemy.exc import IntegrityError

    from careertrail.db import User, get_engine, get_session

    try:
        with get_session(get_engine(args.database)) as session:
            user = User(email=args.email, name=args.name)
            session.add(user)
            session.flush()
            print(f"✅ Created user {user.id} ({user.email})")
    except IntegrityError:
        print(f"❌ User already exists: {args.email}")
        return 1


def cmd_token(args):
    from datetime import timedelta

    from careertrail.auth import token_for_user
    from careertrail.db import User, get_engine, get_session

    with get_session(get_engine(args.database)) as session:
        user = session.query(User).filter(User.email == args.email).first()
        if user is None:
            print(f"❌ Unknown user: {args.email}")
            return 1
        expires = timedelta(minutes=args.minutes) if args.minutes else None
        print(token_for_user(user, expires))


def cmd_serve(args):
    import uvicorn

    uvicorn.run("careertrail.main:app", host=args.host, port=args.port, reload=args.reload)


async def _board(args):
    from careertrail.client import CareerTrailClient

    async with CareerTrailClient(args.url, args.token) as api:
        columns = await api.board()
    for column in COLUMNS:
        jobs = columns.get(column.status, [])
        print(f"\n📋 {column.label} ({len(jobs)})")
        for job in jobs:
            print(f"   {job.id[:8]}  {job.company} · {job.role}  [{job.applied_date}]")


async def _move(args):
    from careertrail.client import CareerTrailClient

    toasts = ToastQueue(ttl=get_config().board.toast_seconds)
    async with CareerTrailClient(args.url, args.token) as api:
        jobs = await api.list_jobs()
        matches = [j for j in jobs if j.id == args.job_id or j.id.startswith(args.job_id)]
        if len(matches) != 1:
            print(f"❌ {'No' if not matches else 'Ambiguous'} job matching '{args.job_id}'")
            return 1
        job = matches[0]

        board = StatusBoard(jobs, api.update_job_status, notifier=toasts)
        board.on_drag_start(job.id)
        task = board.on_drag_end(job.id, args.status)
        if task is None:
            if job.status == args.status:
                print(f"ℹ️  {job.company} is already in {job.status}")
                return 0
            print(f"❌ Invalid column: {args.status}")
            return 1
        await board.drain()
        board.close()

    for toast in toasts.history:
        print(f"{'✅' if toast.level == 'success' else '❌'} {toast.message}")
    return 1 if toasts.of_level("error") else 0


async def _metrics(args):
    from careertrail.client import CareerTrailClient

    async with CareerTrailClient(args.url, args.token) as api:
        m = await api.metrics()
    print(f"📊 Applications:   {m.total_applications} ({m.applications_this_month} this month)")
    print(f"   Interview rate: {m.interview_rate:.1f}%")
    print(f"   Offer rate:     {m.offer_rate:.1f}%")
    print(f"   Avg. response:  {m.average_response_time} days")
    for status, count in m.status_breakdown.items():
        print(f"   {status:14} {count}")
    if m.top_companies:
        print("\n🏢 Top companies")
        for entry in m.top_companies:
            print(f"   {entry.company:30} {entry.count}")


def main(argv=None):
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "WARNING"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    parser = argparse.ArgumentParser(
        prog="careertrail",
        description="CareerTrail - job application tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def local(p):
        p.add_argument("--database", help="SQLAlchemy URL (default: config)")
        return p

    def remote(p):
        p.add_argument("--url", help="API base URL (default: config/CAREERTRAIL_URL)")
        p.add_argument("--token", help="Bearer token (default: CAREERTRAIL_TOKEN)")
        return p

    local(sub.add_parser("init-db", help="Create database tables")).set_defaults(func=cmd_init_db)

    p = local(sub.add_parser("create-user", help="Create a user"))
    p.add_argument("email")
    p.add_argument("--name")
    p.set_defaults(func=cmd_create_user)

    p = local(sub.add_parser("token", help="Mint an API token for a user"))
    p.add_argument("email")
    p.add_argument("--minutes", type=int, help="Lifetime (default: config)")
    p.set_defaults(func=cmd_token)

    p = sub.add_parser("serve", help="Run the API server")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=8000)
    p.add_argument("--reload", action="store_true")
    p.set_defaults(func=cmd_serve)

    remote(sub.add_parser("board", help="Show the status board")).set_defaults(coro=_board)

    p = remote(sub.add_parser("move", help="Move a job to another column"))
    p.add_argument("job_id", help="Job id (unique prefix is enough)")
    p.add_argument("status", help="applied | interviewing | offer | rejected")
    p.set_defaults(coro=_move)

    remote(sub.add_parser("metrics", help="Show application metrics")).set_defaults(coro=_metrics)

    args = parser.parse_args(argv)
    if hasattr(args, "coro"):
        return asyncio.run(args.coro(args)) or 0
    return args.func(args) or 0


if __name__ == "__main__":
    sys.exit(main())
