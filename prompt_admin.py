#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Prompt library admin tool (SQLite)

Commands:
  init                Create tables and indexes
  seed                Insert the sample prompts (approved) under the seed admin user
  pending             List prompts waiting for moderation
  approve ID          Approve a prompt
  reject ID           Reject a prompt

Notes:
- The database location follows the same rules as the web app
  (PROMPTLIB_DB_PATH, then config.yaml, then ./prompts.db).
- Moderation is only available here; the web API has no approve/reject endpoint.
"""

import argparse
import sys

from promptlib.config import load_settings
from promptlib.db import Store
from promptlib.domain.moderation import InvalidTransition
from promptlib.domain.taxonomy import PromptStatus
from promptlib.logs import OperationLogContext, configure_logging
from promptlib.services.prompt_svc import list_prompts, moderate_prompt
from promptlib.services.seed_svc import seed_sample_prompts


def _store(args) -> Store:
    settings = load_settings(args.config)
    if args.db:
        settings.db_path = args.db
    configure_logging(settings.log_level)
    return Store(settings.db_path)


# ---------------- Commands ----------------

def cmd_init(args):
    store = _store(args)
    store.init_schema()
    print(f"DB initialized: {store.db_path}")


def cmd_seed(args):
    store = _store(args)
    store.init_schema()
    created = seed_sample_prompts(store)
    print(f"Seeded {created} prompts.")


def cmd_pending(args):
    store = _store(args)
    res = list_prompts(store, status=PromptStatus.PENDING)
    if res.failed:
        print(f"Failed to read prompts: {res.error}", file=sys.stderr)
        return 1
    rows = res.value or []
    if not rows:
        print("No pending prompts.")
        return 0
    for r in rows:
        print(f"{r['id']:>5}  {r['department']:<20} {r['category']:<16} {r['title']}  ({r['creator_id']})")
    return 0


def _moderate(args, target: PromptStatus):
    store = _store(args)
    log = OperationLogContext(store, f"MODERATE_{target.value.upper()}", "admin-cli")
    try:
        res = moderate_prompt(store, args.id, target, log)
    except InvalidTransition as e:
        log.write("ERROR", str(e))
        print(str(e), file=sys.stderr)
        return 1
    if res.failed:
        log.write("ERROR", str(res.error))
        print(f"Failed to update prompt: {res.error}", file=sys.stderr)
        return 1
    if res.empty:
        log.write("ERROR", "not found")
        print(f"Prompt {args.id} not found.", file=sys.stderr)
        return 1
    log.write("OK")
    print(f"Prompt {args.id} is now {res.value['status']}.")
    return 0


def cmd_approve(args):
    return _moderate(args, PromptStatus.APPROVED)


def cmd_reject(args):
    return _moderate(args, PromptStatus.REJECTED)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Prompt library admin tool")
    parser.add_argument("--config", default=None, help="path to config.yaml")
    parser.add_argument("--db", default=None, help="override database path")
    sub = parser.add_subparsers()

    p_init = sub.add_parser("init", help="create tables")
    p_init.set_defaults(func=cmd_init)

    p_seed = sub.add_parser("seed", help="insert sample prompts")
    p_seed.set_defaults(func=cmd_seed)

    p_pending = sub.add_parser("pending", help="list prompts waiting for moderation")
    p_pending.set_defaults(func=cmd_pending)

    p_approve = sub.add_parser("approve", help="approve a prompt")
    p_approve.add_argument("id", type=int)
    p_approve.set_defaults(func=cmd_approve)

    p_reject = sub.add_parser("reject", help="reject a prompt")
    p_reject.add_argument("id", type=int)
    p_reject.set_defaults(func=cmd_reject)

    args = parser.parse_args(argv)
    if hasattr(args, "func"):
        return args.func(args) or 0
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
