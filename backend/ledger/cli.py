# ledger/cli.py
"""
Terminal front end for the Ledger API.

    python -m ledger.cli login alice
    python -m ledger.cli add --amount 20.00 --category Food --description Lunch
    python -m ledger.cli dashboard
    python -m ledger.cli list --search lunch --start 2024-01-01 --end 2024-01-31

The session cookie is kept in ``~/.ledger_session`` between invocations.
"""
import argparse
import getpass
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

import requests
from pydantic import ValidationError

from ledger.client import ApiError, LedgerClient
from ledger.client.api import DEFAULT_BASE_URL
from ledger.schemas.common import first_error
from ledger.schemas.transaction import TransactionFilters, TransactionType
from ledger.ui import pages

logger = logging.getLogger(__name__)

DEFAULT_COOKIE_FILE = Path.home() / ".ledger_session"


def load_cookies(session: requests.Session, path: Path) -> None:
    if path.exists():
        try:
            session.cookies.update(json.loads(path.read_text()))
        except ValueError:
            logger.warning("Ignoring unreadable cookie file %s", path)


def save_cookies(session: requests.Session, path: Path) -> None:
    path.write_text(json.dumps(requests.utils.dict_from_cookiejar(session.cookies)))
    os.chmod(path, 0o600)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ledger", description="Personal finance tracker")
    parser.add_argument("--url", default=os.getenv("LEDGER_URL", DEFAULT_BASE_URL), help="API base URL")
    parser.add_argument("--cookie-file", type=Path, default=DEFAULT_COOKIE_FILE)
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    for name in ("register", "login"):
        p = sub.add_parser(name)
        p.add_argument("username")
        p.add_argument("password", nargs="?", help="prompted for when omitted")

    sub.add_parser("logout")
    sub.add_parser("whoami")
    sub.add_parser("dashboard")

    p = sub.add_parser("list", help="transaction list")
    p.add_argument("--search", help="server side: description, category or merchant")
    p.add_argument("--category")
    p.add_argument("--merchant")
    p.add_argument("--start", help="YYYY-MM-DD, inclusive")
    p.add_argument("--end", help="YYYY-MM-DD, inclusive")
    p.add_argument("--type", choices=pages.TYPE_FILTERS, default="all")

    types = [t.value for t in TransactionType]
    p = sub.add_parser("add", help="record a transaction", epilog=pages.category_hint())
    p.add_argument("--amount", required=True)
    p.add_argument("--category", required=True)
    p.add_argument("--description", required=True)
    p.add_argument("--merchant")
    p.add_argument("--date", help="YYYY-MM-DD, defaults to today")
    p.add_argument("--type", choices=types)

    p = sub.add_parser("edit", help="change a transaction")
    p.add_argument("id", type=int)
    for opt in ("--amount", "--category", "--description", "--merchant", "--date"):
        p.add_argument(opt)
    p.add_argument("--type", choices=types)

    p = sub.add_parser("delete", help="delete a transaction")
    p.add_argument("id", type=int)
    return parser


def _form_values(args: argparse.Namespace) -> dict:
    return {
        "amount": args.amount,
        "category": args.category,
        "description": args.description,
        "merchant": args.merchant,
        "date": args.date,
        "type": args.type,
    }


def run(args: argparse.Namespace, client: LedgerClient) -> int:
    cmd = args.command
    if cmd in ("register", "login"):
        password = args.password or getpass.getpass("Password: ")
        if cmd == "register":
            user = client.register(args.username, password)
            print(f"Registered {user.username}; now run: ledger login {user.username}")
        else:
            user = client.login(args.username, password)
            print(f"Logged in as {user.username}")
        return 0
    if cmd == "logout":
        client.logout()
        print("Logged out")
        return 0

    user = client.current_user()
    if user is None:
        print("Not logged in. Run: ledger login <username>", file=sys.stderr)
        return 1

    if cmd == "whoami":
        print(user.username)
    elif cmd == "dashboard":
        print(pages.render_dashboard(client.dashboard()))
    elif cmd == "list":
        filters = TransactionFilters(
            search=args.search,
            category=args.category,
            merchant=args.merchant,
            start_date=args.start,
            end_date=args.end,
        )
        rows = pages.filter_transactions(client.list_transactions(filters), type_filter=args.type)
        print(pages.render_transaction_list(rows))
    elif cmd == "add":
        created = client.create_transaction(pages.submit_form(_form_values(args)))
        print(f"Transaction added successfully (id {created.id}).")
    elif cmd == "edit":
        existing = client.get_transaction(args.id)
        if existing is None:
            print("Transaction not found", file=sys.stderr)
            return 1
        form = pages.submit_form(_form_values(args), existing=existing)
        client.update_transaction(args.id, form.model_dump())
        print("Transaction updated successfully.")
    elif cmd == "delete":
        client.delete_transaction(args.id)
        print("Transaction deleted.")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    session = requests.Session()
    load_cookies(session, args.cookie_file)
    client = LedgerClient(args.url, session=session)
    try:
        return run(args, client)
    except ValidationError as exc:
        err = first_error(exc.errors())
        print(f"Error: {err.field + ': ' if err.field else ''}{err.message}", file=sys.stderr)
        return 2
    except ApiError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1
    except requests.ConnectionError:
        print(f"Could not reach {args.url}", file=sys.stderr)
        return 1
    finally:
        save_cookies(session, args.cookie_file)


if __name__ == "__main__":
    sys.exit(main())
