#!/usr/bin/env python3
"""
Import contacts from a JSON file into the contacts SQLite database.

The file must contain a JSON array of objects with ``name`` and
``phone`` (required) and optionally ``email`` and ``address``.  Every
entry is validated before anything is written, then all of them are
inserted in a single transaction: either the whole file is imported or
nothing is.

Usage:
    python import_contacts.py --db ./database.db contacts.json
"""

import argparse
import json
import sys
from typing import List, Optional

from pydantic import ValidationError

from contact_manager_api.app.core.config import Settings
from contact_manager_api.app.core.db import init_db, open_connection
from contact_manager_api.app.schemas.contact import ContactInput
from contact_manager_api.app.services.contact_service import ContactStore


def load_contacts(path: str) -> List[ContactInput]:
    """Read and validate the JSON array of contacts in ``path``."""
    with open(path, encoding="utf-8") as fh:
        payload = json.load(fh)
    if not isinstance(payload, list):
        raise ValueError("Expected a JSON array of contacts")
    return [ContactInput.model_validate(item) for item in payload]


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Import contacts from a JSON file (SQLite).")
    ap.add_argument("file", help="Path to a JSON file containing an array of contacts")
    ap.add_argument("--db", help="Path to SQLite DB file. Defaults to DATABASE_URL.")
    ap.add_argument(
        "--unique-email",
        action="store_true",
        help="Create the unique email index before importing.",
    )
    args = ap.parse_args(argv)

    try:
        contacts = load_contacts(args.file)
    except (OSError, ValueError, ValidationError) as exc:
        # json.JSONDecodeError is a ValueError.
        print(f"[!] Cannot read {args.file}: {exc}", file=sys.stderr)
        return 1

    settings = Settings(log_dir="")
    if args.db:
        settings.database_url = args.db
    if args.unique_email:
        settings.unique_email = True

    conn = open_connection(settings)
    try:
        init_db(conn, unique_email=settings.unique_email)
        result = ContactStore(conn).import_contacts(contacts)
    finally:
        conn.close()

    if not result.ok:
        print(f"[!] Import failed, nothing was written: {result.failure.message}", file=sys.stderr)
        return 2
    print(f"[+] Imported {len(result.value)} contacts")
    return 0


if __name__ == "__main__":
    sys.exit(main())
