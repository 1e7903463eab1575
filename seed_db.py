#!/usr/bin/env python3
"""
Prepare a Lesson Hub database for development.

Subcommands:

    lessons   insert the sample lesson catalogue (skipped when lessons exist
              unless --replace is given), index it and print statistics
    orders    create the orders collection indexes and report the order count
    images    write placeholder lesson images into <images dir>/lessons

Usage:
    python seed_db.py lessons --replace
    python seed_db.py orders --uri mongodb://localhost:27017 --db lessonHub
    python seed_db.py images --dir ./public/images

The connection string and database name default to the MONGODB_URI and
DATABASE_NAME environment variables.
"""

import argparse
import asyncio
import re
import sys
from pathlib import Path

from lesson_hub_api.app.core.config import settings
from lesson_hub_api.app.core.db import DocumentStore
from lesson_hub_api.app.core.errors import StoreError
from lesson_hub_api.app.core.logging_config import setup_logging
from lesson_hub_api.app.services.seed_service import (
    LESSON_INDEXES,
    create_sample_images,
    insert_sample_lessons,
    lesson_statistics,
    setup_lessons_indexes,
    setup_orders_collection,
)


def mask_uri(uri: str) -> str:
    """Hide credentials in a MongoDB connection string."""
    return re.sub(r"//[^@/]*@", "//***:***@", uri)


def format_statistics(stats: dict) -> list:
    """Render catalogue statistics as indented report lines."""
    return [
        "[=] Catalogue statistics:",
        f"    Total lessons: {stats['totalLessons']}",
        f"    Average price: £{stats['averagePrice']:.2f}",
        f"    Total available spaces: {stats['totalSpaces']}",
        f"    Price range: £{stats['minPrice']} - £{stats['maxPrice']}",
    ]


async def seed_lessons(store: DocumentStore, replace: bool) -> None:
    inserted = await insert_sample_lessons(store, replace=replace)
    if inserted:
        print(f"[+] Inserted {inserted} lessons")
    else:
        print("[=] Lessons collection already populated; use --replace to reseed")

    await setup_lessons_indexes(store)
    print(f"[+] Lesson indexes ready ({len(LESSON_INDEXES)})")

    stats = await lesson_statistics(store)
    if stats:
        for line in format_statistics(stats):
            print(line)


async def seed_orders(store: DocumentStore) -> None:
    count = await setup_orders_collection(store)
    print(f"[+] Orders collection ready ({count} existing orders)")


async def run_with_store(args: argparse.Namespace) -> None:
    print(f"[*] Database: {args.db} at {mask_uri(args.uri)}")
    store = DocumentStore(args.uri, args.db)
    try:
        await store.connect()
        if args.command == "lessons":
            await seed_lessons(store, args.replace)
        else:
            await seed_orders(store)
    finally:
        await store.close()


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed the Lesson Hub database.")
    ap.add_argument("--uri", default=settings.mongodb_uri, help="MongoDB connection string")
    ap.add_argument("--db", default=settings.database_name, help="Database name")
    sub = ap.add_subparsers(dest="command", required=True)

    lessons = sub.add_parser("lessons", help="Insert sample lessons")
    lessons.add_argument("--replace", action="store_true", help="Delete existing lessons first")
    sub.add_parser("orders", help="Create order indexes")
    images = sub.add_parser("images", help="Create placeholder lesson images")
    images.add_argument("--dir", default=settings.images_dir, help="Images root directory")

    args = ap.parse_args()
    setup_logging(settings.log_level)

    if args.command == "images":
        written = create_sample_images(Path(args.dir))
        for path in written:
            print(f"[+] Created {path}")
        return

    try:
        asyncio.run(run_with_store(args))
    except StoreError as exc:
        print(f"[!] {exc.message}", file=sys.stderr)
        print("[!] Check that MongoDB is running and MONGODB_URI is correct.", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
