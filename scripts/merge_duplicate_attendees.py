#!/usr/bin/env python3
"""
One-off script to merge duplicate attendees that share a LinkedIn URL
but have different emails.

The earliest attendee record (lowest ID) is treated as the primary profile.
All later duplicates get their email updated to match the primary, and their
original email is preserved in the outreach_email field. Rerunning after a
successful (or interrupted) run only merges what is left.

Usage:
    python scripts/merge_duplicate_attendees.py [--dry-run]

Options:
    --dry-run    Show the duplicate groups without making changes
"""
import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.engine import Engine
from sqlmodel import Session

from booking_manager.attendees.merge import (
    DuplicateAttendee,
    DuplicateGroup,
    apply_merge_plan,
    find_duplicate_attendees,
)
from booking_manager.core.database import engine

logger = logging.getLogger("merge_duplicate_attendees")


def print_groups(groups: list[DuplicateGroup]) -> None:
    """Print each duplicate group with its primary and duplicates."""
    print(f"Found {len(groups)} duplicate group(s):\n")
    for group in groups:
        print(f"LinkedIn: {group.linkedin_url}")
        print(f"  Primary: {group.primary_email} (ID: {group.primary_id})")
        for dup in group.duplicates:
            print(
                f"  Duplicate: {dup.email} "
                f"(ID: {dup.id}, Booking: {dup.booking_id}, Name: {dup.name})"
            )
        print()


def print_merge(group: DuplicateGroup, dup: DuplicateAttendee) -> None:
    print(
        f"Merged attendee {dup.id}: {dup.email} -> {group.primary_email} "
        f"(outreach_email: {dup.email})"
    )


def run(session: Session, dry_run: bool = False) -> int:
    """Report duplicate groups and merge them unless dry_run. Returns merged count."""
    groups = find_duplicate_attendees(session)

    if not groups:
        print("No duplicate attendees found. All clear!")
        return 0

    print_groups(groups)

    if dry_run:
        print("--- DRY RUN: No changes made. Remove --dry-run to apply. ---")
        return 0

    merged_count = apply_merge_plan(session, groups, on_merge=print_merge)

    print(f"\nDone. Merged {merged_count} duplicate attendee(s).")
    return merged_count


def main(argv: list[str] | None = None, db_engine: Engine = engine) -> None:
    parser = argparse.ArgumentParser(description="Merge duplicate attendees by LinkedIn URL")
    parser.add_argument(
        "--dry-run", action="store_true", help="Show what would be merged without making changes"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        with Session(db_engine) as session:
            run(session, dry_run=args.dry_run)
    except Exception:
        logger.exception("Error during merge")
        sys.exit(1)
    finally:
        db_engine.dispose()


if __name__ == "__main__":
    main()
