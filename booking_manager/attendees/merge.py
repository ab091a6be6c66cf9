"""Find and merge existing attendees that share a LinkedIn URL.

Attendees created before booking-time reconciliation existed can share a
profile URL while carrying different emails. The earliest attendee (lowest
id) is the primary profile; every later attendee with a different email
gets the primary's email, and keeps its own in ``outreach_email``.

Planning is separate from applying: ``plan_merge`` is a pure function over
attendee rows, ``apply_merge_plan`` writes the result. Applying a plan a
second time finds nothing to do, because merged rows already carry the
primary email.
"""
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from sqlmodel import Session, select

from booking_manager.models import Attendee

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DuplicateAttendee:
    """An attendee whose email will be replaced by the primary's."""
    id: int
    email: str
    booking_id: int | None
    name: str


@dataclass
class DuplicateGroup:
    """Attendees sharing one LinkedIn URL with conflicting emails."""
    linkedin_url: str
    primary_id: int
    primary_email: str
    duplicates: list[DuplicateAttendee] = field(default_factory=list)


def load_attendees_with_linkedin(session: Session) -> list[Attendee]:
    """Load every attendee with a non-empty LinkedIn URL, oldest first."""
    statement = (
        select(Attendee)
        .where(Attendee.linkedin_url.isnot(None))
        .where(Attendee.linkedin_url != "")
        .order_by(Attendee.id)
    )
    return list(session.exec(statement).all())


def plan_merge(attendees: Iterable[Attendee]) -> list[DuplicateGroup]:
    """Group attendees by stored LinkedIn URL and pick out the duplicates.

    URLs are compared exactly as stored. A group needs at least two distinct
    emails (case-insensitive) to be reported; within it, only attendees
    whose email differs from the primary's are duplicates.
    """
    grouped: dict[str, list[Attendee]] = {}
    for attendee in sorted(attendees, key=lambda a: a.id):
        if not attendee.linkedin_url:
            continue
        grouped.setdefault(attendee.linkedin_url, []).append(attendee)

    groups = []
    for linkedin_url, members in grouped.items():
        unique_emails = {a.email.lower() for a in members}
        if len(unique_emails) <= 1:
            continue

        primary = members[0]
        duplicates = [
            DuplicateAttendee(id=a.id, email=a.email, booking_id=a.booking_id, name=a.name)
            for a in members[1:]
            if a.email.lower() != primary.email.lower()
        ]
        if duplicates:
            groups.append(
                DuplicateGroup(
                    linkedin_url=linkedin_url,
                    primary_id=primary.id,
                    primary_email=primary.email,
                    duplicates=duplicates,
                )
            )

    return groups


def find_duplicate_attendees(session: Session) -> list[DuplicateGroup]:
    """Compute the merge plan for the whole attendee table."""
    return plan_merge(load_attendees_with_linkedin(session))


def apply_merge_plan(
    session: Session,
    groups: list[DuplicateGroup],
    on_merge: Callable[[DuplicateGroup, DuplicateAttendee], None] | None = None,
) -> int:
    """
    Overwrite each duplicate's email with its group's primary email.

    Each update is committed on its own. If one fails the error propagates
    and earlier merges stay in place; rerunning picks up where it stopped.

    Args:
        session: Database session
        groups: Output of ``plan_merge``
        on_merge: Called after each committed merge, e.g. to print progress

    Returns:
        Number of attendees merged
    """
    merged_count = 0

    for group in groups:
        for dup in group.duplicates:
            attendee = session.get(Attendee, dup.id)
            if attendee is None:
                logger.warning(f"Attendee {dup.id} no longer exists, skipping")
                continue

            attendee.outreach_email = dup.email
            attendee.email = group.primary_email
            session.add(attendee)
            session.commit()
            merged_count += 1
            logger.info(
                f"Merged attendee {dup.id}: {dup.email} -> {group.primary_email} "
                f"(outreach_email: {dup.email})"
            )
            if on_merge:
                on_merge(group, dup)

    return merged_count
