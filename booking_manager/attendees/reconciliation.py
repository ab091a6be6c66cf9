"""Reconcile booker identity across bookings by LinkedIn profile URL.

People often book with a different email each time (work address, personal
address, a typo). When the booking form also asks for a LinkedIn profile,
that URL is a steadier identity key: the earliest attendee with the same
profile is treated as the canonical person, and the email given on the new
booking is kept as an "outreach" email instead of creating a new identity.
"""
import re
from collections.abc import Mapping
from dataclasses import dataclass

from sqlmodel import Session, select

from booking_manager.models import Attendee

LINKEDIN_URL_PATTERN = re.compile(
    r"(?:https?://)?(?:www\.)?linkedin\.com/in/[\w-]+/?", re.IGNORECASE | re.ASCII
)
LINKEDIN_FIELD_NAMES = {
    "linkedin",
    "linkedinurl",
    "linkedin_url",
    "linkedinprofile",
    "linkedin_profile",
}
LINKEDIN_PROFILE_MARKER = "linkedin.com/in/"

_PROTOCOL_PREFIX = re.compile(r"^https?://")
_WWW_PREFIX = re.compile(r"^www\.")
_TRAILING_SLASH = re.compile(r"/$")
_FIELD_NAME_NOISE = re.compile(r"[-\s]")


@dataclass(frozen=True)
class ReconciliationResult:
    """Outcome of matching a booker against an existing attendee.

    Attributes:
        reconciled_email: Email of the canonical attendee; use it as the
            new attendee's primary email.
        outreach_email: The email the booker typed, when it differs from
            the canonical one. None when they match.
        linkedin_url: The normalized profile URL that was matched.
    """
    reconciled_email: str
    outreach_email: str | None
    linkedin_url: str


def normalize_linkedin_url(url: str) -> str:
    """Normalize a LinkedIn URL to a canonical form for matching.

    Trims whitespace, lowercases, and strips the protocol, a ``www.``
    prefix and a trailing slash. Anything that isn't a URL comes back
    trimmed and lowercased.

    The steps repeat until nothing changes, so stacked prefixes or slashes
    are fully stripped and normalizing twice equals normalizing once.
    """
    normalized = url
    while True:
        previous = normalized
        normalized = normalized.strip().lower()
        normalized = _PROTOCOL_PREFIX.sub("", normalized)
        normalized = _WWW_PREFIX.sub("", normalized)
        normalized = _TRAILING_SLASH.sub("", normalized)
        if normalized == previous:
            return normalized


def _string_responses(responses: object) -> list[tuple[str, str]]:
    """Narrow raw form responses to (field name, string value) pairs.

    Form answers can be anything JSON allows. Only strings can hold a URL,
    so everything else is dropped here, once, in insertion order.
    """
    if not isinstance(responses, Mapping):
        return []
    return [(str(key), value) for key, value in responses.items() if isinstance(value, str)]


def _is_linkedin_field(field_name: str) -> bool:
    return _FIELD_NAME_NOISE.sub("", field_name.lower()) in LINKEDIN_FIELD_NAMES


def extract_linkedin_url_from_responses(responses: Mapping[str, object] | None) -> str | None:
    """Extract a normalized LinkedIn profile URL from booking form responses.

    Fields with a well-known LinkedIn name ("linkedin", "linkedinUrl",
    "linkedin-profile", ...) are checked first. Only if none of them holds a
    profile URL are all string answers scanned for something shaped like
    ``linkedin.com/in/<handle>``.

    Returns:
        The normalized URL, or None if there is none.
    """
    answers = _string_responses(responses)

    for field_name, value in answers:
        if not _is_linkedin_field(field_name):
            continue
        normalized = normalize_linkedin_url(value)
        if LINKEDIN_PROFILE_MARKER in normalized:
            return normalized

    for _field_name, value in answers:
        if LINKEDIN_URL_PATTERN.search(value):
            return normalize_linkedin_url(value)

    return None


def reconcile_attendee_by_linkedin(
    session: Session, linkedin_url: str, booker_email: str
) -> ReconciliationResult | None:
    """Look up the earliest attendee with this LinkedIn URL and reconcile identity.

    Read-only: the caller persists the reconciled email pair on the attendee
    it creates. Database errors propagate.

    Args:
        session: Database session
        linkedin_url: Normalized LinkedIn profile URL
        booker_email: Email entered on the new booking

    Returns:
        None if no attendee has this URL yet, otherwise the canonical email
        and (if the booker used a different address) the outreach email.
    """
    statement = (
        select(Attendee.email)
        .where(Attendee.linkedin_url == linkedin_url)
        .order_by(Attendee.id)
        .limit(1)
    )
    existing_email = session.exec(statement).first()

    if existing_email is None:
        return None

    emails_match = existing_email.lower() == booker_email.lower()

    return ReconciliationResult(
        reconciled_email=existing_email,
        outreach_email=None if emails_match else booker_email,
        linkedin_url=linkedin_url,
    )
