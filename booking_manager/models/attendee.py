"""Attendee model for people attending a booking.

Attendees are created when a booking is made. Besides the booker, every
host of the event type is recorded as an attendee so that invites reach
them. Booker identities are reconciled across bookings by LinkedIn profile
URL: see ``booking_manager.attendees.reconciliation``.
"""

from typing import TYPE_CHECKING, Optional

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from booking_manager.models.booking import Booking


class Attendee(SQLModel, table=True):
    """A person attending a booking.

    Among attendees sharing a ``linkedin_url``, the one with the lowest id is
    the canonical profile. Later duplicates carry the canonical email, and
    the address they originally booked with is kept in ``outreach_email``.

    Attributes:
        id: Auto-incrementing identifier. Lower ids were created earlier,
            which makes the id the "earliest wins" tie-break.
        booking_id: Foreign key to the parent Booking.
        email: Primary email address. May be overwritten by reconciliation.
        name: Display name given at booking time.
        linkedin_url: Normalized LinkedIn profile URL, if one was found in
            the booking form responses.
        outreach_email: The email the person originally used, preserved
            when ``email`` was replaced with the canonical address.
        booking: Reference to the parent Booking object.
    """
    id: int | None = Field(default=None, primary_key=True)
    booking_id: int | None = Field(default=None, foreign_key="booking.id", index=True)
    email: str
    name: str = ""
    linkedin_url: str | None = Field(default=None, index=True)
    outreach_email: str | None = None

    # Relationship
    booking: Optional["Booking"] = Relationship(back_populates="attendees")
