"""Event type model: a bookable kind of meeting with its hosts."""

from typing import TYPE_CHECKING

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from booking_manager.models.booking import Booking
    from booking_manager.models.host import Host


class EventType(SQLModel, table=True):
    """A kind of meeting people can book, e.g. "30 min intro call".

    Attributes:
        id: Auto-incrementing identifier.
        title: Human-readable name.
        slug: URL-safe unique name.
        length_minutes: Default meeting length.
        hosts: People hosting this event type.
        bookings: Bookings made on this event type.
    """
    id: int | None = Field(default=None, primary_key=True)
    title: str
    slug: str = Field(index=True, unique=True)
    length_minutes: int = Field(default=30)

    # Relationships
    hosts: list["Host"] = Relationship(back_populates="event_type")
    bookings: list["Booking"] = Relationship(back_populates="event_type")
